"""
Ordered collections of sibling regions.

This module provides the RegionCollection class, an immutable sequence of
regions in data-file order with case-insensitive lookup by code, by any of a
country's codes, by name and by type.
"""

import logging
from collections.abc import Sequence
from typing import Any, Dict, Iterable, Iterator, List, Optional, TYPE_CHECKING

import pandas as pd
from rapidfuzz import fuzz, process, utils

from .exceptions import RegionNotFoundError
from .logging_config import log_data_quality_warning
from .utils.data_utils import normalize_code, records_to_dataframe

if TYPE_CHECKING:
    from .region import Region


CODE_ATTRIBUTES = ('code', 'alpha_2_code', 'alpha_3_code', 'numeric_code')


class RegionCollection(Sequence):
    """
    Immutable, ordered sequence of sibling regions.

    Lookup by code is case-insensitive and backed by an index built once at
    construction. If two regions share a code, the first one wins.
    """

    def __init__(self, regions: Iterable['Region'] = (),
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the RegionCollection.

        Args:
            regions: Regions in declaration order
            logger: Optional logger instance for data quality warnings
        """
        self.logger = logger or logging.getLogger(__name__)
        self._regions = tuple(regions)
        self._by_code: Dict[str, 'Region'] = {}

        for region in self._regions:
            key = normalize_code(region.code)
            if key in self._by_code:
                log_data_quality_warning(
                    self.logger,
                    f"duplicate region code '{region.code}' under "
                    f"{region.parent.path() if region.parent else 'root'}; keeping the first"
                )
                continue
            self._by_code[key] = region

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RegionCollection(self._regions[index], logger=self.logger)
        return self._regions[index]

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator['Region']:
        return iter(self._regions)

    def __contains__(self, item) -> bool:
        return any(region is item for region in self._regions)

    def __repr__(self) -> str:
        return f"<RegionCollection size={len(self._regions)} codes={self.codes()}>"

    def by_code(self, code: Any) -> 'Region':
        """
        Get the region with the given code, ignoring case.

        Raises:
            RegionNotFoundError: If no region has the code
        """
        region = self._by_code.get(normalize_code(code))
        if region is None:
            parent_path = None
            if self._regions and self._regions[0].parent is not None:
                parent_path = self._regions[0].parent.path()
            raise RegionNotFoundError(
                f"No region with code '{code}'" + (f" under {parent_path}" if parent_path else ""),
                code=str(code),
                parent_path=parent_path
            )
        return region

    def coded(self, code: Any) -> Optional['Region']:
        """
        Find a region by any of its codes, ignoring case.

        Countries are matched on alpha-2, alpha-3 and numeric codes as well as
        ``code``.

        Returns:
            The first matching region, or None
        """
        wanted = normalize_code(code)
        if not wanted:
            return None

        region = self._by_code.get(wanted)
        if region is not None:
            return region

        for region in self._regions:
            for attribute in CODE_ATTRIBUTES:
                if normalize_code(getattr(region, attribute, None)) == wanted:
                    return region
        return None

    def named(self, name: str, case_sensitive: bool = False, fuzzy: bool = False,
              threshold: int = 90) -> Optional['Region']:
        """
        Find a region by its localized name.

        Args:
            name: Name to look for
            case_sensitive: Compare names with case
            fuzzy: Fall back to the closest name by similarity score
            threshold: Minimum similarity score (0-100) for fuzzy matches

        Returns:
            The matching region, or None
        """
        if not 0 <= threshold <= 100:
            raise ValueError("Threshold must be between 0 and 100")

        def fold(value: str) -> str:
            return value.strip() if case_sensitive else value.strip().casefold()

        wanted = fold(name)
        candidates = [region for region in self._regions if region.name]

        for region in candidates:
            if fold(region.name) == wanted:
                return region

        if not fuzzy or not candidates:
            return None

        match = process.extractOne(
            name,
            [region.name for region in candidates],
            scorer=fuzz.WRatio,
            processor=None if case_sensitive else utils.default_process,
            score_cutoff=threshold
        )
        if match is None:
            return None

        _, score, position = match
        self.logger.debug(f"Fuzzy name match: '{name}' -> '{candidates[position].name}' ({score:.1f})")
        return candidates[position]

    def typed(self, type_name: str) -> 'RegionCollection':
        """Get the regions of the given type, ignoring case."""
        wanted = str(type_name).lower()
        return RegionCollection(
            (region for region in self._regions if str(region.type or '').lower() == wanted),
            logger=self.logger
        )

    def codes(self) -> List[str]:
        """Get region codes in order."""
        return [region.code for region in self._regions]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Build a DataFrame with one row per region.

        Columns are the union of the regions' ``to_dict`` keys in first-seen
        order.
        """
        rows = [region.to_dict() for region in self._regions]
        columns: List[str] = []
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)
        return records_to_dataframe(rows, columns)
