"""
Overlay merging for region data records.

This module reconciles a base list of records with an overlay list loaded from
the overlay data root. Records are matched by natural key (``code`` or
``alpha_2_code``); an overlay record can add a new record, override fields of
an existing one, or delete it with ``_enabled: false``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import create_record_validation_error
from .logging_config import log_data_quality_warning
from .utils.data_utils import is_null_or_empty


NATURAL_KEYS: Tuple[str, ...] = ('code', 'alpha_2_code')
ENABLED_KEY = '_enabled'

Record = Dict[str, Any]


@dataclass
class MergeStats:
    """Counts for a single merge of an overlay into a base record list."""

    added: int = 0
    overridden: int = 0
    deleted: int = 0
    unkeyed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'added': self.added,
            'overridden': self.overridden,
            'deleted': self.deleted,
            'unkeyed': self.unkeyed
        }


def has_natural_key(record: Record) -> bool:
    """Check whether a record carries at least one non-empty natural key."""
    return any(not is_null_or_empty(record.get(key)) for key in NATURAL_KEYS)


def records_match(target: Record, supplement: Record) -> bool:
    """
    Check whether two records refer to the same region.

    A key only counts when it is populated on both records, so records
    without any natural key never match anything.
    """
    for key in NATURAL_KEYS:
        value = target.get(key)
        if not is_null_or_empty(value) and value == supplement.get(key):
            return True
    return False


def find_match_index(base: List[Record], supplement: Record) -> Optional[int]:
    """Return the index of the first base record matching ``supplement``."""
    for index, target in enumerate(base):
        if records_match(target, supplement):
            return index
    return None


def _without_control_keys(record: Record) -> Record:
    return {key: value for key, value in record.items() if key != ENABLED_KEY}


class OverlayMerger:
    """
    Merges overlay records into base records by natural key.

    Overlay records are applied strictly left to right. Each one is matched
    against the base list as left by the previous overlay record, so two
    overlay records targeting the same base record see each other's edits.
    """

    def __init__(self, strict_keys: bool = False, logger: Optional[logging.Logger] = None):
        """
        Initialize the OverlayMerger.

        Args:
            strict_keys: Reject overlay records with no natural key instead of
                appending them
            logger: Optional logger instance for logging operations
        """
        self.strict_keys = strict_keys
        self.logger = logger or logging.getLogger(__name__)
        self.last_stats = MergeStats()

    def merge(self, base: List[Record], overlay: List[Record],
              file_path: Optional[str] = None) -> List[Record]:
        """
        Merge ``overlay`` into ``base``.

        Args:
            base: Base records; mutated in place
            overlay: Overlay records, applied in order
            file_path: Relative data path, used in log and error messages

        Returns:
            The mutated ``base`` list

        Raises:
            RecordValidationError: In strict mode, for an overlay record
                without ``code`` or ``alpha_2_code``
        """
        stats = MergeStats()

        for supplement in overlay:
            if not has_natural_key(supplement):
                if self.strict_keys:
                    raise create_record_validation_error(supplement, file_path)
                stats.unkeyed += 1
                log_data_quality_warning(
                    self.logger,
                    f"overlay record without natural key appended"
                    f"{' in ' + file_path if file_path else ''}: {supplement}"
                )

            index = find_match_index(base, supplement)

            if index is None:
                base.append(_without_control_keys(supplement))
                stats.added += 1
                continue

            if supplement.get(ENABLED_KEY) is False:
                del base[index]
                stats.deleted += 1
            else:
                base[index].update(_without_control_keys(supplement))
                stats.overridden += 1

        self.last_stats = stats
        if overlay:
            self.logger.debug(
                f"Merged {len(overlay)} overlay records"
                f"{' for ' + file_path if file_path else ''}: {stats.to_dict()}"
            )
        return base


def merge_records(base: List[Record], overlay: List[Record]) -> List[Record]:
    """
    Merge overlay records into base records with the default permissive policy.

    Args:
        base: Base records; mutated in place
        overlay: Overlay records, applied in order

    Returns:
        The mutated ``base`` list
    """
    return OverlayMerger().merge(base, overlay)
