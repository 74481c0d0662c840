"""
Data loading for region data files.

This module provides the DataSource class, which reads YAML record lists from a
data root, and the RegionDataLoader, which combines a primary data root with an
optional overlay root.
"""

import logging
import posixpath
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import LoadStats
from .exceptions import DataLoadError, create_file_error
from .merge import OverlayMerger
from .utils.error_handler import create_error_context, log_error_details


class DataSource:
    """
    Reads region record files below a single data root.

    Each file holds a YAML list of mappings. Paths passed to this class are
    relative to the root and use forward slashes.
    """

    def __init__(self, root: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the DataSource.

        Args:
            root: Directory containing the data files
            logger: Optional logger instance for logging operations
        """
        self.root = Path(root)
        self.logger = logger or logging.getLogger(__name__)

    def __repr__(self) -> str:
        return f"<DataSource root=\"{self.root}\">"

    def full_path(self, rel_path: str) -> Path:
        """Resolve a relative data path against the root."""
        return self.root.joinpath(*rel_path.split('/'))

    def exists(self, rel_path: str) -> bool:
        """Check whether a data file exists at the relative path."""
        return self.full_path(rel_path).is_file()

    def load(self, rel_path: str) -> List[Dict[str, Any]]:
        """
        Load the records stored at a relative path.

        Args:
            rel_path: Path of the data file relative to the root

        Returns:
            List of records in file order; an empty file yields an empty list

        Raises:
            FileAccessError: If the file cannot be read
            DataLoadError: If the file is not valid YAML or not a list of mappings
        """
        file_path = self.full_path(rel_path)
        self.logger.debug(f"Loading region data from: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as handle:
                data = yaml.safe_load(handle)
        except yaml.YAMLError as e:
            raise DataLoadError(
                f"Error parsing region data file {file_path}: {str(e)}",
                file_path=str(file_path),
                original_error=e
            )
        except OSError as e:
            error = create_file_error("read", str(file_path), e)
            log_error_details(self.logger, error, create_error_context("load", rel_path=rel_path))
            raise error

        if data is None:
            return []

        if not isinstance(data, list):
            raise DataLoadError(
                f"Region data file {file_path} must contain a list of records, "
                f"got {type(data).__name__}",
                file_path=str(file_path)
            )

        for position, record in enumerate(data):
            if not isinstance(record, dict):
                raise DataLoadError(
                    f"Record {position} in {file_path} is not a mapping: {record!r}",
                    file_path=str(file_path)
                )

        self.logger.debug(f"Loaded {len(data)} records from {rel_path}")
        return data


class RegionDataLoader:
    """
    Loads region records from the primary data root with an optional overlay.

    Whether a region has children is decided by the primary root alone. When
    an overlay root is configured and holds a file at the same relative path,
    its records are merged over the primary records.
    """

    def __init__(self, data_source: DataSource,
                 overlay_source: Optional[DataSource] = None,
                 merger: Optional[OverlayMerger] = None,
                 stats: Optional[LoadStats] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the RegionDataLoader.

        Args:
            data_source: Primary data root
            overlay_source: Optional overlay data root of identical shape
            merger: Merger applying overlay records; defaults to permissive
            stats: Optional statistics accumulator
            logger: Optional logger instance for logging operations
        """
        self.logger = logger or logging.getLogger(__name__)
        self.data_source = data_source
        self.overlay_source = overlay_source
        self.merger = merger or OverlayMerger(logger=self.logger)
        self.stats = stats if stats is not None else LoadStats()

    @classmethod
    def from_paths(cls, data_path: str, overlay_path: Optional[str] = None,
                   strict_keys: bool = False, stats: Optional[LoadStats] = None,
                   logger: Optional[logging.Logger] = None) -> 'RegionDataLoader':
        """Create a loader from directory paths."""
        return cls(
            DataSource(data_path, logger=logger),
            DataSource(overlay_path, logger=logger) if overlay_path else None,
            OverlayMerger(strict_keys=strict_keys, logger=logger),
            stats=stats,
            logger=logger
        )

    def has_data(self, rel_path: str) -> bool:
        """Check whether the primary root has a data file at the relative path."""
        return self.data_source.exists(rel_path)

    def load(self, rel_path: str) -> List[Dict[str, Any]]:
        """
        Load and merge the records at a relative path.

        Args:
            rel_path: Path of the data file relative to both roots

        Returns:
            Merged records in order
        """
        records = self.data_source.load(rel_path)
        self.stats.files_loaded += 1

        if self.overlay_source is None or not self.overlay_source.exists(rel_path):
            return records

        overlay = self.overlay_source.load(rel_path)
        self.stats.files_loaded += 1

        merged = self.merger.merge(records, overlay, file_path=rel_path)
        self.stats.record_merge(self.merger.last_stats)
        return merged


def strip_extension(rel_path: str) -> str:
    """Remove the file extension of the final segment of a relative path."""
    root, _ = posixpath.splitext(rel_path)
    return root


def child_data_path(parent_data_path: str, directory: str) -> str:
    """
    Derive the data path for the children of a region.

    The extension of the parent's final segment is replaced by a directory
    named after the region, and the extension moves to the new final segment:
    ``world.yml`` + ``us`` -> ``world/us.yml``.
    """
    _, extension = posixpath.splitext(parent_data_path)
    return f"{strip_extension(parent_data_path)}/{directory}{extension}"
