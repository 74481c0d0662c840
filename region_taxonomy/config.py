"""
Configuration management for the region taxonomy library.

This module provides dataclasses for the data roots, locale settings and
logging options used to build a region tree, plus load statistics tracking.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import os
from pathlib import Path

from .exceptions import ConfigurationError


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class TaxonomyConfig:
    """Configuration class for region data and translation sources."""

    # Data roots
    data_path: str
    overlay_path: Optional[str] = None

    # Relative path of the top-level data file under each data root
    root_file: str = "world.yml"

    # Translation configuration
    locale_paths: List[str] = field(default_factory=list)
    locale: str = "en"
    default_locale: str = "en"

    # Reject overlay records that carry no natural key
    strict_keys: bool = False

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_paths()
        self._validate_locales()
        self._validate_logging()

    def _validate_paths(self):
        """Validate that the configured data roots exist."""
        if not self.data_path:
            raise ConfigurationError("A data path must be configured", config_key='data_path')

        if not os.path.isdir(self.data_path):
            raise ConfigurationError(
                f"Data directory not found: {self.data_path}",
                config_key='data_path',
                config_value=self.data_path
            )

        if self.overlay_path is not None and not os.path.isdir(self.overlay_path):
            raise ConfigurationError(
                f"Overlay directory not found: {self.overlay_path}",
                config_key='overlay_path',
                config_value=self.overlay_path
            )

        if not self.root_file or Path(self.root_file).suffix == '':
            raise ConfigurationError(
                f"Root file must be a relative file name with an extension: {self.root_file}",
                config_key='root_file',
                config_value=self.root_file
            )

    def _validate_locales(self):
        """Validate locale identifiers."""
        for key in ('locale', 'default_locale'):
            value = getattr(self, key)
            if not value or not str(value).strip():
                raise ConfigurationError(f"{key} must not be empty", config_key=key, config_value=value)

    def _validate_logging(self):
        """Validate logging level."""
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=VALID_LOG_LEVELS
            )

    def resolved_locale_paths(self) -> List[str]:
        """
        Get the locale directories to load, in override order.

        Explicit ``locale_paths`` win. Otherwise the ``locale`` directory of
        the data root is used, followed by the overlay's ``locale`` directory
        when it exists, so overlay translations override base ones.
        """
        if self.locale_paths:
            return list(self.locale_paths)

        paths = [os.path.join(self.data_path, 'locale')]
        if self.overlay_path:
            overlay_locale = os.path.join(self.overlay_path, 'locale')
            if os.path.isdir(overlay_locale):
                paths.append(overlay_locale)
        return paths

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'TaxonomyConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'data_path': self.data_path,
            'overlay_path': self.overlay_path,
            'root_file': self.root_file,
            'locale_paths': self.locale_paths,
            'locale': self.locale,
            'default_locale': self.default_locale,
            'strict_keys': self.strict_keys,
            'log_level': self.log_level,
            'log_file': self.log_file
        }


@dataclass
class LoadStats:
    """Statistics tracking for region data loading."""

    files_loaded: int = 0
    overlay_files_applied: int = 0
    regions_built: int = 0
    records_added: int = 0
    records_overridden: int = 0
    records_deleted: int = 0

    def record_merge(self, merge_stats) -> None:
        """Accumulate the counts of a single overlay merge."""
        self.overlay_files_applied += 1
        self.records_added += merge_stats.added
        self.records_overridden += merge_stats.overridden
        self.records_deleted += merge_stats.deleted

    def to_dict(self) -> Dict[str, int]:
        return {
            'files_loaded': self.files_loaded,
            'overlay_files_applied': self.overlay_files_applied,
            'regions_built': self.regions_built,
            'records_added': self.records_added,
            'records_overridden': self.records_overridden,
            'records_deleted': self.records_deleted
        }
