"""
Region Taxonomy - A lazily loaded geographic region tree.

This package provides a world -> country -> subdivision hierarchy backed by
YAML data files, with localized names and an optional overlay dataset merged
over the base data at load time.
"""

from .collection import RegionCollection
from .config import LoadStats, TaxonomyConfig
from .exceptions import (
    ConfigurationError,
    DataLoadError,
    FileAccessError,
    MissingTranslationError,
    RecordValidationError,
    RegionNotFoundError,
    RegionTaxonomyError,
)
from .merge import OverlayMerger, merge_records
from .region import Country, Region, TranslatedField, World
from .taxonomy import RegionContext, RegionTaxonomy

__version__ = "1.0.0"
__author__ = "Data Analytics Team"

__all__ = [
    'RegionCollection',
    'LoadStats',
    'TaxonomyConfig',
    'ConfigurationError',
    'DataLoadError',
    'FileAccessError',
    'MissingTranslationError',
    'RecordValidationError',
    'RegionNotFoundError',
    'RegionTaxonomyError',
    'OverlayMerger',
    'merge_records',
    'Country',
    'Region',
    'TranslatedField',
    'World',
    'RegionContext',
    'RegionTaxonomy',
]
