"""
Region taxonomy entry point.

This module provides the RegionContext shared by every node of a tree (data
loader, translation backend, logger and statistics) and the RegionTaxonomy
class that builds the context from configuration and owns the World root.

The context is set up once before the first tree access. Changing the data
roots or translation backend afterwards requires a new taxonomy; changing
the locale goes through ``RegionTaxonomy.set_locale`` which also drops the
tree, because names are resolved when regions are built.
"""

import logging
from typing import Iterator, Optional

from .collection import RegionCollection
from .config import LoadStats, TaxonomyConfig
from .data_source import RegionDataLoader
from .exceptions import RegionNotFoundError
from .i18n import SimpleI18nBackend, TranslationBackend
from .logging_config import TaxonomyLogger
from .region import Country, ROOT_CODE, Region, World


class RegionContext:
    """Collaborators shared by all regions of one tree."""

    def __init__(self, loader: RegionDataLoader, translator: TranslationBackend,
                 root_file: str = "world.yml",
                 logger: Optional[logging.Logger] = None,
                 stats: Optional[LoadStats] = None):
        """
        Initialize the RegionContext.

        Args:
            loader: Loader for region data files
            translator: Backend resolving localized fields
            root_file: Relative path of the top-level data file
            logger: Optional logger instance for logging operations
            stats: Optional statistics accumulator; defaults to the loader's
        """
        self.loader = loader
        self.translator = translator
        self.root_file = root_file
        self.logger = logger or logging.getLogger(__name__)
        self.stats = stats if stats is not None else loader.stats

    def translate(self, path: str) -> str:
        return self.translator.translate(path)

    @classmethod
    def from_config(cls, config: TaxonomyConfig,
                    logger: Optional[logging.Logger] = None) -> 'RegionContext':
        """Build a context with YAML data sources and the simple i18n backend."""
        logger = logger or logging.getLogger(__name__)
        stats = LoadStats()
        loader = RegionDataLoader.from_paths(
            config.data_path,
            config.overlay_path,
            strict_keys=config.strict_keys,
            stats=stats,
            logger=logger
        )
        translator = SimpleI18nBackend(
            *config.resolved_locale_paths(),
            locale=config.locale,
            default_locale=config.default_locale,
            logger=logger
        )
        return cls(loader, translator, root_file=config.root_file, logger=logger, stats=stats)


class RegionTaxonomy:
    """
    Entry point for browsing a region tree.

    The World root is created on first access; every other region is loaded
    lazily below it.
    """

    def __init__(self, config: TaxonomyConfig, logger: Optional[TaxonomyLogger] = None,
                 context: Optional[RegionContext] = None):
        """
        Initialize the RegionTaxonomy.

        Args:
            config: Configuration with data roots and locale settings
            logger: Optional logger instance for logging operations
            context: Optional prebuilt context, e.g. with a custom backend
        """
        self.config = config
        self.logger = logger or TaxonomyLogger(level=config.log_level, log_file=config.log_file)
        self.context = context or RegionContext.from_config(config, logger=self.logger.logger)
        self._world: Optional[World] = None

    @property
    def stats(self) -> LoadStats:
        return self.context.stats

    @property
    def world(self) -> World:
        if self._world is None:
            self.logger.log_tree_start(self.config.data_path, self.config.overlay_path,
                                       self.context.translator.locale)
            self._world = World(self.context)
        return self._world

    @property
    def countries(self) -> RegionCollection:
        return self.world.subregions

    def country(self, code: str) -> Optional[Country]:
        """Find a country by alpha-2, alpha-3 or numeric code."""
        return self.countries.coded(code)

    def find(self, path: str) -> Region:
        """
        Resolve a dotted path such as ``world.us.il`` to its region.

        Raises:
            RegionNotFoundError: If any segment does not exist
        """
        segments = [segment for segment in path.strip().split('.') if segment]
        if not segments or segments[0].lower() != ROOT_CODE:
            raise RegionNotFoundError(
                f"Region path must start with '{ROOT_CODE}': {path}",
                code=segments[0] if segments else None
            )

        region: Region = self.world
        for segment in segments[1:]:
            region = region.subregions.by_code(segment)
        return region

    def walk(self, start: Optional[Region] = None,
             max_depth: Optional[int] = None) -> Iterator[Region]:
        """
        Iterate over the descendants of a region in pre-order.

        Args:
            start: Region to start from; defaults to the World
            max_depth: Maximum number of levels below ``start`` to visit
                (0 visits nothing)

        Yields:
            Regions in data-file order, parents before children
        """
        if max_depth is not None and max_depth < 1:
            return
        start = start or self.world
        stack = [(region, 1) for region in reversed(start.subregions)]
        while stack:
            region, level = stack.pop()
            yield region
            if max_depth is not None and level >= max_depth:
                continue
            stack.extend((child, level + 1) for child in reversed(region.subregions))

    def set_locale(self, locale: str):
        """Switch the translation locale and drop the loaded tree."""
        self.context.translator.locale = locale
        self.reset()

    def reset(self):
        """Drop the World and with it every cached subregion collection."""
        self._world = None
