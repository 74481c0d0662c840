"""
Logging configuration for the region taxonomy library.

This module provides a configurable logger with console and optional file
output, plus helpers for the recurring tree-loading log lines.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime


class TaxonomyLogger:
    """Custom logger for region taxonomy operations."""

    def __init__(self, name: str = "region_taxonomy", level: str = "INFO",
                 log_file: Optional[str] = None):
        """
        Initialize the taxonomy logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Set up file logging handler."""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def log_tree_start(self, data_path: str, overlay_path: Optional[str], locale: str):
        """Log the data sources a tree is about to be built from."""
        self.info("=" * 60)
        self.info("REGION TAXONOMY LOADED")
        self.info("=" * 60)
        self.info(f"Data path: {data_path}")
        self.info(f"Overlay path: {overlay_path or 'none'}")
        self.info(f"Locale: {locale}")
        self.info(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def log_load_statistics(self, stats):
        """Log accumulated load statistics."""
        self.info(f"Files loaded: {stats.files_loaded:,}")
        self.info(f"Overlay files applied: {stats.overlay_files_applied:,}")
        self.info(f"Regions built: {stats.regions_built:,}")
        self.info(
            f"Overlay records - added: {stats.records_added:,}, "
            f"overridden: {stats.records_overridden:,}, deleted: {stats.records_deleted:,}"
        )


def log_data_quality_warning(logger: logging.Logger, message: str):
    """Log a data quality warning with the common prefix."""
    logger.warning(f"DATA QUALITY: {message}")

def setup_logging(config) -> TaxonomyLogger:
    """
    Set up logging based on configuration.

    Args:
        config: TaxonomyConfig instance

    Returns:
        Configured TaxonomyLogger instance
    """
    return TaxonomyLogger(
        name="region_taxonomy",
        level=config.log_level,
        log_file=config.log_file
    )
