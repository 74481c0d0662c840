"""
Translation backends for localized region names.

Region names are looked up by dotted path (``world.us.il.name``) in the
backend's current locale. The default backend reads YAML locale files shaped
like ``{en: {world: {us: {name: United States}}}}``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import DataLoadError, MissingTranslationError, create_file_error


DEFAULT_LOCALE = 'en'


class TranslationBackend:
    """Interface for translation lookups used by regions."""

    locale: str = DEFAULT_LOCALE

    def translate(self, path: str) -> str:
        """
        Translate a dotted path in the current locale.

        Raises:
            MissingTranslationError: If no translation exists for the path
        """
        raise NotImplementedError


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``source`` into ``target``; scalars in source win."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            deep_merge(existing, value)
        else:
            target[key] = value
    return target


class SimpleI18nBackend(TranslationBackend):
    """
    Translation backend reading YAML files from a list of locale directories.

    Every ``*.yml`` file below each directory is loaded and deep merged into
    one tree, directories in order, so later directories override earlier
    ones. Lookups that fail in the current locale are retried in the default
    locale before giving up.
    """

    def __init__(self, *locale_paths: str, locale: str = DEFAULT_LOCALE,
                 default_locale: str = DEFAULT_LOCALE,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.locale_paths: List[str] = [str(path) for path in locale_paths]
        self.locale = locale
        self.default_locale = default_locale
        self._translations: Optional[Dict[str, Any]] = None

    def __repr__(self) -> str:
        return f"<SimpleI18nBackend locale=\"{self.locale}\" paths={self.locale_paths}>"

    def append_locale_path(self, path: str):
        """Add a locale directory; its files override those already configured."""
        self.locale_paths.append(str(path))
        self.reset()

    def reset(self):
        """Drop loaded translations so they are re-read on the next lookup."""
        self._translations = None

    def available_locales(self) -> List[str]:
        """Get the locales present in the loaded files."""
        return sorted(self._load().keys())

    def translate(self, path: str) -> str:
        result = self._lookup(self.locale, path)
        fallback = None

        if result is None and self.locale != self.default_locale:
            fallback = self.default_locale
            result = self._lookup(fallback, path)

        if result is None:
            raise MissingTranslationError(path, locale=self.locale, fallback_locale=fallback)
        return result

    def _lookup(self, locale: str, path: str) -> Optional[str]:
        node: Any = self._load().get(locale)
        for segment in path.split('.'):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]

        if node is None or isinstance(node, (dict, list)):
            return None
        return str(node)

    def _load(self) -> Dict[str, Any]:
        if self._translations is not None:
            return self._translations

        translations: Dict[str, Any] = {}
        file_count = 0
        for locale_path in self.locale_paths:
            directory = Path(locale_path)
            if not directory.is_dir():
                self.logger.debug(f"Locale directory not found, skipping: {directory}")
                continue

            for file_path in sorted(directory.rglob('*.yml')):
                deep_merge(translations, self._load_file(file_path))
                file_count += 1

        self.logger.debug(
            f"Loaded {file_count} locale files for locales: {sorted(translations.keys())}"
        )
        self._translations = translations
        return translations

    def _load_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, 'r', encoding='utf-8') as handle:
                data = yaml.safe_load(handle)
        except yaml.YAMLError as e:
            raise DataLoadError(
                f"Error parsing locale file {file_path}: {str(e)}",
                file_path=str(file_path),
                original_error=e
            )
        except OSError as e:
            raise create_file_error("read", str(file_path), e)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DataLoadError(
                f"Locale file {file_path} must contain a mapping keyed by locale",
                file_path=str(file_path)
            )
        return data


class DictTranslationBackend(TranslationBackend):
    """Translation backend over an in-memory ``{locale: {path: text}}`` mapping."""

    def __init__(self, translations: Dict[str, Dict[str, str]], locale: str = DEFAULT_LOCALE):
        self.translations = translations
        self.locale = locale

    def translate(self, path: str) -> str:
        try:
            return self.translations[self.locale][path]
        except KeyError:
            raise MissingTranslationError(path, locale=self.locale)
