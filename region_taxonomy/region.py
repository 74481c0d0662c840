"""
Region tree nodes.

A Region is one geographic unit (the world, a country, a subdivision). Its
children are loaded on first access from a data file whose path follows the
chain of ancestor codes, and its localized fields are resolved once, at
construction, from translation paths built from the same chain:

    world.yml          -> countries      (paths world.<cc>)
    world/us.yml       -> US subregions  (paths world.us.<code>)
    world/us/il.yml    -> IL subregions  (paths world.us.il.<code>)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, TYPE_CHECKING

from .collection import RegionCollection
from .data_source import child_data_path
from .exceptions import ConfigurationError, MissingTranslationError
from .logging_config import log_data_quality_warning
from .merge import NATURAL_KEYS
from .utils.data_utils import normalize_code, safe_string_conversion

if TYPE_CHECKING:
    from .taxonomy import RegionContext


ROOT_CODE = 'world'


@dataclass(frozen=True)
class TranslatedField:
    """A localized field resolved at construction from ``path(<name>)``."""

    name: str
    required: bool = True


class Region:
    """
    A node in the geographic hierarchy.

    The parent reference is only used to derive paths; a region is owned by
    its parent's subregion collection. A region without a parent is a root:
    its path is its own code and its children come from the context's root
    data file.
    """

    translated_fields: Tuple[TranslatedField, ...] = (TranslatedField('name'),)

    def __init__(self, data: Optional[Dict[str, Any]] = None,
                 parent: Optional['Region'] = None,
                 context: Optional['RegionContext'] = None):
        """
        Initialize a region and resolve its localized fields.

        Args:
            data: Record the region is built from
            parent: Parent region, or None for a root
            context: Loading context; inherited from the parent when omitted

        Raises:
            ConfigurationError: If neither a context nor a parent is given
            MissingTranslationError: If a required localized field has no
                translation in the active locale
        """
        data = data or {}
        self.parent = parent
        self.context = context if context is not None else (parent.context if parent else None)
        if self.context is None:
            raise ConfigurationError("A region needs either a context or a parent", config_key='context')

        self._warn_boolean_keys(data)
        self.type: Optional[str] = data.get('type')
        self.code: str = self._code_from(data)
        self._subregions: Optional[RegionCollection] = None
        self._translations: Dict[str, Optional[str]] = self._resolve_translations()
        self.context.stats.regions_built += 1

    def _code_from(self, data: Dict[str, Any]) -> str:
        return safe_string_conversion(data.get('code'))

    def _warn_boolean_keys(self, data: Dict[str, Any]):
        # unquoted YAML codes such as NO, ON or Y load as booleans
        for key in NATURAL_KEYS:
            if isinstance(data.get(key), bool):
                log_data_quality_warning(
                    self.context.logger,
                    f"{key} loaded as boolean {data[key]!r} under "
                    f"{self.parent.path() if self.parent else 'root'}; quote the code in the data file"
                )

    def _resolve_translations(self) -> Dict[str, Optional[str]]:
        resolved = {}
        for field in self.translated_fields:
            try:
                resolved[field.name] = self.context.translate(self.path(field.name))
            except MissingTranslationError:
                if field.required:
                    raise
                resolved[field.name] = None
        return resolved

    @property
    def name(self) -> Optional[str]:
        return self._translations.get('name')

    @property
    def subregion_class(self) -> Type['Region']:
        return Region

    @property
    def subregion_directory(self) -> str:
        """Lower-cased code used as this region's path segment."""
        return normalize_code(self.code)

    @property
    def subregion_data_path(self) -> str:
        """Relative path of the data file listing this region's children."""
        if self.parent is None:
            return self.context.root_file
        return child_data_path(self.parent.subregion_data_path, self.subregion_directory)

    def path(self, suffix: Optional[Any] = None) -> str:
        """
        Return the dotted path of this region, e.g. ``world.us.il``.

        The path doubles as translation key prefix: ``path('name')`` is
        ``world.us.il.name``.
        """
        if self.parent is None:
            base = self.subregion_directory
        else:
            base = f"{self.parent.path()}.{self.subregion_directory}"
        if suffix is not None:
            base = f"{base}.{suffix}"
        return base

    @property
    def depth(self) -> int:
        """Number of levels below the root."""
        return 0 if self.parent is None else self.parent.depth + 1

    def ancestors(self) -> List['Region']:
        """Parent chain, nearest first, excluding the root."""
        chain = []
        current = self.parent
        while current is not None and current.parent is not None:
            chain.append(current)
            current = current.parent
        return chain

    @property
    def subregions(self) -> RegionCollection:
        """Child regions, loaded and cached on first access."""
        if self._subregions is None:
            self._subregions = self._load_subregions()
        return self._subregions

    def has_subregions(self) -> bool:
        return len(self.subregions) > 0

    def reset(self):
        """Clear the subregion cache so the next access reloads from disk."""
        self._subregions = None

    def _load_subregions(self) -> RegionCollection:
        loader = self.context.loader
        data_path = self.subregion_data_path

        if not loader.has_data(data_path):
            return RegionCollection(logger=self.context.logger)

        records = loader.load(data_path)
        regions = [self.subregion_class(record, parent=self) for record in records]
        self.context.logger.debug(f"Built {len(regions)} subregions for {self.path()}")
        return RegionCollection(regions, logger=self.context.logger)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path(),
            'type': self.type,
            'code': self.code,
            'name': self.name,
            'depth': self.depth
        }

    def __str__(self) -> str:
        return self.name or self.code

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name=\"{self.name}\" type=\"{self.type}\">"


class Country(Region):
    """
    A top-level region keyed by its ISO 3166-1 alpha-2 code.

    ``official_name`` and ``common_name`` are optional translations and are
    None when the locale files do not provide them.
    """

    translated_fields = (
        TranslatedField('name'),
        TranslatedField('official_name', required=False),
        TranslatedField('common_name', required=False),
    )

    def __init__(self, data: Optional[Dict[str, Any]] = None,
                 parent: Optional[Region] = None,
                 context: Optional['RegionContext'] = None):
        data = data or {}
        self.alpha_2_code = safe_string_conversion(data.get('alpha_2_code')) or None
        self.alpha_3_code = safe_string_conversion(data.get('alpha_3_code')) or None
        self.numeric_code = safe_string_conversion(data.get('numeric_code')) or None
        super().__init__(data, parent=parent, context=context)

    def _code_from(self, data: Dict[str, Any]) -> str:
        return safe_string_conversion(data.get('alpha_2_code')) or safe_string_conversion(data.get('code'))

    @property
    def official_name(self) -> Optional[str]:
        return self._translations.get('official_name')

    @property
    def common_name(self) -> Optional[str]:
        return self._translations.get('common_name')

    @property
    def emoji_flag(self) -> Optional[str]:
        """Flag emoji built from the alpha-2 code's regional indicator symbols."""
        code = (self.alpha_2_code or '').upper()
        if len(code) != 2 or not code.isascii() or not code.isalpha():
            return None
        return ''.join(chr(0x1F1E6 + ord(letter) - ord('A')) for letter in code)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'alpha_2_code': self.alpha_2_code,
            'alpha_3_code': self.alpha_3_code,
            'numeric_code': self.numeric_code,
            'official_name': self.official_name
        })
        return data


class World(Region):
    """
    The root of the region tree.

    Its path is ``world``, its children are countries listed in the context's
    root data file, and its own name is an optional ``world.name``
    translation.
    """

    translated_fields = (TranslatedField('name', required=False),)

    def __init__(self, context: 'RegionContext'):
        super().__init__({'type': ROOT_CODE, 'code': ROOT_CODE}, parent=None, context=context)

    @property
    def subregion_class(self) -> Type[Region]:
        return Country
