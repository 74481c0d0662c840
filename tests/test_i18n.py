"""
Tests for translation backends.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from region_taxonomy.exceptions import DataLoadError, MissingTranslationError
from region_taxonomy.i18n import DictTranslationBackend, SimpleI18nBackend, deep_merge

from tests.fixtures import EN_LOCALE, FR_LOCALE, write_yaml


class TestSimpleI18nBackend(unittest.TestCase):
    """Tests for YAML-backed translations with locale fallback."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.locale_dir = self.temp_dir / 'locale'
        write_yaml(self.locale_dir / 'en' / 'world.yml', EN_LOCALE)
        write_yaml(self.locale_dir / 'fr' / 'world.yml', FR_LOCALE)
        self.backend = SimpleI18nBackend(str(self.locale_dir))

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_translate_default_locale(self):
        self.assertEqual(self.backend.translate('world.us.il.name'), 'Illinois')
        self.assertEqual(self.backend.translate('world.ca.on.name'), 'Ontario')

    def test_translate_current_locale(self):
        self.backend.locale = 'fr'

        self.assertEqual(self.backend.translate('world.us.name'), 'États-Unis')

    def test_falls_back_to_default_locale(self):
        self.backend.locale = 'fr'

        self.assertEqual(self.backend.translate('world.us.dc.name'), 'District of Columbia')

    def test_missing_translation_raises(self):
        self.backend.locale = 'fr'

        with self.assertRaises(MissingTranslationError) as ctx:
            self.backend.translate('world.mx.name')

        self.assertEqual(ctx.exception.path, 'world.mx.name')
        self.assertEqual(ctx.exception.locale, 'fr')
        self.assertEqual(ctx.exception.fallback_locale, 'en')

    def test_non_leaf_path_is_missing(self):
        with self.assertRaises(MissingTranslationError):
            self.backend.translate('world.us')

    def test_available_locales(self):
        self.assertEqual(self.backend.available_locales(), ['en', 'fr'])

    def test_appended_path_overrides_earlier_paths(self):
        overlay_dir = self.temp_dir / 'overlay_locale'
        write_yaml(overlay_dir / 'en.yml', {'en': {'world': {'us': {'name': 'USA'}}}})

        self.assertEqual(self.backend.translate('world.us.name'), 'United States')
        self.backend.append_locale_path(str(overlay_dir))

        self.assertEqual(self.backend.translate('world.us.name'), 'USA')
        self.assertEqual(self.backend.translate('world.us.il.name'), 'Illinois')

    def test_missing_directory_is_skipped(self):
        backend = SimpleI18nBackend(str(self.temp_dir / 'nowhere'), str(self.locale_dir))

        self.assertEqual(backend.translate('world.ca.name'), 'Canada')

    def test_reset_rereads_files(self):
        self.assertEqual(self.backend.translate('world.ca.name'), 'Canada')
        write_yaml(self.locale_dir / 'en' / 'world.yml', {'en': {'world': {'ca': {'name': 'Kanada'}}}})

        self.assertEqual(self.backend.translate('world.ca.name'), 'Canada')
        self.backend.reset()
        self.assertEqual(self.backend.translate('world.ca.name'), 'Kanada')

    def test_locale_file_must_be_mapping(self):
        write_yaml(self.locale_dir / 'broken.yml', ['not', 'a', 'mapping'])

        with self.assertRaises(DataLoadError):
            self.backend.translate('world.us.name')


class TestDictTranslationBackend(unittest.TestCase):
    """Tests for the in-memory backend."""

    def test_translate_and_missing(self):
        backend = DictTranslationBackend({'en': {'world.us.name': 'United States'}})

        self.assertEqual(backend.translate('world.us.name'), 'United States')
        with self.assertRaises(MissingTranslationError):
            backend.translate('world.ca.name')

        backend.locale = 'de'
        with self.assertRaises(MissingTranslationError):
            backend.translate('world.us.name')


class TestDeepMerge(unittest.TestCase):

    def test_nested_dicts_are_merged(self):
        target = {'en': {'world': {'us': {'name': 'United States', 'official_name': 'USA'}}}}

        deep_merge(target, {'en': {'world': {'us': {'name': 'America'}, 'ca': {'name': 'Canada'}}}})

        self.assertEqual(target, {'en': {'world': {
            'us': {'name': 'America', 'official_name': 'USA'},
            'ca': {'name': 'Canada'},
        }}})


if __name__ == '__main__':
    unittest.main()
