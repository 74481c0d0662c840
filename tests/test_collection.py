"""
Tests for RegionCollection lookups and export.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from region_taxonomy.collection import RegionCollection
from region_taxonomy.data_source import RegionDataLoader
from region_taxonomy.exceptions import RegionNotFoundError
from region_taxonomy.i18n import SimpleI18nBackend
from region_taxonomy.region import World
from region_taxonomy.taxonomy import RegionContext

from tests.fixtures import build_base_dataset, write_dataset


class CollectionTestCase(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.data = build_base_dataset(self.temp_dir / 'data')
        self.context = RegionContext(
            RegionDataLoader.from_paths(str(self.data)),
            SimpleI18nBackend(str(self.data / 'locale'))
        )
        self.world = World(self.context)
        self.countries = self.world.subregions
        self.states = self.countries.by_code('us').subregions

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)


class TestSequenceBehaviour(CollectionTestCase):
    """Tests for ordering and positional access."""

    def test_preserves_declaration_order(self):
        self.assertEqual([state.code for state in self.states], ['IL', 'CA', 'DC'])

    def test_positional_index(self):
        self.assertEqual(self.states[0].code, 'IL')
        self.assertEqual(self.states[-1].code, 'DC')

    def test_out_of_range_raises_index_error(self):
        with self.assertRaises(IndexError):
            self.states[3]

    def test_slice_returns_collection(self):
        head = self.states[:2]

        self.assertIsInstance(head, RegionCollection)
        self.assertEqual(head.codes(), ['IL', 'CA'])
        self.assertEqual(head.by_code('ca').name, 'California')

    def test_len_and_truthiness(self):
        self.assertEqual(len(self.states), 3)
        self.assertTrue(self.states)
        self.assertFalse(RegionCollection())

    def test_contains(self):
        self.assertIn(self.states[1], self.states)
        self.assertNotIn(self.countries[0], self.states)


class TestLookups(CollectionTestCase):
    """Tests for code, name and type lookups."""

    def test_by_code_is_case_insensitive(self):
        self.assertIs(self.states.by_code('il'), self.states[0])
        self.assertIs(self.states.by_code('IL'), self.states[0])
        self.assertIs(self.states.by_code(' Il '), self.states[0])

    def test_by_code_missing_raises(self):
        with self.assertRaises(RegionNotFoundError) as ctx:
            self.states.by_code('TX')

        self.assertEqual(ctx.exception.code, 'TX')
        self.assertEqual(ctx.exception.parent_path, 'world.us')

    def test_not_found_is_a_key_error(self):
        with self.assertRaises(KeyError):
            RegionCollection().by_code('US')

    def test_coded_matches_country_codes(self):
        us = self.countries.by_code('us')

        self.assertIs(self.countries.coded('us'), us)
        self.assertIs(self.countries.coded('USA'), us)
        self.assertIs(self.countries.coded('840'), us)
        self.assertIs(self.countries.coded('can'), self.countries.by_code('ca'))
        self.assertIsNone(self.countries.coded('MEX'))
        self.assertIsNone(self.countries.coded(''))

    def test_named_exact(self):
        self.assertIs(self.countries.named('canada'), self.countries.by_code('ca'))
        self.assertIs(self.countries.named('Canada', case_sensitive=True), self.countries.by_code('ca'))
        self.assertIsNone(self.countries.named('canada', case_sensitive=True))

    def test_named_fuzzy(self):
        match = self.countries.named('Untied States', fuzzy=True, threshold=80)

        self.assertIs(match, self.countries.by_code('us'))
        self.assertIsNone(self.countries.named('Untied States'))
        self.assertIsNone(self.countries.named('Zzyzx', fuzzy=True, threshold=90))

    def test_named_rejects_bad_threshold(self):
        with self.assertRaises(ValueError):
            self.countries.named('Canada', fuzzy=True, threshold=120)

    def test_typed(self):
        states = self.states.typed('STATE')

        self.assertEqual(states.codes(), ['IL', 'CA'])
        self.assertEqual(self.states.typed('district').codes(), ['DC'])
        self.assertEqual(len(self.states.typed('county')), 0)


class TestDuplicates(CollectionTestCase):

    def test_first_duplicate_wins_with_warning(self):
        write_dataset(self.data, {'world/ca.yml': [
            {'type': 'province', 'code': 'ON'},
            {'type': 'province', 'code': 'on'},
        ]})
        canada = self.countries.by_code('ca')
        canada.reset()

        with self.assertLogs('region_taxonomy', level='WARNING') as captured:
            provinces = canada.subregions

        self.assertEqual(len(provinces), 2)
        self.assertIs(provinces.by_code('ON'), provinces[0])
        self.assertTrue(any('DATA QUALITY: duplicate region code' in line for line in captured.output))


class TestDataFrameExport(CollectionTestCase):

    def test_to_dataframe(self):
        df = self.countries.to_dataframe()

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(list(df['code']), ['US', 'CA'])
        self.assertEqual(list(df.columns[:5]), ['path', 'type', 'code', 'name', 'depth'])
        self.assertIn('alpha_3_code', df.columns)

    def test_empty_dataframe(self):
        self.assertTrue(RegionCollection().to_dataframe().empty)


if __name__ == '__main__':
    unittest.main()
