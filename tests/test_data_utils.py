"""
Unit tests for data utility functions.
"""

import unittest

import numpy as np
import pandas as pd

from rwanda_locations.utils.data_utils import (
    safe_int_conversion,
    safe_string_conversion,
    normalize_string,
    is_null_or_empty,
    is_valid_province_code,
    is_valid_district_code,
    format_location,
    clean_dataframe_strings,
    convert_code_columns,
    detect_duplicates,
    get_data_quality_summary
)
from tests.helpers import make_record


class TestConversions(unittest.TestCase):
    """Test cases for value conversion helpers."""

    def test_safe_int_conversion(self):
        self.assertEqual(safe_int_conversion(101), 101)
        self.assertEqual(safe_int_conversion(np.int64(7)), 7)
        self.assertEqual(safe_int_conversion('101'), 101)
        self.assertEqual(safe_int_conversion(' 42 '), 42)
        self.assertEqual(safe_int_conversion(5.0), 5)
        self.assertEqual(safe_int_conversion('123.0'), 123)

    def test_safe_int_conversion_invalid(self):
        for value in (None, '', 'abc', 12.5, float('nan'), np.nan, float('inf'), True):
            self.assertIsNone(safe_int_conversion(value), value)

    def test_safe_int_conversion_returns_python_int(self):
        self.assertIs(type(safe_int_conversion(np.int32(3))), int)

    def test_safe_string_conversion(self):
        self.assertEqual(safe_string_conversion('  Gitega '), 'Gitega')
        self.assertEqual(safe_string_conversion(None), '')
        self.assertEqual(safe_string_conversion(np.nan), '')
        self.assertEqual(safe_string_conversion(12), '12')


class TestNameHelpers(unittest.TestCase):
    """Test cases for name normalisation and matching."""

    def test_normalize_string(self):
        self.assertEqual(normalize_string('  KiGaLi '), 'kigali')
        self.assertEqual(normalize_string(None), '')

    def test_is_null_or_empty(self):
        self.assertTrue(is_null_or_empty(None))
        self.assertTrue(is_null_or_empty('   '))
        self.assertTrue(is_null_or_empty(np.nan))
        self.assertFalse(is_null_or_empty('x'))
        self.assertFalse(is_null_or_empty(0))

    def test_code_ranges(self):
        self.assertTrue(is_valid_province_code(1))
        self.assertTrue(is_valid_province_code(5))
        self.assertFalse(is_valid_province_code(0))
        self.assertFalse(is_valid_province_code(6))
        self.assertTrue(is_valid_district_code(101))
        self.assertTrue(is_valid_district_code(599))
        self.assertFalse(is_valid_district_code(100))
        self.assertFalse(is_valid_district_code(600))

    def test_format_location(self):
        self.assertEqual(
            format_location(make_record()),
            'Gihanga, Akabahizi, Gitega, Nyarugenge, KIGALI'
        )


class TestDataFrameHelpers(unittest.TestCase):
    """Test cases for DataFrame cleaning and quality helpers."""

    def setUp(self):
        self.df = pd.DataFrame({
            'name': [' Gitega ', None, 'Kanyinya'],
            'code': ['1', 'x', 3.0],
        })

    def test_clean_dataframe_strings(self):
        cleaned = clean_dataframe_strings(self.df, ['name', 'missing'])

        self.assertEqual(list(cleaned['name']), ['Gitega', '', 'Kanyinya'])
        self.assertEqual(self.df['name'][0], ' Gitega ')

    def test_convert_code_columns(self):
        converted = convert_code_columns(self.df, ['code'])

        self.assertEqual(list(converted['code']), [1, None, 3])
        self.assertEqual(converted['code'].dtype, object)
        self.assertIs(type(converted['code'][2]), int)

    def test_detect_duplicates(self):
        df = pd.DataFrame({'village_code': [1, 2, 1], 'name': ['a', 'b', 'c']})
        duplicates = detect_duplicates(df, ['village_code'])

        self.assertEqual(list(duplicates['name']), ['a', 'c'])

    def test_quality_summary(self):
        summary = get_data_quality_summary(self.df)

        self.assertEqual(summary['total_records'], 3)
        self.assertEqual(summary['null_counts'], {'name': 1})
        self.assertEqual(summary['duplicate_count'], 0)


if __name__ == '__main__':
    unittest.main()
