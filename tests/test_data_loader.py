"""
Unit tests for DataLoader.
"""

import logging
import tempfile
import unittest
from pathlib import Path

from rwanda_locations.config import DEFAULT_DATA_FILE
from rwanda_locations.data_loader import DataLoader, REQUIRED_COLUMNS
from rwanda_locations.exceptions import (
    DataLoadError, DataQualityError, FileAccessError, ValidationError
)
from rwanda_locations.models import LocationRecord
from rwanda_locations.utils.error_handler import RetryConfig
from tests.helpers import make_row, write_csv, write_json


class TestDataLoader(unittest.TestCase):
    """Test cases for DataLoader class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.logger = logging.getLogger('test_data_loader')
        self.loader = DataLoader(
            logger=self.logger,
            retry_config=RetryConfig(max_attempts=1, base_delay=0)
        )
        self.rows = [
            make_row(),
            make_row(id='2', village_code=101010103, village_name='Izuba'),
        ]

    def tearDown(self):
        """Clean up test fixtures."""
        self.temp_dir.cleanup()

    def test_load_bundled_dataset(self):
        records = self.loader.load_records(DEFAULT_DATA_FILE)

        self.assertEqual(len(records), 31)
        self.assertTrue(all(isinstance(r, LocationRecord) for r in records))

        first = records[0]
        self.assertEqual(first.id, '1')
        self.assertEqual(first.sector_code, '010101')
        self.assertIs(type(first.province_code), int)
        self.assertIs(type(first.village_code), int)
        self.assertEqual(first.village_name, 'Iterambere')

    def test_load_json(self):
        path = write_json(self.temp_dir.name, self.rows)
        records = self.loader.load_records(path)

        self.assertEqual([r.village_name for r in records], ['Gihanga', 'Izuba'])
        self.assertEqual(records[0].sector_code, '010101')

    def test_load_csv_keeps_sector_leading_zeros(self):
        path = write_csv(self.temp_dir.name, self.rows)
        records = self.loader.load_records(path)

        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].sector_code, '010101')
        self.assertEqual(records[0].cell_code, 1010101)
        self.assertIs(type(records[0].cell_code), int)

    def test_explicit_format_overrides_extension(self):
        path = write_csv(self.temp_dir.name, self.rows, name='locations.txt')
        records = self.loader.load_records(path, file_format='csv')

        self.assertEqual(len(records), 2)

    def test_unsupported_format(self):
        path = write_json(self.temp_dir.name, self.rows)

        with self.assertRaises(ValidationError):
            self.loader.load_records(path, file_format='xml')

    def test_missing_file(self):
        missing = str(Path(self.temp_dir.name) / 'missing.json')

        with self.assertRaises(FileAccessError) as context:
            self.loader.load_records(missing)

        self.assertEqual(context.exception.file_path, missing)

    def test_directory_instead_of_file(self):
        with self.assertRaises(FileAccessError):
            self.loader.load_records(self.temp_dir.name)

    def test_empty_json_array(self):
        path = write_json(self.temp_dir.name, [])

        with self.assertRaises(DataLoadError):
            self.loader.load_records(path)

    def test_empty_csv_file(self):
        path = Path(self.temp_dir.name) / 'empty.csv'
        path.write_text('', encoding='utf-8')

        with self.assertRaises(DataLoadError):
            self.loader.load_records(str(path))

    def test_malformed_json(self):
        path = Path(self.temp_dir.name) / 'broken.json'
        path.write_text('[{"id": "1", ', encoding='utf-8')

        with self.assertRaises(DataLoadError):
            self.loader.load_records(str(path))

    def test_missing_columns(self):
        rows = [{k: v for k, v in row.items() if k != 'cell_name'} for row in self.rows]
        path = write_json(self.temp_dir.name, rows)

        with self.assertRaises(ValidationError) as context:
            self.loader.load_records(path)

        self.assertIn('cell_name', str(context.exception))
        self.assertEqual(context.exception.field_name, 'columns')

    def test_extra_columns_ignored(self):
        rows = [dict(row, population=100) for row in self.rows]
        path = write_json(self.temp_dir.name, rows)

        records = self.loader.load_records(path)
        self.assertEqual(len(records), 2)

    def test_empty_name_rejected(self):
        rows = [make_row(village_name='   ')]
        path = write_json(self.temp_dir.name, rows)

        with self.assertRaises(ValidationError) as context:
            self.loader.load_records(path)

        self.assertEqual(context.exception.field_name, 'village_name')

    def test_null_name_rejected(self):
        rows = [make_row(district_name=None)]
        path = write_json(self.temp_dir.name, rows)

        with self.assertRaises(ValidationError):
            self.loader.load_records(path)

    def test_non_integer_code_rejected(self):
        rows = [make_row(), make_row(id='2', cell_code='abc', village_code=2)]
        path = write_json(self.temp_dir.name, rows)

        with self.assertRaises(ValidationError) as context:
            self.loader.load_records(path)

        self.assertEqual(context.exception.field_name, 'cell_code')

    def test_fractional_code_rejected(self):
        rows = [make_row(village_code=12.5)]
        path = write_json(self.temp_dir.name, rows)

        with self.assertRaises(ValidationError):
            self.loader.load_records(path)

    def test_text_is_trimmed(self):
        rows = [make_row(village_name='  Gihanga ', province_name='KIGALI ')]
        path = write_json(self.temp_dir.name, rows)

        record = self.loader.load_records(path)[0]
        self.assertEqual(record.village_name, 'Gihanga')
        self.assertEqual(record.province_name, 'KIGALI')

    def test_numeric_strings_accepted_as_codes(self):
        rows = [make_row(province_code='1', village_code='101010102')]
        path = write_json(self.temp_dir.name, rows)

        record = self.loader.load_records(path)[0]
        self.assertEqual(record.province_code, 1)
        self.assertEqual(record.village_code, 101010102)

    def test_duplicate_village_codes_logged(self):
        rows = [make_row(), make_row(id='2')]
        path = write_json(self.temp_dir.name, rows)

        with self.assertLogs(self.logger, level='WARNING') as logs:
            records = self.loader.load_records(path)

        self.assertEqual(len(records), 2)
        self.assertTrue(any('village codes' in line for line in logs.output))


class TestHierarchicalConsistency(unittest.TestCase):
    """Test cases for load-time hierarchy checks."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.logger = logging.getLogger('test_consistency')
        self.loader = DataLoader(logger=self.logger)

        # District 101 appears under two provinces
        self.rows = [
            make_row(),
            make_row(id='2', province_code=2, province_name='SOUTH',
                     village_code=101010103, village_name='Izuba'),
        ]
        self.path = write_json(self.temp_dir.name, self.rows)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_consistent_dataset_has_no_issues(self):
        df = self.loader.load_dataframe(DEFAULT_DATA_FILE)
        issues = self.loader.validate_hierarchical_consistency(df)

        self.assertEqual(sum(issues.values()), 0)
        self.assertIn('district_parent', issues)
        self.assertNotIn('province_parent', issues)

    def test_inconsistent_parent_counted(self):
        df = self.loader.load_dataframe(self.path)
        issues = self.loader.validate_hierarchical_consistency(df)

        self.assertEqual(issues['district_parent'], 1)
        self.assertEqual(issues['district_name'], 0)

    def test_inconsistent_parent_warns_by_default(self):
        with self.assertLogs(self.logger, level='WARNING'):
            records = self.loader.load_records(self.path)

        self.assertEqual(len(records), 2)

    def test_strict_consistency_raises(self):
        with self.assertRaises(DataQualityError) as context:
            self.loader.load_records(self.path, strict_consistency=True)

        self.assertEqual(context.exception.failed_checks, {'district_parent': 1})
        self.assertEqual(context.exception.severity, 'high')

    def test_validation_can_be_skipped(self):
        records = self.loader.load_records(self.path, validate_consistency=False)
        self.assertEqual(len(records), 2)

    def test_loading_statistics(self):
        self.loader.load_records(self.path)
        stats = self.loader.get_loading_statistics()

        self.assertEqual(stats['files_loaded'], 1)
        self.assertEqual(stats['records_loaded'], 2)
        self.assertEqual(stats['last_consistency_issues']['district_parent'], 1)
        self.assertEqual(stats['last_quality_summary']['total_records'], 2)


class TestRequiredColumns(unittest.TestCase):

    def test_required_columns_match_record_fields(self):
        self.assertEqual(REQUIRED_COLUMNS, list(LocationRecord.field_names()))
        self.assertIn('sector_code', REQUIRED_COLUMNS)


if __name__ == '__main__':
    unittest.main()
