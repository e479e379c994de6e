"""
Unit tests for the location data models.
"""

import unittest
from dataclasses import FrozenInstanceError

from rwanda_locations.exceptions import ValidationError
from rwanda_locations.models import (
    LocationRecord, Province, District, Sector, Cell, Village,
    FullPath, Statistics, QueryFilter, SearchOptions
)
from tests.helpers import make_record


class TestLocationRecord(unittest.TestCase):
    """Test cases for LocationRecord."""

    def test_field_names(self):
        names = LocationRecord.field_names()

        self.assertEqual(names[0], 'id')
        self.assertEqual(len(names), 13)
        self.assertIn('village_name', names)

    def test_names_province_first(self):
        record = make_record()
        self.assertEqual(
            record.names(),
            ('KIGALI', 'Nyarugenge', 'Gitega', 'Akabahizi', 'Gihanga')
        )

    def test_records_are_immutable(self):
        record = make_record()
        with self.assertRaises(FrozenInstanceError):
            record.village_name = 'Other'

    def test_to_dict(self):
        data = make_record().to_dict()

        self.assertEqual(data['sector_code'], '010101')
        self.assertEqual(data['village_code'], 101010102)


class TestEntities(unittest.TestCase):
    """Test cases for the per-level projections."""

    def setUp(self):
        self.record = make_record()

    def test_province(self):
        self.assertEqual(Province.from_record(self.record), Province(code=1, name='KIGALI'))

    def test_district(self):
        district = District.from_record(self.record)

        self.assertEqual(district.code, 101)
        self.assertEqual(district.province_name, 'KIGALI')

    def test_sector(self):
        sector = Sector.from_record(self.record)

        self.assertEqual(sector.code, '010101')
        self.assertEqual(sector.district_code, 101)
        self.assertEqual(sector.province_code, 1)

    def test_cell(self):
        cell = Cell.from_record(self.record)

        self.assertEqual(cell.code, 1010101)
        self.assertEqual(cell.sector_name, 'Gitega')

    def test_village_embeds_ancestry(self):
        village = Village.from_record(self.record)

        self.assertEqual(village.code, 101010102)
        self.assertEqual(village.cell_name, 'Akabahizi')
        self.assertEqual(village.sector_code, '010101')
        self.assertEqual(village.district_name, 'Nyarugenge')
        self.assertEqual(village.province_name, 'KIGALI')

    def test_projection_from_lower_entity(self):
        village = Village.from_record(self.record)
        self.assertEqual(District.from_record(village), District.from_record(self.record))

    def test_entities_are_hashable(self):
        entities = {Province.from_record(self.record), Province.from_record(make_record(id='2'))}
        self.assertEqual(len(entities), 1)


class TestFullPath(unittest.TestCase):

    def test_from_village(self):
        path = FullPath.from_village(Village.from_record(make_record()))

        self.assertTrue(path.is_found)
        self.assertEqual(path.cell.code, 1010101)
        self.assertEqual(path.to_dict()['sector']['name'], 'Gitega')

    def test_empty_path(self):
        path = FullPath()

        self.assertFalse(path.is_found)
        self.assertIsNone(path.province)


class TestStatistics(unittest.TestCase):

    def test_to_dict(self):
        stats = Statistics(5, 30, 416, 2148, 14837)
        self.assertEqual(stats.to_dict(), {
            'total_provinces': 5,
            'total_districts': 30,
            'total_sectors': 416,
            'total_cells': 2148,
            'total_villages': 14837,
        })


class TestQueryFilter(unittest.TestCase):
    """Test cases for QueryFilter validation."""

    def test_empty_filter(self):
        self.assertTrue(QueryFilter().is_empty())
        self.assertEqual(QueryFilter().active_criteria(), {})

    def test_falsy_values_are_active(self):
        criteria = QueryFilter(province_code=0, sector_code='', village_name='').active_criteria()
        self.assertEqual(criteria, {'province_code': 0, 'sector_code': '', 'village_name': ''})

    def test_code_types_enforced(self):
        with self.assertRaises(ValidationError):
            QueryFilter(district_code='101')
        with self.assertRaises(ValidationError):
            QueryFilter(sector_code=10101)
        with self.assertRaises(ValidationError):
            QueryFilter(province_code=True)

    def test_name_type_enforced(self):
        with self.assertRaises(ValidationError) as context:
            QueryFilter(cell_name=5)

        self.assertEqual(context.exception.field_name, 'cell_name')


class TestSearchOptions(unittest.TestCase):

    def test_defaults(self):
        options = SearchOptions(query='gi')

        self.assertFalse(options.case_sensitive)
        self.assertIsNone(options.limit)

    def test_invalid_limit(self):
        for limit in (-1, 2.5, True):
            with self.assertRaises(ValidationError):
                SearchOptions(query='gi', limit=limit)

    def test_zero_limit_allowed(self):
        self.assertEqual(SearchOptions(query='gi', limit=0).limit, 0)


if __name__ == '__main__':
    unittest.main()
