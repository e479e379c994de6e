#!/usr/bin/env python3
"""
Hierarchical Navigation Example

Walks the hierarchy the way a cascading address form does:
province -> district -> sector -> cell -> village -> full path.

Usage:
    python examples/hierarchical_navigation.py
"""

from rwanda_locations import create_location_index
from rwanda_locations.utils import format_location


def main():
    index = create_location_index()

    provinces = index.list_provinces()
    print(f"Provinces ({len(provinces)}): {[p.name for p in provinces]}")

    province = provinces[0]
    districts = index.list_districts(province_code=province.code)
    print(f"\nDistricts in {province.name}: {[d.name for d in districts]}")

    district = districts[0]
    sectors = index.list_sectors(district_code=district.code)
    print(f"Sectors in {district.name}: {[s.name for s in sectors]}")

    sector = sectors[0]
    cells = index.list_cells(sector_code=sector.code)
    print(f"Cells in {sector.name}: {[c.name for c in cells]}")

    cell = cells[0]
    villages = index.list_villages(cell_code=cell.code)
    print(f"Villages in {cell.name}: {[v.name for v in villages]}")

    village = villages[0]
    path = index.get_full_path(village.code)
    print("\nFull path:")
    for level, entity in path.to_dict().items():
        print(f"  {level.capitalize():<9} {entity['name']} ({entity['code']})")

    print("\nSearching for 'gihanga':")
    for record in index.search("gihanga"):
        print(f"  {record.village_code}: {format_location(record)}")

    print(f"\nDid you mean: {index.suggest('Gihnga')}")
    print(f"Statistics: {index.get_statistics().to_dict()}")


if __name__ == "__main__":
    main()
