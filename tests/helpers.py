"""
Shared helpers for building location records and dataset files in tests.
"""

import json
from pathlib import Path
from typing import Dict, List

import pandas as pd

from rwanda_locations.models import LocationRecord


DEFAULT_FIELDS = {
    'id': '1',
    'country_code': 'RW',
    'country_name': 'Rwanda',
    'province_code': 1,
    'province_name': 'KIGALI',
    'district_code': 101,
    'district_name': 'Nyarugenge',
    'sector_code': '010101',
    'sector_name': 'Gitega',
    'cell_code': 1010101,
    'cell_name': 'Akabahizi',
    'village_code': 101010102,
    'village_name': 'Gihanga',
}


def make_record(**overrides) -> LocationRecord:
    """A valid record for Gihanga village, with any field overridden."""
    fields = dict(DEFAULT_FIELDS)
    fields.update(overrides)
    return LocationRecord(**fields)


def make_row(**overrides) -> Dict:
    """Same as make_record, as a plain dict suitable for a dataset file."""
    row = dict(DEFAULT_FIELDS)
    row.update(overrides)
    return row


def generate_records(provinces: int = 5, districts: int = 6, sectors: int = 10,
                     cells: int = 10, villages: int = 7) -> List[LocationRecord]:
    """Synthetic, fully consistent dataset with the real code layout."""
    records = []
    for p in range(1, provinces + 1):
        for d in range(1, districts + 1):
            district_code = p * 100 + d
            for s in range(1, sectors + 1):
                sector_code = f"{p:02d}{d:02d}{s:02d}"
                for c in range(1, cells + 1):
                    cell_code = int(f"{p}{d:02d}{s:02d}{c:02d}")
                    for v in range(1, villages + 1):
                        village_code = cell_code * 100 + v
                        records.append(LocationRecord(
                            id=str(len(records) + 1),
                            country_code='RW',
                            country_name='Rwanda',
                            province_code=p,
                            province_name=f"Province {p}",
                            district_code=district_code,
                            district_name=f"District {district_code}",
                            sector_code=sector_code,
                            sector_name=f"Sector {sector_code}",
                            cell_code=cell_code,
                            cell_name=f"Cell {cell_code}",
                            village_code=village_code,
                            village_name=f"Village {village_code}",
                        ))
    return records


def write_json(directory: str, rows: List[Dict], name: str = "locations.json") -> str:
    path = Path(directory) / name
    path.write_text(json.dumps(rows), encoding="utf-8")
    return str(path)


def write_csv(directory: str, rows: List[Dict], name: str = "locations.csv") -> str:
    path = Path(directory) / name
    pd.DataFrame(rows).astype(str).to_csv(path, index=False)
    return str(path)
