"""
Read-only query engine over Rwanda's administrative divisions.

This module provides the LocationIndex class. It takes the flat list of
village records once, derives the deduplicated province, district, sector,
cell and village projections up front, and then answers listings, lookups,
filtered queries, free-text search, path reconstruction and statistics
without mutating anything. Because all derived state is built in the
constructor, an index can be shared between threads without locking.

Conventions shared by every operation:
    * single-entity lookups return None when nothing matches;
    * listings, queries and searches return a (possibly empty) list;
    * a filter argument of None means "no constraint", while 0 and "" are
      real values that must match.
"""

import logging
import time
from itertools import islice
from operator import attrgetter
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .config import IndexConfig
from .data_loader import DataLoader
from .exceptions import DataLoadError, ValidationError
from .hierarchy import LEVELS, get_level, get_name_columns
from .matching.name_matcher import NameMatcher
from .models import (
    LocationRecord, Province, District, Sector, Cell, Village,
    FullPath, Statistics, QueryFilter, SearchOptions
)
from .utils.data_utils import normalize_string


ENTITY_TYPES = {
    'province': Province,
    'district': District,
    'sector': Sector,
    'cell': Cell,
    'village': Village,
}

# Position of each name column in LocationRecord.names()
NAME_POSITIONS = {column: position for position, column in enumerate(get_name_columns())}


class LocationIndex:
    """
    In-memory index over a fixed set of LocationRecord rows.

    Projections are deduplicated by code with the first record seen for a
    code winning, then sorted ascending by code. Sector codes are strings and
    sort lexicographically; every other level sorts numerically.

    Example:
        index = create_location_index()
        index.list_districts(province_code=1)
        index.get_full_path(101010102).sector.name   # 'Gitega'
    """

    def __init__(self, records: Iterable[LocationRecord],
                 logger: Optional[logging.Logger] = None):
        """
        Build the index.

        Args:
            records: Flat location records in dataset order
            logger: Optional logger instance

        Raises:
            DataLoadError: If no records are given
            ValidationError: If an item is not a LocationRecord
        """
        self.logger = logger or logging.getLogger(__name__)
        self._records: Tuple[LocationRecord, ...] = tuple(records)

        if not self._records:
            raise DataLoadError("Cannot build a location index without records")

        for position, record in enumerate(self._records):
            if not isinstance(record, LocationRecord):
                raise ValidationError(
                    f"Record {position} is not a LocationRecord: {type(record).__name__}",
                    field_name="records",
                    invalid_value=type(record).__name__,
                    validation_rules=["items must be LocationRecord"]
                )

        self._by_code: Dict[str, Dict[Any, Any]] = {}
        self._listings: Dict[str, Tuple[Any, ...]] = {}
        self._by_name: Dict[str, Dict[str, List[Any]]] = {}

        for level in LEVELS:
            projected = self._project(level.name, self._records)
            self._by_code[level.name] = projected
            self._listings[level.name] = tuple(self._sorted(projected))

            names: Dict[str, List[Any]] = {}
            for entity in projected.values():
                names.setdefault(normalize_string(entity.name), []).append(entity)
            self._by_name[level.name] = names

        self._lowered_names = tuple(
            tuple(name.lower() for name in record.names()) for record in self._records
        )
        self._normalized_names = tuple(
            tuple(normalize_string(name) for name in record.names()) for record in self._records
        )

        self._statistics = Statistics(
            total_provinces=len(self._listings['province']),
            total_districts=len(self._listings['district']),
            total_sectors=len(self._listings['sector']),
            total_cells=len(self._listings['cell']),
            total_villages=len(self._listings['village']),
        )

        self._name_matcher = NameMatcher(
            {level: [entity.name for entity in entities]
             for level, entities in self._listings.items()},
            logger=self.logger
        )

        self.logger.debug(f"Location index built: {self._statistics.to_dict()}")

    @staticmethod
    def _project(level_name: str, records: Iterable[LocationRecord]) -> Dict[Any, Any]:
        """Project records onto one level, keeping the first entity seen per code."""
        entity_type = ENTITY_TYPES[level_name]
        code_column = get_level(level_name).code_column

        projected = {}
        for record in records:
            code = getattr(record, code_column)
            if code not in projected:
                projected[code] = entity_type.from_record(record)
        return projected

    @staticmethod
    def _sorted(projected: Dict[Any, Any]) -> List[Any]:
        return sorted(projected.values(), key=attrgetter('code'))

    def _list_level(self, level_name: str, **criteria) -> List[Any]:
        """Filter records on the provided codes first, then project and sort."""
        active = {column: value for column, value in criteria.items() if value is not None}
        if not active:
            return list(self._listings[level_name])

        matching = (
            record for record in self._records
            if all(getattr(record, column) == value for column, value in active.items())
        )
        return self._sorted(self._project(level_name, matching))

    @property
    def records(self) -> Tuple[LocationRecord, ...]:
        """All records in dataset order."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    # Level listings

    def list_provinces(self) -> List[Province]:
        """All provinces, ascending by code."""
        return list(self._listings['province'])

    def list_districts(self, province_code: Optional[int] = None) -> List[District]:
        """Districts, optionally restricted to one province, ascending by code."""
        return self._list_level('district', province_code=province_code)

    def list_sectors(self, district_code: Optional[int] = None,
                     province_code: Optional[int] = None) -> List[Sector]:
        """Sectors matching every given filter, in lexicographic code order."""
        return self._list_level('sector', district_code=district_code,
                                province_code=province_code)

    def list_cells(self, sector_code: Optional[str] = None,
                   district_code: Optional[int] = None,
                   province_code: Optional[int] = None) -> List[Cell]:
        return self._list_level('cell', sector_code=sector_code,
                                district_code=district_code,
                                province_code=province_code)

    def list_villages(self, cell_code: Optional[int] = None,
                      sector_code: Optional[str] = None,
                      district_code: Optional[int] = None,
                      province_code: Optional[int] = None) -> List[Village]:
        return self._list_level('village', cell_code=cell_code,
                                sector_code=sector_code,
                                district_code=district_code,
                                province_code=province_code)

    # Single-entity lookups

    def get_province_by_code(self, code: int) -> Optional[Province]:
        return self._by_code['province'].get(code)

    def get_province_by_name(self, name: str) -> Optional[Province]:
        """Province whose name matches case-insensitively, ignoring surrounding spaces."""
        if not isinstance(name, str):
            return None
        matches = self._by_name['province'].get(normalize_string(name))
        return matches[0] if matches else None

    def get_district_by_code(self, code: int) -> Optional[District]:
        return self._by_code['district'].get(code)

    def get_sector_by_code(self, code: str) -> Optional[Sector]:
        return self._by_code['sector'].get(code)

    def get_cell_by_code(self, code: int) -> Optional[Cell]:
        return self._by_code['cell'].get(code)

    def get_village_by_code(self, code: int) -> Optional[Village]:
        return self._by_code['village'].get(code)

    def _get_by_name(self, level_name: str, name: str) -> List[Any]:
        if not isinstance(name, str):
            return []
        matches = self._by_name[level_name].get(normalize_string(name), [])
        return sorted(matches, key=attrgetter('code'))

    def get_districts_by_name(self, name: str) -> List[District]:
        """
        Every district with the given name, ascending by code.

        Names below province level are not unique (there are several
        'Gihanga' villages), so name lookups return lists.
        """
        return self._get_by_name('district', name)

    def get_sectors_by_name(self, name: str) -> List[Sector]:
        return self._get_by_name('sector', name)

    def get_cells_by_name(self, name: str) -> List[Cell]:
        return self._get_by_name('cell', name)

    def get_villages_by_name(self, name: str) -> List[Village]:
        return self._get_by_name('village', name)

    # Queries

    def query(self, query_filter: Optional[QueryFilter] = None,
              **criteria) -> List[LocationRecord]:
        """
        Records matching every provided criterion.

        Criteria can be passed as a QueryFilter or as keyword arguments named
        after its fields, e.g. ``index.query(province_code=1, sector_name='gitega')``.
        With no criteria every record is returned, in dataset order.

        Raises:
            ValidationError: On unknown field names, wrongly typed values, or
                when both a QueryFilter and keyword criteria are given
        """
        if query_filter is not None and criteria:
            raise ValidationError(
                "Pass either a QueryFilter or keyword criteria, not both",
                field_name="criteria",
                invalid_value=sorted(criteria)
            )

        if query_filter is None:
            try:
                query_filter = QueryFilter(**criteria)
            except TypeError as e:
                raise ValidationError(
                    f"Unknown query field: {e}",
                    field_name="criteria",
                    invalid_value=sorted(criteria),
                    validation_rules=[f"fields: {', '.join(QueryFilter.__dataclass_fields__)}"]
                )

        active = query_filter.active_criteria()
        if not active:
            return list(self._records)

        code_criteria = [
            (column, value) for column, value in active.items() if column not in NAME_POSITIONS
        ]
        name_criteria = [
            (NAME_POSITIONS[column], normalize_string(value))
            for column, value in active.items() if column in NAME_POSITIONS
        ]

        return [
            record for record, names in zip(self._records, self._normalized_names)
            if all(getattr(record, column) == value for column, value in code_criteria)
            and all(names[position] == value for position, value in name_criteria)
        ]

    def search(self, query: Union[str, SearchOptions], case_sensitive: bool = False,
               limit: Optional[int] = None) -> List[LocationRecord]:
        """
        Records where any of the five level names contains the query text.

        Matching is literal substring containment (no pattern syntax), in
        dataset order, truncated to the first ``limit`` matches. An empty
        query matches every record.

        Args:
            query: Text to look for, or a SearchOptions carrying all options
            case_sensitive: Match case exactly (ignored when SearchOptions is given)
            limit: Maximum number of results (ignored when SearchOptions is given)
        """
        if isinstance(query, SearchOptions):
            options = query
        else:
            options = SearchOptions(query=query, case_sensitive=case_sensitive, limit=limit)

        if options.case_sensitive:
            term = options.query
            haystacks = (record.names() for record in self._records)
        else:
            term = options.query.lower()
            haystacks = iter(self._lowered_names)

        matches = (
            record for record, names in zip(self._records, haystacks)
            if any(term in name for name in names)
        )

        if options.limit is not None:
            matches = islice(matches, options.limit)

        return list(matches)

    def suggest(self, name: str, level: str = "village", limit: Optional[int] = None,
                score_cutoff: Optional[float] = None) -> List[Tuple[str, float]]:
        """Closest known names at a level, for "did you mean" prompts."""
        return self._name_matcher.suggest(name, level=level, limit=limit,
                                          score_cutoff=score_cutoff)

    # Hierarchy, paths and statistics

    def get_hierarchy(self, village_code: int) -> Optional[Village]:
        """A village with its full ancestry; same as get_village_by_code."""
        return self.get_village_by_code(village_code)

    def get_full_path(self, village_code: int) -> FullPath:
        """
        Entities for every level from province down to the village.

        Ancestors are rebuilt from the fields the village embeds. For an
        unknown village code every level of the returned path is None.
        """
        village = self.get_village_by_code(village_code)
        if village is None:
            return FullPath()
        return FullPath.from_village(village)

    def get_statistics(self) -> Statistics:
        """Number of distinct entities per level across the whole dataset."""
        return self._statistics


def create_location_index(config: Optional[IndexConfig] = None,
                          logger: Optional[logging.Logger] = None) -> LocationIndex:
    """
    Load the configured dataset and build a LocationIndex.

    Call this once at application startup and pass the index to the code
    that needs it.

    Args:
        config: Index configuration (default: bundled dataset, default checks)
        logger: Optional logger instance

    Returns:
        Ready-to-query LocationIndex

    Raises:
        FileAccessError, DataLoadError, ValidationError, DataQualityError:
            If the dataset cannot be loaded; no index is built in that case
    """
    config = config or IndexConfig()
    logger = logger or logging.getLogger(__name__)
    start_time = time.time()

    loader = DataLoader(logger=logger, show_progress=config.show_progress)
    records = loader.load_records(
        config.data_file,
        file_format=config.resolve_file_format(),
        validate_consistency=config.validate_consistency,
        strict_consistency=config.strict_consistency
    )

    index = LocationIndex(records, logger=logger)
    logger.info(
        f"Location index built from {config.data_file} "
        f"({len(index):,} records) in {time.time() - start_time:.2f}s"
    )
    return index


