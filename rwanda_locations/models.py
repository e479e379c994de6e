"""
Data models for the Rwanda location index.

LocationRecord is the flat, one-row-per-village shape of the dataset. The
Province/District/Sector/Cell/Village entities are denormalised projections
of those rows: each carries its own code and name plus the codes and names of
every ancestor level.
"""

from dataclasses import dataclass, asdict, fields
from typing import Optional, Dict, Any, Tuple

from .exceptions import ValidationError
from .hierarchy import LEVELS


@dataclass(frozen=True)
class LocationRecord:
    """One village with its complete administrative ancestry."""

    id: str
    country_code: str
    country_name: str
    province_code: int
    province_name: str
    district_code: int
    district_name: str
    sector_code: str
    sector_name: str
    cell_code: int
    cell_name: str
    village_code: int
    village_name: str

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """Column names a dataset file must provide."""
        return tuple(f.name for f in fields(cls))

    def names(self) -> Tuple[str, str, str, str, str]:
        """Names of all five levels, province first."""
        return (
            self.province_name,
            self.district_name,
            self.sector_name,
            self.cell_name,
            self.village_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Province:
    code: int
    name: str

    @classmethod
    def from_record(cls, record) -> 'Province':
        """Project the province fields of a record (or of any entity below it)."""
        return cls(code=record.province_code, name=record.province_name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class District:
    code: int
    name: str
    province_code: int
    province_name: str

    @classmethod
    def from_record(cls, record) -> 'District':
        return cls(
            code=record.district_code,
            name=record.district_name,
            province_code=record.province_code,
            province_name=record.province_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Sector:
    """Sector projection. Sector codes are strings such as '010101'."""

    code: str
    name: str
    district_code: int
    district_name: str
    province_code: int
    province_name: str

    @classmethod
    def from_record(cls, record) -> 'Sector':
        return cls(
            code=record.sector_code,
            name=record.sector_name,
            district_code=record.district_code,
            district_name=record.district_name,
            province_code=record.province_code,
            province_name=record.province_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Cell:
    code: int
    name: str
    sector_code: str
    sector_name: str
    district_code: int
    district_name: str
    province_code: int
    province_name: str

    @classmethod
    def from_record(cls, record) -> 'Cell':
        return cls(
            code=record.cell_code,
            name=record.cell_name,
            sector_code=record.sector_code,
            sector_name=record.sector_name,
            district_code=record.district_code,
            district_name=record.district_name,
            province_code=record.province_code,
            province_name=record.province_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Village:
    """Village projection; embeds every ancestor's code and name."""

    code: int
    name: str
    cell_code: int
    cell_name: str
    sector_code: str
    sector_name: str
    district_code: int
    district_name: str
    province_code: int
    province_name: str

    @classmethod
    def from_record(cls, record: LocationRecord) -> 'Village':
        return cls(
            code=record.village_code,
            name=record.village_name,
            cell_code=record.cell_code,
            cell_name=record.cell_name,
            sector_code=record.sector_code,
            sector_name=record.sector_name,
            district_code=record.district_code,
            district_name=record.district_name,
            province_code=record.province_code,
            province_name=record.province_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FullPath:
    """
    Complete administrative path of a village.

    Either every level is populated or, when the village code is unknown,
    every level is None.
    """

    province: Optional[Province] = None
    district: Optional[District] = None
    sector: Optional[Sector] = None
    cell: Optional[Cell] = None
    village: Optional[Village] = None

    @classmethod
    def from_village(cls, village: Village) -> 'FullPath':
        """Rebuild each ancestor from the fields embedded in the village."""
        return cls(
            province=Province.from_record(village),
            district=District.from_record(village),
            sector=Sector.from_record(village),
            cell=Cell.from_record(village),
            village=village,
        )

    @property
    def is_found(self) -> bool:
        return self.village is not None

    def to_dict(self) -> Dict[str, Optional[Dict[str, Any]]]:
        return {
            level: entity.to_dict() if entity is not None else None
            for level, entity in (
                ('province', self.province),
                ('district', self.district),
                ('sector', self.sector),
                ('cell', self.cell),
                ('village', self.village),
            )
        }


@dataclass(frozen=True)
class Statistics:
    """Number of distinct entities at each level."""

    total_provinces: int
    total_districts: int
    total_sectors: int
    total_cells: int
    total_villages: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class QueryFilter:
    """
    Optional code/name criteria for every level, ANDed together.

    None means "no constraint". Any other value, including 0 and the empty
    string, is a real criterion. Codes match by equality; names match after
    lowercasing and trimming both sides.
    """

    province_code: Optional[int] = None
    province_name: Optional[str] = None
    district_code: Optional[int] = None
    district_name: Optional[str] = None
    sector_code: Optional[str] = None
    sector_name: Optional[str] = None
    cell_code: Optional[int] = None
    cell_name: Optional[str] = None
    village_code: Optional[int] = None
    village_name: Optional[str] = None

    def __post_init__(self):
        """Reject criteria whose type could never match the dataset."""
        for level in LEVELS:
            code = getattr(self, level.code_column)
            if code is not None and (
                    isinstance(code, bool) or not isinstance(code, level.code_type)):
                raise ValidationError(
                    f"{level.code_column} must be of type {level.code_type.__name__}, "
                    f"got {type(code).__name__}",
                    field_name=level.code_column,
                    invalid_value=code,
                    validation_rules=[f"type: {level.code_type.__name__}"]
                )

            name = getattr(self, level.name_column)
            if name is not None and not isinstance(name, str):
                raise ValidationError(
                    f"{level.name_column} must be a string, got {type(name).__name__}",
                    field_name=level.name_column,
                    invalid_value=name,
                    validation_rules=["type: str"]
                )

    def active_criteria(self) -> Dict[str, Any]:
        """Criteria that were actually provided, keyed by record field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.active_criteria()


@dataclass(frozen=True)
class SearchOptions:
    """
    Options for free-text search across all level names.

    Attributes:
        query: Literal substring to look for
        case_sensitive: Match case exactly (default: case-insensitive)
        limit: Maximum number of results; None means unlimited
    """

    query: str
    case_sensitive: bool = False
    limit: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.query, str):
            raise ValidationError(
                f"Search query must be a string, got {type(self.query).__name__}",
                field_name='query',
                invalid_value=self.query,
                validation_rules=["type: str"]
            )

        if self.limit is not None:
            if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0:
                raise ValidationError(
                    f"Search limit must be a non-negative integer: {self.limit}",
                    field_name='limit',
                    invalid_value=self.limit,
                    validation_rules=["limit >= 0"]
                )
