"""
Administrative hierarchy definition for Rwanda.

Rwanda nests five administrative levels: province > district > sector >
cell > village. Each level is identified by a code column and a name column
in the flat dataset. Codes are unique within a level only.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class HierarchyLevel:
    """
    Represents a single level in the administrative hierarchy.

    Attributes:
        name: Level identifier ('province', 'district', 'sector', 'cell', 'village')
        code_column: Name of the column containing codes for this level
        name_column: Name of the column containing names for this level
        code_type: Python type of the codes (sector codes are strings)
        parent_level: Name of the parent level (None for the top level)
    """
    name: str
    code_column: str
    name_column: str
    code_type: type
    parent_level: Optional[str]


LEVELS: Tuple[HierarchyLevel, ...] = (
    HierarchyLevel('province', 'province_code', 'province_name', int, None),
    HierarchyLevel('district', 'district_code', 'district_name', int, 'province'),
    HierarchyLevel('sector', 'sector_code', 'sector_name', str, 'district'),
    HierarchyLevel('cell', 'cell_code', 'cell_name', int, 'sector'),
    HierarchyLevel('village', 'village_code', 'village_name', int, 'cell'),
)

LEVEL_NAMES: Tuple[str, ...] = tuple(level.name for level in LEVELS)

_LEVELS_BY_NAME: Dict[str, HierarchyLevel] = {level.name: level for level in LEVELS}


def get_level(name: str) -> Optional[HierarchyLevel]:
    """
    Get hierarchy level by name.

    Args:
        name: Name of the level to retrieve

    Returns:
        HierarchyLevel object if found, None otherwise
    """
    return _LEVELS_BY_NAME.get(name)


def get_parent_level(level_name: str) -> Optional[str]:
    """
    Get the name of the level directly above the given one.

    Returns:
        Parent level name, or None for 'province' and unknown levels
    """
    level = get_level(level_name)
    if level is None:
        return None
    return level.parent_level


def get_child_level(level_name: str) -> Optional[str]:
    """
    Get the name of the level directly below the given one.

    Returns:
        Child level name, or None for 'village' and unknown levels
    """
    for level in LEVELS:
        if level.parent_level == level_name:
            return level.name
    return None


def get_code_columns() -> List[str]:
    """Code columns in hierarchical order, province first."""
    return [level.code_column for level in LEVELS]


def get_name_columns() -> List[str]:
    """Name columns in hierarchical order, province first."""
    return [level.name_column for level in LEVELS]
