"""
Rwanda Locations - read-only queries over Rwanda's administrative divisions.

This package loads the flat province > district > sector > cell > village
dataset once and answers hierarchical listings, lookups, filtered queries,
free-text search, path reconstruction and statistics from memory.
"""

from .config import IndexConfig
from .location_index import LocationIndex, create_location_index
from .models import (
    LocationRecord, Province, District, Sector, Cell, Village,
    FullPath, Statistics, QueryFilter, SearchOptions
)

__version__ = "1.0.0"
__author__ = "Data Analytics Team"

__all__ = [
    'IndexConfig',
    'LocationIndex',
    'create_location_index',
    'LocationRecord',
    'Province',
    'District',
    'Sector',
    'Cell',
    'Village',
    'FullPath',
    'Statistics',
    'QueryFilter',
    'SearchOptions',
]
