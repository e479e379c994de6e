"""
Utility functions and helpers.
"""

from .data_utils import (
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

__all__ = [
    'safe_int_conversion',
    'safe_string_conversion',
    'normalize_string',
    'is_null_or_empty',
    'is_valid_province_code',
    'is_valid_district_code',
    'format_location',
    'clean_dataframe_strings',
    'convert_code_columns',
    'detect_duplicates',
    'get_data_quality_summary'
]
