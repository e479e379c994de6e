"""
Data utility functions for type conversions, null handling and name matching.

This module provides utility functions for cleaning and converting dataset
values, normalising names for comparison and formatting locations.
"""

import pandas as pd
from typing import Any, Optional
import numpy as np


def safe_int_conversion(value: Any) -> Optional[int]:
    """
    Safely convert a value to integer, handling nulls and invalid values.

    Integral floats ("123.0", 123.0) are accepted; fractional values,
    booleans and non-numeric strings are rejected.

    Args:
        value: Value to convert to integer

    Returns:
        Integer value or None if conversion fails
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, (int, np.integer)):
        return int(value)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        if pd.isna(value):
            return None
        number = float(value)
    except (ValueError, TypeError):
        return None

    if not np.isfinite(number) or not number.is_integer():
        return None

    return int(number)


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""

    return str(value).strip()


def normalize_string(value: str) -> str:
    """
    Normalize a name for comparison: lowercase and trim surrounding whitespace.

    Args:
        value: String to normalize

    Returns:
        Normalized string
    """
    if not value:
        return ""

    return value.lower().strip()


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_valid_province_code(code: int) -> bool:
    """Province codes run from 1 (KIGALI) to 5 (EAST)."""
    return 1 <= code <= 5


def is_valid_district_code(code: int) -> bool:
    """District codes are the province digit followed by a two-digit index."""
    return 101 <= code <= 599


def format_location(location) -> str:
    """
    Format a location record for display, from village up to province.

    Args:
        location: LocationRecord (or any object with the *_name attributes)

    Returns:
        "village, cell, sector, district, province"
    """
    return (
        f"{location.village_name}, {location.cell_name}, {location.sector_name}, "
        f"{location.district_name}, {location.province_name}"
    )


def clean_dataframe_strings(df: pd.DataFrame, string_columns: list) -> pd.DataFrame:
    """
    Clean string columns in a DataFrame by removing extra whitespace.

    Args:
        df: DataFrame to clean
        string_columns: List of column names to clean

    Returns:
        DataFrame with cleaned string columns
    """
    df_cleaned = df.copy()

    for col in string_columns:
        if col in df_cleaned.columns:
            df_cleaned[col] = df_cleaned[col].apply(safe_string_conversion)

    return df_cleaned


def convert_code_columns(df: pd.DataFrame, code_columns: list) -> pd.DataFrame:
    """
    Convert integer code columns with safe_int_conversion.

    Values that cannot be converted become None; the column keeps object
    dtype so codes stay plain Python ints.

    Args:
        df: DataFrame to process
        code_columns: List of integer code column names

    Returns:
        DataFrame with converted code columns
    """
    df_converted = df.copy()

    for col in code_columns:
        if col in df_converted.columns:
            df_converted[col] = pd.Series(
                [safe_int_conversion(value) for value in df_converted[col]],
                index=df_converted.index,
                dtype=object
            )

    return df_converted


def detect_duplicates(df: pd.DataFrame, key_columns: list) -> pd.DataFrame:
    """Every row whose key_columns values also appear on another row, in file order."""
    return df[df.duplicated(subset=key_columns, keep=False)].copy()


def get_data_quality_summary(df: pd.DataFrame, code_columns: Optional[list] = None) -> dict:
    """
    Summarise a location DataFrame for load-time logging.

    Args:
        df: DataFrame to analyze
        code_columns: Columns whose distinct values should be counted

    Returns:
        Record count, per-column null and blank counts, fully duplicated
        rows, distinct codes per code column and memory footprint
    """
    null_counts = df.isnull().sum()
    blank_counts = {
        col: int(df[col].map(lambda value: isinstance(value, str) and not value.strip()).sum())
        for col in df.select_dtypes(include=['object']).columns
    }

    return {
        'total_records': len(df),
        'null_counts': {col: int(count) for col, count in null_counts.items() if count},
        'empty_string_counts': {col: count for col, count in blank_counts.items() if count},
        'duplicate_count': int(df.duplicated().sum()),
        'distinct_codes': {col: int(df[col].nunique()) for col in (code_columns or [])},
        'memory_usage_mb': round(df.memory_usage(deep=True).sum() / 1024 / 1024, 3)
    }
