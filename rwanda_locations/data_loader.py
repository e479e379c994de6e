"""
Data loading and validation module.

This module provides the DataLoader class, which reads the flat location
dataset (JSON or CSV) with pandas, validates it and turns each row into an
immutable LocationRecord. Any problem with the source is raised here, at load
time, so a LocationIndex is never built from partial data.
"""

import pandas as pd
from typing import List, Dict, Optional, Any
import logging
from pathlib import Path
from tqdm import tqdm

from .models import LocationRecord
from .hierarchy import LEVELS, get_level, get_code_columns
from .exceptions import DataLoadError, ValidationError, FileAccessError, DataQualityError
from .utils.data_utils import (
    clean_dataframe_strings,
    convert_code_columns,
    detect_duplicates,
    get_data_quality_summary,
    is_null_or_empty,
    is_valid_province_code,
    is_valid_district_code
)
from .utils.error_handler import (
    RetryConfig, safe_file_operation, create_error_context, log_error_details
)


REQUIRED_COLUMNS = list(LocationRecord.field_names())

INT_CODE_COLUMNS = [level.code_column for level in LEVELS if level.code_type is int]

STRING_COLUMNS = [column for column in REQUIRED_COLUMNS if column not in INT_CODE_COLUMNS]


class DataLoader:
    """
    Handles loading and validation of the location dataset.

    The dataset is a sequence of flat records, one per village, whose field
    names match LocationRecord. JSON files hold an array of objects; CSV files
    hold one record per line with a header row.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 retry_config: Optional[RetryConfig] = None,
                 show_progress: bool = False):
        """
        Initialize the DataLoader.

        Args:
            logger: Optional logger instance for logging operations
            retry_config: Optional retry configuration for file reads
            show_progress: Show a progress bar while building records
        """
        self.logger = logger or logging.getLogger(__name__)
        self.retry_config = retry_config or RetryConfig(max_attempts=3, base_delay=1.0)
        self.show_progress = show_progress
        self._files_loaded = 0
        self._records_loaded = 0
        self._last_quality_summary: Dict[str, Any] = {}
        self._last_consistency_issues: Dict[str, int] = {}

    def load_records(self, file_path: str, file_format: str = "auto",
                     validate_consistency: bool = True,
                     strict_consistency: bool = False) -> List[LocationRecord]:
        """
        Load the dataset file and build LocationRecord objects.

        Args:
            file_path: Path to the dataset file
            file_format: 'json', 'csv' or 'auto' (decided by file extension)
            validate_consistency: Check that codes map to one name and one parent
            strict_consistency: Raise DataQualityError instead of logging warnings

        Returns:
            Records in file order

        Raises:
            FileAccessError: If the file is missing or unreadable
            DataLoadError: If the file cannot be parsed or holds no records
            ValidationError: If columns or values are missing or malformed
            DataQualityError: If strict consistency checking finds problems
        """
        df = self.load_dataframe(file_path, file_format)

        if validate_consistency:
            self.validate_hierarchical_consistency(df, strict=strict_consistency)

        records = self.create_location_records(df)
        self._records_loaded += len(records)
        return records

    def load_dataframe(self, file_path: str, file_format: str = "auto") -> pd.DataFrame:
        """
        Load the dataset file into a cleaned and validated DataFrame.

        Args:
            file_path: Path to the dataset file
            file_format: 'json', 'csv' or 'auto'

        Returns:
            DataFrame with exactly the LocationRecord columns, in field order
        """
        file_path = str(file_path)
        self.logger.info(f"Loading locations from: {file_path}")

        try:
            file_path_obj = Path(file_path)
            if not file_path_obj.exists():
                raise FileAccessError(
                    f"Location data file not found: {file_path}",
                    file_path=file_path,
                    operation="read"
                )

            if not file_path_obj.is_file():
                raise FileAccessError(
                    f"Path is not a file: {file_path}",
                    file_path=file_path,
                    operation="read"
                )

            resolved_format = self._resolve_format(file_path_obj, file_format)

            df = safe_file_operation(
                operation=lambda: self._read_file(file_path_obj, resolved_format),
                file_path=file_path,
                operation_name=f"read {resolved_format.upper()}",
                retry_config=self.retry_config,
                logger=self.logger
            )

            self.logger.info(f"Read {len(df)} location records")

            if df.empty:
                raise DataLoadError(
                    "Location data file contains no records",
                    file_path=file_path
                )

            self._validate_columns(df, REQUIRED_COLUMNS, file_path)

            df = self._process_location_data(df, file_path)

            self._validate_location_data(df, file_path)

            self._last_quality_summary = get_data_quality_summary(df, get_code_columns())
            self.logger.debug(f"Location data quality: {self._last_quality_summary}")

            self._files_loaded += 1
            return df

        except (FileAccessError, DataLoadError, ValidationError):
            raise
        except pd.errors.EmptyDataError as e:
            raise DataLoadError(
                "Location data file is empty or contains no valid data",
                file_path=file_path,
                original_error=e
            )
        except (pd.errors.ParserError, ValueError) as e:
            raise DataLoadError(
                f"Error parsing location data file: {str(e)}",
                file_path=file_path,
                original_error=e
            )
        except Exception as e:
            context = create_error_context(
                operation="load_dataframe",
                file_path=file_path,
                error_type=type(e).__name__
            )
            log_error_details(self.logger, e, context)

            raise DataLoadError(
                f"Unexpected error loading locations from {file_path}: {str(e)}",
                file_path=file_path,
                original_error=e
            )

    def _resolve_format(self, file_path: Path, file_format: str) -> str:
        if file_format in ("json", "csv"):
            return file_format

        if file_format != "auto":
            raise ValidationError(
                f"Unsupported file format: {file_format}",
                field_name="file_format",
                invalid_value=file_format,
                validation_rules=["one of: auto, json, csv"]
            )

        return "csv" if file_path.suffix.lower() == ".csv" else "json"

    def _read_file(self, file_path: Path, file_format: str) -> pd.DataFrame:
        """Read raw rows without letting pandas reinterpret codes."""
        if file_format == "csv":
            # Everything as text: sector codes keep their leading zeros
            return pd.read_csv(file_path, dtype=str, keep_default_na=False, na_values=[''])

        return pd.read_json(file_path, orient="records", dtype=False, convert_dates=False)

    def _validate_columns(self, df: pd.DataFrame, required_columns: List[str],
                         file_path: str) -> None:
        """
        Validate that required columns are present in DataFrame.

        Raises:
            ValidationError: If required columns are missing
        """
        missing_columns = set(required_columns) - set(df.columns)
        if missing_columns:
            available_columns = [str(col) for col in df.columns]
            raise ValidationError(
                f"Missing required columns in {file_path}: {sorted(missing_columns)}. "
                f"Available columns: {sorted(available_columns)}",
                field_name="columns",
                invalid_value=available_columns,
                validation_rules=[f"Must contain columns: {sorted(required_columns)}"]
            )

    def _process_location_data(self, df: pd.DataFrame, file_path: str) -> pd.DataFrame:
        """
        Keep the record columns, trim text values and convert integer codes.

        Args:
            df: Raw DataFrame
            file_path: Path to the source file

        Returns:
            Processed DataFrame
        """
        extra_columns = [col for col in df.columns if col not in REQUIRED_COLUMNS]
        if extra_columns:
            self.logger.debug(f"Ignoring extra columns in {file_path}: {extra_columns}")

        df = df[REQUIRED_COLUMNS].reset_index(drop=True)
        df = clean_dataframe_strings(df, STRING_COLUMNS)
        df = convert_code_columns(df, INT_CODE_COLUMNS)
        return df

    def _validate_location_data(self, df: pd.DataFrame, file_path: str) -> None:
        """
        Check every record fully specifies all five levels.

        Raises:
            ValidationError: On empty text values or missing/non-integer codes
        """
        for column in STRING_COLUMNS:
            empty_mask = df[column].apply(is_null_or_empty)
            if empty_mask.any():
                first_row = int(empty_mask.idxmax())
                raise ValidationError(
                    f"Column '{column}' is empty in {int(empty_mask.sum())} record(s), "
                    f"first at record {first_row}",
                    field_name=column,
                    invalid_value=None,
                    validation_rules=["Must not be empty"]
                )

        for column in INT_CODE_COLUMNS:
            invalid_mask = df[column].isna()
            if invalid_mask.any():
                first_row = int(invalid_mask.idxmax())
                raise ValidationError(
                    f"Column '{column}' has missing or non-integer codes in "
                    f"{int(invalid_mask.sum())} record(s), first at record {first_row}",
                    field_name=column,
                    invalid_value=None,
                    validation_rules=["Must be an integer code"]
                )

        duplicates = detect_duplicates(df, ['village_code'])
        if not duplicates.empty:
            self.logger.warning(
                f"Found {len(duplicates)} records sharing {duplicates['village_code'].nunique()} "
                f"village codes; the first record for each code wins"
            )

        unexpected_provinces = sorted(
            {code for code in df['province_code'] if not is_valid_province_code(code)}
        )
        if unexpected_provinces:
            self.logger.warning(f"Province codes outside 1-5: {unexpected_provinces}")

        unexpected_districts = sorted(
            {code for code in df['district_code'] if not is_valid_district_code(code)}
        )
        if unexpected_districts:
            self.logger.warning(f"District codes outside 101-599: {unexpected_districts}")

    def validate_hierarchical_consistency(self, df: pd.DataFrame,
                                          strict: bool = False) -> Dict[str, int]:
        """
        Check that each code maps to a single name and a single parent code.

        Args:
            df: Processed location DataFrame
            strict: Raise instead of logging warnings

        Returns:
            Number of offending codes per check, e.g. {'district_name': 0, 'district_parent': 1, ...}

        Raises:
            DataQualityError: If strict and any check fails
        """
        issues = {}

        for level in LEVELS:
            name_counts = df.groupby(level.code_column)[level.name_column].nunique()
            inconsistent_names = name_counts[name_counts > 1]
            issues[f"{level.name}_name"] = len(inconsistent_names)

            if len(inconsistent_names) > 0:
                self.logger.warning(
                    f"Found {len(inconsistent_names)} {level.name} codes with inconsistent names"
                )
                for code in list(inconsistent_names.index)[:5]:
                    names = df[df[level.code_column] == code][level.name_column].unique()
                    self.logger.debug(f"{level.name.capitalize()} code {code} has names: {list(names)}")

            if level.parent_level is None:
                continue

            parent = get_level(level.parent_level)
            parent_counts = df.groupby(level.code_column)[parent.code_column].nunique()
            inconsistent_parents = parent_counts[parent_counts > 1]
            issues[f"{level.name}_parent"] = len(inconsistent_parents)

            if len(inconsistent_parents) > 0:
                self.logger.warning(
                    f"Found {len(inconsistent_parents)} {level.name} codes under more than one {parent.name}"
                )
                for code in list(inconsistent_parents.index)[:5]:
                    parents = df[df[level.code_column] == code][parent.code_column].unique()
                    self.logger.debug(f"{level.name.capitalize()} code {code} has {parent.name} codes: {list(parents)}")

        self._last_consistency_issues = issues
        total_issues = sum(issues.values())

        if total_issues and strict:
            failed_checks = {check: count for check, count in issues.items() if count}
            raise DataQualityError(
                f"Location hierarchy is inconsistent: {total_issues} code(s) fail checks {sorted(failed_checks)}",
                failed_checks=failed_checks,
                severity="high",
                recommendations=[
                    "Make every code map to exactly one name",
                    "Make every code belong to exactly one parent code"
                ]
            )

        return issues

    def create_location_records(self, df: pd.DataFrame) -> List[LocationRecord]:
        """
        Convert DataFrame to list of LocationRecord objects.

        Args:
            df: Processed location DataFrame

        Returns:
            List of LocationRecord objects in DataFrame order
        """
        records = []
        rows = df[REQUIRED_COLUMNS].itertuples(index=False)

        for row in tqdm(rows, total=len(df), desc="Building location records",
                        unit="records", disable=not self.show_progress):
            records.append(LocationRecord(**row._asdict()))

        self.logger.info(f"Built {len(records)} location records")
        return records

    def get_loading_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the data loading process.

        Returns:
            Dictionary with loading statistics
        """
        return {
            'files_loaded': self._files_loaded,
            'records_loaded': self._records_loaded,
            'last_quality_summary': self._last_quality_summary,
            'last_consistency_issues': self._last_consistency_issues,
            'retry_config': {
                'max_attempts': self.retry_config.max_attempts,
                'base_delay': self.retry_config.base_delay,
                'max_delay': self.retry_config.max_delay
            }
        }
