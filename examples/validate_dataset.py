#!/usr/bin/env python3
"""
Dataset Validation Script

This script checks that a locations file (JSON or CSV) loads cleanly and
satisfies the hierarchy invariants before it is used to build an index.

Usage:
    python examples/validate_dataset.py --data locations.csv
"""

import argparse
import logging
import sys

from rwanda_locations.config import DEFAULT_DATA_FILE
from rwanda_locations.data_loader import DataLoader
from rwanda_locations.exceptions import LocationIndexError
from rwanda_locations.location_index import LocationIndex


class DatasetValidator:
    """Collects errors and warnings while validating a locations file."""

    def __init__(self, verbose=False):
        self.verbose = verbose
        self.errors = []
        self.warnings = []
        self.loader = DataLoader(logger=logging.getLogger("validate_dataset"))

    def log(self, message, level='INFO'):
        if self.verbose or level in ['ERROR', 'WARNING']:
            prefix = {'INFO': '✓', 'WARNING': '⚠', 'ERROR': '✗'}.get(level, ' ')
            print(f"{prefix} {message}")

    def validate(self, file_path: str, file_format: str = "auto") -> bool:
        print("\n" + "=" * 60)
        print(f"VALIDATING {file_path}")
        print("=" * 60)

        try:
            df = self.loader.load_dataframe(file_path, file_format)
        except LocationIndexError as e:
            self.errors.append(str(e))
            self.log(str(e), 'ERROR')
            return False

        self.log(f"Read {len(df):,} records with all required columns", 'INFO')

        summary = self.loader.get_loading_statistics()['last_quality_summary']
        if summary.get('duplicate_count'):
            self.warnings.append(f"{summary['duplicate_count']} fully duplicated records")
            self.log(f"{summary['duplicate_count']} fully duplicated records", 'WARNING')

        issues = self.loader.validate_hierarchical_consistency(df)
        for check, count in issues.items():
            if count:
                level, kind = check.split('_')
                message = f"{count} {level} code(s) with more than one {kind}"
                self.warnings.append(message)
                self.log(message, 'WARNING')
            else:
                self.log(f"{check} check passed", 'INFO')

        records = self.loader.create_location_records(df)
        stats = LocationIndex(records).get_statistics()
        self.log(f"Index statistics: {stats.to_dict()}", 'INFO')
        return True

    def print_summary(self) -> bool:
        print("\n" + "=" * 60)
        print("VALIDATION SUMMARY")
        print("=" * 60)

        for i, error in enumerate(self.errors, 1):
            print(f"  ✗ {i}. {error}")
        for i, warning in enumerate(self.warnings, 1):
            print(f"  ⚠ {i}. {warning}")

        if self.errors:
            print("\n✗ Validation failed. Fix the errors before building an index.")
            return False

        if self.warnings:
            print("\n✓ No critical errors found.")
            print("Warnings mean the first record seen for a code decides its name and parent.")
        else:
            print("\n✓ All validations passed!")
        return True


def main():
    parser = argparse.ArgumentParser(description="Validate a Rwanda locations dataset file")
    parser.add_argument("--data", default=DEFAULT_DATA_FILE, help="Path to the JSON or CSV file")
    parser.add_argument("--format", choices=["auto", "json", "csv"], default="auto",
                        help="File format (default: from the extension)")
    parser.add_argument("--verbose", action="store_true", help="Show detailed validation output")
    args = parser.parse_args()

    validator = DatasetValidator(verbose=args.verbose)
    validator.validate(args.data, args.format)
    sys.exit(0 if validator.print_summary() else 1)


if __name__ == "__main__":
    main()
