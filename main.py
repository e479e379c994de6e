"""
Main entry point for the Rwanda location index.

This script provides a command-line interface over LocationIndex: hierarchical
listings, multi-field queries, free-text search, full paths, statistics and
name suggestions, printed as a table, JSON or CSV.
"""

import argparse
import json
import sys
import time
from typing import Any, Dict, List, Optional

import pandas as pd

from rwanda_locations.config import IndexConfig, DEFAULT_DATA_FILE
from rwanda_locations.hierarchy import LEVEL_NAMES, LEVELS
from rwanda_locations.logging_config import setup_logging
from rwanda_locations.location_index import LocationIndex, create_location_index
from rwanda_locations.exceptions import (
    ConfigurationError, DataLoadError, DataQualityError, FileAccessError, ValidationError
)
from rwanda_locations.utils.data_utils import format_location


EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_DATA_QUALITY = 2
EXIT_LOAD_ERROR = 3
EXIT_FILE_NOT_FOUND = 4
EXIT_NOT_FOUND = 5


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Rwanda Locations - query Rwanda's administrative divisions"
    )

    parser.add_argument(
        "--data",
        default=DEFAULT_DATA_FILE,
        help="Path to the locations JSON or CSV file (default: bundled dataset)"
    )

    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["table", "json", "csv"],
        default="table",
        help="Output format (default: table)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--log-file",
        help="Also write log messages to this file"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a code maps to more than one name or parent"
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while loading"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("provinces", help="List provinces")

    districts = subparsers.add_parser("districts", help="List districts")
    districts.add_argument("--province", type=int, help="Province code")

    sectors = subparsers.add_parser("sectors", help="List sectors")
    sectors.add_argument("--district", type=int, help="District code")
    sectors.add_argument("--province", type=int, help="Province code")

    cells = subparsers.add_parser("cells", help="List cells")
    cells.add_argument("--sector", help="Sector code, e.g. 010101")
    cells.add_argument("--district", type=int, help="District code")
    cells.add_argument("--province", type=int, help="Province code")

    villages = subparsers.add_parser("villages", help="List villages")
    villages.add_argument("--cell", type=int, help="Cell code")
    villages.add_argument("--sector", help="Sector code, e.g. 010101")
    villages.add_argument("--district", type=int, help="District code")
    villages.add_argument("--province", type=int, help="Province code")

    query = subparsers.add_parser("query", help="Filter records by codes and names")
    for level in LEVELS:
        query.add_argument(
            f"--{level.name}-code",
            dest=level.code_column,
            type=level.code_type,
            help=f"{level.name.capitalize()} code"
        )
        query.add_argument(
            f"--{level.name}-name",
            dest=level.name_column,
            help=f"{level.name.capitalize()} name (case-insensitive)"
        )

    search = subparsers.add_parser("search", help="Search all level names for a substring")
    search.add_argument("term", help="Text to look for")
    search.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    search.add_argument("--limit", type=int, help="Maximum number of results")

    path = subparsers.add_parser("path", help="Show the full path of a village")
    path.add_argument("village_code", type=int, help="Village code")

    subparsers.add_parser("stats", help="Count entities per level")

    suggest = subparsers.add_parser("suggest", help="Suggest known names similar to a name")
    suggest.add_argument("name", help="Name to look up")
    suggest.add_argument("--level", choices=LEVEL_NAMES, default="village",
                         help="Hierarchy level (default: village)")
    suggest.add_argument("--limit", type=int, default=5, help="Maximum suggestions (default: 5)")

    return parser.parse_args(argv)


def records_to_rows(records, output_format: str) -> List[Dict[str, Any]]:
    """Full record fields for machine formats, a readable summary for tables."""
    if output_format != "table":
        return [record.to_dict() for record in records]

    return [
        {'village_code': record.village_code, 'location': format_location(record)}
        for record in records
    ]


def run_command(index: LocationIndex, args: argparse.Namespace) -> Optional[List[Dict[str, Any]]]:
    """
    Execute the selected sub-command.

    Returns:
        Rows to print, or None when a single-entity lookup found nothing
    """
    command = args.command

    if command == "provinces":
        return [p.to_dict() for p in index.list_provinces()]

    if command == "districts":
        return [d.to_dict() for d in index.list_districts(province_code=args.province)]

    if command == "sectors":
        return [s.to_dict() for s in index.list_sectors(
            district_code=args.district, province_code=args.province)]

    if command == "cells":
        return [c.to_dict() for c in index.list_cells(
            sector_code=args.sector, district_code=args.district,
            province_code=args.province)]

    if command == "villages":
        return [v.to_dict() for v in index.list_villages(
            cell_code=args.cell, sector_code=args.sector,
            district_code=args.district, province_code=args.province)]

    if command == "query":
        criteria = {}
        for level in LEVELS:
            criteria[level.code_column] = getattr(args, level.code_column)
            criteria[level.name_column] = getattr(args, level.name_column)
        return records_to_rows(index.query(**criteria), args.output_format)

    if command == "search":
        results = index.search(args.term, case_sensitive=args.case_sensitive, limit=args.limit)
        return records_to_rows(results, args.output_format)

    if command == "path":
        full_path = index.get_full_path(args.village_code)
        if not full_path.is_found:
            return None
        return [
            {'level': level, 'code': entity['code'], 'name': entity['name']}
            for level, entity in full_path.to_dict().items()
        ]

    if command == "stats":
        return [
            {'level': level, 'total': total}
            for level, total in index.get_statistics().to_dict().items()
        ]

    if command == "suggest":
        return [
            {'name': name, 'score': score}
            for name, score in index.suggest(args.name, level=args.level, limit=args.limit)
        ]

    raise ValueError(f"Unknown command: {command}")


def render(rows: List[Dict[str, Any]], output_format: str, stream=None):
    """Print rows as a table, JSON or CSV."""
    stream = stream or sys.stdout

    if output_format == "json":
        json.dump(rows, stream, indent=2, ensure_ascii=False)
        stream.write("\n")
        return

    df = pd.DataFrame(rows)

    if output_format == "csv":
        df.to_csv(stream, index=False)
    elif df.empty:
        print("No results", file=stream)
    else:
        print(df.to_string(index=False), file=stream)


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = IndexConfig(
            data_file=args.data,
            strict_consistency=args.strict,
            show_progress=args.progress,
            log_level=args.log_level,
            log_file=args.log_file
        )

        logger = setup_logging(config)
        logger.debug(f"Configuration: {config.to_dict()}")

        start_time = time.time()
        index = create_location_index(config, logger=logger.logger)
        logger.log_file_operation("Loaded", config.data_file, len(index))
        logger.log_index_built(index.get_statistics(), time.time() - start_time)

        start_time = time.time()
        rows = run_command(index, args)
        logger.log_command(args.command, len(rows or []), time.time() - start_time)
        if rows is None:
            print(f"Village not found: {args.village_code}", file=sys.stderr)
            return EXIT_NOT_FOUND

        render(rows, args.output_format)
        return EXIT_OK

    except DataQualityError as e:
        print(f"\nData Quality Error: {e}", file=sys.stderr)
        for rec in e.recommendations:
            print(f"  - {rec}", file=sys.stderr)
        return EXIT_DATA_QUALITY

    except (DataLoadError, ValidationError, ConfigurationError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    except (FileNotFoundError, FileAccessError) as e:
        print(f"\nFile Error: {e}", file=sys.stderr)
        print("Please check that the data file exists and is readable.", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        print("Please check the log output for more details.", file=sys.stderr)
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
