"""
Logging configuration for the Rwanda location index.

Library modules log through ``logging.getLogger(__name__)``; this module
attaches handlers to the package logger for the command line and benchmark
entry points. Console output goes to stderr so stdout stays reserved for
query results.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class IndexLogger:
    """Package logger with helpers for the index lifecycle."""

    def __init__(self, name: str = "rwanda_locations", level: str = "INFO",
                 log_file: Optional[str] = None, stream: Optional[TextIO] = None):
        """
        Args:
            name: Logger name; the package name captures every module's records
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path, appended to
            stream: Console stream (default: stderr)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Re-running setup must not duplicate output
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        self._add_handler(logging.StreamHandler(stream or sys.stderr), formatter)

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(logging.FileHandler(log_file, mode='a', encoding='utf-8'), formatter)

    def _add_handler(self, handler: logging.Handler, formatter: logging.Formatter):
        handler.setFormatter(formatter)
        self.logger.addHandler(handler)

    def info(self, message: str):
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def log_file_operation(self, operation: str, file_path: str, record_count: int):
        self.info(f"{operation}: {file_path} ({record_count:,} records)")

    def log_index_built(self, stats, duration: float):
        """Log index construction with per-level counts."""
        self.info(
            f"Location index ready in {duration:.2f}s: "
            f"{stats.total_provinces} provinces, {stats.total_districts:,} districts, "
            f"{stats.total_sectors:,} sectors, {stats.total_cells:,} cells, "
            f"{stats.total_villages:,} villages"
        )

    def log_command(self, command: str, result_count: int, duration: float):
        self.debug(f"Command '{command}' returned {result_count:,} rows in {duration * 1000:.1f}ms")


def setup_logging(config, stream: Optional[TextIO] = None) -> IndexLogger:
    """
    Set up package logging from an IndexConfig.

    Args:
        config: IndexConfig instance (log_level, log_file)
        stream: Optional console stream override

    Returns:
        Configured IndexLogger instance
    """
    return IndexLogger(
        name="rwanda_locations",
        level=config.log_level,
        log_file=config.log_file,
        stream=stream
    )
