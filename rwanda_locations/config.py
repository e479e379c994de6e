"""
Configuration management for the Rwanda location index.

This module provides the dataclass that describes where the dataset lives,
how strictly it is validated at load time, and how the index logs.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional
import os
from pathlib import Path

from .exceptions import ConfigurationError


DEFAULT_DATA_FILE = str(Path(__file__).parent / "data" / "locations.json")

FILE_FORMATS = ("auto", "json", "csv")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class IndexConfig:
    """Configuration for loading and building a location index."""

    # Dataset source
    data_file: str = DEFAULT_DATA_FILE
    file_format: str = "auto"

    # Load-time validation of the parent/child code invariants
    validate_consistency: bool = True
    strict_consistency: bool = False

    # Progress bar while building records (useful for the full dataset)
    show_progress: bool = False

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.data_file = str(self.data_file)
        self._validate_path()
        self._validate_options()

    def _validate_path(self):
        """Validate that the dataset file exists."""
        if not os.path.exists(self.data_file):
            raise FileNotFoundError(f"Location data file not found: {self.data_file}")

    def _validate_options(self):
        if self.file_format not in FILE_FORMATS:
            raise ConfigurationError(
                f"Unsupported file format: {self.file_format}",
                config_key="file_format",
                config_value=self.file_format,
                valid_values=list(FILE_FORMATS)
            )

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unsupported log level: {self.log_level}",
                config_key="log_level",
                config_value=self.log_level,
                valid_values=list(LOG_LEVELS)
            )

        if self.strict_consistency and not self.validate_consistency:
            raise ConfigurationError(
                "strict_consistency requires validate_consistency to be enabled",
                config_key="strict_consistency",
                config_value=self.strict_consistency
            )

    def resolve_file_format(self) -> str:
        """Concrete format of the dataset file ('json' or 'csv')."""
        if self.file_format != "auto":
            return self.file_format
        return "csv" if Path(self.data_file).suffix.lower() == ".csv" else "json"

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'IndexConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return asdict(self)
