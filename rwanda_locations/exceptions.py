"""
Custom exception classes for the Rwanda location index.

Lookups that find nothing return None and listings that match nothing return
an empty list. The exceptions below are reserved for a dataset that cannot be
turned into an index and for caller errors such as an unknown query field.
"""

from typing import Optional, List, Dict, Any


class LocationIndexError(Exception):
    """Base exception class for all location index errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class ValidationError(LocationIndexError):
    """
    A dataset value or a caller argument is malformed.

    Raised at load time for missing columns, empty names and non-integer
    codes, and at query time for unknown fields, wrongly typed codes,
    unknown hierarchy levels and negative search limits.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Any = None, validation_rules: Optional[List[str]] = None):
        """
        Args:
            message: Human-readable error message
            field_name: Column or argument that failed validation
            invalid_value: The offending value
            validation_rules: Rules the value broke, e.g. ["limit >= 0"]
        """
        self.field_name = field_name
        self.invalid_value = invalid_value
        self.validation_rules = validation_rules or []
        super().__init__(message, error_code='VALIDATION_ERROR', context={
            'field_name': field_name,
            'invalid_value': None if invalid_value is None else str(invalid_value),
            'validation_rules': self.validation_rules
        })


class DataLoadError(LocationIndexError):
    """The dataset file could not be parsed or holds no records."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        self.file_path = file_path
        self.original_error = original_error
        super().__init__(message, error_code='DATA_LOAD_ERROR', context={
            'file_path': file_path,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        })


class FileAccessError(LocationIndexError):
    """The dataset file is missing, is not a file, or kept failing to read."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context={
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None
        })


class ConfigurationError(LocationIndexError):
    """An IndexConfig option has an unsupported value."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []
        super().__init__(message, error_code='CONFIGURATION_ERROR', context={
            'config_key': config_key,
            'config_value': None if config_value is None else str(config_value),
            'valid_values': [str(v) for v in self.valid_values]
        })


class DataQualityError(LocationIndexError):
    """
    The dataset breaks a hierarchy invariant under strict consistency checking.

    ``failed_checks`` maps each failing check (e.g. 'district_parent') to the
    number of codes that fail it.
    """

    def __init__(self, message: str, failed_checks: Dict[str, int],
                 severity: str = 'high', recommendations: Optional[List[str]] = None):
        self.failed_checks = dict(failed_checks)
        self.severity = severity
        self.recommendations = recommendations or []
        super().__init__(message, error_code='DATA_QUALITY_ERROR', context={
            'failed_checks': self.failed_checks,
            'affected_codes': sum(self.failed_checks.values()),
            'severity': severity,
            'recommendations': self.recommendations
        })


SEVERITY_BY_TYPE = (
    (ConfigurationError, 'critical'),
    (DataLoadError, 'high'),
    (FileAccessError, 'high'),
    (ValidationError, 'low'),
)


def get_error_severity(error: Exception) -> str:
    """Severity level (low, medium, high, critical) used to pick a log level."""
    if isinstance(error, DataQualityError):
        return error.severity

    for error_type, severity in SEVERITY_BY_TYPE:
        if isinstance(error, error_type):
            return severity
    return 'medium'
