"""
Error handling utilities for the location index.

The dataset is read exactly once, when an index is built, so a transient
I/O failure at that moment would otherwise abort application startup.
safe_file_operation retries such failures; everything else propagates.
"""

import time
import logging
from typing import Callable, Any, Optional, Sequence, Dict, Type, Union
from pathlib import Path

from ..exceptions import FileAccessError, get_error_severity


class RetryConfig:
    """Exponential backoff settings for reading the dataset file."""

    def __init__(self, max_attempts: int = 3, base_delay: float = 1.0,
                 max_delay: float = 10.0, backoff_factor: float = 2.0,
                 retry_exceptions: Optional[Sequence[Type[Exception]]] = None):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1: {max_attempts}")

        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor
        # OSError covers PermissionError, BlockingIOError and network filesystem hiccups
        self.retry_exceptions = tuple(retry_exceptions or (OSError, TimeoutError))

    def get_delay(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return min(self.base_delay * self.backoff_factor ** (attempt - 1), self.max_delay)


def safe_file_operation(operation: Callable[[], Any], file_path: Union[str, Path],
                        operation_name: str, retry_config: Optional[RetryConfig] = None,
                        logger: Optional[logging.Logger] = None) -> Any:
    """
    Call ``operation`` and retry it on transient I/O errors.

    Parse errors and any other exception type propagate unchanged on the
    first failure so the caller can classify them.

    Args:
        operation: Zero-argument callable performing the read
        file_path: File being read, for messages
        operation_name: Short description such as "read JSON"
        retry_config: Backoff settings (default: RetryConfig())
        logger: Optional logger instance

    Returns:
        Whatever ``operation`` returns

    Raises:
        FileAccessError: If every attempt failed with a retryable error
    """
    logger = logger or logging.getLogger(__name__)
    retry_config = retry_config or RetryConfig()

    attempt = 1
    while True:
        try:
            logger.debug(f"{operation_name} {file_path} (attempt {attempt}/{retry_config.max_attempts})")
            return operation()
        except retry_config.retry_exceptions as e:
            if attempt >= retry_config.max_attempts:
                logger.error(f"{operation_name} {file_path} failed after {attempt} attempts: {e}")
                raise FileAccessError(
                    f"Could not {operation_name} {file_path} after {attempt} attempts: {e}",
                    file_path=str(file_path),
                    operation=operation_name,
                    original_error=e
                )

            delay = retry_config.get_delay(attempt)
            logger.warning(f"{operation_name} {file_path} failed ({e}); retrying in {delay:.2f}s")
            time.sleep(delay)
            attempt += 1


def create_error_context(operation: str, **kwargs) -> Dict[str, Any]:
    """Context dictionary attached to logged errors."""
    return {'operation': operation, 'timestamp': time.time(), **kwargs}


def log_error_details(logger: logging.Logger, error: Exception,
                      context: Optional[Dict[str, Any]] = None):
    """Log an error with its structured details at a level matching its severity."""
    severity = get_error_severity(error)
    details = error.to_dict() if hasattr(error, 'to_dict') else {
        'error_type': type(error).__name__,
        'message': str(error),
    }
    details['severity'] = severity
    if context:
        details['context'] = context

    level = {
        'critical': logging.CRITICAL,
        'high': logging.ERROR,
        'medium': logging.WARNING,
    }.get(severity, logging.INFO)
    logger.log(level, f"{severity.capitalize()} severity error: {details}")
