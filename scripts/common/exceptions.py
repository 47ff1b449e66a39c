"""
Custom Exception Classes for the Defect GT Annotator

Provides a small hierarchy of exceptions so callers can tell path problems
from invalid configuration while still catching everything at the CLI.

Usage:
    from common.exceptions import PathError

    try:
        save_mask(mask, path)
    except PathError as e:
        logger.error(f"Save failed: {e}")
"""

from typing import Any, Optional


class AnnotatorError(Exception):
    """
    Base exception class for the annotator.

    All custom exceptions inherit from this class, allowing
    broad exception catching when needed.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PathError(AnnotatorError):
    """
    Exception for path-related errors.

    Raised when an input/output directory is unusable or a mask
    file cannot be written.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.path = path


class ValidationError(AnnotatorError):
    """
    Exception for validation errors.

    Raised when configuration values are out of range, of the wrong
    type, or unknown.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if field_name:
            details["field_name"] = field_name
        if invalid_value is not None:
            details["invalid_value"] = str(invalid_value)
        super().__init__(message, details)
        self.field_name = field_name
        self.invalid_value = invalid_value
