"""
Defect GT Annotator - Validation Utilities

Structured error reporting for the startup checks of the annotator
(input directory, output directory, label file).
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from colorama import Fore, Style


class ErrorSeverity(Enum):
    """Severity levels for startup errors."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class PipelineError:
    """
    Structured error for startup checks.

    Attributes:
        message: Error description
        severity: Error severity level
        source: Check or component that raised the error
        details: Additional details or context
    """

    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    source: str = ""
    details: Optional[str] = None

    def format(self, use_color: bool = True) -> str:
        """
        Format error message with optional color.

        Args:
            use_color: If True, add ANSI color codes

        Returns:
            Formatted error string
        """
        prefix_map = {
            ErrorSeverity.INFO: (Fore.BLUE, "[INFO]"),
            ErrorSeverity.WARNING: (Fore.YELLOW, "[WARNING]"),
            ErrorSeverity.ERROR: (Fore.RED, "[ERROR]"),
            ErrorSeverity.CRITICAL: (Fore.RED + Style.BRIGHT, "[CRITICAL]"),
        }

        color, prefix = prefix_map.get(self.severity, (Fore.WHITE, "[UNKNOWN]"))

        source_str = f" ({self.source})" if self.source else ""
        details_str = f"\n  Details: {self.details}" if self.details else ""

        if use_color:
            return f"{color}{prefix}{Style.RESET_ALL}{source_str}: {self.message}{details_str}"
        else:
            return f"{prefix}{source_str}: {self.message}{details_str}"


@dataclass
class ValidationResult:
    """
    Result of a validation operation.

    Provides a consistent interface for reporting validation outcomes
    with both errors and warnings.
    """

    is_valid: bool = True
    errors: List[PipelineError] = field(default_factory=list)
    warnings: List[PipelineError] = field(default_factory=list)

    def add_error(
        self,
        message: str,
        source: str = "",
        details: Optional[str] = None,
    ) -> None:
        """Add an error and mark result as invalid."""
        self.is_valid = False
        self.errors.append(
            PipelineError(message, ErrorSeverity.ERROR, source, details)
        )

    def add_warning(
        self,
        message: str,
        source: str = "",
        details: Optional[str] = None,
    ) -> None:
        """Add a warning (does not affect validity)."""
        self.warnings.append(
            PipelineError(message, ErrorSeverity.WARNING, source, details)
        )

    def add_info(
        self,
        message: str,
        source: str = "",
        details: Optional[str] = None,
    ) -> None:
        """Add an info message."""
        self.warnings.append(
            PipelineError(message, ErrorSeverity.INFO, source, details)
        )

    def format_all(self, use_color: bool = True) -> str:
        """
        Format all errors and warnings.

        Args:
            use_color: If True, add ANSI color codes

        Returns:
            Formatted string with all messages
        """
        lines = []
        for error in self.errors:
            lines.append(error.format(use_color))
        for warning in self.warnings:
            lines.append(warning.format(use_color))
        return "\n".join(lines)

    def print_all(self, use_color: bool = True) -> None:
        """Print all errors and warnings to stdout."""
        formatted = self.format_all(use_color)
        if formatted:
            print(formatted)


def validate_image_dir(image_dir: Union[str, Path, None]) -> ValidationResult:
    """
    Validate the directory of images to annotate.

    Args:
        image_dir: Directory path, or None when it was not given

    Returns:
        ValidationResult with an error if the directory is missing
    """
    result = ValidationResult()

    if not image_dir:
        result.add_error(
            "An image directory has to be specified!",
            source="validate_image_dir",
        )
        return result

    path = Path(image_dir)
    if not path.exists() or not path.is_dir():
        result.add_error(
            f"Image directory[{image_dir}] is not available!",
            source="validate_image_dir",
        )

    return result


def prepare_output_dir(
    output_dir: Union[str, Path],
    create: bool = True,
) -> ValidationResult:
    """
    Make sure the output directory exists and is a directory.

    Args:
        output_dir: Directory for GT masks and the ledger
        create: Create the directory when it does not exist yet

    Returns:
        ValidationResult; an error if the path exists but is not a
        directory, an info entry when the directory was created
    """
    result = ValidationResult()
    path = Path(output_dir)

    if path.exists():
        if not path.is_dir():
            result.add_error(
                f"Output directory[{output_dir}] is not a directory!",
                source="prepare_output_dir",
            )
        return result

    if create:
        path.mkdir(parents=True, exist_ok=True)
        result.add_info(
            f"Create output directory[{output_dir}]",
            source="prepare_output_dir",
        )
    else:
        result.add_error(
            f"Output directory[{output_dir}] does not exist!",
            source="prepare_output_dir",
        )

    return result


def validate_label_file(label_file: Union[str, Path, None]) -> ValidationResult:
    """
    Check the optional reference label file.

    A missing file is not an error: the annotator then simply has no
    reference boxes to show.

    Args:
        label_file: Path to the label file, or None

    Returns:
        ValidationResult with a warning if the file is absent
    """
    result = ValidationResult()

    if label_file is None:
        return result

    path = Path(label_file)
    if not path.is_file():
        result.add_warning(
            f"Label file not found: {label_file}",
            source="validate_label_file",
            details="No reference boxes will be displayed",
        )

    return result
