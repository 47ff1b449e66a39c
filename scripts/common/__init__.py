"""
Defect GT Annotator - Common Utilities Module

Shared constants, configuration, image I/O, validation, logging and
exceptions used by the annotation tool.
"""

from .constants import (
    # Output layout
    DEFAULT_OUTPUT_DIR,
    DEFAULT_LEDGER_NAME,
    DEFAULT_LABEL_FILE,
    DEFAULT_ID_PATTERN,
    # Brush / overlay limits
    MIN_BRUSH_SIZE,
    MAX_BRUSH_SIZE,
    DEFAULT_BRUSH_SIZE,
    MIN_OVERLAY,
    MAX_OVERLAY,
    DEFAULT_OVERLAY,
)

from .image_utils import (
    draw_box,
    draw_text,
    list_image_files,
    load_image,
    create_blank_mask,
    load_mask,
    save_mask,
)

from .config_utils import (
    AnnotatorConfig,
    load_annotator_config,
)

from .validation import (
    ErrorSeverity,
    PipelineError,
    ValidationResult,
    validate_image_dir,
    prepare_output_dir,
    validate_label_file,
)

from .exceptions import (
    AnnotatorError,
    PathError,
    ValidationError,
)

from .logger import (
    get_logger,
    set_log_level,
    add_file_handler,
)

__all__ = [
    # Constants
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_LEDGER_NAME",
    "DEFAULT_LABEL_FILE",
    "DEFAULT_ID_PATTERN",
    "MIN_BRUSH_SIZE",
    "MAX_BRUSH_SIZE",
    "DEFAULT_BRUSH_SIZE",
    "MIN_OVERLAY",
    "MAX_OVERLAY",
    "DEFAULT_OVERLAY",
    # Image utilities
    "draw_box",
    "draw_text",
    "list_image_files",
    "load_image",
    "create_blank_mask",
    "load_mask",
    "save_mask",
    # Config utilities
    "AnnotatorConfig",
    "load_annotator_config",
    # Validation
    "ErrorSeverity",
    "PipelineError",
    "ValidationResult",
    "validate_image_dir",
    "prepare_output_dir",
    "validate_label_file",
    # Exceptions
    "AnnotatorError",
    "PathError",
    "ValidationError",
    # Logging
    "get_logger",
    "set_log_level",
    "add_file_handler",
]
