"""
Defect GT Annotator - Configuration Utilities

Annotator settings as a dataclass with defaults from constants,
optionally overridden from a YAML file.
"""

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple, Union

import yaml

from .constants import (
    BRUSH_KEY_STEP,
    DEFAULT_BRUSH_SIZE,
    DEFAULT_CURSOR_COLOR,
    DEFAULT_ID_PATTERN,
    DEFAULT_LABEL_BOX_COLOR,
    DEFAULT_LEDGER_NAME,
    DEFAULT_OVERLAY,
    DEFAULT_PAN_FRACTION,
    DEFAULT_POLL_FPS,
    DEFAULT_WINDOW_NAME,
    DEFAULT_WINDOW_SIZE,
    MAX_BRUSH_SIZE,
    MAX_OVERLAY,
    MIN_BRUSH_SIZE,
    MIN_OVERLAY,
)
from .exceptions import ValidationError


# =============================================================================
# Annotator Configuration
# =============================================================================


@dataclass
class AnnotatorConfig:
    """
    Configuration for the interactive GT annotator.

    Attributes:
        window_name: Title of the highgui window
        window_size: Initial window size (width, height)
        poll_fps: Event polling rate of the display loop
        initial_brush_size: Brush half-size at startup
        initial_overlay: Mask blend percentage at startup
        brush_key_step: Brush change for the "+" / "-" keys
        pan_fraction: Fraction of the visible size moved per pan key
        label_box_color: BGR color of reference label boxes
        cursor_color: BGR color of the brush footprint box
        id_pattern: Regex with an ``id`` group applied to the file stem
        ledger_name: File name of the annotated ledger inside the output dir
    """

    window_name: str = DEFAULT_WINDOW_NAME
    window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE
    poll_fps: int = DEFAULT_POLL_FPS
    initial_brush_size: int = DEFAULT_BRUSH_SIZE
    initial_overlay: int = DEFAULT_OVERLAY
    brush_key_step: int = BRUSH_KEY_STEP
    pan_fraction: float = DEFAULT_PAN_FRACTION
    label_box_color: Tuple[int, int, int] = DEFAULT_LABEL_BOX_COLOR
    cursor_color: Tuple[int, int, int] = DEFAULT_CURSOR_COLOR
    id_pattern: str = DEFAULT_ID_PATTERN
    ledger_name: str = DEFAULT_LEDGER_NAME

    def __post_init__(self):
        """Validate configuration."""
        self.window_size = tuple(self.window_size)
        self.label_box_color = tuple(self.label_box_color)
        self.cursor_color = tuple(self.cursor_color)

        if len(self.window_size) != 2 or min(self.window_size) <= 0:
            raise ValidationError(
                "window_size must be two positive integers",
                field_name="window_size",
                invalid_value=self.window_size,
            )
        if self.poll_fps <= 0:
            raise ValidationError(
                "poll_fps must be positive",
                field_name="poll_fps",
                invalid_value=self.poll_fps,
            )
        if not MIN_BRUSH_SIZE <= self.initial_brush_size <= MAX_BRUSH_SIZE:
            raise ValidationError(
                f"initial_brush_size must be in [{MIN_BRUSH_SIZE}, {MAX_BRUSH_SIZE}]",
                field_name="initial_brush_size",
                invalid_value=self.initial_brush_size,
            )
        if not MIN_OVERLAY <= self.initial_overlay <= MAX_OVERLAY:
            raise ValidationError(
                f"initial_overlay must be in [{MIN_OVERLAY}, {MAX_OVERLAY}]",
                field_name="initial_overlay",
                invalid_value=self.initial_overlay,
            )
        if self.brush_key_step <= 0:
            raise ValidationError(
                "brush_key_step must be positive",
                field_name="brush_key_step",
                invalid_value=self.brush_key_step,
            )
        if not 0.0 < self.pan_fraction <= 1.0:
            raise ValidationError(
                "pan_fraction must be in (0, 1]",
                field_name="pan_fraction",
                invalid_value=self.pan_fraction,
            )
        for name in ("label_box_color", "cursor_color"):
            color = getattr(self, name)
            if len(color) != 3 or not all(0 <= c <= 255 for c in color):
                raise ValidationError(
                    f"{name} must be three values in [0, 255]",
                    field_name=name,
                    invalid_value=color,
                )
        try:
            compiled = re.compile(self.id_pattern)
        except re.error as e:
            raise ValidationError(
                f"id_pattern is not a valid regular expression: {e}",
                field_name="id_pattern",
                invalid_value=self.id_pattern,
            )
        if "id" not in compiled.groupindex:
            raise ValidationError(
                "id_pattern must define a named group 'id'",
                field_name="id_pattern",
                invalid_value=self.id_pattern,
            )
        if not self.ledger_name or "/" in self.ledger_name:
            raise ValidationError(
                "ledger_name must be a plain file name",
                field_name="ledger_name",
                invalid_value=self.ledger_name,
            )

    @property
    def poll_interval_ms(self) -> int:
        """waitKey timeout for one display loop tick."""
        return max(1, 1000 // self.poll_fps)


def load_annotator_config(config_path: Optional[Union[str, Path]] = None) -> AnnotatorConfig:
    """
    Load annotator configuration from a YAML file.

    Args:
        config_path: Path to a YAML mapping of AnnotatorConfig fields,
            or None for the defaults

    Returns:
        AnnotatorConfig instance

    Raises:
        ValidationError: If the file is missing, malformed, or has
            unknown keys / invalid values
    """
    if config_path is None:
        return AnnotatorConfig()

    config_path = Path(config_path)
    if not config_path.is_file():
        raise ValidationError(
            f"Config file not found: {config_path}",
            field_name="config",
            invalid_value=str(config_path),
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        return AnnotatorConfig()
    if not isinstance(data, dict):
        raise ValidationError(
            f"Config root must be a mapping: {config_path}",
            invalid_value=type(data).__name__,
        )

    known = {f.name for f in fields(AnnotatorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValidationError(
            f"Unknown config keys: {', '.join(unknown)}",
            field_name=unknown[0],
        )

    try:
        return AnnotatorConfig(**data)
    except TypeError as e:
        raise ValidationError(f"Invalid config value in {config_path}: {e}")
