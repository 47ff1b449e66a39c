"""
Session state management.

Tool settings that persist across images (brush size, blend percentage,
overlay toggles), the per-image session state, and the two-way binding
between tool settings and highgui trackbars.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from common.constants import (
    DEFAULT_BRUSH_SIZE,
    DEFAULT_OVERLAY,
    MAX_BRUSH_SIZE,
    MAX_OVERLAY,
    MIN_BRUSH_SIZE,
    MIN_OVERLAY,
)

from .viewport import ZoomController


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


@dataclass
class ToolState:
    """
    Annotation tool settings shared by all images of one run.

    Attributes:
        brush_half_size: Half-size of the square brush in image pixels
        overlay_percent: Weight of the mask in the displayed blend
        show_filename: Draw the image file name on the view
        show_labels: Draw reference label boxes
    """

    brush_half_size: int = DEFAULT_BRUSH_SIZE
    overlay_percent: int = DEFAULT_OVERLAY
    show_filename: bool = False
    show_labels: bool = True

    def __post_init__(self):
        self.brush_half_size = _clamp(self.brush_half_size, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)
        self.overlay_percent = _clamp(self.overlay_percent, MIN_OVERLAY, MAX_OVERLAY)

    def set_brush(self, value: int) -> int:
        """Set brush half-size, clamped to its valid range."""
        self.brush_half_size = _clamp(value, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)
        return self.brush_half_size

    def resize_brush(self, delta: int) -> int:
        """Grow (positive delta) or shrink the brush."""
        return self.set_brush(self.brush_half_size + delta)

    def set_overlay(self, value: int) -> int:
        """Set blend percentage, clamped to its valid range."""
        self.overlay_percent = _clamp(value, MIN_OVERLAY, MAX_OVERLAY)
        return self.overlay_percent

    def adjust_overlay(self, delta: int) -> int:
        """Raise (positive delta) or lower the blend percentage."""
        return self.set_overlay(self.overlay_percent + delta)

    def toggle_filename(self) -> bool:
        self.show_filename = not self.show_filename
        return self.show_filename

    def toggle_labels(self) -> bool:
        self.show_labels = not self.show_labels
        return self.show_labels


@dataclass
class SessionState:
    """
    State of one interactive annotation session.

    Attributes:
        tool: Shared tool settings
        zoom: Zoom rectangle and cursor of the current image
        quit_requested: Set when the operator aborts the whole batch
    """

    tool: ToolState
    zoom: ZoomController
    quit_requested: bool = False


@dataclass
class TrackbarBinding:
    """
    Two-way binding between a ToolState value and a trackbar.

    Widget changes update the state through ``setter``; state changes are
    pushed to the widget with ``push``. The last synced value is
    remembered so the callback fired by a programmatic trackbar update
    does not update the state again.

    Attributes:
        name: Trackbar name
        getter: Reads the bound value from the state
        setter: Writes (and clamps) the bound value, returns the stored value
        set_widget: Moves the trackbar, e.g. HighGuiWindow.set_trackbar_pos
    """

    name: str
    getter: Callable[[], int]
    setter: Callable[[int], int]
    set_widget: Callable[[str, int], None]
    _synced: Optional[int] = field(default=None, init=False)

    def on_widget_change(self, value: int) -> None:
        """Trackbar callback."""
        if value == self._synced:
            return
        self._synced = value
        stored = self.setter(value)
        if stored != value:
            # Clamped by the state, move the widget back into range
            self.push()

    def push(self) -> None:
        """Sync the widget with the current state value."""
        value = self.getter()
        if value == self._synced:
            return
        self._synced = value
        self.set_widget(self.name, value)
