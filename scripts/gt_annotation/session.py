"""
Annotation Session Module

Interactive loop for one image: dispatches mouse and key events to the
zoom controller, mark engine and tool state, renders the composite view
every tick and ends with a navigation decision.

Controls:
    Left button (drag):   Mark as salient (white)
    Right button (drag):  Un-mark (black)
    Wheel:                Brush size +/- 1
    Shift + Wheel:        Blending +/- 5
    Ctrl + Wheel:         Zoom in/out around the cursor
    n / Enter:            Save and go to the next image
    p / Backspace:        Save and go to the previous image
    q / Esc:              Quit without saving the current image
    + / -:                Brush size +/- 5
    f / g:                Zoom in / out around the cursor
    G:                    Zoom out completely
    w / a / s / d:        Move the zoomed view up / left / down / right
    i:                    Toggle file name display
    z:                    Toggle reference label boxes
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence

import cv2
import numpy as np

from common.config_utils import AnnotatorConfig
from common.constants import (
    BLEND_TRACKBAR,
    BRUSH_WHEEL_STEP,
    KEY_NONE,
    KEY_ZOOM_IN_FACTOR,
    KEY_ZOOM_OUT_FACTOR,
    MAX_BRUSH_SIZE,
    MAX_OVERLAY,
    MIN_BRUSH_SIZE,
    MIN_OVERLAY,
    NEXT_KEYS,
    OVERLAY_WHEEL_STEP,
    PREVIOUS_KEYS,
    QUIT_KEYS,
    SIZE_TRACKBAR,
    WHEEL_ZOOM_IN_FACTOR,
    WHEEL_ZOOM_OUT_FACTOR,
)
from common.logger import get_logger

from .label_overlay import LabelBox
from .mark_engine import mark
from .renderer import render_composite
from .session_state import SessionState, ToolState, TrackbarBinding
from .viewport import PanDirection, Point
from .window import HighGuiWindow, wheel_delta

logger = get_logger(__name__)

WHEEL_EVENTS = (cv2.EVENT_MOUSEWHEEL, cv2.EVENT_MOUSEHWHEEL)

PAN_KEYS: Dict[int, PanDirection] = {
    ord("a"): PanDirection.LEFT,
    ord("w"): PanDirection.UP,
    ord("d"): PanDirection.RIGHT,
    ord("s"): PanDirection.DOWN,
}


class SessionDecision(Enum):
    """How an annotation session ended."""

    NEXT = "next"
    PREVIOUS = "previous"
    QUIT = "quit"

    @property
    def delta(self) -> int:
        """Index change for the batch driver."""
        return {"next": 1, "previous": -1, "quit": 0}[self.value]


def bind_tool_trackbars(window: HighGuiWindow, tool: ToolState) -> List[TrackbarBinding]:
    """
    Create the brush size and blending trackbars bound to the tool state.

    Args:
        window: Opened window to add the trackbars to
        tool: Tool state the trackbars edit

    Returns:
        Bindings to push state changes back to the widgets
    """
    size_binding = TrackbarBinding(
        name=SIZE_TRACKBAR,
        getter=lambda: tool.brush_half_size,
        setter=tool.set_brush,
        set_widget=window.set_trackbar_pos,
    )
    blend_binding = TrackbarBinding(
        name=BLEND_TRACKBAR,
        getter=lambda: tool.overlay_percent,
        setter=tool.set_overlay,
        set_widget=window.set_trackbar_pos,
    )

    window.create_trackbar(
        SIZE_TRACKBAR, tool.brush_half_size, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE,
        size_binding.on_widget_change,
    )
    window.create_trackbar(
        BLEND_TRACKBAR, tool.overlay_percent, MIN_OVERLAY, MAX_OVERLAY,
        blend_binding.on_widget_change,
    )

    # Widgets start in sync with the state
    size_binding.push()
    blend_binding.push()
    return [size_binding, blend_binding]


class AnnotationSession:
    """
    Interactive annotation of a single image.

    The mask is modified in place; saving is left to the caller.
    """

    def __init__(
        self,
        image: np.ndarray,
        mask: np.ndarray,
        state: SessionState,
        window: HighGuiWindow,
        bindings: Sequence[TrackbarBinding] = (),
        config: Optional[AnnotatorConfig] = None,
        filename: str = "",
        label_boxes: Sequence[LabelBox] = (),
    ):
        """
        Initialize annotation session.

        Args:
            image: BGR image to annotate
            mask: Three-channel GT mask of the same size
            state: Session state; its zoom controller must match the image
            window: Window to render into and receive events from
            bindings: Trackbar bindings to keep in sync with the tool state
            config: Annotator configuration
            filename: Image file name for the filename overlay
            label_boxes: Reference boxes for this image
        """
        self.image = image
        self.mask = mask
        self.state = state
        self.window = window
        self.bindings = list(bindings)
        self.config = config or AnnotatorConfig()
        self.filename = filename
        self.label_boxes = list(label_boxes)

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def _sync_trackbars(self) -> None:
        for binding in self.bindings:
            binding.push()

    def _mark(self, as_foreground: bool) -> None:
        zoom = self.state.zoom
        mark(
            self.mask,
            zoom.cursor,
            zoom.rect,
            zoom.viewport_size,
            self.state.tool.brush_half_size,
            as_foreground,
        )

    def handle_mouse(self, event: int, x: int, y: int, flags: int) -> None:
        """
        Mouse callback: record the cursor, paint, or handle the wheel.

        Wheel events do not move the cursor, their coordinates are
        unreliable on some platforms.
        """
        if event not in WHEEL_EVENTS:
            self.state.zoom.cursor = Point(x, y)

        if event == cv2.EVENT_LBUTTONDOWN or (
            event == cv2.EVENT_MOUSEMOVE and flags & cv2.EVENT_FLAG_LBUTTON
        ):
            self._mark(as_foreground=True)
        elif event == cv2.EVENT_RBUTTONDOWN or (
            event == cv2.EVENT_MOUSEMOVE and flags & cv2.EVENT_FLAG_RBUTTON
        ):
            self._mark(as_foreground=False)
        elif event in WHEEL_EVENTS:
            self._handle_wheel(flags)

    def _handle_wheel(self, flags: int) -> None:
        inwards = wheel_delta(flags) < 0
        tool = self.state.tool

        if flags & cv2.EVENT_FLAG_CTRLKEY:
            self.state.zoom.zoom_by(WHEEL_ZOOM_IN_FACTOR if inwards else WHEEL_ZOOM_OUT_FACTOR)
        elif flags & cv2.EVENT_FLAG_SHIFTKEY:
            tool.adjust_overlay(OVERLAY_WHEEL_STEP if inwards else -OVERLAY_WHEEL_STEP)
            self._sync_trackbars()
        else:
            tool.resize_brush(BRUSH_WHEEL_STEP if inwards else -BRUSH_WHEEL_STEP)
            self._sync_trackbars()

    def handle_key(self, key: int) -> Optional[SessionDecision]:
        """
        Apply a key command.

        Returns:
            A decision if the key ends the session, None otherwise
        """
        if key == KEY_NONE:
            return None

        tool = self.state.tool
        zoom = self.state.zoom

        if key in NEXT_KEYS:
            return SessionDecision.NEXT
        if key in PREVIOUS_KEYS:
            return SessionDecision.PREVIOUS
        if key in QUIT_KEYS:
            self.state.quit_requested = True
            return SessionDecision.QUIT

        if key == ord("+"):
            tool.resize_brush(self.config.brush_key_step)
            self._sync_trackbars()
        elif key == ord("-"):
            tool.resize_brush(-self.config.brush_key_step)
            self._sync_trackbars()
        elif key == ord("i"):
            tool.toggle_filename()
        elif key == ord("z"):
            tool.toggle_labels()
        elif key == ord("f"):
            # Do not zoom if the cursor is outside the image
            if zoom.cursor_inside():
                zoom.zoom_by(KEY_ZOOM_IN_FACTOR)
        elif key == ord("g"):
            if zoom.cursor_inside():
                zoom.zoom_by(KEY_ZOOM_OUT_FACTOR)
        elif key == ord("G"):
            zoom.reset()
        elif key in PAN_KEYS:
            zoom.pan(PAN_KEYS[key], self.config.pan_fraction)

        return None

    # -------------------------------------------------------------------------
    # Display loop
    # -------------------------------------------------------------------------

    def render(self) -> np.ndarray:
        return render_composite(
            self.image,
            self.mask,
            self.state,
            filename=self.filename,
            label_boxes=self.label_boxes,
            label_color=self.config.label_box_color,
            cursor_color=self.config.cursor_color,
        )

    def run(self) -> SessionDecision:
        """
        Run the display loop until the operator navigates or quits.

        Closing the window counts as quitting.

        Returns:
            The session decision
        """
        self.window.set_mouse_callback(self.handle_mouse)
        self.window.show(self.render())

        while True:
            key = self.window.poll_key(self.config.poll_interval_ms)

            decision = self.handle_key(key)
            if decision is not None:
                logger.debug(f"Session ended: {decision.value}")
                return decision

            if not self.window.is_open():
                logger.info("Window closed, quitting")
                self.state.quit_requested = True
                return SessionDecision.QUIT

            self.window.show(self.render())
