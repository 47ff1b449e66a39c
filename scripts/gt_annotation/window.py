"""
HighGUI window adapter.

Thin wrapper around the OpenCV highgui calls used by the annotation
session, so the session logic can be driven without a display.
"""

from typing import Callable, Tuple

import cv2
import numpy as np

from common.constants import DEFAULT_WINDOW_NAME, DEFAULT_WINDOW_SIZE, KEY_NONE

MouseCallback = Callable[[int, int, int, int], None]
TrackbarCallback = Callable[[int], None]


def wheel_delta(flags: int) -> int:
    """
    Extract the signed wheel delta from mouse event flags.

    OpenCV stores the delta in the high 16 bits of ``flags``
    (see ``cv2.getMouseWheelDelta``).
    """
    delta = (flags >> 16) & 0xFFFF
    if delta >= 0x8000:
        delta -= 0x10000
    return delta


class HighGuiWindow:
    """Resizable OpenCV window with mouse callback and trackbars."""

    def __init__(
        self,
        name: str = DEFAULT_WINDOW_NAME,
        size: Tuple[int, int] = DEFAULT_WINDOW_SIZE,
    ):
        self.name = name
        self.size = size
        self._created = False

    def open(self) -> None:
        """Create the window (idempotent) and set its initial size."""
        if self._created:
            return
        cv2.namedWindow(
            self.name,
            cv2.WINDOW_NORMAL | cv2.WINDOW_KEEPRATIO | cv2.WINDOW_GUI_EXPANDED,
        )
        cv2.resizeWindow(self.name, self.size[0], self.size[1])
        self._created = True

    def set_mouse_callback(self, callback: MouseCallback) -> None:
        """Route mouse events as callback(event, x, y, flags)."""
        cv2.setMouseCallback(
            self.name,
            lambda event, x, y, flags, _param: callback(event, x, y, flags),
        )

    def create_trackbar(
        self,
        name: str,
        value: int,
        min_value: int,
        max_value: int,
        callback: TrackbarCallback,
    ) -> None:
        cv2.createTrackbar(name, self.name, value, max_value, callback)
        cv2.setTrackbarMin(name, self.name, min_value)

    def set_trackbar_pos(self, name: str, value: int) -> None:
        cv2.setTrackbarPos(name, self.name, value)

    def show(self, frame: np.ndarray) -> None:
        cv2.imshow(self.name, frame)

    def poll_key(self, delay_ms: int) -> int:
        """
        Wait for a key press and dispatch pending GUI events.

        Returns:
            Key code, or -1 when no key was pressed
        """
        key = cv2.waitKey(delay_ms)
        if key == KEY_NONE:
            return KEY_NONE
        return key & 0xFF

    def is_open(self) -> bool:
        """Check the window has not been closed by the user."""
        if not self._created:
            return False
        return cv2.getWindowProperty(self.name, cv2.WND_PROP_VISIBLE) >= 1

    def close(self) -> None:
        if self._created:
            cv2.destroyWindow(self.name)
            self._created = False
