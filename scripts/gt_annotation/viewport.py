"""
Viewport Module

Coordinate transformation between the zoomed viewport and full-resolution
image space, and the zoom rectangle that defines the visible crop.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from common.constants import DEFAULT_PAN_FRACTION


@dataclass(frozen=True)
class Point:
    """Pointer location in viewport pixels."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Size:
    """Width/height pair in pixels."""

    width: int
    height: int

    @classmethod
    def from_shape(cls, shape: Tuple[int, ...]) -> "Size":
        """Build from a numpy image shape (rows, cols, ...)."""
        return cls(width=int(shape[1]), height=int(shape[0]))


@dataclass(frozen=True)
class ZoomRect:
    """
    Visible crop of the image, in image pixels.

    Attributes:
        x: Left edge
        y: Top edge
        width: Crop width (>= 1)
        height: Crop height (>= 1)
    """

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def full(cls, image_size: Size) -> "ZoomRect":
        """Rectangle covering the whole image."""
        return cls(0, 0, image_size.width, image_size.height)

    def is_within(self, image_size: Size) -> bool:
        """Check the rectangle lies inside the image bounds."""
        return (
            0 <= self.x
            and 0 <= self.y
            and 1 <= self.width <= image_size.width
            and 1 <= self.height <= image_size.height
            and self.x + self.width <= image_size.width
            and self.y + self.height <= image_size.height
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


class PanDirection(Enum):
    """Direction of a discrete pan command."""

    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


def to_image_space(
    cursor: Point,
    zoom_rect: ZoomRect,
    viewport_size: Size,
) -> Tuple[float, float]:
    """
    Convert a viewport cursor position to image coordinates.

    No clamping is applied; points outside the zoom rectangle map
    outside it.

    Args:
        cursor: Cursor position in viewport pixels
        zoom_rect: Currently visible crop of the image
        viewport_size: Size of the display region the crop is scaled to

    Returns:
        Image coordinates (x, y) as floats
    """
    x = zoom_rect.x + cursor.x * (zoom_rect.width / viewport_size.width)
    y = zoom_rect.y + cursor.y * (zoom_rect.height / viewport_size.height)
    return (x, y)


class ZoomController:
    """
    Owns the zoom rectangle of one annotation session.

    The rectangle always stays inside the image. Zooming keeps the
    image point under the cursor in place unless the rectangle has to
    be clamped at an image border, in which case the view jumps.
    """

    def __init__(
        self,
        image_size: Size,
        viewport_size: Optional[Size] = None,
        cursor: Optional[Point] = None,
    ):
        """
        Initialize zoom controller with a full-image rectangle.

        Args:
            image_size: Size of the annotated image
            viewport_size: Size of the display region (defaults to the
                image size, the crop is upscaled to the full image area)
            cursor: Initial pointer location (the last known position when
                moving between images)
        """
        self.image_size = image_size
        self.viewport_size = viewport_size or image_size
        self.rect = ZoomRect.full(image_size)
        self.cursor = cursor or Point(0, 0)

    def cursor_in_image(self) -> Tuple[float, float]:
        """Image point currently under the cursor."""
        return to_image_space(self.cursor, self.rect, self.viewport_size)

    def cursor_inside(self) -> bool:
        """Check the cursor lies within the display region."""
        return (
            0 <= self.cursor.x <= self.viewport_size.width
            and 0 <= self.cursor.y <= self.viewport_size.height
        )

    def zoom_by(self, factor: float) -> ZoomRect:
        """
        Scale the zoom rectangle around the cursor.

        Args:
            factor: < 1 zooms in, > 1 zooms out

        Returns:
            The new zoom rectangle
        """
        anchor_x, anchor_y = self.cursor_in_image()

        # These ratios must stay the same for the cursor to stay on the same image point
        width_ratio = self.cursor.x / self.viewport_size.width
        height_ratio = self.cursor.y / self.viewport_size.height

        cols, rows = self.image_size.width, self.image_size.height
        new_width = max(1, min(cols, round_half_up(self.rect.width * factor)))
        new_height = max(1, min(rows, round_half_up(self.rect.height * factor)))

        new_x = max(0, round_half_up(anchor_x - width_ratio * new_width))
        # Only reachable when zooming out, causes the view to jump
        new_x = min(new_x, cols - new_width)

        new_y = max(0, round_half_up(anchor_y - height_ratio * new_height))
        new_y = min(new_y, rows - new_height)

        self.rect = ZoomRect(new_x, new_y, new_width, new_height)
        return self.rect

    def reset(self) -> ZoomRect:
        """Zoom out completely."""
        self.rect = ZoomRect.full(self.image_size)
        return self.rect

    def pan(
        self,
        direction: PanDirection,
        fraction: float = DEFAULT_PAN_FRACTION,
    ) -> ZoomRect:
        """
        Move the zoom rectangle relative to its own size.

        Args:
            direction: Direction to move the visible crop
            fraction: Fraction of the current width/height to move by

        Returns:
            The new zoom rectangle
        """
        x, y, width, height = self.rect.as_tuple()
        max_x = self.image_size.width - width
        max_y = self.image_size.height - height

        if direction is PanDirection.LEFT:
            x = max(0, x - int(fraction * width))
        elif direction is PanDirection.RIGHT:
            x = min(max_x, x + int(fraction * width))
        elif direction is PanDirection.UP:
            y = max(0, y - int(fraction * height))
        elif direction is PanDirection.DOWN:
            y = min(max_y, y + int(fraction * height))

        self.rect = ZoomRect(x, y, width, height)
        return self.rect
