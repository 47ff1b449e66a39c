"""
Mark Engine Module

Paints square brush stamps onto the GT mask.
"""

from typing import Tuple

import cv2
import numpy as np

from common.constants import BACKGROUND_COLOR, FOREGROUND_COLOR

from .viewport import Point, Size, ZoomRect, round_half_up, to_image_space


def brush_square(
    center: Tuple[float, float],
    half_size: int,
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Compute the inclusive corners of a brush stamp.

    Args:
        center: Brush center in image coordinates
        half_size: Brush half-size in image pixels

    Returns:
        ((x1, y1), (x2, y2)) top-left and bottom-right corners
    """
    cx = round_half_up(center[0])
    cy = round_half_up(center[1])
    return (cx - half_size, cy - half_size), (cx + half_size, cy + half_size)


def mark(
    mask: np.ndarray,
    cursor: Point,
    zoom_rect: ZoomRect,
    viewport_size: Size,
    brush_half_size: int,
    as_foreground: bool,
) -> None:
    """
    Stamp the brush onto the mask at the cursor position.

    The mask is modified in place. Stamps reaching past the image
    border are clipped by OpenCV.

    Args:
        mask: Three-channel GT mask
        cursor: Cursor position in viewport pixels
        zoom_rect: Currently visible crop of the image
        viewport_size: Size of the display region
        brush_half_size: Brush half-size in image pixels
        as_foreground: Paint white (salient) if True, black otherwise
    """
    color = FOREGROUND_COLOR if as_foreground else BACKGROUND_COLOR
    center = to_image_space(cursor, zoom_rect, viewport_size)
    top_left, bottom_right = brush_square(center, brush_half_size)
    cv2.rectangle(mask, top_left, bottom_right, color, cv2.FILLED)
