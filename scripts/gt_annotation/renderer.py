"""
Composite rendering of the annotation view.

Blends the GT mask over the image, draws reference boxes, crops to the
zoom rectangle, scales the crop to the display region and adds the
brush footprint and optional file name.
"""

from typing import Iterable, Tuple

import cv2
import numpy as np

from common.constants import DEFAULT_CURSOR_COLOR, DEFAULT_LABEL_BOX_COLOR
from common.image_utils import draw_box, draw_text

from .label_overlay import LabelBox
from .session_state import SessionState


def blend_mask(image: np.ndarray, mask: np.ndarray, overlay_percent: int) -> np.ndarray:
    """
    Add the weighted mask to the image.

    ``image * 1.0 + mask * overlay / 100``, saturated per channel.
    """
    return cv2.addWeighted(image, 1.0, mask, overlay_percent / 100.0, 0.0)


def cursor_box(
    cursor: Tuple[int, int],
    brush_half_size: int,
    scale: Tuple[float, float],
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Corners of the brush footprint outline in display pixels.

    Args:
        cursor: Cursor position in display pixels
        brush_half_size: Brush half-size in image pixels
        scale: Display pixels per image pixel (x, y)

    Returns:
        ((x1, y1), (x2, y2)) with a one pixel margin around the footprint
    """
    half_x = brush_half_size * scale[0]
    half_y = brush_half_size * scale[1]
    top_left = (int(cursor[0] - half_x) - 1, int(cursor[1] - half_y) - 1)
    bottom_right = (int(cursor[0] + half_x) + 1, int(cursor[1] + half_y) + 1)
    return top_left, bottom_right


def render_composite(
    image: np.ndarray,
    mask: np.ndarray,
    state: SessionState,
    filename: str = "",
    label_boxes: Iterable[LabelBox] = (),
    label_color: Tuple[int, int, int] = DEFAULT_LABEL_BOX_COLOR,
    cursor_color: Tuple[int, int, int] = DEFAULT_CURSOR_COLOR,
) -> np.ndarray:
    """
    Render the frame shown to the operator.

    Args:
        image: BGR image
        mask: Three-channel GT mask
        state: Session state (tool settings, zoom rectangle, cursor)
        filename: File name to draw if the filename overlay is enabled
        label_boxes: Reference boxes in image pixels
        label_color: BGR color of reference boxes
        cursor_color: BGR color of the brush footprint

    Returns:
        New frame of the display region's size
    """
    tool = state.tool
    zoom = state.zoom

    blend = blend_mask(image, mask, tool.overlay_percent)

    if tool.show_labels:
        for box in label_boxes:
            draw_box(blend, box.as_tuple(), color=label_color)

    x, y, w, h = zoom.rect.as_tuple()
    viewport = zoom.viewport_size
    frame = cv2.resize(
        blend[y:y + h, x:x + w],
        (viewport.width, viewport.height),
        interpolation=cv2.INTER_NEAREST,
    )

    scale = (viewport.width / w, viewport.height / h)
    top_left, bottom_right = cursor_box(
        (zoom.cursor.x, zoom.cursor.y), tool.brush_half_size, scale
    )
    cv2.rectangle(frame, top_left, bottom_right, cursor_color, 1)

    if tool.show_filename and filename:
        draw_text(frame, filename)

    return frame
