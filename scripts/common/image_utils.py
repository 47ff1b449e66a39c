"""
Defect GT Annotator - Image Utilities

Image and mask file I/O plus the small drawing helpers shared by the
renderer.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import cv2
import numpy as np

from .constants import (
    BACKGROUND_COLOR,
    DEFAULT_FONT_SCALE,
    DEFAULT_FONT_THICKNESS,
    DEFAULT_LABEL_BOX_COLOR,
    DEFAULT_LABEL_BOX_THICKNESS,
)
from .exceptions import PathError


def draw_box(
    image: np.ndarray,
    box: Tuple[int, int, int, int],
    color: Tuple[int, int, int] = DEFAULT_LABEL_BOX_COLOR,
    thickness: int = DEFAULT_LABEL_BOX_THICKNESS,
) -> np.ndarray:
    """
    Draw a rectangle outline on an image.

    Args:
        image: Image to draw on (modified in place)
        box: (x, y, width, height) in pixel coordinates
        color: BGR color tuple
        thickness: Line thickness

    Returns:
        Image with the box drawn (same as input, modified in place)
    """
    x, y, w, h = box
    cv2.rectangle(image, (x, y), (x + w, y + h), color, thickness)
    return image


def draw_text(
    image: np.ndarray,
    text: str,
    origin: Tuple[int, int] = (10, 30),
    color: Tuple[int, int, int] = (255, 255, 255),
    font_scale: float = DEFAULT_FONT_SCALE,
    font_thickness: int = DEFAULT_FONT_THICKNESS,
) -> np.ndarray:
    """
    Draw text with a dark outline so it stays readable on any background.

    Args:
        image: Image to draw on (modified in place)
        text: Text to draw
        origin: Bottom-left corner of the text
        color: BGR text color
        font_scale: Font scale
        font_thickness: Font thickness

    Returns:
        Image with text drawn (same as input, modified in place)
    """
    cv2.putText(
        image,
        text,
        origin,
        cv2.FONT_HERSHEY_SIMPLEX,
        font_scale,
        BACKGROUND_COLOR,
        font_thickness + 2,
        cv2.LINE_AA,
    )
    cv2.putText(
        image,
        text,
        origin,
        cv2.FONT_HERSHEY_SIMPLEX,
        font_scale,
        color,
        font_thickness,
        cv2.LINE_AA,
    )
    return image


def list_image_files(directory: Union[str, Path]) -> List[Path]:
    """
    List the files of a directory in lexicographic order.

    Sub-directories are never returned.

    Args:
        directory: Directory to search, every file is kept and decoding
            decides what is an image

    Returns:
        Sorted list of file paths
    """
    directory = Path(directory)

    if not directory.is_dir():
        return []

    files = [f for f in directory.iterdir() if not f.is_dir()]

    return sorted(files, key=lambda p: p.name)


def load_image(path: Union[str, Path]) -> Optional[np.ndarray]:
    """
    Load an image, None when the file cannot be decoded.

    Args:
        path: Path to image file

    Returns:
        BGR image array or None if loading failed
    """
    return cv2.imread(str(path))


def create_blank_mask(shape: Tuple[int, ...]) -> np.ndarray:
    """Create an all-background three-channel mask for an image shape."""
    height, width = shape[:2]
    return np.zeros((height, width, 3), dtype=np.uint8)


def load_mask(
    path: Union[str, Path],
    shape: Tuple[int, ...],
) -> Optional[np.ndarray]:
    """
    Load a previously saved GT mask as a three-channel image.

    Args:
        path: Path to the mask file
        shape: Shape of the image the mask belongs to

    Returns:
        Mask array, or None if missing, undecodable or of a different size
    """
    path = Path(path)
    if not path.is_file():
        return None

    mask = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if mask is None or mask.shape[:2] != tuple(shape[:2]):
        return None

    return mask


def save_mask(
    mask: np.ndarray,
    path: Union[str, Path],
) -> Path:
    """
    Save a GT mask as a single-channel grayscale image.

    Args:
        mask: Three-channel (BGR) or single-channel mask
        path: Output path

    Returns:
        The written path

    Raises:
        PathError: If OpenCV could not write the file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if mask.ndim == 3:
        mask = cv2.cvtColor(mask, cv2.COLOR_BGR2GRAY)

    params = []
    if path.suffix.lower() in [".jpg", ".jpeg"]:
        # Keep the mask as binary as JPEG allows
        params = [cv2.IMWRITE_JPEG_QUALITY, 100]

    if not cv2.imwrite(str(path), mask, params):
        raise PathError("Failed to write mask", path=str(path))

    return path
