"""
Label Overlay Module

Reads the reference defect labels (``manlabel.txt``) that are drawn on
top of the blend for orientation only.

Each row is ``filename yMin xMin yMax xMax defectType``. The annotated
images are crops of the labelled originals, so every box of a file is
shifted by that file's anchor point: the component-wise minimum of
(xMin, yMin) over all its rows, ``sound`` rows included. ``sound`` rows
do not produce boxes themselves.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from common.constants import SOUND_DEFECT_TYPE
from common.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LabelBox:
    """Reference box in image pixels."""

    x: int
    y: int
    width: int
    height: int
    defect_type: str = ""

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def shifted(self, dx: int, dy: int) -> "LabelBox":
        return LabelBox(self.x - dx, self.y - dy, self.width, self.height, self.defect_type)


def parse_label_lines(lines) -> Dict[str, List[LabelBox]]:
    """
    Parse label rows into anchor-adjusted boxes per file name.

    Args:
        lines: Iterable of text rows

    Returns:
        Mapping of label file name to its boxes
    """
    anchors: Dict[str, Tuple[int, int]] = {}
    raw_boxes: Dict[str, List[LabelBox]] = {}

    for line_no, line in enumerate(lines, 1):
        parts = line.split()
        if not parts:
            continue
        if len(parts) != 6:
            logger.warning(f"Label line {line_no}: expected 6 values, got {len(parts)}")
            continue

        filename, defect_type = parts[0], parts[5]
        try:
            y_min, x_min, y_max, x_max = (int(v) for v in parts[1:5])
        except ValueError:
            logger.warning(f"Label line {line_no}: invalid coordinates {parts[1:5]}")
            continue

        anchor_x, anchor_y = anchors.get(filename, (x_min, y_min))
        anchors[filename] = (min(anchor_x, x_min), min(anchor_y, y_min))

        if defect_type == SOUND_DEFECT_TYPE:
            continue

        raw_boxes.setdefault(filename, []).append(
            LabelBox(x_min, y_min, x_max - x_min, y_max - y_min, defect_type)
        )

    return {
        filename: [box.shifted(*anchors[filename]) for box in boxes]
        for filename, boxes in raw_boxes.items()
    }


def load_label_boxes(
    label_file: Optional[Union[str, Path]],
    identify: Optional[Callable[[str], str]] = None,
) -> Dict[str, List[LabelBox]]:
    """
    Load reference boxes from a label file.

    Args:
        label_file: Path to the label file; a missing file yields no boxes
        identify: Maps the label file name column to an image identifier
            (e.g. ImageIdentifier); None keeps the names as written

    Returns:
        Mapping of image identifier (or label file name) to its boxes
    """
    if label_file is None:
        return {}

    label_file = Path(label_file)
    if not label_file.is_file():
        logger.debug(f"No label file at {label_file}")
        return {}

    with open(label_file, "r", encoding="utf-8") as f:
        label_map = parse_label_lines(f)

    if identify is not None:
        by_id: Dict[str, List[LabelBox]] = {}
        for filename, boxes in label_map.items():
            by_id.setdefault(identify(filename), []).extend(boxes)
        label_map = by_id

    logger.info(
        f"Loaded {sum(len(b) for b in label_map.values())} label boxes "
        f"for {len(label_map)} files from {label_file}"
    )
    return label_map
