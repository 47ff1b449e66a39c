"""
Defect GT Annotator - Common Constants

Shared constants used by the annotation session, renderer and batch driver.
Centralizes values that the key handlers, trackbars and config defaults
need to agree on.
"""

from typing import Tuple

# =============================================================================
# Output Layout
# =============================================================================
DEFAULT_OUTPUT_DIR: str = "GT"
DEFAULT_LEDGER_NAME: str = ".annotated.txt"
DEFAULT_LABEL_FILE: str = "manlabel.txt"

# Identifier = last six characters of the file stem (e.g. "scan_004711.png" -> "004711")
DEFAULT_ID_PATTERN: str = r"(?P<id>.{6})$"

# Label rows with this defect type only contribute to the anchor point
SOUND_DEFECT_TYPE: str = "sound"


# =============================================================================
# Brush / Overlay Limits
# =============================================================================
MIN_BRUSH_SIZE: int = 1
MAX_BRUSH_SIZE: int = 50
DEFAULT_BRUSH_SIZE: int = 5
BRUSH_KEY_STEP: int = 5  # "+" / "-" keys
BRUSH_WHEEL_STEP: int = 1  # plain mouse wheel

MIN_OVERLAY: int = 0
MAX_OVERLAY: int = 100
DEFAULT_OVERLAY: int = 35
OVERLAY_WHEEL_STEP: int = 5  # Shift + mouse wheel


# =============================================================================
# Zoom / Pan
# =============================================================================
KEY_ZOOM_IN_FACTOR: float = 0.8
KEY_ZOOM_OUT_FACTOR: float = 1.0 / 0.8
WHEEL_ZOOM_IN_FACTOR: float = 0.95
WHEEL_ZOOM_OUT_FACTOR: float = 1.0 / 0.95
DEFAULT_PAN_FRACTION: float = 0.2


# =============================================================================
# Window / Event Loop
# =============================================================================
DEFAULT_WINDOW_NAME: str = "AnnotationTool"
DEFAULT_WINDOW_SIZE: Tuple[int, int] = (1600, 900)  # (width, height)
DEFAULT_POLL_FPS: int = 60
SIZE_TRACKBAR: str = "Size"
BLEND_TRACKBAR: str = "Blending"


# =============================================================================
# Visualization Defaults
# =============================================================================
# Colors are BGR (OpenCV)
FOREGROUND_COLOR: Tuple[int, int, int] = (255, 255, 255)
BACKGROUND_COLOR: Tuple[int, int, int] = (0, 0, 0)
DEFAULT_LABEL_BOX_COLOR: Tuple[int, int, int] = (255, 0, 0)  # Blue
DEFAULT_CURSOR_COLOR: Tuple[int, int, int] = (0, 0, 0)
DEFAULT_LABEL_BOX_THICKNESS: int = 2
DEFAULT_FONT_SCALE: float = 0.6
DEFAULT_FONT_THICKNESS: int = 2


# =============================================================================
# Key Codes
# =============================================================================
KEY_NONE: int = -1
KEY_BACKSPACE: int = 8
KEY_LINE_FEED: int = 10
KEY_CARRIAGE_RETURN: int = 13
KEY_ESCAPE: int = 27

NEXT_KEYS: Tuple[int, ...] = (ord("n"), KEY_LINE_FEED, KEY_CARRIAGE_RETURN)
PREVIOUS_KEYS: Tuple[int, ...] = (ord("p"), KEY_BACKSPACE)
QUIT_KEYS: Tuple[int, ...] = (ord("q"), KEY_ESCAPE)
