"""
GT Mask Annotation - Modular Components

Viewport math, brush marking, session loop and batch driver of the
interactive ground-truth mask annotator.
"""

from .viewport import PanDirection, Point, Size, ZoomController, ZoomRect, to_image_space
from .mark_engine import mark
from .session_state import SessionState, ToolState, TrackbarBinding
from .session import AnnotationSession, SessionDecision
from .ledger import AnnotatedLedger, ImageIdentifier
from .label_overlay import LabelBox, load_label_boxes
from .batch_driver import BatchAnnotator, BatchResult

__all__ = [
    "PanDirection",
    "Point",
    "Size",
    "ZoomController",
    "ZoomRect",
    "to_image_space",
    "mark",
    "SessionState",
    "ToolState",
    "TrackbarBinding",
    "AnnotationSession",
    "SessionDecision",
    "AnnotatedLedger",
    "ImageIdentifier",
    "LabelBox",
    "load_label_boxes",
    "BatchAnnotator",
    "BatchResult",
]
