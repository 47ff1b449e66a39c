"""
Batch Driver Module

Walks the image directory, decides which images to open, runs one
annotation session per image and persists GT masks and the ledger.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

import numpy as np

from common.config_utils import AnnotatorConfig
from common.image_utils import create_blank_mask, list_image_files, load_image, load_mask, save_mask
from common.logger import get_logger

from .label_overlay import LabelBox
from .ledger import AnnotatedLedger, ImageIdentifier
from .session import AnnotationSession, SessionDecision, bind_tool_trackbars
from .session_state import SessionState, ToolState
from .viewport import Point, Size, ZoomController
from .window import HighGuiWindow

logger = get_logger(__name__)

SessionRunner = Callable[[AnnotationSession], SessionDecision]


@dataclass
class BatchResult:
    """
    Outcome of one annotation run.

    Attributes:
        total_images: Files found in the image directory
        opened: Images shown to the operator (revisits count again)
        saved: Mask files written
        skipped: Images passed over (already annotated or before skip_to)
        ledger_added: Identifiers newly appended to the ledger
        failed_paths: Files that could not be decoded, each listed once
        quit: Whether the operator aborted the batch
    """

    total_images: int = 0
    opened: int = 0
    saved: int = 0
    skipped: int = 0
    ledger_added: int = 0
    failed_paths: List[str] = field(default_factory=list)
    quit: bool = False

    @property
    def failed(self) -> int:
        return len(self.failed_paths)


class BatchAnnotator:
    """
    Drives annotation over a directory of images.

    Resume rules:
    - With ``skip_to``, images are passed over unopened until the one whose
      identifier equals ``skip_to``; from there on every image is opened.
    - Without ``skip_to``, images already complete when the batch started
      are skipped while moving forward. An image is complete if its
      identifier is in the ledger or its output mask exists.
    - Going back with "previous" always opens the target image.
    """

    def __init__(
        self,
        image_dir: Union[str, Path],
        output_dir: Union[str, Path],
        config: Optional[AnnotatorConfig] = None,
        label_boxes: Optional[Dict[str, List[LabelBox]]] = None,
        window: Optional[HighGuiWindow] = None,
        session_runner: Optional[SessionRunner] = None,
    ):
        """
        Initialize batch annotator.

        Args:
            image_dir: Directory containing images to annotate
            output_dir: Directory for GT masks and the ledger
            config: Annotator configuration
            label_boxes: Reference boxes keyed by image identifier
            window: Window to annotate in (created from config if None)
            session_runner: Runs a session and returns its decision,
                defaults to AnnotationSession.run
        """
        self.image_dir = Path(image_dir)
        self.output_dir = Path(output_dir)
        self.config = config or AnnotatorConfig()
        self.label_boxes = label_boxes or {}
        self.window = window or HighGuiWindow(self.config.window_name, self.config.window_size)
        self.session_runner = session_runner or AnnotationSession.run

        self.identify = ImageIdentifier(self.config.id_pattern)
        self.ledger = AnnotatedLedger.in_dir(self.output_dir, self.config.ledger_name)
        self.tool = ToolState(
            brush_half_size=self.config.initial_brush_size,
            overlay_percent=self.config.initial_overlay,
        )
        self.image_list: List[Path] = []
        self.cursor = Point(0, 0)
        self._bindings = None

    def load_images(self) -> int:
        """
        List the files of the image directory.

        Returns:
            Number of files found
        """
        self.image_list = list_image_files(self.image_dir)
        return len(self.image_list)

    def output_path(self, image_path: Path) -> Path:
        """GT mask path for an input image."""
        return self.output_dir / image_path.name

    def is_complete(self, image_path: Path) -> bool:
        """Check the ledger, falling back to the mask file on disk."""
        return self.identify(image_path) in self.ledger or self.output_path(image_path).exists()

    def _repair_ledger(self, image_path: Path) -> None:
        # A mask without a ledger entry is left behind by an interrupted save
        identifier = self.identify(image_path)
        if identifier not in self.ledger and self.output_path(image_path).exists():
            self.ledger.add(identifier)
            logger.info(f"Ledger repaired: {identifier} has a mask but no entry")

    def _load_mask(self, image_path: Path, image: np.ndarray) -> np.ndarray:
        output_file = self.output_path(image_path)
        if output_file.exists():
            mask = load_mask(output_file, image.shape)
            if mask is not None:
                logger.info(f"Loaded GT: {output_file}")
                return mask
            logger.warning(f"Ignoring unreadable or mismatched GT: {output_file}")
        return create_blank_mask(image.shape)

    def _ensure_window(self) -> None:
        if self._bindings is None:
            self.window.open()
            self._bindings = bind_tool_trackbars(self.window, self.tool)

    def _annotate(self, image_path: Path, image: np.ndarray, mask: np.ndarray) -> SessionDecision:
        self._ensure_window()
        identifier = self.identify(image_path)
        state = SessionState(
            tool=self.tool,
            zoom=ZoomController(Size.from_shape(image.shape), cursor=self.cursor),
        )
        session = AnnotationSession(
            image=image,
            mask=mask,
            state=state,
            window=self.window,
            bindings=self._bindings,
            config=self.config,
            filename=image_path.name,
            label_boxes=self.label_boxes.get(identifier, ()),
        )
        decision = self.session_runner(session)
        self.cursor = state.zoom.cursor
        if state.quit_requested:
            decision = SessionDecision.QUIT
        return decision

    def _save(self, image_path: Path, mask: np.ndarray, result: BatchResult) -> None:
        output_file = save_mask(mask, self.output_path(image_path))
        result.saved += 1
        logger.info(f"Saved GT: {output_file}")

        if self.ledger.add(self.identify(image_path)):
            result.ledger_added += 1

    def run(self, start_index: int = 0, skip_to: str = "") -> BatchResult:
        """
        Annotate images starting at ``start_index``.

        Args:
            start_index: Index of the first image to consider
            skip_to: Identifier of the image to resume at, "" to disable

        Returns:
            BatchResult with statistics
        """
        self.load_images()
        total = len(self.image_list)
        result = BatchResult(total_images=total)

        # Completion snapshot at batch start; masks saved during this run do not count
        complete = {path for path in self.image_list if self.is_complete(path)}
        for path in complete:
            self._repair_ledger(path)

        reached = not skip_to
        index = max(0, start_index)
        direction = 1

        try:
            while index < total:
                image_path = self.image_list[index]
                identifier = self.identify(image_path)

                if not reached:
                    if identifier != skip_to:
                        result.skipped += 1
                        index += 1
                        continue
                    reached = True
                elif not skip_to and direction > 0 and image_path in complete:
                    logger.debug(f"Skipping annotated image: {image_path.name}")
                    result.skipped += 1
                    index += 1
                    continue

                image = load_image(image_path)
                logger.info(f"{index}/{total} - Loaded Image: {image_path}")
                if image is None:
                    logger.warning(f"Could not load image {image_path}!")
                    if str(image_path) not in result.failed_paths:
                        result.failed_paths.append(str(image_path))
                    direction = 1
                    index += 1
                    continue

                mask = self._load_mask(image_path, image)
                result.opened += 1

                decision = self._annotate(image_path, image, mask)
                if decision is SessionDecision.QUIT:
                    result.quit = True
                    break

                self._save(image_path, mask, result)

                direction = decision.delta
                index = max(0, index + decision.delta)
        finally:
            if self._bindings is not None:
                self.window.close()
                self._bindings = None

        if not reached:
            logger.warning(f"Image '{skip_to}' to skip to was not found")

        return result

    def summary_rows(self, result: BatchResult) -> Sequence[Sequence]:
        """Rows for the end-of-run summary table."""
        return [
            ["Images", result.total_images],
            ["Opened", result.opened],
            ["Saved", result.saved],
            ["Skipped", result.skipped],
            ["Unreadable", result.failed],
            ["Ledger entries", len(self.ledger)],
            ["Quit", "yes" if result.quit else "no"],
        ]
