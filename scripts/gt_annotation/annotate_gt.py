#!/usr/bin/env python3
"""
GT Mask Annotation Tool

An OpenCV-based GUI to paint binary ground-truth masks over every image
in a directory. Masks are written to the output directory under the
image's file name; an ``.annotated.txt`` ledger records finished images
so a later run resumes where the previous one stopped.

Usage:
    python annotate_gt.py images/ -o GT
    python annotate_gt.py images/ --skip_to 004711
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, init as colorama_init
from tabulate import tabulate

# Allow running as a plain script from the scripts/ tree
_scripts_dir = Path(__file__).resolve().parent.parent
if str(_scripts_dir) not in sys.path:
    sys.path.insert(0, str(_scripts_dir))

from common.config_utils import load_annotator_config
from common.constants import DEFAULT_LABEL_FILE, DEFAULT_OUTPUT_DIR
from common.exceptions import ValidationError
from common.logger import add_file_handler, get_logger, set_log_level
from common.validation import prepare_output_dir, validate_image_dir, validate_label_file
from gt_annotation.batch_driver import BatchAnnotator
from gt_annotation.label_overlay import load_label_boxes
from gt_annotation.ledger import ImageIdentifier

logger = get_logger(__name__)

CONTROLS = """
Controls:
  Left button:    Mark as salient (drag to paint)
  Right button:   Un-mark (drag to erase)
  Wheel:          Brush size +/- 1
  Shift + Wheel:  Blending +/- 5
  Ctrl + Wheel:   Zoom in/out
  n / Enter:      Save and go to next image
  p / Backspace:  Save and go to previous image
  q / Esc:        Quit without saving the current image
  + / -:          Brush size +/- 5
  f / g / G:      Zoom in / out / reset
  w / a / s / d:  Move zoomed view
  i:              Toggle file name
  z:              Toggle reference label boxes
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GUI to annotate images from within a specified directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=CONTROLS,
        add_help=False,
    )

    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="produce help message",
    )
    parser.add_argument(
        "image_dir",
        nargs="?",
        help="set the directory of images to be annotated",
    )
    parser.add_argument(
        "--output_dir",
        "-o",
        default=DEFAULT_OUTPUT_DIR,
        help=f"set the directory where the annotated images will be stored (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--start_index",
        type=int,
        default=0,
        help="set the start index (default: 0)",
    )
    parser.add_argument(
        "--skip_to",
        default="",
        help="set the identifier of the image to which it should be skipped",
    )
    parser.add_argument(
        "--label_file",
        default=DEFAULT_LABEL_FILE,
        help=f"reference defect labels to display (default: {DEFAULT_LABEL_FILE})",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file overriding annotator settings",
    )
    parser.add_argument(
        "--log_file",
        default=None,
        help="also write the log to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="enable debug logging",
    )

    return parser


def _error(message: str) -> None:
    print(f"{Fore.RED}Error! {message}{Style.RESET_ALL}")


def main(argv: Optional[List[str]] = None) -> int:
    colorama_init()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        return 1

    image_check = validate_image_dir(args.image_dir)
    if not image_check.is_valid:
        image_check.print_all()
        if not args.image_dir:
            parser.print_help()
        return 1

    try:
        config = load_annotator_config(args.config)
    except ValidationError as e:
        _error(str(e))
        return 1

    output_check = prepare_output_dir(args.output_dir)
    output_check.print_all()
    if not output_check.is_valid:
        return 1

    if args.verbose:
        set_log_level(logging.DEBUG)
    if args.log_file:
        add_file_handler(Path(args.log_file))

    validate_label_file(args.label_file).print_all()
    label_boxes = load_label_boxes(args.label_file, ImageIdentifier(config.id_pattern))

    annotator = BatchAnnotator(
        image_dir=args.image_dir,
        output_dir=args.output_dir,
        config=config,
        label_boxes=label_boxes,
    )

    result = annotator.run(start_index=args.start_index, skip_to=args.skip_to)

    print(tabulate(annotator.summary_rows(result), headers=["", "Count"], tablefmt="simple"))
    if result.failed_paths:
        print(f"{Fore.YELLOW}Unreadable images:{Style.RESET_ALL}")
        for path in result.failed_paths:
            print(f"  {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
