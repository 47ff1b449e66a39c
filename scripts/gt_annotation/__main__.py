"""
Entry point for running as module.

Usage:
    python -m gt_annotation images/ -o GT
"""

import sys

from gt_annotation.annotate_gt import main

if __name__ == "__main__":
    sys.exit(main())
