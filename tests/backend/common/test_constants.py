"""
Constants モジュールのテスト

scripts/common/constants.py の定数値の整合性をテストします。
"""

import sys
from pathlib import Path

# scriptsディレクトリをパスに追加
scripts_dir = Path(__file__).parent.parent.parent.parent / "scripts"
if str(scripts_dir) not in sys.path:
    sys.path.insert(0, str(scripts_dir))

import re

from common.constants import (
    # Output layout
    DEFAULT_ID_PATTERN,
    DEFAULT_LEDGER_NAME,
    DEFAULT_OUTPUT_DIR,
    # Brush / overlay limits
    DEFAULT_BRUSH_SIZE,
    DEFAULT_OVERLAY,
    MAX_BRUSH_SIZE,
    MAX_OVERLAY,
    MIN_BRUSH_SIZE,
    MIN_OVERLAY,
    # Zoom
    KEY_ZOOM_IN_FACTOR,
    KEY_ZOOM_OUT_FACTOR,
    WHEEL_ZOOM_IN_FACTOR,
    WHEEL_ZOOM_OUT_FACTOR,
    # Keys
    NEXT_KEYS,
    PREVIOUS_KEYS,
    QUIT_KEYS,
)


class TestOutputLayout:
    """出力レイアウトのテスト"""

    def test_defaults(self):
        assert DEFAULT_OUTPUT_DIR == "GT"
        assert DEFAULT_LEDGER_NAME == ".annotated.txt"

    def test_id_pattern_has_id_group(self):
        assert "id" in re.compile(DEFAULT_ID_PATTERN).groupindex


class TestLimits:
    """ブラシ・ブレンド範囲のテスト"""

    def test_brush_default_in_range(self):
        assert MIN_BRUSH_SIZE == 1
        assert MAX_BRUSH_SIZE == 50
        assert MIN_BRUSH_SIZE <= DEFAULT_BRUSH_SIZE <= MAX_BRUSH_SIZE

    def test_overlay_default_in_range(self):
        assert (MIN_OVERLAY, MAX_OVERLAY) == (0, 100)
        assert MIN_OVERLAY <= DEFAULT_OVERLAY <= MAX_OVERLAY


class TestZoomFactors:
    """ズーム係数のテスト"""

    def test_in_and_out_are_inverse(self):
        assert abs(KEY_ZOOM_IN_FACTOR * KEY_ZOOM_OUT_FACTOR - 1.0) < 1e-12
        assert abs(WHEEL_ZOOM_IN_FACTOR * WHEEL_ZOOM_OUT_FACTOR - 1.0) < 1e-12

    def test_in_factors_shrink(self):
        assert KEY_ZOOM_IN_FACTOR < 1.0
        assert WHEEL_ZOOM_IN_FACTOR < 1.0


class TestKeyCodes:
    """キーコードのテスト"""

    def test_no_overlap(self):
        assert not set(NEXT_KEYS) & set(PREVIOUS_KEYS)
        assert not set(NEXT_KEYS) & set(QUIT_KEYS)
        assert not set(PREVIOUS_KEYS) & set(QUIT_KEYS)

    def test_enter_and_escape(self):
        assert 13 in NEXT_KEYS
        assert 10 in NEXT_KEYS
        assert 8 in PREVIOUS_KEYS
        assert 27 in QUIT_KEYS
