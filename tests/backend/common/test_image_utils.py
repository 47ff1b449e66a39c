"""
Tests for image utilities.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import cv2
import numpy as np
import pytest

# Add scripts directory to path
scripts_dir = Path(__file__).parent.parent.parent.parent / "scripts"
if str(scripts_dir) not in sys.path:
    sys.path.insert(0, str(scripts_dir))

from common.exceptions import PathError
from common.image_utils import (
    create_blank_mask,
    draw_box,
    draw_text,
    list_image_files,
    load_image,
    load_mask,
    save_mask,
)


class TestDrawBox:
    """Test draw_box function."""

    def test_draw_rectangle(self):
        image = np.zeros((100, 100, 3), dtype=np.uint8)

        draw_box(image, (10, 10, 20, 30), color=(0, 255, 0), thickness=1)

        assert image[10, 10].tolist() == [0, 255, 0]
        assert image[40, 30].tolist() == [0, 255, 0]
        assert image[25, 20].tolist() == [0, 0, 0]

    def test_draw_modifies_in_place(self):
        image = np.zeros((50, 50, 3), dtype=np.uint8)

        result = draw_box(image, (5, 5, 10, 10))

        assert result is image
        assert np.count_nonzero(image) > 0


class TestDrawText:
    """Test draw_text function."""

    def test_draws_something(self):
        image = np.full((60, 300, 3), 128, dtype=np.uint8)

        result = draw_text(image, "scan_000001.png")

        assert result is image
        assert np.any(image != 128)


class TestListImageFiles:
    """Test list_image_files function."""

    def test_sorted_by_name(self, tmp_path):
        for name in ["b.png", "a.jpg", "c.bmp"]:
            (tmp_path / name).touch()

        files = list_image_files(tmp_path)

        assert [f.name for f in files] == ["a.jpg", "b.png", "c.bmp"]

    def test_directories_excluded(self, tmp_path):
        (tmp_path / "a.png").touch()
        (tmp_path / "sub").mkdir()

        files = list_image_files(tmp_path)

        assert [f.name for f in files] == ["a.png"]

    def test_keeps_non_image_files(self, tmp_path):
        (tmp_path / "a.png").touch()
        (tmp_path / "notes.txt").touch()

        assert len(list_image_files(tmp_path)) == 2

    def test_nonexistent_directory(self, tmp_path):
        assert list_image_files(tmp_path / "missing") == []


class TestLoadImage:
    """Test load_image function."""

    @pytest.fixture
    def image_path(self, tmp_path):
        image = np.zeros((20, 30, 3), dtype=np.uint8)
        image[:, :, 2] = 255  # red in BGR
        path = tmp_path / "red.png"
        cv2.imwrite(str(path), image)
        return path

    def test_load_bgr(self, image_path):
        image = load_image(image_path)

        assert image.shape == (20, 30, 3)
        assert image[0, 0].tolist() == [0, 0, 255]

    def test_missing_file(self, tmp_path):
        assert load_image(tmp_path / "missing.png") is None

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")

        assert load_image(path) is None


class TestMasks:
    """Test mask creation, saving and loading."""

    def test_create_blank_mask(self):
        mask = create_blank_mask((40, 60, 3))

        assert mask.shape == (40, 60, 3)
        assert mask.dtype == np.uint8
        assert np.count_nonzero(mask) == 0

    def test_create_blank_mask_from_gray_shape(self):
        assert create_blank_mask((40, 60)).shape == (40, 60, 3)

    def test_save_single_channel(self, tmp_path):
        mask = create_blank_mask((40, 60))
        mask[5:10, 5:10] = 255
        path = tmp_path / "GT" / "scan_000001.png"

        written = save_mask(mask, path)

        assert written == path
        saved = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        assert saved.ndim == 2
        assert saved[7, 7] == 255
        assert saved[20, 20] == 0

    def test_save_jpeg(self, tmp_path):
        mask = create_blank_mask((40, 60))
        mask[10:30, 10:30] = 255
        path = tmp_path / "scan_000001.jpg"

        save_mask(mask, path)

        saved = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        assert saved.ndim == 2
        assert saved[20, 20] > 250
        assert saved[35, 50] < 5

    def test_save_failure_raises(self, tmp_path):
        with patch("common.image_utils.cv2.imwrite", return_value=False):
            with pytest.raises(PathError):
                save_mask(create_blank_mask((4, 4)), tmp_path / "mask.png")

    def test_load_mask_roundtrip_to_three_channels(self, tmp_path):
        mask = create_blank_mask((40, 60))
        mask[0:5, 0:5] = 255
        path = save_mask(mask, tmp_path / "mask.png")

        loaded = load_mask(path, (40, 60, 3))

        assert loaded.shape == (40, 60, 3)
        np.testing.assert_array_equal(loaded, mask)

    def test_load_mask_missing(self, tmp_path):
        assert load_mask(tmp_path / "missing.png", (40, 60, 3)) is None

    def test_load_mask_size_mismatch(self, tmp_path):
        path = save_mask(create_blank_mask((10, 10)), tmp_path / "mask.png")

        assert load_mask(path, (40, 60, 3)) is None
