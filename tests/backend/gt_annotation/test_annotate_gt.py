"""
Tests for the annotate_gt command line entry point.

The batch run itself is patched out; these tests cover argument
handling, startup validation and exit codes.
"""

import logging
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add scripts directory to path
scripts_dir = Path(__file__).parent.parent.parent.parent / "scripts"
if str(scripts_dir) not in sys.path:
    sys.path.insert(0, str(scripts_dir))

from common import logger as logger_module
from common.logger import set_log_level
from gt_annotation.annotate_gt import build_parser, main
from gt_annotation.batch_driver import BatchAnnotator, BatchResult


@pytest.fixture
def patched_run():
    with patch.object(
        BatchAnnotator, "run", autospec=True, return_value=BatchResult(total_images=3)
    ) as mock_run:
        yield mock_run


@pytest.fixture
def restore_logging():
    yield
    set_log_level(logging.INFO)
    for cached in logger_module._loggers.values():
        for handler in list(cached.handlers):
            if isinstance(handler, logging.FileHandler):
                cached.removeHandler(handler)
                handler.close()


class TestBuildParser:
    """Test argument defaults."""

    def test_defaults(self):
        args = build_parser().parse_args(["images"])

        assert args.image_dir == "images"
        assert args.output_dir == "GT"
        assert args.start_index == 0
        assert args.skip_to == ""
        assert args.label_file == "manlabel.txt"
        assert args.config is None
        assert args.verbose is False

    def test_short_output_option(self):
        args = build_parser().parse_args(["images", "-o", "masks"])

        assert args.output_dir == "masks"


class TestMainExitCodes:
    """Test exit codes of main()."""

    def test_help(self, capsys, patched_run):
        assert main(["-h"]) == 1

        out = capsys.readouterr().out
        assert "Controls" in out
        patched_run.assert_not_called()

    def test_missing_image_dir_argument(self, capsys, patched_run):
        assert main([]) == 1

        assert "An image directory has to be specified!" in capsys.readouterr().out
        patched_run.assert_not_called()

    def test_image_dir_not_available(self, temp_dir, capsys, patched_run):
        missing = temp_dir / "missing"

        assert main([str(missing)]) == 1

        assert "is not available!" in capsys.readouterr().out
        patched_run.assert_not_called()

    def test_output_dir_is_file(self, image_dir, temp_dir, capsys, patched_run):
        output_file = temp_dir / "GT"
        output_file.write_text("")

        assert main([str(image_dir), "-o", str(output_file)]) == 1

        assert "is not a directory!" in capsys.readouterr().out
        patched_run.assert_not_called()

    def test_invalid_config(self, image_dir, output_dir, temp_dir, capsys, patched_run):
        config_file = temp_dir / "annotator.yaml"
        config_file.write_text("brush_colour: 3\n")

        assert main([str(image_dir), "-o", str(output_dir), "--config", str(config_file)]) == 1

        assert "Unknown config keys" in capsys.readouterr().out
        patched_run.assert_not_called()

    def test_normal_run(self, image_dir, output_dir, temp_dir, capsys, patched_run, monkeypatch):
        monkeypatch.chdir(temp_dir)

        code = main([
            str(image_dir), "-o", str(output_dir),
            "--start_index", "1", "--skip_to", "000002",
        ])

        assert code == 0
        assert output_dir.is_dir()
        out = capsys.readouterr().out
        assert "Create output directory" in out
        assert "Images" in out
        _, kwargs = patched_run.call_args
        assert kwargs == {"start_index": 1, "skip_to": "000002"}

    def test_quit_is_normal_exit(self, image_dir, output_dir, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        with patch.object(BatchAnnotator, "run", return_value=BatchResult(total_images=3, quit=True)):
            assert main([str(image_dir), "-o", str(output_dir)]) == 0

    def test_unreadable_images_listed(self, image_dir, output_dir, temp_dir, capsys, monkeypatch):
        monkeypatch.chdir(temp_dir)
        result = BatchResult(total_images=3, failed_paths=["images/broken.png"])

        with patch.object(BatchAnnotator, "run", return_value=result):
            assert main([str(image_dir), "-o", str(output_dir)]) == 0

        assert "images/broken.png" in capsys.readouterr().out


class TestMainOptions:
    """Test options that shape the batch run."""

    def test_label_file_keyed_by_identifier(
        self, image_dir, output_dir, sample_label_file, patched_run
    ):
        main([str(image_dir), "-o", str(output_dir), "--label_file", str(sample_label_file)])

        annotator = patched_run.call_args.args[0]
        assert set(annotator.label_boxes) == {"000001", "000002"}

    def test_missing_label_file_warns(self, image_dir, output_dir, temp_dir, capsys, patched_run):
        code = main([
            str(image_dir), "-o", str(output_dir),
            "--label_file", str(temp_dir / "manlabel.txt"),
        ])

        assert code == 0
        assert "Label file not found" in capsys.readouterr().out
        assert patched_run.call_args.args[0].label_boxes == {}

    def test_config_applied(self, image_dir, output_dir, temp_dir, patched_run, monkeypatch):
        monkeypatch.chdir(temp_dir)
        config_file = temp_dir / "annotator.yaml"
        config_file.write_text("initial_brush_size: 12\nwindow_name: GT\n")

        assert main([str(image_dir), "-o", str(output_dir), "--config", str(config_file)]) == 0

        annotator = patched_run.call_args.args[0]
        assert annotator.tool.brush_half_size == 12
        assert annotator.window.name == "GT"

    def test_log_file(self, image_dir, output_dir, temp_dir, patched_run, monkeypatch, restore_logging):
        monkeypatch.chdir(temp_dir)
        log_file = temp_dir / "logs" / "annotate.log"

        assert main([str(image_dir), "-o", str(output_dir), "-v", "--log_file", str(log_file)]) == 0

        assert log_file.is_file()
        assert logger_module._loggers["gt_annotation.batch_driver"].level == logging.DEBUG
