"""Tests for logging setup and batch progress reporting."""

import logging

import pytest

from alpha_crop.utils import BatchProgress, setup_logging


def test_setup_logging_plain_handler():
    root = setup_logging(level="INFO", use_rich=False, format_style="simple")

    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert root.handlers[0].level == logging.INFO


def test_setup_logging_with_file(temp_dir):
    log_file = temp_dir / "logs" / "crop.log"

    root = setup_logging(level="WARNING", log_file=log_file, use_rich=False)
    logging.getLogger("alpha_crop.test").debug("written to file only")
    for handler in root.handlers:
        handler.flush()

    assert root.level == logging.DEBUG
    assert "written to file only" in log_file.read_text(encoding="utf-8")


class TestBatchProgress:
    """Test outcome counting and the summary line."""

    def test_counts_and_summary(self, caplog):
        logger = logging.getLogger("alpha_crop.test")

        with caplog.at_level(logging.INFO):
            with BatchProgress("Cropping", 3, logger, enabled=False) as progress:
                progress.record("cropped")
                progress.record("unchanged")
                progress.record("failed")

        assert progress.counts == {"cropped": 1, "unchanged": 1, "failed": 1}
        assert "cropped=1, unchanged=1, failed=1" in caplog.records[-1].getMessage()

    def test_summary_logged_on_error(self, caplog):
        logger = logging.getLogger("alpha_crop.test")

        with caplog.at_level(logging.INFO):
            with pytest.raises(RuntimeError):
                with BatchProgress("Cropping", 2, logger, enabled=False) as progress:
                    progress.record("cropped")
                    raise RuntimeError("disk full")

        last = caplog.records[-1]
        assert last.levelno == logging.ERROR
        assert "cropped=1" in last.getMessage() and "disk full" in last.getMessage()

    def test_unknown_outcome(self):
        with BatchProgress("Cropping", 1, enabled=False) as progress:
            with pytest.raises(ValueError):
                progress.record("skipped")
