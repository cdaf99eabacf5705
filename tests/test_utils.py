"""
Tests for utility helpers: error formatting, display rounding, logging and paths.
"""

import json
import logging
import logging.handlers
import pytest
from datetime import date
from pathlib import Path
import tempfile
import shutil

from acacia_bloom.utils.error_formatting import ErrorContext, ErrorFormatter, ErrorSeverity
from acacia_bloom.utils.logging_config import log_file_path, setup_logging
from acacia_bloom.utils.paths import get_base_dir, get_default_settings_path, get_logs_dir
from acacia_bloom.utils.rounding import round_half_up


@pytest.fixture
def temp_dir():
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir)


# ============================================================
# Error context & formatting
# ============================================================

def test_error_context_format_for_display():
    ctx = ErrorContext(
        message="Invalid input: bad date",
        severity=ErrorSeverity.WARNING,
        technical_details="ValueError: bad date",
        context={"File": "inputs.json", "Product": None},
        recovery_steps=["Fix the date", "Retry"],
        error_code="VAL_001",
    )

    text = ctx.format_for_display()

    assert text.startswith("Invalid input: bad date")
    assert "  - File: inputs.json" in text
    assert "Product" not in text
    assert "  2. Retry" in text
    assert "Technical details" not in text
    assert "Error code: VAL_001" in text
    assert "ValueError: bad date" in ctx.format_for_display(include_technical=True)


def test_error_context_format_for_log():
    ctx = ErrorContext(
        message="File not found",
        severity=ErrorSeverity.ERROR,
        technical_details="No such file",
        context={"File": "x.json"},
    )

    assert ctx.format_for_log() == "[ERROR] File not found | Context: File=x.json | Technical: No such file"


def test_validation_error_recovery_hints():
    ctx = ErrorFormatter.format_validation_error(
        ValueError("Event impact must be between 0.5 and 2.0, got 3.0"), "parse inputs",
    )

    assert ctx.error_code == "VAL_001"
    assert ctx.context["Operation"] == "parse inputs"
    assert any("0.5 and 2.0" in step for step in ctx.recovery_steps)


def test_payload_error_codes():
    try:
        json.loads("{broken")
    except json.JSONDecodeError as exc:
        decode_error = exc

    assert ErrorFormatter.format_payload_error(decode_error, "a.json").error_code == "PAY_001"
    assert ErrorFormatter.format_payload_error(KeyError("location"), "a.json").error_code == "PAY_002"
    assert ErrorFormatter.format_payload_error(TypeError("bad"), "a.json").error_code == "PAY_999"


def test_io_error_codes():
    assert ErrorFormatter.format_io_error(FileNotFoundError("x"), "x", "read").error_code == "IO_001"
    assert ErrorFormatter.format_io_error(PermissionError("x"), "x", "write").error_code == "IO_002"
    assert ErrorFormatter.format_io_error(OSError("disk full"), "x", "write").error_code == "IO_003"


# ============================================================
# Display rounding
# ============================================================

@pytest.mark.parametrize("value, expected", [
    (0.5, 1),
    (1.5, 2),
    (2.5, 3),
    (2.4999, 2),
    (-0.5, 0),
    (-2.5, -2),
    (-2.6, -3),
    (100.0, 100),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


# ============================================================
# Logging & paths
# ============================================================

def _close_handlers(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_writes_warnings_to_file(temp_dir):
    app_name = "acacia_bloom_test_logging"
    logger = setup_logging(temp_dir, app_name=app_name)
    try:
        logger.warning("shelf stock check")
        logger.debug("stage trace")
        for handler in logger.handlers:
            handler.flush()

        log_files = list(temp_dir.glob(f"{app_name}_*.log"))
        assert log_files == [log_file_path(temp_dir, app_name)]
        text = log_files[0].read_text(encoding="utf-8")
        assert "shelf stock check" in text
        assert "stage trace" not in text

        # Second call does not add duplicate handlers
        assert len(setup_logging(temp_dir, app_name=app_name).handlers) == 2
    finally:
        _close_handlers(logger)


def test_setup_logging_verbose_records_child_debug(temp_dir):
    app_name = "acacia_bloom_test_verbose"
    logger = setup_logging(temp_dir, verbose=True, app_name=app_name)
    try:
        logging.getLogger(f"{app_name}.engine").debug("Forecasting P-1")
        # Quiet again: the same file handler is reused at WARNING
        setup_logging(temp_dir, verbose=False, app_name=app_name)
        logging.getLogger(f"{app_name}.engine").debug("hidden stage")
        for handler in logger.handlers:
            handler.flush()

        text = log_file_path(temp_dir, app_name).read_text(encoding="utf-8")
        assert f"DEBUG    | {app_name}.engine | Forecasting P-1" in text
        assert "hidden stage" not in text
    finally:
        _close_handlers(logger)


def test_setup_logging_new_directory_replaces_file_handler(temp_dir):
    app_name = "acacia_bloom_test_move"
    logger = setup_logging(temp_dir / "first", app_name=app_name)
    try:
        setup_logging(temp_dir / "second", app_name=app_name)
        logger.warning("after move")
        for handler in logger.handlers:
            handler.flush()

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert "after move" in log_file_path(temp_dir / "second", app_name).read_text(encoding="utf-8")
        assert "after move" not in log_file_path(temp_dir / "first", app_name).read_text(encoding="utf-8")
    finally:
        _close_handlers(logger)


def test_log_file_path():
    assert log_file_path("logs", day=date(2026, 7, 1)) == Path("logs") / "acacia_bloom_20260701.log"


def test_paths():
    base = get_base_dir()

    assert (base / "acacia_bloom").is_dir()
    assert get_default_settings_path() == base / "settings.json"
    assert get_logs_dir().is_dir()
