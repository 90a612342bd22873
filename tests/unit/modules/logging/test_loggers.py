"""Tests for the loguru-backed loggers."""

import json
import pytest
from loguru import logger as loguru_logger

from shutdown_manager.modules.logging import (
    ColorfulLogger, JsonLogger, NullLogger, PlainLogger, create_logger
)


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop the sinks a test configured so later tests do not write to closed streams."""
    yield
    loguru_logger.remove()


@pytest.mark.parametrize("output_type, expected", [
    ("colorful", ColorfulLogger),
    ("plain", PlainLogger),
    ("JSON", JsonLogger),
    ("null", NullLogger),
])
def test_create_logger(output_type, expected):
    """Test the factory picks the logger for each output type."""
    assert isinstance(create_logger(output_type), expected)


def test_create_logger_invalid_type():
    """Test unknown output types are rejected."""
    with pytest.raises(ValueError, match="Invalid output type: xml"):
        create_logger("xml")


def test_plain_logger_renders_context(capsys):
    """Test plain output carries the message and its context."""
    logger = PlainLogger("DEBUG")

    logger.log_info("Processing exit signal", {"signal": "SIGINT"})
    logger.log_warning('Ignoring "{name}" braces')
    logger.log_debug("debug line")

    output = capsys.readouterr().out
    assert "INFO     | Processing exit signal signal='SIGINT'" in output
    assert 'WARNING  | Ignoring "{name}" braces' in output
    assert "DEBUG    | debug line" in output


def test_plain_logger_respects_level(capsys):
    """Test messages below the configured level are dropped."""
    logger = PlainLogger("WARNING")

    logger.log_info("hidden")
    logger.log_warning("shown")

    output = capsys.readouterr().out
    assert "hidden" not in output
    assert "shown" in output


def test_error_context_includes_traceback(capsys):
    """Test errors in a context are rendered with their exception."""
    logger = PlainLogger()

    try:
        raise ValueError("hook exploded")
    except ValueError as error:
        logger.log_error('Unsuccessful "foo" hook', {"error": error})

    output = capsys.readouterr().out
    assert 'Unsuccessful "foo" hook' in output
    assert "ValueError: hook exploded" in output


def test_error_context_without_reason(capsys):
    """Test an absent failure reason keeps the error field."""
    PlainLogger().log_error("Uncaught/Unhandled", {"error": None})

    assert "Uncaught/Unhandled error=None" in capsys.readouterr().out


def test_json_logger_puts_context_in_extra(capsys):
    """Test JSON output exposes the context as structured fields."""
    logger = JsonLogger()

    logger.log_info("Exit signal process completed", {"signal": "SIGTERM"})
    logger.log_error('Unsuccessful "foo" hook', {"error": RuntimeError("boom")})

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
    info, error = lines[0]["record"], lines[1]["record"]

    assert info["message"] == "Exit signal process completed"
    assert info["extra"] == {"type": "info", "signal": "SIGTERM"}
    assert error["level"]["name"] == "ERROR"
    assert error["extra"]["type"] == "error"
    assert error["extra"]["error"] == "RuntimeError('boom')"


def test_colorful_logger_writes_message(capsys):
    """Test colorful output still contains the plain message text."""
    ColorfulLogger().log_info('Successful "foo" hook', {"signal": "SIGINT"})

    output = capsys.readouterr().out
    assert 'Successful "foo" hook' in output
    assert "signal='SIGINT'" in output


def test_null_logger_is_silent(capsys):
    """Test the default logger discards everything."""
    logger = NullLogger()

    logger.log_info("info", {"signal": "SIGINT"})
    logger.log_warning("warning")
    logger.log_error("error", {"error": None})
    logger.log_debug("debug")

    assert capsys.readouterr().out == ""
