"""Tests for the shutdown config models and YAML loader."""

import pytest
from pydantic import ValidationError

from shutdown_manager.modules.shutdown.config import HookConfig, ShutdownConfig
from shutdown_manager.modules.shutdown.coordinator import DEFAULT_SIGNALS
from shutdown_manager.modules.shutdown.validator import ShutdownYamlValidator


def test_defaults():
    """Test an empty config falls back to the coordinator defaults."""
    config = ShutdownConfig()

    assert config.signals == list(DEFAULT_SIGNALS)
    assert config.per_hook_timeout == 5000
    assert config.shutdown_timeout == 10000
    assert config.hooks == []


def test_coordinator_kwargs():
    """Test the config maps onto coordinator arguments."""
    config = ShutdownConfig(signals=["SIGTERM"], per_hook_timeout=100, shutdown_timeout=300)

    assert config.coordinator_kwargs() == {
        "signals": ["SIGTERM"],
        "per_hook_timeout": 100,
        "shutdown_timeout": 300,
    }


def test_unknown_signal_is_rejected():
    """Test signal names are checked against the platform."""
    with pytest.raises(ValidationError, match="Unknown signal: SIGNOPE"):
        ShutdownConfig(signals=["SIGTERM", "SIGNOPE"])


def test_uncatchable_signal_is_rejected():
    """Test SIGKILL cannot be configured."""
    with pytest.raises(ValidationError, match="cannot be caught"):
        ShutdownConfig(signals=["SIGKILL"])


@pytest.mark.parametrize("field", ["per_hook_timeout", "shutdown_timeout"])
def test_timeouts_must_be_positive(field):
    """Test zero timeouts are rejected."""
    with pytest.raises(ValidationError):
        ShutdownConfig(**{field: 0})


def test_hook_name_must_not_be_empty():
    """Test hook names are required."""
    with pytest.raises(ValidationError):
        HookConfig(name="", command="true")


def test_load_yaml():
    """Test loading a full YAML config."""
    config = ShutdownYamlValidator.validate_and_load("""
signals: [SIGINT, SIGTERM]
per_hook_timeout: 250
shutdown_timeout: 1000
hooks:
  - name: flush-queue
    command: ./flush.sh
  - name: close-db
    command: echo closing
""")

    assert config.signals == ["SIGINT", "SIGTERM"]
    assert config.per_hook_timeout == 250
    assert config.shutdown_timeout == 1000
    assert [hook.name for hook in config.hooks] == ["flush-queue", "close-db"]
    assert config.hooks[1].command == "echo closing"


def test_load_empty_yaml():
    """Test an empty document yields the defaults."""
    assert ShutdownYamlValidator.validate_and_load("") == ShutdownConfig()


def test_invalid_yaml():
    """Test YAML syntax errors become ValueErrors."""
    with pytest.raises(ValueError, match="Invalid YAML format"):
        ShutdownYamlValidator.validate_and_load("hooks: [unclosed")


def test_non_mapping_yaml():
    """Test the document must be a mapping."""
    with pytest.raises(ValueError, match="expected a mapping"):
        ShutdownYamlValidator.validate_and_load("- just\n- a list\n")


def test_validation_errors_name_the_field():
    """Test pydantic errors are flattened into one message per field."""
    with pytest.raises(ValueError) as exc_info:
        ShutdownYamlValidator.validate_and_load("""
per_hook_timeout: -1
hooks:
  - name: missing-command
""")

    message = str(exc_info.value)
    assert "Error in field 'per_hook_timeout'" in message
    assert "Error in field 'hooks -> 0 -> command'" in message
