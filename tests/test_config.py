"""Tests for the config module."""

import dataclasses
import logging

import pytest

from sync_status.config import DEFAULT_LOG_CONFIG, StatusLogConfig


def test_default_log_config() -> None:
    """Test the default config logs reports at debug level."""
    assert DEFAULT_LOG_CONFIG == StatusLogConfig(level=logging.DEBUG)


def test_log_config_is_immutable() -> None:
    """Test the default config cannot be changed after the defaults are bound."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_LOG_CONFIG.level = logging.INFO  # type: ignore[misc]
