"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from finanza.infrastructure.logging import logger as logger_module


@pytest.fixture(autouse=True)
def silence_loggers(monkeypatch):
    """Keep tests from writing log files under the project root."""
    monkeypatch.setattr(logger_module.AppLogger, "_instance", MagicMock())
    monkeypatch.setattr(logger_module.AuditLogger, "_instance", MagicMock())
