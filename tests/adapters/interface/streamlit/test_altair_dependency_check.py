"""Tests for Streamlit Altair dependency checks."""

import sys
import types

from finanza.adapters.interface.streamlit import app


def test_check_altair_dependencies_ok(monkeypatch) -> None:
    """Return ok when numpy/pandas expose expected attributes."""
    monkeypatch.setitem(sys.modules, "numpy", types.SimpleNamespace(ndarray=object))
    monkeypatch.setitem(sys.modules, "pandas", types.SimpleNamespace(Timestamp=object))

    ok, message = app._check_altair_dependencies()

    assert ok is True
    assert message is None


def test_check_altair_dependencies_missing_numpy_ndarray(monkeypatch) -> None:
    """Return error when numpy import is incomplete."""
    monkeypatch.setitem(sys.modules, "numpy", types.SimpleNamespace())
    monkeypatch.setitem(sys.modules, "pandas", types.SimpleNamespace(Timestamp=object))

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert "numpy" in message


def test_check_altair_dependencies_missing_pandas_timestamp(monkeypatch) -> None:
    """Return error when pandas import is incomplete."""
    monkeypatch.setitem(sys.modules, "numpy", types.SimpleNamespace(ndarray=object))
    monkeypatch.setitem(sys.modules, "pandas", types.SimpleNamespace())

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert "pandas" in message
