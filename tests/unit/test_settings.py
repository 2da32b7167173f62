# tests/unit/test_settings.py
"""
Unit tests for environment-driven settings.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from httperr.settings import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("HTTPERR_ERROR_WRITER", raising=False)
    monkeypatch.delenv("HTTPERR_MAX_UNWRAP_DEPTH", raising=False)
    s = Settings(_env_file=None)
    assert s.ERROR_WRITER == "text"
    assert s.MAX_UNWRAP_DEPTH == 100


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HTTPERR_ERROR_WRITER", "json")
    monkeypatch.setenv("HTTPERR_MAX_UNWRAP_DEPTH", "7")
    s = Settings(_env_file=None)
    assert s.ERROR_WRITER == "json"
    assert s.MAX_UNWRAP_DEPTH == 7


def test_invalid_writer_rejected(monkeypatch):
    monkeypatch.setenv("HTTPERR_ERROR_WRITER", "xml")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
