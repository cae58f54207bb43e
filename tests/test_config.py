"""Tests for configuration helpers"""
import pytest

from cartkit.config import _get_int


def test_get_int_default(monkeypatch):
    """Test unset variables use the default"""
    monkeypatch.delenv("CART_TTL", raising=False)

    assert _get_int("CART_TTL", 86400) == 86400


def test_get_int_value(monkeypatch):
    """Test integer values are parsed"""
    monkeypatch.setenv("CART_TTL", "60")

    assert _get_int("CART_TTL", 86400) == 60


def test_get_int_malformed(monkeypatch):
    """Test a malformed value warns and falls back instead of crashing"""
    monkeypatch.setenv("CART_TTL", "one day")

    with pytest.warns(RuntimeWarning):
        assert _get_int("CART_TTL", 86400) == 86400
