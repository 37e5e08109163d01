"""Unit tests for the error hierarchy helpers."""

from __future__ import annotations

from binary_normalizer.errors import PropertyAccessAnomaly, exception_text


class _UnprintableError(Exception):
    def __str__(self) -> str:
        raise _UnprintableError()


def test_exception_text_uses_message() -> None:
    """Return the exception message when it renders."""
    assert exception_text(ValueError("bad value")) == "bad value"


def test_exception_text_falls_back() -> None:
    """Use the default, then the type name, for empty or failing messages."""
    assert exception_text(KeyError()) == "KeyError"
    assert exception_text(KeyError(), "lookup failed") == "lookup failed"
    assert exception_text(_UnprintableError()) == "_UnprintableError"


def test_property_access_anomaly_survives_unprintable_cause() -> None:
    """Build the anomaly even when its cause cannot be rendered."""
    anomaly = PropertyAccessAnomaly("$.name", _UnprintableError())
    assert str(anomaly) == "_UnprintableError"
    assert anomaly.field == "$.name"
