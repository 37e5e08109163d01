"""Unit tests for the top-level package wrappers."""

from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

import binary_normalizer
from binary_normalizer.results import ConversionResult


def test_convert_to_binary_delegates(monkeypatch: pytest.MonkeyPatch) -> None:
    """Forward keyword options to the pipeline implementation."""
    calls: list[tuple[object, dict[str, object]]] = []

    def fake_convert(data: object, **kwargs: object) -> ConversionResult:
        calls.append((data, kwargs))
        return ConversionResult(buffer=b"x", base64="eA==", size=1)

    fake_core = SimpleNamespace(convert_to_binary=fake_convert)
    monkeypatch.setitem(sys.modules, "binary_normalizer.normalizer.core", fake_core)

    result = binary_normalizer.convert_to_binary("data", max_size=10)
    assert result.size == 1
    assert calls == [("data", {"max_size": 10, "options": None})]


def test_public_api_end_to_end() -> None:
    """The wrappers produce consistent results and envelopes."""
    result = binary_normalizer.convert_to_binary(b"abc")
    envelope = binary_normalizer.create_binary_output(result.buffer, "text/plain")
    built = binary_normalizer.build_binary_output(b"abc", "text/plain")
    assert envelope == built
    assert built.binary == result.base64 == "YWJj"


def test_exports() -> None:
    """Expose the documented public names."""
    for name in binary_normalizer.__all__:
        assert hasattr(binary_normalizer, name)
    assert binary_normalizer.__version__ == "0.1.0"
