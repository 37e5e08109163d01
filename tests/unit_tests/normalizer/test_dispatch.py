"""Unit tests for input classification and variant materialization."""

from __future__ import annotations

import array
import enum
import mmap
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from binary_normalizer.normalizer import dispatch
from binary_normalizer.types import Symbol


class _Color(enum.Enum):
    RED = 1


class _Hostile:
    """Object whose every attribute read raises."""

    def __getattribute__(self, name: str) -> object:
        raise RuntimeError("Property access error")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (b"abc", "bytes"),
        (bytearray(b"abc"), "bytes"),
        (memoryview(b"abc"), "memory"),
        (np.arange(3, dtype=np.uint16), "typed_array"),
        (np.array([1.5, 2.5], dtype=np.float32), "typed_array"),
        (np.array([True, False]), "typed_array"),
        (array.array("i", [1, 2]), "typed_array"),
        ("hello", "text"),
        ({"a": 1}, "structured"),
        ([1, 2], "structured"),
        (np.array(["a", "b"]), "structured"),
        (np.array([1 + 2j]), "structured"),
        (True, "scalar"),
        (12345, "scalar"),
        (1.5, "scalar"),
        (Decimal("1.10"), "scalar"),
        (np.int32(7), "scalar"),
        (None, "absent"),
        (Symbol("test"), "token"),
        (_Color.RED, "token"),
        (object(), "token"),
    ],
)
def test_classify_variants(value: object, expected: str) -> None:
    """Classify each supported input shape into its variant."""
    assert dispatch.classify(value) == expected


def test_classify_mmap_as_memory() -> None:
    """Treat anonymous memory maps as raw memory ranges."""
    with mmap.mmap(-1, 16) as mapped:
        assert dispatch.classify(mapped) == "memory"
        assert dispatch.byte_length(mapped, "memory") == 16
        assert dispatch.memory_to_bytes(mapped) == b"\x00" * 16


def test_classify_hostile_object_does_not_touch_attributes() -> None:
    """Classify values by type only, never through attribute hooks."""
    assert dispatch.classify(_Hostile()) == "structured"


def test_classify_failure_falls_back_to_structured(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Return the structured fallback when classification itself fails."""

    def broken(value: object) -> str:
        raise TypeError("boom")

    monkeypatch.setattr(dispatch, "_classify", broken)
    assert dispatch.classify(b"abc") == "structured"


def test_memoryview_uses_full_extent_regardless_of_format() -> None:
    """Copy nbytes from multi-byte memory views, not their item count."""
    source = array.array("I", [1, 2, 3])
    view = memoryview(source)
    assert dispatch.byte_length(view, "memory") == 3 * source.itemsize
    assert dispatch.memory_to_bytes(view) == source.tobytes()


@pytest.mark.parametrize(
    "dtype",
    [np.int8, np.uint8, np.int16, np.uint16, np.int32, np.float32, np.int64, np.float64],
)
def test_typed_array_byte_layout(dtype: type) -> None:
    """Keep element_count times itemsize bytes in native layout."""
    values = np.arange(5).astype(dtype)
    assert dispatch.byte_length(values, "typed_array") == 5 * values.itemsize
    assert dispatch.typed_array_to_bytes(values) == values.tobytes()


def test_typed_array_non_contiguous_slice() -> None:
    """Materialize only the elements of a strided view."""
    values = np.arange(10, dtype=np.int16)[::2]
    raw = dispatch.typed_array_to_bytes(values)
    assert len(raw) == 5 * 2
    assert np.frombuffer(raw, dtype=np.int16).tolist() == [0, 2, 4, 6, 8]


def test_stdlib_array_bytes() -> None:
    """Use array.array storage bytes as-is."""
    values = array.array("d", [1.5, -2.0])
    assert dispatch.byte_length(values, "typed_array") == 16
    assert dispatch.typed_array_to_bytes(values) == values.tobytes()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, "true"),
        (False, "false"),
        (np.bool_(True), "true"),
        (12345, "12345"),
        (-0.5, "-0.5"),
        (np.int64(42), "42"),
        (Decimal("1.10"), "1.10"),
    ],
)
def test_scalar_to_text(value: object, expected: str) -> None:
    """Render scalars as canonical text."""
    assert dispatch.scalar_to_text(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Symbol("test"), "Symbol(test)"),
        (Symbol(), "Symbol()"),
        (_Color.RED, "Symbol(_Color.RED)"),
        (object(), "Symbol()"),
    ],
)
def test_token_to_text(value: object, expected: str) -> None:
    """Render opaque tokens as Symbol(<description>)."""
    assert dispatch.token_to_text(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (10**5000, "1" + "0" * 5000),
        (-(10**5000), "-1" + "0" * 5000),
        (0, "0"),
        (Fraction(1, 2), "1/2"),
        (Fraction(6, 3), "2"),
        (Fraction(10**5000, 7), "1" + "0" * 5000 + "/7"),
    ],
    ids=["huge_int", "huge_negative_int", "zero", "half", "whole_fraction", "huge_fraction"],
)
def test_scalar_to_text_exact_numbers(value: object, expected: str) -> None:
    """Render integers and fractions exactly, whatever their size."""
    assert dispatch.scalar_to_text(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1e16, "1e+16"), (0.1, "0.1"), (float("nan"), "nan"), (float("-inf"), "-inf")],
)
def test_scalar_to_text_floats(value: float, expected: str) -> None:
    """Render floats in Python's shortest round-trip form."""
    assert dispatch.scalar_to_text(value) == expected
