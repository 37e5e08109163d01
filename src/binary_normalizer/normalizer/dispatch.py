"""Classification of arbitrary values into normalizer variants."""

from __future__ import annotations

import array
import enum
import logging
import mmap
from decimal import Decimal
from fractions import Fraction

import numpy as np

from binary_normalizer.types import Symbol, VariantKind

logger = logging.getLogger(__name__)

ELEMENT_WIDTHS = frozenset({1, 2, 4, 8})
_NUMERIC_DTYPE_KINDS = frozenset({"b", "i", "u", "f"})
_SCALAR_TYPES = (bool, int, float, complex, Decimal, Fraction)


def _is_typed_array(kind: type, value: object) -> bool:
    if issubclass(kind, np.ndarray):
        dtype = value.dtype  # type: ignore[attr-defined]
        return dtype.kind in _NUMERIC_DTYPE_KINDS and dtype.itemsize in ELEMENT_WIDTHS
    if issubclass(kind, array.array):
        return value.itemsize in ELEMENT_WIDTHS  # type: ignore[attr-defined]
    return False


def _classify(value: object) -> VariantKind:
    kind = type(value)
    if issubclass(kind, (bytes, bytearray)):
        return "bytes"
    if issubclass(kind, (memoryview, mmap.mmap)):
        return "memory"
    if _is_typed_array(kind, value):
        return "typed_array"
    if issubclass(kind, str):
        return "text"
    if value is None:
        return "absent"
    if issubclass(kind, (Symbol, enum.Enum)) or kind is object:
        return "token"
    if issubclass(kind, _SCALAR_TYPES) or issubclass(kind, np.number | np.bool_):
        return "scalar"
    return "structured"


def classify(value: object) -> VariantKind:
    """Classify ``value`` into exactly one normalizer variant.

    Only ``type(value)`` is inspected, so classification never runs attribute
    hooks defined by the value. Anything unrecognized, including values whose
    classification fails, is ``"structured"``.

    Parameters
    ----------
    value : object
        Arbitrary input value.

    Returns
    -------
    VariantKind
        Variant used to materialize the value.
    """
    try:
        variant = _classify(value)
    except Exception:
        logger.debug("classification failed; using structured fallback", exc_info=True)
        return "structured"
    logger.debug("classified %s as %s", type(value).__name__, variant)
    return variant


def byte_length(value: object, variant: VariantKind) -> int | None:
    """Return the byte length of views and arrays before materializing them."""
    if variant == "memory":
        if isinstance(value, mmap.mmap):
            return len(value)
        return memoryview(value).nbytes  # type: ignore[arg-type]
    if variant == "typed_array":
        if isinstance(value, np.ndarray):
            return int(value.nbytes)
        if isinstance(value, array.array):
            return len(value) * value.itemsize
    return None


def memory_to_bytes(value: memoryview | mmap.mmap) -> bytes:
    """Copy the full extent of a raw memory range, ignoring its item format."""
    if isinstance(value, mmap.mmap):
        return value[:]
    return value.tobytes()


def typed_array_to_bytes(value: np.ndarray | array.array) -> bytes:
    """Return the native-byte-order layout of a numeric typed array."""
    if isinstance(value, np.ndarray):
        return value.tobytes(order="A")
    return value.tobytes()


def int_to_text(value: int) -> str:
    """Render an integer in decimal, with no interpreter digit limit."""
    return format(Decimal(value), "f")


def scalar_to_text(value: object) -> str:
    """Render a primitive scalar as canonical text.

    Floats keep Python's shortest round-trip form (``1e+16``, ``nan``,
    ``inf``).
    """
    if isinstance(value, bool | np.bool_):
        return "true" if value else "false"
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, int):
        return int_to_text(value)
    if isinstance(value, Fraction):
        numerator = int_to_text(value.numerator)
        if value.denominator == 1:
            return numerator
        return f"{numerator}/{int_to_text(value.denominator)}"
    return str(value)


def token_to_text(value: object) -> str:
    """Render an opaque token as ``Symbol(<description>)``."""
    if isinstance(value, Symbol):
        description = value.description or ""
    elif isinstance(value, enum.Enum):
        description = f"{type(value).__name__}.{value.name}"
    else:
        description = ""
    return f"Symbol({description})"
