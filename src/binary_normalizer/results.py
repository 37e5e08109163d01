"""Result objects returned by the normalizer."""

from __future__ import annotations

from dataclasses import dataclass

from binary_normalizer.types import VariantKind


@dataclass(frozen=True)
class ConversionResult:
    """Canonical byte representation of an arbitrary value.

    Parameters
    ----------
    buffer : bytes
        Materialized bytes.
    base64 : str
        Standard base64 encoding of ``buffer``.
    size : int
        ``len(buffer)``.
    error : str | None, default=None
        Diagnostic for a non-fatal anomaly. When set, ``buffer`` holds a
        non-empty placeholder rendering of the input.
    variant : VariantKind, default="bytes"
        Dispatcher branch that produced ``buffer``.
    """

    buffer: bytes
    base64: str
    size: int
    error: str | None = None
    variant: VariantKind = "bytes"
