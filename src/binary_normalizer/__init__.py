"""Top-level API for normalizing arbitrary values into transportable bytes."""

from __future__ import annotations

from binary_normalizer.errors import (
    NormalizerError,
    SerializationAnomaly,
    SizeLimitExceededError,
)
from binary_normalizer.normalizer.guard import MAX_BINARY_SIZE
from binary_normalizer.options import NormalizerOptions
from binary_normalizer.results import ConversionResult
from binary_normalizer.schemas import OutputEnvelope
from binary_normalizer.types import Symbol

__version__ = "0.1.0"


def convert_to_binary(
    data: object,
    *,
    max_size: int | None = None,
    options: NormalizerOptions | None = None,
) -> ConversionResult:
    """Convert any value into bytes plus their base64 encoding.

    Parameters
    ----------
    data : object
        Bytes, memory views, numeric arrays, text, structured objects,
        scalars, ``None`` or opaque tokens.
    max_size : int | None, default=None
        Maximum accepted buffer length in bytes. Defaults to
        ``options.max_size`` (``MAX_BINARY_SIZE`` unless configured).
    options : NormalizerOptions | None, default=None
        Pipeline options.

    Returns
    -------
    ConversionResult
        Normalized payload. ``error`` is set when a non-fatal anomaly was
        absorbed; the buffer is then a placeholder rendering of ``data``.

    Raises
    ------
    SizeLimitExceededError
        If the materialized buffer is larger than the limit.
    """
    from .normalizer.core import convert_to_binary as _impl

    return _impl(data, max_size=max_size, options=options)


def create_binary_output(buffer: bytes, content_type: str) -> OutputEnvelope:
    """Wrap a finalized buffer in the transport envelope.

    Parameters
    ----------
    buffer : bytes
        Payload that already passed the size guard.
    content_type : str
        Content-type label declared by the caller.

    Returns
    -------
    OutputEnvelope
        ``binary`` (base64), ``contentType`` and ``size``.
    """
    from .normalizer.envelope import create_binary_output as _impl

    return _impl(buffer, content_type)


def build_binary_output(
    data: object,
    content_type: str,
    *,
    max_size: int | None = None,
    options: NormalizerOptions | None = None,
) -> OutputEnvelope:
    """Convert a response value and wrap it in the transport envelope."""
    from .normalizer.core import build_binary_output as _impl

    return _impl(data, content_type, max_size=max_size, options=options)


__all__ = [
    "MAX_BINARY_SIZE",
    "ConversionResult",
    "NormalizerError",
    "NormalizerOptions",
    "OutputEnvelope",
    "SerializationAnomaly",
    "SizeLimitExceededError",
    "Symbol",
    "build_binary_output",
    "convert_to_binary",
    "create_binary_output",
]
