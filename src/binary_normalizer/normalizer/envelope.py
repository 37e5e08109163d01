"""Output envelope construction."""

from __future__ import annotations

import base64

from binary_normalizer.schemas import OutputEnvelope


def encode_base64(buffer: bytes) -> str:
    """Return the standard base64 text of ``buffer``."""
    return base64.b64encode(buffer).decode("ascii")


def create_binary_output(buffer: bytes, content_type: str) -> OutputEnvelope:
    """Wrap a finalized buffer and its content type for transport.

    The buffer is expected to have passed the size guard already.
    """
    return OutputEnvelope(
        binary=encode_base64(buffer),
        content_type=content_type,
        size=len(buffer),
    )
