"""Base64-versus-binary-text detection for string payloads."""

from __future__ import annotations

import base64
import binascii
import logging
import re

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_BASE64_ALPHABET = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character from ``text``."""
    return _WHITESPACE.sub("", text)


def looks_like_base64(stripped: str, min_length: int = 4) -> bool:
    """Check the cheap structural preconditions for base64 text.

    Parameters
    ----------
    stripped : str
        Candidate text with whitespace already removed.
    min_length : int, default=4
        Shortest candidate considered. Shorter text is always literal.
    """
    return (
        len(stripped) >= max(min_length, 1)
        and len(stripped) % 4 == 0
        and _BASE64_ALPHABET.match(stripped) is not None
    )


def decode_base64_strict(stripped: str) -> bytes | None:
    """Decode canonical base64 text, or return ``None``.

    Text is canonical when re-encoding the decoded bytes reproduces it
    exactly, which rejects non-zero padding bits.
    """
    try:
        decoded = base64.b64decode(stripped, validate=True)
    except binascii.Error:
        return None
    if base64.b64encode(decoded).decode("ascii") != stripped:
        return None
    return decoded


def binary_string_to_bytes(text: str) -> bytes:
    """Encode one byte per character, keeping each code point modulo 256."""
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError:
        return bytes(ord(char) & 0xFF for char in text)


def string_to_bytes(text: str, min_base64_length: int = 4) -> bytes:
    """Convert string content to bytes.

    Base64 payloads (whitespace allowed anywhere) are decoded; everything else
    is treated as a binary string.

    Parameters
    ----------
    text : str
        String payload.
    min_base64_length : int, default=4
        Shortest stripped length eligible for base64 decoding.

    Returns
    -------
    bytes
        Decoded payload bytes.
    """
    if not text:
        return b""
    stripped = strip_whitespace(text)
    if looks_like_base64(stripped, min_base64_length):
        decoded = decode_base64_strict(stripped)
        if decoded is not None:
            logger.debug("decoded %d base64 characters", len(stripped))
            return decoded
    return binary_string_to_bytes(text)
