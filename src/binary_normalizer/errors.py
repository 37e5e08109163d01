"""Exception hierarchy for binary content normalization."""

from __future__ import annotations


class NormalizerError(Exception):
    """Base error for the binary normalizer."""

    exit_code = 1


class ConfigurationError(NormalizerError):
    """Raised when normalizer settings fail validation."""

    exit_code = 2


class SizeLimitExceededError(NormalizerError):
    """Raised when a materialized buffer is larger than the configured limit.

    This is the only error :func:`binary_normalizer.convert_to_binary`
    propagates to its caller.
    """

    exit_code = 3

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"payload too large: {size} bytes exceeds maximum of {limit} bytes"
        )
        self.size = size
        self.limit = limit


class SerializationAnomaly(NormalizerError):
    """Non-fatal failure while serializing a structured value.

    Anomalies never escape the serialization fallback; their message ends up
    in ``ConversionResult.error``.
    """


class PropertyAccessAnomaly(SerializationAnomaly):
    """A field read raised during structural traversal."""

    def __init__(self, field: str, cause: BaseException) -> None:
        super().__init__(exception_text(cause))
        self.field = field
        self.cause = cause


class CircularStructureAnomaly(SerializationAnomaly):
    """The value references itself through one of its fields."""

    def __init__(self, path: str) -> None:
        super().__init__(f"circular structure at {path}")
        self.path = path


def exception_text(exc: BaseException, default: str | None = None) -> str:
    """Return the message of ``exc`` without ever raising.

    Falls back to ``default``, then to the exception type name, when the
    message is empty or its ``__str__`` fails.
    """
    try:
        text = str(exc)
    except Exception:
        text = ""
    return text or default or type(exc).__name__
