"""Normalization pipeline: classify, materialize, guard, encode."""

from __future__ import annotations

import logging
from dataclasses import replace

from binary_normalizer.errors import SizeLimitExceededError, exception_text
from binary_normalizer.normalizer.dispatch import (
    byte_length,
    classify,
    memory_to_bytes,
    scalar_to_text,
    token_to_text,
    typed_array_to_bytes,
)
from binary_normalizer.normalizer.envelope import (
    create_binary_output,
    encode_base64,
)
from binary_normalizer.normalizer.guard import enforce_size_limit
from binary_normalizer.normalizer.serialization import serialize_value
from binary_normalizer.normalizer.strings import string_to_bytes
from binary_normalizer.options import NormalizerOptions
from binary_normalizer.results import ConversionResult
from binary_normalizer.schemas import OutputEnvelope
from binary_normalizer.types import VariantKind

logger = logging.getLogger(__name__)

CONVERSION_ERROR_PREFIX = "conversion failed"


def materialize(
    data: object,
    variant: VariantKind,
    options: NormalizerOptions,
) -> tuple[bytes, str | None]:
    """Produce the bytes for an already classified value.

    Returns
    -------
    tuple[bytes, str | None]
        Materialized bytes and the anomaly message, if any.

    Raises
    ------
    SizeLimitExceededError
        If a view or array declares more bytes than ``options.max_size``.
    """
    if variant == "bytes":
        # bytes pass through untouched; bytearray is snapshotted.
        return (data if type(data) is bytes else bytes(data)), None  # type: ignore[arg-type]
    if variant in ("memory", "typed_array"):
        declared = byte_length(data, variant)
        if declared is not None:
            enforce_size_limit(declared, options.max_size)
        if variant == "memory":
            return memory_to_bytes(data), None  # type: ignore[arg-type]
        return typed_array_to_bytes(data), None  # type: ignore[arg-type]
    if variant == "text":
        return string_to_bytes(data, options.base64_min_length), None  # type: ignore[arg-type]
    if variant == "absent":
        return b"", None
    if variant == "scalar":
        return scalar_to_text(data).encode("utf-8"), None
    if variant == "token":
        return token_to_text(data).encode("utf-8"), None
    outcome = serialize_value(
        data,
        max_depth=options.max_depth,
        placeholder_max_length=options.placeholder_max_length,
    )
    return outcome.payload, outcome.error


def convert_to_binary(
    data: object,
    *,
    max_size: int | None = None,
    options: NormalizerOptions | None = None,
) -> ConversionResult:
    """Reduce an arbitrary value to its canonical byte representation.

    Parameters
    ----------
    data : object
        Value to normalize.
    max_size : int | None, default=None
        Size limit override. Takes precedence over ``options.max_size``.
    options : NormalizerOptions | None, default=None
        Pipeline options. Defaults to :class:`NormalizerOptions`.

    Returns
    -------
    ConversionResult
        Buffer, base64 text, size and the anomaly message, if any.

    Raises
    ------
    SizeLimitExceededError
        If the materialized buffer is larger than the size limit.
    """
    resolved = options or NormalizerOptions()
    limit = resolved.max_size if max_size is None else max_size
    if limit != resolved.max_size:
        resolved = replace(resolved, max_size=limit)

    variant = classify(data)
    try:
        buffer, error = materialize(data, variant, resolved)
    except SizeLimitExceededError:
        raise
    except Exception as exc:
        error = f"{CONVERSION_ERROR_PREFIX}: {exception_text(exc)}"
        logger.debug("materializing %s input failed: %s", variant, error)
        buffer = error.encode("utf-8")

    size = enforce_size_limit(len(buffer), limit)
    return ConversionResult(
        buffer=buffer,
        base64=encode_base64(buffer),
        size=size,
        error=error,
        variant=variant,
    )


def build_binary_output(
    data: object,
    content_type: str,
    *,
    max_size: int | None = None,
    options: NormalizerOptions | None = None,
) -> OutputEnvelope:
    """Normalize a response value and wrap it in a transport envelope.

    Anomalies absorbed during conversion are logged as warnings; only
    :class:`SizeLimitExceededError` propagates.
    """
    result = convert_to_binary(data, max_size=max_size, options=options)
    if result.error:
        logger.warning(
            "binary conversion anomaly (variant=%s, content_type=%s): %s",
            result.variant,
            content_type,
            result.error,
        )
    return create_binary_output(result.buffer, content_type)
