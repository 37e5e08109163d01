"""Maximum payload size enforcement."""

from __future__ import annotations

from binary_normalizer.errors import SizeLimitExceededError

MAX_BINARY_SIZE = 100 * 1024 * 1024


def enforce_size_limit(size: int, limit: int = MAX_BINARY_SIZE) -> int:
    """Reject payloads strictly larger than ``limit`` bytes.

    Parameters
    ----------
    size : int
        Byte length of the materialized (or about to be materialized) buffer.
    limit : int, default=MAX_BINARY_SIZE
        Largest accepted byte length.

    Returns
    -------
    int
        ``size``, unchanged.

    Raises
    ------
    SizeLimitExceededError
        If ``size > limit``.
    """
    if size > limit:
        raise SizeLimitExceededError(size, limit)
    return size
