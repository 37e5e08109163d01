"""Typed option objects shared across the normalization pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from binary_normalizer.normalizer.guard import MAX_BINARY_SIZE


@dataclass(frozen=True)
class NormalizerOptions:
    """Normalization limits and heuristics configuration."""

    max_size: int = MAX_BINARY_SIZE
    base64_min_length: int = 4
    max_depth: int = 256
    placeholder_max_length: int = 1024
