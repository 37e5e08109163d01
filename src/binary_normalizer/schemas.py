"""Pydantic schemas for normalizer settings and transport envelopes."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from binary_normalizer.errors import ConfigurationError
from binary_normalizer.normalizer.guard import MAX_BINARY_SIZE
from binary_normalizer.options import NormalizerOptions

ENV_PREFIX = "BINARY_NORMALIZER_"


class OutputEnvelope(BaseModel):
    """Transport shape for a finalized binary payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    binary: str
    content_type: str = Field(alias="contentType")
    size: int = Field(ge=0)

    def to_payload(self) -> dict[str, str | int]:
        """Return the camelCase mapping consumed by the execution harness."""
        return self.model_dump(by_alias=True)


class NormalizerSettings(BaseModel):
    """Validated normalizer configuration."""

    model_config = ConfigDict(extra="forbid")

    max_size: int = Field(default=MAX_BINARY_SIZE, gt=0)
    base64_min_length: int = Field(default=4, ge=4)
    max_depth: int = Field(default=256, ge=1)
    placeholder_max_length: int = Field(default=1024, ge=16)

    def to_options(self) -> NormalizerOptions:
        """Convert validated settings into pipeline options."""
        return NormalizerOptions(
            max_size=self.max_size,
            base64_min_length=self.base64_min_length,
            max_depth=self.max_depth,
            placeholder_max_length=self.placeholder_max_length,
        )


def load_options(environ: Mapping[str, str] | None = None) -> NormalizerOptions:
    """Build options from ``BINARY_NORMALIZER_*`` environment variables.

    Parameters
    ----------
    environ : Mapping[str, str] | None, default=None
        Variables to read. Defaults to ``os.environ``.

    Raises
    ------
    ConfigurationError
        If a variable holds an invalid value.
    """
    source = os.environ if environ is None else environ
    raw: dict[str, str] = {}
    for name in NormalizerSettings.model_fields:
        value = source.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None and value.strip():
            raw[name] = value.strip()
    try:
        settings = NormalizerSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid normalizer settings: {exc}") from exc
    return settings.to_options()
