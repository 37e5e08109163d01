"""Shared type aliases and protocols for normalizer modules."""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

type VariantKind = Literal[
    "bytes",
    "memory",
    "typed_array",
    "text",
    "structured",
    "scalar",
    "absent",
    "token",
]

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


@runtime_checkable
class SupportsJsonHook(Protocol):
    """Object that provides its own value to serialize."""

    def __json__(self) -> object:
        """Return the value serialized in place of this object."""


class Symbol:
    """Opaque unique token with an optional description.

    Two symbols are never equal unless they are the same object, even when
    their descriptions match.
    """

    __slots__ = ("description",)

    def __init__(self, description: str | None = None) -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"Symbol({self.description or ''})"
