"""JSON serialization fallback for structured values.

Structured values are reduced to compact JSON text. The traversal reads every
field through its own failure boundary, so a value that raises from individual
attribute reads, a custom ``__json__`` hook that raises, or a self-referencing
structure all end as a recorded anomaly plus a placeholder rendering instead
of an exception.
"""

from __future__ import annotations

import base64
import dataclasses
import datetime as dt
import enum
import json
import logging
import math
import reprlib
import types
import uuid
from collections.abc import Iterable, Mapping, Sequence, Set
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from pathlib import PurePath
from typing import cast

import numpy as np
from pydantic import BaseModel

from binary_normalizer.errors import (
    CircularStructureAnomaly,
    PropertyAccessAnomaly,
    SerializationAnomaly,
    exception_text,
)
from binary_normalizer.normalizer.dispatch import int_to_text, scalar_to_text
from binary_normalizer.types import JsonValue, SupportsJsonHook, Symbol

logger = logging.getLogger(__name__)

ERROR_PREFIX = "serialization failed"

_BYTES_LIKE = (bytes, bytearray, memoryview)
_NUMBER_TEXT = (Decimal, Fraction, complex)
_TEXT_LIKE = (uuid.UUID, PurePath)
# Ints this short stay under any interpreter digit limit (at least 640 digits).
_SAFE_INT_BITS = 2000
_CALLABLE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)


@dataclass(frozen=True)
class SerializationOutcome:
    """Serialized payload plus the anomaly message, if any."""

    payload: bytes
    error: str | None = None


def _read_field(value: object, name: str, path: str) -> object:
    """Read one attribute, converting any failure into an anomaly."""
    try:
        return getattr(value, name)
    except Exception as exc:
        raise PropertyAccessAnomaly(f"{path}.{name}", exc) from exc


def _slot_names(kind: type) -> list[str]:
    names: list[str] = []
    for klass in kind.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in {"__dict__", "__weakref__"} and slot not in names:
                names.append(slot)
    return names


def _key_text(key: object) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, int):
        return int_to_text(key)
    return str(key)


def _json_int(number: int) -> JsonValue:
    """Keep ints as JSON numbers, or decimal text past the digit limit."""
    if number.bit_length() <= _SAFE_INT_BITS:
        return number
    try:
        int.__repr__(number)
    except ValueError:
        return int_to_text(number)
    return number


def _sort_key(item: JsonValue) -> str:
    return json.dumps(item, sort_keys=True, ensure_ascii=False)


class _Traversal:
    """Depth-first conversion of a value into JSON-compatible data."""

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth
        self._active: set[int] = set()

    def convert(self, value: object, path: str = "$", depth: int = 0) -> JsonValue:
        if depth > self._max_depth:
            raise SerializationAnomaly(
                f"maximum nesting depth of {self._max_depth} exceeded at {path}"
            )
        kind = type(value)

        if value is None:
            return None
        if issubclass(kind, enum.Enum):
            return self.convert(_read_field(value, "value", path), path, depth + 1)
        if issubclass(kind, bool):
            return bool(value)
        if issubclass(kind, int):
            return _json_int(int(value))
        if issubclass(kind, float):
            number = float(value)
            return number if math.isfinite(number) else None
        if issubclass(kind, str):
            return str(value)
        if issubclass(kind, np.generic):
            return self.convert(value.item(), path, depth + 1)
        if issubclass(kind, _NUMBER_TEXT):
            return scalar_to_text(value)
        if issubclass(kind, _TEXT_LIKE):
            return str(value)
        if issubclass(kind, (dt.datetime, dt.date, dt.time)):
            return value.isoformat()
        if issubclass(kind, _BYTES_LIKE):
            return base64.b64encode(bytes(value)).decode("ascii")
        if issubclass(kind, Symbol):
            return repr(value)
        if issubclass(kind, type) or issubclass(kind, _CALLABLE_TYPES):
            return self._describe(value)

        hook = getattr(kind, "__json__", None)
        if callable(hook):
            result = self._call_hook(cast(SupportsJsonHook, value), path)
            return self._convert_hook_result(value, path, depth, result)
        if issubclass(kind, BaseModel):
            result = self._dump_model(cast(BaseModel, value), path)
            return self._convert_hook_result(value, path, depth, result)

        if issubclass(kind, np.ndarray):
            return self.convert(value.tolist(), path, depth + 1)
        with self._entered(value, path):
            if issubclass(kind, Mapping):
                return self._convert_mapping(value, path, depth)
            if issubclass(kind, Sequence):
                return [
                    self.convert(item, f"{path}[{index}]", depth + 1)
                    for index, item in enumerate(self._iterate(value, path))
                ]
            if issubclass(kind, Set):
                items = [
                    self.convert(item, f"{path}[*]", depth + 1)
                    for item in self._iterate(value, path)
                ]
                return sorted(items, key=_sort_key)
            if dataclasses.is_dataclass(kind):
                return {
                    field.name: self.convert(
                        _read_field(value, field.name, path),
                        f"{path}.{field.name}",
                        depth + 1,
                    )
                    for field in dataclasses.fields(kind)
                }
            return self._convert_object(value, kind, path, depth)

    def _convert_mapping(
        self, value: Mapping[object, object], path: str, depth: int
    ) -> JsonValue:
        try:
            items = list(value.items())
        except Exception as exc:
            raise PropertyAccessAnomaly(f"{path}.items", exc) from exc
        converted: dict[str, JsonValue] = {}
        for key, item in items:
            name = _key_text(key)
            converted[name] = self.convert(item, f"{path}.{name}", depth + 1)
        return converted

    def _convert_object(
        self, value: object, kind: type, path: str, depth: int
    ) -> JsonValue:
        converted: dict[str, JsonValue] = {}
        if "__dict__" in dir(kind):
            attributes = _read_field(value, "__dict__", path)
            if not isinstance(attributes, Mapping):
                raise SerializationAnomaly(f"{path}.__dict__ is not a mapping")
            for name, item in list(attributes.items()):
                if isinstance(name, str) and name.startswith("_"):
                    continue
                text = _key_text(name)
                converted[text] = self.convert(item, f"{path}.{text}", depth + 1)
        for name in _slot_names(kind):
            if name.startswith("_") or name in converted:
                continue
            try:
                item = getattr(value, name)
            except AttributeError:
                continue
            except Exception as exc:
                raise PropertyAccessAnomaly(f"{path}.{name}", exc) from exc
            converted[name] = self.convert(item, f"{path}.{name}", depth + 1)
        return converted

    def _convert_hook_result(
        self, value: object, path: str, depth: int, result: object
    ) -> JsonValue:
        if result is value:
            raise SerializationAnomaly(
                f"__json__ hook at {path} returned the object itself"
            )
        with self._entered(value, path):
            return self.convert(result, path, depth + 1)

    @staticmethod
    def _call_hook(value: SupportsJsonHook, path: str) -> object:
        try:
            return value.__json__()
        except Exception as exc:
            text = exception_text(exc, f"__json__ hook failed at {path}")
            raise SerializationAnomaly(text) from exc

    @staticmethod
    def _dump_model(value: BaseModel, path: str) -> object:
        try:
            return value.model_dump(mode="json")
        except Exception as exc:
            text = exception_text(exc, f"model dump failed at {path}")
            raise SerializationAnomaly(text) from exc

    @staticmethod
    def _iterate(value: Iterable[object], path: str) -> list[object]:
        try:
            return list(value)
        except Exception as exc:
            raise PropertyAccessAnomaly(f"{path}[*]", exc) from exc

    @staticmethod
    def _describe(value: object) -> str:
        module = getattr(value, "__module__", None)
        name = getattr(value, "__qualname__", None) or getattr(value, "__name__", None)
        if name is None:
            return object.__repr__(value)
        return f"{module}.{name}" if module else str(name)

    def _entered(self, value: object, path: str) -> _ActiveGuard:
        return _ActiveGuard(self._active, value, path)


class _ActiveGuard:
    """Track containers on the current traversal path to detect cycles."""

    def __init__(self, active: set[int], value: object, path: str) -> None:
        self._active = active
        self._key = id(value)
        self._path = path

    def __enter__(self) -> None:
        if self._key in self._active:
            raise CircularStructureAnomaly(self._path)
        self._active.add(self._key)

    def __exit__(self, *exc_info: object) -> None:
        self._active.discard(self._key)


def placeholder_text(value: object, max_length: int = 1024) -> str:
    """Render a best-effort, non-empty textual placeholder for ``value``.

    Uses a size-bounded ``repr``; falls back to the default
    ``<type object at 0x...>`` rendering when ``repr`` fails or is empty.
    """
    renderer = reprlib.Repr()
    renderer.maxstring = max_length
    renderer.maxother = max_length
    try:
        text = renderer.repr(value)
    except Exception:
        text = ""
    if not text:
        text = object.__repr__(value)
    return text[:max_length]


def to_json_bytes(document: JsonValue) -> bytes:
    """Serialize converted data to compact UTF-8 JSON."""
    text = json.dumps(document, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    return text.encode("utf-8", "backslashreplace")


def serialize_value(
    value: object,
    *,
    max_depth: int = 256,
    placeholder_max_length: int = 1024,
) -> SerializationOutcome:
    """Serialize a structured value to JSON bytes without ever raising.

    Parameters
    ----------
    value : object
        Structured value to serialize.
    max_depth : int, default=256
        Deepest nesting level traversed before giving up.
    placeholder_max_length : int, default=1024
        Maximum length of the placeholder rendering used on failure.

    Returns
    -------
    SerializationOutcome
        JSON payload, or a placeholder payload plus the anomaly message.
    """
    try:
        document = _Traversal(max_depth).convert(value)
        return SerializationOutcome(payload=to_json_bytes(document))
    except Exception as exc:
        message = f"{ERROR_PREFIX}: {exception_text(exc)}"
        logger.debug("structured value fell back to placeholder: %s", message)
        text = placeholder_text(value, placeholder_max_length)
        return SerializationOutcome(
            payload=text.encode("utf-8", "backslashreplace"),
            error=message,
        )
