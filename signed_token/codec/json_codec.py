"""
JSON adapter that keeps objects as ordered key/value pairs.

A token signature covers the exact encoded bytes, so header and payload are
never folded into dicts: key order and duplicate keys survive a parse and
re-serialization unchanged.
"""

import json
import math
from typing import Any, Iterable, Iterator, List, Mapping, Tuple


class JsonCodecError(ValueError):
    """Bytes are not a UTF-8 JSON object."""


class JsonObject(tuple):
    """Immutable ordered sequence of ``(key, value)`` pairs."""

    __slots__ = ()

    def __new__(cls, pairs: Iterable[Tuple[str, Any]] = ()):
        return super().__new__(cls, (tuple(pair) for pair in pairs))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "JsonObject":
        """Build an object from a mapping, converting nested dicts too."""
        return cls((key, _from_python(value)) for key, value in mapping.items())

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the first pair named ``key``."""
        for name, value in self:
            if name == key:
                return value
        return default

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self)

    def keys(self) -> List[str]:
        return [name for name, _ in self]

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(self)

    def to_dict(self) -> dict:
        """Plain-dict view; the first occurrence of a duplicate key wins."""
        result: dict = {}
        for name, value in self:
            if name not in result:
                result[name] = _to_python(value)
        return result

    def __repr__(self) -> str:
        return f"JsonObject({list(self)!r})"


def _from_python(value: Any) -> Any:
    if isinstance(value, JsonObject):
        return value
    if isinstance(value, Mapping):
        return JsonObject.from_mapping(value)
    if isinstance(value, (list, tuple)):
        return [_from_python(item) for item in value]
    return value


def _to_python(value: Any) -> Any:
    if isinstance(value, JsonObject):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_python(item) for item in value]
    return value


def _reject_constant(name: str) -> Any:
    raise JsonCodecError(f"non-finite number {name} is not allowed")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise JsonCodecError(f"number {text} is out of range")
    return value


def decode_object(data: bytes) -> JsonObject:
    """UTF-8 decode and parse ``data``; the top-level value must be an object."""
    try:
        text = data.decode("utf-8")
        value = json.loads(text, object_pairs_hook=JsonObject, parse_float=_parse_float,
                           parse_constant=_reject_constant)
    except JsonCodecError:
        raise
    except ValueError as exc:
        raise JsonCodecError(str(exc)) from exc

    if not isinstance(value, JsonObject):
        raise JsonCodecError("top-level value is not an object")

    # escaped lone surrogates decode but cannot be written back as UTF-8
    try:
        encode_object(value)
    except UnicodeEncodeError as exc:
        raise JsonCodecError("string contains an unpaired surrogate") from exc
    return value


def stringify(value: Any) -> str:
    """Compact JSON text with key order preserved and non-ASCII kept as-is."""
    if isinstance(value, JsonObject):
        return _stringify_pairs(value)
    if isinstance(value, Mapping):
        return _stringify_pairs(value.items())
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(stringify(item) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False, allow_nan=False)


def _stringify_pairs(pairs: Iterable[Tuple[str, Any]]) -> str:
    members = []
    for key, value in pairs:
        if not isinstance(key, str):
            raise TypeError(f"object keys must be strings, not {type(key).__name__}")
        members.append(json.dumps(key, ensure_ascii=False) + ":" + stringify(value))
    return "{" + ",".join(members) + "}"


def encode_object(value: JsonObject) -> bytes:
    """Stringify and UTF-8 encode a JSON object."""
    return stringify(value).encode("utf-8")
