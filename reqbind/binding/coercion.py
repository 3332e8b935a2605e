from __future__ import annotations

import re
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    STRING = "string"
    INT = "int"
    UNSIGNED_INT = "uint"
    BOOL = "bool"
    STRING_LIST = "string_list"
    UNSIGNED_INT_LIST = "uint_list"

    @property
    def is_list(self) -> bool:
        return self in (FieldKind.STRING_LIST, FieldKind.UNSIGNED_INT_LIST)

    @property
    def is_number(self) -> bool:
        return self in (FieldKind.INT, FieldKind.UNSIGNED_INT)

    @property
    def element_kind(self) -> FieldKind:
        if self == FieldKind.STRING_LIST:
            return FieldKind.STRING
        if self == FieldKind.UNSIGNED_INT_LIST:
            return FieldKind.UNSIGNED_INT
        raise ValueError(f"{self.value} is not a list kind")

    def zero(self) -> Any:
        if self.is_list:
            return []
        if self == FieldKind.STRING:
            return ""
        if self == FieldKind.BOOL:
            return False
        return 0


class CoercionError(ValueError):
    """Raw input could not be converted to the field's kind. str(err) is the client message."""


INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
UINT_MAX = 2**64 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")

# 2**64 - 1 has 20 digits; anything longer is out of range for both kinds
MAX_DIGITS = 20

_TRUE = {"true", "1", "on", "yes"}
_FALSE = {"false", "0", "off", "no", ""}


def _parse_int(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise CoercionError("must be a valid integer")
    if len(raw.lstrip("+-").lstrip("0")) > MAX_DIGITS:
        raise CoercionError("must be a valid integer")
    v = int(raw)
    if v < INT_MIN or v > INT_MAX:
        raise CoercionError("must be a valid integer")
    return v


def _parse_uint(raw: str, message: str = "must be a positive integer") -> int:
    if not _UINT_RE.fullmatch(raw):
        raise CoercionError(message)
    if len(raw.lstrip("0")) > MAX_DIGITS:
        raise CoercionError(message)
    v = int(raw)
    if v > UINT_MAX:
        raise CoercionError(message)
    return v


def _parse_bool(raw: str) -> bool:
    s = raw.lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise CoercionError("must be a boolean")


def _split(raw: str) -> list[str]:
    parts = [p.strip() for p in raw.split(",")]
    if all(p == "" for p in parts):
        return []
    return parts


def coerce(raw: str, kind: FieldKind) -> Any:
    """
    Convert raw request text into a value of `kind`.

    Raises CoercionError (never anything else) when the text does not fit.
    """
    if kind == FieldKind.STRING:
        return raw

    if kind == FieldKind.INT:
        return _parse_int(raw)

    if kind == FieldKind.UNSIGNED_INT:
        return _parse_uint(raw)

    if kind == FieldKind.BOOL:
        return _parse_bool(raw)

    if kind == FieldKind.STRING_LIST:
        return _split(raw)

    if kind == FieldKind.UNSIGNED_INT_LIST:
        out: list[int] = []
        for i, part in enumerate(_split(raw), start=1):
            out.append(_parse_uint(part, f"element {i}: must be positive integer"))
        return out

    raise CoercionError("unsupported field type")


def _is_json_int(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not numbers here
    return isinstance(value, int) and not isinstance(value, bool)


def materialize(value: Any, kind: FieldKind) -> Any:
    """
    Convert a value that was already decoded from a JSON body.

    Strings take the same path as query/path text. Native JSON values must
    already match the kind.
    """
    if isinstance(value, str):
        return coerce(value, kind)

    if kind == FieldKind.STRING:
        raise CoercionError("must be a string")

    if kind == FieldKind.INT:
        if not _is_json_int(value) or value < INT_MIN or value > INT_MAX:
            raise CoercionError("must be a valid integer")
        return value

    if kind == FieldKind.UNSIGNED_INT:
        if not _is_json_int(value) or value < 0 or value > UINT_MAX:
            raise CoercionError("must be a positive integer")
        return value

    if kind == FieldKind.BOOL:
        if not isinstance(value, bool):
            raise CoercionError("must be a boolean")
        return value

    if kind == FieldKind.STRING_LIST:
        if not isinstance(value, list):
            raise CoercionError("must be a list of strings")
        for i, item in enumerate(value, start=1):
            if not isinstance(item, str):
                raise CoercionError(f"element {i}: must be a string")
        return list(value)

    if kind == FieldKind.UNSIGNED_INT_LIST:
        if not isinstance(value, list):
            raise CoercionError("must be a list of positive integers")
        for i, item in enumerate(value, start=1):
            if not _is_json_int(item) or item < 0 or item > UINT_MAX:
                raise CoercionError(f"element {i}: must be positive integer")
        return list(value)

    raise CoercionError("unsupported field type")


def render(value: Any) -> str:
    """Text form of a typed value, as echoed back in error payloads."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(render(v) for v in value)
    return str(value)
