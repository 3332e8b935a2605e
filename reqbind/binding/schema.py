from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from reqbind.binding.coercion import FieldKind
from reqbind.binding.errors import ConfigurationError
from reqbind.binding.sources import SourceKind


@dataclass(frozen=True)
class FieldSpec:
    """
    One logical field of a record: its kind and the wire key per source.

    A field can only be read from the sources listed in `keys`.
    """

    name: str
    kind: FieldKind
    keys: dict[SourceKind, str] = field(default_factory=dict)

    @property
    def json_key(self) -> str:
        for source in (SourceKind.BODY, SourceKind.QUERY, SourceKind.PATH):
            if source in self.keys:
                return self.keys[source]
        return self.name

    def key_for(self, source: SourceKind) -> str:
        try:
            return self.keys[source]
        except KeyError:
            raise ConfigurationError(
                f"Field {self.name!r} cannot be read from {source.value!r} "
                f"(declared sources: {sorted(s.value for s in self.keys)})"
            ) from None


def _matches_kind(kind: FieldKind, value: Any) -> bool:
    if kind == FieldKind.STRING:
        return isinstance(value, str)
    if kind == FieldKind.BOOL:
        return isinstance(value, bool)
    if kind.is_number:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind.is_list:
        inner = kind.element_kind
        return isinstance(value, list) and all(_matches_kind(inner, v) for v in value)
    return False


class RecordSchema:
    """
    Name -> FieldSpec table, built once at import time.

    Replaces runtime field inspection: records are read and written only
    through the names registered here.
    """

    def __init__(self, name: str, fields: Iterable[FieldSpec]):
        self.name = name
        self._fields: dict[str, FieldSpec] = {}
        for f in fields:
            if f.name in self._fields:
                raise ConfigurationError(f"Duplicate field {f.name!r} in schema {name!r}")
            self._fields[f.name] = f

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def __iter__(self):
        return iter(self._fields.values())

    def spec(self, name: str) -> FieldSpec:
        try:
            return self._fields[name]
        except KeyError:
            raise ConfigurationError(f"Unknown field {name!r} in schema {self.name!r}") from None

    def new_record(self) -> "TypedRecord":
        return TypedRecord(self)


class TypedRecord:
    """Coerced request values, zero-initialized from the schema."""

    def __init__(self, schema: RecordSchema):
        self.schema = schema
        self._values: dict[str, Any] = {f.name: f.kind.zero() for f in schema}

    def get(self, name: str) -> Any:
        self.schema.spec(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        spec = self.schema.spec(name)
        if not _matches_kind(spec.kind, value):
            raise TypeError(f"{name} expects {spec.kind.value}, got {type(value).__name__}")
        self._values[name] = value

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedRecord):
            return NotImplemented
        return self.schema is other.schema and self._values == other._values

    def __repr__(self) -> str:
        return f"TypedRecord({self.schema.name}, {self._values!r})"

    def as_dict(self) -> dict[str, Any]:
        return {f.json_key: self._values[f.name] for f in self.schema}
