from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from reqbind.binding.coercion import render


class SourceKind(str, Enum):
    BODY = "body"
    QUERY = "query"
    PATH = "param"


@dataclass(frozen=True)
class RawValue:
    value: Any = None
    present: bool = False

    @property
    def text(self) -> str | None:
        if not self.present or self.value is None:
            return None
        return render(self.value)


ABSENT = RawValue()


class BodySource:
    """
    Body fields come from a payload decoded once per request.

    Lookups only read the already-materialized mapping; JSON null is absent.
    """

    def __init__(self, payload: Mapping[str, Any] | None = None):
        self._payload = payload or {}

    def lookup(self, key: str) -> RawValue:
        if key not in self._payload or self._payload[key] is None:
            return ABSENT
        return RawValue(self._payload[key], True)


class QuerySource:
    def __init__(self, params: Mapping[str, str] | None = None):
        self._params = params or {}

    def lookup(self, key: str) -> RawValue:
        if key not in self._params:
            return ABSENT
        return RawValue(self._params[key], True)


class PathSource:
    # a missing segment means the route is miswired; still reported as absent
    def __init__(self, params: Mapping[str, str] | None = None):
        self._params = params or {}

    def lookup(self, key: str) -> RawValue:
        if key not in self._params:
            return ABSENT
        return RawValue(self._params[key], True)


@dataclass
class RequestSources:
    body: BodySource = field(default_factory=BodySource)
    query: QuerySource = field(default_factory=QuerySource)
    path: PathSource = field(default_factory=PathSource)

    @classmethod
    def from_mappings(
        cls,
        *,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, str] | None = None,
        path: Mapping[str, str] | None = None,
    ) -> "RequestSources":
        return cls(body=BodySource(body), query=QuerySource(query), path=PathSource(path))

    def lookup(self, source: SourceKind, key: str) -> RawValue:
        if source == SourceKind.BODY:
            return self.body.lookup(key)
        if source == SourceKind.QUERY:
            return self.query.lookup(key)
        if source == SourceKind.PATH:
            return self.path.lookup(key)
        return ABSENT
