from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from reqbind.binding.errors import ConfigurationError
from reqbind.binding.schema import FieldSpec
from reqbind.binding.sources import SourceKind


@dataclass(frozen=True)
class Rule:
    name: str
    param: str | None = None

    def __str__(self) -> str:
        return self.name if self.param is None else f"{self.name}={self.param}"


@dataclass(frozen=True)
class FieldConfig:
    """
    Endpoint configuration for one field, as written next to the route.

    Example:
      FieldConfig("Name", SourceKind.BODY, required=True, rules="required,min=3,max=50")
    """

    field_name: str
    source: SourceKind
    required: bool = False
    default: str | None = None
    rules: str = ""


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    source: SourceKind
    spec: FieldSpec
    required: bool = False
    default: str | None = None
    rules: tuple[Rule, ...] = ()

    @property
    def key(self) -> str:
        return self.spec.key_for(self.source)


def parse_rules(expr: str, is_known: Callable[[str], bool]) -> tuple[Rule, ...]:
    """
    Parse a rule expression such as "required,min=3,max=50" into Rules.

    Tokens are comma separated. A bare token that is not a known rule name
    continues the previous rule's parameter, so "in=tech,sports,politics"
    is a single `in` rule.
    """
    rules: list[Rule] = []
    for token in expr.split(","):
        token = token.strip()
        if not token:
            continue

        if "=" in token:
            name, _, param = token.partition("=")
            name = name.strip()
            if not is_known(name):
                raise ConfigurationError(f"Unknown validation rule {name!r} in {expr!r}")
            rules.append(Rule(name, param.strip()))
            continue

        if is_known(token):
            rules.append(Rule(token))
            continue

        if rules and rules[-1].param is not None:
            prev = rules.pop()
            rules.append(Rule(prev.name, f"{prev.param},{token}"))
            continue

        raise ConfigurationError(f"Unknown validation rule {token!r} in {expr!r}")

    return tuple(rules)
