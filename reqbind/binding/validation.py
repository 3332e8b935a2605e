from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from email_validator import EmailNotValidError, validate_email

from reqbind.binding.coercion import FieldKind, render
from reqbind.binding.descriptors import FieldDescriptor, Rule, parse_rules
from reqbind.binding.errors import ConfigurationError
from reqbind.binding.schema import TypedRecord
from reqbind.schemas.validation import ValidationError

logger = logging.getLogger(__name__)

# kind categories a rule can apply to
STRING = "string"
NUMBER = "number"
LIST = "list"
BOOL = "bool"
ANY = frozenset({STRING, NUMBER, LIST, BOOL})

OMITEMPTY = "omitempty"
DIVE = "dive"

DEFAULT_GROUPS = ("create", "update")


def category(kind: FieldKind) -> str:
    if kind.is_list:
        return LIST
    if kind.is_number:
        return NUMBER
    if kind == FieldKind.BOOL:
        return BOOL
    return STRING


def is_zero(value: Any) -> bool:
    return value is None or value == "" or value == [] or value is False or value == 0


def _size(value: Any, kind: FieldKind) -> int:
    if kind.is_number:
        return value
    return len(value)


def _int_param(rule: str, param: str | None) -> int:
    try:
        return int(param)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigurationError(f"Rule {rule!r} expects an integer parameter, got {param!r}") from None


_NUMERIC_RE = re.compile(r"[-+]?[0-9]+(?:\.[0-9]+)?")


def _check_required(value, kind, param):
    return not is_zero(value)


def _check_min(value, kind, param):
    return _size(value, kind) >= int(param)


def _check_max(value, kind, param):
    return _size(value, kind) <= int(param)


def _check_len(value, kind, param):
    return _size(value, kind) == int(param)


def _check_in(value, kind, param):
    return render(value) in param.split(",")


def _check_unique(value, kind, param):
    seen = [render(v) for v in value]
    return len(set(seen)) == len(seen)


def _check_email(value, kind, param):
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _check_alpha(value, kind, param):
    return value.isascii() and value.isalpha()


def _check_alphanum(value, kind, param):
    return value.isascii() and value.isalnum()


def _check_numeric(value, kind, param):
    return _NUMERIC_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class RuleDef:
    """
    A registered validation rule.

    `check(value, kind, param)` returns True when the value passes.
    `param` is one of None (no parameter), "int" or "list".
    """

    name: str
    check: Callable[[Any, FieldKind, str | None], bool]
    applies_to: frozenset = ANY
    param: str | None = None


DEFAULT_RULES: tuple[RuleDef, ...] = (
    RuleDef("required", _check_required),
    RuleDef("min", _check_min, frozenset({STRING, NUMBER, LIST}), "int"),
    RuleDef("max", _check_max, frozenset({STRING, NUMBER, LIST}), "int"),
    RuleDef("len", _check_len, frozenset({STRING, NUMBER, LIST}), "int"),
    RuleDef("in", _check_in, frozenset({STRING, NUMBER, BOOL}), "list"),
    RuleDef("unique", _check_unique, frozenset({LIST})),
    RuleDef("email", _check_email, frozenset({STRING})),
    RuleDef("alpha", _check_alpha, frozenset({STRING})),
    RuleDef("alphanum", _check_alphanum, frozenset({STRING})),
    RuleDef("numeric", _check_numeric, frozenset({STRING})),
)

# Templates keyed by rule name, then optionally by kind category.
DEFAULT_MESSAGES: dict[str, str | dict[str, str]] = {
    "required": "This field is required",
    "min": {
        STRING: "Minimum {param} characters required",
        LIST: "At least {param} items required",
        NUMBER: "Minimum value is {param}",
    },
    "max": {
        STRING: "Maximum {param} characters allowed",
        LIST: "Maximum {param} items allowed",
        NUMBER: "Maximum value is {param}",
    },
    "in": "Must be one of: {choices}",
    "unique": "Contains duplicate values",
    "email": "Invalid email format",
    DIVE: "Invalid element: {inner}",
}

FALLBACK_MESSAGE = "Field validation for '{field}' failed on the '{rule}' rule"


class Validator:
    """
    Rule registry plus the engine that runs compiled rules over a record.

    Built once at startup and only read afterwards. Per field, evaluation
    stops at the first failing rule; all fields are always visited.
    """

    def __init__(
        self,
        rules: Iterable[RuleDef] = DEFAULT_RULES,
        messages: dict[str, str | dict[str, str]] | None = None,
        groups: Sequence[str] = DEFAULT_GROUPS,
    ):
        self._rules: dict[str, RuleDef] = {r.name: r for r in rules}
        self._messages = dict(DEFAULT_MESSAGES if messages is None else messages)
        self._groups = frozenset(groups)

        reserved = {OMITEMPTY, DIVE} | self._groups
        clash = reserved & set(self._rules)
        if clash:
            raise ConfigurationError(f"Rule names clash with reserved tags: {sorted(clash)}")

    @property
    def groups(self) -> frozenset:
        return self._groups

    def is_known(self, name: str) -> bool:
        return name in self._rules or name in self._groups or name in (OMITEMPTY, DIVE)

    # ------------------------------------------------------------------
    # compile time

    def compile_rules(self, expr: str, kind: FieldKind, field: str = "") -> tuple[Rule, ...]:
        """Parse a rule expression and check every rule fits the field's kind."""
        rules = parse_rules(expr, self.is_known)

        current = kind
        after_list: Rule | None = None
        for rule in rules:
            if after_list is not None and rule.param is None:
                raise ConfigurationError(
                    f"{field}: {rule.name!r} directly follows {str(after_list)!r}; "
                    f"move the list rule last or rename the choice"
                )
            after_list = None

            if rule.name in self._groups or rule.name == OMITEMPTY:
                if rule.param is not None:
                    raise ConfigurationError(f"{field}: {rule.name!r} takes no parameter")
                continue

            if rule.name == DIVE:
                if current is not kind or not kind.is_list:
                    raise ConfigurationError(f"{field}: 'dive' needs a list field, got {kind.value}")
                current = kind.element_kind
                continue

            rdef = self._rules[rule.name]
            if category(current) not in rdef.applies_to:
                raise ConfigurationError(
                    f"{field}: rule {rule.name!r} does not apply to {current.value} values"
                )
            if rdef.param is None and rule.param is not None:
                raise ConfigurationError(f"{field}: rule {rule.name!r} takes no parameter")
            if rdef.param == "int":
                _int_param(rule.name, rule.param)
            if rdef.param == "list" and not rule.param:
                raise ConfigurationError(f"{field}: rule {rule.name!r} needs a comma separated list")
            if rdef.param == "list":
                after_list = rule

        return rules

    # ------------------------------------------------------------------
    # request time

    def validate(
        self,
        record: TypedRecord,
        descriptors: Sequence[FieldDescriptor],
        group: str | None = None,
    ) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for d in descriptors:
            if not self._in_scope(d.rules, group):
                continue
            errors.extend(self._run(d.name, d.spec.kind, record.get(d.name), d.rules))
        return errors

    def _in_scope(self, rules: Sequence[Rule], group: str | None) -> bool:
        scopes = {r.name for r in rules if r.name in self._groups}
        return not scopes or group in scopes

    def _run(
        self,
        field: str,
        kind: FieldKind,
        value: Any,
        rules: Sequence[Rule],
    ) -> list[ValidationError]:
        for i, rule in enumerate(rules):
            if rule.name in self._groups:
                continue

            if rule.name == OMITEMPTY:
                if is_zero(value):
                    return []
                continue

            if rule.name == DIVE:
                return self._dive(field, kind.element_kind, value, rules[i + 1:])

            rdef = self._rules[rule.name]
            if not rdef.check(value, kind, rule.param):
                return [
                    ValidationError(
                        field=field,
                        message=self.message(rule, kind, field),
                        value=render(value),
                    )
                ]
        return []

    def _dive(
        self,
        field: str,
        kind: FieldKind,
        items: list,
        rules: Sequence[Rule],
    ) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for idx, item in enumerate(items):
            for err in self._run(f"{field}[{idx}]", kind, item, rules):
                err = err.model_copy(update={"message": self._element_message(kind, err.message)})
                errors.append(err)
        return errors

    # ------------------------------------------------------------------
    # messages

    def _format(self, name: str, kind: FieldKind, **values: Any) -> str:
        template = self._messages[name]
        if isinstance(template, dict):
            template = template.get(category(kind)) or next(iter(template.values()))
        return template.format(**values)

    def _element_message(self, kind: FieldKind, inner: str) -> str:
        if DIVE not in self._messages:
            return inner
        try:
            return self._format(DIVE, kind, inner=inner)
        except (KeyError, IndexError):
            logger.warning("Message template for 'dive' is malformed; using the element message")
            return inner

    def message(self, rule: Rule, kind: FieldKind, field: str = "") -> str:
        if rule.name not in self._messages:
            return FALLBACK_MESSAGE.format(field=field, rule=rule.name)

        choices = ", ".join((rule.param or "").split(","))
        try:
            return self._format(rule.name, kind, param=rule.param, choices=choices, field=field)
        except (KeyError, IndexError):
            logger.warning(f"Message template for rule {rule.name!r} is malformed; using fallback")
            return FALLBACK_MESSAGE.format(field=field, rule=rule.name)
