from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from fastapi import status

from reqbind.binding.coercion import CoercionError, coerce
from reqbind.binding.descriptors import FieldConfig, FieldDescriptor
from reqbind.binding.errors import ConfigurationError
from reqbind.binding.extraction import extract
from reqbind.binding.schema import RecordSchema, TypedRecord
from reqbind.binding.sources import RequestSources
from reqbind.binding.validation import Validator
from reqbind.schemas.validation import ErrorResponse

logger = logging.getLogger(__name__)

HTTP_200_OK = status.HTTP_200_OK
HTTP_400_BAD_REQUEST = status.HTTP_400_BAD_REQUEST
HTTP_422_UNPROCESSABLE_ENTITY = 422  # named differently across starlette releases


@dataclass(frozen=True)
class BadRequest:
    error: ErrorResponse
    status_code: int = HTTP_400_BAD_REQUEST


@dataclass(frozen=True)
class Unprocessable:
    error: ErrorResponse
    status_code: int = HTTP_422_UNPROCESSABLE_ENTITY


@dataclass(frozen=True)
class Valid:
    record: TypedRecord
    status_code: int = HTTP_200_OK


Outcome = Union[BadRequest, Unprocessable, Valid]


def process(
    schema: RecordSchema,
    descriptors: Sequence[FieldDescriptor],
    group: str | None,
    sources: RequestSources,
    *,
    validator: Validator,
) -> Outcome:
    """
    Extract, coerce and validate one request.

    Missing or uncoercible fields stop before validation (BadRequest);
    rule violations across all fields come back together (Unprocessable).
    """
    extracted = extract(schema, descriptors, sources)
    if extracted.failed:
        logger.info(f"[{group}] rejected {len(extracted.errors)} field(s) during extraction")
        return BadRequest(
            ErrorResponse(
                code=HTTP_400_BAD_REQUEST,
                message="Invalid request data",
                errors=extracted.errors,
            )
        )

    violations = validator.validate(extracted.record, descriptors, group)
    if violations:
        logger.info(f"[{group}] {len(violations)} validation error(s)")
        return Unprocessable(
            ErrorResponse(
                code=HTTP_422_UNPROCESSABLE_ENTITY,
                message="Validation failed",
                errors=violations,
            )
        )

    return Valid(extracted.record)


def compile_descriptors(
    schema: RecordSchema,
    configs: Iterable[FieldConfig],
    validator: Validator,
) -> tuple[FieldDescriptor, ...]:
    """
    Resolve endpoint configuration against the schema and validator.

    Anything miswired raises ConfigurationError here rather than per request.
    """
    out: list[FieldDescriptor] = []
    for cfg in configs:
        spec = schema.spec(cfg.field_name)
        spec.key_for(cfg.source)

        if cfg.default is not None:
            try:
                coerce(cfg.default, spec.kind)
            except CoercionError as e:
                raise ConfigurationError(
                    f"Default {cfg.default!r} for {cfg.field_name!r} is not a valid {spec.kind.value}: {e}"
                ) from None

        out.append(
            FieldDescriptor(
                name=cfg.field_name,
                source=cfg.source,
                spec=spec,
                required=cfg.required,
                default=cfg.default,
                rules=validator.compile_rules(cfg.rules, spec.kind, cfg.field_name),
            )
        )
    return tuple(out)


class RequestBinder:
    """
    A compiled endpoint: schema, descriptors, validator and validation group.

    Usage:
      binder = RequestBinder(GENERIC_REQUEST, [FieldConfig(...), ...], validator=v, group="create")
      outcome = binder.process(sources)
    """

    def __init__(
        self,
        schema: RecordSchema,
        configs: Iterable[FieldConfig],
        *,
        validator: Validator,
        group: str | None = None,
    ):
        self.schema = schema
        self.validator = validator
        self.group = group
        try:
            self.descriptors = compile_descriptors(schema, configs, validator)
        except ConfigurationError as e:
            logger.error(f"Endpoint group {group!r} is misconfigured: {e}")
            raise

    def process(self, sources: RequestSources) -> Outcome:
        return process(self.schema, self.descriptors, self.group, sources, validator=self.validator)
