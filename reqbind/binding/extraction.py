from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from reqbind.binding.coercion import CoercionError, coerce, materialize
from reqbind.binding.descriptors import FieldDescriptor
from reqbind.binding.schema import RecordSchema, TypedRecord
from reqbind.binding.sources import RawValue, RequestSources, SourceKind
from reqbind.schemas.validation import ValidationError

REQUIRED_MESSAGE = "This field is required"


@dataclass
class ExtractionResult:
    record: TypedRecord
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)


def _convert(d: FieldDescriptor, raw: RawValue, from_default: bool):
    if d.source == SourceKind.BODY and not from_default:
        return materialize(raw.value, d.spec.kind)
    return coerce(raw.value, d.spec.kind)


def extract(
    schema: RecordSchema,
    descriptors: Sequence[FieldDescriptor],
    sources: RequestSources,
) -> ExtractionResult:
    """
    Pull every described field out of the request sources into a TypedRecord.

    Presence policy per field:
      - absent + default  -> the default literal is coerced like request text
      - absent + required -> one "required" error, no coercion
      - absent otherwise  -> field keeps its zero value

    Every descriptor is visited; errors are collected, never raised.
    """
    result = ExtractionResult(record=schema.new_record())

    for d in descriptors:
        raw = sources.lookup(d.source, d.key)
        from_default = False

        if not raw.present:
            if d.default is not None:
                raw = RawValue(d.default, True)
                from_default = True
            elif d.required:
                result.errors.append(ValidationError(field=d.name, message=REQUIRED_MESSAGE))
                continue
            else:
                continue

        try:
            value = _convert(d, raw, from_default)
        except CoercionError as e:
            result.errors.append(ValidationError(field=d.name, message=str(e), value=raw.text))
            continue

        result.record.set(d.name, value)

    return result
