from reqbind.binding.coercion import CoercionError, FieldKind, coerce, materialize
from reqbind.binding.descriptors import FieldConfig, FieldDescriptor, Rule, parse_rules
from reqbind.binding.errors import ConfigurationError
from reqbind.binding.extraction import ExtractionResult, extract
from reqbind.binding.pipeline import BadRequest, Outcome, RequestBinder, Unprocessable, Valid, process
from reqbind.binding.schema import FieldSpec, RecordSchema, TypedRecord
from reqbind.binding.sources import RawValue, RequestSources, SourceKind
from reqbind.binding.validation import RuleDef, Validator

__all__ = [ "CoercionError", "FieldKind", "coerce", "materialize",
           "FieldConfig", "FieldDescriptor", "Rule", "parse_rules",
           "ConfigurationError", "ExtractionResult", "extract",
           "BadRequest", "Outcome", "RequestBinder", "Unprocessable", "Valid", "process",
           "FieldSpec", "RecordSchema", "TypedRecord",
           "RawValue", "RequestSources", "SourceKind",
           "RuleDef", "Validator" ]
