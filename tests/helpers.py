from reqbind.binding.descriptors import FieldConfig
from reqbind.binding.pipeline import RequestBinder
from reqbind.binding.sources import RequestSources
from reqbind.binding.validation import Validator
from reqbind.schemas.request import GENERIC_REQUEST


def make_sources(body: dict | None = None, query: dict | None = None, path: dict | None = None) -> RequestSources:
    return RequestSources.from_mappings(body=body, query=query, path=path)


def make_binder(configs: list[FieldConfig], group: str | None = None, validator: Validator | None = None) -> RequestBinder:
    return RequestBinder(GENERIC_REQUEST, configs, validator=validator or Validator(), group=group)


def compile_one(validator: Validator, name: str, source, rules: str, **kw):
    """Compile a single field config and return its descriptor."""
    binder = make_binder([FieldConfig(name, source, rules=rules, **kw)], validator=validator)
    return binder.descriptors[0]


def errors_of(outcome) -> list[tuple[str, str]]:
    return [(e.field, e.message) for e in outcome.error.errors]
