from __future__ import annotations

import json

from fastapi import Request, status

from reqbind.api.errors import RequestRejected
from reqbind.binding.pipeline import RequestBinder, Valid
from reqbind.binding.schema import TypedRecord
from reqbind.binding.sources import RequestSources
from reqbind.schemas.validation import ErrorResponse


def _bad_body() -> RequestRejected:
    return RequestRejected(ErrorResponse(code=status.HTTP_400_BAD_REQUEST, message="Invalid request body"))


async def read_sources(request: Request) -> RequestSources:
    """
    Collect the three raw sources of a request.

    The body is decoded once, up front; an empty body counts as {}.
    Repeated query keys keep their first value.
    """
    body: dict = {}
    raw = await request.body()
    if raw.strip():
        try:
            payload = json.loads(raw)
        except ValueError:
            raise _bad_body()
        if not isinstance(payload, dict):
            raise _bad_body()
        body = payload

    params = request.query_params
    query = {key: params.getlist(key)[0] for key in params.keys()}

    return RequestSources.from_mappings(body=body, query=query, path=dict(request.path_params))


def bind(binder: RequestBinder):
    """
    Usage:
      record: TypedRecord = Depends(bind(search_binder))

    Raises RequestRejected (400/422) when the request does not bind.
    """

    async def _dep(request: Request) -> TypedRecord:
        sources = await read_sources(request)
        outcome = binder.process(sources)
        if isinstance(outcome, Valid):
            return outcome.record
        raise RequestRejected(outcome.error)

    return _dep
