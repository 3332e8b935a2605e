import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reqbind.schemas.validation import ErrorResponse

logger = logging.getLogger(__name__)


class RequestRejected(Exception):
    """Carries a binding ErrorResponse out of a dependency; status comes from error.code."""

    def __init__(self, error: ErrorResponse):
        self.error = error
        super().__init__(error.message)


async def request_rejected_handler(request: Request, exc: RequestRejected) -> JSONResponse:
    logger.info(
        f"{request.method} {request.url.path} -> {exc.error.code} "
        f"{exc.error.message} ({len(exc.error.errors)} error(s))"
    )
    return JSONResponse(status_code=exc.error.code, content=exc.error.to_json())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestRejected, request_rejected_handler)
