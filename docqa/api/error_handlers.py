"""
Exception handlers.

Map domain exceptions to HTTP status codes with {"error": message} bodies.
Parameter validation failures are reported as 400 rather than 422.
Unexpected exceptions are logged with their traceback and reported as a
generic 500.

Dependencies: fastapi, docqa.core.exceptions
System role: Error surface of the HTTP API
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docqa.core.exceptions import (
    AcquisitionError,
    DocQAException,
    IndexingError,
    InvalidRequestError,
    UnauthorizedError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

# Most specific first
STATUS_BY_EXCEPTION: list[tuple[type[DocQAException], int]] = [
    (UnauthorizedError, 401),
    (InvalidRequestError, 400),
    (UnsupportedFormatError, 415),
    (AcquisitionError, 502),
    (IndexingError, 502),
]


def status_for(exc: DocQAException) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def docqa_exception_handler(request: Request, exc: DocQAException) -> JSONResponse:
    status_code = status_for(exc)
    if status_code == 500:
        logger.error(
            f"{request.method} {request.url.path} - {type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    logger.warning(
        f"{request.method} {request.url.path} - {status_code} {type(exc).__name__}",
        extra={"details": exc.details},
    )
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.warning(
        f"{request.method} {request.url.path} - 400 RequestValidationError",
        extra={"fields": fields},
    )
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request parameter: {', '.join(fields)}"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"{request.method} {request.url.path} - Unhandled {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocQAException, docqa_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
