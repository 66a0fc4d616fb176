"""
Translation of repository outcomes and errors into HTTP responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import errors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"


def location(collection: str, entity_id: int) -> str:
    return f"/{collection}/{int(entity_id)}"


def _error_body(message: str, **extra: object) -> dict:
    return {"error": message, **extra}


def _validation_details(raw_errors: list[dict]) -> list[dict]:
    # Pydantic error dicts may carry exception objects in `ctx`; keep only JSON-safe keys.
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": str(err.get("msg", "")),
            "type": str(err.get("type", "")),
        }
        for err in raw_errors
    ]


async def _not_found_handler(_: Request, exc: errors.NotFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=_error_body(str(exc)))


async def _foreign_key_handler(request: Request, exc: errors.ForeignKeyViolation) -> JSONResponse:
    logger.warning(
        "foreign_key_violation method=%s path=%s constraint=%s",
        request.method,
        request.url.path,
        exc.constraint,
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=_error_body(str(exc)))


async def _data_access_handler(request: Request, exc: errors.DataAccessError) -> JSONResponse:
    logger.error(
        "data_access_failed method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(INTERNAL_ERROR_MESSAGE),
    )


async def _validation_handler(request: Request, exc: errors.ValidationError) -> JSONResponse:
    details = _validation_details(exc.details)
    logger.info("invalid_request method=%s path=%s errors=%s", request.method, request.url.path, len(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(INVALID_BODY_MESSAGE, details=details),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON, wrong field types and non-integer path ids all land here.
    return await _validation_handler(request, errors.ValidationError(list(exc.errors())))


def install_error_handlers(app: FastAPI) -> None:
    # Handlers are looked up along the exception MRO.
    app.add_exception_handler(errors.NotFound, _not_found_handler)
    app.add_exception_handler(errors.ForeignKeyViolation, _foreign_key_handler)
    app.add_exception_handler(errors.DataAccessError, _data_access_handler)
    app.add_exception_handler(errors.ValidationError, _validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
