"""Map RetirePlan errors onto the standard JSON error body."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from retireplan.core.exceptions import DataNotFoundError, InvalidInputError, RetirePlanError

logger = logging.getLogger(__name__)


def error_response(status: HTTPStatus, message: str, path: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.value,
        content={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": status.value,
            "error": status.phrase,
            "message": message,
            "path": path,
        },
    )


async def _not_found(request: Request, exc: DataNotFoundError) -> JSONResponse:
    return error_response(HTTPStatus.NOT_FOUND, str(exc), request.url.path)


async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("Rejected request to %s: %s", request.url.path, exc)
    return error_response(HTTPStatus.BAD_REQUEST, str(exc), request.url.path)


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = ", ".join(
        ".".join(str(part) for part in err["loc"]) for err in exc.errors()
    )
    return error_response(HTTPStatus.BAD_REQUEST, f"Invalid request parameters: {fields}",
                          request.url.path)


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    """Storage failures and anything unhandled; details stay in the log."""
    logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc,
                 exc_info=exc)
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "An unexpected error occurred",
                          request.url.path)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DataNotFoundError, _not_found)
    app.add_exception_handler(InvalidInputError, _invalid_input)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(RetirePlanError, _unexpected)
    app.add_exception_handler(Exception, _unexpected)
