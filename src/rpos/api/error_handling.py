from __future__ import annotations

import logging
from typing import cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from rpos.api.middleware.request_id import get_request_id
from rpos.application.errors import (
    ApplicationError,
    IdempotencyReplayMismatchError,
    MenuItemNotFoundError,
    MenuItemsUnavailableError,
    NotFoundError,
    NoValidItemsError,
    OrderNotFoundError,
    TransactionError,
    UserNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: str | None = None,
) -> JSONResponse:
    content: dict[str, object] = {"error": message, "code": code}
    if details:
        content["details"] = details
    content["requestId"] = get_request_id()
    return JSONResponse(status_code=status_code, content=content)


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        app_exc = cast(ApplicationError, exc)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(app_exc),
            details=app_exc.details,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    problems = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in validation_exc.errors()
    ]
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details="; ".join(problems),
    )


async def _database_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("database_error", exc_info=exc)
    return _error_response(
        status_code=500,
        code="DATABASE_ERROR",
        message="database operation failed",
        details=str(exc),
    )


async def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", exc_info=exc)
    return _error_response(
        status_code=500,
        code="INTERNAL_ERROR",
        message="internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (ValidationError, 400, "INVALID_REQUEST"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (UserNotFoundError, 404, "USER_NOT_FOUND"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (NotFoundError, 404, "NOT_FOUND"),
        (NoValidItemsError, 422, "NO_VALID_ITEMS"),
        (MenuItemsUnavailableError, 422, "MENU_ITEMS_UNAVAILABLE"),
        (IdempotencyReplayMismatchError, 409, "IDEMPOTENCY_KEY_REPLAY_DIFFERENT_PAYLOAD"),
        (TransactionError, 500, "TRANSACTION_FAILED"),
        (ApplicationError, 500, "APPLICATION_ERROR"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
