# app/core/responses.py

"""
Response envelope shared by every endpoint.

Bodies always look like ``{"status": <int>, "data": {...}}``. The transport
status mirrors ``status`` unless ``LEGACY_TRANSPORT_STATUS`` is set, in which
case every response goes out as 200 like the old clients expect.
"""

import logging

from fastapi import Request, status as http_status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import AppError, Internal

logger = logging.getLogger("app")


def envelope(status_code: int, data: dict | None = None) -> JSONResponse:
    transport_status = 200 if settings.LEGACY_TRANSPORT_STATUS else status_code
    return JSONResponse(
        status_code=transport_status,
        content={"status": status_code, "data": jsonable_encoder(data or {})},
    )


def ok(message: str, **data) -> JSONResponse:
    return envelope(http_status.HTTP_200_OK, {"message": message, **data})


# ---------------- EXCEPTION HANDLERS ----------------

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    data = {"message": exc.detail}
    if isinstance(exc, AppError):
        data.update(exc.extra)
    return envelope(exc.status_code, data)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in err['loc'][1:])}: {err['msg']}"
        for err in exc.errors()
    ]
    return envelope(
        http_status.HTTP_400_BAD_REQUEST,
        {"message": "Invalid request.", "errors": errors},
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit hit on {request.method} {request.url.path}")
    return envelope(
        http_status.HTTP_429_TOO_MANY_REQUESTS,
        {"message": f"Rate limit exceeded: {exc.detail}"},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return await http_exception_handler(request, Internal(error=str(exc)))


def register_exception_handlers(app) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
