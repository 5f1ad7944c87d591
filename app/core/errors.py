# app/core/errors.py
#
# Error kinds raised by the services. Each one is an HTTPException so the
# routers can let them propagate and the app-level handler renders them.

from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, **extra):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
        )
        self.extra = extra


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request."


class InvalidCode(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid OTP."


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized: Access denied."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists."


class Internal(AppError):
    pass
