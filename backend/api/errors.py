"""Map domain errors to HTTP responses: {"detail": message, "code": code}."""
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from booking_core.errors import (
    AuthenticationError,
    AuthorizationError,
    ChargeHubError,
    ConflictError,
    NotFoundError,
    TransientServiceError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[ChargeHubError], int] = {
    ValidationError: 422,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    TransientServiceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: ChargeHubError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def chargehub_error_handler(request: Request, exc: ChargeHubError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors()), "code": ValidationError.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ChargeHubError, chargehub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
