"""Mapping of domain and interface errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from civic.domain.error import (
    BusinessRuleViolationError,
    DatabaseError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from civic.interface.error import UnauthenticatedError

# Checked in order; subclasses before their bases
ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (DatabaseError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: Exception) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, error=str(exc), _exc_info=exc
        )
        detail = "Database error, please retry"
    else:
        detail = str(exc)
    return JSONResponse(status_code=status_code, content={"detail": detail})


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed bodies are reported like any other validation failure
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message}
    )


class ServiceErrorMiddleware:
    """Turns service errors into responses outside the DI request scope.

    Added after the dishka container middleware so the error passes through
    the request scope first, letting the session roll back.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except (DomainError, UnauthenticatedError) as exc:
            if response_started:
                raise
            response = await handle_error(Request(scope), exc)
            await response(scope, receive, send)


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers turning service errors into ``{"detail": ...}`` responses.

    Must be called after the DI container is set up.
    """
    app.add_exception_handler(RequestValidationError, handle_request_validation)  # type: ignore[arg-type]
    app.add_middleware(ServiceErrorMiddleware)
