"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from forum.domain.error import DomainError
from forum.domain.value import ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.STORE_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as ``{"kind": ..., "detail": ...}``."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logfire.error(
            "Request failed", kind=exc.kind.value, path=request.url.path, error=exc.message
        )
    else:
        logfire.info(
            "Request rejected", kind=exc.kind.value, path=request.url.path, error=exc.message
        )

    return JSONResponse(
        status_code=status_code,
        content={"kind": exc.kind.value, "detail": exc.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on the application."""
    app.add_exception_handler(DomainError, handle_domain_error)
