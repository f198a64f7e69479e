"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from spark.domain.error import DomainError, ErrorKind, ErrorResult
from spark.domain.service.base import STORAGE_UNAVAILABLE_ERRORS

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


class InterfaceError(Exception):
    """Base interface error."""

    pass


class UnauthenticatedError(InterfaceError):
    """Request lacks a valid session token."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)
        self.message = message


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    result = exc.to_result()
    return JSONResponse(
        status_code=STATUS_BY_KIND[result.kind],
        content=result.model_dump(mode="json"),
    )


async def handle_unauthenticated(
    request: Request, exc: UnauthenticatedError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"kind": "UNAUTHENTICATED", "message": exc.message},
    )


async def handle_storage_unavailable(request: Request, exc: Exception) -> JSONResponse:
    """Storage failures raised outside a service's storage guard."""
    logfire.error(
        "Storage unavailable", path=request.url.path, error_type=type(exc).__name__
    )
    result = ErrorResult(
        kind=ErrorKind.SERVICE_UNAVAILABLE,
        message="Service temporarily unavailable",
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=result.model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Map domain and interface errors to JSON error responses.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(UnauthenticatedError, handle_unauthenticated)  # type: ignore[arg-type]
    for exc_class in STORAGE_UNAVAILABLE_ERRORS:
        app.add_exception_handler(exc_class, handle_storage_unavailable)
