"""
Mapping of errors to HTTP responses.

Every error body has the shape ``{"code": ..., "message": ...}``. An
AuthenticationFailed error carries the response its authenticator prepared,
which is returned unchanged.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.exceptions import (
    ACLStoreException, AuthenticationFailed,
    CODE_BAD_REQUEST, CODE_INTERNAL_ERROR, CODE_NOT_FOUND
)
from ..core.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message})


def add_exception_handlers(app: FastAPI):
    """Add exception handlers to the application"""

    @app.exception_handler(AuthenticationFailed)
    async def authentication_failed_handler(request: Request, exc: AuthenticationFailed):
        logger.info(f"Authentication failed for {request.method} {request.url.path}: {exc.reason}")
        return exc.response

    @app.exception_handler(ACLStoreException)
    async def acl_store_exception_handler(request: Request, exc: ACLStoreException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
        return error_response(status.HTTP_400_BAD_REQUEST, CODE_BAD_REQUEST, f"cannot unmarshal request: {message}")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(exc.status_code, CODE_NOT_FOUND, "URL path not found")
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return error_response(exc.status_code, "method not allowed", f"{request.method} not allowed")
        return error_response(exc.status_code, str(exc.detail).lower(), str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, CODE_INTERNAL_ERROR, "Internal server error")
