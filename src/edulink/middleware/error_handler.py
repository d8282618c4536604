"""Global error handlers: map the EduLink error taxonomy onto JSON responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from edulink.errors import InvalidInput, ProfileValidationError, Unavailable, UserNotFound

logger = structlog.get_logger()


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": exc.errors()},
        )

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
        """Contract violations and profile validation failures -> 422."""
        errors = exc.errors if isinstance(exc, ProfileValidationError) else {}
        logger.info("invalid_input", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "errors": errors},
        )

    @app.exception_handler(UserNotFound)
    async def user_not_found_handler(_request: Request, exc: UserNotFound) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": "User not found"},
        )

    @app.exception_handler(Unavailable)
    async def unavailable_handler(request: Request, exc: Unavailable) -> JSONResponse:
        """Store outages the services could not degrade around -> 503."""
        logger.error("store_unavailable", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=503,
            content={"detail": "Service temporarily unavailable"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )
