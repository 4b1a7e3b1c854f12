"""Global error handlers: every failure is a JSON envelope with success=false."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from arsenal.errors import ArsenalError
from arsenal.health.router import AVAILABLE_ENDPOINTS

logger = structlog.get_logger()


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(ArsenalError)
    async def arsenal_error_handler(request: Request, exc: ArsenalError) -> JSONResponse:
        """Render domain errors with their status and public message."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "request_failed",
            path=request.url.path,
            kind=type(exc).__name__,
            status=exc.status_code,
            error=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "success": False,
                    "error": "Endpoint not found",
                    "available_endpoints": AVAILABLE_ENDPOINTS,
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": "Validation error", "errors": jsonable_encoder(exc.errors())},
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
            content={"success": False, "error": "Internal server error", "message": str(exc)},
        )
