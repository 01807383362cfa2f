"""
Global exception handler for the Drug Information API.
Provides centralized error handling for all API exceptions.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .exceptions import (
    DrugNotFoundException,
    ValidationException,
    ServiceException,
    StoreException,
    FileProcessingException
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""

    @app.exception_handler(DrugNotFoundException)
    async def handle_not_found(request: Request, exc: DrugNotFoundException):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(ValidationException)
    async def handle_validation_error(request: Request, exc: ValidationException):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(FileProcessingException)
    async def handle_file_error(request: Request, exc: FileProcessingException):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(ServiceException)
    async def handle_service_error(request: Request, exc: ServiceException):
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(StoreException)
    async def handle_store_error(request: Request, exc: StoreException):
        logger.error("Unhandled store error on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=500, content={"error": "Something went wrong!"})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ())),
                "message": error.get("msg", "")
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request parameters", "details": details}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Something went wrong!"})
