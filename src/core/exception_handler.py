"""
Global exception handler for the Purchase Order Converter API.
Provides centralized error handling for all API exceptions.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from .exceptions import (
    OrderConverterException,
    ValidationException,
    UnsupportedTypeException,
    FileTooLargeException,
    UnreadableFileException,
    NotFoundException,
    PersistenceException,
    CorruptRecordException,
    TemplateMissingException,
    SourceUnreadableException
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: OrderConverterException) -> JSONResponse:
    content = {"success": False, "error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""

    @app.exception_handler(NotFoundException)
    async def handle_not_found(request: Request, exc: NotFoundException):
        logger.info("Not found on %s: %s", request.url.path, exc.message)
        return _error_response(404, exc)

    @app.exception_handler(ValidationException)
    async def handle_validation_error(request: Request, exc: ValidationException):
        logger.info("Invalid request on %s: %s", request.url.path, exc.message)
        return _error_response(400, exc)

    @app.exception_handler(UnsupportedTypeException)
    async def handle_unsupported_type(request: Request, exc: UnsupportedTypeException):
        logger.info("Rejected upload: %s", exc.message)
        return _error_response(400, exc)

    @app.exception_handler(FileTooLargeException)
    async def handle_file_too_large(request: Request, exc: FileTooLargeException):
        logger.info("Rejected upload: %s", exc.message)
        return _error_response(413, exc)

    @app.exception_handler(UnreadableFileException)
    async def handle_unreadable_file(request: Request, exc: UnreadableFileException):
        logger.warning("Unreadable file: %s (%s)", exc.message, exc.details)
        return _error_response(400, exc)

    @app.exception_handler(SourceUnreadableException)
    async def handle_source_unreadable(request: Request, exc: SourceUnreadableException):
        logger.warning("Unreadable source file: %s (%s)", exc.message, exc.details)
        return _error_response(400, exc)

    @app.exception_handler(TemplateMissingException)
    async def handle_template_missing(request: Request, exc: TemplateMissingException):
        logger.error("Template missing: %s (%s)", exc.message, exc.details)
        return _error_response(500, exc)

    @app.exception_handler(CorruptRecordException)
    async def handle_corrupt_record(request: Request, exc: CorruptRecordException):
        logger.error("Corrupt record: %s (%s)", exc.message, exc.details)
        return _error_response(500, exc)

    @app.exception_handler(PersistenceException)
    async def handle_persistence_error(request: Request, exc: PersistenceException):
        logger.error("Storage error: %s (%s)", exc.message, exc.details)
        return _error_response(500, exc)

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "An unexpected error occurred"}
        )
