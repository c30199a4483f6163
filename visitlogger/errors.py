"""
Errores de la aplicación y sus handlers.
Todas las respuestas de error son JSON con un mensaje corto; nunca se expone
el detalle interno de una excepción.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class VisitLoggerError(Exception):
    status_code = 500
    message = INTERNAL_ERROR_MESSAGE
    # Clave del sobre JSON ("error" o "message")
    envelope_key = "error"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class MissingFields(VisitLoggerError):
    status_code = 400
    message = "Missing required fields"


class NotFound(VisitLoggerError):
    status_code = 404
    message = "No data found for the given scriptId"
    envelope_key = "message"


class StorageUnavailable(VisitLoggerError):
    """Falla del almacén de documentos. Se responde siempre con un 500 genérico."""
    status_code = 500


class RateLimited(VisitLoggerError):
    status_code = 429
    message = "Too many requests, please try again later."


class RequestTimeout(VisitLoggerError):
    status_code = 503
    message = "Request timed out"


def error_response(exc: VisitLoggerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={exc.envelope_key: exc.message})


async def visitlogger_error_handler(request: Request, exc: VisitLoggerError):
    if exc.status_code >= 500:
        logger.error(f"💥 {request.method} {request.url.path} | {type(exc).__name__}: {exc.__cause__ or exc}")
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        message = f"Invalid value for {field}"
    else:
        message = "Invalid request"
    logger.info(f"❌ {request.method} {request.url.path} | {message}")
    return JSONResponse(status_code=400, content={"error": message})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(VisitLoggerError, visitlogger_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
