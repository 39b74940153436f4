"""
Error taxonomy and exception handlers shared by all services

Every error response has the shape {"error": str, "code": int}.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

logger = structlog.get_logger(__name__)


class ServiceError(Exception):
    """Base class for errors rendered as a uniform error envelope"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.status_code}


class InvalidRequest(ServiceError):
    """Malformed or missing required fields"""
    status_code = 400
    default_message = "Invalid request"


class NotFound(ServiceError):
    """Unknown resource id"""
    status_code = 404
    default_message = "Resource not found"


class ServiceUnavailable(ServiceError):
    """A downstream service could not be reached"""
    status_code = 503
    default_message = "Service temporarily unavailable"


class InternalError(ServiceError):
    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "code": status_code})


def register_exception_handlers(app: FastAPI) -> None:
    """Render the error taxonomy, validation failures and unknown routes uniformly"""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("Request failed", error=exc.message, method=request.method, path=request.url.path)
        else:
            logger.info("Request rejected", error=exc.message, code=exc.status_code, path=request.url.path)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else first.get("msg")
        else:
            message = "Invalid request"
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return error_response(404, "Route not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            method=request.method,
            url=str(request.url),
            exc_info=True
        )
        return error_response(500, "Internal server error")
