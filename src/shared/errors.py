"""Translate domain and framework exceptions into the ``{"message": ...}`` error shape.

Every failure leaving the API carries a JSON body with a single ``message``
key. Handlers are registered once on the application; routers simply let
domain exceptions propagate.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.logging import get_logger

logger = get_logger(__name__)


class ConflictError(Exception):
    """Raised when a write collides with an existing record (e.g. a duplicate email)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def format_messages(messages, default: str) -> str:
    """Flatten Protean's ``{field: [messages]}`` mapping into one readable sentence."""
    if isinstance(messages, str):
        return messages or default
    if isinstance(messages, dict):
        parts = []
        for field, field_messages in messages.items():
            if isinstance(field_messages, str):
                field_messages = [field_messages]
            for msg in field_messages:
                msg = str(msg)
                parts.append(msg if msg[:1].isupper() else f"{field} {msg}")
        return "; ".join(parts) or default
    return default


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    message = format_messages(getattr(exc, "messages", None), "Validation failed")
    logger.info("validation_failed", path=request.url.path, message=message)
    return error_response(400, message)


async def _not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    message = format_messages(getattr(exc, "messages", None), "Resource not found")
    return error_response(404, message)


async def _conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return error_response(409, exc.message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        location = ".".join(str(loc) for loc in err.get("loc", ()) if loc not in ("body", "query", "path", "form"))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return error_response(400, "; ".join(parts) or "Invalid request")


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON ``{message}`` error translation on ``app``."""
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, _not_found_handler)
    app.add_exception_handler(ConflictError, _conflict_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
