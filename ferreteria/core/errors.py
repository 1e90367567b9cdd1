from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ferreteria.core.logger import logger

GENERIC_HISTORY_ERROR = "Error al cargar el historial"
MALFORMED_HISTORY_ERROR = "Estructura de respuesta inválida"


class FerreteriaError(Exception):
    """Base class for domain errors raised by services."""


class TransportError(FerreteriaError):
    """Upstream unreachable or answered with a non-2xx status."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.message = message or GENERIC_HISTORY_ERROR
        self.status_code = status_code
        super().__init__(self.message)


class MalformedResponseError(FerreteriaError):
    """Upstream answered 2xx but the body does not have the expected shape."""

    def __init__(self, message: str = MALFORMED_HISTORY_ERROR) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(FerreteriaError):
    """A write was rejected because a field broke a schema rule."""

    def __init__(self, field: str, rule: str, message: Optional[str] = None) -> None:
        self.field = field
        self.rule = rule
        self.message = message or f"{field} viola la regla '{rule}'"
        super().__init__(self.message)


async def _validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("[Errors] validation field=%s rule=%s path=%s", exc.field, exc.rule, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "field": exc.field, "rule": exc.rule},
    )


async def _upstream_handler(request: Request, exc: FerreteriaError) -> JSONResponse:
    logger.error("[Errors] upstream %s path=%s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": getattr(exc, "message", GENERIC_HISTORY_ERROR)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TransportError, _upstream_handler)  # type: ignore[arg-type]
    app.add_exception_handler(MalformedResponseError, _upstream_handler)  # type: ignore[arg-type]
