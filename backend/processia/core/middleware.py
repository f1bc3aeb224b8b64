"""
Middleware de tratamento de exceções.

Converte exceções em respostas HTTP padronizadas.
"""

import traceback
import uuid

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from processia.core.config import settings
from processia.core.exceptions import (
    AuthenticationError,
    AuthGatewayError,
    AuthorizationError,
    BackendError,
    BusinessRuleError,
    FileTooLargeError,
    InvalidFileTypeError,
    ProcessIAException,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
    WebhookError,
)
from processia.schemas.base import ErrorDetail, ErrorResponse

logger = structlog.get_logger()

# Subclasses antes das classes base
STATUS_MAP: list[tuple[type[ProcessIAException], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BusinessRuleError, status.HTTP_400_BAD_REQUEST),
    (FileTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    (InvalidFileTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (StorageError, status.HTTP_502_BAD_GATEWAY),
    (AuthGatewayError, status.HTTP_502_BAD_GATEWAY),
    (BackendError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (WebhookError, status.HTTP_502_BAD_GATEWAY),
]


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    """Cria resposta de erro padronizada."""
    error = ErrorResponse(
        error=ErrorDetail(
            code=code,
            message=message,
            details=details if details and settings.DEBUG else None,
        )
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(mode="json", exclude_none=True),
    )


def status_for(exc: ProcessIAException) -> int:
    """Resolve o status HTTP de uma exceção da aplicação."""
    for exc_type, http_status in STATUS_MAP:
        if isinstance(exc, exc_type):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def processia_exception_handler(request: Request, exc: ProcessIAException) -> JSONResponse:
    """Handler para exceções do ProcessIA."""
    logger.warning(
        "ProcessIA exception",
        code=exc.code,
        message=exc.message,
        path=request.url.path,
        details=exc.details,
    )

    return create_error_response(
        status_code=status_for(exc),
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def backend_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handler para erros da camada de acesso ao banco."""
    logger.error(
        "Backend exception",
        exc_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
    )

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="BACKEND_ERROR",
        message=str(exc.orig) if getattr(exc, "orig", None) else str(exc),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler para exceções não tratadas."""
    logger.error(
        "Unhandled exception",
        exc_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        traceback=traceback.format_exc() if settings.DEBUG else None,
    )

    message = "Erro interno do servidor"
    details = None

    if settings.DEBUG:
        message = str(exc)
        details = {"traceback": traceback.format_exc()}

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="INTERNAL_ERROR",
        message=message,
        details=details,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Registra handlers de exceção na aplicação."""
    app.add_exception_handler(ProcessIAException, processia_exception_handler)
    app.add_exception_handler(SQLAlchemyError, backend_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


class RequestContextMiddleware:
    """
    Middleware para adicionar contexto às requisições.

    Adiciona request_id ao contexto de log e ao header da resposta.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())[:8]

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path", ""),
            method=scope.get("method", ""),
        )

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
