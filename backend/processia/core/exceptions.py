"""
Exceções customizadas da aplicação.

Define hierarquia de exceções para tratamento consistente de erros.
Três famílias cobrem as falhas externas:

- erros do backend hospedado (banco, auth, storage);
- erros de transporte do webhook (status HTTP, corpo vazio, JSON inválido);
- erros semânticos do webhook (JSON válido sem conteúdo utilizável).
"""

from typing import Any


class ProcessIAException(Exception):
    """Exceção base do ProcessIA."""

    def __init__(
        self,
        message: str,
        code: str = "PROCESSIA_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# === Exceções de Autenticação ===

class AuthenticationError(ProcessIAException):
    """Erro de autenticação."""

    def __init__(self, message: str = "Credenciais inválidas"):
        super().__init__(message, code="AUTH_ERROR")


class TokenExpiredError(AuthenticationError):
    """Token JWT expirado."""

    def __init__(self):
        super().__init__("Token expirado")
        self.code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    """Token JWT inválido."""

    def __init__(self):
        super().__init__("Token inválido")
        self.code = "INVALID_TOKEN"


# === Exceções de Autorização ===

class AuthorizationError(ProcessIAException):
    """Erro de autorização/permissão."""

    def __init__(self, message: str = "Acesso negado"):
        super().__init__(message, code="AUTHORIZATION_ERROR")


class InsufficientPermissionsError(AuthorizationError):
    """Usuário não tem permissão para a ação."""

    def __init__(self, action: str):
        super().__init__(f"Permissão insuficiente para: {action}")
        self.code = "INSUFFICIENT_PERMISSIONS"


# === Exceções de Recursos ===

class ResourceNotFoundError(ProcessIAException):
    """Recurso não encontrado."""

    def __init__(
        self,
        resource_type: str,
        resource_id: int | str | None = None,
    ):
        message = f"{resource_type} não encontrado"
        if resource_id is not None:
            message = f"{resource_type} com ID {resource_id} não encontrado"
        super().__init__(message, code="NOT_FOUND")
        self.resource_type = resource_type
        self.resource_id = resource_id


# === Exceções de Validação ===

class ValidationError(ProcessIAException):
    """Erro de validação de dados."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
    ):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


# === Exceções de Negócio ===

class BusinessRuleError(ProcessIAException):
    """Violação de regra de negócio."""

    def __init__(self, message: str, rule: str | None = None):
        super().__init__(message, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


class DefesaAusenteError(BusinessRuleError):
    """Análise pedida para processo sem defesa."""

    def __init__(self, processo_id: int):
        super().__init__(
            "É necessário ter uma defesa gerada antes de analisá-la",
            rule="DEFESA_AUSENTE",
        )
        self.code = "DEFESA_AUSENTE"
        self.details = {"processo_id": processo_id}


# === Exceções do Backend Hospedado ===

class BackendError(ProcessIAException):
    """Falha reportada pela camada de acesso do backend hospedado."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message, code="BACKEND_ERROR")
        self.operation = operation


class VersionUnavailableError(BackendError):
    """RPC de versionamento não devolveu número de versão."""

    def __init__(self, function_name: str, processo_id: int):
        super().__init__(
            f"{function_name} não retornou versão para o processo {processo_id}",
            operation=function_name,
        )
        self.code = "VERSION_UNAVAILABLE"


class AuthGatewayError(BackendError):
    """Erro na API de autenticação do backend hospedado."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, operation="auth")
        self.code = "AUTH_GATEWAY_ERROR"
        self.status_code = status_code


class StorageError(BackendError):
    """Erro no envio ou validação de arquivos."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message, operation=operation)
        self.code = "STORAGE_ERROR"


class FileUploadError(StorageError):
    """Erro no upload de arquivo."""

    def __init__(self, message: str = "Erro no upload do arquivo"):
        super().__init__(message, operation="upload")
        self.code = "FILE_UPLOAD_ERROR"


class FileTooLargeError(StorageError):
    """Arquivo muito grande."""

    def __init__(self, max_size_mb: int, actual_size_mb: float):
        super().__init__(
            f"Arquivo muito grande. Máximo: {max_size_mb}MB, enviado: {actual_size_mb:.2f}MB",
            operation="upload",
        )
        self.code = "FILE_TOO_LARGE"


class InvalidFileTypeError(StorageError):
    """Tipo de arquivo não permitido."""

    def __init__(self, mime_type: str, allowed_types: list[str]):
        super().__init__(
            f"Tipo de arquivo não permitido: {mime_type}. Permitidos: {', '.join(allowed_types)}",
            operation="upload",
        )
        self.code = "INVALID_FILE_TYPE"


# === Exceções do Webhook de IA ===

class WebhookError(ProcessIAException):
    """Erro base do orquestrador de IA."""

    def __init__(self, message: str, code: str = "WEBHOOK_ERROR", action: str | None = None):
        super().__init__(message, code=code)
        self.action = action


class WebhookTransportError(WebhookError):
    """Falha de transporte: conexão, status ou corpo ilegível."""

    def __init__(self, message: str, action: str | None = None):
        super().__init__(message, code="WEBHOOK_TRANSPORT_ERROR", action=action)


class WebhookHTTPError(WebhookTransportError):
    """Webhook respondeu com status fora de 2xx."""

    def __init__(self, status_code: int, body: str, action: str | None = None):
        super().__init__(f"Erro na requisição: {status_code} - {body}", action=action)
        self.code = "WEBHOOK_HTTP_ERROR"
        self.status_code = status_code
        self.body = body


class EmptyWebhookResponseError(WebhookTransportError):
    """Corpo da resposta vazio."""

    def __init__(self, action: str | None = None):
        super().__init__("Resposta do webhook está vazia", action=action)
        self.code = "WEBHOOK_EMPTY_RESPONSE"


class MalformedWebhookResponseError(WebhookTransportError):
    """Content-Type JSON mas corpo não é JSON válido."""

    def __init__(self, reason: str, action: str | None = None):
        super().__init__(f"Resposta do webhook não é um JSON válido: {reason}", action=action)
        self.code = "WEBHOOK_MALFORMED_JSON"


class WebhookContentError(WebhookError):
    """JSON válido, mas sem conteúdo utilizável."""

    def __init__(
        self,
        message: str = "A resposta do webhook não contém conteúdo válido",
        action: str | None = None,
    ):
        super().__init__(message, code="WEBHOOK_INVALID_CONTENT", action=action)
