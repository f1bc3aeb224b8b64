"""
Dependências injetáveis do FastAPI.

Define dependências reutilizáveis para autenticação, database session,
e clientes externos compartilhados.
"""

import uuid
from dataclasses import dataclass
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from processia.ai.webhook_client import WebhookClient
from processia.core.auth_gateway import AuthGateway
from processia.core.exceptions import (
    AuthenticationError,
    InsufficientPermissionsError,
    InvalidTokenError,
)
from processia.core.security import decode_token
from processia.db.session import async_session_maker
from processia.models.usuario import UserProfile
from processia.repositories.usuario_repository import UserProfileRepository

security = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """
    Usuário autenticado da requisição.

    Passado explicitamente aos services em vez de lido de estado global.
    """

    user_id: uuid.UUID
    email: str | None
    token: str
    profile: UserProfile | None = None

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.is_admin

    @property
    def user_id_str(self) -> str:
        return str(self.user_id)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency que fornece uma sessão de banco de dados.

    Uso:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthContext:
    """
    Dependency que valida o token do backend hospedado.

    Fluxo:
    1. Verifica assinatura e audiência do JWT
    2. Extrai o id do usuário (`sub`)
    3. Carrega o perfil, se existir

    Raises:
        AuthenticationError: token ausente ou inválido
    """
    if credentials is None:
        raise AuthenticationError("Token de autenticação não fornecido")

    payload = decode_token(credentials.credentials)

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise InvalidTokenError()

    profile = await UserProfileRepository(db).get_by_id(user_id)

    return AuthContext(
        user_id=user_id,
        email=payload.get("email") or (profile.email if profile else None),
        token=credentials.credentials,
        profile=profile,
    )


async def require_admin(
    current_user: Annotated[AuthContext, Depends(get_current_user)],
) -> AuthContext:
    """Exige papel ADMIN."""
    if not current_user.is_admin:
        raise InsufficientPermissionsError("área administrativa")
    return current_user


def get_webhook_client() -> WebhookClient:
    """Cliente do orquestrador de IA."""
    return WebhookClient()


def get_auth_gateway() -> AuthGateway:
    """Cliente da API de autenticação hospedada."""
    return AuthGateway()


# Type aliases para facilitar uso nas rotas
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[AuthContext, Depends(get_current_user)]
AdminUser = Annotated[AuthContext, Depends(require_admin)]
Webhook = Annotated[WebhookClient, Depends(get_webhook_client)]
AuthAPI = Annotated[AuthGateway, Depends(get_auth_gateway)]
