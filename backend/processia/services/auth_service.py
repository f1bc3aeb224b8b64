"""
Service de Autenticação.

Login e logout acontecem no serviço de auth hospedado; aqui ficam o
registro desses eventos, o perfil atual e a troca de senha.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.auth_gateway import AuthGateway
from processia.core.dependencies import AuthContext
from processia.schemas.usuario import SessaoUsuario, UserProfileResponse
from processia.services.audit_service import AuditService

logger = structlog.get_logger()


class AuthService:
    """Service de autenticação do usuário logado."""

    def __init__(
        self,
        db: AsyncSession,
        user: AuthContext,
        gateway: AuthGateway | None = None,
    ):
        self._db = db
        self._user = user
        self._gateway = gateway or AuthGateway()
        self._audit = AuditService(db)

    def perfil_atual(self) -> SessaoUsuario:
        """Usuário logado com perfil e papel."""
        profile = self._user.profile
        return SessaoUsuario(
            user_id=self._user.user_id,
            email=self._user.email,
            profile=UserProfileResponse.model_validate(profile) if profile else None,
            is_admin=self._user.is_admin,
        )

    async def registrar_login(self) -> SessaoUsuario:
        await self._audit.registrar(self._user.user_id, "LOGIN", "SYSTEM")
        logger.info("Login registrado", user_id=self._user.user_id_str)
        return self.perfil_atual()

    async def registrar_logout(self) -> None:
        await self._audit.registrar(self._user.user_id, "LOGOUT", "SYSTEM")
        logger.info("Logout registrado", user_id=self._user.user_id_str)

    async def alterar_senha(self, nova_senha: str) -> None:
        """Troca a senha com o token do próprio usuário."""
        await self._gateway.atualizar_senha(self._user.token, nova_senha)
        logger.info("Senha alterada", user_id=self._user.user_id_str)
