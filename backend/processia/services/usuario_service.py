"""
Service de gestão de usuários (área administrativa).

Conta no serviço de auth e perfil local são criados e removidos juntos.
"""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.auth_gateway import AuthGateway
from processia.core.dependencies import AuthContext
from processia.core.exceptions import (
    AuthGatewayError,
    BusinessRuleError,
    ResourceNotFoundError,
)
from processia.models.usuario import UserProfile
from processia.repositories.usuario_repository import UserProfileRepository
from processia.schemas.usuario import UsuarioCreate, UsuarioUpdate
from processia.services.audit_service import AuditService

logger = structlog.get_logger()


class UsuarioService:
    """Operações administrativas sobre usuários."""

    def __init__(
        self,
        db: AsyncSession,
        admin: AuthContext,
        gateway: AuthGateway | None = None,
    ):
        self._db = db
        self._admin = admin
        self._gateway = gateway or AuthGateway()
        self._repo = UserProfileRepository(db)
        self._audit = AuditService(db)

    async def listar(self) -> list[UserProfile]:
        """Perfis, mais recentes primeiro."""
        return await self._repo.get_all()

    async def criar(self, dados: UsuarioCreate) -> UserProfile:
        """
        Cria conta confirmada no auth e o perfil correspondente.
        """
        if await self._repo.get_by_email(dados.email):
            raise BusinessRuleError(f"Já existe usuário com email {dados.email}")

        conta = await self._gateway.criar_usuario(dados.email, dados.nome)
        if not conta.get("id"):
            raise AuthGatewayError("Serviço de autenticação não retornou o id do usuário")

        profile = await self._repo.create(
            id=uuid.UUID(str(conta["id"])),
            email=dados.email,
            nome=dados.nome,
            role=dados.role,
        )

        logger.info("Usuário criado", user_id=str(profile.id), role=profile.role.value)
        await self._audit.registrar(self._admin.user_id, "CREATE_USER", "USER", profile.id)
        return profile

    async def atualizar(self, user_id: uuid.UUID, dados: UsuarioUpdate) -> UserProfile:
        """Atualiza nome e papel."""
        profile = await self._repo.update(user_id, **dados.model_dump(exclude_unset=True))
        if not profile:
            raise ResourceNotFoundError("Usuário", user_id)

        logger.info("Usuário atualizado", user_id=str(user_id))
        await self._audit.registrar(self._admin.user_id, "UPDATE_USER", "USER", user_id)
        return profile

    async def excluir(self, user_id: uuid.UUID) -> None:
        """Remove conta e perfil; o próprio administrador não pode se excluir."""
        if user_id == self._admin.user_id:
            raise BusinessRuleError(
                "Você não pode excluir seu próprio usuário",
                rule="AUTO_EXCLUSAO",
            )

        if not await self._repo.get_by_id(user_id):
            raise ResourceNotFoundError("Usuário", user_id)

        await self._gateway.excluir_usuario(str(user_id))
        await self._repo.delete(user_id)

        logger.info("Usuário removido", user_id=str(user_id))
        await self._audit.registrar(self._admin.user_id, "DELETE_USER", "USER", user_id)
