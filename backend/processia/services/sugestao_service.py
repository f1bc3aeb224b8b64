"""
Service de Sugestões de prompt.
"""

from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.dependencies import AuthContext
from processia.core.exceptions import InsufficientPermissionsError, ResourceNotFoundError
from processia.models.sugestao import DEFAULT_PROMPTS, SugestaoPrompt
from processia.repositories.sugestao_repository import SugestaoPromptRepository

logger = structlog.get_logger()


class SugestaoService:
    """Sugestões de prompt do usuário logado."""

    def __init__(self, db: AsyncSession, user: AuthContext):
        self._db = db
        self._user = user
        self._repo = SugestaoPromptRepository(db)

    async def listar(self) -> list[SugestaoPrompt]:
        """
        Sugestões do usuário em ordem de criação.

        Na primeira consulta sem nenhuma sugestão, as padrão são criadas.
        """
        sugestoes = await self._repo.get_by_user(self._user.user_id)
        if sugestoes:
            return sugestoes

        logger.info("Criando sugestões padrão", user_id=self._user.user_id_str)
        return await self._repo.create_many(self._user.user_id, DEFAULT_PROMPTS)

    async def _propria(self, sugestao_id: int) -> SugestaoPrompt:
        sugestao = await self._repo.get_by_id(sugestao_id)
        if not sugestao:
            raise ResourceNotFoundError("Sugestão", sugestao_id)
        if sugestao.user_id != self._user.user_id:
            raise InsufficientPermissionsError("alterar sugestão de outro usuário")
        return sugestao

    async def criar(self, texto: str) -> SugestaoPrompt:
        return await self._repo.create(user_id=self._user.user_id, prompt_text=texto)

    async def atualizar(self, sugestao_id: int, texto: str) -> SugestaoPrompt:
        await self._propria(sugestao_id)
        return await self._repo.update(
            sugestao_id,
            prompt_text=texto,
            updated_at=datetime.now(timezone.utc),
        )

    async def excluir(self, sugestao_id: int) -> None:
        await self._propria(sugestao_id)
        await self._repo.delete(sugestao_id)
