"""
Repository de Sugestões de prompt.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.models.sugestao import SugestaoPrompt
from processia.repositories.base import BaseRepository


class SugestaoPromptRepository(BaseRepository[SugestaoPrompt]):
    """Repository para sugestões de prompt."""

    def __init__(self, db: AsyncSession):
        super().__init__(SugestaoPrompt, db)

    async def get_by_user(self, user_id: uuid.UUID) -> list[SugestaoPrompt]:
        """Sugestões do usuário em ordem de criação."""
        result = await self.db.execute(
            select(SugestaoPrompt)
            .where(SugestaoPrompt.user_id == user_id)
            .order_by(SugestaoPrompt.created_at.asc(), SugestaoPrompt.id.asc())
        )
        return list(result.scalars().all())

    async def create_many(self, user_id: uuid.UUID, textos: list[str]) -> list[SugestaoPrompt]:
        """Insere vários prompts em uma transação, na ordem dada."""
        sugestoes = []
        for texto in textos:
            sugestao = SugestaoPrompt(user_id=user_id, prompt_text=texto)
            self.db.add(sugestao)
            await self.db.flush()
            sugestoes.append(sugestao)
        await self.db.commit()
        return sugestoes
