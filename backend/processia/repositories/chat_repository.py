"""
Repository de sessões, perguntas e respostas do chat.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from processia.models.chat import ChatMensagem, ChatResposta, ChatSession
from processia.repositories.base import BaseRepository


class ChatSessionRepository(BaseRepository[ChatSession]):
    """Repository para sessões de chat."""

    def __init__(self, db: AsyncSession):
        super().__init__(ChatSession, db)

    async def get_with_processo(self, id: int) -> ChatSession | None:
        """Busca sessão com o processo carregado."""
        result = await self.db.execute(
            select(ChatSession)
            .where(ChatSession.id == id)
            .options(selectinload(ChatSession.processo))
        )
        return result.scalar_one_or_none()

    async def get_by_processo(self, processo_id: int) -> list[ChatSession]:
        """Sessões do processo, mais recentes primeiro."""
        result = await self.db.execute(
            select(ChatSession)
            .where(ChatSession.processo_id == processo_id)
            .order_by(ChatSession.created_at.desc(), ChatSession.id.desc())
        )
        return list(result.scalars().all())

    async def delete_cascade(self, id: int) -> bool:
        """Remove sessão com perguntas e respostas."""
        sessao = await self.get_by_id(id)
        if not sessao:
            return False

        perguntas = select(ChatMensagem.id).where(ChatMensagem.session_id == id)
        await self.db.execute(delete(ChatResposta).where(ChatResposta.id_pergunta.in_(perguntas)))
        await self.db.execute(delete(ChatMensagem).where(ChatMensagem.session_id == id))
        await self.db.delete(sessao)
        await self.db.commit()
        return True


class ChatMensagemRepository(BaseRepository[ChatMensagem]):
    """Repository para perguntas e suas respostas."""

    def __init__(self, db: AsyncSession):
        super().__init__(ChatMensagem, db)

    async def get_by_session(
        self,
        session_id: int,
    ) -> list[tuple[ChatMensagem, list[ChatResposta]]]:
        """
        Perguntas da sessão em ordem cronológica.

        As respostas de cada pergunta também vêm em ordem cronológica.
        """
        result = await self.db.execute(
            select(ChatMensagem)
            .where(ChatMensagem.session_id == session_id)
            .order_by(ChatMensagem.created_at.asc(), ChatMensagem.id.asc())
        )
        mensagens = list(result.scalars().all())
        if not mensagens:
            return []

        respostas = await self.db.execute(
            select(ChatResposta)
            .where(ChatResposta.id_pergunta.in_([m.id for m in mensagens]))
            .order_by(ChatResposta.created_at.asc(), ChatResposta.id.asc())
        )
        por_pergunta: dict[int, list[ChatResposta]] = {m.id: [] for m in mensagens}
        for resposta in respostas.scalars().all():
            por_pergunta[resposta.id_pergunta].append(resposta)

        return [(m, por_pergunta[m.id]) for m in mensagens]

    async def add_respostas(self, id_pergunta: int, textos: list[str]) -> list[ChatResposta]:
        """Grava um registro por fragmento, na ordem recebida."""
        respostas = [ChatResposta(id_pergunta=id_pergunta, resposta=texto) for texto in textos]
        for resposta in respostas:
            self.db.add(resposta)
            # flush por item preserva a ordem dos ids
            await self.db.flush()
        await self.db.commit()
        return respostas
