"""
Repository de Processo.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.models.chat import ChatMensagem, ChatResposta, ChatSession
from processia.models.historico import AnaliseDefesa, DefesaHistorico
from processia.models.processo import Processo
from processia.repositories.base import BaseRepository


class ProcessoRepository(BaseRepository[Processo]):
    """Repository para operações com Processo."""

    def __init__(self, db: AsyncSession):
        super().__init__(Processo, db)

    async def adicionar_arquivos(
        self,
        processo: Processo,
        urls: list[str],
    ) -> Processo:
        """Acrescenta URLs ao final de arquivos_url."""
        # Nova lista para o ORM detectar a mudança
        processo.arquivos_url = [*(processo.arquivos_url or []), *urls]
        await self.db.commit()
        await self.db.refresh(processo)
        return processo

    async def delete_cascade(self, processo_id: int) -> bool:
        """
        Remove o processo e tudo que depende dele.

        Ordem: respostas, perguntas, sessões, histórico, análises, processo.
        """
        processo = await self.get_by_id(processo_id)
        if not processo:
            return False

        sessoes = select(ChatSession.id).where(ChatSession.processo_id == processo_id)
        perguntas = select(ChatMensagem.id).where(ChatMensagem.session_id.in_(sessoes))

        await self.db.execute(delete(ChatResposta).where(ChatResposta.id_pergunta.in_(perguntas)))
        await self.db.execute(delete(ChatMensagem).where(ChatMensagem.session_id.in_(sessoes)))
        await self.db.execute(delete(ChatSession).where(ChatSession.processo_id == processo_id))
        await self.db.execute(
            delete(DefesaHistorico).where(DefesaHistorico.processo_id == processo_id)
        )
        await self.db.execute(
            delete(AnaliseDefesa).where(AnaliseDefesa.processo_id == processo_id)
        )
        await self.db.delete(processo)
        await self.db.commit()
        return True
