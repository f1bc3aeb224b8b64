"""
Service do Resumo do processo.

O resumo não tem histórico: cada geração ou edição sobrescreve o campo.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.ai.respostas import gerar_ask_id
from processia.ai.webhook_client import WebhookClient, WebhookEnvelope
from processia.core.config import settings
from processia.core.dependencies import AuthContext
from processia.core.exceptions import ResourceNotFoundError
from processia.models.processo import Processo
from processia.repositories.processo_repository import ProcessoRepository

logger = structlog.get_logger()


class ResumoService:
    """Geração e edição do resumo."""

    def __init__(
        self,
        db: AsyncSession,
        user: AuthContext,
        webhook: WebhookClient | None = None,
    ):
        self._db = db
        self._user = user
        self._webhook = webhook or WebhookClient()
        self._processos = ProcessoRepository(db)

    async def _processo(self, processo_id: int) -> Processo:
        processo = await self._processos.get_by_id(processo_id)
        if not processo:
            raise ResourceNotFoundError("Processo", processo_id)
        return processo

    async def _gravar(self, processo: Processo, resumo: str) -> Processo:
        processo.resumo = resumo
        await self._db.commit()
        await self._db.refresh(processo)
        return processo

    async def gerar_resumo(self, processo_id: int) -> Processo:
        """Pede o resumo ao orquestrador; fragmentos unidos por espaço."""
        processo = await self._processo(processo_id)

        envelope = WebhookEnvelope(
            action="createSummary",
            chatInput="gerarResumo",
            process_id=str(processo.id),
            ask_id=gerar_ask_id("summary"),
            user=self._user.user_id_str,
            session_dify=f"summary_session_{processo.id}",
        )
        resposta = await self._webhook.enviar(settings.WEBHOOK_AGENT_URL, envelope)

        processo = await self._gravar(processo, resposta.juntar(" "))
        logger.info("Resumo gerado", processo_id=processo_id)
        return processo

    async def iniciar_edicao(self, processo_id: int) -> Processo:
        """
        Avisa o orquestrador que o resumo entrou em edição.

        A notificação nunca bloqueia a edição.
        """
        processo = await self._processo(processo_id)
        await self._webhook.notificar(
            settings.WEBHOOK_AGENT_URL,
            {
                "action": "updateSummary",
                "chatInput": processo.resumo or "",
                "process_id": str(processo.id),
                "ask_id": gerar_ask_id("edit_summary"),
                "user": self._user.user_id_str,
                "session_dify": f"edit_summary_session_{processo.id}",
            },
        )
        return processo

    async def salvar_resumo(self, processo_id: int, conteudo: str) -> Processo:
        """Edição manual do resumo."""
        processo = await self._processo(processo_id)
        processo = await self._gravar(processo, conteudo)
        logger.info("Resumo salvo", processo_id=processo_id)
        return processo
