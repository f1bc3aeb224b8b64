"""
Service de Análise da Defesa.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.ai.respostas import gerar_ask_id
from processia.ai.webhook_client import WebhookClient, WebhookEnvelope
from processia.core.config import settings
from processia.core.dependencies import AuthContext
from processia.core.exceptions import DefesaAusenteError, ResourceNotFoundError
from processia.models.historico import AnaliseDefesa
from processia.models.processo import Processo
from processia.repositories.historico_repository import AnaliseDefesaRepository
from processia.repositories.processo_repository import ProcessoRepository

logger = structlog.get_logger()


class AnaliseService:
    """
    Análise da defesa atual pelo orquestrador.

    Cada análise guarda uma cópia da defesa analisada e recebe a próxima
    versão de análise do processo.
    """

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
        self._analises = AnaliseDefesaRepository(db)

    async def _processo(self, processo_id: int) -> Processo:
        processo = await self._processos.get_by_id(processo_id)
        if not processo:
            raise ResourceNotFoundError("Processo", processo_id)
        return processo

    async def analisar_defesa(self, processo_id: int) -> AnaliseDefesa:
        """
        Pede a análise da defesa atual.

        Raises:
            DefesaAusenteError: processo sem defesa
            WebhookError: falha do orquestrador (nada é gravado)
        """
        processo = await self._processo(processo_id)
        if not processo.tem_defesa:
            raise DefesaAusenteError(processo_id)

        envelope = WebhookEnvelope(
            action="analisarDefesa",
            chatInput="analisarDefesa",
            process_id=str(processo.id),
            ask_id=gerar_ask_id("analysis"),
            user=self._user.user_id_str,
            session_dify=f"analysis_session_{processo.id}",
        )
        resposta = await self._webhook.enviar(settings.WEBHOOK_AGENT_URL, envelope)

        try:
            analise = await self._analises.adicionar(
                processo_id=processo.id,
                conteudo_analise=resposta.juntar(" "),
                defesa_analisada=processo.defesa,
                user_id=self._user.user_id,
            )
            await self._db.commit()
        except Exception:
            await self._db.rollback()
            raise
        await self._db.refresh(analise)

        logger.info("Defesa analisada", processo_id=processo_id, versao=analise.versao)
        return analise

    async def listar_analises(self, processo_id: int) -> list[AnaliseDefesa]:
        """Análises do processo, mais recente primeiro."""
        await self._processo(processo_id)
        return await self._analises.get_by_processo(processo_id)
