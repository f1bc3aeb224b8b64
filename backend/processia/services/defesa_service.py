"""
Service da Defesa.

Geração pela IA, edição manual, chat de edição e histórico de versões.
Toda gravação da defesa passa pelo salvamento versionado.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.ai.respostas import gerar_ask_id
from processia.ai.webhook_client import WebhookClient, WebhookEnvelope
from processia.core.arquivos import (
    Arquivo,
    classificar_anexo,
    codificar_base64,
    descrever_mensagem,
    validar_arquivo,
)
from processia.core.config import settings
from processia.core.dependencies import AuthContext
from processia.core.exceptions import ResourceNotFoundError, ValidationError
from processia.models.historico import DefesaHistorico
from processia.models.processo import Processo
from processia.repositories.historico_repository import DefesaHistoricoRepository
from processia.repositories.processo_repository import ProcessoRepository
from processia.schemas.historico import EdicaoDefesaResponse
from processia.services.versionamento import salvar_defesa_versionada

logger = structlog.get_logger()

PROMPT_GERAR_DEFESA = (
    "Criar uma sugestão de abordagem para a defesa deste processo trabalhista"
)


class DefesaService:
    """Operações sobre a defesa de um processo."""

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
        self._historico = DefesaHistoricoRepository(db)

    async def _processo(self, processo_id: int) -> Processo:
        processo = await self._processos.get_by_id(processo_id)
        if not processo:
            raise ResourceNotFoundError("Processo", processo_id)
        return processo

    def _envelope(
        self,
        processo: Processo,
        action: str,
        chat_input: str,
        prefixo: str,
        **anexo: str | None,
    ) -> WebhookEnvelope:
        return WebhookEnvelope(
            action=action,
            chatInput=chat_input,
            process_id=str(processo.id),
            ask_id=gerar_ask_id(prefixo),
            user=self._user.user_id_str,
            session_dify=f"{prefixo}_session_{processo.id}",
            **anexo,
        )

    async def gerar_defesa(self, processo_id: int) -> DefesaHistorico:
        """
        Pede uma defesa ao orquestrador e grava como nova versão.

        Fragmentos são unidos por espaço.
        """
        processo = await self._processo(processo_id)
        envelope = self._envelope(processo, "createDefense", PROMPT_GERAR_DEFESA, "defense")

        resposta = await self._webhook.enviar(settings.WEBHOOK_AGENT_URL, envelope)

        return await salvar_defesa_versionada(
            self._db, processo, resposta.juntar(" "), self._user.user_id, origem="gerada"
        )

    async def salvar_defesa(self, processo_id: int, conteudo: str) -> DefesaHistorico:
        """Edição manual: grava como nova versão."""
        processo = await self._processo(processo_id)
        return await salvar_defesa_versionada(
            self._db, processo, conteudo, self._user.user_id, origem="manual"
        )

    async def listar_historico(self, processo_id: int) -> list[DefesaHistorico]:
        """Versões da defesa, mais recente primeiro."""
        await self._processo(processo_id)
        return await self._historico.get_by_processo(processo_id)

    async def restaurar_versao(self, processo_id: int, historico_id: int) -> DefesaHistorico:
        """
        Restaura uma versão antiga gravando-a como versão nova.

        O histórico existente fica intacto.
        """
        processo = await self._processo(processo_id)
        antiga = await self._historico.get_by_id(historico_id)
        if not antiga or antiga.processo_id != processo_id:
            raise ResourceNotFoundError("Versão da defesa", historico_id)

        logger.info(
            "Restaurando versão da defesa",
            processo_id=processo_id,
            versao_restaurada=antiga.versao,
        )
        return await salvar_defesa_versionada(
            self._db, processo, antiga.conteudo, self._user.user_id, origem="restaurada"
        )

    async def editar_via_chat(
        self,
        processo_id: int,
        mensagem: str,
        anexo: Arquivo | None = None,
    ) -> EdicaoDefesaResponse:
        """
        Envia um pedido de edição, com anexo opcional.

        Nada é gravado: a sugestão só vira versão com registrar_sugerida.
        """
        if not mensagem.strip() and anexo is None:
            raise ValidationError("Informe uma mensagem ou um arquivo", field="mensagem")

        processo = await self._processo(processo_id)

        campos_anexo = {"fileType": "text", "fileName": None, "fileBase64": None}
        if anexo is not None:
            validar_arquivo(
                len(anexo.conteudo),
                anexo.content_type,
                settings.ALLOWED_ATTACHMENT_TYPES,
            )
            campos_anexo = {
                "fileType": classificar_anexo(anexo.nome, anexo.content_type),
                "fileName": anexo.nome,
                "fileBase64": codificar_base64(anexo.conteudo),
            }

        envelope = self._envelope(
            processo, "editDefense", mensagem, "edit_defense", **campos_anexo
        )

        resposta = await self._webhook.enviar(settings.WEBHOOK_AGENT_URL, envelope)

        logger.info(
            "Sugestão de edição recebida",
            processo_id=processo_id,
            fragmentos=len(resposta.fragmentos),
            anexo=envelope.fileType,
        )
        return EdicaoDefesaResponse(
            mensagem_usuario=descrever_mensagem(mensagem, anexo.nome if anexo else None),
            fragmentos=resposta.fragmentos,
            defesa_sugerida=resposta.juntar("\n\n"),
        )

    async def registrar_sugerida(self, processo_id: int, conteudo: str) -> DefesaHistorico:
        """Grava a sugestão do chat de edição como nova versão."""
        processo = await self._processo(processo_id)
        return await salvar_defesa_versionada(
            self._db, processo, conteudo, self._user.user_id, origem="chat"
        )
