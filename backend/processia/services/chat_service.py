"""
Service do chat por processo.
"""

import re

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.ai.webhook_client import WebhookClient, WebhookEnvelope
from processia.core.config import settings
from processia.core.dependencies import AuthContext
from processia.core.exceptions import ResourceNotFoundError, WebhookError
from processia.models.chat import ChatMensagem, ChatResposta, ChatSession
from processia.repositories.chat_repository import (
    ChatMensagemRepository,
    ChatSessionRepository,
)
from processia.repositories.processo_repository import ProcessoRepository

logger = structlog.get_logger()


def compactar_espacos(texto: str) -> str:
    """Quebras de linha e espaços repetidos viram um espaço."""
    return re.sub(r"\s+", " ", texto).strip()


class ChatService:
    """
    Sessões de chat e troca de mensagens com o orquestrador.

    A pergunta é gravada antes da chamada ao webhook e permanece mesmo
    se a chamada falhar; nesse caso nenhuma resposta é gravada.
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
        self._sessoes = ChatSessionRepository(db)
        self._mensagens = ChatMensagemRepository(db)
        self._processos = ProcessoRepository(db)

    # === SESSÕES ===

    async def criar_sessao(self, processo_id: int) -> ChatSession:
        """Abre uma conversa nova para o processo."""
        if not await self._processos.get_by_id(processo_id):
            raise ResourceNotFoundError("Processo", processo_id)

        sessao = await self._sessoes.create(
            processo_id=processo_id,
            user_uuid=self._user.user_id,
            instancia_dify=None,
        )
        logger.info("Sessão de chat criada", session_id=sessao.id, processo_id=processo_id)
        return sessao

    async def listar_sessoes(self, processo_id: int) -> list[ChatSession]:
        """Sessões do processo, mais recentes primeiro."""
        return await self._sessoes.get_by_processo(processo_id)

    async def buscar_sessao(self, session_id: int) -> ChatSession:
        """Sessão com o processo carregado."""
        sessao = await self._sessoes.get_with_processo(session_id)
        if not sessao:
            raise ResourceNotFoundError("Sessão", session_id)
        return sessao

    async def renomear_sessao(self, session_id: int, nome: str) -> ChatSession:
        sessao = await self._sessoes.update(session_id, nome=nome.strip())
        if not sessao:
            raise ResourceNotFoundError("Sessão", session_id)
        logger.info("Sessão renomeada", session_id=session_id)
        return sessao

    async def excluir_sessao(self, session_id: int) -> None:
        if not await self._sessoes.delete_cascade(session_id):
            raise ResourceNotFoundError("Sessão", session_id)
        logger.info("Sessão removida", session_id=session_id)

    # === MENSAGENS ===

    async def listar_mensagens(
        self,
        session_id: int,
    ) -> list[tuple[ChatMensagem, list[ChatResposta]]]:
        """Perguntas com respostas, ambas em ordem cronológica."""
        return await self._mensagens.get_by_session(session_id)

    async def enviar_mensagem(
        self,
        session_id: int,
        pergunta: str,
    ) -> tuple[ChatMensagem, list[ChatResposta]]:
        """
        Grava a pergunta, consulta o orquestrador e grava as respostas.

        Cada fragmento da resposta vira um registro, na ordem recebida.

        Raises:
            ResourceNotFoundError: sessão inexistente
            WebhookError: falha do orquestrador (a pergunta continua gravada)
        """
        sessao = await self._sessoes.get_by_id(session_id)
        if not sessao:
            raise ResourceNotFoundError("Sessão", session_id)

        # Texto original preservado, com quebras de linha
        mensagem = await self._mensagens.create(session_id=session_id, pergunta=pergunta)

        envelope = WebhookEnvelope(
            action="sendMessage",
            sessionId=str(session_id),
            chatInput=compactar_espacos(pergunta),
            ask_id=str(mensagem.id),
            user=self._user.user_id_str,
            session_dify=sessao.instancia_dify or "",
        )

        try:
            resposta = await self._webhook.enviar(settings.WEBHOOK_CHAT_URL, envelope)
        except WebhookError as e:
            logger.warning(
                "Pergunta sem resposta do orquestrador",
                session_id=session_id,
                pergunta_id=mensagem.id,
                error=e.message,
            )
            raise

        respostas = await self._mensagens.add_respostas(mensagem.id, resposta.fragmentos)

        if resposta.sessao_externa and resposta.sessao_externa != sessao.instancia_dify:
            await self._sessoes.update(session_id, instancia_dify=resposta.sessao_externa)
            logger.info("Handle da conversa atualizado", session_id=session_id)

        logger.info(
            "Mensagem respondida",
            session_id=session_id,
            pergunta_id=mensagem.id,
            respostas=len(respostas),
        )
        return mensagem, respostas
