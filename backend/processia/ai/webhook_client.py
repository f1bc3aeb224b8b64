"""
Cliente HTTP do orquestrador de IA (webhooks).

Responsável por:
- Enviar ações de chat e de documentos e decodificar a resposta
- Disparar notificações sem aguardar resultado útil
- Enviar anexos de processo para o endpoint de arquivos

Não há retentativa: toda falha sobe como exceção tipada e o usuário
decide se tenta de novo.
"""

from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ConfigDict

from processia.ai.respostas import RespostaWebhook, decodificar_corpo, normalizar
from processia.core.arquivos import Arquivo
from processia.core.config import settings
from processia.core.exceptions import (
    FileUploadError,
    WebhookHTTPError,
    WebhookTransportError,
)

logger = structlog.get_logger()


class WebhookEnvelope(BaseModel):
    """
    Corpo enviado ao orquestrador.

    Chat de processo usa `sessionId`; ações de documento usam `process_id`.
    """

    model_config = ConfigDict(extra="forbid")

    action: str
    chatInput: str
    ask_id: str
    user: str
    session_dify: str
    process_id: str | None = None
    sessionId: str | None = None

    # Anexo opcional (chat de edição da defesa)
    fileType: str | None = None
    fileName: str | None = None
    fileBase64: str | None = None

    def to_payload(self) -> dict[str, Any]:
        # Campos definidos explicitamente seguem mesmo quando None
        return self.model_dump(exclude_unset=True)


class WebhookClient:
    """
    Cliente do orquestrador de IA.

    Uso:
        client = WebhookClient()
        resposta = await client.enviar(settings.WEBHOOK_AGENT_URL, envelope)
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
        )

    async def enviar(self, url: str, envelope: WebhookEnvelope) -> RespostaWebhook:
        """
        Envia uma ação e devolve os fragmentos da resposta.

        Raises:
            WebhookTransportError: falha de conexão
            WebhookHTTPError: status fora de 2xx
            EmptyWebhookResponseError / MalformedWebhookResponseError
            WebhookContentError: resposta sem conteúdo utilizável
        """
        action = envelope.action
        logger.info(
            "Enviando ação ao webhook",
            action=action,
            ask_id=envelope.ask_id,
            process_id=envelope.process_id,
            session_id=envelope.sessionId,
        )

        async with self._client() as client:
            try:
                response = await client.post(url, json=envelope.to_payload())
            except httpx.HTTPError as e:
                logger.error("Falha de conexão com webhook", action=action, error=str(e))
                raise WebhookTransportError(f"Falha ao contatar o webhook: {e}", action=action)

        if not response.is_success:
            logger.error(
                "Webhook retornou erro",
                action=action,
                status_code=response.status_code,
                body=response.text,
            )
            raise WebhookHTTPError(response.status_code, response.text, action=action)

        payload = decodificar_corpo(
            response.text,
            response.headers.get("content-type"),
            action=action,
        )
        resposta = normalizar(payload, action=action)

        logger.info(
            "Resposta do webhook processada",
            action=action,
            status_code=response.status_code,
            payload=type(payload).__name__,
            fragmentos=len(resposta.fragmentos),
        )
        return resposta

    async def notificar(self, url: str, payload: dict[str, Any]) -> None:
        """
        Notificação sem resposta útil (createProcess, updateSummary).

        Falhas são registradas e descartadas.
        """
        action = payload.get("action")
        async with self._client() as client:
            try:
                response = await client.post(url, json=payload)
            except httpx.HTTPError as e:
                logger.warning("Notificação ao webhook falhou", action=action, error=str(e))
                return

        if not response.is_success:
            logger.warning(
                "Notificação ao webhook recusada",
                action=action,
                status_code=response.status_code,
            )
            return

        logger.info("Notificação enviada ao webhook", action=action)

    async def enviar_arquivo(self, processo_id: int, arquivo: Arquivo) -> str:
        """
        Envia um anexo do processo (multipart) e devolve a URL pública.

        Raises:
            FileUploadError: falha de conexão, status de erro ou resposta sem `url`
        """
        files = {"file": (arquivo.nome_seguro, arquivo.conteudo, arquivo.content_type)}
        data = {"processo_id": str(processo_id)}

        async with self._client() as client:
            try:
                response = await client.post(settings.WEBHOOK_FILE_URL, files=files, data=data)
            except httpx.HTTPError as e:
                logger.error("Falha no upload", processo_id=processo_id, error=str(e))
                raise FileUploadError("Falha ao fazer upload do arquivo")

        if not response.is_success:
            logger.error(
                "Upload recusado",
                processo_id=processo_id,
                arquivo=arquivo.nome_seguro,
                status_code=response.status_code,
            )
            raise FileUploadError("Falha ao fazer upload do arquivo")

        try:
            url = response.json().get("url")
        except (ValueError, AttributeError):
            url = None

        if not url:
            raise FileUploadError("Resposta do upload não contém a URL do arquivo")

        logger.info(
            "Arquivo enviado",
            processo_id=processo_id,
            arquivo=arquivo.nome_seguro,
            tamanho=len(arquivo.conteudo),
        )
        return url
