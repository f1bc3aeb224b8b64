"""
Decodificação das respostas do orquestrador de IA.

O orquestrador responde em três formatos: lista de mensagens, objeto
único ou texto puro. A decodificação acontece em duas etapas:

1. `decodificar_corpo` transforma o corpo HTTP em um `WebhookPayload`
   (ArrayPayload, ObjectPayload ou TextPayload);
2. `normalizar` extrai os fragmentos de texto e rejeita conteúdo inválido.

Prioridade dos campos de texto: message, text, resposta, content. Objeto
sem nenhum desses campos preenchidos vira o próprio JSON serializado.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Union

from processia.core.exceptions import (
    EmptyWebhookResponseError,
    MalformedWebhookResponseError,
    WebhookContentError,
)

CAMPOS_TEXTO = ("message", "text", "resposta", "content")
CAMPOS_SESSAO = ("session_id", "conversation_id")
VALORES_INVALIDOS = ("undefined", "null")


@dataclass(frozen=True)
class ArrayPayload:
    items: list[Any]


@dataclass(frozen=True)
class ObjectPayload:
    item: dict[str, Any]


@dataclass(frozen=True)
class TextPayload:
    text: str


WebhookPayload = Union[ArrayPayload, ObjectPayload, TextPayload]


@dataclass
class RespostaWebhook:
    """Fragmentos extraídos de uma resposta, na ordem de chegada."""

    fragmentos: list[str]
    sessao_externa: str | None = None

    def juntar(self, separador: str = " ") -> str:
        return separador.join(self.fragmentos).strip()


def gerar_ask_id(prefixo: str) -> str:
    """Identificador único baseado no relógio: `<prefixo>_<epoch ms>`."""
    return f"{prefixo}_{time.time_ns() // 1_000_000}"


def decodificar_corpo(
    texto: str,
    content_type: str | None,
    action: str | None = None,
) -> WebhookPayload:
    """
    Converte o corpo HTTP em payload tipado.

    Raises:
        EmptyWebhookResponseError: corpo vazio ou só espaços
        MalformedWebhookResponseError: Content-Type JSON com corpo inválido
    """
    if not texto or not texto.strip():
        raise EmptyWebhookResponseError(action=action)

    if not content_type or "application/json" not in content_type:
        return TextPayload(texto)

    try:
        data = json.loads(texto)
    except ValueError as e:
        raise MalformedWebhookResponseError(str(e), action=action)

    if isinstance(data, list):
        return ArrayPayload(data)
    if isinstance(data, dict):
        return ObjectPayload(data)
    if isinstance(data, str):
        return TextPayload(data)
    # número, booleano ou null
    return TextPayload(json.dumps(data))


def _serializar(valor: Any) -> str:
    return json.dumps(valor, ensure_ascii=False, separators=(",", ":"))


def extrair_texto(item: Any) -> str:
    """
    Texto de um item da resposta.

    Campos vazios são ignorados, como valores falsy.
    """
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for campo in CAMPOS_TEXTO:
            valor = item.get(campo)
            if valor:
                return valor if isinstance(valor, str) else _serializar(valor)
        if not item:
            return ""
    if item is None:
        return ""
    return _serializar(item)


def texto_valido(texto: str) -> bool:
    return bool(texto and texto.strip()) and texto not in VALORES_INVALIDOS


def _sessao_externa(item: Any) -> str | None:
    if not isinstance(item, dict):
        return None
    for campo in CAMPOS_SESSAO:
        if item.get(campo):
            return str(item[campo])
    return None


def normalizar(payload: WebhookPayload, action: str | None = None) -> RespostaWebhook:
    """
    Extrai os fragmentos válidos do payload.

    Lista: itens inválidos são descartados, ao menos um precisa sobrar.
    Objeto e texto: exatamente um fragmento.

    Raises:
        WebhookContentError: nenhum conteúdo utilizável
    """
    if isinstance(payload, ArrayPayload):
        fragmentos = [
            texto for texto in (extrair_texto(item) for item in payload.items)
            if texto_valido(texto)
        ]
        primeiro = payload.items[0] if payload.items else None
    elif isinstance(payload, ObjectPayload):
        texto = extrair_texto(payload.item)
        fragmentos = [texto] if texto_valido(texto) else []
        primeiro = payload.item
    else:
        fragmentos = [payload.text] if texto_valido(payload.text) else []
        primeiro = None

    if not fragmentos:
        raise WebhookContentError(action=action)

    return RespostaWebhook(
        fragmentos=fragmentos,
        sessao_externa=_sessao_externa(primeiro),
    )
