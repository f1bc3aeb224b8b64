"""
Schemas do chat por processo.
"""

import uuid

from pydantic import Field, field_validator

from processia.schemas.base import BaseSchema, CreatedAtMixin, IDMixin
from processia.schemas.processo import ProcessoResponse


class ChatSessionCreate(BaseSchema):
    """Schema para criação de sessão."""

    processo_id: int


class ChatSessionRename(BaseSchema):
    """Novo nome da sessão."""

    nome: str = Field(..., max_length=255)

    @field_validator("nome")
    @classmethod
    def nome_nao_vazio(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Nome não pode ser vazio")
        return v


class ChatSessionResponse(IDMixin, CreatedAtMixin, BaseSchema):
    """Schema de resposta da sessão."""

    processo_id: int
    user_uuid: uuid.UUID | None = None
    nome: str | None = None
    nome_exibicao: str
    instancia_dify: str | None = None


class ChatSessionDetail(ChatSessionResponse):
    """Sessão com o processo."""

    processo: ProcessoResponse


class ChatRespostaResponse(IDMixin, CreatedAtMixin, BaseSchema):
    """Fragmento de resposta."""

    id_pergunta: int
    resposta: str


class ChatMensagemResponse(IDMixin, CreatedAtMixin, BaseSchema):
    """Pergunta com suas respostas."""

    session_id: int
    pergunta: str
    respostas: list[ChatRespostaResponse] = []


class MensagemEnviar(BaseSchema):
    """Pergunta enviada pelo usuário."""

    pergunta: str = Field(..., min_length=1)

    @field_validator("pergunta")
    @classmethod
    def pergunta_nao_vazia(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Mensagem não pode ser vazia")
        return v
