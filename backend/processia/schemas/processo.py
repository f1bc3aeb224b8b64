"""
Schemas de Processo.
"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from processia.models.processo import StatusProcesso
from processia.schemas.base import BaseSchema, CreatedAtMixin, IDMixin


class ProcessoBase(BaseSchema):
    """Campos editáveis do processo."""

    titulo: str = Field(..., min_length=1, max_length=255)
    numero_processo: str | None = Field(None, max_length=50)
    descricao: str | None = None
    status: StatusProcesso = StatusProcesso.ANDAMENTO

    @field_validator("titulo")
    @classmethod
    def titulo_nao_vazio(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Título é obrigatório")
        return v


class ProcessoCreate(ProcessoBase):
    """Schema para criação de processo."""


class ProcessoUpdate(ProcessoBase):
    """Schema para atualização de processo; sem status, mantém o atual."""

    status: StatusProcesso | None = None


class ProcessoResponse(ProcessoBase, IDMixin, CreatedAtMixin):
    """Schema de resposta do processo."""

    updated_at: datetime | None = None
    defesa: str | None = None
    resumo: str | None = None
    arquivos_url: list[str] | None = None
    user_id: uuid.UUID | None = None


class ProcessoSalvo(BaseSchema):
    """
    Resultado de cadastro/edição com anexos.

    Falha de upload não desfaz o processo: vira aviso.
    """

    processo: ProcessoResponse
    arquivos_enviados: list[str] = []
    arquivos_com_erro: list[str] = []
    avisos: list[str] = []
