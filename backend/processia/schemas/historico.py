"""
Schemas dos documentos versionados (defesa, análise, resumo).
"""

import uuid

from pydantic import Field

from processia.schemas.base import BaseSchema, CreatedAtMixin, IDMixin


class ConteudoDocumento(BaseSchema):
    """Texto de um documento editado pelo usuário."""

    conteudo: str = Field(..., min_length=1)


class DefesaHistoricoResponse(IDMixin, CreatedAtMixin, BaseSchema):
    """Versão da defesa."""

    processo_id: int
    user_id: uuid.UUID | None = None
    conteudo: str
    versao: int


class DefesaAtual(BaseSchema):
    """Defesa atual do processo e a versão registrada."""

    processo_id: int
    defesa: str
    versao: int


class AnaliseDefesaResponse(IDMixin, CreatedAtMixin, BaseSchema):
    """Análise de uma defesa."""

    processo_id: int
    user_id: uuid.UUID | None = None
    conteudo_analise: str
    defesa_analisada: str | None = None
    versao: int


class AnalisesResponse(BaseSchema):
    """Histórico de análises com a atual em destaque."""

    analise_atual: AnaliseDefesaResponse | None = None
    historico: list[AnaliseDefesaResponse] = []


class EdicaoDefesaResponse(BaseSchema):
    """
    Resposta do chat de edição.

    Nada é salvo até o usuário registrar a sugestão.
    """

    mensagem_usuario: str
    fragmentos: list[str]
    defesa_sugerida: str


class ResumoResponse(BaseSchema):
    """Resumo atual do processo."""

    processo_id: int
    resumo: str | None = None
