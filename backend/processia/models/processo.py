"""
Modelo de Processo trabalhista.

O processo concentra os documentos gerados pela IA: a defesa e o resumo
atuais ficam desnormalizados na própria linha; o histórico de versões
fica em `defesa_historico` e `analise_defesa`.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, String, Text, Uuid
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from processia.db.base import Base, TextEnum, UpdatedAtMixin


class StatusProcesso(str, enum.Enum):
    """Situação do processo."""

    ANDAMENTO = "andamento"
    CONCLUIDO = "concluido"


# text[] no Postgres, JSON no SQLite
UrlList = ARRAY(Text).with_variant(JSON(), "sqlite")


class Processo(UpdatedAtMixin, Base):
    """Processo trabalhista acompanhado pelo escritório."""

    __tablename__ = "processos"

    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    numero_processo: Mapped[str | None] = mapped_column(
        String(50),
        index=True,
        comment="Formato CNJ: NNNNNNN-DD.AAAA.J.TR.OOOO",
    )
    descricao: Mapped[str | None] = mapped_column(Text)

    status: Mapped[StatusProcesso] = mapped_column(
        TextEnum(StatusProcesso),
        default=StatusProcesso.ANDAMENTO,
        nullable=False,
    )

    # Documentos atuais (cópia da última versão)
    defesa: Mapped[str | None] = mapped_column(Text)
    resumo: Mapped[str | None] = mapped_column(Text)

    arquivos_url: Mapped[list[str] | None] = mapped_column(UrlList)

    # Autor (id do usuário no serviço de auth)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, index=True)

    # Relacionamentos
    sessoes: Mapped[list["ChatSession"]] = relationship(  # noqa: F821
        "ChatSession",
        back_populates="processo",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    historico_defesa: Mapped[list["DefesaHistorico"]] = relationship(  # noqa: F821
        "DefesaHistorico",
        back_populates="processo",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    analises: Mapped[list["AnaliseDefesa"]] = relationship(  # noqa: F821
        "AnaliseDefesa",
        back_populates="processo",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def tem_defesa(self) -> bool:
        return bool(self.defesa and self.defesa.strip())

    def __repr__(self) -> str:
        return f"<Processo(id={self.id}, numero='{self.numero_processo}')>"
