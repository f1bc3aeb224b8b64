"""
Histórico versionado dos documentos do processo.

Versões são atribuídas pelo banco (funções get_next_*_version) e nunca
são reescritas: restaurar cria uma versão nova.
"""

import uuid

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from processia.db.base import Base, BigIntId


class DefesaHistorico(Base):
    """Versão salva da defesa."""

    __tablename__ = "defesa_historico"
    __table_args__ = (
        UniqueConstraint("processo_id", "versao", name="uq_defesa_historico_versao"),
    )

    processo_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("processos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid)
    conteudo: Mapped[str] = mapped_column(Text, nullable=False)
    versao: Mapped[int] = mapped_column(Integer, nullable=False)

    processo: Mapped["Processo"] = relationship(  # noqa: F821
        "Processo",
        back_populates="historico_defesa",
    )

    def __repr__(self) -> str:
        return f"<DefesaHistorico(processo_id={self.processo_id}, versao={self.versao})>"


class AnaliseDefesa(Base):
    """Análise de uma defesa, com cópia da defesa analisada."""

    __tablename__ = "analise_defesa"
    __table_args__ = (
        UniqueConstraint("processo_id", "versao", name="uq_analise_defesa_versao"),
    )

    processo_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("processos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid)
    conteudo_analise: Mapped[str] = mapped_column(Text, nullable=False)
    defesa_analisada: Mapped[str | None] = mapped_column(Text)
    versao: Mapped[int] = mapped_column(Integer, nullable=False)

    processo: Mapped["Processo"] = relationship(  # noqa: F821
        "Processo",
        back_populates="analises",
    )
