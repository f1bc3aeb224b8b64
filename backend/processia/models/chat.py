"""
Modelos do chat por processo.

Uma sessão agrupa perguntas do usuário; cada pergunta pode receber várias
respostas do orquestrador (uma por fragmento devolvido).
"""

import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from processia.db.base import Base, BigIntId


class ChatSession(Base):
    """Conversa vinculada a um processo."""

    __tablename__ = "chat_sessions"

    processo_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("processos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_uuid: Mapped[uuid.UUID | None] = mapped_column(Uuid)
    nome: Mapped[str | None] = mapped_column(String(255))

    # Handle da conversa no orquestrador, devolvido na primeira resposta
    instancia_dify: Mapped[str | None] = mapped_column(String(255))

    processo: Mapped["Processo"] = relationship(  # noqa: F821
        "Processo",
        back_populates="sessoes",
    )

    mensagens: Mapped[list["ChatMensagem"]] = relationship(
        "ChatMensagem",
        back_populates="sessao",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def nome_exibicao(self) -> str:
        return self.nome or f"Chat #{self.id}"

    def __repr__(self) -> str:
        return f"<ChatSession(id={self.id}, processo_id={self.processo_id})>"


class ChatMensagem(Base):
    """Pergunta enviada pelo usuário."""

    __tablename__ = "chat_mensagens"

    session_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    pergunta: Mapped[str] = mapped_column(Text, nullable=False)

    sessao: Mapped["ChatSession"] = relationship(
        "ChatSession",
        back_populates="mensagens",
    )

    respostas: Mapped[list["ChatResposta"]] = relationship(
        "ChatResposta",
        back_populates="pergunta_rel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ChatResposta(Base):
    """Fragmento de resposta do orquestrador para uma pergunta."""

    __tablename__ = "chat_respostas"

    id_pergunta: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("chat_mensagens.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resposta: Mapped[str] = mapped_column(Text, nullable=False)

    pergunta_rel: Mapped["ChatMensagem"] = relationship(
        "ChatMensagem",
        back_populates="respostas",
    )
