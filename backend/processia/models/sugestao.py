"""
Sugestões de prompt do chat de edição da defesa.
"""

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from processia.db.base import Base, UpdatedAtMixin

DEFAULT_PROMPTS = [
    "Adicione argumentos sobre direitos trabalhistas",
    "Reformule para um tom mais formal",
    "Inclua jurisprudência relevante",
    "Simplifique a linguagem técnica",
    "Adicione mais detalhes sobre as provas",
]


class SugestaoPrompt(UpdatedAtMixin, Base):
    """Prompt salvo por um usuário."""

    __tablename__ = "sugestoes_prompts"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False)
