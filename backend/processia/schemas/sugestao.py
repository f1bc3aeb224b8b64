"""
Schemas de Sugestões de prompt.
"""

from datetime import datetime

from pydantic import Field, field_validator

from processia.schemas.base import BaseSchema, CreatedAtMixin, IDMixin


class SugestaoTexto(BaseSchema):
    """Texto de uma sugestão."""

    prompt_text: str = Field(..., max_length=2000)

    @field_validator("prompt_text")
    @classmethod
    def texto_nao_vazio(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Texto da sugestão não pode ser vazio")
        return v


class SugestaoResponse(IDMixin, CreatedAtMixin, BaseSchema):
    """Schema de resposta da sugestão."""

    prompt_text: str
    updated_at: datetime | None = None
