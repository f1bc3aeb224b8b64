"""
Schemas de usuário, autenticação e auditoria.
"""

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import EmailStr, Field, model_validator

from processia.models.usuario import UserRole
from processia.schemas.base import BaseSchema, CreatedAtMixin

SENHA_MIN = 6


class UserProfileResponse(CreatedAtMixin, BaseSchema):
    """Perfil do usuário."""

    id: uuid.UUID
    email: str
    nome: str | None = None
    role: UserRole
    updated_at: datetime | None = None


class SessaoUsuario(BaseSchema):
    """Dados do usuário logado."""

    user_id: uuid.UUID
    email: str | None = None
    profile: UserProfileResponse | None = None
    is_admin: bool = False


class UsuarioCreate(BaseSchema):
    """Schema para criação de usuário pelo administrador."""

    email: EmailStr
    nome: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.USER


class UsuarioUpdate(BaseSchema):
    """Atualização de nome e papel."""

    nome: str | None = Field(None, min_length=1, max_length=255)
    role: UserRole | None = None


class AlterarSenha(BaseSchema):
    """Troca de senha do próprio usuário."""

    nova_senha: str
    confirmacao: str

    @model_validator(mode="after")
    def validar(self) -> "AlterarSenha":
        if self.nova_senha != self.confirmacao:
            raise ValueError("As senhas não coincidem")
        if len(self.nova_senha) < SENHA_MIN:
            raise ValueError(f"A senha deve ter pelo menos {SENHA_MIN} caracteres")
        return self


class AuditLogResponse(CreatedAtMixin, BaseSchema):
    """Evento de auditoria."""

    id: int
    user_id: uuid.UUID | None = None
    user_nome: str | None = None
    user_email: str | None = None
    action_type: str
    action_label: str
    resource_type: str
    resource_id: str | None = None
    details: dict[str, Any] | None = None


class FiltroAuditoria(BaseSchema):
    """Filtros do painel administrativo."""

    action_type: str | None = None
    user_id: uuid.UUID | None = None
    dia: date | None = None
    termo: str | None = None


class DashboardStats(BaseSchema):
    """Contadores do painel administrativo."""

    total_usuarios: int
    total_admins: int
    total_usuarios_comuns: int
    total_processos: int
    total_logs: int


class DashboardResponse(BaseSchema):
    """Painel administrativo."""

    stats: DashboardStats
    logs: list[AuditLogResponse]
