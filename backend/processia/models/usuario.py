"""
Perfil do usuário.

A conta (email, senha) vive no serviço de autenticação hospedado; aqui
fica só o perfil com o papel no sistema.
"""

import enum
import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from processia.db.base import Base, TextEnum, UpdatedAtMixin


class UserRole(str, enum.Enum):
    """Papéis de usuário no sistema."""

    ADMIN = "ADMIN"
    USER = "USER"


class UserProfile(UpdatedAtMixin, Base):
    """Perfil de um usuário autenticado."""

    __tablename__ = "user_profiles"

    # Mesmo id do usuário no serviço de auth
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    nome: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(
        TextEnum(UserRole),
        default=UserRole.USER,
        nullable=False,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, email='{self.email}', role={self.role.value})>"
