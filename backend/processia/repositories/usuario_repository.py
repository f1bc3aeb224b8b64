"""
Repository do perfil de usuário.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.models.usuario import UserProfile, UserRole
from processia.repositories.base import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile]):
    """Repository para operações com UserProfile."""

    def __init__(self, db: AsyncSession):
        super().__init__(UserProfile, db)

    async def get_by_email(self, email: str) -> UserProfile | None:
        """Busca perfil por email."""
        result = await self.db.execute(
            select(UserProfile).where(UserProfile.email == email)
        )
        return result.scalar_one_or_none()

    async def count_by_role(self) -> dict[UserRole, int]:
        """Quantidade de perfis por papel."""
        result = await self.db.execute(
            select(UserProfile.role, func.count()).group_by(UserProfile.role)
        )
        contagem = {role: 0 for role in UserRole}
        for role, total in result.all():
            contagem[role] = total
        return contagem
