"""
Repository do log de auditoria.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.models.audit import AuditLog
from processia.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository para o log de auditoria (somente inserção e leitura)."""

    def __init__(self, db: AsyncSession):
        super().__init__(AuditLog, db)

    async def get_recentes(self, limit: int) -> list[AuditLog]:
        """Últimos eventos, mais recentes primeiro."""
        result = await self.db.execute(
            select(AuditLog)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
