"""
Service do painel administrativo.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.config import settings
from processia.models.usuario import UserRole
from processia.repositories.audit_repository import AuditLogRepository
from processia.repositories.processo_repository import ProcessoRepository
from processia.repositories.usuario_repository import UserProfileRepository
from processia.schemas.usuario import (
    AuditLogResponse,
    DashboardResponse,
    DashboardStats,
    FiltroAuditoria,
)
from processia.services.filtros import filtrar_logs, rotulo_acao


class DashboardService:
    """
    Contadores e últimos eventos de auditoria.

    Os filtros são aplicados em memória sobre os últimos AUDIT_LOG_LIMIT
    eventos.
    """

    def __init__(self, db: AsyncSession):
        self._db = db
        self._logs = AuditLogRepository(db)
        self._usuarios = UserProfileRepository(db)
        self._processos = ProcessoRepository(db)

    async def get_stats(self) -> DashboardStats:
        por_role = await self._usuarios.count_by_role()
        return DashboardStats(
            total_usuarios=sum(por_role.values()),
            total_admins=por_role[UserRole.ADMIN],
            total_usuarios_comuns=por_role[UserRole.USER],
            total_processos=await self._processos.count(),
            total_logs=await self._logs.count(),
        )

    async def get_dashboard(self, filtro: FiltroAuditoria) -> DashboardResponse:
        logs = await self._logs.get_recentes(settings.AUDIT_LOG_LIMIT)
        usuarios = {u.id: u for u in await self._usuarios.get_all()}

        filtrados = filtrar_logs(
            logs,
            usuarios,
            action_type=filtro.action_type,
            user_id=filtro.user_id,
            dia=filtro.dia,
            termo=filtro.termo,
        )

        itens = []
        for log in filtrados:
            usuario = usuarios.get(log.user_id)
            itens.append(
                AuditLogResponse(
                    id=log.id,
                    created_at=log.created_at,
                    user_id=log.user_id,
                    user_nome=usuario.nome if usuario else None,
                    user_email=usuario.email if usuario else None,
                    action_type=log.action_type,
                    action_label=rotulo_acao(log.action_type),
                    resource_type=log.resource_type,
                    resource_id=log.resource_id,
                    details=log.details,
                )
            )

        return DashboardResponse(stats=await self.get_stats(), logs=itens)
