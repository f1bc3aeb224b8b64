"""
Endpoints do painel administrativo.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query

from processia.core.dependencies import AdminUser, DBSession
from processia.schemas.base import APIResponse
from processia.schemas.usuario import DashboardResponse, DashboardStats, FiltroAuditoria
from processia.services.dashboard_service import DashboardService

router = APIRouter(prefix="/admin", tags=["Administração"])


@router.get("/dashboard", response_model=APIResponse[DashboardResponse])
async def get_dashboard(
    db: DBSession,
    admin: AdminUser,
    action_type: str | None = Query(None, description="Ação exata, ex.: LOGIN"),
    user_id: UUID | None = Query(None),
    dia: date | None = Query(None, description="Data do evento (AAAA-MM-DD)"),
    termo: str | None = Query(None, description="Ação, usuário ou recurso"),
):
    """Contadores e últimos eventos de auditoria filtrados."""
    service = DashboardService(db)
    dashboard = await service.get_dashboard(
        FiltroAuditoria(action_type=action_type, user_id=user_id, dia=dia, termo=termo)
    )

    return APIResponse(success=True, data=dashboard)


@router.get("/stats", response_model=APIResponse[DashboardStats])
async def get_stats(db: DBSession, admin: AdminUser):
    """Somente os contadores."""
    service = DashboardService(db)
    return APIResponse(success=True, data=await service.get_stats())
