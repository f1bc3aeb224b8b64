"""Services - Business Logic Layer."""

from processia.services.analise_service import AnaliseService
from processia.services.audit_service import AuditService
from processia.services.auth_service import AuthService
from processia.services.chat_service import ChatService
from processia.services.dashboard_service import DashboardService
from processia.services.defesa_service import DefesaService
from processia.services.processo_service import ProcessoService
from processia.services.resumo_service import ResumoService
from processia.services.sugestao_service import SugestaoService
from processia.services.usuario_service import UsuarioService

__all__ = [
    "AnaliseService",
    "AuditService",
    "AuthService",
    "ChatService",
    "DashboardService",
    "DefesaService",
    "ProcessoService",
    "ResumoService",
    "SugestaoService",
    "UsuarioService",
]
