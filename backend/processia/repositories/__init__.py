"""Repositories - Data Access Layer."""

from processia.repositories.audit_repository import AuditLogRepository
from processia.repositories.base import BaseRepository
from processia.repositories.chat_repository import (
    ChatMensagemRepository,
    ChatSessionRepository,
)
from processia.repositories.historico_repository import (
    AnaliseDefesaRepository,
    DefesaHistoricoRepository,
)
from processia.repositories.processo_repository import ProcessoRepository
from processia.repositories.sugestao_repository import SugestaoPromptRepository
from processia.repositories.usuario_repository import UserProfileRepository

__all__ = [
    "BaseRepository",
    "ProcessoRepository",
    "ChatSessionRepository",
    "ChatMensagemRepository",
    "DefesaHistoricoRepository",
    "AnaliseDefesaRepository",
    "SugestaoPromptRepository",
    "UserProfileRepository",
    "AuditLogRepository",
]
