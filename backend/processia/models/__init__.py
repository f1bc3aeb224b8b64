"""
Modelos SQLAlchemy do ProcessIA.

Importa todos os modelos para garantir que são registrados no metadata.
"""

from processia.models.audit import AuditLog
from processia.models.chat import ChatMensagem, ChatResposta, ChatSession
from processia.models.historico import AnaliseDefesa, DefesaHistorico
from processia.models.processo import Processo, StatusProcesso
from processia.models.sugestao import DEFAULT_PROMPTS, SugestaoPrompt
from processia.models.usuario import UserProfile, UserRole

__all__ = [
    # Processo
    "Processo",
    "StatusProcesso",
    # Chat
    "ChatSession",
    "ChatMensagem",
    "ChatResposta",
    # Histórico versionado
    "DefesaHistorico",
    "AnaliseDefesa",
    # Sugestões
    "SugestaoPrompt",
    "DEFAULT_PROMPTS",
    # Usuário e auditoria
    "UserProfile",
    "UserRole",
    "AuditLog",
]
