"""Schemas Pydantic para validação de request/response."""

from processia.schemas.base import (
    APIResponse,
    BaseSchema,
    CreatedAtMixin,
    ErrorDetail,
    ErrorResponse,
    IDMixin,
)
from processia.schemas.chat import (
    ChatMensagemResponse,
    ChatRespostaResponse,
    ChatSessionCreate,
    ChatSessionDetail,
    ChatSessionRename,
    ChatSessionResponse,
    MensagemEnviar,
)
from processia.schemas.historico import (
    AnaliseDefesaResponse,
    AnalisesResponse,
    ConteudoDocumento,
    DefesaAtual,
    DefesaHistoricoResponse,
    EdicaoDefesaResponse,
    ResumoResponse,
)
from processia.schemas.processo import (
    ProcessoCreate,
    ProcessoResponse,
    ProcessoSalvo,
    ProcessoUpdate,
)
from processia.schemas.sugestao import SugestaoResponse, SugestaoTexto
from processia.schemas.usuario import (
    AlterarSenha,
    AuditLogResponse,
    DashboardResponse,
    DashboardStats,
    FiltroAuditoria,
    SessaoUsuario,
    UserProfileResponse,
    UsuarioCreate,
    UsuarioUpdate,
)
