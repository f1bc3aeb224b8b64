"""
Router principal da API v1.

Agrega todas as rotas organizadas por domínio.
"""

from fastapi import APIRouter

from processia.api.v1.endpoints import (
    analises,
    auditoria,
    auth,
    chats,
    defesa,
    health,
    processos,
    resumo,
    sugestoes,
    usuarios,
)

api_router = APIRouter()

# Health check
api_router.include_router(health.router, prefix="/health", tags=["Health"])

# Autenticação
api_router.include_router(auth.router)

# Processos e anexos
api_router.include_router(processos.router)

# Documentos gerados pela IA
api_router.include_router(defesa.router)
api_router.include_router(analises.router)
api_router.include_router(resumo.router)

# Chat
api_router.include_router(chats.router)
api_router.include_router(sugestoes.router)

# Administração
api_router.include_router(usuarios.router)
api_router.include_router(auditoria.router)
