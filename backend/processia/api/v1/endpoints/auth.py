"""
Endpoints de Autenticação.

O login em si acontece no serviço de auth hospedado; o cliente chama
/login e /logout depois para registrar o evento.
"""

from fastapi import APIRouter

from processia.core.dependencies import AuthAPI, CurrentUser, DBSession
from processia.schemas.base import APIResponse
from processia.schemas.usuario import AlterarSenha, SessaoUsuario
from processia.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Autenticação"])


@router.post("/login", response_model=APIResponse[SessaoUsuario])
async def registrar_login(db: DBSession, current_user: CurrentUser):
    """Registra o login e devolve o perfil."""
    service = AuthService(db, current_user)
    sessao = await service.registrar_login()

    return APIResponse(success=True, data=sessao)


@router.post("/logout", response_model=APIResponse[None])
async def registrar_logout(db: DBSession, current_user: CurrentUser):
    """Registra o logout."""
    service = AuthService(db, current_user)
    await service.registrar_logout()

    return APIResponse(success=True, message="Logout realizado")


@router.get("/me", response_model=APIResponse[SessaoUsuario])
async def perfil_atual(db: DBSession, current_user: CurrentUser):
    """Retorna o usuário logado."""
    service = AuthService(db, current_user)
    return APIResponse(success=True, data=service.perfil_atual())


@router.post("/change-password", response_model=APIResponse[None])
async def alterar_senha(
    dados: AlterarSenha,
    db: DBSession,
    current_user: CurrentUser,
    gateway: AuthAPI,
):
    """Altera a senha do usuário logado."""
    service = AuthService(db, current_user, gateway)
    await service.alterar_senha(dados.nova_senha)

    return APIResponse(success=True, message="Senha alterada com sucesso")
