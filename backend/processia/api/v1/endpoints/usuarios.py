"""
Endpoints de gestão de usuários (somente administradores).
"""

from uuid import UUID

from fastapi import APIRouter, status

from processia.core.dependencies import AdminUser, AuthAPI, DBSession
from processia.schemas.base import APIResponse
from processia.schemas.usuario import UserProfileResponse, UsuarioCreate, UsuarioUpdate
from processia.services.usuario_service import UsuarioService

router = APIRouter(prefix="/usuarios", tags=["Usuários"])


@router.get("", response_model=APIResponse[list[UserProfileResponse]])
async def listar_usuarios(db: DBSession, admin: AdminUser):
    """Lista perfis, mais recentes primeiro."""
    service = UsuarioService(db, admin)
    usuarios = await service.listar()

    return APIResponse(
        success=True,
        data=[UserProfileResponse.model_validate(u) for u in usuarios],
    )


@router.post(
    "",
    response_model=APIResponse[UserProfileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def criar_usuario(
    dados: UsuarioCreate,
    db: DBSession,
    admin: AdminUser,
    gateway: AuthAPI,
):
    """Cria conta e perfil."""
    service = UsuarioService(db, admin, gateway)
    profile = await service.criar(dados)

    return APIResponse(
        success=True,
        data=UserProfileResponse.model_validate(profile),
        message="Usuário criado com sucesso",
    )


@router.put("/{user_id}", response_model=APIResponse[UserProfileResponse])
async def atualizar_usuario(
    user_id: UUID,
    dados: UsuarioUpdate,
    db: DBSession,
    admin: AdminUser,
):
    """Atualiza nome e papel."""
    service = UsuarioService(db, admin)
    profile = await service.atualizar(user_id, dados)

    return APIResponse(
        success=True,
        data=UserProfileResponse.model_validate(profile),
        message="Usuário atualizado com sucesso",
    )


@router.delete("/{user_id}", response_model=APIResponse[None])
async def excluir_usuario(
    user_id: UUID,
    db: DBSession,
    admin: AdminUser,
    gateway: AuthAPI,
):
    """Remove conta e perfil."""
    service = UsuarioService(db, admin, gateway)
    await service.excluir(user_id)

    return APIResponse(success=True, message="Usuário excluído com sucesso")
