"""
Endpoints de Sugestões de prompt.
"""

from fastapi import APIRouter, status

from processia.core.dependencies import CurrentUser, DBSession
from processia.schemas.base import APIResponse
from processia.schemas.sugestao import SugestaoResponse, SugestaoTexto
from processia.services.sugestao_service import SugestaoService

router = APIRouter(prefix="/sugestoes", tags=["Sugestões"])


@router.get("", response_model=APIResponse[list[SugestaoResponse]])
async def listar_sugestoes(db: DBSession, current_user: CurrentUser):
    """Sugestões do usuário; cria as padrão na primeira vez."""
    service = SugestaoService(db, current_user)
    sugestoes = await service.listar()

    return APIResponse(
        success=True,
        data=[SugestaoResponse.model_validate(s) for s in sugestoes],
    )


@router.post(
    "",
    response_model=APIResponse[SugestaoResponse],
    status_code=status.HTTP_201_CREATED,
)
async def criar_sugestao(
    dados: SugestaoTexto,
    db: DBSession,
    current_user: CurrentUser,
):
    service = SugestaoService(db, current_user)
    sugestao = await service.criar(dados.prompt_text)

    return APIResponse(success=True, data=SugestaoResponse.model_validate(sugestao))


@router.put("/{sugestao_id}", response_model=APIResponse[SugestaoResponse])
async def atualizar_sugestao(
    sugestao_id: int,
    dados: SugestaoTexto,
    db: DBSession,
    current_user: CurrentUser,
):
    service = SugestaoService(db, current_user)
    sugestao = await service.atualizar(sugestao_id, dados.prompt_text)

    return APIResponse(success=True, data=SugestaoResponse.model_validate(sugestao))


@router.delete("/{sugestao_id}", response_model=APIResponse[None])
async def excluir_sugestao(
    sugestao_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    service = SugestaoService(db, current_user)
    await service.excluir(sugestao_id)

    return APIResponse(success=True, message="Sugestão excluída")
