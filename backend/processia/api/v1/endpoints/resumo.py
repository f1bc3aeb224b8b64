"""
Endpoints do Resumo.
"""

from fastapi import APIRouter

from processia.core.dependencies import CurrentUser, DBSession, Webhook
from processia.models.processo import Processo
from processia.schemas.base import APIResponse
from processia.schemas.historico import ConteudoDocumento, ResumoResponse
from processia.services.resumo_service import ResumoService

router = APIRouter(prefix="/processos/{processo_id}/resumo", tags=["Resumo"])


def _resumo(processo: Processo) -> ResumoResponse:
    return ResumoResponse(processo_id=processo.id, resumo=processo.resumo)


@router.post("/gerar", response_model=APIResponse[ResumoResponse])
async def gerar_resumo(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
):
    """Gera resumo com IA."""
    service = ResumoService(db, current_user, webhook)
    processo = await service.gerar_resumo(processo_id)

    return APIResponse(
        success=True,
        data=_resumo(processo),
        message="Resumo gerado com sucesso",
    )


@router.post("/edicao", response_model=APIResponse[ResumoResponse])
async def iniciar_edicao_resumo(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
):
    """Avisa o orquestrador e devolve o resumo atual para edição."""
    service = ResumoService(db, current_user, webhook)
    processo = await service.iniciar_edicao(processo_id)

    return APIResponse(success=True, data=_resumo(processo))


@router.put("", response_model=APIResponse[ResumoResponse])
async def salvar_resumo(
    processo_id: int,
    dados: ConteudoDocumento,
    db: DBSession,
    current_user: CurrentUser,
):
    """Salva edição manual do resumo."""
    service = ResumoService(db, current_user)
    processo = await service.salvar_resumo(processo_id, dados.conteudo)

    return APIResponse(
        success=True,
        data=_resumo(processo),
        message="Resumo salvo com sucesso",
    )
