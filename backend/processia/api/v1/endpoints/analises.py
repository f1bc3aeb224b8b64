"""
Endpoints da Análise da defesa.
"""

from fastapi import APIRouter

from processia.core.dependencies import CurrentUser, DBSession, Webhook
from processia.schemas.base import APIResponse
from processia.schemas.historico import AnaliseDefesaResponse, AnalisesResponse
from processia.services.analise_service import AnaliseService

router = APIRouter(prefix="/processos/{processo_id}/analises", tags=["Análise da Defesa"])


@router.post("", response_model=APIResponse[AnaliseDefesaResponse])
async def analisar_defesa(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
):
    """Analisa a defesa atual com IA."""
    service = AnaliseService(db, current_user, webhook)
    analise = await service.analisar_defesa(processo_id)

    return APIResponse(
        success=True,
        data=AnaliseDefesaResponse.model_validate(analise),
        message="Análise concluída",
    )


@router.get("", response_model=APIResponse[AnalisesResponse])
async def listar_analises(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Histórico de análises com a mais recente em destaque."""
    service = AnaliseService(db, current_user)
    analises = [
        AnaliseDefesaResponse.model_validate(a)
        for a in await service.listar_analises(processo_id)
    ]

    return APIResponse(
        success=True,
        data=AnalisesResponse(
            analise_atual=analises[0] if analises else None,
            historico=analises,
        ),
    )
