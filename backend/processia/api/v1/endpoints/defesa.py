"""
Endpoints da Defesa.

Toda gravação cria uma nova versão no histórico.
"""

from fastapi import APIRouter, File, Form, UploadFile

from processia.api.v1.endpoints._uploads import ler_arquivo
from processia.core.dependencies import CurrentUser, DBSession, Webhook
from processia.models.historico import DefesaHistorico
from processia.schemas.base import APIResponse
from processia.schemas.historico import (
    ConteudoDocumento,
    DefesaAtual,
    DefesaHistoricoResponse,
    EdicaoDefesaResponse,
)
from processia.services.defesa_service import DefesaService

router = APIRouter(prefix="/processos/{processo_id}/defesa", tags=["Defesa"])


def _atual(historico: DefesaHistorico) -> DefesaAtual:
    return DefesaAtual(
        processo_id=historico.processo_id,
        defesa=historico.conteudo,
        versao=historico.versao,
    )


@router.post("/gerar", response_model=APIResponse[DefesaAtual])
async def gerar_defesa(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
):
    """Gera defesa com IA."""
    service = DefesaService(db, current_user, webhook)
    historico = await service.gerar_defesa(processo_id)

    return APIResponse(
        success=True,
        data=_atual(historico),
        message="Defesa gerada com sucesso",
    )


@router.put("", response_model=APIResponse[DefesaAtual])
async def salvar_defesa(
    processo_id: int,
    dados: ConteudoDocumento,
    db: DBSession,
    current_user: CurrentUser,
):
    """Salva edição manual da defesa."""
    service = DefesaService(db, current_user)
    historico = await service.salvar_defesa(processo_id, dados.conteudo)

    return APIResponse(
        success=True,
        data=_atual(historico),
        message="Defesa salva com sucesso",
    )


@router.get("/historico", response_model=APIResponse[list[DefesaHistoricoResponse]])
async def listar_historico(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Versões da defesa, mais recente primeiro."""
    service = DefesaService(db, current_user)
    versoes = await service.listar_historico(processo_id)

    return APIResponse(
        success=True,
        data=[DefesaHistoricoResponse.model_validate(v) for v in versoes],
    )


@router.post(
    "/historico/{historico_id}/restaurar",
    response_model=APIResponse[DefesaAtual],
)
async def restaurar_versao(
    processo_id: int,
    historico_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Restaura uma versão antiga como nova versão."""
    service = DefesaService(db, current_user)
    historico = await service.restaurar_versao(processo_id, historico_id)

    return APIResponse(
        success=True,
        data=_atual(historico),
        message="Versão restaurada com sucesso",
    )


@router.post("/editar", response_model=APIResponse[EdicaoDefesaResponse])
async def editar_defesa_via_chat(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
    mensagem: str = Form(""),
    arquivo: UploadFile | None = File(None),
):
    """
    Pede uma edição da defesa ao orquestrador.

    A sugestão não é gravada; use /sugerida para registrá-la.
    """
    anexo = await ler_arquivo(arquivo) if arquivo and arquivo.filename else None
    service = DefesaService(db, current_user, webhook)
    edicao = await service.editar_via_chat(processo_id, mensagem, anexo)

    return APIResponse(success=True, data=edicao)


@router.post("/sugerida", response_model=APIResponse[DefesaAtual])
async def registrar_defesa_sugerida(
    processo_id: int,
    dados: ConteudoDocumento,
    db: DBSession,
    current_user: CurrentUser,
):
    """Registra a sugestão do chat de edição como nova versão."""
    service = DefesaService(db, current_user)
    historico = await service.registrar_sugerida(processo_id, dados.conteudo)

    return APIResponse(
        success=True,
        data=_atual(historico),
        message="Defesa atualizada com sucesso",
    )
