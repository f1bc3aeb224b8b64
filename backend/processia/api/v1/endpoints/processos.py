"""
Endpoints de Processos.

Cadastro e edição recebem multipart: campos do processo e anexos.
"""

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from processia.api.v1.endpoints._uploads import ler_arquivos, validar_form
from processia.core.dependencies import CurrentUser, DBSession, Webhook
from processia.models.processo import StatusProcesso
from processia.schemas.base import APIResponse
from processia.schemas.processo import (
    ProcessoCreate,
    ProcessoResponse,
    ProcessoSalvo,
    ProcessoUpdate,
)
from processia.services.processo_service import ProcessoService

router = APIRouter(prefix="/processos", tags=["Processos"])


def _mensagem(resultado: ProcessoSalvo, verbo: str) -> str:
    if resultado.avisos:
        return resultado.avisos[0]
    if resultado.arquivos_enviados:
        return f"Processo {verbo} com sucesso. Os arquivos foram processados."
    return f"Processo {verbo} com sucesso"


@router.get("", response_model=APIResponse[list[ProcessoResponse]])
async def listar_processos(
    db: DBSession,
    current_user: CurrentUser,
    busca: str | None = Query(None, description="Título ou número do processo"),
):
    """Lista todos os processos, mais recentes primeiro."""
    service = ProcessoService(db, current_user)
    processos = await service.listar_processos(busca)

    return APIResponse(
        success=True,
        data=[ProcessoResponse.model_validate(p) for p in processos],
    )


@router.post(
    "",
    response_model=APIResponse[ProcessoSalvo],
    status_code=status.HTTP_201_CREATED,
)
async def criar_processo(
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
    titulo: str = Form(...),
    numero_processo: str | None = Form(None),
    descricao: str | None = Form(None),
    status_processo: StatusProcesso = Form(StatusProcesso.ANDAMENTO, alias="status"),
    arquivos: list[UploadFile] | None = File(None),
):
    """Cria processo e envia os anexos."""
    dados = validar_form(
        ProcessoCreate,
        titulo=titulo,
        numero_processo=numero_processo or None,
        descricao=descricao or None,
        status=status_processo,
    )
    service = ProcessoService(db, current_user, webhook)
    resultado = await service.criar_processo(dados, await ler_arquivos(arquivos))

    return APIResponse(
        success=True,
        data=resultado,
        message=_mensagem(resultado, "criado"),
    )


@router.get("/{processo_id}", response_model=APIResponse[ProcessoResponse])
async def buscar_processo(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Busca processo por ID."""
    service = ProcessoService(db, current_user)
    processo = await service.visualizar_processo(processo_id)

    return APIResponse(success=True, data=ProcessoResponse.model_validate(processo))


@router.put("/{processo_id}", response_model=APIResponse[ProcessoSalvo])
async def atualizar_processo(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
    titulo: str = Form(...),
    numero_processo: str | None = Form(None),
    descricao: str | None = Form(None),
    status_processo: StatusProcesso | None = Form(None, alias="status"),
    arquivos: list[UploadFile] | None = File(None),
):
    """Atualiza processo; novos anexos são acrescentados."""
    dados = validar_form(
        ProcessoUpdate,
        titulo=titulo,
        numero_processo=numero_processo or None,
        descricao=descricao or None,
        status=status_processo,
    )
    service = ProcessoService(db, current_user, webhook)
    resultado = await service.atualizar_processo(
        processo_id, dados, await ler_arquivos(arquivos)
    )

    return APIResponse(
        success=True,
        data=resultado,
        message=_mensagem(resultado, "atualizado"),
    )


@router.delete("/{processo_id}", response_model=APIResponse[None])
async def excluir_processo(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Exclui processo com chats e histórico."""
    service = ProcessoService(db, current_user)
    await service.excluir_processo(processo_id)

    return APIResponse(success=True, message="Processo excluído com sucesso")
