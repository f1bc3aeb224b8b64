"""
Endpoints do chat por processo.
"""

from fastapi import APIRouter, status

from processia.core.dependencies import CurrentUser, DBSession, Webhook
from processia.models.chat import ChatMensagem, ChatResposta
from processia.schemas.base import APIResponse
from processia.schemas.chat import (
    ChatMensagemResponse,
    ChatRespostaResponse,
    ChatSessionCreate,
    ChatSessionDetail,
    ChatSessionRename,
    ChatSessionResponse,
    MensagemEnviar,
)
from processia.services.chat_service import ChatService

router = APIRouter(prefix="/chats", tags=["Chat"])


def _mensagem_response(
    mensagem: ChatMensagem,
    respostas: list[ChatResposta],
) -> ChatMensagemResponse:
    return ChatMensagemResponse(
        id=mensagem.id,
        created_at=mensagem.created_at,
        session_id=mensagem.session_id,
        pergunta=mensagem.pergunta,
        respostas=[ChatRespostaResponse.model_validate(r) for r in respostas],
    )


@router.get("", response_model=APIResponse[list[ChatSessionResponse]])
async def listar_sessoes(
    processo_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Sessões de um processo, mais recentes primeiro."""
    service = ChatService(db, current_user)
    sessoes = await service.listar_sessoes(processo_id)

    return APIResponse(
        success=True,
        data=[ChatSessionResponse.model_validate(s) for s in sessoes],
    )


@router.post(
    "",
    response_model=APIResponse[ChatSessionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def criar_sessao(
    dados: ChatSessionCreate,
    db: DBSession,
    current_user: CurrentUser,
):
    """Abre uma conversa nova."""
    service = ChatService(db, current_user)
    sessao = await service.criar_sessao(dados.processo_id)

    return APIResponse(
        success=True,
        data=ChatSessionResponse.model_validate(sessao),
        message="Chat criado com sucesso",
    )


@router.get("/{session_id}", response_model=APIResponse[ChatSessionDetail])
async def buscar_sessao(
    session_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Sessão com o processo."""
    service = ChatService(db, current_user)
    sessao = await service.buscar_sessao(session_id)

    return APIResponse(success=True, data=ChatSessionDetail.model_validate(sessao))


@router.patch("/{session_id}", response_model=APIResponse[ChatSessionResponse])
async def renomear_sessao(
    session_id: int,
    dados: ChatSessionRename,
    db: DBSession,
    current_user: CurrentUser,
):
    """Renomeia a sessão."""
    service = ChatService(db, current_user)
    sessao = await service.renomear_sessao(session_id, dados.nome)

    return APIResponse(success=True, data=ChatSessionResponse.model_validate(sessao))


@router.delete("/{session_id}", response_model=APIResponse[None])
async def excluir_sessao(
    session_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Exclui a sessão com suas mensagens."""
    service = ChatService(db, current_user)
    await service.excluir_sessao(session_id)

    return APIResponse(success=True, message="Chat excluído com sucesso")


@router.get(
    "/{session_id}/mensagens",
    response_model=APIResponse[list[ChatMensagemResponse]],
)
async def listar_mensagens(
    session_id: int,
    db: DBSession,
    current_user: CurrentUser,
):
    """Perguntas e respostas em ordem cronológica."""
    service = ChatService(db, current_user)
    mensagens = await service.listar_mensagens(session_id)

    return APIResponse(
        success=True,
        data=[_mensagem_response(m, r) for m, r in mensagens],
    )


@router.post(
    "/{session_id}/mensagens",
    response_model=APIResponse[ChatMensagemResponse],
)
async def enviar_mensagem(
    session_id: int,
    dados: MensagemEnviar,
    db: DBSession,
    current_user: CurrentUser,
    webhook: Webhook,
):
    """
    Envia uma pergunta ao orquestrador.

    Em caso de falha a pergunta fica gravada sem resposta.
    """
    service = ChatService(db, current_user, webhook)
    mensagem, respostas = await service.enviar_mensagem(session_id, dados.pergunta)

    return APIResponse(success=True, data=_mensagem_response(mensagem, respostas))
