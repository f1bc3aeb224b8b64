"""
Testes para o endpoint de processos.
"""
import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.config import settings
from processia.models.audit import AuditLog
from processia.models.chat import ChatMensagem, ChatResposta, ChatSession
from processia.models.historico import DefesaHistorico
from processia.models.processo import Processo, StatusProcesso


@pytest.mark.asyncio
async def test_list_processos_empty(client: AsyncClient):
    """Testa listagem de processos vazia."""
    response = await client.get("/api/v1/processos")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"] == []


@pytest.mark.asyncio
async def test_create_processo(client: AsyncClient, webhook, db_session: AsyncSession):
    """Testa criação de processo sem anexos."""
    response = await client.post(
        "/api/v1/processos",
        data={
            "titulo": "Reclamação - verbas rescisórias",
            "numero_processo": "0001111-22.2024.5.02.0003",
            "status": "andamento",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Processo criado com sucesso"
    processo = data["data"]["processo"]
    assert processo["titulo"] == "Reclamação - verbas rescisórias"
    assert processo["status"] == "andamento"
    assert data["data"]["avisos"] == []

    # Notificação createProcess enviada ao orquestrador
    notificacoes = webhook.chamadas_para(settings.WEBHOOK_AGENT_URL)
    assert len(notificacoes) == 1
    assert webhook.corpo(notificacoes[0])["action"] == "createProcess"

    logs = (await db_session.execute(select(AuditLog))).scalars().all()
    assert [log.action_type for log in logs] == ["CREATE_PROCESS"]


@pytest.mark.asyncio
async def test_create_processo_titulo_vazio(client: AsyncClient):
    """Título só com espaços é rejeitado."""
    response = await client.post("/api/v1/processos", data={"titulo": "   "})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_processo_com_anexos(client: AsyncClient, webhook):
    """Anexos enviados ao webhook de arquivos viram URLs do processo."""
    contador = iter(range(1, 10))

    def upload(request: httpx.Request) -> httpx.Response:
        assert b'name="processo_id"' in request.content
        return httpx.Response(200, json={"url": f"https://arquivos.test/{next(contador)}"})

    webhook.rota(settings.WEBHOOK_FILE_URL, upload)

    response = await client.post(
        "/api/v1/processos",
        data={"titulo": "Processo com anexos"},
        files=[
            ("arquivos", ("inicial.pdf", b"%PDF-1.4", "application/pdf")),
            ("arquivos", ("provas.pdf", b"%PDF-1.4", "application/pdf")),
        ],
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Processo criado com sucesso. Os arquivos foram processados."
    assert data["data"]["processo"]["arquivos_url"] == [
        "https://arquivos.test/1",
        "https://arquivos.test/2",
    ]


@pytest.mark.asyncio
async def test_create_processo_upload_parcial(client: AsyncClient, webhook, db_session: AsyncSession):
    """Falha em um anexo não desfaz o processo."""

    def upload(request: httpx.Request) -> httpx.Response:
        if b"quebrado.pdf" in request.content:
            return httpx.Response(500, text="erro")
        return httpx.Response(200, json={"url": "https://arquivos.test/ok"})

    webhook.rota(settings.WEBHOOK_FILE_URL, upload)

    response = await client.post(
        "/api/v1/processos",
        data={"titulo": "Upload parcial"},
        files=[
            ("arquivos", ("ok.pdf", b"%PDF", "application/pdf")),
            ("arquivos", ("quebrado.pdf", b"%PDF", "application/pdf")),
        ],
    )
    assert response.status_code == 201
    data = response.json()
    assert data["data"]["arquivos_com_erro"] == ["quebrado.pdf"]
    assert data["data"]["processo"]["arquivos_url"] == ["https://arquivos.test/ok"]
    assert data["message"] == (
        "O processo foi criado, mas houve um erro ao processar alguns arquivos."
    )

    processos = (await db_session.execute(select(Processo))).scalars().all()
    assert len(processos) == 1


@pytest.mark.asyncio
async def test_update_processo_acrescenta_anexos(
    client: AsyncClient,
    webhook,
    test_processo: Processo,
    db_session: AsyncSession,
):
    """Novos anexos são acrescentados aos existentes."""
    test_processo.arquivos_url = ["https://arquivos.test/antigo"]
    await db_session.commit()

    webhook.responder(settings.WEBHOOK_FILE_URL, payload={"url": "https://arquivos.test/novo"})

    response = await client.put(
        f"/api/v1/processos/{test_processo.id}",
        data={"titulo": "Título revisado", "status": "concluido"},
        files=[("arquivos", ("novo.pdf", b"%PDF", "application/pdf"))],
    )
    assert response.status_code == 200
    processo = response.json()["data"]["processo"]
    assert processo["titulo"] == "Título revisado"
    assert processo["status"] == "concluido"
    assert processo["numero_processo"] is None
    assert processo["arquivos_url"] == [
        "https://arquivos.test/antigo",
        "https://arquivos.test/novo",
    ]


@pytest.mark.asyncio
async def test_update_processo_sem_status_mantem_o_atual(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    test_processo.status = StatusProcesso.CONCLUIDO
    await db_session.commit()

    response = await client.put(
        f"/api/v1/processos/{test_processo.id}",
        data={"titulo": "Só o título muda"},
    )
    assert response.status_code == 200
    processo = response.json()["data"]["processo"]
    assert processo["titulo"] == "Só o título muda"
    assert processo["status"] == "concluido"

@pytest.mark.asyncio
async def test_get_processo(client: AsyncClient, test_processo: Processo):
    response = await client.get(f"/api/v1/processos/{test_processo.id}")
    assert response.status_code == 200
    assert response.json()["data"]["numero_processo"] == test_processo.numero_processo


@pytest.mark.asyncio
async def test_get_processo_not_found(client: AsyncClient):
    """Testa busca de processo inexistente."""
    response = await client.get("/api/v1/processos/999999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_search_processos(client: AsyncClient, test_processo: Processo):
    """Busca por parte do número do processo."""
    response = await client.get("/api/v1/processos?busca=1234-56")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["data"]] == [test_processo.id]

    response = await client.get("/api/v1/processos?busca=inexistente")
    assert response.json()["data"] == []


@pytest.mark.asyncio
async def test_delete_processo_em_cascata(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    """Exclusão remove sessões, mensagens, respostas e histórico."""
    sessao = ChatSession(processo_id=test_processo.id, nome="Chat")
    db_session.add(sessao)
    await db_session.flush()
    pergunta = ChatMensagem(session_id=sessao.id, pergunta="Qual o prazo?")
    db_session.add(pergunta)
    await db_session.flush()
    db_session.add(ChatResposta(id_pergunta=pergunta.id, resposta="15 dias"))
    db_session.add(DefesaHistorico(processo_id=test_processo.id, conteudo="v1", versao=1))
    await db_session.commit()

    response = await client.delete(f"/api/v1/processos/{test_processo.id}")
    assert response.status_code == 200

    for model in (Processo, ChatSession, ChatMensagem, ChatResposta, DefesaHistorico):
        restantes = (await db_session.execute(select(model))).scalars().all()
        assert restantes == []


@pytest.mark.asyncio
async def test_unauthenticated_request(unauthenticated_client: AsyncClient):
    response = await unauthenticated_client.get("/api/v1/processos")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_ERROR"
