"""
Testes da defesa versionada.
"""
import base64

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.config import settings
from processia.models.historico import DefesaHistorico
from processia.models.processo import Processo


async def _versoes(db_session: AsyncSession, processo_id: int) -> list[tuple[int, str]]:
    result = await db_session.execute(
        select(DefesaHistorico.versao, DefesaHistorico.conteudo)
        .where(DefesaHistorico.processo_id == processo_id)
        .order_by(DefesaHistorico.versao)
    )
    return [tuple(row) for row in result.all()]


@pytest.mark.asyncio
async def test_gerar_defesa(
    client: AsyncClient,
    webhook,
    test_processo: Processo,
    db_session: AsyncSession,
):
    """Fragmentos unidos por espaço viram a versão 1."""
    webhook.responder(
        settings.WEBHOOK_AGENT_URL,
        payload=[{"message": "Preliminarmente,"}, {"message": "a reclamada contesta."}],
    )

    response = await client.post(f"/api/v1/processos/{test_processo.id}/defesa/gerar")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["defesa"] == "Preliminarmente, a reclamada contesta."
    assert data["versao"] == 1

    corpo = webhook.corpo(webhook.chamadas_para(settings.WEBHOOK_AGENT_URL)[0])
    assert corpo["action"] == "createDefense"
    assert corpo["process_id"] == str(test_processo.id)
    assert corpo["ask_id"].startswith("defense_")
    assert corpo["session_dify"] == f"defense_session_{test_processo.id}"

    await db_session.refresh(test_processo)
    assert test_processo.defesa == "Preliminarmente, a reclamada contesta."


@pytest.mark.asyncio
async def test_gerar_defesa_falha_nao_grava(
    client: AsyncClient,
    webhook,
    test_processo: Processo,
    db_session: AsyncSession,
):
    webhook.responder(settings.WEBHOOK_AGENT_URL, status_code=503, text="indisponível")

    response = await client.post(f"/api/v1/processos/{test_processo.id}/defesa/gerar")
    assert response.status_code == 502
    assert await _versoes(db_session, test_processo.id) == []


@pytest.mark.asyncio
async def test_salvar_defesa_incrementa_versao(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    """Cada gravação cria uma versão nova; nenhuma é reescrita."""
    for texto in ("primeira", "segunda", "terceira"):
        response = await client.put(
            f"/api/v1/processos/{test_processo.id}/defesa",
            json={"conteudo": texto},
        )
        assert response.status_code == 200

    assert response.json()["data"]["versao"] == 3
    assert await _versoes(db_session, test_processo.id) == [
        (1, "primeira"),
        (2, "segunda"),
        (3, "terceira"),
    ]


@pytest.mark.asyncio
async def test_versoes_independentes_por_processo(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    outro = Processo(titulo="Outro processo")
    db_session.add(outro)
    await db_session.commit()

    await client.put(f"/api/v1/processos/{test_processo.id}/defesa", json={"conteudo": "a"})
    await client.put(f"/api/v1/processos/{test_processo.id}/defesa", json={"conteudo": "b"})
    response = await client.put(f"/api/v1/processos/{outro.id}/defesa", json={"conteudo": "c"})

    assert response.json()["data"]["versao"] == 1


@pytest.mark.asyncio
async def test_historico_mais_recente_primeiro(client: AsyncClient, test_processo: Processo):
    await client.put(f"/api/v1/processos/{test_processo.id}/defesa", json={"conteudo": "v1"})
    await client.put(f"/api/v1/processos/{test_processo.id}/defesa", json={"conteudo": "v2"})

    response = await client.get(f"/api/v1/processos/{test_processo.id}/defesa/historico")
    assert response.status_code == 200
    assert [v["versao"] for v in response.json()["data"]] == [2, 1]


@pytest.mark.asyncio
async def test_restaurar_versao(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    """Restaurar grava o conteúdo antigo como versão nova."""
    primeira = await client.put(
        f"/api/v1/processos/{test_processo.id}/defesa", json={"conteudo": "original"}
    )
    await client.put(f"/api/v1/processos/{test_processo.id}/defesa", json={"conteudo": "editada"})

    historico = await client.get(f"/api/v1/processos/{test_processo.id}/defesa/historico")
    id_v1 = next(v["id"] for v in historico.json()["data"] if v["versao"] == 1)
    assert primeira.json()["data"]["versao"] == 1

    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/historico/{id_v1}/restaurar"
    )
    assert response.status_code == 200
    assert response.json()["data"] == {
        "processo_id": test_processo.id,
        "defesa": "original",
        "versao": 3,
    }
    assert await _versoes(db_session, test_processo.id) == [
        (1, "original"),
        (2, "editada"),
        (3, "original"),
    ]


@pytest.mark.asyncio
async def test_restaurar_versao_de_outro_processo(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    outro = Processo(titulo="Outro")
    db_session.add(outro)
    await db_session.commit()
    salva = await client.put(f"/api/v1/processos/{outro.id}/defesa", json={"conteudo": "x"})
    assert salva.status_code == 200

    historico = await client.get(f"/api/v1/processos/{outro.id}/defesa/historico")
    id_outro = historico.json()["data"][0]["id"]

    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/historico/{id_outro}/restaurar"
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_editar_via_chat_nao_grava(
    client: AsyncClient,
    webhook,
    test_processo: Processo,
    db_session: AsyncSession,
):
    webhook.responder(
        settings.WEBHOOK_AGENT_URL,
        payload=[{"message": "Parágrafo 1"}, {"message": "Parágrafo 2"}],
    )

    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/editar",
        data={"mensagem": "Torne mais formal"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["defesa_sugerida"] == "Parágrafo 1\n\nParágrafo 2"
    assert data["fragmentos"] == ["Parágrafo 1", "Parágrafo 2"]
    assert data["mensagem_usuario"] == "Torne mais formal"

    corpo = webhook.corpo(webhook.chamadas_para(settings.WEBHOOK_AGENT_URL)[0])
    assert corpo["action"] == "editDefense"
    assert corpo["fileType"] == "text"
    assert corpo["fileName"] is None
    assert corpo["fileBase64"] is None

    assert await _versoes(db_session, test_processo.id) == []


@pytest.mark.asyncio
async def test_editar_via_chat_com_anexo(client: AsyncClient, webhook, test_processo: Processo):
    webhook.responder(settings.WEBHOOK_AGENT_URL, payload={"text": "Nova versão"})

    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/editar",
        data={"mensagem": ""},
        files={"arquivo": ("jurisprudencia_tst_2024.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert response.status_code == 200
    assert response.json()["data"]["mensagem_usuario"] == "📎jurisprudencia_tst_2..."

    corpo = webhook.corpo(webhook.chamadas_para(settings.WEBHOOK_AGENT_URL)[0])
    assert corpo["fileType"] == "pdf"
    assert corpo["fileName"] == "jurisprudencia_tst_2024.pdf"
    assert base64.b64decode(corpo["fileBase64"]) == b"%PDF-1.4"


@pytest.mark.asyncio
async def test_editar_via_chat_tipo_invalido(client: AsyncClient, test_processo: Processo):
    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/editar",
        data={"mensagem": "veja"},
        files={"arquivo": ("planilha.zip", b"PK", "application/zip")},
    )
    assert response.status_code == 415


@pytest.mark.asyncio
async def test_editar_via_chat_sem_mensagem_nem_arquivo(client: AsyncClient, test_processo: Processo):
    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/editar",
        data={"mensagem": "   "},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_registrar_sugerida(
    client: AsyncClient,
    test_processo: Processo,
    db_session: AsyncSession,
):
    response = await client.post(
        f"/api/v1/processos/{test_processo.id}/defesa/sugerida",
        json={"conteudo": "Defesa sugerida pelo chat"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["versao"] == 1
    assert await _versoes(db_session, test_processo.id) == [(1, "Defesa sugerida pelo chat")]


@pytest.mark.asyncio
async def test_defesa_processo_inexistente(client: AsyncClient):
    response = await client.put("/api/v1/processos/999/defesa", json={"conteudo": "x"})
    assert response.status_code == 404
