"""
Testes da área administrativa: usuários e painel de auditoria.
"""
from uuid import uuid4

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.config import settings
from processia.models.audit import AuditLog
from processia.models.usuario import UserProfile, UserRole

ADMIN_USERS_URL = f"{settings.SUPABASE_URL}/auth/v1/admin/users"


@pytest.mark.asyncio
async def test_usuario_comum_sem_acesso(client: AsyncClient):
    response = await client.get("/api/v1/usuarios")
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"

    response = await client.get("/api/v1/admin/dashboard")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_listar_usuarios(admin_client: AsyncClient, admin_user: UserProfile):
    response = await admin_client.get("/api/v1/usuarios")
    assert response.status_code == 200
    assert [u["email"] for u in response.json()["data"]] == [admin_user.email]


@pytest.mark.asyncio
async def test_criar_usuario(admin_client: AsyncClient, auth_api, db_session: AsyncSession):
    novo_id = uuid4()
    recebido = {}

    def criar(request: httpx.Request) -> httpx.Response:
        recebido["apikey"] = request.headers["apikey"]
        recebido["corpo"] = auth_api.corpo(request)
        return httpx.Response(200, json={"id": str(novo_id), "email": "nova@teste.com"})

    auth_api.rota(ADMIN_USERS_URL, criar)

    response = await admin_client.post(
        "/api/v1/usuarios",
        json={"email": "nova@teste.com", "nome": "Nova Advogada", "role": "USER"},
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["id"] == str(novo_id)
    assert data["role"] == "USER"

    assert recebido["apikey"] == settings.SUPABASE_SERVICE_ROLE_KEY
    assert recebido["corpo"]["email_confirm"] is True
    assert recebido["corpo"]["user_metadata"] == {"nome": "Nova Advogada"}

    logs = (await db_session.execute(select(AuditLog))).scalars().all()
    assert [(log.action_type, log.resource_id) for log in logs] == [("CREATE_USER", str(novo_id))]


@pytest.mark.asyncio
async def test_criar_usuario_email_duplicado(
    admin_client: AsyncClient,
    admin_user: UserProfile,
    auth_api,
):
    response = await admin_client.post(
        "/api/v1/usuarios",
        json={"email": admin_user.email, "nome": "Outro"},
    )
    assert response.status_code == 400
    assert auth_api.chamadas == []


@pytest.mark.asyncio
async def test_criar_usuario_auth_recusa(admin_client: AsyncClient, auth_api, db_session: AsyncSession):
    auth_api.responder(ADMIN_USERS_URL, status_code=422, payload={"msg": "Email inválido no auth"})

    response = await admin_client.post(
        "/api/v1/usuarios",
        json={"email": "x@teste.com", "nome": "X"},
    )
    assert response.status_code == 502
    perfis = (await db_session.execute(select(UserProfile))).scalars().all()
    assert len(perfis) == 1


@pytest.mark.asyncio
async def test_atualizar_usuario(admin_client: AsyncClient, test_user: UserProfile):
    response = await admin_client.put(
        f"/api/v1/usuarios/{test_user.id}",
        json={"role": "ADMIN"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["role"] == "ADMIN"
    assert data["nome"] == test_user.nome


@pytest.mark.asyncio
async def test_excluir_usuario(
    admin_client: AsyncClient,
    auth_api,
    test_user: UserProfile,
    db_session: AsyncSession,
):
    auth_api.responder(f"{ADMIN_USERS_URL}/{test_user.id}", method="DELETE")

    response = await admin_client.delete(f"/api/v1/usuarios/{test_user.id}")
    assert response.status_code == 200
    assert await db_session.get(UserProfile, test_user.id) is None
    assert len(auth_api.chamadas_para(f"{ADMIN_USERS_URL}/{test_user.id}")) == 1


@pytest.mark.asyncio
async def test_admin_nao_se_exclui(admin_client: AsyncClient, admin_user: UserProfile, auth_api):
    response = await admin_client.delete(f"/api/v1/usuarios/{admin_user.id}")
    assert response.status_code == 400
    assert auth_api.chamadas == []


@pytest.mark.asyncio
async def test_stats(
    admin_client: AsyncClient,
    test_user: UserProfile,
    test_processo,
):
    response = await admin_client.get("/api/v1/admin/stats")
    assert response.status_code == 200
    assert response.json()["data"] == {
        "total_usuarios": 2,
        "total_admins": 1,
        "total_usuarios_comuns": 1,
        "total_processos": 1,
        "total_logs": 0,
    }


@pytest.mark.asyncio
async def test_dashboard_filtros(
    admin_client: AsyncClient,
    admin_user: UserProfile,
    test_user: UserProfile,
    db_session: AsyncSession,
):
    db_session.add_all(
        [
            AuditLog(user_id=test_user.id, action_type="LOGIN", resource_type="SYSTEM"),
            AuditLog(
                user_id=admin_user.id,
                action_type="CREATE_PROCESS",
                resource_type="PROCESS",
                resource_id="1",
            ),
        ]
    )
    await db_session.commit()

    response = await admin_client.get("/api/v1/admin/dashboard")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["stats"]["total_logs"] == 2
    assert {log["action_label"] for log in data["logs"]} == {"Login", "Criar Processo"}

    response = await admin_client.get("/api/v1/admin/dashboard?action_type=LOGIN")
    logs = response.json()["data"]["logs"]
    assert len(logs) == 1
    assert logs[0]["user_nome"] == test_user.nome

    response = await admin_client.get("/api/v1/admin/dashboard?termo=administrador")
    logs = response.json()["data"]["logs"]
    assert [log["action_type"] for log in logs] == ["CREATE_PROCESS"]

    response = await admin_client.get(f"/api/v1/admin/dashboard?user_id={test_user.id}")
    assert [log["action_type"] for log in response.json()["data"]["logs"]] == ["LOGIN"]


@pytest.mark.asyncio
async def test_papel_invalido(admin_client: AsyncClient, test_user: UserProfile):
    response = await admin_client.put(
        f"/api/v1/usuarios/{test_user.id}",
        json={"role": "SUPERUSER"},
    )
    assert response.status_code == 422


def test_roles():
    assert {r.value for r in UserRole} == {"ADMIN", "USER"}
