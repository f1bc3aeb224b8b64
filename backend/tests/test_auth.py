"""
Testes de autenticação: validação do JWT, login/logout e troca de senha.
"""
from datetime import timedelta
from uuid import uuid4

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.config import settings
from processia.core.exceptions import InvalidTokenError, TokenExpiredError
from processia.core.security import create_access_token, decode_token
from processia.models.audit import AuditLog
from processia.models.usuario import UserProfile


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_decode_token():
    user_id = uuid4()
    payload = decode_token(create_access_token(user_id, additional_claims={"email": "a@b.com"}))
    assert payload["sub"] == str(user_id)
    assert payload["email"] == "a@b.com"


def test_decode_token_expirado():
    token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-10))
    with pytest.raises(TokenExpiredError):
        decode_token(token)


def test_decode_token_audiencia_errada():
    token = create_access_token(uuid4(), additional_claims={"aud": "outra"})
    with pytest.raises(InvalidTokenError):
        decode_token(token)


def test_decode_token_lixo():
    with pytest.raises(InvalidTokenError):
        decode_token("nao.e.jwt")


@pytest.mark.asyncio
async def test_me_com_token_valido(token_client: AsyncClient, test_user: UserProfile):
    response = await token_client.get(
        "/api/v1/auth/me",
        headers=_bearer(create_access_token(test_user.id)),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user_id"] == str(test_user.id)
    assert data["email"] == test_user.email
    assert data["is_admin"] is False
    assert data["profile"]["role"] == "USER"


@pytest.mark.asyncio
async def test_me_sem_perfil(token_client: AsyncClient):
    """Usuário autenticado sem perfil é tratado como não administrador."""
    response = await token_client.get(
        "/api/v1/auth/me",
        headers=_bearer(create_access_token(uuid4(), additional_claims={"email": "novo@x.com"})),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["profile"] is None
    assert data["is_admin"] is False
    assert data["email"] == "novo@x.com"


@pytest.mark.asyncio
async def test_token_expirado(token_client: AsyncClient):
    token = create_access_token(uuid4(), expires_delta=timedelta(minutes=-1))
    response = await token_client.get("/api/v1/auth/me", headers=_bearer(token))
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_sub_nao_uuid(token_client: AsyncClient):
    response = await token_client.get(
        "/api/v1/auth/me",
        headers=_bearer(create_access_token("nao-uuid")),
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_sem_token(token_client: AsyncClient):
    response = await token_client.get("/api/v1/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_logout_auditados(client: AsyncClient, db_session: AsyncSession):
    login = await client.post("/api/v1/auth/login")
    assert login.status_code == 200
    logout = await client.post("/api/v1/auth/logout")
    assert logout.status_code == 200

    logs = (await db_session.execute(select(AuditLog).order_by(AuditLog.id))).scalars().all()
    assert [(log.action_type, log.resource_type) for log in logs] == [
        ("LOGIN", "SYSTEM"),
        ("LOGOUT", "SYSTEM"),
    ]


@pytest.mark.asyncio
async def test_change_password(client: AsyncClient, auth_api):
    recebido = {}

    def atualizar(request: httpx.Request) -> httpx.Response:
        recebido["authorization"] = request.headers["authorization"]
        recebido["corpo"] = request.content
        return httpx.Response(200, json={"id": "x"})

    auth_api.rota(f"{settings.SUPABASE_URL}/auth/v1/user", atualizar, method="PUT")

    response = await client.post(
        "/api/v1/auth/change-password",
        json={"nova_senha": "segredo123", "confirmacao": "segredo123"},
    )
    assert response.status_code == 200
    assert recebido["authorization"].startswith("Bearer ")
    assert b"segredo123" in recebido["corpo"]


@pytest.mark.asyncio
async def test_change_password_confirmacao_diferente(client: AsyncClient, auth_api):
    response = await client.post(
        "/api/v1/auth/change-password",
        json={"nova_senha": "segredo123", "confirmacao": "outra123"},
    )
    assert response.status_code == 422
    assert auth_api.chamadas == []


@pytest.mark.asyncio
async def test_change_password_curta(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/change-password",
        json={"nova_senha": "123", "confirmacao": "123"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_change_password_recusada(client: AsyncClient, auth_api):
    auth_api.responder(
        f"{settings.SUPABASE_URL}/auth/v1/user",
        status_code=422,
        payload={"msg": "Password should be different"},
        method="PUT",
    )

    response = await client.post(
        "/api/v1/auth/change-password",
        json={"nova_senha": "segredo123", "confirmacao": "segredo123"},
    )
    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "AUTH_GATEWAY_ERROR"
    assert error["message"] == "Password should be different"
