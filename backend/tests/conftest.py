"""
Pytest fixtures para testes do ProcessIA.

O banco de teste é um SQLite em arquivo temporário. As funções de
versionamento do Postgres (get_next_defense_version e
get_next_analysis_version) são registradas em cada conexão.
"""
import json
import os
import sqlite3
from dataclasses import dataclass, field
from typing import AsyncGenerator, Callable
from uuid import uuid4

os.environ.setdefault("SUPABASE_URL", "https://auth.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test")

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from processia.ai.webhook_client import WebhookClient
from processia.core.auth_gateway import AuthGateway
from processia.core.dependencies import (
    AuthContext,
    get_auth_gateway,
    get_current_user,
    get_db,
    get_webhook_client,
)
from processia.core.security import create_access_token
from processia.db.base import Base
from processia.main import app
from processia.models.processo import Processo
from processia.models.usuario import UserProfile, UserRole

VERSION_FUNCTIONS = {
    "get_next_defense_version": "defesa_historico",
    "get_next_analysis_version": "analise_defesa",
}


def _registrar_funcoes_versao(engine, db_path: str) -> None:
    """Emula as funções RPC do banco hospedado no SQLite."""

    def _proxima_versao(tabela: str) -> Callable[[int], int]:
        def proxima(processo_id: int) -> int:
            # Conexão separada: a função roda dentro de uma consulta
            with sqlite3.connect(db_path, timeout=5) as conn:
                row = conn.execute(
                    f"SELECT COALESCE(MAX(versao), 0) + 1 FROM {tabela} WHERE processo_id = ?",
                    (processo_id,),
                ).fetchone()
            return row[0]

        return proxima

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        for nome, tabela in VERSION_FUNCTIONS.items():
            dbapi_connection.create_function(nome, 1, _proxima_versao(tabela))


@pytest_asyncio.fixture(scope="function")
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Cria sessão de banco de dados para cada teste."""
    db_path = str(tmp_path / "processia_test.db")
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=False,
        poolclass=NullPool,
    )
    _registrar_funcoes_versao(engine, db_path)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> UserProfile:
    """Cria perfil de usuário comum."""
    user = UserProfile(
        id=uuid4(),
        email="advogado@teste.com",
        nome="Advogado Teste",
        role=UserRole.USER,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> UserProfile:
    """Cria perfil de administrador."""
    admin = UserProfile(
        id=uuid4(),
        email="admin@teste.com",
        nome="Administrador",
        role=UserRole.ADMIN,
    )
    db_session.add(admin)
    await db_session.commit()
    await db_session.refresh(admin)
    return admin


def auth_context(profile: UserProfile) -> AuthContext:
    return AuthContext(
        user_id=profile.id,
        email=profile.email,
        token=create_access_token(profile.id),
        profile=profile,
    )


@pytest_asyncio.fixture
async def test_processo(db_session: AsyncSession, test_user: UserProfile) -> Processo:
    """Cria processo de teste."""
    processo = Processo(
        titulo="Reclamação trabalhista - horas extras",
        numero_processo="0001234-56.2024.5.02.0001",
        descricao="Reclamante pede horas extras e adicional noturno",
        user_id=test_user.id,
    )
    db_session.add(processo)
    await db_session.commit()
    await db_session.refresh(processo)
    return processo


def _sem_query(url: httpx.URL) -> str:
    return str(url).split("?")[0]


@dataclass
class ServicoFalso:
    """
    Servidor HTTP falso para MockTransport.

    Rotas são registradas por URL completa; o que não estiver
    registrado responde 404.
    """

    rotas: dict[str, Callable[[httpx.Request], httpx.Response]] = field(default_factory=dict)
    chamadas: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.chamadas.append(request)
        rota = self.rotas.get(f"{request.method} {_sem_query(request.url)}")
        if rota is None:
            return httpx.Response(404, text="rota não configurada")
        return rota(request)

    def responder(
        self,
        url: str,
        status_code: int = 200,
        payload: object = None,
        text: str | None = None,
        method: str = "POST",
    ) -> None:
        def rota(request: httpx.Request) -> httpx.Response:
            if payload is not None:
                return httpx.Response(status_code, json=payload)
            return httpx.Response(status_code, text=text)

        self.rotas[f"{method} {_sem_query(httpx.URL(url))}"] = rota

    def rota(self, url: str, handler: Callable[[httpx.Request], httpx.Response], method: str = "POST") -> None:
        self.rotas[f"{method} {_sem_query(httpx.URL(url))}"] = handler

    def chamadas_para(self, url: str) -> list[httpx.Request]:
        alvo = httpx.URL(url)
        return [c for c in self.chamadas if _sem_query(c.url) == _sem_query(alvo)]

    def corpo(self, request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def webhook() -> ServicoFalso:
    """Orquestrador de IA falso."""
    return ServicoFalso()


@pytest.fixture
def auth_api() -> ServicoFalso:
    """Serviço de autenticação falso."""
    return ServicoFalso()


def _instalar_overrides(
    db_session: AsyncSession,
    webhook: ServicoFalso,
    auth_api: ServicoFalso,
    user: AuthContext | None,
) -> None:
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_webhook_client] = lambda: WebhookClient(
        transport=httpx.MockTransport(webhook)
    )
    app.dependency_overrides[get_auth_gateway] = lambda: AuthGateway(
        transport=httpx.MockTransport(auth_api)
    )

    if user is not None:
        async def override_get_current_user():
            return user

        app.dependency_overrides[get_current_user] = override_get_current_user


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    test_user: UserProfile,
    webhook: ServicoFalso,
    auth_api: ServicoFalso,
) -> AsyncGenerator[AsyncClient, None]:
    """Cria cliente HTTP autenticado como usuário comum."""
    _instalar_overrides(db_session, webhook, auth_api, auth_context(test_user))

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_client(
    db_session: AsyncSession,
    admin_user: UserProfile,
    webhook: ServicoFalso,
    auth_api: ServicoFalso,
) -> AsyncGenerator[AsyncClient, None]:
    """Cria cliente HTTP autenticado como administrador."""
    _instalar_overrides(db_session, webhook, auth_api, auth_context(admin_user))

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def token_client(
    db_session: AsyncSession,
    webhook: ServicoFalso,
    auth_api: ServicoFalso,
) -> AsyncGenerator[AsyncClient, None]:
    """Cliente que passa pela validação real do JWT."""
    _instalar_overrides(db_session, webhook, auth_api, None)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unauthenticated_client() -> AsyncGenerator[AsyncClient, None]:
    """Cria cliente HTTP sem autenticação."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
