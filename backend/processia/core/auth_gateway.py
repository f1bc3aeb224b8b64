"""
Cliente da API de autenticação do backend hospedado.

Usa a API REST de auth (GoTrue) com a service role key para
operações administrativas e com o token do usuário para troca de senha.
"""

from typing import Any

import httpx
import structlog

from processia.core.config import settings
from processia.core.exceptions import AuthGatewayError

logger = structlog.get_logger()


class AuthGateway:
    """
    Operações de conta no serviço de autenticação hospedado.

    Uso:
        gateway = AuthGateway()
        user = await gateway.criar_usuario("a@b.com", "Fulano")
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = f"{settings.SUPABASE_URL}/auth/v1"
        self._transport = transport

    def _admin_headers(self) -> dict[str, str]:
        return {
            "apikey": settings.SUPABASE_SERVICE_ROLE_KEY,
            "Authorization": f"Bearer {settings.SUPABASE_SERVICE_ROLE_KEY}",
            "Content-Type": "application/json",
        }

    def _user_headers(self, token: str) -> dict[str, str]:
        return {
            "apikey": settings.SUPABASE_ANON_KEY,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        async with httpx.AsyncClient(transport=self._transport, timeout=15.0) as client:
            try:
                resp = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=headers,
                    json=json,
                )
            except httpx.HTTPError as e:
                logger.error("Falha ao contatar auth", path=path, error=str(e))
                raise AuthGatewayError(f"Erro ao contatar serviço de autenticação: {e}")

        if resp.is_error:
            message = _error_message(resp)
            logger.warning(
                "Auth retornou erro",
                path=path,
                status_code=resp.status_code,
                message=message,
            )
            raise AuthGatewayError(message, status_code=resp.status_code)

        if not resp.content:
            return {}
        return resp.json()

    async def criar_usuario(self, email: str, nome: str | None = None) -> dict[str, Any]:
        """Cria usuário confirmado; retorna o registro de auth com `id`."""
        data = await self._request(
            "POST",
            "/admin/users",
            self._admin_headers(),
            json={
                "email": email,
                "email_confirm": True,
                "user_metadata": {"nome": nome},
            },
        )
        logger.info("Usuário criado no auth", user_id=data.get("id"))
        return data

    async def excluir_usuario(self, user_id: str) -> None:
        """Remove usuário do serviço de autenticação."""
        await self._request("DELETE", f"/admin/users/{user_id}", self._admin_headers())
        logger.info("Usuário removido do auth", user_id=user_id)

    async def atualizar_senha(self, token: str, nova_senha: str) -> None:
        """Troca a senha do dono do token."""
        await self._request(
            "PUT",
            "/user",
            self._user_headers(token),
            json={"password": nova_senha},
        )


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return resp.text
