"""
Módulo de segurança: validação dos JWT emitidos pelo backend hospedado.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from processia.core.config import settings
from processia.core.exceptions import InvalidTokenError, TokenExpiredError


def create_access_token(
    subject: str | Any,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """
    Cria um token no mesmo formato do backend hospedado.

    Usado em desenvolvimento e nos testes; em produção os tokens vêm
    do serviço de autenticação.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=1))

    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "exp": expire,
        "iat": now,
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(to_encode, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verifica e decodifica um token JWT.

    Raises:
        TokenExpiredError: token expirado
        InvalidTokenError: assinatura, audiência ou formato inválidos
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()
