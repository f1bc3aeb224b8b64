"""
Service de Auditoria.

Registrar um evento nunca interrompe a ação que o originou: falhas
são apenas logadas.
"""

import uuid
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from processia.repositories.audit_repository import AuditLogRepository

logger = structlog.get_logger()


class AuditService:
    """Grava eventos no log de auditoria."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def registrar(
        self,
        user_id: uuid.UUID | None,
        action_type: str,
        resource_type: str,
        resource_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Grava o evento em sessão própria.

        Uma falha aqui só desfaz a linha de auditoria; os objetos da
        sessão da requisição continuam carregados.
        """
        try:
            async with AsyncSession(bind=self._db.bind, expire_on_commit=False) as sessao:
                await AuditLogRepository(sessao).create(
                    user_id=user_id,
                    action_type=action_type,
                    resource_type=resource_type,
                    resource_id=str(resource_id) if resource_id is not None else None,
                    details=details,
                )
        except SQLAlchemyError as e:
            logger.error(
                "Erro ao registrar log de auditoria",
                action_type=action_type,
                resource_type=resource_type,
                resource_id=resource_id,
                error=str(e),
            )
