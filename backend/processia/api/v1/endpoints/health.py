"""
Health check endpoints.
"""

from fastapi import APIRouter
from sqlalchemy import text

from processia.core.config import settings
from processia.core.dependencies import DBSession

router = APIRouter()


@router.get("")
async def health_check() -> dict:
    """Health check básico."""
    return {
        "status": "healthy",
        "version": settings.VERSION,
    }


@router.get("/ready")
async def readiness_check(db: DBSession) -> dict:
    """
    Readiness check.

    Verifica a conexão com o banco hospedado.
    """
    await db.execute(text("SELECT 1"))
    return {
        "status": "ready",
        "checks": {
            "database": "ok",
        },
    }
