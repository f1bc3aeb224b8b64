"""
Salvamento versionado da defesa.

Três passos em uma transação: próxima versão pedida ao banco, nova
linha no histórico e cópia do conteúdo no processo.
"""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.models.historico import DefesaHistorico
from processia.models.processo import Processo
from processia.repositories.historico_repository import DefesaHistoricoRepository

logger = structlog.get_logger()


async def salvar_defesa_versionada(
    db: AsyncSession,
    processo: Processo,
    conteudo: str,
    user_id: uuid.UUID | None,
    origem: str,
) -> DefesaHistorico:
    """
    Registra uma nova versão da defesa e atualiza o processo.

    Nenhuma versão anterior é alterada. Se o banco não devolver a
    versão, nada é gravado.
    """
    repo = DefesaHistoricoRepository(db)
    try:
        historico = await repo.adicionar(processo.id, conteudo, user_id)
        processo.defesa = conteudo
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(historico)
    await db.refresh(processo)

    logger.info(
        "Defesa versionada",
        processo_id=processo.id,
        versao=historico.versao,
        origem=origem,
    )
    return historico
