"""
Repositories do histórico versionado (defesa e análise).
"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.core.exceptions import VersionUnavailableError
from processia.models.historico import AnaliseDefesa, DefesaHistorico
from processia.repositories.base import BaseRepository


class VersionedRepository(BaseRepository):
    """
    Base para tabelas com versão por processo.

    A próxima versão é sempre pedida ao banco; o número nunca é
    calculado na aplicação.
    """

    next_version_function: str

    async def proxima_versao(self, processo_id: int) -> int:
        """Chama a função de versionamento do banco para o processo."""
        rpc = getattr(func, self.next_version_function)
        result = await self.db.execute(select(rpc(processo_id)))
        versao = result.scalar()
        if versao is None:
            raise VersionUnavailableError(self.next_version_function, processo_id)
        return int(versao)

    async def get_by_processo(self, processo_id: int) -> list:
        """Versões do processo, mais recente primeiro."""
        result = await self.db.execute(
            select(self.model)
            .where(self.model.processo_id == processo_id)
            .order_by(self.model.versao.desc())
        )
        return list(result.scalars().all())


class DefesaHistoricoRepository(VersionedRepository):
    """Repository para versões da defesa."""

    next_version_function = "get_next_defense_version"

    def __init__(self, db: AsyncSession):
        super().__init__(DefesaHistorico, db)

    async def adicionar(
        self,
        processo_id: int,
        conteudo: str,
        user_id: uuid.UUID | None,
    ) -> DefesaHistorico:
        """Insere nova versão sem commit."""
        versao = await self.proxima_versao(processo_id)
        return await self.create(
            commit=False,
            processo_id=processo_id,
            conteudo=conteudo,
            user_id=user_id,
            versao=versao,
        )


class AnaliseDefesaRepository(VersionedRepository):
    """Repository para análises da defesa."""

    next_version_function = "get_next_analysis_version"

    def __init__(self, db: AsyncSession):
        super().__init__(AnaliseDefesa, db)

    async def adicionar(
        self,
        processo_id: int,
        conteudo_analise: str,
        defesa_analisada: str | None,
        user_id: uuid.UUID | None,
    ) -> AnaliseDefesa:
        """Insere nova análise sem commit."""
        versao = await self.proxima_versao(processo_id)
        return await self.create(
            commit=False,
            processo_id=processo_id,
            conteudo_analise=conteudo_analise,
            defesa_analisada=defesa_analisada,
            user_id=user_id,
            versao=versao,
        )
