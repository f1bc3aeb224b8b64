"""
Repository base com operações CRUD genéricas.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from processia.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Repository base com operações CRUD.

    Uso:
        class ProcessoRepository(BaseRepository[Processo]):
            def __init__(self, db: AsyncSession):
                super().__init__(Processo, db)

    As escritas aceitam `commit=False` para compor várias operações em
    uma única transação (ex.: salvamento versionado).
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Busca entidade por ID."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Lista todas as entidades, mais recentes primeiro."""
        result = await self.db.execute(
            select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        """Conta total de entidades."""
        result = await self.db.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()

    async def _finish(self, instance: ModelType | None, commit: bool) -> None:
        if commit:
            await self.db.commit()
            if instance is not None:
                await self.db.refresh(instance)
        else:
            await self.db.flush()

    async def create(self, commit: bool = True, **kwargs: Any) -> ModelType:
        """Cria nova entidade."""
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self._finish(instance, commit)
        return instance

    async def update(
        self,
        id: Any,
        commit: bool = True,
        **kwargs: Any,
    ) -> ModelType | None:
        """Atualiza entidade existente."""
        instance = await self.get_by_id(id)
        if not instance:
            return None

        for key, value in kwargs.items():
            if value is not None:
                setattr(instance, key, value)

        await self._finish(instance, commit)
        return instance

    async def delete(self, id: Any, commit: bool = True) -> bool:
        """Remove entidade (hard delete)."""
        instance = await self.get_by_id(id)
        if not instance:
            return False

        await self.db.delete(instance)
        await self._finish(None, commit)
        return True
