"""
Base class para todos os modelos SQLAlchemy.

Define campos comuns e configurações padrão.
"""

from datetime import datetime, timezone
from typing import Type

from sqlalchemy import BigInteger, DateTime, Enum as SQLEnum, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# BIGSERIAL no Postgres, INTEGER PRIMARY KEY (rowid) no SQLite
BigIntId = BigInteger().with_variant(Integer(), "sqlite")


def TextEnum(enum_class: Type) -> SQLEnum:
    """
    Enum armazenado como texto com os valores (values) do Python Enum.

    As colunas do banco hospedado são text (ex.: status = 'andamento'),
    então não há tipo ENUM nativo no Postgres.
    """
    return SQLEnum(
        enum_class,
        values_callable=lambda x: [e.value for e in x],
        native_enum=False,
        validate_strings=True,
        length=20,
    )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Classe base para todos os modelos.

    Inclui campos padrão: id (serial) e created_at.
    """

    id: Mapped[int] = mapped_column(
        BigIntId,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class UpdatedAtMixin:
    """Mixin para tabelas com updated_at."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )
