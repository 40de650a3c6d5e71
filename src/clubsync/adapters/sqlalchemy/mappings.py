"""SQLAlchemy mapping metadata for the ledger."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
)

from clubsync.domain.model import LedgerEntry

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "pk": "pk_%(table_name)s",
}

ledger_entry_table = Table(
    "ledger_entry",
    mapper_registry.metadata,
    # insertion order is the processing order
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", UUIDColumnType, nullable=False, unique=True),
    Column("given_name", String(255), nullable=False),
    Column("family_name", String(255), nullable=False),
    Column("home_address", String(320), nullable=False),
    Column("phone", String(64), nullable=False, default=""),
    Column("payment_status", String(64), nullable=False, default=""),
    Column("listed_in_directory", Boolean, nullable=False, default=True),
    Column("override_address", String(320), nullable=True),
    Column("transaction_id", String(128), nullable=True, unique=True),
    Column("processed", UTCDateTime(), nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Map the ledger entry onto its table (idempotent)."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(LedgerEntry, ledger_entry_table)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
