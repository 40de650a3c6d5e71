"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from clubsync.adapters.sqlalchemy.mappings import ledger_entry_table
from clubsync.domain.model import LedgerEntry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session


class SqlAlchemyLedgerRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entry: LedgerEntry) -> None:
        self.session.add(entry)

    def list(self, *, only_unprocessed: bool = False) -> Sequence[LedgerEntry]:
        stmt = select(LedgerEntry).order_by(ledger_entry_table.c.seq)
        if only_unprocessed:
            stmt = stmt.where(ledger_entry_table.c.processed.is_(None))
        return self.session.execute(stmt).scalars().all()

    def get_by_transaction_id(self, transaction_id: str) -> LedgerEntry | None:
        stmt = select(LedgerEntry).where(ledger_entry_table.c.transaction_id == transaction_id)
        return self.session.execute(stmt).scalar_one_or_none()


if TYPE_CHECKING:
    from clubsync.domain.ports import LedgerRepository

    def _repository_check(session: Session) -> LedgerRepository:
        return SqlAlchemyLedgerRepository(session)
