from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cashflow.models.manual_entry import EntryType, ManualCashEntry


def manual_entries_between(db: Session, from_date: date, to_date: date) -> list[ManualCashEntry]:
    q = (
        select(ManualCashEntry)
        .where(ManualCashEntry.entry_date >= from_date, ManualCashEntry.entry_date <= to_date)
        .order_by(
            ManualCashEntry.entry_date,
            ManualCashEntry.sequence,
            ManualCashEntry.created_at,
            ManualCashEntry.id,
        )
    )
    return list(db.execute(q).scalars().all())


def next_entry_sequence(db: Session) -> int:
    return int(db.execute(select(func.coalesce(func.max(ManualCashEntry.sequence), 0))).scalar() or 0) + 1


def manual_amount_between(db: Session, entry_type: EntryType, from_date: date, to_date: date) -> Decimal:
    q = select(func.coalesce(func.sum(ManualCashEntry.amount), 0)).where(
        ManualCashEntry.type == entry_type,
        ManualCashEntry.entry_date >= from_date,
        ManualCashEntry.entry_date <= to_date,
    )
    return Decimal(str(db.execute(q).scalar() or 0))


def get_manual_entry(db: Session, entry_id: UUID) -> ManualCashEntry | None:
    return db.get(ManualCashEntry, entry_id)


def manual_entry_exists(db: Session, entry_id: UUID) -> bool:
    q = select(func.count(ManualCashEntry.id)).where(ManualCashEntry.id == entry_id)
    return int(db.execute(q).scalar() or 0) > 0
