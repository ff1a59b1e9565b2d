from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String, Uuid, func
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cashflow.db.base import Base


class EntryType(str, enum.Enum):
    DEBIT = "DEBIT"  # cash outflow
    CREDIT = "CREDIT"  # cash inflow


class ManualCashEntry(Base):
    """Cash movement recorded directly, not derived from a payable or receivable."""

    __tablename__ = "manual_cash_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entry_date: Mapped[date] = mapped_column(Date, index=True)
    # Always positive; type decides inflow/outflow
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2))
    type: Mapped[EntryType] = mapped_column(Enum(EntryType, native_enum=False, length=10), index=True)
    description: Mapped[str] = mapped_column(String(300))
    project_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    cost_center_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    # Insertion order; breaks ties between entries on the same date
    sequence: Mapped[int] = mapped_column(BigInteger, index=True, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    doc_references: Mapped[list["ManualEntryDocReference"]] = relationship(
        "ManualEntryDocReference",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="ManualEntryDocReference.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )

    @property
    def document_references(self) -> list[str]:
        return [r.reference for r in self.doc_references]


class ManualEntryDocReference(Base):
    """Supporting document (receipt, bank slip) attached to a manual entry."""

    __tablename__ = "manual_entry_doc_references"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("manual_cash_entries.id", ondelete="CASCADE"), index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    reference: Mapped[str] = mapped_column(String(512))

    entry: Mapped["ManualCashEntry"] = relationship("ManualCashEntry", back_populates="doc_references")
