from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from cashflow.core.exceptions import InvalidInputError, ManualEntryNotFoundError
from cashflow.models.manual_entry import EntryType, ManualCashEntry, ManualEntryDocReference
from cashflow.schemas.manual_entry import ManualCashEntryCreate, ManualEntryTotals
from cashflow.services.reporting import repository

logger = logging.getLogger("cashflow.manual_entries")

DESCRIPTION_MAX_LENGTH = 300
DOCUMENT_REFERENCE_MAX_LENGTH = 512


def validate_manual_entry(payload: ManualCashEntryCreate) -> None:
    """Write-time invariants; checked even when the payload skipped pydantic validation."""
    if payload.amount is None or payload.amount <= 0:
        raise InvalidInputError("Amount must be positive")
    description = (payload.description or "").strip()
    if not description:
        raise InvalidInputError("Description cannot be blank")
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise InvalidInputError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")
    if payload.type not in (EntryType.CREDIT, EntryType.DEBIT):
        raise InvalidInputError("Entry type must be CREDIT or DEBIT")
    for ref in payload.document_references or []:
        if not ref or len(ref) > DOCUMENT_REFERENCE_MAX_LENGTH:
            raise InvalidInputError(
                f"Document references must be 1 to {DOCUMENT_REFERENCE_MAX_LENGTH} characters"
            )


def create_manual_entry(db: Session, payload: ManualCashEntryCreate) -> ManualCashEntry:
    validate_manual_entry(payload)
    logger.info("manual_entry_create type=%s amount=%s date=%s", payload.type.value, payload.amount, payload.entry_date)
    row = ManualCashEntry(
        entry_date=payload.entry_date,
        amount=payload.amount,
        type=payload.type,
        description=payload.description.strip(),
        project_id=payload.project_id,
        cost_center_id=payload.cost_center_id,
        sequence=repository.next_entry_sequence(db),
    )
    for ref in payload.document_references or []:
        row.doc_references.append(ManualEntryDocReference(reference=ref))
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("manual_entry_created id=%s", row.id)
    return row


def get_manual_entry(db: Session, entry_id: UUID) -> ManualCashEntry:
    row = repository.get_manual_entry(db, entry_id)
    if row is None:
        raise ManualEntryNotFoundError(entry_id)
    return row


def delete_manual_entry(db: Session, entry_id: UUID) -> None:
    logger.info("manual_entry_delete id=%s", entry_id)
    if not repository.manual_entry_exists(db, entry_id):
        raise ManualEntryNotFoundError(entry_id)
    row = repository.get_manual_entry(db, entry_id)
    db.delete(row)
    db.commit()
    logger.info("manual_entry_deleted id=%s", entry_id)


def list_manual_entries(db: Session, from_date: date, to_date: date) -> list[ManualCashEntry]:
    if from_date > to_date:
        raise InvalidInputError("Start date must be before or equal to end date")
    return repository.manual_entries_between(db, from_date, to_date)


def manual_entry_totals(db: Session, from_date: date, to_date: date) -> ManualEntryTotals:
    if from_date > to_date:
        raise InvalidInputError("Start date must be before or equal to end date")
    credit = repository.manual_amount_between(db, EntryType.CREDIT, from_date, to_date)
    debit = repository.manual_amount_between(db, EntryType.DEBIT, from_date, to_date)
    return ManualEntryTotals(
        start_date=from_date,
        end_date=to_date,
        total_credit=credit,
        total_debit=debit,
        net=credit - debit,
    )
