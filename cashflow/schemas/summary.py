"""
Read-only summaries returned by the accounts payable / receivable services.
Upstream payloads use camelCase keys; both spellings are accepted.
"""
from __future__ import annotations

import enum
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PayableStatus(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    OVERDUE = "OVERDUE"
    CANCELED = "CANCELED"
    IN_NEGOTIATION = "IN_NEGOTIATION"


class ReceivableStatus(str, enum.Enum):
    PENDING = "PENDING"
    RECEIVED = "RECEIVED"
    PARTIALLY_RECEIVED = "PARTIALLY_RECEIVED"
    OVERDUE = "OVERDUE"
    IN_DISPUTE = "IN_DISPUTE"
    WRITTEN_OFF = "WRITTEN_OFF"
    CANCELED = "CANCELED"


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class PayableSummary(_UpstreamModel):
    id: str
    due_date: date | None = None
    amount_due: Decimal = Decimal("0")
    amount_paid: Decimal | None = None
    status: PayableStatus
    payment_date: date | None = None  # only set on "paid" responses


class ReceivableSummary(_UpstreamModel):
    id: str
    due_date: date | None = None
    amount_expected: Decimal = Decimal("0")
    amount_received: Decimal | None = None
    status: ReceivableStatus
    received_date: date | None = None  # only set on "received" responses
