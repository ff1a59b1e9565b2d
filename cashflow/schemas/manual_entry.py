from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from cashflow.models.manual_entry import EntryType


class ManualCashEntryBase(BaseModel):
    entry_date: date
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)
    type: EntryType = Field(..., description="CREDIT (inflow) or DEBIT (outflow)")
    description: str = Field(..., min_length=1, max_length=300)
    project_id: int | None = None
    cost_center_id: int | None = None
    document_references: list[Annotated[str, Field(min_length=1, max_length=512)]] = Field(default_factory=list)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description cannot be blank")
        return v


class ManualCashEntryCreate(ManualCashEntryBase):
    pass


class ManualCashEntryRead(ManualCashEntryBase):
    id: UUID
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class ManualEntryTotals(BaseModel):
    start_date: date
    end_date: date
    total_credit: Decimal
    total_debit: Decimal
    net: Decimal
