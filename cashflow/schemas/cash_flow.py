from __future__ import annotations

import enum
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class CashFlowItemType(str, enum.Enum):
    RECEIVABLE = "RECEIVABLE"
    PAYABLE = "PAYABLE"
    MANUAL_CREDIT = "MANUAL_CREDIT"
    MANUAL_DEBIT = "MANUAL_DEBIT"


class CashFlowItem(BaseModel):
    date: date
    description: str
    amount: Decimal
    type: CashFlowItemType
    related_id: str | None = None


class CashFlowStatement(BaseModel):
    start_date: date
    end_date: date
    opening_balance: Decimal
    total_inflows: Decimal
    total_outflows: Decimal
    net_cash_flow: Decimal
    closing_balance: Decimal
    inflow_items: list[CashFlowItem] = Field(default_factory=list)
    outflow_items: list[CashFlowItem] = Field(default_factory=list)
    unavailable_sources: list[str] = Field(default_factory=list)


class CashFlowForecast(BaseModel):
    forecast_start_date: date
    starting_balance: Decimal
    # Date -> projected balance, in date order
    daily_projected_balance: dict[date, Decimal]
    unavailable_sources: list[str] = Field(default_factory=list)


class CashFlowBalance(BaseModel):
    date: date
    balance: Decimal
