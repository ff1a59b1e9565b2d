"""Dependency providers for the cash flow router."""
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from cashflow.core.config import settings
from cashflow.db.session import get_db
from cashflow.services.gateways import HttpPayableGateway, HttpReceivableGateway, PayableGateway, ReceivableGateway
from cashflow.services.reporting import CashFlowService


@lru_cache()
def get_payable_gateway() -> PayableGateway:
    return HttpPayableGateway(settings.payable_service_url)


@lru_cache()
def get_receivable_gateway() -> ReceivableGateway:
    return HttpReceivableGateway(settings.receivable_service_url)


def get_cash_flow_service(
    db: Session = Depends(get_db),
    payables: PayableGateway = Depends(get_payable_gateway),
    receivables: ReceivableGateway = Depends(get_receivable_gateway),
) -> CashFlowService:
    return CashFlowService(db, payables, receivables)
