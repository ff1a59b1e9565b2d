from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from cashflow.schemas.cash_flow import CashFlowBalance
from cashflow.services.gateways import PayableGateway, ReceivableGateway
from cashflow.services.reporting.common import logger
from cashflow.services.reporting.statement_service import build_cash_flow_statement


async def compute_current_balance(
    db: Session,
    payables: PayableGateway,
    receivables: ReceivableGateway,
    opening_balance_date: date,
    opening_balance: Decimal,
    today: date | None = None,
) -> CashFlowBalance:
    """
    Balance as of yesterday: opening balance plus the statement net flow for
    [opening_balance_date, yesterday]. An anchor dated today or later has no
    closed period to roll forward, so the opening balance is returned as is.
    """
    yesterday = (today or date.today()) - timedelta(days=1)
    if opening_balance_date > yesterday:
        logger.info("balance_short_circuit anchor=%s yesterday=%s", opening_balance_date, yesterday)
        return CashFlowBalance(date=opening_balance_date, balance=opening_balance)

    statement = await build_cash_flow_statement(
        db, payables, receivables, opening_balance_date, yesterday, opening_balance
    )
    logger.info("balance_done as_of=%s balance=%s", yesterday, statement.closing_balance)
    return CashFlowBalance(date=yesterday, balance=statement.closing_balance)
