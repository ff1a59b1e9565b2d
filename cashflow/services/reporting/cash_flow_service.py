from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from cashflow.schemas.cash_flow import CashFlowBalance, CashFlowForecast, CashFlowStatement
from cashflow.services.gateways import PayableGateway, ReceivableGateway
from cashflow.services.reporting.balance_service import compute_current_balance
from cashflow.services.reporting.forecast_service import build_cash_flow_forecast
from cashflow.services.reporting.statement_service import build_cash_flow_statement


class CashFlowService:
    """Balance, statement and forecast over one db session and a pair of gateways."""

    def __init__(
        self,
        db: Session,
        payables: PayableGateway,
        receivables: ReceivableGateway,
        today: date | None = None,
    ):
        self.db = db
        self.payables = payables
        self.receivables = receivables
        self.today = today

    async def current_balance(self, opening_balance_date: date, opening_balance: Decimal) -> CashFlowBalance:
        return await compute_current_balance(
            self.db, self.payables, self.receivables, opening_balance_date, opening_balance, today=self.today
        )

    async def statement(self, start_date: date, end_date: date, opening_balance: Decimal) -> CashFlowStatement:
        return await build_cash_flow_statement(
            self.db, self.payables, self.receivables, start_date, end_date, opening_balance
        )

    async def forecast(self, days_ahead: int, current_balance: Decimal) -> CashFlowForecast:
        return await build_cash_flow_forecast(
            self.payables, self.receivables, days_ahead, current_balance, today=self.today
        )
