from cashflow.services.reporting.balance_service import compute_current_balance
from cashflow.services.reporting.cash_flow_service import CashFlowService
from cashflow.services.reporting.forecast_service import build_cash_flow_forecast
from cashflow.services.reporting.statement_service import build_cash_flow_statement

__all__ = [
    "CashFlowService",
    "build_cash_flow_forecast",
    "build_cash_flow_statement",
    "compute_current_balance",
]
