from __future__ import annotations

import asyncio
from datetime import date, timedelta
from decimal import Decimal

from cashflow.core.exceptions import InvalidInputError
from cashflow.schemas.cash_flow import CashFlowForecast
from cashflow.schemas.summary import PayableSummary, ReceivableSummary
from cashflow.services.gateways import PayableGateway, ReceivableGateway
from cashflow.services.reporting.common import (
    PAYABLES,
    RECEIVABLES,
    ZERO,
    collect_source,
    iter_days,
    logger,
    remaining_amount,
    unavailable_sources,
)


def daily_net_flow(
    start: date,
    end: date,
    payables: list[PayableSummary],
    receivables: list[ReceivableSummary],
) -> dict[date, Decimal]:
    """
    Net pending flow per day, keyed by every day of [start, end] in order.
    Only the open remainder of each record counts; records without a due
    date, fully settled, or due outside the range are skipped.
    """
    flows: dict[date, Decimal] = {d: ZERO for d in iter_days(start, end)}
    for r in receivables:
        remaining = remaining_amount(r.amount_expected, r.amount_received)
        if remaining > 0 and r.due_date in flows:
            flows[r.due_date] += remaining
    for p in payables:
        remaining = remaining_amount(p.amount_due, p.amount_paid)
        if remaining > 0 and p.due_date in flows:
            flows[p.due_date] -= remaining
    return flows


def project_balances(starting_balance: Decimal, flows: dict[date, Decimal]) -> dict[date, Decimal]:
    running = starting_balance
    out: dict[date, Decimal] = {}
    for d in sorted(flows):
        running += flows[d]
        out[d] = running
    return out


async def build_cash_flow_forecast(
    payables: PayableGateway,
    receivables: ReceivableGateway,
    days_ahead: int,
    current_balance: Decimal,
    today: date | None = None,
) -> CashFlowForecast:
    if days_ahead <= 0:
        raise InvalidInputError("Days ahead must be positive")
    # Future-dated manual entries are not projected.
    today = today or date.today()
    forecast_end = today + timedelta(days=days_ahead)
    logger.info("forecast_start days_ahead=%s balance=%s from=%s", days_ahead, current_balance, today)

    pending_payables, pending_receivables = await asyncio.gather(
        collect_source(PAYABLES, payables.fetch_pending_by_due_date(today, forecast_end)),
        collect_source(RECEIVABLES, receivables.fetch_pending_by_due_date(today, forecast_end)),
    )
    flows = daily_net_flow(today, forecast_end, pending_payables.items, pending_receivables.items)
    forecast = CashFlowForecast(
        forecast_start_date=today,
        starting_balance=current_balance,
        daily_projected_balance=project_balances(current_balance, flows),
        unavailable_sources=unavailable_sources(pending_payables, pending_receivables),
    )
    logger.info(
        "forecast_done to=%s closing=%s unavailable=%s",
        forecast_end,
        forecast.daily_projected_balance[forecast_end],
        ",".join(forecast.unavailable_sources) or "-",
    )
    return forecast

