from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from cashflow.models.manual_entry import EntryType, ManualCashEntry
from cashflow.schemas.cash_flow import CashFlowItem, CashFlowItemType, CashFlowStatement
from cashflow.schemas.summary import PayableSummary, ReceivableSummary
from cashflow.services.gateways import PayableGateway, ReceivableGateway
from cashflow.services.reporting.common import (
    PAYABLES,
    RECEIVABLES,
    ZERO,
    collect_source,
    in_range,
    logger,
    sum_amounts,
    unavailable_sources,
)
from cashflow.services.reporting.repository import manual_entries_between


def receivable_inflow_item(r: ReceivableSummary) -> CashFlowItem:
    return CashFlowItem(
        date=r.received_date,
        description=f"Receivable ID: {r.id}",
        amount=r.amount_received or ZERO,
        type=CashFlowItemType.RECEIVABLE,
        related_id=r.id,
    )


def payable_outflow_item(p: PayableSummary) -> CashFlowItem:
    return CashFlowItem(
        date=p.payment_date,
        description=f"Payable ID: {p.id}",
        amount=p.amount_paid or ZERO,
        type=CashFlowItemType.PAYABLE,
        related_id=p.id,
    )


def manual_item(entry: ManualCashEntry) -> CashFlowItem:
    item_type = CashFlowItemType.MANUAL_CREDIT if entry.type == EntryType.CREDIT else CashFlowItemType.MANUAL_DEBIT
    return CashFlowItem(
        date=entry.entry_date,
        description=entry.description,
        amount=entry.amount,
        type=item_type,
        related_id=str(entry.id),
    )


def build_statement_items(
    start_date: date,
    end_date: date,
    payables: list[PayableSummary],
    receivables: list[ReceivableSummary],
    manual_entries: list[ManualCashEntry],
) -> tuple[list[CashFlowItem], list[CashFlowItem]]:
    """
    Pure item-building step: returns (inflows, outflows), each sorted by date.
    Upstream summaries are re-checked against the range since gateway
    filtering is not guaranteed. Equal dates keep insertion order, so upstream
    items precede manual ones.
    """
    inflows: list[CashFlowItem] = []
    outflows: list[CashFlowItem] = []

    for r in receivables:
        if in_range(r.received_date, start_date, end_date):
            inflows.append(receivable_inflow_item(r))
    for p in payables:
        if in_range(p.payment_date, start_date, end_date):
            outflows.append(payable_outflow_item(p))
    for m in manual_entries:
        if m.type == EntryType.CREDIT:
            inflows.append(manual_item(m))
        else:
            outflows.append(manual_item(m))

    inflows.sort(key=lambda i: i.date)
    outflows.sort(key=lambda i: i.date)
    return inflows, outflows


def assemble_statement(
    start_date: date,
    end_date: date,
    opening_balance: Decimal,
    inflows: list[CashFlowItem],
    outflows: list[CashFlowItem],
    unavailable: list[str] | None = None,
) -> CashFlowStatement:
    total_inflows = sum_amounts(inflows)
    total_outflows = sum_amounts(outflows)
    net = total_inflows - total_outflows
    return CashFlowStatement(
        start_date=start_date,
        end_date=end_date,
        opening_balance=opening_balance,
        total_inflows=total_inflows,
        total_outflows=total_outflows,
        net_cash_flow=net,
        closing_balance=opening_balance + net,
        inflow_items=inflows,
        outflow_items=outflows,
        unavailable_sources=unavailable or [],
    )


async def build_cash_flow_statement(
    db: Session,
    payables: PayableGateway,
    receivables: ReceivableGateway,
    start_date: date,
    end_date: date,
    opening_balance: Decimal,
) -> CashFlowStatement:
    logger.info(
        "statement_start from=%s to=%s opening=%s", start_date, end_date, opening_balance
    )
    paid, received = await asyncio.gather(
        collect_source(PAYABLES, payables.fetch_paid_by_payment_date(start_date, end_date)),
        collect_source(RECEIVABLES, receivables.fetch_received_by_received_date(start_date, end_date)),
    )
    # Local storage errors are not absorbed
    manual_entries = manual_entries_between(db, start_date, end_date)

    inflows, outflows = build_statement_items(start_date, end_date, paid.items, received.items, manual_entries)
    statement = assemble_statement(
        start_date,
        end_date,
        opening_balance,
        inflows,
        outflows,
        unavailable_sources(paid, received),
    )
    logger.info(
        "statement_done inflows=%s outflows=%s net=%s closing=%s unavailable=%s",
        statement.total_inflows,
        statement.total_outflows,
        statement.net_cash_flow,
        statement.closing_balance,
        ",".join(statement.unavailable_sources) or "-",
    )
    return statement

