from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from cashflow.api.deps import get_cash_flow_service
from cashflow.core.config import settings
from cashflow.core.exceptions import InvalidInputError, ManualEntryNotFoundError
from cashflow.db.session import get_db
from cashflow.schemas.cash_flow import CashFlowBalance, CashFlowForecast, CashFlowStatement
from cashflow.schemas.manual_entry import ManualCashEntryCreate, ManualCashEntryRead, ManualEntryTotals
from cashflow.services import manual_entry_service
from cashflow.services.reporting import CashFlowService

router = APIRouter(prefix="/api/cashflow", tags=["cashflow"])


def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="Start date must be before or equal to end date")


# --- Manual entries ---


@router.post("/manual-entries", response_model=ManualCashEntryRead, status_code=201)
def create_manual_entry(
    payload: ManualCashEntryCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> ManualCashEntryRead:
    try:
        row = manual_entry_service.create_manual_entry(db, payload)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    response.headers["Location"] = str(request.url_for("get_manual_entry", entry_id=str(row.id)))
    return ManualCashEntryRead.model_validate(row)


@router.get("/manual-entries", response_model=list[ManualCashEntryRead])
def list_manual_entries(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
) -> list[ManualCashEntryRead]:
    _check_range(start_date, end_date)
    rows = manual_entry_service.list_manual_entries(db, start_date, end_date)
    return [ManualCashEntryRead.model_validate(r) for r in rows]


@router.get("/manual-entries/totals", response_model=ManualEntryTotals)
def manual_entry_totals(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
) -> ManualEntryTotals:
    _check_range(start_date, end_date)
    return manual_entry_service.manual_entry_totals(db, start_date, end_date)


@router.get("/manual-entries/{entry_id}", response_model=ManualCashEntryRead)
def get_manual_entry(entry_id: UUID, db: Session = Depends(get_db)) -> ManualCashEntryRead:
    try:
        row = manual_entry_service.get_manual_entry(db, entry_id)
    except ManualEntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return ManualCashEntryRead.model_validate(row)


@router.delete("/manual-entries/{entry_id}", status_code=204)
def delete_manual_entry(entry_id: UUID, db: Session = Depends(get_db)) -> None:
    try:
        manual_entry_service.delete_manual_entry(db, entry_id)
    except ManualEntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# --- Reporting ---


@router.get("/balance/current", response_model=CashFlowBalance)
async def get_current_balance(
    opening_balance_date: date = Query(..., description="Date of the known opening balance (YYYY-MM-DD)"),
    opening_balance: Decimal = Query(..., description="Known balance on the opening balance date"),
    service: CashFlowService = Depends(get_cash_flow_service),
) -> CashFlowBalance:
    return await service.current_balance(opening_balance_date, opening_balance)


@router.get("/statement", response_model=CashFlowStatement)
async def get_statement(
    start_date: date = Query(...),
    end_date: date = Query(...),
    opening_balance: Decimal = Query(..., description="Known balance at the start date"),
    service: CashFlowService = Depends(get_cash_flow_service),
) -> CashFlowStatement:
    _check_range(start_date, end_date)
    return await service.statement(start_date, end_date, opening_balance)


@router.get("/forecast", response_model=CashFlowForecast)
async def get_forecast(
    current_balance: Decimal = Query(..., description="Current known cash balance"),
    days_ahead: int = Query(settings.forecast_default_days, description="Number of days to forecast ahead"),
    service: CashFlowService = Depends(get_cash_flow_service),
) -> CashFlowForecast:
    if days_ahead <= 0:
        raise HTTPException(status_code=400, detail="Days ahead must be positive")
    return await service.forecast(days_ahead, current_balance)
