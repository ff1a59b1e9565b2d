from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Generic, TypeVar

from cashflow.core.exceptions import UpstreamUnavailableError
from cashflow.schemas.cash_flow import CashFlowItem

logger = logging.getLogger("cashflow.reporting")

ZERO = Decimal("0")

PAYABLES = "payables"
RECEIVABLES = "receivables"

T = TypeVar("T")


@dataclass
class SourceResult(Generic[T]):
    """
    Outcome of one upstream fetch: either the items returned, or no items and
    the reason the source was left out of this response.
    """

    source: str
    items: list[T] = field(default_factory=list)
    reason: str | None = None

    @property
    def available(self) -> bool:
        return self.reason is None

    @classmethod
    def ok(cls, source: str, items: list[T]) -> "SourceResult[T]":
        return cls(source=source, items=list(items))

    @classmethod
    def empty(cls, source: str, reason: str) -> "SourceResult[T]":
        return cls(source=source, items=[], reason=reason)


async def collect_source(source: str, fetch: Awaitable[list[T]]) -> SourceResult[T]:
    """Await an upstream fetch; any gateway failure degrades to an empty result."""
    try:
        items = await fetch
    except UpstreamUnavailableError as e:
        logger.warning("upstream_unavailable source=%s reason=%s", source, e.message)
        return SourceResult.empty(source, e.message)
    except Exception as e:
        # Gateways are structural; not every implementation translates its errors
        logger.exception("upstream_failed source=%s error=%s", source, type(e).__name__)
        return SourceResult.empty(source, f"unexpected error: {e!s}")
    return SourceResult.ok(source, items)


def unavailable_sources(*results: SourceResult) -> list[str]:
    return [r.source for r in results if not r.available]


def in_range(d: date | None, start: date, end: date) -> bool:
    return d is not None and start <= d <= end


def iter_days(start: date, end: date) -> Iterator[date]:
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def sum_amounts(items: list[CashFlowItem]) -> Decimal:
    return sum((i.amount for i in items), ZERO)


def remaining_amount(total: Decimal | None, settled: Decimal | None) -> Decimal:
    """Open amount of a pending record; a missing settled amount counts as zero."""
    return (total or ZERO) - (settled or ZERO)
