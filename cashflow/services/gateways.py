"""
HTTP clients for the accounts payable / accounts receivable summary endpoints.

Every failure (transport error, timeout, non-2xx, bad JSON, payload that does
not match the summary schema) is raised as UpstreamUnavailableError. Calls are
bounded by a timeout and never retried: a missing source is excluded from the
response instead of failing it.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from cashflow.core.config import settings
from cashflow.core.exceptions import UpstreamUnavailableError
from cashflow.schemas.summary import PayableSummary, ReceivableSummary

logger = logging.getLogger("cashflow.gateways")

M = TypeVar("M", bound=BaseModel)


class PayableGateway(Protocol):
    async def fetch_paid_by_payment_date(self, start: date, end: date) -> list[PayableSummary]: ...

    async def fetch_pending_by_due_date(self, start: date, end: date) -> list[PayableSummary]: ...


class ReceivableGateway(Protocol):
    async def fetch_received_by_received_date(self, start: date, end: date) -> list[ReceivableSummary]: ...

    async def fetch_pending_by_due_date(self, start: date, end: date) -> list[ReceivableSummary]: ...


def _auth_headers(token: str | None) -> dict[str, str]:
    token = (token or "").strip()
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


class _SummaryClient:
    source = "upstream"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        api_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or "").strip().rstrip("/")
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self.headers = _auth_headers(api_token if api_token is not None else settings.upstream_api_token)
        self.transport = transport

    async def _get_json(self, path: str, start: date, end: date) -> Any:
        url = f"{self.base_url}{path}"
        params = {"startDate": start.isoformat(), "endDate": end.isoformat()}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(url, params=params, headers=self.headers or None)
                r.raise_for_status()
                return r.json()
        except httpx.TimeoutException as e:
            logger.warning("upstream_timeout source=%s url=%s", self.source, url)
            raise UpstreamUnavailableError(self.source, f"timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            logger.warning("upstream_status source=%s url=%s status=%s", self.source, url, e.response.status_code)
            raise UpstreamUnavailableError(self.source, f"returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("upstream_error source=%s url=%s error=%s", self.source, url, e)
            raise UpstreamUnavailableError(self.source, f"request failed: {e!s}") from e
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("upstream_bad_json source=%s url=%s", self.source, url)
            raise UpstreamUnavailableError(self.source, "response is not valid JSON") from e

    def _decode(self, payload: Any, adapter: TypeAdapter[list[M]]) -> list[M]:
        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            logger.warning("upstream_bad_payload source=%s errors=%s", self.source, e.error_count())
            raise UpstreamUnavailableError(self.source, "response does not match the summary schema") from e


_payables_adapter = TypeAdapter(list[PayableSummary])
_receivables_adapter = TypeAdapter(list[ReceivableSummary])


class HttpPayableGateway(_SummaryClient):
    source = "payables"

    async def fetch_paid_by_payment_date(self, start: date, end: date) -> list[PayableSummary]:
        payload = await self._get_json("/api/payables/summary-by-date", start, end)
        return self._decode(payload, _payables_adapter)

    async def fetch_pending_by_due_date(self, start: date, end: date) -> list[PayableSummary]:
        payload = await self._get_json("/api/payables/pending-summary-by-due-date", start, end)
        return self._decode(payload, _payables_adapter)


class HttpReceivableGateway(_SummaryClient):
    source = "receivables"

    async def fetch_received_by_received_date(self, start: date, end: date) -> list[ReceivableSummary]:
        payload = await self._get_json("/api/receivables/summary-by-date", start, end)
        return self._decode(payload, _receivables_adapter)

    async def fetch_pending_by_due_date(self, start: date, end: date) -> list[ReceivableSummary]:
        payload = await self._get_json("/api/receivables/pending-summary-by-due-date", start, end)
        return self._decode(payload, _receivables_adapter)
