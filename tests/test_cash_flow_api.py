from __future__ import annotations

import unittest
import uuid
from datetime import date, timedelta
from decimal import Decimal

from fakes import FakePayableGateway, FakeReceivableGateway, make_session_factory
from fastapi.testclient import TestClient

from cashflow.api.deps import get_payable_gateway, get_receivable_gateway
from cashflow.db.session import get_db
from cashflow.main import app
from cashflow.schemas.summary import ReceivableStatus, ReceivableSummary


class CashFlowApiTests(unittest.TestCase):
    def setUp(self):
        factory = make_session_factory()
        self.payables = FakePayableGateway()
        self.receivables = FakeReceivableGateway()

        def override_db():
            db = factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_db
        app.dependency_overrides[get_payable_gateway] = lambda: self.payables
        app.dependency_overrides[get_receivable_gateway] = lambda: self.receivables
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _create(self, entry_date: str, amount: str, entry_type: str, description: str = "entry") -> dict:
        r = self.client.post(
            "/api/cashflow/manual-entries",
            json={"entry_date": entry_date, "amount": amount, "type": entry_type, "description": description},
        )
        self.assertEqual(r.status_code, 201, r.text)
        return r.json()

    def test_manual_entry_lifecycle(self):
        created = self._create("2024-05-10", "200.00", "CREDIT", "Owner contribution")
        entry_id = created["id"]

        r = self.client.get(f"/api/cashflow/manual-entries/{entry_id}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["description"], "Owner contribution")
        self.assertEqual(Decimal(r.json()["amount"]), Decimal("200.00"))

        r = self.client.delete(f"/api/cashflow/manual-entries/{entry_id}")
        self.assertEqual(r.status_code, 204)
        r = self.client.get(f"/api/cashflow/manual-entries/{entry_id}")
        self.assertEqual(r.status_code, 404)

    def test_create_sets_location_header(self):
        r = self.client.post(
            "/api/cashflow/manual-entries",
            json={"entry_date": "2024-05-10", "amount": "1.00", "type": "DEBIT", "description": "Bank fee"},
        )

        self.assertEqual(r.status_code, 201)
        self.assertTrue(r.headers["location"].endswith(f"/api/cashflow/manual-entries/{r.json()['id']}"))

    def test_delete_unknown_entry_is_404(self):
        r = self.client.delete(f"/api/cashflow/manual-entries/{uuid.uuid4()}")

        self.assertEqual(r.status_code, 404)
        self.assertIn("not found", r.json()["detail"])

    def test_invalid_manual_entry_rejected(self):
        r = self.client.post(
            "/api/cashflow/manual-entries",
            json={"entry_date": "2024-05-10", "amount": "-1", "type": "CREDIT", "description": "x"},
        )
        self.assertEqual(r.status_code, 422)
        r = self.client.post(
            "/api/cashflow/manual-entries",
            json={"entry_date": "2024-05-10", "amount": "1", "type": "CREDIT", "description": "   "},
        )
        self.assertEqual(r.status_code, 422)

    def test_statement_endpoint(self):
        self._create("2024-05-10", "200.00", "CREDIT")
        self._create("2024-05-15", "50.00", "DEBIT")

        r = self.client.get(
            "/api/cashflow/statement",
            params={"start_date": "2024-05-01", "end_date": "2024-05-31", "opening_balance": "1000.00"},
        )

        self.assertEqual(r.status_code, 200, r.text)
        body = r.json()
        self.assertEqual(Decimal(body["total_inflows"]), Decimal("200.00"))
        self.assertEqual(Decimal(body["total_outflows"]), Decimal("50.00"))
        self.assertEqual(Decimal(body["net_cash_flow"]), Decimal("150.00"))
        self.assertEqual(Decimal(body["closing_balance"]), Decimal("1150.00"))
        self.assertEqual(body["inflow_items"][0]["type"], "MANUAL_CREDIT")

    def test_statement_rejects_reversed_range(self):
        r = self.client.get(
            "/api/cashflow/statement",
            params={"start_date": "2024-05-31", "end_date": "2024-05-01", "opening_balance": "0"},
        )

        self.assertEqual(r.status_code, 400)
        self.assertEqual(self.payables.calls, [])

    def test_statement_with_unavailable_upstream(self):
        self.payables.fail = True

        r = self.client.get(
            "/api/cashflow/statement",
            params={"start_date": "2024-05-01", "end_date": "2024-05-31", "opening_balance": "10"},
        )

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["unavailable_sources"], ["payables"])
        self.assertEqual(Decimal(r.json()["closing_balance"]), Decimal("10"))

    def test_forecast_endpoint(self):
        tomorrow = date.today() + timedelta(days=1)
        self.receivables.pending = [
            ReceivableSummary(
                id="R-1",
                due_date=tomorrow,
                amount_expected=Decimal("300.00"),
                amount_received=Decimal("0"),
                status=ReceivableStatus.PENDING,
            )
        ]

        r = self.client.get("/api/cashflow/forecast", params={"days_ahead": 2, "current_balance": "500.00"})

        self.assertEqual(r.status_code, 200, r.text)
        daily = r.json()["daily_projected_balance"]
        self.assertEqual(list(daily), [(date.today() + timedelta(days=i)).isoformat() for i in range(3)])
        self.assertEqual(Decimal(daily[date.today().isoformat()]), Decimal("500.00"))
        self.assertEqual(Decimal(daily[tomorrow.isoformat()]), Decimal("800.00"))

    def test_forecast_rejects_non_positive_days(self):
        r = self.client.get("/api/cashflow/forecast", params={"days_ahead": 0, "current_balance": "1"})

        self.assertEqual(r.status_code, 400)

    def test_current_balance_future_anchor(self):
        anchor = (date.today() + timedelta(days=3)).isoformat()

        r = self.client.get(
            "/api/cashflow/balance/current",
            params={"opening_balance_date": anchor, "opening_balance": "42.00"},
        )

        self.assertEqual(r.status_code, 200)
        self.assertEqual(Decimal(r.json()["balance"]), Decimal("42.00"))
        self.assertEqual(self.payables.calls, [])

    def test_current_balance_rolls_forward(self):
        self._create((date.today() - timedelta(days=2)).isoformat(), "5.00", "DEBIT")
        anchor = (date.today() - timedelta(days=10)).isoformat()

        r = self.client.get(
            "/api/cashflow/balance/current",
            params={"opening_balance_date": anchor, "opening_balance": "100.00"},
        )

        self.assertEqual(r.status_code, 200)
        self.assertEqual(Decimal(r.json()["balance"]), Decimal("95.00"))
        self.assertEqual(r.json()["date"], (date.today() - timedelta(days=1)).isoformat())

    def test_list_and_totals(self):
        self._create("2024-05-10", "200.00", "CREDIT", "b")
        self._create("2024-05-02", "50.00", "DEBIT", "a")

        r = self.client.get("/api/cashflow/manual-entries", params={"start_date": "2024-05-01", "end_date": "2024-05-31"})
        self.assertEqual([e["description"] for e in r.json()], ["a", "b"])

        r = self.client.get(
            "/api/cashflow/manual-entries/totals", params={"start_date": "2024-05-01", "end_date": "2024-05-31"}
        )
        self.assertEqual(Decimal(r.json()["net"]), Decimal("150.00"))


if __name__ == "__main__":
    unittest.main()
