from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from fakes import FakePayableGateway, FakeReceivableGateway, add_entry, make_session_factory

from cashflow.models.manual_entry import EntryType
from cashflow.schemas.summary import PayableStatus, PayableSummary
from cashflow.services.reporting import CashFlowService, compute_current_balance

TODAY = date(2024, 6, 1)


class CurrentBalanceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = make_session_factory()()

    def tearDown(self):
        self.db.close()

    async def test_rolls_opening_balance_forward_to_yesterday(self):
        add_entry(self.db, date(2024, 5, 10), "200.00", EntryType.CREDIT)
        add_entry(self.db, date(2024, 5, 31), "50.00", EntryType.DEBIT)
        # dated today, so outside [anchor, yesterday]
        add_entry(self.db, TODAY, "999.00", EntryType.DEBIT)
        payables = FakePayableGateway(
            paid=[
                PayableSummary(
                    id="P-1",
                    due_date=date(2024, 5, 20),
                    amount_due=Decimal("30.00"),
                    amount_paid=Decimal("30.00"),
                    status=PayableStatus.PAID,
                    payment_date=date(2024, 5, 20),
                )
            ]
        )
        receivables = FakeReceivableGateway()

        bal = await compute_current_balance(
            self.db, payables, receivables, date(2024, 5, 1), Decimal("1000.00"), today=TODAY
        )

        self.assertEqual(bal.date, date(2024, 5, 31))
        self.assertEqual(bal.balance, Decimal("1120.00"))
        self.assertEqual(payables.calls, [("paid", date(2024, 5, 1), date(2024, 5, 31))])

    async def test_anchor_of_yesterday_uses_single_day_statement(self):
        add_entry(self.db, date(2024, 5, 31), "5.00", EntryType.CREDIT)

        bal = await compute_current_balance(
            self.db, FakePayableGateway(), FakeReceivableGateway(), date(2024, 5, 31), Decimal("1.00"), today=TODAY
        )

        self.assertEqual(bal.balance, Decimal("6.00"))

    async def test_anchor_today_or_later_returns_opening_balance(self):
        add_entry(self.db, TODAY, "5.00", EntryType.CREDIT)
        payables = FakePayableGateway()
        receivables = FakeReceivableGateway()

        for anchor in (TODAY, date(2024, 7, 1)):
            bal = await compute_current_balance(
                self.db, payables, receivables, anchor, Decimal("42.00"), today=TODAY
            )
            self.assertEqual(bal.balance, Decimal("42.00"))
            self.assertEqual(bal.date, anchor)
        self.assertEqual(payables.calls, [])
        self.assertEqual(receivables.calls, [])

    async def test_service_facade_uses_fixed_today(self):
        add_entry(self.db, date(2024, 5, 10), "200.00", EntryType.CREDIT)
        service = CashFlowService(self.db, FakePayableGateway(), FakeReceivableGateway(fail=True), today=TODAY)

        bal = await service.current_balance(date(2024, 5, 1), Decimal("0"))
        fc = await service.forecast(1, bal.balance)
        st = await service.statement(date(2024, 5, 1), date(2024, 5, 31), Decimal("0"))

        self.assertEqual(bal.balance, Decimal("200.00"))
        self.assertEqual(fc.forecast_start_date, TODAY)
        self.assertEqual(fc.daily_projected_balance[TODAY], Decimal("200.00"))
        self.assertEqual(st.closing_balance, bal.balance)
        self.assertEqual(st.unavailable_sources, ["receivables"])


if __name__ == "__main__":
    unittest.main()
