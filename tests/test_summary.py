"""Tests for raw debt summaries and the finance overview flow."""

from decimal import Decimal

import pytest

from household_ledger.audit import AuditLogger
from household_ledger.models.audit import AuditEventType
from household_ledger.models.debt import DebtRecord, Transaction
from household_ledger.overview import FinanceOverviewFlow
from household_ledger.settlement import (
    DebtSimplifier,
    outstanding_debts,
    summarize_participant,
)


@pytest.fixture
def group_debts():
    return [
        DebtRecord(id="d1", debtor_id="beto", creditor_id="ana", amount=Decimal("40"), currency="PEN"),
        DebtRecord(id="d2", debtor_id="ana", creditor_id="carla", amount=Decimal("15"), currency="PEN"),
        DebtRecord(id="d3", debtor_id="carla", creditor_id="ana", amount=Decimal("25"), currency="USD"),
        DebtRecord(id="d4", debtor_id="beto", creditor_id="ana", amount=Decimal("99"), is_settled=True),
        DebtRecord(id="d5", debtor_id="ana", creditor_id="beto", amount=Decimal("5")),
    ]


class TestOutstandingDebts:
    """Tests for the detailed (raw) debt list."""

    def test_excludes_settled_and_keeps_order(self, group_debts):
        assert [d.id for d in outstanding_debts(group_debts)] == ["d1", "d2", "d3", "d5"]

    def test_empty(self):
        assert outstanding_debts([]) == []


class TestSummarizeParticipant:
    """Tests for the "owed to me / I owe" totals."""

    def test_default_currency_totals(self, group_debts):
        summary = summarize_participant(group_debts, "ana")
        assert summary.currency == "PEN"
        assert summary.owed_to_me == Decimal("40")
        # d5 has no currency and counts as PEN
        assert summary.i_owe == Decimal("20")
        assert summary.net == Decimal("20")

    def test_other_currency(self, group_debts):
        summary = summarize_participant(group_debts, "ana", currency="USD")
        assert summary.owed_to_me == Decimal("25")
        assert summary.i_owe == Decimal("0")

    def test_totals_are_not_simplified(self):
        """Raw totals keep both directions of a cycle."""
        debts = [
            DebtRecord(debtor_id="ana", creditor_id="beto", amount=Decimal("10")),
            DebtRecord(debtor_id="beto", creditor_id="ana", amount=Decimal("10")),
        ]
        summary = summarize_participant(debts, "ana")
        assert summary.owed_to_me == Decimal("10")
        assert summary.i_owe == Decimal("10")

    def test_missing_amount_adds_nothing(self):
        debts = [DebtRecord(debtor_id="ana", creditor_id="beto")]
        summary = summarize_participant(debts, "beto")
        assert summary.owed_to_me == Decimal("0")

    def test_explicit_default_currency(self, group_debts):
        summary = summarize_participant(group_debts, "ana", default_currency="USD")
        assert summary.currency == "USD"
        assert summary.owed_to_me == Decimal("25")
        assert summary.i_owe == Decimal("5")

    def test_stranger_has_zero_totals(self, group_debts):
        summary = summarize_participant(group_debts, "nobody")
        assert summary.owed_to_me == Decimal("0")
        assert summary.i_owe == Decimal("0")


class TestFinanceOverviewFlow:
    """Tests for the overview flow."""

    def test_build_overview(self, group_debts):
        flow = FinanceOverviewFlow()
        overview = flow.build(
            (d for d in group_debts),
            ["ana", "beto", "carla"],
            current_user_id="ana",
        )

        # PEN: ana +40 -15 -5 = +20, beto -40 +5 = -35, carla +15
        # USD: carla -25, ana +25
        assert overview.simplified == [
            Transaction(from_id="beto", to_id="ana", amount=Decimal("20"), currency="PEN"),
            Transaction(from_id="beto", to_id="carla", amount=Decimal("15"), currency="PEN"),
            Transaction(from_id="carla", to_id="ana", amount=Decimal("25"), currency="USD"),
        ]
        assert overview.summary.owed_to_me == Decimal("40")
        assert overview.summary.i_owe == Decimal("20")
        assert [d.id for d in overview.outstanding] == ["d1", "d2", "d3", "d5"]
        assert overview.payments_due == []
        assert len(overview.payments_incoming) == 2

    def test_build_all_settled(self):
        overview = FinanceOverviewFlow().build([], ["ana", "beto"], current_user_id="ana")
        assert overview.is_all_settled is True
        assert overview.outstanding == []

    def test_summary_currency_follows_simplifier_default(self, group_debts):
        flow = FinanceOverviewFlow(simplifier=DebtSimplifier(default_currency="USD"))
        overview = flow.build(group_debts, ["ana", "beto", "carla"], current_user_id="ana")
        assert overview.summary.currency == "USD"
        # d5 has no currency and now counts as USD on both sides
        assert overview.summary.owed_to_me == Decimal("25")
        assert overview.summary.i_owe == Decimal("5")
        # USD: carla -25, ana +20, beto +5
        assert [t for t in overview.simplified if t.currency == "USD"] == [
            Transaction(from_id="carla", to_id="ana", amount=Decimal("20"), currency="USD"),
            Transaction(from_id="carla", to_id="beto", amount=Decimal("5"), currency="USD"),
        ]

    def test_build_emits_audit_event(self, group_debts):
        events = []
        flow = FinanceOverviewFlow(audit_logger=AuditLogger(sink=events.append))
        flow.build(group_debts, ["ana", "beto", "carla"], current_user_id="ana")

        computed = [e for e in events if e.event_type == AuditEventType.SETTLEMENT_COMPUTED]
        assert len(computed) == 1
        assert computed[0].entity_id == "ana"
        assert computed[0].details["transaction_count"] == 3
        assert computed[0].details["currencies"] == ["PEN", "USD"]

    def test_audit_lists_currencies_that_net_to_zero(self):
        """A cancelled cycle still shows up among the audited currencies."""
        events = []
        flow = FinanceOverviewFlow(audit_logger=AuditLogger(sink=events.append))
        debts = [
            DebtRecord(debtor_id="ana", creditor_id="beto", amount=Decimal("10"), currency="USD"),
            DebtRecord(debtor_id="beto", creditor_id="ana", amount=Decimal("10"), currency="USD"),
            DebtRecord(debtor_id="ana", creditor_id="beto", amount=Decimal("4"), currency="PEN"),
        ]
        overview = flow.build(debts, ["ana", "beto"], current_user_id="ana")

        assert [t.currency for t in overview.simplified] == ["PEN"]
        computed = events[-1]
        assert computed.event_type == AuditEventType.SETTLEMENT_COMPUTED
        assert computed.details["currencies"] == ["USD", "PEN"]
        assert computed.details["transaction_count"] == 1

    def test_incomplete_records_reach_flow_audit(self):
        events = []
        flow = FinanceOverviewFlow(audit_logger=AuditLogger(sink=events.append))
        flow.build([DebtRecord(id="x", debtor_id="ana")], ["ana"], current_user_id="ana")

        types = [e.event_type for e in events]
        assert types == [
            AuditEventType.INCOMPLETE_RECORD_SKIPPED,
            AuditEventType.SETTLEMENT_COMPUTED,
        ]

    def test_mark_settled_round_trip(self):
        events = []
        flow = FinanceOverviewFlow(audit_logger=AuditLogger(sink=events.append))
        record = DebtRecord(id="d1", debtor_id="beto", creditor_id="ana", amount=Decimal("40"))

        paid = flow.mark_settled(record)
        assert paid.is_settled is True
        assert record.is_settled is False

        reopened = flow.mark_settled(paid)
        assert reopened.is_settled is False

        assert [e.event_type for e in events] == [
            AuditEventType.DEBT_SETTLED,
            AuditEventType.DEBT_REOPENED,
        ]
        assert all(e.entity_id == "d1" for e in events)

    def test_marking_paid_removes_debt_from_plan(self):
        flow = FinanceOverviewFlow()
        record = DebtRecord(id="d1", debtor_id="beto", creditor_id="ana", amount=Decimal("40"))

        before = flow.build([record], ["ana", "beto"], current_user_id="beto")
        after = flow.build([flow.mark_settled(record)], ["ana", "beto"], current_user_id="beto")

        assert len(before.payments_due) == 1
        assert after.is_all_settled is True
