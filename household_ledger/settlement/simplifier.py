"""
Debt Simplification

Turns the pairwise IOUs of a group into a short list of settling payments.

Strategy, per currency:
1. Net balance per participant (creditor +, debtor -)
2. Separate debtors (owe money) from creditors (are owed money)
3. Greedy sweep: largest debtor pays largest creditor, repeat

POLICY:
- Currencies are never converted or netted against each other.
- Balances within SETTLEMENT_TOLERANCE of zero count as settled,
  both when classifying and while sweeping.
- Incomplete records are skipped, never raised.

The greedy sweep is a heuristic, not a minimum-cost-flow solver. It is kept
because its output is deterministic and matches what users already see.
"""

from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Optional
from uuid import UUID

import structlog

from household_ledger.audit import AuditLogger
from household_ledger.config import get_settings
from household_ledger.models.debt import DebtRecord, Transaction


SETTLEMENT_TOLERANCE = Decimal("0.01")

_CENT = Decimal("0.01")
_HALF = Decimal("0.5")

logger = structlog.get_logger(__name__)


def round_cents(value: Decimal) -> Decimal:
    """Round to cents. Half-cent ties go toward positive infinity."""
    return ((value * 100 + _HALF).to_integral_value(rounding=ROUND_FLOOR) / 100).quantize(_CENT)


def missing_fields(record: DebtRecord) -> list[str]:
    """Names of the fields that keep a record out of the balances."""
    missing = []
    if not record.amount:
        missing.append("amount")
    if not record.debtor_id:
        missing.append("debtor_id")
    if not record.creditor_id:
        missing.append("creditor_id")
    return missing


def group_by_currency(
    debts: Iterable[DebtRecord],
    default_currency: str,
) -> dict[str, list[DebtRecord]]:
    """
    Partition unsettled records by currency.

    Keys keep the order in which each currency is first seen.
    """
    by_currency: dict[str, list[DebtRecord]] = {}
    for debt in debts:
        if debt.is_settled:
            continue
        by_currency.setdefault(debt.currency_or(default_currency), []).append(debt)
    return by_currency


def compute_balances(
    debts: Iterable[DebtRecord],
    participant_ids: Iterable[str],
) -> dict[str, Decimal]:
    """
    Net balance per participant for records of a single currency.

    Every declared participant starts at zero. Ids that only show up in
    the records are added on first use, after the declared ones.
    """
    balances: dict[str, Decimal] = {uid: Decimal("0") for uid in participant_ids}

    for debt in debts:
        if not debt.is_complete:
            continue
        balances[debt.debtor_id] = balances.get(debt.debtor_id, Decimal("0")) - debt.amount
        balances[debt.creditor_id] = balances.get(debt.creditor_id, Decimal("0")) + debt.amount

    return balances


def split_positions(
    balances: dict[str, Decimal],
) -> tuple[list[tuple[str, Decimal]], list[tuple[str, Decimal]]]:
    """
    Split balances into (debtors, creditors), largest magnitude first.

    Magnitudes are positive in both lists. Equal magnitudes keep the
    order of `balances`.
    """
    debtors: list[tuple[str, Decimal]] = []
    creditors: list[tuple[str, Decimal]] = []

    for uid, balance in balances.items():
        value = round_cents(balance)
        if value < -SETTLEMENT_TOLERANCE:
            debtors.append((uid, -value))
        elif value > SETTLEMENT_TOLERANCE:
            creditors.append((uid, value))

    debtors.sort(key=lambda p: p[1], reverse=True)
    creditors.sort(key=lambda p: p[1], reverse=True)
    return debtors, creditors


def settle_currency(
    balances: dict[str, Decimal],
    currency: str,
) -> list[Transaction]:
    """Greedy two-pointer settlement of one currency's balances."""
    debtors, creditors = split_positions(balances)

    transactions: list[Transaction] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor_id, owes = debtors[i]
        creditor_id, is_owed = creditors[j]

        amount = round_cents(min(owes, is_owed))
        if amount > 0:
            transactions.append(Transaction(
                from_id=debtor_id,
                to_id=creditor_id,
                amount=amount,
                currency=currency,
            ))

        debtors[i] = (debtor_id, owes - amount)
        creditors[j] = (creditor_id, is_owed - amount)

        if debtors[i][1] < SETTLEMENT_TOLERANCE:
            i += 1
        if creditors[j][1] < SETTLEMENT_TOLERANCE:
            j += 1

    return transactions


class DebtSimplifier:
    """
    Computes the settlement plan for a group.

    Stateless between calls: every call works on its own balance maps,
    so one instance can be shared freely.
    """

    def __init__(
        self,
        default_currency: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize simplifier.

        Args:
            default_currency: Currency for records without one.
                              If None, taken from LEDGER_DEFAULT_CURRENCY.
            audit_logger: Receives a warning event per skipped record.
        """
        self._default_currency = default_currency or get_settings().ledger.default_currency
        self._audit_logger = audit_logger

    @property
    def default_currency(self) -> str:
        return self._default_currency

    def simplify(
        self,
        debts: Iterable[DebtRecord],
        participant_ids: Iterable[str],
        correlation_id: Optional[UUID] = None,
    ) -> list[Transaction]:
        """
        Settlement plan for all currencies present in unsettled `debts`.

        Currencies appear in the order they are first seen; within a
        currency, transactions follow the sweep order.
        """
        participant_ids = list(participant_ids)
        by_currency = group_by_currency(debts, self._default_currency)

        transactions: list[Transaction] = []
        for currency, currency_debts in by_currency.items():
            self._report_incomplete(currency_debts, correlation_id)
            balances = compute_balances(currency_debts, participant_ids)
            transactions.extend(settle_currency(balances, currency))

        logger.debug(
            "debts_simplified",
            currencies=list(by_currency),
            participant_count=len(participant_ids),
            transaction_count=len(transactions),
        )
        return transactions

    def _report_incomplete(
        self,
        debts: list[DebtRecord],
        correlation_id: Optional[UUID],
    ) -> None:
        for debt in debts:
            if debt.is_complete:
                continue
            missing = missing_fields(debt)
            logger.debug("debt_record_skipped", debt_id=debt.id, missing_fields=missing)
            if self._audit_logger:
                self._audit_logger.log_incomplete_record(
                    debt_id=debt.id,
                    missing_fields=missing,
                    correlation_id=correlation_id,
                )


def simplify_debts(
    debts: Iterable[DebtRecord],
    participant_ids: Iterable[str],
    default_currency: Optional[str] = None,
) -> list[Transaction]:
    """Shortcut for DebtSimplifier(default_currency).simplify(debts, participant_ids)."""
    return DebtSimplifier(default_currency=default_currency).simplify(debts, participant_ids)
