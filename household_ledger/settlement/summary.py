"""
Raw Debt Summaries

These work on the debts as recorded, without simplification:
- what a participant owes and is owed in one currency
- the list of still-open records ("detailed" view)

Only the simplifier nets balances across participants; these totals
are plain sums.
"""

from decimal import Decimal
from typing import Iterable, Optional

from household_ledger.config import get_settings
from household_ledger.models.debt import DebtRecord, ParticipantSummary


def outstanding_debts(debts: Iterable[DebtRecord]) -> list[DebtRecord]:
    """Unsettled records, in input order."""
    return [debt for debt in debts if not debt.is_settled]


def summarize_participant(
    debts: Iterable[DebtRecord],
    participant_id: str,
    currency: Optional[str] = None,
    default_currency: Optional[str] = None,
) -> ParticipantSummary:
    """
    Sum what `participant_id` is owed and owes in a single currency.

    Records without a currency count as `default_currency`
    (LEDGER_DEFAULT_CURRENCY when None), which is also the summary
    currency when `currency` is omitted.
    Records without an amount add nothing.
    """
    default_currency = default_currency or get_settings().ledger.default_currency
    currency = currency or default_currency

    owed_to_me = Decimal("0")
    i_owe = Decimal("0")

    for debt in outstanding_debts(debts):
        if debt.currency_or(default_currency) != currency:
            continue
        amount = debt.amount or Decimal("0")
        if debt.creditor_id == participant_id:
            owed_to_me += amount
        if debt.debtor_id == participant_id:
            i_owe += amount

    return ParticipantSummary(
        participant_id=participant_id,
        currency=currency,
        owed_to_me=owed_to_me,
        i_owe=i_owe,
    )
