"""Settlement package."""

from household_ledger.settlement.simplifier import (
    SETTLEMENT_TOLERANCE,
    DebtSimplifier,
    compute_balances,
    group_by_currency,
    round_cents,
    settle_currency,
    simplify_debts,
    split_positions,
)
from household_ledger.settlement.summary import outstanding_debts, summarize_participant

__all__ = [
    "SETTLEMENT_TOLERANCE",
    "DebtSimplifier",
    "compute_balances",
    "group_by_currency",
    "outstanding_debts",
    "round_cents",
    "settle_currency",
    "simplify_debts",
    "split_positions",
    "summarize_participant",
]
