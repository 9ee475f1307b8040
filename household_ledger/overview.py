"""
Finance Overview Flow

This module ties the ledger components together for a group's debts screen:
1. Summary → what the current user owes / is owed (raw, one currency)
2. Simplify → the settlement plan for all group members
3. Outstanding → the unsettled records, as recorded
4. Mark paid → flip a record's settled flag

DESIGN DECISION: The flow never touches storage.
The caller loads members and debts, passes them in, and persists any
record returned by mark_settled(). Every step is audited when an
audit logger is configured.
"""

from typing import Iterable, Optional
from uuid import UUID

from household_ledger.audit import AuditLogger, create_correlation_id
from household_ledger.models.debt import DebtRecord, FinanceOverview
from household_ledger.settlement import (
    DebtSimplifier,
    group_by_currency,
    outstanding_debts,
    summarize_participant,
)


class FinanceOverviewFlow:
    """
    Builds the FinanceOverview for one participant of a group.

    Flow:
    1. Materialize the debts once (the input may be a generator)
    2. Raw totals for the participant in the summary currency
    3. Simplified plan across every currency
    4. Audit the computation
    """

    def __init__(
        self,
        simplifier: Optional[DebtSimplifier] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._audit_logger = audit_logger
        self._simplifier = simplifier or DebtSimplifier(audit_logger=audit_logger)

    def build(
        self,
        debts: Iterable[DebtRecord],
        member_ids: Iterable[str],
        current_user_id: str,
        currency: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> FinanceOverview:
        """
        Compute the overview for `current_user_id`.

        Args:
            debts: All debt records of the group, settled ones included
            member_ids: Group members (seed the balances)
            current_user_id: Whose totals go into the summary
            currency: Summary currency; the default currency when omitted

        Returns:
            FinanceOverview with summary, simplified plan and outstanding list
        """
        correlation_id = correlation_id or create_correlation_id()
        debts = list(debts)

        summary = summarize_participant(
            debts,
            current_user_id,
            currency=currency,
            default_currency=self._simplifier.default_currency,
        )
        simplified = self._simplifier.simplify(
            debts,
            member_ids,
            correlation_id=correlation_id,
        )

        if self._audit_logger:
            self._audit_logger.log_settlement_computed(
                participant_id=current_user_id,
                transaction_count=len(simplified),
                currencies=list(group_by_currency(debts, self._simplifier.default_currency)),
                correlation_id=correlation_id,
            )

        return FinanceOverview(
            participant_id=current_user_id,
            summary=summary,
            simplified=simplified,
            outstanding=outstanding_debts(debts),
        )

    def mark_settled(
        self,
        record: DebtRecord,
        correlation_id: Optional[UUID] = None,
    ) -> DebtRecord:
        """
        Toggle the paid flag of a record.

        Returns the updated copy; the original record is untouched.
        """
        updated = record.toggle_settled()

        if self._audit_logger:
            if updated.is_settled:
                self._audit_logger.log_debt_settled(
                    debt_id=updated.id,
                    correlation_id=correlation_id,
                )
            else:
                self._audit_logger.log_debt_reopened(
                    debt_id=updated.id,
                    correlation_id=correlation_id,
                )

        return updated
