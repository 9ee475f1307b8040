"""
Debt Models for Household Ledger

These models describe what flows into and out of the settlement core:
1. DebtRecord - one pairwise IOU as stored by the group (input)
2. Transaction - one step of a settlement plan (output)
3. ParticipantSummary / FinanceOverview - what the debts screen shows

DESIGN DECISION: DebtRecord is deliberately permissive.
A single malformed ledger entry must never abort settlement for a whole
group, so missing fields are allowed here and skipped by the simplifier
instead of being rejected at validation time.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
)


class DebtRecord(BaseModel):
    """
    A single IOU between two group members.

    Rows coming straight from storage use the `is_paid` / `paid_at`
    column names; both spellings are accepted.

    NOTE: The sign of `amount` is NOT validated. Callers must make sure
    amounts are positive before they reach the ledger.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: Optional[str] = Field(
        default=None,
        description="Identifier of the stored entry, if any"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        description="Magnitude of the obligation"
    )
    currency: Optional[str] = Field(
        default=None,
        description="Currency code; the configured default applies when absent"
    )
    debtor_id: Optional[str] = Field(
        default=None,
        description="Participant who owes"
    )
    creditor_id: Optional[str] = Field(
        default=None,
        description="Participant who is owed"
    )
    is_settled: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_settled", "is_paid"),
        description="Settled records are ignored by every computation"
    )
    settled_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("settled_at", "paid_at"),
        description="When the record was marked as settled"
    )

    @property
    def is_complete(self) -> bool:
        """True when the record can contribute to a balance."""
        return bool(self.amount) and bool(self.debtor_id) and bool(self.creditor_id)

    def currency_or(self, default: str) -> str:
        """Currency of this record, falling back to `default` when unset or empty."""
        return self.currency or default

    def toggle_settled(self) -> "DebtRecord":
        """
        Return a copy with the settled flag flipped.

        Settling stamps `settled_at`; reopening clears it.
        Persisting the change is up to the caller.
        """
        settling = not self.is_settled
        return self.model_copy(update={
            "is_settled": settling,
            "settled_at": datetime.now(timezone.utc) if settling else None,
        })


class Transaction(BaseModel):
    """
    One settlement step: `from_id` pays `to_id` the given amount.

    Serializes as {"from", "to", "amount", "currency"} with by_alias=True.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount to pay, rounded to cents"
    )
    currency: str

    def involves(self, participant_id: str) -> bool:
        return participant_id in (self.from_id, self.to_id)


class ParticipantSummary(BaseModel):
    """Raw (non-simplified) totals for one participant in one currency."""

    participant_id: str
    currency: str
    owed_to_me: Decimal = Decimal("0")
    i_owe: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        """Positive when the participant is owed money overall."""
        return self.owed_to_me - self.i_owe


class FinanceOverview(BaseModel):
    """
    Everything the group debts screen needs for the current participant.

    - summary: raw totals in the summary currency
    - simplified: the settlement plan for the whole group
    - outstanding: unsettled records, as recorded
    """

    participant_id: str
    summary: ParticipantSummary
    simplified: list[Transaction] = Field(default_factory=list)
    outstanding: list[DebtRecord] = Field(default_factory=list)

    @property
    def is_all_settled(self) -> bool:
        return not self.simplified

    @property
    def payments_due(self) -> list[Transaction]:
        """Plan steps the participant has to pay."""
        return [t for t in self.simplified if t.from_id == self.participant_id]

    @property
    def payments_incoming(self) -> list[Transaction]:
        """Plan steps the participant will receive."""
        return [t for t in self.simplified if t.to_id == self.participant_id]
