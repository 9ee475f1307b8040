"""
Data Models Package

This package contains all Pydantic models used in the Household Ledger.
"""

from household_ledger.models.debt import (
    DebtRecord,
    FinanceOverview,
    ParticipantSummary,
    Transaction,
)
from household_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Debt models
    "DebtRecord",
    "FinanceOverview",
    "ParticipantSummary",
    "Transaction",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
