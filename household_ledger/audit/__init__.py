"""Audit logging package."""

from household_ledger.audit.logger import (
    AuditLogger,
    AuditSink,
    configure_logging,
    create_correlation_id,
)

__all__ = ["AuditLogger", "AuditSink", "configure_logging", "create_correlation_id"]
