"""
Audit Logger

DESIGN DECISION: Every settlement shown to a group and every change to a
debt's paid flag is logged.

The audit logger:
- Always writes a structured local log line
- Optionally forwards events to a sink (e.g. a storage adapter owned by the caller)
- Gracefully handles sink failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog

from household_ledger.config import get_settings
from household_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Apply the minimum log level to every household_ledger logger.

    Args:
        level: Level name. If None, taken from LOG_LEVEL.

    filter_by_level drops events below this level.
    A stream handler is attached only when nothing else handles records.
    """
    package_logger = logging.getLogger("household_ledger")
    package_logger.setLevel(level or get_settings().app.log_level)

    if not package_logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)


configure_logging()


AuditSink = Callable[[AuditEvent], None]


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (for persistence, owned by the caller)
    """

    def __init__(
        self,
        sink: Optional[AuditSink] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Callable receiving every event.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if one is configured.

        Returns True if the sink accepted the event (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                self._sink(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_settlement_computed(
        self,
        participant_id: str,
        transaction_count: int,
        currencies: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a settlement plan computation."""
        event = AuditEventBuilder.settlement_computed(
            participant_id=participant_id,
            transaction_count=transaction_count,
            currencies=currencies,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_incomplete_record(
        self,
        debt_id: Optional[str],
        missing_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a debt record that was left out of balances."""
        event = AuditEventBuilder.incomplete_record_skipped(
            debt_id=debt_id,
            missing_fields=missing_fields,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_debt_settled(
        self,
        debt_id: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.debt_settled(
            debt_id=debt_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_debt_reopened(
        self,
        debt_id: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.debt_reopened(
            debt_id=debt_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., opening the debts screen).
    """
    return uuid4()
