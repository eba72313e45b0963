"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of each calculation and what happened to it
2. Debugging capability when stored history goes bad
3. A record of evictions from the bounded history

The audit logger:
- Logs structured JSON lines through structlog
- Keeps the most recent events in memory for inspection
- Never raises because logging failed
"""

import logging
from collections import deque
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import structlog

from electricity_subsidy.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at the given level."""
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger().setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and keeps the latest
    `buffer_size` events in memory.
    """

    def __init__(self, buffer_size: int = 200):
        self._logger = structlog.get_logger("electricity_subsidy.audit")
        self._recent: deque[AuditEvent] = deque(maxlen=buffer_size)

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Buffered events, oldest first."""
        return list(self._recent)

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written, False if logging failed.
        """
        self._recent.append(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.CRITICAL:
                self._logger.critical("audit_event", **log_dict)
            elif event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Logging must never take the calculation down with it
            logging.getLogger(__name__).warning("audit log write failed: %s", e)
            return False

        return True

    async def log_calculation(
        self,
        income: int,
        family_members: int,
        area: str,
        subsidy: float,
        solar_eligible: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a completed subsidy calculation."""
        event = AuditEventBuilder.calculation_performed(
            income=income,
            family_members=family_members,
            area=area,
            subsidy=subsidy,
            solar_eligible=solar_eligible,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_input_rejected(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log form input that failed validation."""
        event = AuditEventBuilder.input_rejected(
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_record_evicted(
        self,
        evicted_timestamp: datetime,
        capacity: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.history_record_evicted(
            evicted_timestamp=evicted_timestamp,
            capacity=capacity,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_history_loaded(self, record_count: int) -> None:
        await self.log(AuditEventBuilder.history_loaded(record_count))

    async def log_history_cleared(self, removed_count: int) -> None:
        await self.log(AuditEventBuilder.history_cleared(removed_count))

    async def log_history_corrupted(self, error_message: str) -> None:
        await self.log(AuditEventBuilder.history_corrupted(error_message))

    async def log_preferences_saved(self, preferences: dict) -> None:
        await self.log(AuditEventBuilder.preferences_saved(preferences))

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed storage operation."""
        event = AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., one calculation).
    Pass it through all subsequent operations.
    """
    return uuid4()
