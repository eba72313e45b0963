"""
Audit Models for the Electricity Subsidy Calculator

Every significant action in the system is logged for audit purposes:
each calculation, each eviction from the bounded history, clearing the
history, and changes to preferences.

DESIGN DECISION: Audit events are plain data. The AuditLogger decides
where they go.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from electricity_subsidy.models.calculation import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Calculation
    CALCULATION_PERFORMED = "calculation_performed"
    INPUT_REJECTED = "input_rejected"

    # History
    HISTORY_RECORD_EVICTED = "history_record_evicted"
    HISTORY_LOADED = "history_loaded"
    HISTORY_CLEARED = "history_cleared"
    HISTORY_CORRUPTED = "history_corrupted"

    # Preferences
    PREFERENCES_SAVED = "preferences_saved"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one calculation and its save)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.calculation_performed(income, members, area, subsidy, eligible, cid)
        event = AuditEventBuilder.history_cleared(removed_count=12)
    """

    @staticmethod
    def calculation_performed(
        income: int,
        family_members: int,
        area: str,
        subsidy: float,
        solar_eligible: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CALCULATION_PERFORMED,
            correlation_id=correlation_id,
            description=f"Subsidy calculated: {subsidy:.2f}",
            details={
                "income": income,
                "family_members": family_members,
                "area": area,
                "subsidy": subsidy,
                "solar_eligible": solar_eligible,
            },
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Calculator input rejected with {len(issues)} issue(s)",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def history_record_evicted(
        evicted_timestamp: datetime,
        capacity: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_RECORD_EVICTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Oldest calculation evicted (capacity {capacity})",
            details={
                "evicted_timestamp": evicted_timestamp.isoformat(),
                "capacity": capacity,
            },
        )

    @staticmethod
    def history_loaded(record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {record_count} calculation(s) from history",
            details={"record_count": record_count},
        )

    @staticmethod
    def history_cleared(removed_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_CLEARED,
            description="Calculation history cleared",
            details={"removed_count": removed_count},
            is_user_action=True,
        )

    @staticmethod
    def history_corrupted(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_CORRUPTED,
            severity=AuditSeverity.ERROR,
            description="Stored calculation history could not be read",
            error_message=error_message,
        )

    @staticmethod
    def preferences_saved(preferences: dict) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PREFERENCES_SAVED,
            description="User preferences saved",
            details=preferences,
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Storage operation failed: {operation}",
            details={"operation": operation},
            error_message=error_message,
        )
