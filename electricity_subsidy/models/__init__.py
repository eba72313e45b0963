"""
Data Models Package

This package contains all Pydantic models used by the subsidy calculator.
All data flowing through the system must conform to these schemas.
"""

from electricity_subsidy.models.calculation import (
    Area,
    CalculationInput,
    CalculationOutcome,
    CalculationRecord,
    HistorySummary,
    InputValidationIssue,
    InputValidationResult,
    IssueSeverity,
    Language,
    SubsidyBreakdown,
    TrendPoint,
    UserPreferences,
    utc_now,
)
from electricity_subsidy.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Calculation models
    "Area",
    "CalculationInput",
    "CalculationOutcome",
    "CalculationRecord",
    "HistorySummary",
    "InputValidationIssue",
    "InputValidationResult",
    "IssueSeverity",
    "Language",
    "SubsidyBreakdown",
    "TrendPoint",
    "UserPreferences",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
