"""
Core Data Models for the Electricity Subsidy Calculator

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable for local storage and logging
3. Keep stored history records immutable

DESIGN DECISION: Stored records use the camelCase field names of the
persisted format (familyMembers, solarEligible) as aliases, so the same
model reads and writes the history log while Python code uses snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Area(str, Enum):
    """
    Where the household lives.

    Values match the persisted strings exactly.
    """
    URBAN = "Urban"
    RURAL = "Rural"


class Language(str, Enum):
    """Display languages the user can pick."""
    ENGLISH = "English"
    URDU = "Urdu"
    PUNJABI = "Punjabi"
    SINDHI = "Sindhi"


class IssueSeverity(str, Enum):
    """Severity of an input validation issue."""
    ERROR = "error"
    WARNING = "warning"


# =============================================================================
# CALCULATION MODELS
# =============================================================================

class CalculationInput(BaseModel):
    """
    Validated inputs for one subsidy calculation.

    Negative numbers are allowed here; the formula accepts them.
    """
    model_config = ConfigDict(frozen=True)

    income: int = Field(
        ...,
        description="Monthly household income in currency units"
    )
    family_members: int = Field(
        ...,
        description="Number of people in the household"
    )
    area: Area = Field(
        ...,
        description="Urban or Rural"
    )


class SubsidyBreakdown(BaseModel):
    """
    How a subsidy amount was put together.

    total == base_subsidy * income_factor * family_size_factor * area_factor
    """
    model_config = ConfigDict(frozen=True)

    base_subsidy: float
    income_factor: float
    family_size_factor: float
    area_factor: float
    total: float


class CalculationRecord(BaseModel):
    """
    One past calculation, as kept in the history log.

    CRITICAL: Records are immutable. They are created once and only ever
    removed by eviction or by clearing the whole history.

    subsidy and solar_eligible are stored for display only; they can always
    be recomputed from (income, family_members, area).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    income: int = Field(
        ...,
        strict=True,
        description="Monthly household income in currency units"
    )
    family_members: int = Field(
        ...,
        alias="familyMembers",
        strict=True,
        description="Number of people in the household"
    )
    area: Area = Field(
        ...,
        description="Urban or Rural"
    )
    subsidy: float = Field(
        ...,
        description="Computed monthly subsidy in currency units"
    )
    solar_eligible: bool = Field(
        ...,
        alias="solarEligible",
        strict=True,
        description="Whether the household qualifies for the solar program"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the calculation was made"
    )

    def to_storage_dict(self) -> dict[str, Any]:
        """
        Convert to the persisted JSON object.

        Keys: income, familyMembers, area, subsidy, solarEligible, timestamp
        (ISO-8601 text).
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage_dict(cls, data: dict[str, Any]) -> "CalculationRecord":
        """Rebuild a record from its persisted JSON object."""
        return cls.model_validate(data)


class CalculationOutcome(BaseModel):
    """Result handed back to the caller after a calculation is saved."""
    model_config = ConfigDict(frozen=True)

    record: CalculationRecord
    breakdown: SubsidyBreakdown


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class InputValidationIssue(BaseModel):
    """A single problem found in raw form input."""

    field: str = Field(
        ...,
        description="Input field with the issue"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: IssueSeverity = Field(
        ...,
        description="Errors block the calculation, warnings do not"
    )


class InputValidationResult(BaseModel):
    """
    Outcome of validating the raw calculator form.

    When there are no errors, parsed holds the typed inputs.
    """

    issues: list[InputValidationIssue] = Field(default_factory=list)
    parsed: Optional[CalculationInput] = None

    @model_validator(mode='after')
    def check_parsed_only_when_valid(self) -> 'InputValidationResult':
        if self.parsed is not None and self.has_errors:
            raise ValueError("Parsed input cannot accompany validation errors")
        return self

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == IssueSeverity.ERROR for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors and self.parsed is not None

    @property
    def warnings(self) -> list[InputValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    def messages_for(self, field: str) -> list[str]:
        """All messages reported against one field."""
        return [i.message for i in self.issues if i.field == field]


# =============================================================================
# STATISTICS MODELS
# =============================================================================

class HistorySummary(BaseModel):
    """Aggregates over the whole history log."""

    total_calculations: int = Field(ge=0)
    total_subsidy: float = 0.0
    average_subsidy: float = 0.0
    max_subsidy: Optional[float] = None
    min_subsidy: Optional[float] = None
    solar_eligible_count: int = Field(default=0, ge=0)
    solar_eligible_percentage: float = Field(default=0.0, ge=0.0, le=100.0)


class TrendPoint(BaseModel):
    """One point of the recent subsidy trend."""

    timestamp: datetime
    subsidy: float
    label: str = Field(
        ...,
        description="Short day/month label, e.g. '07/03'"
    )


# =============================================================================
# PREFERENCES
# =============================================================================

class UserPreferences(BaseModel):
    """Simple display preferences kept alongside the history."""

    dark_mode: bool = False
    notifications_enabled: bool = True
    language: Language = Language.ENGLISH
