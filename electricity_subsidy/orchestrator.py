"""
Main Orchestrator for the Electricity Subsidy Calculator

This module ties together all the components and defines the
end-to-end flows for:
1. Calculation (form input → validate → calculate → record → save)
2. History (load → summarize / trend / affordability, clear)
3. Preferences (load / save)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The calculator only ever sees validated inputs
- Every saved record is computed by the calculator, never supplied
- Every step is audited

A presentation layer calls these flows; it never touches storage directly.
"""

from datetime import datetime
from typing import Callable, Optional, Union
from uuid import UUID

from electricity_subsidy.audit import AuditLogger, configure_logging, create_correlation_id
from electricity_subsidy.calculator import SubsidyCalculator
from electricity_subsidy.config import Settings, get_settings
from electricity_subsidy.models.calculation import (
    Area,
    CalculationOutcome,
    CalculationRecord,
    HistorySummary,
    InputValidationResult,
    TrendPoint,
    UserPreferences,
    utc_now,
)
from electricity_subsidy.queries import HistoryAnalyzer
from electricity_subsidy.services.storage import (
    CalculationHistoryStore,
    CorruptedDataError,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    PreferencesStore,
    StorageError,
)
from electricity_subsidy.validation import CalculationInputValidator


def _coerce_area(area: Union[Area, str]) -> Area:
    """Map a raw area to the enum; anything unrecognised counts as Urban."""
    try:
        return Area(area)
    except ValueError:
        return Area.URBAN


class SubsidyCalculationFlow:
    """
    Orchestrates one subsidy calculation.

    Flow:
    1. Validate → raw form text to integers (calculate_from_text only)
    2. Calculate → subsidy and solar eligibility
    3. Record → immutable CalculationRecord stamped "now"
    4. Save → append to the bounded history
    """

    def __init__(
        self,
        history_store: CalculationHistoryStore,
        calculator: Optional[SubsidyCalculator] = None,
        validator: Optional[CalculationInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._history_store = history_store
        self._calculator = calculator or SubsidyCalculator()
        self._validator = validator or CalculationInputValidator()
        self._audit_logger = audit_logger
        self._clock = clock

    async def calculate(
        self,
        income: int,
        family_members: int,
        area: Union[Area, str],
        correlation_id: Optional[UUID] = None,
    ) -> CalculationOutcome:
        """
        Calculate, record and save one subsidy.

        Returns:
            The saved record together with the factor breakdown

        Raises:
            StorageError: If the record could not be saved
        """
        correlation_id = correlation_id or create_correlation_id()
        area = _coerce_area(area)

        breakdown = self._calculator.breakdown(income, family_members, area)
        solar_eligible = self._calculator.is_eligible_for_solar(income, area)

        record = CalculationRecord(
            income=income,
            family_members=family_members,
            area=area,
            subsidy=breakdown.total,
            solar_eligible=solar_eligible,
            timestamp=self._clock(),
        )

        try:
            evicted = await self._history_store.append(record)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="append_history",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_calculation(
                income=income,
                family_members=family_members,
                area=area.value,
                subsidy=record.subsidy,
                solar_eligible=solar_eligible,
                correlation_id=correlation_id,
            )
            for old in evicted:
                await self._audit_logger.log_record_evicted(
                    evicted_timestamp=old.timestamp,
                    capacity=self._history_store.capacity,
                    correlation_id=correlation_id,
                )

        return CalculationOutcome(record=record, breakdown=breakdown)

    async def calculate_from_text(
        self,
        income_text: Optional[str],
        family_members_text: Optional[str],
        area: Union[Area, str, None] = Area.URBAN,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[InputValidationResult, Optional[CalculationOutcome]]:
        """
        Validate raw form input, then calculate if it is usable.

        Returns:
            (validation_result, outcome)
            outcome is None when validation found errors.
        """
        correlation_id = correlation_id or create_correlation_id()
        validation = self._validator.validate(income_text, family_members_text, area)

        if not validation.is_valid:
            if self._audit_logger:
                await self._audit_logger.log_input_rejected(
                    issues=[issue.model_dump(mode="json") for issue in validation.issues],
                    correlation_id=correlation_id,
                )
            return validation, None

        parsed = validation.parsed
        outcome = await self.calculate(
            parsed.income,
            parsed.family_members,
            parsed.area,
            correlation_id=correlation_id,
        )
        return validation, outcome


class HistoryFlow:
    """
    Orchestrates reading and clearing the calculation history.

    All statistics are computed from what is actually stored.
    """

    def __init__(
        self,
        history_store: CalculationHistoryStore,
        analyzer: Optional[HistoryAnalyzer] = None,
        calculator: Optional[SubsidyCalculator] = None,
        audit_logger: Optional[AuditLogger] = None,
        trend_window: int = 7,
    ):
        self._history_store = history_store
        self._analyzer = analyzer or HistoryAnalyzer()
        self._calculator = calculator or SubsidyCalculator()
        self._audit_logger = audit_logger
        self._trend_window = trend_window

    async def load_history(self) -> list[CalculationRecord]:
        """
        All stored records, oldest first.

        Raises:
            CorruptedDataError: If the stored history cannot be parsed
        """
        try:
            records = await self._history_store.read_all()
        except CorruptedDataError as e:
            if self._audit_logger:
                await self._audit_logger.log_history_corrupted(str(e))
            raise

        if self._audit_logger:
            await self._audit_logger.log_history_loaded(len(records))
        return records

    async def newest_first(self) -> list[CalculationRecord]:
        """Records in the order a history list shows them."""
        return list(reversed(await self.load_history()))

    async def summary(self) -> HistorySummary:
        return self._analyzer.summarize(await self.load_history())

    async def recent_trend(self, window: Optional[int] = None) -> list[TrendPoint]:
        records = await self.load_history()
        if window is None:
            window = self._trend_window
        return self._analyzer.recent_trend(records, window)

    async def is_history_affordable(self, government_budget: float) -> bool:
        """Would paying every stored subsidy fit within the budget?"""
        records = await self.load_history()
        return self._calculator.is_affordable(
            [r.subsidy for r in records],
            government_budget,
        )

    async def clear_history(self) -> int:
        """
        Remove all stored calculations.

        Returns:
            Number of records removed
        """
        removed = await self._history_store.clear()
        if self._audit_logger:
            await self._audit_logger.log_history_cleared(removed)
        return removed


class PreferencesFlow:
    """Loads and saves user preferences with auditing."""

    def __init__(
        self,
        preferences_store: PreferencesStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._preferences_store = preferences_store
        self._audit_logger = audit_logger

    async def load(self) -> UserPreferences:
        return await self._preferences_store.load()

    async def save(self, preferences: UserPreferences) -> None:
        await self._preferences_store.save(preferences)
        if self._audit_logger:
            await self._audit_logger.log_preferences_saved(
                preferences.model_dump(mode="json")
            )

    async def reset(self) -> UserPreferences:
        """Drop stored preferences and return the defaults."""
        await self._preferences_store.reset()
        return await self._preferences_store.load()


def create_storage(settings: Optional[Settings] = None) -> KeyValueStorageInterface:
    """Build the key-value backend named in the storage settings."""
    storage_settings = (settings or get_settings()).storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(storage_settings.file_path)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[SubsidyCalculationFlow, HistoryFlow, PreferencesFlow]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to the cached settings)
        storage: Key-value backend override, e.g. in-memory for tests

    Returns:
        (calculation_flow, history_flow, preferences_flow)
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    storage = storage or create_storage(settings)
    audit_logger = AuditLogger()
    calculator = SubsidyCalculator()

    history_store = CalculationHistoryStore(
        storage,
        key=storage_settings.history_key,
        capacity=storage_settings.history_capacity,
    )

    calculation_flow = SubsidyCalculationFlow(
        history_store=history_store,
        calculator=calculator,
        audit_logger=audit_logger,
    )
    history_flow = HistoryFlow(
        history_store=history_store,
        calculator=calculator,
        audit_logger=audit_logger,
        trend_window=app_settings.trend_window,
    )
    preferences_flow = PreferencesFlow(
        preferences_store=PreferencesStore(storage),
        audit_logger=audit_logger,
    )

    return calculation_flow, history_flow, preferences_flow
