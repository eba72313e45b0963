"""
Subsidy Formula

DESIGN DECISION: The calculator is pure and stateless.
No I/O, no logging, no validation. Inputs are assumed to be
already-parsed integers; out-of-range values (e.g. negative income)
go straight through the formula.

    subsidy = BASE_SUBSIDY * income_factor * family_size_factor * area_factor

Income factor (inclusive middle band):
    income < 15000           -> 1.5
    15000 <= income <= 30000 -> 1.2
    income > 30000           -> 1.0

Family size factor:
    1 + 0.1 * (family_members - 4), clamped to [0.6, 2.0]

Area factor:
    Rural -> 1.2, anything else -> 1.0
"""

from typing import Iterable, Union

from electricity_subsidy.models.calculation import (
    Area,
    CalculationRecord,
    SubsidyBreakdown,
)


BASE_SUBSIDY = 2000.0

LOW_INCOME_LIMIT = 15000
MIDDLE_INCOME_LIMIT = 30000
LOW_INCOME_FACTOR = 1.5
MIDDLE_INCOME_FACTOR = 1.2
HIGH_INCOME_FACTOR = 1.0

REFERENCE_FAMILY_SIZE = 4
FAMILY_FACTOR_STEP = 0.1
MIN_FAMILY_FACTOR = 0.6
MAX_FAMILY_FACTOR = 2.0
# Household sizes at which the clamp takes over
FAMILY_SIZE_AT_MIN = 0
FAMILY_SIZE_AT_MAX = 14

RURAL_FACTOR = 1.2
URBAN_FACTOR = 1.0

# Solar program: strictly below this income, rural households only
SOLAR_INCOME_LIMIT = 20000


AreaLike = Union[Area, str]


class SubsidyCalculator:
    """
    Computes subsidy amounts and program eligibility.

    All methods are deterministic; the same inputs always give the same output.
    """

    def income_factor(self, income: int) -> float:
        if income < LOW_INCOME_LIMIT:
            return LOW_INCOME_FACTOR
        elif income <= MIDDLE_INCOME_LIMIT:
            return MIDDLE_INCOME_FACTOR
        return HIGH_INCOME_FACTOR

    def family_size_factor(self, family_members: int) -> float:
        # Clamp before float arithmetic so arbitrarily large ints cannot overflow
        if family_members >= FAMILY_SIZE_AT_MAX:
            return MAX_FAMILY_FACTOR
        if family_members <= FAMILY_SIZE_AT_MIN:
            return MIN_FAMILY_FACTOR
        factor = 1 + FAMILY_FACTOR_STEP * (family_members - REFERENCE_FAMILY_SIZE)
        return min(max(factor, MIN_FAMILY_FACTOR), MAX_FAMILY_FACTOR)

    def area_factor(self, area: AreaLike) -> float:
        return RURAL_FACTOR if area == Area.RURAL else URBAN_FACTOR

    def calculate_subsidy(
        self,
        income: int,
        family_members: int,
        area: AreaLike,
    ) -> float:
        """
        Calculate the monthly electricity subsidy for a household.

        Args:
            income: Monthly household income
            family_members: Number of people in the household
            area: "Urban" or "Rural" (any other value counts as Urban)

        Returns:
            Subsidy amount, unrounded
        """
        return (
            BASE_SUBSIDY
            * self.income_factor(income)
            * self.family_size_factor(family_members)
            * self.area_factor(area)
        )

    def breakdown(
        self,
        income: int,
        family_members: int,
        area: AreaLike,
    ) -> SubsidyBreakdown:
        """Each factor of the formula alongside the resulting total."""
        return SubsidyBreakdown(
            base_subsidy=BASE_SUBSIDY,
            income_factor=self.income_factor(income),
            family_size_factor=self.family_size_factor(family_members),
            area_factor=self.area_factor(area),
            total=self.calculate_subsidy(income, family_members, area),
        )

    def is_eligible_for_solar(self, income: int, area: AreaLike) -> bool:
        """Rural households with income below 20000 qualify for the solar program."""
        return income < SOLAR_INCOME_LIMIT and area == Area.RURAL

    def is_affordable(
        self,
        subsidies: Iterable[float],
        government_budget: float,
    ) -> bool:
        """
        Check whether the subsidies fit within the government budget.

        An empty collection totals zero.
        """
        return sum(subsidies, 0.0) <= government_budget

    def matches_record(self, record: CalculationRecord) -> bool:
        """True if the record's stored outputs agree with the current formula."""
        return (
            record.subsidy == self.calculate_subsidy(
                record.income, record.family_members, record.area
            )
            and record.solar_eligible == self.is_eligible_for_solar(
                record.income, record.area
            )
        )
