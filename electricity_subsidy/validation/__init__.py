"""Input validation package."""

from electricity_subsidy.validation.validator import CalculationInputValidator

__all__ = ["CalculationInputValidator"]
