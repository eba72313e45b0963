"""Subsidy calculation package."""

from electricity_subsidy.calculator.subsidy import BASE_SUBSIDY, SubsidyCalculator

__all__ = ["BASE_SUBSIDY", "SubsidyCalculator"]
