"""History statistics package."""

from electricity_subsidy.queries.statistics import HistoryAnalyzer

__all__ = ["HistoryAnalyzer"]
