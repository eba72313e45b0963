"""
History Statistics

DESIGN DECISION: Statistics are computed DETERMINISTICALLY from the
records actually stored. Nothing is estimated; an empty history gives
zero counts and zero averages rather than an error.

The dashboard needs two things:
1. A summary over the whole log (count, average, solar eligibility rate)
2. The recent trend: the last few subsidies in chronological order
"""

from typing import Sequence

from electricity_subsidy.models.calculation import (
    CalculationRecord,
    HistorySummary,
    TrendPoint,
)


DEFAULT_TREND_WINDOW = 7
TREND_LABEL_FORMAT = "%d/%m"


class HistoryAnalyzer:
    """Aggregates over a sequence of calculation records."""

    def summarize(self, records: Sequence[CalculationRecord]) -> HistorySummary:
        """
        Summary statistics for the given records.

        Percentages are in the 0-100 range and unrounded; formatting is up
        to the caller.
        """
        total = len(records)
        if total == 0:
            return HistorySummary(total_calculations=0)

        subsidies = [r.subsidy for r in records]
        total_subsidy = sum(subsidies)
        eligible = sum(1 for r in records if r.solar_eligible)

        return HistorySummary(
            total_calculations=total,
            total_subsidy=total_subsidy,
            average_subsidy=total_subsidy / total,
            max_subsidy=max(subsidies),
            min_subsidy=min(subsidies),
            solar_eligible_count=eligible,
            solar_eligible_percentage=eligible / total * 100,
        )

    def recent_trend(
        self,
        records: Sequence[CalculationRecord],
        window: int = DEFAULT_TREND_WINDOW,
    ) -> list[TrendPoint]:
        """
        The last `window` records as trend points, oldest first.

        Fewer points are returned when the history is shorter than the window.
        """
        if window < 1:
            raise ValueError("Trend window must be at least 1")

        return [
            TrendPoint(
                timestamp=record.timestamp,
                subsidy=record.subsidy,
                label=record.timestamp.strftime(TREND_LABEL_FORMAT),
            )
            for record in records[-window:]
        ]
