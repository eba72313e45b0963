"""Tests for history statistics and trends."""

from datetime import datetime, timedelta, timezone

import pytest

from electricity_subsidy.models.calculation import Area, CalculationRecord
from electricity_subsidy.queries import HistoryAnalyzer


def record(subsidy: float, solar: bool = False, day: int = 1) -> CalculationRecord:
    return CalculationRecord(
        income=10000,
        family_members=4,
        area=Area.RURAL if solar else Area.URBAN,
        subsidy=subsidy,
        solar_eligible=solar,
        timestamp=datetime(2025, 3, 1, 12, tzinfo=timezone.utc) + timedelta(days=day - 1),
    )


@pytest.fixture
def analyzer() -> HistoryAnalyzer:
    return HistoryAnalyzer()


class TestSummary:
    """Tests for HistoryAnalyzer.summarize."""

    def test_empty_history(self, analyzer):
        summary = analyzer.summarize([])
        assert summary.total_calculations == 0
        assert summary.average_subsidy == 0.0
        assert summary.solar_eligible_count == 0
        assert summary.solar_eligible_percentage == 0.0
        assert summary.max_subsidy is None
        assert summary.min_subsidy is None

    def test_summary_values(self, analyzer):
        records = [
            record(3000.0, solar=False),
            record(3600.0, solar=True),
            record(2400.0, solar=False),
            record(4200.0, solar=True),
        ]
        summary = analyzer.summarize(records)
        assert summary.total_calculations == 4
        assert summary.total_subsidy == pytest.approx(13200.0)
        assert summary.average_subsidy == pytest.approx(3300.0)
        assert summary.max_subsidy == 4200.0
        assert summary.min_subsidy == 2400.0
        assert summary.solar_eligible_count == 2
        assert summary.solar_eligible_percentage == pytest.approx(50.0)

    def test_percentage_unrounded(self, analyzer):
        records = [record(1.0, solar=True), record(1.0), record(1.0)]
        assert analyzer.summarize(records).solar_eligible_percentage == pytest.approx(100 / 3)


class TestRecentTrend:
    """Tests for HistoryAnalyzer.recent_trend."""

    def test_shorter_than_window(self, analyzer):
        records = [record(1000.0, day=1), record(2000.0, day=2)]
        trend = analyzer.recent_trend(records)
        assert [p.subsidy for p in trend] == [1000.0, 2000.0]

    def test_last_seven_oldest_first(self, analyzer):
        records = [record(float(n), day=n) for n in range(1, 11)]
        trend = analyzer.recent_trend(records)
        assert [p.subsidy for p in trend] == [4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0]

    def test_labels_are_day_month(self, analyzer):
        trend = analyzer.recent_trend([record(1.0, day=7)])
        assert trend[0].label == "07/03"

    def test_custom_window(self, analyzer):
        records = [record(float(n), day=n) for n in range(1, 5)]
        assert [p.subsidy for p in analyzer.recent_trend(records, window=2)] == [3.0, 4.0]

    def test_empty_history(self, analyzer):
        assert analyzer.recent_trend([]) == []

    def test_invalid_window(self, analyzer):
        with pytest.raises(ValueError):
            analyzer.recent_trend([], window=0)
