"""Concrete MetricsProvider implementations."""

from __future__ import annotations

from datetime import date, timedelta

from cadence.domains.productivity.connectors.mock_data import get_mock_week
from cadence.domains.productivity.domain_logic.metrics_models import DailyMetrics


class MockMetricsProvider:
    """Uses the mock week generator. Always available."""

    async def get_week(self, end_date: str, days: int = 7) -> list[DailyMetrics]:
        return get_mock_week(end_date, days)

    @property
    def data_source(self) -> str:
        return "mock"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Using simulated daily metrics. "
                "Pass daily records explicitly for real analysis."
            ),
        }


class StaticMetricsProvider:
    """Serves a fixed, in-memory set of daily records.

    Records are looked up by date, so the window returned by ``get_week``
    only contains days the provider actually holds.
    """

    def __init__(self, records: list[DailyMetrics]) -> None:
        self._by_date = {r.date: r for r in records}

    async def get_week(self, end_date: str, days: int = 7) -> list[DailyMetrics]:
        end = date.fromisoformat(end_date)
        window = ((end - timedelta(days=offset)).isoformat() for offset in range(days))
        return [self._by_date[d] for d in window if d in self._by_date]

    @property
    def data_source(self) -> str:
        return "static"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": f"In-memory daily metrics ({len(self._by_date)} days held).",
        }
