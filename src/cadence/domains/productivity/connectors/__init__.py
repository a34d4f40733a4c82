"""Daily metrics connectors — abstraction layer over already-collected data."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cadence.domains.productivity.domain_logic.metrics_models import DailyMetrics


@runtime_checkable
class MetricsProvider(Protocol):
    """Abstract interface for supplying materialized daily metrics.

    Tools call these methods without knowing whether records come from a
    coding platform, fitness tracker, calendar, or a mock generator. Fetching
    and storage live behind this boundary.
    """

    async def get_week(self, end_date: str, days: int = 7) -> list[DailyMetrics]:
        """Daily records ending at ``end_date``, most recent first."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source: 'mock', 'static', ..."""
        ...

    def get_provenance(self) -> dict[str, str]:
        """Return provenance metadata suitable for merging into tool output."""
        ...
