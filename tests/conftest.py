"""Shared test fixtures for Cadence tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CADENCE_SCORING_WEIGHTS_PATH", "")
    monkeypatch.setenv("CADENCE_WEEK_LENGTH", "7")
    monkeypatch.setenv("CADENCE_LOG_LEVEL", "info")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from cadence.domains.productivity.connectors.mock_data import get_mock_week  # noqa: E402
from cadence.domains.productivity.domain_logic.metrics_models import DailyMetrics  # noqa: E402

# Sunday; the mock week then runs back to Monday 2026-02-16
MOCK_WEEK_END = "2026-02-22"

# (field, units per point, point cap) for one-point scoring terms
_POINT_SOURCES = [
    ("focus_time_minutes", 20, 15),
    ("github_coding_minutes", 30, 10),
    ("exercise_minutes", 15, 15),
    ("github_commits", 1, 10),
    ("steps", 2000, 5),
    ("workout_streak", 1, 5),
]


def _make_day(date: str = "2026-02-16", **fields) -> DailyMetrics:
    """Create a DailyMetrics record with only the given fields set."""
    return DailyMetrics(date=date, **fields)


def _day_scoring(score: int, date: str = "2026-02-16", exercised: bool = False) -> DailyMetrics:
    """Build a record that scores exactly ``score``.

    One-point sources (focus, coding time, exercise time, commits, steps,
    streak) fill the first 60 points; deep work, sleep and pull requests
    cover the rest. With ``exercised`` the 5-point bonus is included.
    """
    remaining = score
    fields: dict = {}
    if exercised:
        fields["exercised_today"] = True
        remaining -= 5
    for name, per_point, cap in _POINT_SOURCES:
        take = min(remaining, cap)
        if take:
            fields[name] = take * per_point
        remaining -= take
    if remaining >= 5:
        fields["deep_work_session"] = True
        remaining -= 5
    if remaining >= 5:
        fields["sleep_hours"] = 7.5
        remaining -= 5
    if remaining and remaining % 2 == 0 and remaining <= 10:
        fields["github_prs"] = remaining // 2
        remaining = 0
    assert remaining == 0, f"cannot build a day scoring {score}"
    return DailyMetrics(date=date, **fields)


@pytest.fixture
def mock_week() -> list[DailyMetrics]:
    """Seven mock days ending Sunday 2026-02-22, most recent first."""
    return get_mock_week(MOCK_WEEK_END)


@pytest.fixture
def make_day():
    """Factory fixture: ``make_day(date, **fields)`` -> DailyMetrics."""
    return _make_day


@pytest.fixture
def day_scoring():
    """Factory fixture: ``day_scoring(score, date, exercised)`` -> DailyMetrics."""
    return _day_scoring
