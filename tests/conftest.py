# Project: climate-stats
# Owner: GreenUnicorn
"""Shared fixtures: isolated log directory, zero pacing, fake history fetch."""

from datetime import date, timedelta

import pytest

from climate_stats.pacing import NoDelayPacer

# Fixed "today" so lookback years are deterministic: 2024, 2023, 2022, ...
TODAY = date(2025, 8, 1)


@pytest.fixture(autouse=True)
def _isolate_logs(tmp_path, monkeypatch):
    """Run every test in a temp cwd so logs/climate_stats.log never hits the repo."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def no_delay():
    return NoDelayPacer()


@pytest.fixture
def make_fetch():
    """Factory for fake HistoricalWeatherFetch collaborators.

    make_fetch(day_values) where day_values(year, day) returns a dict of
    record fields for one date, or raises to fail that whole year.
    The returned fetch records its calls in `fetch.calls`.
    """
    def _factory(day_values):
        calls = []

        def fetch(location, start, end):
            calls.append((location, start, end))
            days = []
            current = start
            while current <= end:
                values = day_values(end.year, current)
                days.append({
                    "date": current.isoformat(),
                    "temp_avg": None,
                    "temp_max": None,
                    "temp_min": None,
                    "precipitation": None,
                    "humidity": None,
                    "conditions": "Clear",
                    "icon": "clear-day",
                    **values,
                })
                current += timedelta(days=1)
            return {
                "location": {"address": location, "latitude": 47.6, "longitude": -122.3,
                             "timezone": "America/Los_Angeles"},
                "days": days,
            }

        fetch.calls = calls
        return fetch

    return _factory
