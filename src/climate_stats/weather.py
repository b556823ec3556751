# Project: climate-stats
# Owner: GreenUnicorn
"""
weather.py — Fetch the daily forecast from Visual Crossing.

Without explicit dates the Timeline API returns a 15-day forecast starting
today; records use the same keys as history.py so they can be compared
against climate normals directly.
"""

from climate_stats.history import (
    VISUAL_CROSSING_URL,
    _parse_days,
    build_url,
    request_days,
    resolve_api_key,
)
from climate_stats.utils import DEFAULT_LOG_PATH

MAX_FORECAST_DAYS = 15


def fetch_daily_forecast(
    location: str,
    days: int = 7,
    api_key: str | None = None,
    base_url: str = VISUAL_CROSSING_URL,
    log_path=DEFAULT_LOG_PATH,
) -> list[dict]:
    """Fetch up to `days` daily forecast records for `location`.

    Args:
        location: City name, address or "lat,lon".
        days: Number of days to return (1-15).
        api_key: Visual Crossing key; defaults to VISUAL_CROSSING_API_KEY.
        base_url: Timeline API base URL.
        log_path: Log file for exhausted retries.

    Returns:
        List of daily record dicts (date, temp_avg, temp_max, temp_min,
        precipitation, humidity, conditions, icon).

    Raises:
        ValueError: If days is outside 1-15.
        RuntimeError: If no API key is configured or all retries fail.
    """
    if not 1 <= days <= MAX_FORECAST_DAYS:
        raise ValueError(f"Forecast days must be between 1 and {MAX_FORECAST_DAYS}, got {days}")

    key = resolve_api_key(api_key)
    url = build_url(location, base_url=base_url)
    label = f"Visual Crossing forecast for '{location}'"
    data = request_days(url, key, label=label, log_path=log_path)
    return _parse_days(data)[:days]
