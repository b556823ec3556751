# Project: climate-stats
# Owner: GreenUnicorn
"""
history.py — Fetch historical daily weather from the Visual Crossing Timeline API.

This is the default historical-weather collaborator used by the climate
calculations: one call per (year, date window).

API docs: https://www.visualcrossing.com/resources/documentation/weather-api/timeline-weather-api/
"""

import os
from datetime import date
from urllib.parse import quote

import requests

from climate_stats.utils import DEFAULT_LOG_PATH, with_retry

VISUAL_CROSSING_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)
API_KEY_ENV = "VISUAL_CROSSING_API_KEY"

DAY_ELEMENTS = [
    "datetime",
    "temp",
    "tempmax",
    "tempmin",
    "precip",
    "humidity",
    "conditions",
    "icon",
]


def resolve_api_key(api_key: str | None = None) -> str:
    """Return `api_key`, falling back to the VISUAL_CROSSING_API_KEY env var.

    Raises:
        RuntimeError: If no key is available.
    """
    key = api_key or os.environ.get(API_KEY_ENV)
    if not key:
        raise RuntimeError(
            f"Visual Crossing API key not configured. Set {API_KEY_ENV} "
            "or [visual_crossing].api_key in config.toml."
        )
    return key


def build_url(
    location: str,
    start_date: str | None = None,
    end_date: str | None = None,
    base_url: str = VISUAL_CROSSING_URL,
) -> str:
    """Build a Timeline API URL: {base}/{location}[/{start}[/{end}]]."""
    url = f"{base_url.rstrip('/')}/{quote(location, safe=',')}"
    if start_date:
        url += f"/{start_date}"
        if end_date:
            url += f"/{end_date}"
    return url


def request_days(url: str, api_key: str, label: str, log_path=DEFAULT_LOG_PATH) -> dict:
    """GET a Timeline URL for daily records and return the decoded JSON."""
    params = {
        "key": api_key,
        "unitGroup": "metric",
        "include": "days",
        "elements": ",".join(DAY_ELEMENTS),
        "contentType": "json",
    }

    def _call() -> dict:
        r = requests.get(url, params=params, timeout=10)
        r.raise_for_status()
        return r.json()

    return with_retry(_call, label=label, log_path=log_path)


def fetch_historical(
    location: str,
    start_date: date | str,
    end_date: date | str,
    api_key: str | None = None,
    base_url: str = VISUAL_CROSSING_URL,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Fetch daily observations for `location` between two dates (inclusive).

    Args:
        location: City name, address or "lat,lon" understood by Visual Crossing.
        start_date: First day, date or 'YYYY-MM-DD'.
        end_date: Last day, date or 'YYYY-MM-DD'.
        api_key: Visual Crossing key; defaults to VISUAL_CROSSING_API_KEY.
        base_url: Timeline API base URL.
        log_path: Log file for exhausted retries.

    Returns:
        Dict with keys:
            location (dict: address, latitude, longitude, timezone),
            days (list of daily record dicts, see _parse_days),
            query_cost (int)

    Raises:
        RuntimeError: If no API key is configured or all retries fail.
    """
    key = resolve_api_key(api_key)
    start = start_date.isoformat() if isinstance(start_date, date) else start_date
    end = end_date.isoformat() if isinstance(end_date, date) else end_date

    url = build_url(location, start, end, base_url=base_url)
    label = f"Visual Crossing history for '{location}' {start}..{end}"
    data = request_days(url, key, label=label, log_path=log_path)
    return {
        "location": parse_location(data),
        "days": _parse_days(data),
        "query_cost": data.get("queryCost", 0),
    }


def parse_location(data: dict) -> dict:
    """Extract the resolved location block from a Timeline response."""
    return {
        "address":   data.get("resolvedAddress"),
        "latitude":  data.get("latitude"),
        "longitude": data.get("longitude"),
        "timezone":  data.get("timezone"),
    }


def _parse_days(data: dict) -> list[dict]:
    """Parse the Timeline 'days' array into daily record dicts.

    Missing numeric values stay None: the climate calculations need to tell
    "no data" apart from a genuine zero.
    """
    records = []
    for day in data.get("days") or []:
        records.append({
            "date":          day.get("datetime"),
            "temp_avg":      _float_or_none(day.get("temp")),
            "temp_max":      _float_or_none(day.get("tempmax")),
            "temp_min":      _float_or_none(day.get("tempmin")),
            "precipitation": _float_or_none(day.get("precip")),
            "humidity":      _float_or_none(day.get("humidity")),
            "conditions":    day.get("conditions"),
            "icon":          day.get("icon"),
        })
    return records


def _float_or_none(value) -> float | None:
    return float(value) if value is not None else None
