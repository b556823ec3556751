# Project: climate-stats
# Owner: GreenUnicorn
"""
aggregate.py — Collect the same MM-DD window across several prior years.

Each year is fetched independently; a failing year is recorded in `errors`
and the loop carries on. The dataset is usable as long as one year
returned data.
"""

from collections.abc import Callable
from datetime import date

from climate_stats.history import fetch_historical
from climate_stats.pacing import DEFAULT_FETCH_DELAY, FixedDelayPacer, Pacer, paced
from climate_stats.utils import DEFAULT_LOG_PATH, log_message, window_dates

HistoricalFetch = Callable[[str, date, date], dict]


def fetch_multi_year(
    location: str,
    start_mmdd: str,
    end_mmdd: str,
    years: int = 10,
    fetch: HistoricalFetch = fetch_historical,
    pacer: Pacer | None = None,
    today: date | None = None,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Fetch daily records for an MM-DD window in each of the last `years` years.

    Years run from last year backwards; the current year is never included.

    Args:
        location: Location string passed through to `fetch`.
        start_mmdd: Window start, 'MM-DD'.
        end_mmdd: Window end, 'MM-DD' (may be earlier than start to cross New Year).
        years: Number of prior years to sample.
        fetch: Historical collaborator, fetch(location, start, end) -> dict
            with 'location' and 'days'. Raising marks the year as failed.
        pacer: Pacing between yearly fetches. Defaults to a 0.1s delay.
        today: Reference date for "current year" (defaults to date.today()).
        log_path: Log file for per-year failures.

    Returns:
        Dict with keys:
            success (bool, True if at least one year returned data),
            location (location info of the first successful year, or None),
            years (list of years that succeeded, most recent first),
            data (list of {"year", "data", "location"}),
            errors (list of {"year", "error"})

    Raises:
        ValueError: If an MM-DD is invalid.
    """
    if pacer is None:
        pacer = FixedDelayPacer(DEFAULT_FETCH_DELAY)
    current_year = (today or date.today()).year
    target_years = [current_year - i - 1 for i in range(years)]
    # Validate before any network call
    windows = {year: window_dates(year, start_mmdd, end_mmdd) for year in target_years}

    collected = []
    errors = []
    for year in paced(target_years, pacer):
        start, end = windows[year]
        try:
            result = fetch(location, start, end)
            days = result.get("days") or []
            if not days:
                raise RuntimeError("No data returned")
        except Exception as e:
            log_message(f"History fetch for {location} {year} failed: {e}",
                        level="WARNING", log_path=log_path)
            errors.append({"year": year, "error": str(e)})
            continue
        collected.append({
            "year": year,
            "data": days,
            "location": result.get("location"),
        })

    return {
        "success": bool(collected),
        # First success wins
        "location": collected[0]["location"] if collected else None,
        "years": [entry["year"] for entry in collected],
        "data": collected,
        "errors": errors,
    }


def flatten(dataset: dict) -> list[dict]:
    """Return every daily record in a multi-year dataset, tagged with its sample year."""
    return [
        {**day, "year": entry["year"]}
        for entry in dataset["data"]
        for day in entry["data"]
    ]
