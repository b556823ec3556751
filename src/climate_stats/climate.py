# Project: climate-stats
# Owner: GreenUnicorn
"""
climate.py — Climate statistics derived from multi-year daily records.

Every public function fetches a multi-year dataset through
aggregate.fetch_multi_year and reduces it to one summary. Results are plain
dicts: {"success": True, ...} on success, {"success": False, "error": str}
otherwise. No exception escapes these functions.

Null handling: missing samples are dropped per metric before reducing, and
an empty metric yields None rather than NaN.
"""

from __future__ import annotations

import math
from datetime import date

from climate_stats.aggregate import HistoricalFetch, fetch_multi_year, flatten
from climate_stats.history import fetch_historical
from climate_stats.pacing import DEFAULT_FORECAST_DELAY, FixedDelayPacer, Pacer, paced
from climate_stats.stats import mean, percentile, present, std_dev
from climate_stats.utils import (
    DEFAULT_LOG_PATH,
    log_message,
    parse_mmdd,
    shift_mmdd,
    today_mmdd,
)

NORMALS_WINDOW_DAYS = 15
PERCENTILES = (10, 25, 50, 75, 90)
DEFAULT_BIN_SIZE = 5
FETCH_FAILED = "Failed to fetch historical data"


def _failure(error: str, **extra) -> dict:
    return {"success": False, "error": error, **extra}


def _collect(
    location: str,
    start_mmdd: str,
    end_mmdd: str,
    years: int,
    fetch: HistoricalFetch,
    pacer: Pacer | None,
    today: date | None,
    log_path,
) -> dict:
    """Validate inputs and run the multi-year fetch.

    Raises:
        ValueError: On a bad MM-DD or a non-positive year count.
    """
    if years < 1:
        raise ValueError(f"Years must be a positive integer, got {years}")
    parse_mmdd(start_mmdd)
    parse_mmdd(end_mmdd)
    return fetch_multi_year(
        location, start_mmdd, end_mmdd, years,
        fetch=fetch, pacer=pacer, today=today, log_path=log_path,
    )


def climate_normals(
    location: str,
    date_mmdd: str,
    years: int = 10,
    fetch: HistoricalFetch = fetch_historical,
    pacer: Pacer | None = None,
    today: date | None = None,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Climate normals for a calendar day, smoothed over a ±15 day window.

    All days in the window across all sampled years are pooled before
    computing means (every metric), the standard deviation and the
    10/25/50/75/90th percentiles (average temperature only).

    Returns dict with keys:
        success, location, date, years_analyzed, sample_size,
        normals: {temp_avg, temp_max, temp_min, temp_std_dev,
                  precipitation, humidity,
                  percentiles: {temp10, temp25, temp50, temp75, temp90}}
    """
    try:
        start = shift_mmdd(date_mmdd, -NORMALS_WINDOW_DAYS)
        end = shift_mmdd(date_mmdd, NORMALS_WINDOW_DAYS)
        dataset = _collect(location, start, end, years, fetch, pacer, today, log_path)
    except ValueError as e:
        return _failure(str(e))

    if not dataset["success"]:
        return _failure(FETCH_FAILED, errors=dataset["errors"])

    days = flatten(dataset)
    temps     = present(d.get("temp_avg")      for d in days)
    temp_maxs = present(d.get("temp_max")      for d in days)
    temp_mins = present(d.get("temp_min")      for d in days)
    precips   = present(d.get("precipitation") for d in days)
    humidity  = present(d.get("humidity")      for d in days)

    return {
        "success":        True,
        "location":       dataset["location"],
        "date":           date_mmdd,
        "years_analyzed": dataset["years"],
        "sample_size":    len(days),
        "normals": {
            "temp_avg":      mean(temps),
            "temp_max":      mean(temp_maxs),
            "temp_min":      mean(temp_mins),
            "temp_std_dev":  std_dev(temps),
            "precipitation": mean(precips),
            "humidity":      mean(humidity),
            "percentiles": {
                f"temp{p}": percentile(temps, p) for p in PERCENTILES
            },
        },
    }


def _extreme_entry(days: list[dict], key: str, pick, value_name: str) -> dict:
    """Return {value_name, year, date} for the first day holding the extreme `key`.

    `pick` is max or min; both return the first extreme encountered, so ties
    resolve to the most recent year.
    """
    candidates = [d for d in days if d.get(key) is not None]
    if not candidates:
        return {value_name: None, "year": None, "date": None}
    best = pick(candidates, key=lambda d: d[key])
    return {value_name: best[key], "year": best["year"], "date": best["date"]}


def record_temperatures(
    location: str,
    start_mmdd: str,
    end_mmdd: str,
    years: int = 10,
    fetch: HistoricalFetch = fetch_historical,
    pacer: Pacer | None = None,
    today: date | None = None,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Record high/low and average high/low per calendar day in a window.

    Days are grouped by their MM-DD across all sampled years; one entry is
    produced per MM-DD actually present in the data, in first-seen order.

    Returns dict with keys:
        success, location, years_analyzed,
        records: list of {date (MM-DD), record_high, record_low, avg_high, avg_low}
        where record_high/record_low are {temperature, year, date}.
    """
    try:
        dataset = _collect(location, start_mmdd, end_mmdd, years, fetch, pacer, today, log_path)
    except ValueError as e:
        return _failure(str(e))

    if not dataset["success"]:
        return _failure(FETCH_FAILED, errors=dataset["errors"])

    groups: dict[str, list[dict]] = {}
    for day in flatten(dataset):
        groups.setdefault(day["date"][5:10], []).append(day)

    records = []
    for month_day, days in groups.items():
        records.append({
            "date":        month_day,
            "record_high": _extreme_entry(days, "temp_max", max, "temperature"),
            "record_low":  _extreme_entry(days, "temp_min", min, "temperature"),
            "avg_high":    mean(present(d.get("temp_max") for d in days)),
            "avg_low":     mean(present(d.get("temp_min") for d in days)),
        })

    return {
        "success":        True,
        "location":       dataset["location"],
        "years_analyzed": dataset["years"],
        "records":        records,
    }


def _diff(forecast_value: float | None, normal_value: float | None) -> float | None:
    if forecast_value is None or normal_value is None:
        return None
    return forecast_value - normal_value


def _above(forecast_value: float | None, normal_value: float | None) -> bool:
    diff = _diff(forecast_value, normal_value)
    return diff is not None and diff > 0


def compare_forecast_to_historical(
    location: str,
    forecast_days: list[dict],
    years: int = 10,
    fetch: HistoricalFetch = fetch_historical,
    pacer: Pacer | None = None,
    forecast_pacer: Pacer | None = None,
    today: date | None = None,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Compare each forecast day with the climate normals for its calendar date.

    Days whose normals cannot be computed are left out of `comparisons` and
    logged; they do not fail the call. isWarmer/isCooler are strict, so a
    forecast exactly at normal is neither.

    Args:
        location: Location string.
        forecast_days: Daily records with date ('YYYY-MM-DD'), temp_avg,
            temp_max, temp_min and precipitation.
        years: Lookback years for each normals calculation.
        fetch: Historical collaborator.
        pacer: Pacing between yearly fetches inside each normals call.
        forecast_pacer: Pacing between forecast days (default 0.2s).
        today: Reference date for the lookback.
        log_path: Log file for skipped days and failed yearly fetches.

    Returns dict with keys:
        success, location, comparisons: list of
        {date, forecast, historical (normals dict), comparison}
    """
    if not forecast_days:
        return _failure("No forecast data provided")
    if years < 1:
        return _failure(f"Years must be a positive integer, got {years}")
    if forecast_pacer is None:
        forecast_pacer = FixedDelayPacer(DEFAULT_FORECAST_DELAY)

    comparisons = []
    for forecast in paced(forecast_days, forecast_pacer):
        forecast_date = str(forecast.get("date") or "")
        normals = climate_normals(
            location, forecast_date[5:10], years,
            fetch=fetch, pacer=pacer, today=today, log_path=log_path,
        )
        if not normals["success"]:
            log_message(
                f"Skipping forecast day {forecast_date or '?'}: {normals['error']}",
                level="WARNING",
                log_path=log_path,
            )
            continue

        normal = normals["normals"]
        predicted = {
            "temp_max":      forecast.get("temp_max"),
            "temp_min":      forecast.get("temp_min"),
            "temp_avg":      forecast.get("temp_avg"),
            "precipitation": forecast.get("precipitation"),
        }
        comparisons.append({
            "date":       forecast_date,
            "forecast":   predicted,
            "historical": normal,
            "comparison": {
                "temp_diff":             _diff(predicted["temp_avg"], normal["temp_avg"]),
                "temp_max_diff":         _diff(predicted["temp_max"], normal["temp_max"]),
                "temp_min_diff":         _diff(predicted["temp_min"], normal["temp_min"]),
                "precip_diff":           _diff(predicted["precipitation"], normal["precipitation"]),
                "is_warmer_than_normal": _above(predicted["temp_avg"], normal["temp_avg"]),
                "is_cooler_than_normal": _above(normal["temp_avg"], predicted["temp_avg"]),
                "is_wetter_than_normal": _above(predicted["precipitation"], normal["precipitation"]),
            },
        })

    return {
        "success":     True,
        "location":    location,
        "comparisons": comparisons,
    }


def this_day_in_history(
    location: str,
    date_mmdd: str | None = None,
    years: int = 10,
    fetch: HistoricalFetch = fetch_historical,
    pacer: Pacer | None = None,
    today: date | None = None,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Weather on one calendar day across the sampled years.

    `date_mmdd` defaults to today's date.

    Returns dict with keys:
        success, location, date, years_analyzed,
        records: {high_temperature, low_temperature, max_precipitation}
            each {value, year, date},
        averages: {temp, temp_max, temp_min, precipitation},
        all_years: one record per year, most recent first
    """
    if date_mmdd is None:
        date_mmdd = today_mmdd(today)
    try:
        dataset = _collect(location, date_mmdd, date_mmdd, years, fetch, pacer, today, log_path)
    except ValueError as e:
        return _failure(str(e))

    if not dataset["success"]:
        return _failure(FETCH_FAILED, errors=dataset["errors"])

    # One-day window: the first record of each year is that year's sample
    all_years = sorted(
        ({**entry["data"][0], "year": entry["year"]} for entry in dataset["data"]),
        key=lambda d: d["year"],
        reverse=True,
    )

    return {
        "success":        True,
        "location":       dataset["location"],
        "date":           date_mmdd,
        "years_analyzed": dataset["years"],
        "records": {
            "high_temperature":  _extreme_entry(all_years, "temp_max", max, "value"),
            "low_temperature":   _extreme_entry(all_years, "temp_min", min, "value"),
            "max_precipitation": _extreme_entry(all_years, "precipitation", max, "value"),
        },
        "averages": {
            "temp":          mean(present(d.get("temp_avg") for d in all_years)),
            "temp_max":      mean(present(d.get("temp_max") for d in all_years)),
            "temp_min":      mean(present(d.get("temp_min") for d in all_years)),
            "precipitation": mean(present(d.get("precipitation") for d in all_years)),
        },
        "all_years": all_years,
    }


def temperature_distribution(samples: list[float], bin_size: int = DEFAULT_BIN_SIZE) -> list[dict]:
    """Histogram of temperature samples in fixed-width bins.

    Bins run from floor(min) to ceil(max) on `bin_size` boundaries, every bin
    present even when empty, labelled by their lower bound and sorted
    ascending. Probabilities are percentages of the sample count.
    """
    if not samples:
        return []
    low = math.floor(min(samples) / bin_size) * bin_size
    high = math.ceil(max(samples) / bin_size) * bin_size

    counts = {edge: 0 for edge in range(low, high + 1, bin_size)}
    for value in samples:
        counts[math.floor(value / bin_size) * bin_size] += 1

    total = len(samples)
    return [
        {
            "temperature": float(edge),
            "count":       counts[edge],
            "probability": counts[edge] / total * 100,
        }
        for edge in sorted(counts)
    ]


def temperature_probability(
    location: str,
    start_mmdd: str,
    end_mmdd: str,
    years: int = 10,
    fetch: HistoricalFetch = fetch_historical,
    pacer: Pacer | None = None,
    today: date | None = None,
    bin_size: int = DEFAULT_BIN_SIZE,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Probability distribution of daily average temperature over a window.

    Returns dict with keys:
        success, location, years_analyzed, total_data_points,
        distribution: list of {temperature, count, probability},
        statistics: {mean, median, std_dev, min, max}
    """
    if bin_size < 1:
        return _failure(f"Bin size must be a positive integer, got {bin_size}")
    try:
        dataset = _collect(location, start_mmdd, end_mmdd, years, fetch, pacer, today, log_path)
    except ValueError as e:
        return _failure(str(e))

    if not dataset["success"]:
        return _failure(FETCH_FAILED, errors=dataset["errors"])

    samples = present(d.get("temp_avg") for d in flatten(dataset))
    if not samples:
        return _failure("No temperature data available")

    return {
        "success":           True,
        "location":          dataset["location"],
        "years_analyzed":    dataset["years"],
        "total_data_points": len(samples),
        "distribution":      temperature_distribution(samples, bin_size),
        "statistics": {
            "mean":    mean(samples),
            "median":  percentile(samples, 50),
            "std_dev": std_dev(samples),
            "min":     min(samples),
            "max":     max(samples),
        },
    }
