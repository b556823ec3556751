# Project: climate-stats
# Owner: GreenUnicorn
"""
report.py — Plain-text rendering of climate results for the terminal.

Uses only the Python standard library (os).
All rendering functions return strings ready to print; missing values
render as N/A.
"""

import os

FALLBACK_TERMINAL_WIDTH: int = 80
BAR_LABEL_RESERVE: int = 30  # characters reserved for label + value outside the bar
SEP = "─" * 62


def fmt(value, unit: str = "", digits: int = 1) -> str:
    """Format an optional number with a unit, e.g. fmt(12.345, '°C') -> '12.3°C'."""
    if value is None:
        return "N/A"
    return f"{value:.{digits}f}{unit}"


def fmt_signed(value, unit: str = "", digits: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value:+.{digits}f}{unit}"


def location_name(result: dict) -> str:
    """Display name for a result's location (resolved address when known)."""
    loc = result.get("location")
    if isinstance(loc, dict):
        return loc.get("address") or "Unknown location"
    return loc or "Unknown location"


def _years_line(result: dict) -> str:
    years = result.get("years_analyzed") or []
    if not years:
        return "no years analysed"
    return f"{len(years)} years analysed ({min(years)}–{max(years)})"


def render_error(result: dict) -> str:
    return f"[error] {result.get('error', 'Unknown error')}"


def render_normals(result: dict) -> str:
    """Render a climate_normals result."""
    if not result["success"]:
        return render_error(result)
    n = result["normals"]
    pct = n["percentiles"]
    lines = [
        f"📍 {location_name(result)} — climate normals for {result['date']}",
        f"   {_years_line(result)}, ±15 day window",
        SEP,
        f"🌡  Average temp:   {fmt(n['temp_avg'], '°C')}  (σ {fmt(n['temp_std_dev'], '°C')})",
        f"🔺  Average high:   {fmt(n['temp_max'], '°C')}",
        f"🔻  Average low:    {fmt(n['temp_min'], '°C')}",
        f"🌧  Precipitation:  {fmt(n['precipitation'], ' mm')}",
        f"💧  Humidity:       {fmt(n['humidity'], '%')}",
        "",
        "    Percentiles:    " + "  ".join(
            f"p{key[4:]} {fmt(value, '°')}" for key, value in pct.items()
        ),
        SEP,
    ]
    return "\n".join(lines)


def render_records(result: dict) -> str:
    """Render a record_temperatures result as a fixed-width table."""
    if not result["success"]:
        return render_error(result)
    lines = [
        f"📍 {location_name(result)} — record temperatures",
        f"   {_years_line(result)}",
        SEP,
        "Day     Record high      Record low       Avg high  Avg low",
        SEP,
    ]
    for r in result["records"]:
        high, low = r["record_high"], r["record_low"]
        lines.append(
            f"{r['date']:<7} "
            f"{fmt(high['temperature'], '°'):>7} ({high['year'] or '—'})  "
            f"{fmt(low['temperature'], '°'):>7} ({low['year'] or '—'})  "
            f"{fmt(r['avg_high'], '°'):>8}  {fmt(r['avg_low'], '°'):>7}"
        )
    lines.append(SEP)
    return "\n".join(lines)


def render_comparisons(result: dict) -> str:
    """Render a compare_forecast_to_historical result."""
    if not result["success"]:
        return render_error(result)
    lines = [
        f"📍 {location_name(result)} — forecast vs. normal",
        SEP,
        "Date        Forecast  Normal   Δ temp   Δ precip  ",
        SEP,
    ]
    for c in result["comparisons"]:
        cmp = c["comparison"]
        if cmp["is_warmer_than_normal"]:
            label = "warmer"
        elif cmp["is_cooler_than_normal"]:
            label = "cooler"
        else:
            label = "normal"
        if cmp["is_wetter_than_normal"]:
            label += ", wetter"
        lines.append(
            f"{c['date']:<11} "
            f"{fmt(c['forecast']['temp_avg'], '°'):>8}  "
            f"{fmt(c['historical']['temp_avg'], '°'):>6}  "
            f"{fmt_signed(cmp['temp_diff'], '°'):>7}  "
            f"{fmt_signed(cmp['precip_diff'], ' mm'):>9}  {label}"
        )
    if not result["comparisons"]:
        lines.append("No forecast days could be compared.")
    lines.append(SEP)
    return "\n".join(lines)


def render_this_day(result: dict) -> str:
    """Render a this_day_in_history result."""
    if not result["success"]:
        return render_error(result)
    rec = result["records"]
    avg = result["averages"]

    def _record(entry: dict, unit: str) -> str:
        if entry["value"] is None:
            return "N/A"
        return f"{fmt(entry['value'], unit)} in {entry['year']}"

    lines = [
        f"📍 {location_name(result)} — this day in history ({result['date']})",
        f"   {_years_line(result)}",
        SEP,
        f"🔥  Record high:     {_record(rec['high_temperature'], '°C')}",
        f"🥶  Record low:      {_record(rec['low_temperature'], '°C')}",
        f"🌧  Wettest:         {_record(rec['max_precipitation'], ' mm')}",
        "",
        f"🌡  Average temp:    {fmt(avg['temp'], '°C')}  "
        f"(high {fmt(avg['temp_max'], '°C')}, low {fmt(avg['temp_min'], '°C')})",
        f"💧  Average precip:  {fmt(avg['precipitation'], ' mm')}",
        SEP,
    ]
    for day in result["all_years"]:
        lines.append(
            f"  {day['year']}  {fmt(day.get('temp_max'), '°'):>6} / {fmt(day.get('temp_min'), '°'):<6}"
            f"  {fmt(day.get('precipitation'), ' mm'):>8}  {day.get('conditions') or ''}"
        )
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────
# Bar chart helpers
# ─────────────────────────────────────────────────────────────

def _bar(value: float, max_value: float, bar_width: int) -> str:
    """Render a single filled/empty bar scaled to bar_width.

    Args:
        value: The data value to represent.
        max_value: The maximum value (maps to full bar width).
        bar_width: Total character width of the bar.

    Returns:
        String of '█' and '░' characters of length bar_width.
    """
    if max_value == 0:
        filled = 0
    else:
        filled = round((value / max_value) * bar_width)
    filled = max(0, min(filled, bar_width))
    return "█" * filled + "░" * (bar_width - filled)


def _default_bar_width() -> int:
    try:
        terminal_width = os.get_terminal_size().columns
    except OSError:
        terminal_width = FALLBACK_TERMINAL_WIDTH
    return max(10, terminal_width - BAR_LABEL_RESERVE)


def render_distribution(result: dict, bar_width: int | None = None) -> str:
    """Render a temperature_probability result as a horizontal bar chart.

    Args:
        result: temperature_probability result dict.
        bar_width: Width of the bar in characters. Auto-detected from terminal if None.
    """
    if not result["success"]:
        return render_error(result)
    if bar_width is None:
        bar_width = _default_bar_width()

    bins = result["distribution"]
    stats = result["statistics"]
    max_prob = max((b["probability"] for b in bins), default=0)
    bin_width = bins[1]["temperature"] - bins[0]["temperature"] if len(bins) > 1 else 0

    lines = [
        f"📍 {location_name(result)} — daily average temperature distribution",
        f"   {_years_line(result)}, {result['total_data_points']} days",
        SEP,
    ]
    for b in bins:
        low = b["temperature"]
        label = f"{low:>5.0f}…{low + bin_width:<3.0f}°C" if bin_width else f"{low:>5.0f}°C"
        bar = _bar(b["probability"], max_prob, bar_width)
        lines.append(f"  {label} │{bar}│ {b['probability']:>5.1f}%")
    lines += [
        SEP,
        f"Mean {fmt(stats['mean'], '°C')}  Median {fmt(stats['median'], '°C')}  "
        f"σ {fmt(stats['std_dev'], '°C')}  Range {fmt(stats['min'], '°C')} to {fmt(stats['max'], '°C')}",
    ]
    return "\n".join(lines)
