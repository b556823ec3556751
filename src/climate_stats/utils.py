# Project: climate-stats
# Owner: GreenUnicorn
"""
utils.py — Shared utilities: retry logic, diagnostics logging, MM-DD date math.
"""

import sys
import time
from collections.abc import Callable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

DEFAULT_LOG_PATH = Path("logs/climate_stats.log")
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 5

# Leap year used for all MM-DD arithmetic so 02-29 is always a valid day
REFERENCE_YEAR = 2020


def with_retry(
    fn: Callable[..., Any],
    *args: Any,
    label: str = "API call",
    log_path: Path = DEFAULT_LOG_PATH,
    **kwargs: Any,
) -> Any:
    """Call a function up to MAX_ATTEMPTS times, retrying on any exception.

    Args:
        fn: Callable to invoke.
        *args: Positional arguments forwarded to fn.
        label: Human-readable name for the call, used in warning messages.
        log_path: Path to the log file for recording final failures.
        **kwargs: Keyword arguments forwarded to fn.

    Returns:
        The return value of fn on success.

    Raises:
        RuntimeError: If all MAX_ATTEMPTS attempts raise exceptions.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            if attempt < MAX_ATTEMPTS:
                log_message(
                    f"{label} failed (attempt {attempt}/{MAX_ATTEMPTS}): "
                    f"{e}. Retrying in {RETRY_DELAY_SECONDS}s...",
                    level="WARNING",
                    log_path=None,
                )
                time.sleep(RETRY_DELAY_SECONDS)
            else:
                msg = f"All {MAX_ATTEMPTS} attempts failed for {label}: {e}"
                log_message(msg, level="ERROR", log_path=log_path)
                raise RuntimeError(msg) from e


def log_message(
    message: str,
    level: str = "INFO",
    log_path: Path | None = DEFAULT_LOG_PATH,
) -> None:
    """Print a ``[climate]`` diagnostic to stderr and append it to the log file.

    Args:
        message: Text to log.
        level: Severity label written into the log line.
        log_path: Destination log file, or None to skip the file.
    """
    print(f"[climate] {message}", file=sys.stderr)
    if log_path is None:
        return
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{timestamp} [{level}] {message}\n")
    except OSError:
        pass  # Never crash on logging failure


# ─────────────────────────────────────────────────────────────
# MM-DD helpers
# ─────────────────────────────────────────────────────────────

def parse_mmdd(mmdd: str) -> tuple[int, int]:
    """Validate an 'MM-DD' string and return (month, day).

    Raises:
        ValueError: If the string is not a real calendar day (02-29 allowed).
    """
    try:
        parsed = datetime.strptime(f"{REFERENCE_YEAR}-{mmdd}", "%Y-%m-%d")
    except (TypeError, ValueError):
        raise ValueError(f"Invalid MM-DD date: {mmdd!r}") from None
    return parsed.month, parsed.day


def shift_mmdd(mmdd: str, days: int) -> str:
    """Move an 'MM-DD' date by `days` calendar days in the leap reference year.

    Example: shift_mmdd("03-01", -1) == "02-29"
    """
    month, day = parse_mmdd(mmdd)
    shifted = date(REFERENCE_YEAR, month, day) + timedelta(days=days)
    return shifted.strftime("%m-%d")


def today_mmdd(today: date | None = None) -> str:
    """Return today's date (or `today`) as 'MM-DD'."""
    return (today or date.today()).strftime("%m-%d")


def date_in_year(year: int, mmdd: str) -> date:
    """Build a full date for `mmdd` in `year`, clamping 02-29 to 02-28 in non-leap years."""
    month, day = parse_mmdd(mmdd)
    try:
        return date(year, month, day)
    except ValueError:
        return date(year, month, day - 1)


def window_dates(year: int, start_mmdd: str, end_mmdd: str) -> tuple[date, date]:
    """Return (start, end) dates for an MM-DD window anchored in `year`.

    A window whose end sorts before its start crosses New Year. It ends in
    `year` and starts in the year before, so no part of it falls after `year`.
    """
    start_year = year - 1 if parse_mmdd(end_mmdd) < parse_mmdd(start_mmdd) else year
    return date_in_year(start_year, start_mmdd), date_in_year(year, end_mmdd)
