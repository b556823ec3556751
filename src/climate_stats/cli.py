# Project: climate-stats
# Owner: GreenUnicorn
"""
cli.py — Command-line interface for climate-stats.

Commands:
  climate-stats normals --date MM-DD               — climate normals for a day
  climate-stats records --start MM-DD --end MM-DD  — record highs/lows per day
  climate-stats compare [--days N]                 — forecast vs. normals
  climate-stats this-day [--date MM-DD]            — this day in history
  climate-stats probability --start MM-DD --end MM-DD
                                                   — temperature distribution

Every command accepts --location, --years, --config and --json.
"""

import argparse
from functools import partial
from pathlib import Path

from climate_stats.climate import (
    climate_normals,
    compare_forecast_to_historical,
    record_temperatures,
    temperature_probability,
    this_day_in_history,
)
from climate_stats.config import DEFAULT_CONFIG_PATH, load_config
from climate_stats.history import VISUAL_CROSSING_URL, fetch_historical
from climate_stats.pacing import FixedDelayPacer
from climate_stats.report import (
    render_comparisons,
    render_distribution,
    render_error,
    render_normals,
    render_records,
    render_this_day,
)
from climate_stats.serialize import to_json
from climate_stats.weather import fetch_daily_forecast


class Context:
    """Resolved settings shared by every command."""

    def __init__(self, args, config: dict):
        vc = config["visual_crossing"]
        self.api_key = vc.get("api_key") or None
        self.base_url = vc.get("base_url") or VISUAL_CROSSING_URL
        self.years = args.years if args.years is not None else config["analysis"]["years"]
        self.location = args.location or config["analysis"].get("location")
        self.log_path = Path(config["log"]["path"])
        self.fetch = partial(
            fetch_historical,
            api_key=self.api_key, base_url=self.base_url, log_path=self.log_path,
        )
        self.pacer = FixedDelayPacer(config["pacing"]["fetch_delay"])
        self.forecast_pacer = FixedDelayPacer(config["pacing"]["forecast_delay"])


def cmd_normals(args, ctx: Context) -> dict:
    return climate_normals(
        ctx.location, args.date, ctx.years, fetch=ctx.fetch, pacer=ctx.pacer,
        log_path=ctx.log_path,
    )


def cmd_records(args, ctx: Context) -> dict:
    return record_temperatures(
        ctx.location, args.start, args.end, ctx.years, fetch=ctx.fetch, pacer=ctx.pacer,
        log_path=ctx.log_path,
    )


def cmd_compare(args, ctx: Context) -> dict:
    try:
        forecast = fetch_daily_forecast(
            ctx.location, days=args.days,
            api_key=ctx.api_key, base_url=ctx.base_url, log_path=ctx.log_path,
        )
    except (RuntimeError, ValueError) as e:
        return {"success": False, "error": f"Forecast fetch failed: {e}"}
    return compare_forecast_to_historical(
        ctx.location, forecast, ctx.years,
        fetch=ctx.fetch, pacer=ctx.pacer, forecast_pacer=ctx.forecast_pacer,
        log_path=ctx.log_path,
    )


def cmd_this_day(args, ctx: Context) -> dict:
    return this_day_in_history(
        ctx.location, args.date, ctx.years, fetch=ctx.fetch, pacer=ctx.pacer,
        log_path=ctx.log_path,
    )


def cmd_probability(args, ctx: Context) -> dict:
    return temperature_probability(
        ctx.location, args.start, args.end, ctx.years,
        fetch=ctx.fetch, pacer=ctx.pacer, bin_size=args.bin_size, log_path=ctx.log_path,
    )


COMMANDS = {
    "normals":     (cmd_normals, render_normals),
    "records":     (cmd_records, render_records),
    "compare":     (cmd_compare, render_comparisons),
    "this-day":    (cmd_this_day, render_this_day),
    "probability": (cmd_probability, render_distribution),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climate-stats",
        description="Climate normals, records and distributions from Visual Crossing history",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--location",
        metavar="PLACE",
        default=None,
        help='Location understood by Visual Crossing, e.g. "Seattle,WA". Default: [analysis].location',
    )
    common.add_argument(
        "--years",
        metavar="N",
        type=int,
        default=None,
        help="Number of prior years to analyse. Default: [analysis].years",
    )
    common.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to config.toml",
    )
    common.add_argument("--json", action="store_true", help="Print the JSON payload instead of a report")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    p_normals = subparsers.add_parser("normals", parents=[common], help="Climate normals for a calendar day")
    p_normals.add_argument("--date", metavar="MM-DD", required=True)

    p_records = subparsers.add_parser("records", parents=[common], help="Record temperatures for a date window")
    p_records.add_argument("--start", metavar="MM-DD", required=True)
    p_records.add_argument("--end", metavar="MM-DD", required=True)

    p_compare = subparsers.add_parser("compare", parents=[common], help="Compare the forecast with normals")
    p_compare.add_argument("--days", metavar="N", type=int, default=7, help="Forecast days (1-15). Default: 7")

    p_day = subparsers.add_parser("this-day", parents=[common], help="This day in history")
    p_day.add_argument("--date", metavar="MM-DD", default=None, help="Default: today")

    p_prob = subparsers.add_parser("probability", parents=[common], help="Temperature probability distribution")
    p_prob.add_argument("--start", metavar="MM-DD", required=True)
    p_prob.add_argument("--end", metavar="MM-DD", required=True)
    p_prob.add_argument("--bin-size", metavar="DEG", type=int, default=5, help="Bin width in °C. Default: 5")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    ctx = Context(args, config)
    if not ctx.location:
        print("[error] No location given. Use --location or set [analysis].location.")
        raise SystemExit(1)

    run, render = COMMANDS[args.command]
    result = run(args, ctx)

    if args.json:
        print(to_json(result, indent=2))
    else:
        print(render(result) if result["success"] else render_error(result))

    if not result["success"]:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
