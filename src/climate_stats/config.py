# Project: climate-stats
# Owner: GreenUnicorn
"""
config.py — Load and validate the TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The config path defaults to "config.toml" in the current working directory,
but can be overridden for testing.
"""

import tomllib
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("config.toml")

REQUIRED_KEYS = {
    "analysis": ("years",),
    "pacing":   ("fetch_delay", "forecast_delay"),
    "log":      ("path",),
}


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load and validate a TOML configuration file.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict of configuration values. The optional [visual_crossing]
        section is always present (possibly empty) in the result.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If required keys or sections are missing or invalid.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and adjust it."
        )

    with open(path, "rb") as f:
        config = tomllib.load(f)

    _validate(config)
    config.setdefault("visual_crossing", {})
    return config


def _validate(config: dict) -> None:
    """Validate that all required config sections and keys are present.

    Expected config schema::

        [visual_crossing]           # optional
        api_key  = <str>            # falls back to VISUAL_CROSSING_API_KEY
        base_url = <str>

        [analysis]
        years    = <int>            # lookback years, >= 1
        location = <str>            # optional default location

        [pacing]
        fetch_delay    = <float>    # seconds between yearly fetches
        forecast_delay = <float>    # seconds between forecast days

        [log]
        path = <str>                # relative or absolute path to the log file

    Args:
        config: Parsed TOML config dict.

    Raises:
        ValueError: If any required section or key is absent or invalid.
    """
    for section, keys in REQUIRED_KEYS.items():
        if section not in config:
            raise ValueError(f"Missing required config section: [{section}]")
        for key in keys:
            if key not in config[section]:
                raise ValueError(f"Missing required config key: [{section}].{key}")

    years = config["analysis"]["years"]
    if isinstance(years, bool) or not isinstance(years, int) or years < 1:
        raise ValueError(f"[analysis].years must be a positive integer, got {years!r}")

    for key in ("fetch_delay", "forecast_delay"):
        delay = config["pacing"][key]
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
            raise ValueError(f"[pacing].{key} must be a non-negative number, got {delay!r}")
