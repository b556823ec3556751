# Project: climate-stats
# Owner: GreenUnicorn
"""
serialize.py — JSON wire payloads for climate results.

Results are built with snake_case keys; the dashboard frontend expects
camelCase (yearsAnalyzed, recordHigh, highTemperature, isWarmerThanNormal ...).
"""

import json
from datetime import date


def camel_case(key: str) -> str:
    """Convert a snake_case key to camelCase: 'temp_std_dev' -> 'tempStdDev'."""
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_wire(value):
    """Recursively camelCase dict keys and turn dates into ISO strings."""
    if isinstance(value, dict):
        return {
            camel_case(k) if isinstance(k, str) else k: to_wire(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_json(result: dict, indent: int | None = None) -> str:
    """Serialise a climate result to a JSON string.

    Raises:
        ValueError: If a NaN or infinity slipped into the result.
    """
    return json.dumps(to_wire(result), indent=indent, allow_nan=False)
