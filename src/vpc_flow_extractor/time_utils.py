"""
Run date utilities for naming output objects.
"""

from datetime import date, datetime
from typing import Final, Optional

from .errors import ConfigurationError

TIMESTAMP_PLACEHOLDER: Final[str] = "[[timestamp]]"


def format_run_timestamp(run_date: Optional[date] = None) -> str:
    """
    Format a run date as ``day-month-year`` without zero padding.

    9 March 2024 becomes ``9-3-2024``. Defaults to today's local date.
    """
    run_date = run_date or date.today()
    return f"{run_date.day}-{run_date.month}-{run_date.year}"


def resolve_destination_key(template: str, stamp: str) -> str:
    """Replace every ``[[timestamp]]`` placeholder in a key template."""
    return template.replace(TIMESTAMP_PLACEHOLDER, stamp)


def parse_run_date(value: str) -> date:
    """
    Parse a run date override.

    Accepts:
    - ISO date, e.g. ``2024-03-09``
    - ISO datetime, e.g. ``2024-03-09T17:30:00Z`` (only the date part is kept)
    """
    value = value.strip()
    if not value:
        raise ConfigurationError("Run date cannot be empty")

    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ConfigurationError(f"Invalid run date format: {value}")
