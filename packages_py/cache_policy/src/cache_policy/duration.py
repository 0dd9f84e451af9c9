"""
Human readable duration strings ("30 seconds", "2 years") to seconds.
"""
import re
from typing import Dict

from .errors import DurationParseError

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY
SECONDS_PER_MONTH = 30 * SECONDS_PER_DAY
SECONDS_PER_YEAR = 365 * SECONDS_PER_DAY

UNIT_SECONDS: Dict[str, int] = {
    "second": 1,
    "minute": SECONDS_PER_MINUTE,
    "hour": SECONDS_PER_HOUR,
    "day": SECONDS_PER_DAY,
    "week": SECONDS_PER_WEEK,
    "month": SECONDS_PER_MONTH,
    "year": SECONDS_PER_YEAR,
}

_DURATION_RE = re.compile(
    r"\A([0-9]+) (second|minute|hour|day|week|month|year)s?\Z"
)

DURATION_EXAMPLES = (
    "'20 seconds' '4 minutes' '8 hours' '1 day' '8 weeks' '1 month' '1 year'"
)


def parse_duration(value: str) -> int:
    """
    Convert a duration string to a whole number of seconds.

    The accepted form is ``<digits> <unit>`` with exactly one space, where
    unit is second, minute, hour, day, week, month or year (singular or
    plural). Months are 30 days and years 365 days.

    Raises:
        DurationParseError: If the string does not follow that form.
    """
    match = _DURATION_RE.match(value) if isinstance(value, str) else None
    if match is None:
        raise DurationParseError(
            f"The string '{value}' is not formatted properly. "
            f"Examples: {DURATION_EXAMPLES}.",
            value=value,
        )
    amount, unit = match.groups()
    return int(amount) * UNIT_SECONDS[unit]
