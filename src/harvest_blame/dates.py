"""Date helpers: relative date expressions and inclusive day ranges."""

import datetime
import logging
import re
from collections.abc import Iterator

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# Date expression parsing
# ------------------------------------------------------------------

_NAMED_OFFSETS = {
    "today": 0,
    "now": 0,
    "yesterday": -1,
    "tomorrow": 1,
}

_UNIT_DAYS = {"day": 1, "week": 7}

# "3 days ago", "1 week ago"
_AGO_RE = re.compile(r"^(\d+)\s+(day|week)s?\s+ago$")

# "-7 days", "+1 week", "2 days"
_OFFSET_RE = re.compile(r"^([+-]?)\s*(\d+)\s+(day|week)s?$")


def parse_date_expression(
    text: str,
    today: datetime.date | None = None,
) -> datetime.date | None:
    """Parse an absolute or relative date expression.

    Recognised formats:

    * ``"today"`` / ``"yesterday"`` / ``"tomorrow"``
    * ``"N days ago"`` / ``"N weeks ago"``
    * signed offsets such as ``"-7 days"`` or ``"+1 week"``
    * ISO format ``YYYY-MM-DD``
    * Slash-separated ``dd/mm/yyyy``

    Relative expressions are resolved against *today* (defaults to the
    local date).  Returns ``None`` when the string cannot be parsed.

    Examples::

        >>> parse_date_expression("-2 days", datetime.date(2024, 1, 3))
        datetime.date(2024, 1, 1)
        >>> parse_date_expression("2024-01-03")
        datetime.date(2024, 1, 3)
    """
    if not text:
        return None

    expr = " ".join(text.strip().lower().split())
    if today is None:
        today = datetime.date.today()

    if expr in _NAMED_OFFSETS:
        return today + datetime.timedelta(days=_NAMED_OFFSETS[expr])

    match = _AGO_RE.match(expr)
    if match:
        days = int(match.group(1)) * _UNIT_DAYS[match.group(2)]
        return today - datetime.timedelta(days=days)

    match = _OFFSET_RE.match(expr)
    if match:
        days = int(match.group(2)) * _UNIT_DAYS[match.group(3)]
        if match.group(1) == "-":
            days = -days
        return today + datetime.timedelta(days=days)

    try:
        return datetime.date.fromisoformat(expr)
    except ValueError:
        pass

    try:
        return datetime.datetime.strptime(expr, "%d/%m/%Y").date()
    except ValueError:
        pass

    logger.debug("Could not parse date expression: %r", text)
    return None


# ------------------------------------------------------------------
# Day ranges
# ------------------------------------------------------------------

def iter_days(
    start: datetime.date,
    end: datetime.date,
) -> Iterator[datetime.date]:
    """Yield every calendar day from *start* to *end*, both inclusive."""
    day = start
    one_day = datetime.timedelta(days=1)
    while day <= end:
        yield day
        day += one_day
