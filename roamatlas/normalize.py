"""
Shared normalizers for times, dates and amounts.

Every helper here is stateless and total: bad input falls back to a
documented default instead of raising.
"""

import re
import logging
from datetime import datetime, date, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

DEFAULT_TIME = "12:00"
CENTS = Decimal("0.01")


# ============================================================================
# TIMES
# ============================================================================

_TIME_12H_PATTERN = re.compile(r'(\d{1,2}):(\d{2})\s*(am|pm)', re.IGNORECASE)


def normalize_time(text):
    """Convert a 12-hour clock string to 24-hour "HH:MM".

    "1:30PM" -> "13:30", "12:15 am" -> "00:15". Returns "12:00" when no
    time can be found in the text.
    """
    if not text:
        return DEFAULT_TIME

    match = _TIME_12H_PATTERN.search(text)
    if not match:
        return DEFAULT_TIME

    hours = int(match.group(1))
    minutes = match.group(2)
    meridiem = match.group(3).lower()

    if meridiem == 'pm' and hours != 12:
        hours += 12
    elif meridiem == 'am' and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes}"


# ============================================================================
# DATES
# ============================================================================

def today_iso():
    """Today's local date as YYYY-MM-DD."""
    return date.today().isoformat()


def try_parse_date_phrase(text, dayfirst=False):
    """Parse a human date phrase like "Sat, Jun 20, 2026".

    Returns:
        "YYYY-MM-DD" string, or None when dateutil cannot make sense of it
    """
    if not text:
        return None
    try:
        dt = date_parser.parse(text, dayfirst=dayfirst, fuzzy=True,
                               default=datetime(date.today().year, 1, 1))
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Could not parse date phrase '{text}'")
        return None
    return dt.strftime("%Y-%m-%d")


def parse_date_phrase(text, dayfirst=False):
    """Like try_parse_date_phrase, but falls back to today's date."""
    return try_parse_date_phrase(text, dayfirst=dayfirst) or today_iso()


def join_datetime(date_str, time_str):
    """Combine "YYYY-MM-DD" and "HH:MM" into "YYYY-MM-DDTHH:MM:00"."""
    return f"{date_str}T{time_str}:00"


def add_days(date_str, days):
    """Shift a "YYYY-MM-DD" date by a number of days."""
    shifted = date.fromisoformat(date_str) + timedelta(days=days)
    return shifted.isoformat()


# ============================================================================
# AMOUNTS
# ============================================================================

_AMOUNT_NOISE = re.compile(r'[,\s$€£]|CHF|USD', re.IGNORECASE)


def parse_amount(text):
    """Parse a money amount such as "1,234.56" or "$ 98.10".

    Every thousands separator is removed, not only the first one.

    Returns:
        Decimal, or None if the text is not a number
    """
    if text is None:
        return None
    cleaned = _AMOUNT_NOISE.sub('', str(text))
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        logger.debug(f"Could not parse amount '{text}'")
        return None
    if not value.is_finite():
        return None
    return value


def sum_amounts(values):
    """Sum the parseable amounts in values; None if none parsed."""
    total = None
    for value in values:
        amount = parse_amount(value)
        if amount is None:
            continue
        total = amount if total is None else total + amount
    return total


def split_amount(total, parts):
    """Split total into parts rounded to cents that add up to total.

    Each part is the rounded average; the last part takes the residual.
    """
    if parts <= 0:
        return []
    total = Decimal(total).quantize(CENTS, rounding=ROUND_HALF_UP)
    share = (total / parts).quantize(CENTS, rounding=ROUND_HALF_UP)
    shares = [share] * (parts - 1)
    shares.append(total - share * (parts - 1))
    return shares
