"""
Ground transport (bus/train) confirmation extractors.

FlixBus invoices repeat the whole trip once per passenger, so only the
first departure/arrival pair is used and exactly one leg is returned.
"""

import re
import logging

from .normalize import join_datetime, normalize_time, sum_amounts, try_parse_date_phrase
from .records import ParsedGroundTransport

logger = logging.getLogger(__name__)

_FLIX_BOOKING_PATTERN = re.compile(r'Booking number[:\s]*#?(\d+)', re.IGNORECASE)
_FLIX_DATETIME_PATTERN = re.compile(r'(\d{2}/\d{2}/\d{4}),?\s+(\d{1,2}:\d{2}\s*[ap]m)', re.IGNORECASE)
_FLIX_TOTAL_PATTERN = re.compile(r'\bTotal\s+\$?\s*([\d,]+\.?\d*)', re.IGNORECASE)
_FLIX_SEAT_PATTERN = re.compile(r'Seat(?: number)?:[ \t]*([^\n]+)', re.IGNORECASE)

# Characters following the arrival timestamp that may hold the destination
_DESTINATION_WINDOW = 100


def _first_place_line(chunk, skip_words=()):
    """First line that looks like a place name rather than fare noise."""
    for line in chunk.split('\n'):
        line = line.strip()
        if len(line) <= 2:
            continue
        if '$' in line or '%' in line:
            continue
        if any(word in line for word in skip_words):
            continue
        return line
    return None


def _stamp_to_datetime(match):
    # MM/DD/YYYY, US order
    date_str = try_parse_date_phrase(match.group(1))
    if date_str is None:
        return None
    return join_datetime(date_str, normalize_time(match.group(2)))


def extract_flixbus_trips(text):
    """Extract the bus leg from a FlixBus booking confirmation.

    Every "Total <amount>" in the document is added up, including the
    per-passenger lines, so the cost is the sum of all fare lines printed.

    Returns:
        List with at most one ParsedGroundTransport
    """
    stamps = list(_FLIX_DATETIME_PATTERN.finditer(text))
    if len(stamps) < 2:
        logger.debug(f"FlixBus: need 2 date/time tokens, found {len(stamps)}")
        return []
    first, second = stamps[0], stamps[1]

    timestamps = [_stamp_to_datetime(first), _stamp_to_datetime(second)]

    origin = _first_place_line(text[first.end():second.start()])
    destination = _first_place_line(
        text[second.end():second.end() + _DESTINATION_WINDOW],
        skip_words=('COUNTRY',),
    )

    booking_match = _FLIX_BOOKING_PATTERN.search(text)
    seat_match = _FLIX_SEAT_PATTERN.search(text)
    total = sum_amounts(_FLIX_TOTAL_PATTERN.findall(text))

    logger.debug(f"FlixBus: {origin} -> {destination}, {timestamps}, total={total}")
    return [ParsedGroundTransport(
        mode="bus",
        operator="FlixBus",
        service_number="",
        origin=origin,
        destination=destination,
        departure_datetime=timestamps[0],
        arrival_datetime=timestamps[1],
        confirmation_number=booking_match.group(1) if booking_match else None,
        seat_info=seat_match.group(1).strip() if seat_match else None,
        cost_amount=total,
        cost_currency="USD" if total is not None else None,
    )]
