"""
Flight confirmation extractors.

Two vendor layouts are understood:
1. United-style e-mails: one block per segment ("Flight 1 of 2 UA1234")
   followed by a date line, a time line and an airport line
2. SWISS-style booking pages: an LX flight number, European
   "DD.MM.YYYY - HH:MM" timestamps and a code/city route line

Extractors only return flights whose flight number was actually found.
"""

import re
import logging

from .airlines import airline_for_flight_number
from .airports import city_to_airport_code, is_plausible_airport
from .normalize import (
    join_datetime, normalize_time, parse_amount, split_amount, sum_amounts,
    today_iso, try_parse_date_phrase,
)
from .records import ParsedFlight

logger = logging.getLogger(__name__)


# ============================================================================
# UNITED-STYLE
# ============================================================================

_UNITED_SEGMENT_PATTERN = re.compile(r'Flight\s+\d+\s+of\s+\d+\s+([A-Z][A-Z0-9]\d{1,4})\b')
_UNITED_DATE_PATTERN = re.compile(r'([A-Z][a-z]{2}, [A-Z][a-z]{2} \d{1,2}, \d{4})')
_UNITED_TIME_PATTERN = re.compile(r'(\d{1,2}:\d{2}\s*[AP]M)')
_UNITED_AIRPORT_PATTERN = re.compile(r'\(([A-Z]{3})\)')
_UNITED_CONF_INLINE = re.compile(r'(?i:confirmation number):[ \t]*([A-Z0-9]{6})\b')
_UNITED_CONF_LABEL = re.compile(r'(?i:confirmation number):?$')
_UNITED_CONF_CODE = re.compile(r'^[A-Z0-9]{6}$')
_UNITED_TOTAL_PATTERN = re.compile(r'Total:\s*(?:.*?[+\s])?([\d,]+\.\d{2})\s*USD', re.IGNORECASE)


def _united_confirmation(lines):
    """Find the 6-character record locator, inline or on the following line."""
    for i, line in enumerate(lines):
        match = _UNITED_CONF_INLINE.search(line)
        if match:
            return match.group(1)
        if _UNITED_CONF_LABEL.search(line) and i + 1 < len(lines):
            candidate = lines[i + 1]
            if _UNITED_CONF_CODE.match(candidate):
                return candidate
    return None


def _united_datetime(date_text, time_text):
    """Returns (timestamp, defaulted)."""
    date_str = try_parse_date_phrase(date_text)
    if date_str is None:
        return join_datetime(today_iso(), normalize_time(time_text)), True
    return join_datetime(date_str, normalize_time(time_text)), False


def extract_united_flights(text):
    """Extract every segment from a United-style itinerary.

    A segment needs its three following lines to carry two dates, two
    times and two parenthesized airport codes; otherwise it is dropped.
    The document total is split evenly over the segments that survive.

    Args:
        text: Raw confirmation text

    Returns:
        List of ParsedFlight
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    confirmation = _united_confirmation(lines)

    segments = []
    for i, line in enumerate(lines):
        match = _UNITED_SEGMENT_PATTERN.search(line)
        if not match:
            continue
        if i + 3 >= len(lines):
            logger.debug(f"Segment {match.group(1)} is cut off, skipping")
            continue

        dates = _UNITED_DATE_PATTERN.findall(lines[i + 1])
        times = _UNITED_TIME_PATTERN.findall(lines[i + 2])
        airports = _UNITED_AIRPORT_PATTERN.findall(lines[i + 3])
        if len(dates) < 2 or len(times) < 2 or len(airports) < 2:
            logger.debug(f"Segment {match.group(1)} incomplete: dates={dates} times={times} airports={airports}")
            continue

        segments.append((match.group(1), dates, times, airports))

    if not segments:
        return []

    total = sum_amounts(_UNITED_TOTAL_PATTERN.findall(text))
    shares = split_amount(total, len(segments)) if total is not None else [None] * len(segments)

    flights = []
    for (flight_number, dates, times, airports), share in zip(segments, shares):
        defaulted = set()
        departure, dep_defaulted = _united_datetime(dates[0], times[0])
        arrival, arr_defaulted = _united_datetime(dates[1], times[1])
        if dep_defaulted:
            defaulted.add('departure_datetime')
        if arr_defaulted:
            defaulted.add('arrival_datetime')

        flights.append(ParsedFlight(
            airline=airline_for_flight_number(flight_number, default="United Airlines"),
            flight_number=flight_number,
            origin=airports[0],
            destination=airports[1],
            departure_datetime=departure,
            arrival_datetime=arrival,
            confirmation_number=confirmation,
            cost_amount=share,
            cost_currency="USD" if share is not None else None,
            defaulted=frozenset(defaulted),
        ))

    logger.debug(f"United: {len(flights)} segment(s), confirmation={confirmation}, total={total}")
    return flights


# ============================================================================
# SWISS-STYLE
# ============================================================================

_SWISS_FLIGHT_PATTERN = re.compile(r'\bLX\s*(\d{3,4})\b')
_SWISS_BOOKING_PATTERN = re.compile(r'Booking code[:\s]*([A-Z0-9]{6})\b')
_SWISS_DATETIME_PATTERN = re.compile(r'(\d{2})\.(\d{2})\.(\d{4})\s*-?\s*(\d{2}:\d{2})')
_SWISS_DATE_PATTERN = re.compile(r'(\d{2})\.(\d{2})\.(\d{4})')
_SWISS_ROUTE_PATTERN = re.compile(
    r'\b([A-Z]{3})\s+([A-Z]{3})\s+([A-Za-z\s]+?)\s+([A-Za-z\s]+?)\s+(?i:Manage booking|Duration)'
)
_SWISS_USD_PATTERN = re.compile(r'(?:Converted final price|USD)\s*(?:USD)?\s*([\d,]+\.\d{2})')
_SWISS_CHF_PATTERN = re.compile(r'Final price\s*CHF\s*([\d,]+\.\d{2})')
_CODE_PATTERN = re.compile(r'\b([A-Z]{3})\b')
_WORD_PATTERN = re.compile(r'[^\W\d_]+')

# How far from an airport code to look for the city it belongs to
_CITY_WINDOW = 40


def _swiss_date(day, month, year):
    """Day, month and year strings to YYYY-MM-DD, or None if not a real date."""
    return try_parse_date_phrase(f"{year}-{month}-{day}")


def _route_from_city_names(text):
    """Find airport codes that sit next to the name of their own city.

    Returns:
        (origin, destination) or None if fewer than two such codes exist
    """
    found = []
    for match in _CODE_PATTERN.finditer(text):
        code = match.group(1)
        if code in found or not is_plausible_airport(code):
            continue
        nearby = text[max(0, match.start() - _CITY_WINDOW):match.end() + _CITY_WINDOW]
        words = _WORD_PATTERN.findall(nearby)
        # Two-word cities such as "Hong Kong" or "New York"
        candidates = words + [f"{a} {b}" for a, b in zip(words, words[1:])]
        if any(city_to_airport_code(candidate) == code for candidate in candidates):
            found.append(code)
        if len(found) == 2:
            return found[0], found[1]
    return None


def _swiss_route(text):
    match = _SWISS_ROUTE_PATTERN.search(text)
    if match and is_plausible_airport(match.group(1)) and is_plausible_airport(match.group(2)):
        logger.debug(f"SWISS route line: {match.group(1)} -> {match.group(2)}")
        return match.group(1), match.group(2)

    route = _route_from_city_names(text)
    if route:
        logger.debug(f"SWISS route from city names: {route[0]} -> {route[1]}")
    return route


def _swiss_price(text):
    """Returns (amount, currency, notes)."""
    match = _SWISS_USD_PATTERN.search(text)
    if match:
        amount = parse_amount(match.group(1))
        if amount is not None:
            return amount, "USD", ()

    match = _SWISS_CHF_PATTERN.search(text)
    if match:
        amount = parse_amount(match.group(1))
        if amount is not None:
            return amount, "CHF", ("amount in CHF, not converted",)

    return None, None, ()


def extract_swiss_flights(text):
    """Extract the flight from a SWISS-style booking confirmation.

    With two or more "DD.MM.YYYY - HH:MM" timestamps the first is the
    departure and the second the arrival. With fewer, a single record is
    still returned: departure on the first bare date at noon (or today)
    and arrival equal to departure, both flagged as defaulted.

    Returns:
        List with at most one ParsedFlight
    """
    flight_match = _SWISS_FLIGHT_PATTERN.search(text)
    if not flight_match:
        return []
    flight_number = f"LX{flight_match.group(1)}"

    booking_match = _SWISS_BOOKING_PATTERN.search(text)
    confirmation = booking_match.group(1) if booking_match else None

    amount, currency, notes = _swiss_price(text)
    notes = list(notes)

    route = _swiss_route(text)
    if route:
        origin, destination = route
    else:
        origin = destination = None
        notes.append("route not recoverable")

    timestamps = []
    for day, month, year, clock in _SWISS_DATETIME_PATTERN.findall(text):
        date_str = _swiss_date(day, month, year)
        if date_str:
            timestamps.append(join_datetime(date_str, clock))

    defaulted = set()
    if len(timestamps) >= 2:
        departure, arrival = timestamps[0], timestamps[1]
    else:
        departure = None
        for day, month, year in _SWISS_DATE_PATTERN.findall(text):
            date_str = _swiss_date(day, month, year)
            if date_str:
                departure = join_datetime(date_str, "12:00")
                break
        if departure is None:
            departure = join_datetime(today_iso(), "12:00")
        arrival = departure
        defaulted.update({'departure_datetime', 'arrival_datetime'})
        notes.append("departure and arrival times not found")

    logger.debug(f"SWISS: {flight_number} {origin}->{destination} {departure} {arrival}")
    return [ParsedFlight(
        airline="SWISS",
        flight_number=flight_number,
        origin=origin,
        destination=destination,
        departure_datetime=departure,
        arrival_datetime=arrival,
        confirmation_number=confirmation,
        cost_amount=amount,
        cost_currency=currency,
        defaulted=frozenset(defaulted),
        notes=tuple(notes),
    )]
