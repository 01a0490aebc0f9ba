"""
Car rental confirmation extractors.

Priceline confirmations print the rental period as a short range
("Jun 30 - Jul 7 • Pick-up: 1:30PM") without a year and never state the
counter address, so locations are always returned as empty strings.
"""

import re
import logging
from datetime import date

from .normalize import join_datetime, normalize_time, parse_amount, today_iso, try_parse_date_phrase
from .records import ParsedCarRental

logger = logging.getLogger(__name__)

_MONTHS = r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)'

_PRICELINE_CONF_PATTERN = re.compile(r'Confirmation Number[:\s]+([A-Z0-9]+)', re.IGNORECASE)
_PRICELINE_TRIP_PATTERN = re.compile(r'Trip Number[:\s]+(\d[\d-]*)', re.IGNORECASE)
_PRICELINE_CATEGORY_PATTERN = re.compile(
    r'\b(?:Compact|Economy|Mid-?size|Standard|Full-?size|SUV|Minivan|Luxury|Premium)\b'
    r'(?:[ \t]*(?:Car|SUV|Van)\b)?',
    re.IGNORECASE
)
# Only real month names, so "Day 3 - Day 9" is not read as January
_PRICELINE_RANGE_PATTERN = re.compile(
    rf'\b({_MONTHS})[a-z]*\.?\s+(\d{{1,2}})\s*-\s*({_MONTHS})[a-z]*\.?\s+(\d{{1,2}})\s*[•·]\s*'
    r'Pick-?up[:\s]*(\d{1,2}:\d{2}\s*[AP]M)',
    re.IGNORECASE
)
_PRICELINE_COST_PATTERN = re.compile(r'Total (?:cost|charged)[:\s]*\$?\s*([\d,]+\.?\d{0,2})', re.IGNORECASE)
_YEAR_PATTERN = re.compile(r'\b(20\d{2})\b')


def _rental_dates(match, year):
    """Pickup and dropoff dates for a year-less range.

    A dropoff that falls before the pickup belongs to the next year.
    """
    pickup = try_parse_date_phrase(f"{match.group(1)} {match.group(2)} {year}")
    dropoff = try_parse_date_phrase(f"{match.group(3)} {match.group(4)} {year}")
    if pickup and dropoff and dropoff < pickup:
        dropoff = try_parse_date_phrase(f"{match.group(3)} {match.group(4)} {year + 1}")
    return pickup, dropoff


def extract_priceline_rentals(text):
    """Extract the rental from a Priceline car confirmation.

    Returns:
        List with at most one ParsedCarRental
    """
    conf_match = _PRICELINE_CONF_PATTERN.search(text) or _PRICELINE_TRIP_PATTERN.search(text)
    confirmation = conf_match.group(1) if conf_match else None
    range_match = _PRICELINE_RANGE_PATTERN.search(text)

    if not confirmation and not range_match:
        logger.debug("Priceline: no confirmation or rental period found")
        return []

    category_match = _PRICELINE_CATEGORY_PATTERN.search(text)
    car_type = category_match.group(0).strip() if category_match else "Rental Car"

    defaulted = set()
    pickup = dropoff = None
    if range_match:
        year_match = _YEAR_PATTERN.search(text)
        year = int(year_match.group(1)) if year_match else date.today().year
        pickup_date, dropoff_date = _rental_dates(range_match, year)
        clock = normalize_time(range_match.group(5))
        if pickup_date:
            pickup = join_datetime(pickup_date, clock)
        if dropoff_date:
            dropoff = join_datetime(dropoff_date, clock)

    if pickup is None:
        pickup = join_datetime(today_iso(), "00:00")
        defaulted.add('pickup_datetime')
    if dropoff is None:
        dropoff = join_datetime(today_iso(), "00:00")
        defaulted.add('dropoff_datetime')

    cost_match = _PRICELINE_COST_PATTERN.search(text)
    amount = parse_amount(cost_match.group(1)) if cost_match else None

    logger.debug(f"Priceline: {car_type}, {pickup} -> {dropoff}, confirmation={confirmation}")
    return [ParsedCarRental(
        company=f"Priceline - {car_type}",
        pickup_location="",
        dropoff_location="",
        pickup_datetime=pickup,
        dropoff_datetime=dropoff,
        confirmation_number=confirmation,
        cost_amount=amount,
        cost_currency="USD" if amount is not None else None,
        defaulted=frozenset(defaulted),
    )]
