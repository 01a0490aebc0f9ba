"""
Booking confirmation parsing entry points.

Strategy:
1. Pick the vendor dialect from fingerprints in the text
2. Run that dialect's extractor
3. Never raise for any input text: no dialect, or an extractor that
   blows up, both mean "no records"

Callers that do not know whether a document is a bus ticket or a car
rental use parse_transportation_text, which runs both categories.
"""

import logging

from .cars import extract_priceline_rentals
from .dialects import DIALECTS, detect_dialect
from .flights import extract_swiss_flights, extract_united_flights
from .ground import extract_flixbus_trips
from .lodging import extract_booking_stays

logger = logging.getLogger(__name__)

EXTRACTORS = {
    'united': extract_united_flights,
    'swiss': extract_swiss_flights,
    'flixbus': extract_flixbus_trips,
    'priceline': extract_priceline_rentals,
    'booking': extract_booking_stays,
}

CATEGORIES = ('flight', 'ground', 'car', 'transportation', 'lodging')


def _run_category(text, category):
    dialect = detect_dialect(text, category)
    if dialect is None:
        logger.debug(f"No {category} dialect recognised")
        return []

    logger.debug(f"Parsing as {category}/{dialect}")
    try:
        return list(EXTRACTORS[dialect](text))
    except Exception:
        logger.warning(f"{dialect} extractor failed, treating as no records", exc_info=True)
        return []


def parse_flight_text(text):
    """Flights found in text (United or SWISS layouts)."""
    return _run_category(text, 'flight')


def parse_ground_transport_text(text):
    """Bus/train legs found in text (FlixBus layout)."""
    return _run_category(text, 'ground')


def parse_car_rental_text(text):
    """Car rentals found in text (Priceline layout)."""
    return _run_category(text, 'car')


def parse_lodging_text(text):
    """Stays found in text (Booking.com layout)."""
    return _run_category(text, 'lodging')


def parse_transportation_text(text):
    """Bus/train legs followed by car rentals found in the same text.

    Both detectors run independently; a document that happens to contain
    both a bus ticket and a car rental yields one record of each.
    """
    return parse_ground_transport_text(text) + parse_car_rental_text(text)


def parse_text(text, category):
    """Dispatch on a category name.

    Args:
        text: Raw confirmation text
        category: One of CATEGORIES

    Returns:
        List of parsed records

    Raises:
        ValueError: if category is unknown
    """
    if category == 'transportation':
        return parse_transportation_text(text)
    if category not in DIALECTS:
        raise ValueError(f"Unknown booking category: {category}")
    return _run_category(text, category)
