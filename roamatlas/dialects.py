"""
Vendor fingerprints for confirmation text.

Each booking category has an ordered list of dialects. The first dialect
whose fingerprint matches the text is the one used; the others in that
category are not tried.
"""

import re

_UNITED_TOKEN = re.compile(r'\bUA\s?\d{1,4}\b')
_SWISS_TOKEN = re.compile(r'\bLX\s?\d{3,4}\b')


def is_united(text):
    return "United Airlines" in text or bool(_UNITED_TOKEN.search(text))


def is_swiss(text):
    return "SWISS" in text or "swiss.com" in text or bool(_SWISS_TOKEN.search(text))


def is_flixbus(text):
    return "FlixBus" in text or "flixital" in text


def is_priceline(text):
    return "Priceline" in text or "priceline.com" in text


_LODGING_MARKERS = (
    "Booking.com",
    "Confirmation number",
    "CONFIRMATION NUMBER",
    "confirmed at",
    "CHECK-IN",
    "Check-in",
)


def is_booking_stay(text):
    return any(marker in text for marker in _LODGING_MARKERS)


# category -> ordered (dialect name, fingerprint)
DIALECTS = {
    'flight': [
        ('united', is_united),
        ('swiss', is_swiss),
    ],
    'ground': [
        ('flixbus', is_flixbus),
    ],
    'car': [
        ('priceline', is_priceline),
    ],
    'lodging': [
        ('booking', is_booking_stay),
    ],
}


def detect_dialect(text, category):
    """Name of the first dialect of category matching text, or None.

    Raises:
        ValueError: if category is not a known booking category
    """
    if category not in DIALECTS:
        raise ValueError(f"Unknown booking category: {category}")
    if not text:
        return None
    for name, fingerprint in DIALECTS[category]:
        if fingerprint(text):
            return name
    return None
