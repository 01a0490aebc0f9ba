"""
Lodging confirmation extractor (Booking.com style).

The text is read in independent passes. Each pass fills a field only if
an earlier pass left it empty, so the order of the passes decides which
source wins.

PDF text of these confirmations often loses its columns: the check-in
day number and month can end up on separate lines below the label. That
"vertical" layout is tried for a label when no same-line date follows it.
"""

import re
import logging
from datetime import date

from .normalize import add_days, join_datetime, parse_amount, try_parse_date_phrase
from .records import ParsedLodging

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Imported Stay"
CHECK_IN_TIME = "15:00"
CHECK_OUT_TIME = "11:00"

_MONTHS = r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)'
_WEEKDAYS = r'(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)'

_NAME_PATTERN = re.compile(
    r'(?:Your booking at|confirmed booking at|confirmed at)\s+([^.]+?)(?:\.|\n|http|1 message)',
    re.IGNORECASE
)
_PROPERTY_TYPE_PATTERN = re.compile(r'\b(?:Apartment|Hotel|Resort|Villa|Chalet)\s+[^\n]+', re.IGNORECASE)
_PAGE_MARKER_PATTERN = re.compile(r'--- Page \d+ ---')
_ADDRESS_PATTERN = re.compile(r'Address:\s*([^\n]+)', re.IGNORECASE)
_DATE_PHRASE_PATTERN = re.compile(
    rf'\b(?:{_WEEKDAYS}\w*,?\s*)?{_MONTHS}[a-z]*\.?\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}',
    re.IGNORECASE
)
_CHECK_IN_PATTERN = re.compile(r'Check\s*-?\s*in', re.IGNORECASE)
_CHECK_OUT_PATTERN = re.compile(r'Check\s*-?\s*out', re.IGNORECASE)
_VERTICAL_DATE_PATTERN = re.compile(
    rf'^[\s\S]{{0,50}}?\b(\d{{1,2}})\b[\s\S]{{0,20}}?\b({_MONTHS}[a-z]*)',
    re.IGNORECASE
)
_YEAR_PATTERN = re.compile(r'\b(20\d{2})\b')
_CONFIRMATION_PATTERN = re.compile(
    r'(?:Confirmation number|Booking reference|Confirmation)[:\s]+(\d[\d.]*)',
    re.IGNORECASE
)
_PRICE_PATTERN = re.compile(
    r'(?:Final Price|Total Price|Total Amount)[\s\S]{0,200}?(?:approx\.[\s\S]{0,30}?)?\$\s*([\d,]+\.?\d{0,2})',
    re.IGNORECASE
)
_GENERIC_PRICE_PATTERN = re.compile(r'(?:Total price|Price|Total)[:\s]*(?:US)?\$\s*([\d,]+\.?\d{0,2})', re.IGNORECASE)

# Characters after a check-in/check-out label searched for its date
_DATE_WINDOW = 300
# "Address:" labels this far into the text usually follow the property name
_NAME_BEFORE_ADDRESS_LIMIT = 500
_ADDRESS_CONTINUATION_MAX = 50


# ============================================================================
# NAME AND ADDRESS
# ============================================================================

def _find_property_name(text):
    match = _NAME_PATTERN.search(text)
    if match and match.group(1).strip():
        logger.debug(f"  -> Name from booking sentence: {match.group(1).strip()}")
        return match.group(1).strip()

    address_match = _ADDRESS_PATTERN.search(text)
    address_pos = address_match.start() if address_match else -1
    if 0 < address_pos < _NAME_BEFORE_ADDRESS_LIMIT:
        before = _PAGE_MARKER_PATTERN.sub('', text[:address_pos])
        lines = [line.strip() for line in before.split('\n') if len(line.strip()) > 2]
        if lines:
            logger.debug(f"  -> Name from line above address: {lines[-1]}")
            return lines[-1]

    match = _PROPERTY_TYPE_PATTERN.search(text)
    if match:
        logger.debug(f"  -> Name from property type: {match.group(0).strip()}")
        return match.group(0).strip()

    return None


def _is_continuation_line(line):
    return (
        bool(line)
        and len(line) < _ADDRESS_CONTINUATION_MAX
        and 'Phone:' not in line
        and not _CHECK_IN_PATTERN.search(line)
        and not _CHECK_OUT_PATTERN.search(line)
        and not _DATE_PHRASE_PATTERN.search(line)
    )


def _find_address(text):
    match = _ADDRESS_PATTERN.search(text)
    if not match:
        return None
    address = match.group(1).strip()

    following = text[match.end():].split('\n')
    if len(following) > 1:
        next_line = following[1].strip()
        if _is_continuation_line(next_line):
            address = f"{address}, {next_line}"
    return address or None


# ============================================================================
# DATES
# ============================================================================

def _same_line_date(window):
    match = _DATE_PHRASE_PATTERN.search(window)
    return try_parse_date_phrase(match.group(0)) if match else None


def _vertical_date(window, year):
    """Day number and month name on separate lines below an anchor."""
    match = _VERTICAL_DATE_PATTERN.search(window)
    if not match:
        return None
    parsed = try_parse_date_phrase(f"{match.group(2)} {match.group(1)} {year}")
    if parsed:
        logger.debug(f"  -> Vertical date: {match.group(1)} {match.group(2)} {year}")
    return parsed


def _date_after(text, anchor_pattern):
    """Date in the window after a check-in/check-out label.

    Each label is tried in document order, first with a same-line date
    phrase and then with the vertical layout, before moving on to the
    next label. Vertical dates take the year of the first 20xx in the
    document.
    """
    year_match = _YEAR_PATTERN.search(text)
    year = year_match.group(1) if year_match else str(date.today().year)
    for anchor in anchor_pattern.finditer(text):
        window = text[anchor.end():anchor.end() + _DATE_WINDOW]
        parsed = _same_line_date(window) or _vertical_date(window, year)
        if parsed:
            return parsed
    return None


def _find_stay_dates(text):
    """Returns (check_in_date, check_out_date, defaulted)."""
    check_in = _date_after(text, _CHECK_IN_PATTERN)
    check_out = _date_after(text, _CHECK_OUT_PATTERN)

    defaulted = set()
    if check_in is None and check_out is None:
        found = []
        for match in _DATE_PHRASE_PATTERN.finditer(text):
            parsed = try_parse_date_phrase(match.group(0))
            if parsed:
                found.append(parsed)
        if len(found) >= 2:
            check_in, check_out = found[0], found[1]
        elif found:
            check_in = found[0]
            check_out = add_days(check_in, 1)
            defaulted.add('check_out_datetime')
        logger.debug(f"  -> Dates from whole document: {found[:2]}")

    return check_in, check_out, defaulted


# ============================================================================
# CONFIRMATION AND PRICE
# ============================================================================

def _find_confirmation(text):
    match = _CONFIRMATION_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).replace('.', '') or None


def _find_price(text):
    for pattern in (_PRICE_PATTERN, _GENERIC_PRICE_PATTERN):
        match = pattern.search(text)
        if match:
            amount = parse_amount(match.group(1))
            if amount is not None:
                return amount
    return None


# ============================================================================
# MAIN EXTRACTION FUNCTION
# ============================================================================

def extract_booking_stays(text):
    """Extract a stay from a Booking.com-style confirmation.

    A stay is returned only if a property name, a confirmation number or
    a check-in date was read from the text. The "Imported Stay"
    placeholder used when no name is found does not count.

    Returns:
        List with at most one ParsedLodging
    """
    defaulted = set()

    name = _find_property_name(text)
    name_found = name is not None
    address = None
    if name and ',' in name:
        name, address = [part.strip() for part in name.split(',', 1)]
        address = address or None
    if not name:
        name = PLACEHOLDER_NAME
        name_found = False
        defaulted.add('property_name')

    if address is None:
        address = _find_address(text)

    check_in, check_out, date_defaults = _find_stay_dates(text)
    defaulted |= date_defaults

    confirmation = _find_confirmation(text)
    price = _find_price(text)

    if not (name_found or confirmation or check_in):
        logger.debug("Lodging: no property name, confirmation or check-in date")
        return []

    notes = []
    if check_in is None:
        notes.append("check-in date not found")
    if check_out is None:
        notes.append("check-out date not found")

    stay = ParsedLodging(
        property_name=name,
        address=address,
        check_in_datetime=join_datetime(check_in, CHECK_IN_TIME) if check_in else None,
        check_out_datetime=join_datetime(check_out, CHECK_OUT_TIME) if check_out else None,
        confirmation_number=confirmation,
        cost_amount=price,
        cost_currency="USD" if price is not None else None,
        defaulted=frozenset(defaulted),
        notes=tuple(notes),
    )
    logger.debug(f"Lodging: {stay.property_name}, {stay.check_in_datetime} -> {stay.check_out_datetime}")
    return [stay]
