"""
Carrier codes and names.

Used to turn the two-character prefix of a flight number into the airline
name stored on a flight record.
"""

import re

# Airline IATA codes (2-character) -> display name
AIRLINE_CODES = {
    # US
    'AA': 'American Airlines',
    'DL': 'Delta',
    'UA': 'United Airlines',
    'WN': 'Southwest',
    'B6': 'JetBlue',
    'AS': 'Alaska Airlines',
    'HA': 'Hawaiian Airlines',
    # Canada
    'AC': 'Air Canada',
    'WS': 'WestJet',
    # Europe
    'LX': 'SWISS',
    'LH': 'Lufthansa',
    'OS': 'Austrian',
    'SN': 'Brussels Airlines',
    'BA': 'British Airways',
    'AF': 'Air France',
    'KL': 'KLM',
    'IB': 'Iberia',
    'TP': 'TAP Portugal',
    'AZ': 'ITA Airways',
    'SK': 'SAS',
    'AY': 'Finnair',
    'EI': 'Aer Lingus',
    'FR': 'Ryanair',
    'U2': 'easyJet',
    'FI': 'Icelandair',
    # Rest of world
    'EK': 'Emirates',
    'QR': 'Qatar Airways',
    'TK': 'Turkish Airlines',
    'SQ': 'Singapore Airlines',
    'NH': 'ANA',
    'QF': 'Qantas',
    'NZ': 'Air New Zealand',
    'AM': 'Aeromexico',
    'CM': 'Copa',
}

_FLIGHT_NUMBER_PATTERN = re.compile(r'^([A-Z][A-Z0-9])\s*(\d{1,4})$')


def get_airline_for_code(airline_code):
    """Get airline name from 2-character IATA code."""
    if not airline_code:
        return None
    return AIRLINE_CODES.get(airline_code.upper())


def split_flight_number(flight_number):
    """Split "UA1234" into ("UA", "1234").

    Returns:
        Tuple of (carrier code, number) or None if it is not a flight number
    """
    if not flight_number:
        return None
    match = _FLIGHT_NUMBER_PATTERN.match(flight_number.strip().upper())
    if not match:
        return None
    return match.group(1), match.group(2)


def airline_for_flight_number(flight_number, default=None):
    """Airline name for a flight number, or default if the carrier is unknown."""
    parts = split_flight_number(flight_number)
    if not parts:
        return default
    return get_airline_for_code(parts[0]) or default
