"""
Airport codes and city names.

Small reference table used to validate airport codes read from
confirmation text and to match a code with the city printed beside it.
"""

# Three-letter uppercase words that show up next to real codes in
# confirmation text and must never be taken for airports
EXCLUDED_CODES = {
    'THE', 'AND', 'FOR', 'YOU', 'ALL', 'NEW', 'NOW', 'OUT', 'DAY', 'WAY',
    'USA', 'PDF', 'COM', 'VAT', 'TAX', 'FEE', 'PNR', 'ETA', 'ETD',
    'MON', 'TUE', 'WED', 'THU', 'FRI', 'SAT', 'SUN',
    'JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN', 'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC',
    'USD', 'CHF', 'EUR', 'GBP', 'CAD',
}

FRIENDLY_NAMES = {
    # US
    'ATL': 'Atlanta', 'BOS': 'Boston', 'DEN': 'Denver', 'DFW': 'Dallas-Fort Worth',
    'EWR': 'Newark', 'IAD': 'Washington Dulles', 'IAH': 'Houston', 'JFK': 'New York JFK',
    'LAS': 'Las Vegas', 'LAX': 'Los Angeles', 'LGA': 'New York LaGuardia',
    'MCO': 'Orlando', 'MIA': 'Miami', 'ORD': "Chicago O'Hare", 'SAN': 'San Diego',
    'SEA': 'Seattle', 'SFO': 'San Francisco', 'SLC': 'Salt Lake City',
    # Canada
    'YUL': 'Montreal', 'YVR': 'Vancouver', 'YYZ': 'Toronto',
    # Europe
    'AMS': 'Amsterdam', 'ATH': 'Athens', 'BCN': 'Barcelona', 'BER': 'Berlin',
    'BRU': 'Brussels', 'BSL': 'Basel', 'CDG': 'Paris', 'CPH': 'Copenhagen',
    'DUB': 'Dublin', 'FCO': 'Rome', 'FRA': 'Frankfurt', 'GVA': 'Geneva',
    'LHR': 'London Heathrow', 'LGW': 'London Gatwick', 'LIS': 'Lisbon',
    'MAD': 'Madrid', 'MUC': 'Munich', 'MXP': 'Milan', 'NCE': 'Nice',
    'OPO': 'Porto', 'PRG': 'Prague', 'VCE': 'Venice', 'VIE': 'Vienna',
    'ZRH': 'Zurich',
    # Rest of world
    'DXB': 'Dubai', 'HKG': 'Hong Kong', 'NRT': 'Tokyo Narita', 'SIN': 'Singapore',
    'SYD': 'Sydney',
}

# City name (lowercase) -> primary airport code
CITY_TO_AIRPORT = {
    'atlanta': 'ATL', 'boston': 'BOS', 'denver': 'DEN',
    'dallas': 'DFW', 'dallas-fort worth': 'DFW',
    'newark': 'EWR', 'washington': 'IAD', 'houston': 'IAH',
    'new york': 'JFK', 'las vegas': 'LAS', 'los angeles': 'LAX',
    'orlando': 'MCO', 'miami': 'MIA', 'chicago': 'ORD',
    'san diego': 'SAN', 'seattle': 'SEA', 'san francisco': 'SFO',
    'salt lake city': 'SLC',
    'montreal': 'YUL', 'vancouver': 'YVR', 'toronto': 'YYZ',
    'amsterdam': 'AMS', 'athens': 'ATH', 'barcelona': 'BCN', 'berlin': 'BER',
    'brussels': 'BRU', 'basel': 'BSL', 'paris': 'CDG', 'copenhagen': 'CPH',
    'dublin': 'DUB', 'rome': 'FCO', 'frankfurt': 'FRA',
    'geneva': 'GVA', 'geneve': 'GVA', 'genf': 'GVA',
    'london': 'LHR', 'lisbon': 'LIS', 'lisboa': 'LIS',
    'madrid': 'MAD', 'munich': 'MUC', 'milan': 'MXP', 'nice': 'NCE',
    'porto': 'OPO', 'prague': 'PRG', 'venice': 'VCE', 'vienna': 'VIE',
    'zurich': 'ZRH', 'zürich': 'ZRH',
    'dubai': 'DXB', 'hong kong': 'HKG', 'tokyo': 'NRT', 'singapore': 'SIN',
    'sydney': 'SYD',
}


def city_to_airport_code(city_name):
    """Convert a city name to its airport code.

    Args:
        city_name: City name string (case insensitive)

    Returns:
        Airport code string or None if not found
    """
    if not city_name:
        return None
    normalized = city_name.lower().strip()
    return CITY_TO_AIRPORT.get(normalized)


def is_plausible_airport(code):
    """Three uppercase letters that are not a known false positive."""
    return (
        bool(code)
        and len(code) == 3
        and code.isalpha()
        and code.isupper()
        and code not in EXCLUDED_CODES
    )


def get_airport_display(code):
    """Get display string for airport code.

    Returns:
        Formatted string like "GVA (Geneva)" or just the code if unknown
    """
    if not code:
        return ""
    name = FRIENDLY_NAMES.get(code, "")
    if name:
        return f"{code} ({name})"
    return code
