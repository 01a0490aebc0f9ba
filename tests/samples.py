"""Confirmation texts shaped like the vendor e-mails and PDF exports."""

UNITED = """\
United Airlines
Thanks for choosing United
Confirmation Number:
K7XQ2M
Flight 1 of 2 UA1234
Sat, Jun 20, 2026 Sat, Jun 20, 2026
07:45 AM 10:02 AM
Denver, CO, US (DEN) Chicago, IL, US (ORD)
Flight 2 of 2 UA567
Sat, Jun 20, 2026 Sat, Jun 20, 2026
12:30 PM 03:41 PM
Chicago, IL, US (ORD) Newark, NJ, US (EWR)
Purchase summary
Total: 1,234.57 USD
"""

SWISS = """\
SWISS
Your booking is confirmed
Booking code: QWE7RT
Your flight
LX2092
GVA LIS Geneva Lisbon Manage booking
Departure 30.06.2026 - 12:05
Arrival 30.06.2026 - 14:20
Final price CHF 245.30
Converted final price USD 301.15
"""

SWISS_CHF_ONLY = """\
SWISS
Booking code: QWE7RT
LX2092
GVA LIS Geneva Lisbon Duration 2h 15min
30.06.2026 - 12:05
30.06.2026 - 14:20
Final price CHF 245.30
"""

SWISS_CITY_ROUTE = """\
SWISS
Booking code: ZZ12AB
LX318
From Zurich (ZRH)
To London (LHR)
Departure 12.07.2026 - 07:10
Arrival 12.07.2026 - 08:00
"""

SWISS_NO_ROUTE = """\
SWISS
LX1234
30.06.2026 - 12:05
30.06.2026 - 14:20
"""

SWISS_DATE_ONLY = """\
SWISS booking LX2092
Travel date 30.06.2026
"""

FLIXBUS = """\
FlixBus
Booking number: #3012345678
Your trip
06/12/2026, 8:15 am
New York Midtown (31st St & 8th Ave)
Bus 2271
06/12/2026, 12:40 pm
Washington Union Station
Passenger 1: Ada Lovelace
Seat: 12C
Fare $24.99
Total $24.99
Passenger 2: Charles Babbage
06/12/2026, 8:15 am
06/12/2026, 12:40 pm
Total $24.99
"""

PRICELINE = """\
priceline
Your Priceline car rental is booked
Confirmation Number: 48213957
Trip Number: 123-456-789
Economy Car
Jun 30 - Jul 7 • Pick-up: 1:30PM
Booked on May 2, 2026
Total cost: $312.45
"""

BOOKING = """\
Booking.com
Your booking at Hotel Miradouro, Rua das Flores 12, Lisbon.
Confirmation number: 4012.593.778
PIN: 1234
Check-in
Friday, June 12, 2026
from 15:00
Check-out
Sunday, June 14, 2026
until 11:00
Total Price
€ 380 approx. US$ 412.60
"""

BOOKING_VERTICAL = """\
--- Page 1 ---
Printed: 05/02/2026
Booking.com
Chalet Edelweiss
Address: Dorfstrasse 7
3920 Zermatt
Phone: +41 27 000 00 00
CHECK-IN
12
JUNE
Friday
CHECK-OUT
15
JUNE
Monday
Confirmation number: 5566778899
"""

# Long enough to keep a check-in label and a check-out date apart
HOUSE_RULES = (
    "Please contact the property in advance to arrange your arrival.\n"
    "The host will send you the key collection details by e-mail.\n"
    "Parking is available on site at an extra charge.\n"
    "Breakfast is served on the terrace every morning.\n"
    "Towels and linen are provided for every guest.\n"
    "Enjoy your stay and let us know if you need anything.\n"
)

BOOKING_NO_CHECK_IN_DATE = (
    "Booking.com\n"
    "Your booking at Casa Azul.\n"
    "Confirmation number: 998877\n"
    "Check-in: see property instructions\n"
    + HOUSE_RULES +
    "Check-out\n"
    "Tuesday, July 7, 2026\n"
)

BOOKING_NO_CHECK_OUT_DATE = (
    "Booking.com\n"
    "Your booking at Casa Azul.\n"
    "Check-in\n"
    "Monday, July 6, 2026\n"
    + HOUSE_RULES +
    "Check-out: ask the host\n"
    + HOUSE_RULES
)

BOOKING_DATES_ONLY = """\
Booking.com
Your booking at Casa Azul.
Your stay: Monday, July 6, 2026 to Wednesday, July 8, 2026
"""

BOOKING_ONE_DATE = """\
Booking.com
Your booking at Casa Azul.
Arriving Monday, July 6, 2026
"""

BOOKING_UPPER = """\
Booking.com
YOUR BOOKING AT CASA AZUL.
ADDRESS: RUA DO NORTE 5
CHECK-IN
FRIDAY, JUNE 12, 2026
CHECK-OUT
SUNDAY, JUNE 14, 2026
TOTAL PRICE US$ 298.00
"""

UNRELATED = "Hello Sam, lunch on Thursday works for me. See you soon!\n"
