import unittest
from decimal import Decimal

from roamatlas.airlines import airline_for_flight_number, get_airline_for_code
from roamatlas.airports import city_to_airport_code
from roamatlas.flights import extract_swiss_flights, extract_united_flights
from roamatlas.parser import parse_flight_text
from roamatlas.records import FieldStatus

from samples import (
    SWISS, SWISS_CHF_ONLY, SWISS_CITY_ROUTE, SWISS_DATE_ONLY, SWISS_NO_ROUTE, UNITED,
)


class UnitedTests(unittest.TestCase):
    def test_extracts_every_segment(self) -> None:
        flights = parse_flight_text(UNITED)
        self.assertEqual([f.flight_number for f in flights], ["UA1234", "UA567"])

        first, second = flights
        self.assertEqual(first.airline, "United Airlines")
        self.assertEqual((first.origin, first.destination), ("DEN", "ORD"))
        self.assertEqual(first.departure_datetime, "2026-06-20T07:45:00")
        self.assertEqual(first.arrival_datetime, "2026-06-20T10:02:00")
        self.assertEqual((second.origin, second.destination), ("ORD", "EWR"))
        self.assertEqual(second.departure_datetime, "2026-06-20T12:30:00")
        self.assertEqual(second.arrival_datetime, "2026-06-20T15:41:00")

    def test_confirmation_on_line_after_label(self) -> None:
        flights = extract_united_flights(UNITED)
        self.assertTrue(all(f.confirmation_number == "K7XQ2M" for f in flights))

    def test_confirmation_inline(self) -> None:
        text = UNITED.replace("Confirmation Number:\nK7XQ2M", "Confirmation Number: ABC123")
        flights = extract_united_flights(text)
        self.assertEqual(flights[0].confirmation_number, "ABC123")

    def test_segment_costs_sum_to_total(self) -> None:
        flights = extract_united_flights(UNITED)
        self.assertEqual([f.cost_amount for f in flights], [Decimal("617.29"), Decimal("617.28")])
        self.assertEqual(sum(f.cost_amount for f in flights), Decimal("1234.57"))
        self.assertTrue(all(f.cost_currency == "USD" for f in flights))

    def test_upper_case_total(self) -> None:
        flights = extract_united_flights(UNITED.replace("Total: 1,234.57 USD", "TOTAL: 1,234.57 usd"))
        self.assertEqual([f.cost_amount for f in flights], [Decimal("617.29"), Decimal("617.28")])

    def test_three_way_split_keeps_total(self) -> None:
        extra = (
            "Flight 3 of 3 UA88\n"
            "Sun, Jun 21, 2026 Sun, Jun 21, 2026\n"
            "06:00 AM 09:15 AM\n"
            "Newark, NJ, US (EWR) Denver, CO, US (DEN)\n"
        )
        text = UNITED.replace("Purchase summary", extra + "Purchase summary")
        text = text.replace("Total: 1,234.57 USD", "Total: 100.00 USD")
        flights = extract_united_flights(text)
        self.assertEqual([f.cost_amount for f in flights],
                         [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")])

    def test_several_totals_are_added(self) -> None:
        text = UNITED + "Total: 60,000 miles + 11.20 USD\n"
        flights = extract_united_flights(text)
        self.assertEqual(sum(f.cost_amount for f in flights), Decimal("1245.77"))

    def test_incomplete_segment_is_dropped(self) -> None:
        text = UNITED.replace("12:30 PM 03:41 PM", "12:30 PM")
        flights = extract_united_flights(text)
        self.assertEqual([f.flight_number for f in flights], ["UA1234"])
        # whole total goes to the one segment left
        self.assertEqual(flights[0].cost_amount, Decimal("1234.57"))

    def test_no_segments_no_flights(self) -> None:
        self.assertEqual(parse_flight_text("United Airlines\nYour MileagePlus statement\n"), [])

    def test_no_total_leaves_cost_empty(self) -> None:
        text = UNITED.replace("Total: 1,234.57 USD", "")
        flights = extract_united_flights(text)
        self.assertTrue(all(f.cost_amount is None for f in flights))
        self.assertTrue(all(f.cost_currency is None for f in flights))


class SwissTests(unittest.TestCase):
    def test_booking_page(self) -> None:
        flights = parse_flight_text(SWISS)
        self.assertEqual(len(flights), 1)
        flight = flights[0]
        self.assertEqual(flight.airline, "SWISS")
        self.assertEqual(flight.flight_number, "LX2092")
        self.assertEqual(flight.departure_datetime, "2026-06-30T12:05:00")
        self.assertEqual(flight.arrival_datetime, "2026-06-30T14:20:00")
        self.assertEqual((flight.origin, flight.destination), ("GVA", "LIS"))
        self.assertEqual(flight.confirmation_number, "QWE7RT")

    def test_prefers_converted_usd_price(self) -> None:
        flight = extract_swiss_flights(SWISS)[0]
        self.assertEqual(flight.cost_amount, Decimal("301.15"))
        self.assertEqual(flight.cost_currency, "USD")
        self.assertEqual(flight.notes, ())

    def test_chf_price_keeps_currency(self) -> None:
        flight = extract_swiss_flights(SWISS_CHF_ONLY)[0]
        self.assertEqual(flight.cost_amount, Decimal("245.30"))
        self.assertEqual(flight.cost_currency, "CHF")
        self.assertIn("amount in CHF, not converted", flight.notes)
        self.assertEqual((flight.origin, flight.destination), ("GVA", "LIS"))

    def test_route_from_city_names(self) -> None:
        flight = extract_swiss_flights(SWISS_CITY_ROUTE)[0]
        self.assertEqual(flight.flight_number, "LX318")
        self.assertEqual((flight.origin, flight.destination), ("ZRH", "LHR"))
        self.assertEqual(flight.departure_datetime, "2026-07-12T07:10:00")

    def test_missing_route_is_reported_not_invented(self) -> None:
        flight = extract_swiss_flights(SWISS_NO_ROUTE)[0]
        self.assertIsNone(flight.origin)
        self.assertIsNone(flight.destination)
        self.assertIn("route not recoverable", flight.notes)
        self.assertEqual(flight.field_status('origin'), FieldStatus.ABSENT)

    def test_date_without_times_falls_back_to_noon(self) -> None:
        flight = extract_swiss_flights(SWISS_DATE_ONLY)[0]
        self.assertEqual(flight.departure_datetime, "2026-06-30T12:00:00")
        self.assertEqual(flight.arrival_datetime, flight.departure_datetime)
        self.assertEqual(flight.field_status('departure_datetime'), FieldStatus.DEFAULTED)
        self.assertEqual(flight.field_status('arrival_datetime'), FieldStatus.DEFAULTED)

    def test_route_from_two_word_city(self) -> None:
        text = (
            "SWISS\n"
            "LX139\n"
            "From Hong Kong (HKG)\n"
            "To Zürich (ZRH)\n"
            "01.09.2026 - 22:50\n"
            "02.09.2026 - 06:05\n"
        )
        flight = extract_swiss_flights(text)[0]
        self.assertEqual((flight.origin, flight.destination), ("HKG", "ZRH"))

    def test_needs_flight_number(self) -> None:
        self.assertEqual(extract_swiss_flights("SWISS newsletter: summer fares to Geneva\n"), [])


class CarrierLookupTests(unittest.TestCase):
    def test_code_and_flight_number(self) -> None:
        self.assertEqual(get_airline_for_code("lx"), "SWISS")
        self.assertIsNone(get_airline_for_code(""))
        self.assertEqual(airline_for_flight_number("UA 902"), "United Airlines")
        self.assertEqual(airline_for_flight_number("ZZ12", default="United Airlines"), "United Airlines")

    def test_city_names(self) -> None:
        self.assertEqual(city_to_airport_code(" Lisboa "), "LIS")
        self.assertEqual(city_to_airport_code("GENF"), "GVA")
        self.assertIsNone(city_to_airport_code("Atlantis"))


if __name__ == "__main__":
    unittest.main()
