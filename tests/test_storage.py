import json
import tempfile
import unittest
from pathlib import Path

from roamatlas.storage import (
    SCHEMA_VERSION, StoreError, TripStore, default_collections, load_store,
)


class StoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data.json"
        self.store = TripStore(self.path)
        self.trip = self.store.create_trip("Lisbon 2026", primary_destination="Lisbon")

    def tearDown(self) -> None:
        self._tmp.cleanup()


class DefaultsTests(unittest.TestCase):
    def test_default_collections_are_fresh(self) -> None:
        first = default_collections()
        first['flights'].append({'id': 'x'})
        second = default_collections()
        self.assertEqual(second['flights'], [])
        self.assertEqual(second['schema_version'], SCHEMA_VERSION)
        self.assertEqual(second['preferences']['default_currency'], "USD")

    def test_each_collection_initialised_on_its_own(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.json"
            path.write_text(json.dumps({
                'trips': [{'id': 't1', 'name': 'Kept'}],
                'flights': "not a list",
                'preferences': {'theme': 'light', 'bogus': 1},
            }), encoding='utf-8')
            data = load_store(path)
        self.assertEqual(data['trips'], [{'id': 't1', 'name': 'Kept'}])
        self.assertEqual(data['flights'], [])
        self.assertEqual(data['expenses'], [])
        self.assertEqual(data['preferences']['theme'], 'light')
        self.assertNotIn('bogus', data['preferences'])

    def test_corrupt_file_is_backed_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.json"
            path.write_text("{not json", encoding='utf-8')
            data = load_store(path)
            self.assertEqual(data['trips'], [])
            self.assertTrue(path.with_suffix('.json.bak').exists())


class TripStoreTests(StoreTestCase):
    def test_save_writes_whole_file(self) -> None:
        self.assertTrue(self.path.exists())
        self.assertFalse(self.path.with_suffix('.json.tmp').exists())
        reloaded = TripStore(self.path)
        self.assertEqual(reloaded.get_trip(self.trip['id'])['name'], "Lisbon 2026")

    def test_crud(self) -> None:
        car = self.store.create('car', {'trip_id': self.trip['id'], 'company': 'Priceline - Compact'})
        self.assertTrue(car['id'])
        self.assertEqual(self.store.get_list('car', self.trip['id']), [car])

        updated = self.store.update('car', car['id'], {'company': 'Priceline - SUV'})
        self.assertEqual(updated['company'], 'Priceline - SUV')
        self.assertIsNone(self.store.update('car', 'missing', {'company': 'x'}))

        self.assertTrue(self.store.delete('car', car['id']))
        self.assertFalse(self.store.delete('car', car['id']))
        self.assertIsNone(self.store.get('car', car['id']))

    def test_unknown_kind(self) -> None:
        with self.assertRaises(StoreError):
            self.store.create('spaceship', {})

    def test_flight_cost_creates_linked_expense(self) -> None:
        flight = self.store.create('flight', {
            'trip_id': self.trip['id'],
            'airline': 'United Airlines',
            'flight_number': 'UA1234',
            'departure_datetime': '2026-06-20T07:45:00',
            'cost_amount': '617.29',
            'cost_currency': 'USD',
        })
        expenses = self.store.get_list('expense', self.trip['id'])
        self.assertEqual(len(expenses), 1)
        expense = expenses[0]
        self.assertEqual(expense['description'], "Flight: United Airlines (UA1234)")
        self.assertEqual(expense['date'], "2026-06-20")
        self.assertEqual(expense['amount'], "617.29")
        self.assertEqual(expense['category'], "flight")
        self.assertEqual(expense['linked_id'], flight['id'])

        self.store.update('flight', flight['id'], {'cost_amount': '650.00'})
        expenses = self.store.get_list('expense', self.trip['id'])
        self.assertEqual([e['amount'] for e in expenses], ["650.00"])

        self.store.update('flight', flight['id'], {'cost_amount': None})
        self.assertEqual(self.store.get_list('expense', self.trip['id']), [])

    def test_deleting_stay_removes_its_expense(self) -> None:
        stay = self.store.create('lodging', {
            'trip_id': self.trip['id'],
            'property_name': 'Hotel Miradouro',
            'check_in_datetime': '2026-06-12T15:00:00',
            'cost_amount': '412.60',
        })
        self.assertEqual(self.store.get_list('expense')[0]['description'], "Stay: Hotel Miradouro")
        self.store.delete('lodging', stay['id'])
        self.assertEqual(self.store.get_list('expense'), [])

    def test_car_cost_has_no_linked_expense(self) -> None:
        self.store.create('car', {'trip_id': self.trip['id'], 'cost_amount': '312.45'})
        self.assertEqual(self.store.get_list('expense'), [])

    def test_delete_trip_cascades(self) -> None:
        other = self.store.create_trip("Elsewhere")
        self.store.create('flight', {'trip_id': self.trip['id'], 'cost_amount': '10.00'})
        self.store.create('transport', {'trip_id': self.trip['id']})
        self.store.create('car', {'trip_id': other['id']})
        self.store.update_preferences({'current_trip_id': self.trip['id']})

        self.assertTrue(self.store.delete_trip(self.trip['id']))
        self.assertFalse(self.store.delete_trip(self.trip['id']))
        self.assertEqual(self.store.get_list('flight'), [])
        self.assertEqual(self.store.get_list('transport'), [])
        self.assertEqual(self.store.get_list('expense'), [])
        self.assertEqual(len(self.store.get_list('car')), 1)
        self.assertIsNone(self.store.get_preferences()['current_trip_id'])

    def test_trip_stats_do_not_double_count(self) -> None:
        trip_id = self.trip['id']
        self.store.create('flight', {'trip_id': trip_id, 'cost_amount': '100.00',
                                     'departure_datetime': '2026-06-20T07:45:00'})
        self.store.create('car', {'trip_id': trip_id, 'cost_amount': '50.25'})
        stats = self.store.get_trip_stats(trip_id)
        self.assertEqual(stats['flight'], 1)
        self.assertEqual(stats['car'], 1)
        self.assertEqual(stats['expense'], 1)
        self.assertEqual(stats['total_expenses'], "150.25")

    def test_update_trip(self) -> None:
        updated = self.store.update_trip(self.trip['id'], {'name': "Lisbon & Porto 2026"})
        self.assertEqual(updated['name'], "Lisbon & Porto 2026")
        self.assertEqual(TripStore(self.path).get_trip(self.trip['id'])['name'], "Lisbon & Porto 2026")
        self.assertIsNone(self.store.update_trip("missing", {'name': "x"}))

    def test_preferences(self) -> None:
        prefs = self.store.update_preferences({'default_currency': 'EUR'})
        self.assertEqual(prefs['default_currency'], 'EUR')
        with self.assertRaises(StoreError):
            self.store.update_preferences({'font': 'large'})


if __name__ == "__main__":
    unittest.main()
