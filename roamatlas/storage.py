"""
Local JSON store for trips and their bookings.

The whole store lives in one JSON file:
    {"schema_version": 1, "trips": [...], "flights": [...], ...,
     "preferences": {...}}

Each collection is checked and initialised on its own when the file is
loaded, so one damaged collection does not wipe the others. Writes go to a
temp file first and are then renamed over the real file.
"""

import json
import logging
import secrets
import time
from copy import deepcopy
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from .normalize import parse_amount

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# Booking kind -> collection name in the store file
COLLECTIONS = {
    'trip': 'trips',
    'flight': 'flights',
    'lodging': 'accommodations',
    'car': 'cars',
    'transport': 'transports',
    'excursion': 'excursions',
    'expense': 'expenses',
}

DEFAULT_PREFERENCES = {
    'default_currency': "USD",
    'current_trip_id': None,
    'theme': "dark",
}

# Kinds whose cost is mirrored as an expense: kind -> (category, date field, description)
_LINKED_EXPENSES = {
    'flight': ('flight', 'departure_datetime', lambda r: f"Flight: {r.get('airline')} ({r.get('flight_number')})"),
    'lodging': ('accommodation', 'check_in_datetime', lambda r: f"Stay: {r.get('property_name')}"),
    'excursion': ('excursion', 'date', lambda r: f"Activity: {r.get('title')}"),
}


class StoreError(Exception):
    """Raised for requests the store cannot serve (unknown collection)."""


def generate_id():
    """Time-ordered unique id: millisecond timestamp plus random suffix."""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(4)}"


def _now():
    return datetime.now().isoformat(timespec='seconds')


def default_collections():
    """Fresh contents for an empty store."""
    data = {'schema_version': SCHEMA_VERSION}
    for name in COLLECTIONS.values():
        data[name] = []
    data['preferences'] = dict(DEFAULT_PREFERENCES)
    return data


def _initialise(raw):
    """Build a valid store from whatever was loaded, collection by collection."""
    data = default_collections()
    if not isinstance(raw, dict):
        logger.warning("Store file has invalid format, starting fresh")
        return data

    for name in COLLECTIONS.values():
        items = raw.get(name)
        if items is None:
            continue
        if not isinstance(items, list):
            logger.warning(f"Collection '{name}' is not a list, resetting it")
            continue
        data[name] = [item for item in items if isinstance(item, dict) and item.get('id')]
        dropped = len(items) - len(data[name])
        if dropped:
            logger.warning(f"Dropped {dropped} malformed item(s) from '{name}'")

    prefs = raw.get('preferences')
    if isinstance(prefs, dict):
        data['preferences'].update({k: v for k, v in prefs.items() if k in DEFAULT_PREFERENCES})
    elif prefs is not None:
        logger.warning("Preferences are not an object, using defaults")

    return data


def load_store(path):
    """Load the store file, falling back to an empty store.

    A file that is not valid JSON is renamed to .json.bak and a fresh store
    is returned.
    """
    store_path = Path(path)
    if not store_path.exists():
        return default_collections()

    try:
        with open(store_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        backup_path = store_path.with_suffix('.json.bak')
        logger.warning(f"{store_path.name} is corrupted ({e}), backing up to {backup_path.name}")
        store_path.replace(backup_path)
        return default_collections()

    return _initialise(raw)


def save_store(data, path):
    """Write the store atomically (temp file, then rename)."""
    store_path = Path(path)
    store_path.parent.mkdir(parents=True, exist_ok=True)
    temp_file = store_path.with_suffix('.json.tmp')
    try:
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str)
        temp_file.replace(store_path)
    except Exception:
        if temp_file.exists():
            temp_file.unlink()
        raise


def _plain(value):
    """JSON-friendly copy of a record value."""
    if isinstance(value, Decimal):
        return str(value)
    return value


def _positive_amount(value):
    amount = parse_amount(value) if value is not None else None
    if amount is not None and amount > 0:
        return amount
    return None


class TripStore:
    """Trips, bookings, expenses and preferences backed by a JSON file."""

    def __init__(self, path):
        self.path = Path(path)
        self.data = load_store(self.path)

    def save(self):
        save_store(self.data, self.path)

    def _collection(self, kind):
        if kind not in COLLECTIONS:
            raise StoreError(f"Unknown collection kind: {kind}")
        return self.data[COLLECTIONS[kind]]

    # ------------------------------------------------------------------
    # Generic CRUD
    # ------------------------------------------------------------------

    def create(self, kind, record):
        """Add a record and return the stored copy (with id)."""
        items = self._collection(kind)
        item = {key: _plain(value) for key, value in dict(record).items()}
        item['id'] = generate_id()
        item.setdefault('created_at', _now())
        item['updated_at'] = item['created_at']
        items.append(item)
        self._sync_linked_expense(kind, item)
        self.save()
        logger.debug(f"Created {kind} {item['id']}")
        return deepcopy(item)

    def get_list(self, kind, trip_id=None):
        items = self._collection(kind)
        if trip_id is not None:
            items = [item for item in items if item.get('trip_id') == trip_id]
        return deepcopy(items)

    def get(self, kind, item_id):
        for item in self._collection(kind):
            if item.get('id') == item_id:
                return deepcopy(item)
        return None

    def update(self, kind, item_id, changes):
        """Merge changes into a record; None if there is no such record."""
        for item in self._collection(kind):
            if item.get('id') == item_id:
                item.update({key: _plain(value) for key, value in changes.items() if key != 'id'})
                item['updated_at'] = _now()
                self._sync_linked_expense(kind, item)
                self.save()
                return deepcopy(item)
        return None

    def delete(self, kind, item_id):
        items = self._collection(kind)
        for index, item in enumerate(items):
            if item.get('id') == item_id:
                del items[index]
                self._drop_linked_expenses(kind, item_id)
                self.save()
                return True
        return False

    # ------------------------------------------------------------------
    # Linked expenses
    # ------------------------------------------------------------------

    def _drop_linked_expenses(self, kind, item_id):
        expenses = self.data['expenses']
        expenses[:] = [
            e for e in expenses
            if not (e.get('linked_type') == kind and e.get('linked_id') == item_id)
        ]

    def _sync_linked_expense(self, kind, item):
        """Keep one expense mirroring a booking's cost, or none if it has no cost."""
        if kind not in _LINKED_EXPENSES:
            return
        category, date_field, describe = _LINKED_EXPENSES[kind]
        amount = _positive_amount(item.get('cost_amount'))

        if amount is None:
            self._drop_linked_expenses(kind, item['id'])
            return

        fields = {
            'date': str(item.get(date_field) or '').split('T')[0],
            'description': describe(item),
            'amount': str(amount),
            'currency': item.get('cost_currency') or self.data['preferences']['default_currency'],
        }
        for expense in self.data['expenses']:
            if expense.get('linked_type') == kind and expense.get('linked_id') == item['id']:
                expense.update(fields)
                expense['updated_at'] = _now()
                return

        expense = {
            'id': generate_id(),
            'trip_id': item.get('trip_id'),
            'category': category,
            'payment_method': None,
            'linked_type': kind,
            'linked_id': item['id'],
            'created_at': _now(),
            'updated_at': _now(),
        }
        expense.update(fields)
        self.data['expenses'].append(expense)

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    def create_trip(self, name, primary_destination="", start_date=None, end_date=None, notes=""):
        return self.create('trip', {
            'name': name,
            'primary_destination': primary_destination,
            'start_date': start_date,
            'end_date': end_date,
            'status': "active",
            'notes': notes,
        })

    def get_trips(self):
        return self.get_list('trip')

    def get_trip(self, trip_id):
        return self.get('trip', trip_id)

    def update_trip(self, trip_id, changes):
        return self.update('trip', trip_id, changes)

    def delete_trip(self, trip_id):
        """Delete a trip together with everything attached to it."""
        trips = self.data['trips']
        if not any(trip.get('id') == trip_id for trip in trips):
            return False

        trips[:] = [trip for trip in trips if trip.get('id') != trip_id]
        for kind, name in COLLECTIONS.items():
            if kind == 'trip':
                continue
            self.data[name] = [item for item in self.data[name] if item.get('trip_id') != trip_id]

        prefs = self.data['preferences']
        if prefs.get('current_trip_id') == trip_id:
            prefs['current_trip_id'] = None
        self.save()
        return True

    def get_trip_stats(self, trip_id):
        """Booking counts and total spend for a trip.

        Booking costs are only added for a category that has no expense
        entries of its own, so a cost is not counted twice.
        """
        stats = {kind: len(self.get_list(kind, trip_id)) for kind in COLLECTIONS if kind != 'trip'}
        expenses = self.get_list('expense', trip_id)
        total = sum((parse_amount(e.get('amount')) or Decimal(0) for e in expenses), Decimal(0))

        covered = {e.get('category') for e in expenses}
        by_category = (
            ('flight', ('flight',)),
            ('accommodation', ('lodging',)),
            ('transport', ('car', 'transport')),
            ('excursion', ('excursion',)),
        )
        for category, kinds in by_category:
            if category in covered:
                continue
            for kind in kinds:
                for item in self.get_list(kind, trip_id):
                    total += parse_amount(item.get('cost_amount')) or Decimal(0)

        stats['total_expenses'] = str(total.quantize(Decimal("0.01")))
        return stats

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_preferences(self):
        return dict(self.data['preferences'])

    def update_preferences(self, changes):
        unknown = set(changes) - set(DEFAULT_PREFERENCES)
        if unknown:
            raise StoreError(f"Unknown preference(s): {', '.join(sorted(unknown))}")
        self.data['preferences'].update(changes)
        self.save()
        return self.get_preferences()
