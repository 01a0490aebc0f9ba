"""
Import orchestration.

Flow for one pasted or uploaded confirmation:
1. Parse the text for the requested booking category
2. Build a preview that flags missing and made-up fields for review
3. Fill in the defaults a booking needs before it can be stored
4. Attach the trip id and save through the store

Nothing is saved for a flight that lacks its route, times or flight
number; it is reported back as skipped so it can be entered by hand.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List

from .config import DEFAULTS
from .documents import extract_text_from_document
from .normalize import add_days, join_datetime
from .parser import parse_text
from .storage import StoreError

logger = logging.getLogger(__name__)

UNKNOWN_PLACE = "Unknown"
UNKNOWN_ADDRESS = "Address not found"
UNKNOWN_LOCATION = "TBD"


@dataclass
class PreviewItem:
    kind: str
    record: object
    missing: List[str] = field(default_factory=list)
    defaulted: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    @property
    def needs_review(self):
        return bool(self.missing or self.defaulted or self.notes)


@dataclass
class ImportResult:
    """Outcome of one import.

    status is "empty" when nothing was recognised (offer manual entry),
    "review" when something was defaulted, missing or skipped, and "ok"
    otherwise.
    """
    status: str
    items: List[PreviewItem] = field(default_factory=list)
    saved: List[dict] = field(default_factory=list)
    skipped: List[PreviewItem] = field(default_factory=list)
    ready: List[dict] = field(default_factory=list)


def preview(records):
    """Wrap parsed records with their review flags."""
    items = []
    for record in records:
        items.append(PreviewItem(
            kind=record.kind,
            record=record,
            missing=record.missing_fields(),
            defaulted=sorted(record.defaulted),
            notes=list(record.notes),
        ))
    return items


# ============================================================================
# DEFAULTS
# ============================================================================

def _fill_flight(data, record, config, today):
    if record.missing_fields():
        logger.debug(f"Flight {record.flight_number} missing {record.missing_fields()}, not saving")
        return None
    return data


def _fill_lodging(data, record, config, today):
    if not data.get('address'):
        data['address'] = UNKNOWN_ADDRESS
    if not data.get('check_in_datetime'):
        data['check_in_datetime'] = join_datetime(today.isoformat(), config['check_in_time'])
    if not data.get('check_out_datetime'):
        check_in_date = data['check_in_datetime'].split('T')[0]
        data['check_out_datetime'] = join_datetime(add_days(check_in_date, 1), config['check_out_time'])
    return data


def _fill_car(data, record, config, today):
    for key in ('pickup_location', 'dropoff_location'):
        if not data.get(key):
            data[key] = UNKNOWN_LOCATION
    if not data.get('company'):
        data['company'] = "Rental Car"
    return data


def _fill_transport(data, record, config, today):
    for key in ('origin', 'destination'):
        if not data.get(key):
            data[key] = UNKNOWN_PLACE
    if data.get('service_number') is None:
        data['service_number'] = ""
    if not data.get('operator'):
        data['operator'] = UNKNOWN_PLACE
    if not data.get('departure_datetime'):
        data['departure_datetime'] = join_datetime(today.isoformat(), "12:00")
    if not data.get('arrival_datetime'):
        data['arrival_datetime'] = data['departure_datetime']
    return data


_FILLERS = {
    'flight': _fill_flight,
    'lodging': _fill_lodging,
    'car': _fill_car,
    'transport': _fill_transport,
}


def fill_defaults(record, trip_id=None, config=None, today=None):
    """Storable dict for a parsed record, or None if it cannot be stored.

    Args:
        record: Parsed record
        trip_id: Trip to attach the booking to
        config: Config dict (check-in/out times, default currency)
        today: date used for made-up dates, defaults to today

    Returns:
        Dict ready for TripStore.create, or None
    """
    config = {**DEFAULTS, **(config or {})}
    today = today or date.today()

    data = record.to_dict()
    data = _FILLERS[record.kind](data, record, config, today)
    if data is None:
        return None

    if not data.get('cost_currency'):
        data['cost_currency'] = config['default_currency']
    data['trip_id'] = trip_id
    if record.defaulted:
        data['defaulted_fields'] = sorted(record.defaulted)
    return data


# ============================================================================
# IMPORT
# ============================================================================

def import_text(text, category, trip_id=None, store=None, config=None, dry_run=False, today=None):
    """Parse confirmation text and save what can be saved.

    Args:
        text: Raw confirmation text
        category: "flight", "transportation", "ground", "car" or "lodging"
        trip_id: Trip to attach bookings to (needed to save)
        store: TripStore, or None to only preview
        config: Config dict
        dry_run: Preview and fill defaults, but do not save
        today: date used for made-up dates

    Returns:
        ImportResult

    Raises:
        ValueError: unknown category, or saving without a trip id
        StoreError: the trip does not exist in the store
    """
    records = parse_text(text or "", category)
    if not records:
        logger.info(f"No {category} bookings recognised")
        return ImportResult(status="empty")

    persist = store is not None and not dry_run
    if persist:
        if trip_id is None:
            raise ValueError("A trip id is required to save bookings")
        if store.get_trip(trip_id) is None:
            raise StoreError(f"No trip with id {trip_id}")

    result = ImportResult(status="ok", items=preview(records))
    for item in result.items:
        data = fill_defaults(item.record, trip_id=trip_id, config=config, today=today)
        if data is None:
            result.skipped.append(item)
            continue
        result.ready.append(data)
        if persist:
            result.saved.append(store.create(item.kind, data))

    if result.skipped or any(item.needs_review for item in result.items):
        result.status = "review"

    logger.info(f"Import {category}: {len(result.items)} found, {len(result.saved)} saved, "
                f"{len(result.skipped)} skipped")
    return result


def import_document(data, category, **kwargs):
    """Like import_text, starting from document bytes (PDF, HTML or text)."""
    return import_text(extract_text_from_document(data), category, **kwargs)
