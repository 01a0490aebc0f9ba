"""
Parsed booking records.

Records are immutable and every booking field is optional: None means the
extractor could not recover it. Timestamps are local wall-clock strings
("YYYY-MM-DDTHH:MM:SS", no timezone) and amounts are Decimals. The
currency is only set alongside an amount read from the text.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import ClassVar, FrozenSet, Optional, Tuple


class FieldStatus(Enum):
    RECOVERED = "recovered"
    DEFAULTED = "defaulted"
    ABSENT = "absent"


_META_FIELDS = ('defaulted', 'notes')


@dataclass(frozen=True)
class _Record:
    """Common behaviour for all parsed records."""

    kind: ClassVar[str] = "record"
    required: ClassVar[Tuple[str, ...]] = ()

    def field_status(self, name):
        """Tell whether a field was found in the text, made up, or missing."""
        if name in self.defaulted:
            return FieldStatus.DEFAULTED
        if getattr(self, name) is None:
            return FieldStatus.ABSENT
        return FieldStatus.RECOVERED

    def booking_fields(self):
        return [f.name for f in fields(self) if f.name not in _META_FIELDS]

    def missing_fields(self):
        """Required fields that are still None."""
        return [name for name in self.required if getattr(self, name) is None]

    def to_dict(self):
        data = {}
        for name in self.booking_fields():
            value = getattr(self, name)
            if isinstance(value, Decimal):
                value = str(value)
            data[name] = value
        return data


@dataclass(frozen=True)
class ParsedFlight(_Record):
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_datetime: Optional[str] = None
    arrival_datetime: Optional[str] = None
    confirmation_number: Optional[str] = None
    cost_amount: Optional[Decimal] = None
    cost_currency: Optional[str] = None
    defaulted: FrozenSet[str] = frozenset()
    notes: Tuple[str, ...] = ()

    kind: ClassVar[str] = "flight"
    required: ClassVar[Tuple[str, ...]] = (
        'airline', 'flight_number', 'origin', 'destination',
        'departure_datetime', 'arrival_datetime',
    )


@dataclass(frozen=True)
class ParsedGroundTransport(_Record):
    mode: str = "bus"
    operator: Optional[str] = None
    service_number: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_datetime: Optional[str] = None
    arrival_datetime: Optional[str] = None
    confirmation_number: Optional[str] = None
    seat_info: Optional[str] = None
    cost_amount: Optional[Decimal] = None
    cost_currency: Optional[str] = None
    defaulted: FrozenSet[str] = frozenset()
    notes: Tuple[str, ...] = ()

    kind: ClassVar[str] = "transport"
    required: ClassVar[Tuple[str, ...]] = (
        'operator', 'origin', 'destination',
        'departure_datetime', 'arrival_datetime',
    )


@dataclass(frozen=True)
class ParsedCarRental(_Record):
    company: Optional[str] = None
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    pickup_datetime: Optional[str] = None
    dropoff_datetime: Optional[str] = None
    confirmation_number: Optional[str] = None
    cost_amount: Optional[Decimal] = None
    cost_currency: Optional[str] = None
    defaulted: FrozenSet[str] = frozenset()
    notes: Tuple[str, ...] = ()

    kind: ClassVar[str] = "car"
    required: ClassVar[Tuple[str, ...]] = (
        'company', 'pickup_datetime', 'dropoff_datetime',
    )


@dataclass(frozen=True)
class ParsedLodging(_Record):
    property_name: Optional[str] = None
    address: Optional[str] = None
    check_in_datetime: Optional[str] = None
    check_out_datetime: Optional[str] = None
    confirmation_number: Optional[str] = None
    cost_amount: Optional[Decimal] = None
    cost_currency: Optional[str] = None
    defaulted: FrozenSet[str] = frozenset()
    notes: Tuple[str, ...] = ()

    kind: ClassVar[str] = "lodging"
    required: ClassVar[Tuple[str, ...]] = (
        'property_name', 'address', 'check_in_datetime', 'check_out_datetime',
    )
