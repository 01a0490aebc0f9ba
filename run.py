#!/usr/bin/env python3
"""
RoamAtlas Booking Import - Main Runner

Usage:
    python3 run.py flight united.txt                 # Preview flights in a file
    python3 run.py lodging stay.pdf --trip ID        # Import into a trip
    python3 run.py transportation - --dry-run        # Read stdin, save nothing
    python3 run.py --trips                           # List trips
    python3 run.py --new-trip "Lisbon 2026"          # Create a trip
"""

import logging
import sys
from pathlib import Path

from roamatlas.config import CONFIG_FILE, load_config, resolve_data_file
from roamatlas.documents import DocumentError, read_document
from roamatlas.importer import import_text
from roamatlas.parser import CATEGORIES
from roamatlas.pdf_report import describe_record, format_cost, generate_pdf_report, review_flags
from roamatlas.storage import StoreError, TripStore

VERSION = "1.0.0"

HELP = f"""
RoamAtlas Booking Import v{VERSION}

Usage:
    python3 run.py CATEGORY FILE [options]
    python3 run.py --trips
    python3 run.py --new-trip NAME
    python3 run.py --help

CATEGORY is one of: {', '.join(CATEGORIES)}
FILE is a PDF, an HTML or text e-mail, or - to read from stdin.

Options:
    --trip ID       Attach bookings to trip ID and save them
    --dry-run       Show what would be saved, save nothing
    --pdf PATH      Write an import summary PDF
    --raw           Print the text read from FILE
    --config PATH   Use another config file
    --verbose       Show debug logging
"""


def _option(args, name):
    """Value following a --flag, or None."""
    if name not in args:
        return None
    index = args.index(name)
    if index + 1 >= len(args):
        print(f"Error: {name} needs a value")
        sys.exit(2)
    return args[index + 1]


def _positional(args):
    """Arguments that are neither flags nor flag values."""
    takes_value = {'--trip', '--pdf', '--config', '--new-trip'}
    result = []
    skip = False
    for arg in args:
        if skip:
            skip = False
            continue
        if arg in takes_value:
            skip = True
            continue
        if arg.startswith('--'):
            continue
        result.append(arg)
    return result


def setup_logging(config, verbose=False):
    level = logging.DEBUG if verbose else getattr(logging, config['log_level'], logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def list_trips(store):
    trips = store.get_trips()
    if not trips:
        print("No trips yet. Create one with: python3 run.py --new-trip NAME")
        return
    print(f"\n  {'ID':<20} {'Status':<10} Name")
    print(f"  {'-' * 20} {'-' * 10} {'-' * 30}")
    for trip in trips:
        print(f"  {trip['id']:<20} {trip.get('status', ''):<10} {trip.get('name', '')}")
    print()


def display_import(result):
    """Print the preview of an import."""
    print(f"\n  Found {len(result.items)} booking(s)")
    for item in result.items:
        record = item.record
        print(f"\n  [{record.kind}] {describe_record(record)}")
        for name in record.booking_fields():
            value = getattr(record, name)
            if value is None or value == "":
                continue
            marker = "  (defaulted)" if name in record.defaulted else ""
            if name == 'cost_amount':
                value = format_cost(record)
            print(f"      {name:<22} {value}{marker}")
        flags = review_flags(item)
        if flags:
            print(f"      Review: {flags}")

    for item in result.skipped:
        print(f"\n  Not saved, enter by hand: {describe_record(item.record)} "
              f"(missing {', '.join(item.missing)})")


def run_import(args, config, config_file):
    positional = _positional(args)
    if len(positional) < 2:
        print(HELP)
        sys.exit(2)
    category, source = positional[0], positional[1]
    if category not in CATEGORIES:
        print(f"Error: unknown category '{category}'. Use one of: {', '.join(CATEGORIES)}")
        sys.exit(2)

    trip_id = _option(args, '--trip')
    dry_run = "--dry-run" in args
    pdf_path = _option(args, '--pdf')

    try:
        text = read_document(source)
    except DocumentError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if "--raw" in args:
        print("\n=== Extracted text ===")
        print(text)
        print("=== End of text ===")

    store = TripStore(resolve_data_file(config, config_file)) if trip_id else None
    try:
        result = import_text(text, category, trip_id=trip_id, store=store,
                             config=config, dry_run=dry_run)
    except StoreError as e:
        print(f"Error: {e}")
        print("List trips with: python3 run.py --trips")
        sys.exit(1)

    if result.status == "empty":
        print(f"\n  No {category} booking recognised in {source}.")
        print("  Enter it by hand, or run again with --raw to see the text that was read.")
        sys.exit(1)

    display_import(result)

    if trip_id and dry_run:
        print(f"\n  DRY RUN - {len(result.ready)} booking(s) would be saved to trip {trip_id}")
    elif trip_id:
        print(f"\n  Saved {len(result.saved)} booking(s) to trip {trip_id}")
    else:
        print("\n  Preview only. Add --trip ID to save.")

    if result.status == "review":
        print("  Some fields were guessed or are missing - check them before you travel.")

    if pdf_path:
        written = generate_pdf_report(result.items, pdf_path,
                                      title=f"Import Summary - {Path(source).name}")
        if written:
            print(f"  Report written to {written}")
    print()


def main():
    args = sys.argv[1:]

    if not args or "--help" in args or "-h" in args:
        print(HELP)
        return

    config_file = _option(args, '--config') or CONFIG_FILE
    config = load_config(config_file)
    setup_logging(config, verbose="--verbose" in args)

    if "--trips" in args:
        list_trips(TripStore(resolve_data_file(config, config_file)))
        return

    name = _option(args, '--new-trip')
    if name:
        trip = TripStore(resolve_data_file(config, config_file)).create_trip(name)
        print(f"Created trip '{trip['name']}' with id {trip['id']}")
        return

    run_import(args, config, config_file)


if __name__ == "__main__":
    main()
