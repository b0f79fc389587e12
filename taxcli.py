#!/usr/bin/env python3
"""
Unified CLI for congestion tax bookkeeping.

Commands:
  status             - Show registered vehicles with their totals
  rules              - List price windows and exempt dates
  passages           - View recorded passages for a vehicle
  quote              - Show what a passage would cost without recording it
  record             - Record a new passage and charge it
  correct            - Move a passage to a new timestamp and re-price it
  add-rule           - Add a price window
  delete-rule        - Remove a price window
  add-exempt-date    - Add a charge-free date
  delete-exempt-date - Remove a charge-free date
  add-vehicle        - Register a vehicle
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from taxzone import (
    City,
    Passage,
    Price,
    TaxRule,
    TaxService,
    TaxZoneError,
    TimeWindow,
    ValidationError,
    Vehicle,
    VehicleClass,
    VehicleNotFoundError,
    load_registries,
    verify_ledger,
)
from taxzone import loader
from taxzone.config import Settings, parse_log_level
from taxzone.logging_config import configure_logging

# =============================================================================
# Formatting helpers
# =============================================================================


def format_price(price: Optional[Price]) -> str:
    """Format a price for display."""
    return str(price) if price is not None else "-"


def format_timestamp(moment: Optional[datetime]) -> str:
    """Format a passage timestamp for display."""
    return moment.strftime("%Y-%m-%d %H:%M:%S") if moment is not None else "-"


def format_ledger_check(vehicle: Vehicle) -> str:
    """'ok' when the total matches the passages, else the recomputed sum."""
    try:
        verify_ledger(vehicle)
    except TaxZoneError:
        return f"MISMATCH ({vehicle.recomputed_total})"
    return "ok"


def parse_day(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {text!r}", "date", text)


# =============================================================================
# Tables
# =============================================================================


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    rows = []
    for vehicle in vehicles:
        rows.append(
            [
                vehicle.plate.value,
                vehicle.vehicle_class.value,
                str(len(vehicle.passages)),
                format_price(vehicle.last_charge),
                format_price(vehicle.total_accumulated),
                format_ledger_check(vehicle),
            ]
        )
    return rows


def make_rule_table(rules: List[TaxRule]) -> List[List[str]]:
    """Convert rules to table rows, ordered by start time."""
    rows = []
    for rule in sorted(rules, key=lambda r: (r.start, r.end)):
        rows.append([rule.rule_id, str(rule.window), format_price(rule.price)])
    return rows


def make_passage_table(passages: List[Passage]) -> List[List[str]]:
    """Convert passages to table rows."""
    rows = []
    for passage in passages:
        rows.append(
            [
                passage.passage_id,
                format_timestamp(passage.timestamp),
                format_price(passage.charge),
            ]
        )
    return rows


# =============================================================================
# Commands
# =============================================================================


def _find_vehicle(service: TaxService, plate: str) -> Vehicle:
    vehicle = service.vehicles.find_by_plate(plate)
    if vehicle is None:
        raise VehicleNotFoundError(plate.strip().upper())
    return vehicle


def _city(service: TaxService) -> City:
    return service.cities.load_city(service.cities.city_ids()[0])


def cmd_status(service: TaxService, args) -> int:
    """Show registered vehicles with their totals."""
    city = _city(service)
    vehicles = sorted(service.vehicles.all(), key=lambda v: v.plate.value)

    print(f"City: {city.name}")
    print(f"Rules: {len(city.rules)}")
    print(f"Exempt dates: {len(city.exempt_dates)}")
    print(f"Vehicles: {len(vehicles)}")
    print()

    if not vehicles:
        print("No vehicles registered.")
        return 0

    headers = ["Plate", "Class", "Passages", "Last Charge", "Total", "Ledger"]
    print(tabulate(make_vehicle_table(vehicles), headers=headers, tablefmt="simple"))
    return 0


def cmd_rules(service: TaxService, args) -> int:
    """List price windows and exempt dates."""
    city = _city(service)

    print(f"City: {city.name}")
    print(f"Rules: {len(city.rules)}")
    print()

    if city.rules:
        headers = ["Id", "Window", "Price"]
        print(tabulate(make_rule_table(list(city.rules)), headers=headers, tablefmt="simple"))
        print()

    if city.exempt_dates:
        print("EXEMPT DATES:")
        for exempt in sorted(city.exempt_dates, key=lambda d: d.day):
            print(f"  {exempt.day.isoformat()}")
        print()

    return 0


def cmd_passages(service: TaxService, args) -> int:
    """View recorded passages for a vehicle."""
    vehicle = _find_vehicle(service, args.plate)
    passages = vehicle.get_passages_sorted(reverse=not args.asc)

    if args.since:
        since = parse_day(args.since)
        passages = [p for p in passages if p.timestamp.date() >= since]

    print(f"Vehicle: {vehicle.plate} ({vehicle.vehicle_class.value})")
    print(f"Total: {vehicle.total_accumulated}")
    print(f"Last charge: {vehicle.last_charge}")
    print(f"Total passages: {len(vehicle.passages)}")
    if args.since:
        print(f"Showing: {len(passages)} (filtered)")
    print()

    if not passages:
        print("No passages found.")
        return 0

    headers = ["Id", "Timestamp", "Charge"]
    print(tabulate(make_passage_table(passages), headers=headers, tablefmt="simple"))
    return 0


def cmd_quote(service: TaxService, args) -> int:
    """Show what a passage would cost without recording it."""
    vehicle = _find_vehicle(service, args.plate)
    moment = args.timestamp or datetime.now().replace(microsecond=0).isoformat()
    charge = service.quote(vehicle.vehicle_id, moment)
    print(f"Vehicle: {vehicle.plate} ({vehicle.vehicle_class.value})")
    print(f"Time:    {moment}")
    print(f"Charge:  {charge}")
    return 0


def cmd_record(service: TaxService, args) -> int:
    """Record a new passage and charge it."""
    vehicle = _find_vehicle(service, args.plate)
    moment = args.timestamp or datetime.now().replace(microsecond=0).isoformat()
    result = service.record_passage(vehicle.vehicle_id, moment, passage_id=args.id)

    print(f"Recording passage in {args.city_file}:")
    print(f"  Vehicle: {vehicle.plate}")
    print(f"  Id:      {result.passage.passage_id}")
    print(f"  Time:    {format_timestamp(result.passage.timestamp)}")
    print(f"  Charge:  {result.charge}")
    print(f"  Total:   {result.new_total}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    loader.save_passage(args.city_file, vehicle, result.passage)
    print("Passage saved.")
    return 0


def cmd_correct(service: TaxService, args) -> int:
    """Move a passage to a new timestamp and re-price it."""
    result = service.correct_passage_timestamp(args.passage_id, args.timestamp)
    vehicle = service.vehicles.load_vehicle(result.passage.vehicle_id)

    print(f"Correcting passage {args.passage_id} in {args.city_file}:")
    print(f"  Vehicle:    {vehicle.plate}")
    print(f"  New time:   {format_timestamp(result.passage.timestamp)}")
    print(f"  Old charge: {result.old_charge}")
    print(f"  New charge: {result.new_charge}")
    print(f"  Total:      {result.new_total}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    loader.update_passage(args.city_file, vehicle, result.passage)
    print("Passage updated.")
    return 0


def cmd_add_rule(service: TaxService, args) -> int:
    """Add a price window."""
    city = _city(service)
    rule = TaxRule(TimeWindow.parse(args.start, args.end), Price(args.amount), city.city_id, args.id)
    service.cities.add_rule(city.city_id, rule)
    loader.add_rule(args.city_file, rule)
    print(f"Added rule {rule.rule_id}: {rule.window} = {rule.price}")
    return 0


def cmd_delete_rule(service: TaxService, args) -> int:
    """Remove a price window."""
    city = _city(service)
    service.cities.remove_rule(city.city_id, args.rule_id)
    loader.delete_rule(args.city_file, args.rule_id)
    print(f"Deleted rule {args.rule_id}")
    return 0


def cmd_add_exempt_date(service: TaxService, args) -> int:
    """Add a charge-free date."""
    city = _city(service)
    day = parse_day(args.date)
    if city.is_exempt_date(day):
        print(f"{day.isoformat()} is already exempt")
        return 0
    service.cities.add_exempt_date(city.city_id, day)
    loader.add_exempt_date(args.city_file, day)
    print(f"Added exempt date {day.isoformat()}")
    return 0


def cmd_delete_exempt_date(service: TaxService, args) -> int:
    """Remove a charge-free date."""
    city = _city(service)
    day = parse_day(args.date)
    service.cities.remove_exempt_date(city.city_id, day)
    loader.delete_exempt_date(args.city_file, day)
    print(f"Deleted exempt date {day.isoformat()}")
    return 0


def cmd_add_vehicle(service: TaxService, args) -> int:
    """Register a vehicle."""
    city = _city(service)
    vehicle = Vehicle(args.plate, VehicleClass.parse(args.vehicle_class), city.city_id)
    service.vehicles.add(vehicle)
    loader.add_vehicle(args.city_file, vehicle)
    print(f"Registered {vehicle.plate} ({vehicle.vehicle_class.value})")
    return 0


COMMANDS = {
    "status": cmd_status,
    "rules": cmd_rules,
    "passages": cmd_passages,
    "quote": cmd_quote,
    "record": cmd_record,
    "correct": cmd_correct,
    "add-rule": cmd_add_rule,
    "delete-rule": cmd_delete_rule,
    "add-exempt-date": cmd_add_exempt_date,
    "delete-exempt-date": cmd_delete_exempt_date,
    "add-vehicle": cmd_add_vehicle,
}


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(
        description="Congestion tax bookkeeping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cities/gothenburg.yaml status
  %(prog)s cities/gothenburg.yaml rules
  %(prog)s cities/gothenburg.yaml passages ABC123 --since 2025-03-01
  %(prog)s cities/gothenburg.yaml quote ABC123 2025-03-04T07:15:00
  %(prog)s cities/gothenburg.yaml record ABC123 2025-03-04T07:15:00
  %(prog)s cities/gothenburg.yaml correct p-0001 2025-03-04T05:45:00
  %(prog)s cities/gothenburg.yaml add-rule 18:30 19:00 5.00
  %(prog)s cities/gothenburg.yaml add-exempt-date 2026-01-01
""",
    )
    parser.add_argument(
        "city_file",
        type=Path,
        help="Path to city YAML file",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: TAXZONE_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show registered vehicles with their totals")
    subparsers.add_parser("rules", help="List price windows and exempt dates")

    passages_parser = subparsers.add_parser(
        "passages", help="View recorded passages for a vehicle"
    )
    passages_parser.add_argument("plate", type=str, help="Vehicle plate (e.g., ABC123)")
    passages_parser.add_argument(
        "--since",
        type=str,
        help="Show only passages since date (YYYY-MM-DD)",
    )
    passages_parser.add_argument(
        "--asc",
        action="store_true",
        help="Oldest first instead of newest first",
    )

    quote_parser = subparsers.add_parser(
        "quote", help="Show what a passage would cost without recording it"
    )
    quote_parser.add_argument("plate", type=str, help="Vehicle plate")
    quote_parser.add_argument(
        "timestamp",
        type=str,
        nargs="?",
        help="Passage time, ISO 8601 (default: now)",
    )

    record_parser = subparsers.add_parser("record", help="Record a new passage")
    record_parser.add_argument("plate", type=str, help="Vehicle plate")
    record_parser.add_argument(
        "timestamp",
        type=str,
        nargs="?",
        help="Passage time, ISO 8601 (default: now)",
    )
    record_parser.add_argument("--id", type=str, help="Passage id (default: generated)")
    record_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be recorded without saving",
    )

    correct_parser = subparsers.add_parser(
        "correct", help="Move a passage to a new timestamp"
    )
    correct_parser.add_argument("passage_id", type=str, help="Passage id")
    correct_parser.add_argument("timestamp", type=str, help="Corrected time, ISO 8601")
    correct_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without saving",
    )

    add_rule_parser = subparsers.add_parser("add-rule", help="Add a price window")
    add_rule_parser.add_argument("start", type=str, help="Window start (HH:MM)")
    add_rule_parser.add_argument("end", type=str, help="Window end, exclusive (HH:MM)")
    add_rule_parser.add_argument("amount", type=str, help="Price (e.g., 8.00)")
    add_rule_parser.add_argument("--id", type=str, help="Rule id (default: window)")

    delete_rule_parser = subparsers.add_parser("delete-rule", help="Remove a price window")
    delete_rule_parser.add_argument("rule_id", type=str, help="Rule id")

    add_date_parser = subparsers.add_parser(
        "add-exempt-date", help="Add a charge-free date"
    )
    add_date_parser.add_argument("date", type=str, help="Date (YYYY-MM-DD)")

    delete_date_parser = subparsers.add_parser(
        "delete-exempt-date", help="Remove a charge-free date"
    )
    delete_date_parser.add_argument("date", type=str, help="Date (YYYY-MM-DD)")

    add_vehicle_parser = subparsers.add_parser("add-vehicle", help="Register a vehicle")
    add_vehicle_parser.add_argument("plate", type=str, help="Vehicle plate")
    add_vehicle_parser.add_argument(
        "--class",
        dest="vehicle_class",
        choices=[c.value for c in VehicleClass],
        default=VehicleClass.TAXABLE.value,
        help="Vehicle class (default: taxable)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=parse_log_level(args.log_level))

    # Validate city file exists
    if not args.city_file.exists():
        print(f"Error: File not found: {args.city_file}")
        return 1

    try:
        cities, vehicles = load_registries(args.city_file)
        service = TaxService(cities, vehicles)
        return COMMANDS[args.command](service, args)
    except TaxZoneError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
