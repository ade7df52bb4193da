#!/usr/bin/env python3
"""
Command-line front end for the fleet service backend.

Commands:
  cars         - List cars with their service status
  show         - Show one car's details, next service and history
  history      - View a car's service history
  add-car      - Register a new car
  log          - Add a service record to a car
  update-miles - Update a car's current mileage
  delete       - Delete a car (asks for confirmation)
"""

import argparse
import logging
import sys
from typing import List, Optional

import requests
from tabulate import tabulate

from api_client import ApiClient, ApiError
from config import LOG_LEVELS, load_settings, normalize_api_base
from dashboard import Dashboard, error_text
from models import (
    Car,
    CarUpdate,
    ServiceRecord,
    Status,
    car_status,
    car_to_dict,
    parse_number,
    validate_payload,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"{cost:,.2f}" if cost is not None else "-"


def format_status(status: Status) -> str:
    """Format a car status for display."""
    return {
        Status.OVERDUE: "OVERDUE",
        Status.OK: "ok",
        Status.UNKNOWN: "-",
    }.get(status, "-")


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_cars_table(cars: List[Car]) -> List[List[str]]:
    """Convert cars to table rows."""
    rows = []
    for car in cars:
        rows.append(
            [
                str(car.id),
                car.reg_number,
                car.model,
                car.owner or "-",
                format_km(car.mileage),
                format_km(car.next_service_due_km),
                car.next_service_due_date or "-",
                format_status(car_status(car)),
            ]
        )
    return rows


def make_history_table(records: List[ServiceRecord]) -> List[List[str]]:
    """Convert service records to table rows."""
    rows = []
    for record in records:
        rows.append(
            [
                record.date or "-",
                record.service_type or "-",
                format_km(record.mileage),
                format_cost(record.cost),
                truncate(record.notes),
            ]
        )
    return rows


def print_error(dashboard: Dashboard) -> int:
    print(f"Error: {dashboard.error_message}")
    return 1


def print_history(dashboard: Dashboard) -> None:
    records = dashboard.history_for_selected
    if not records:
        print("No service records found.")
        return
    total_cost = sum(r.cost for r in records if r.cost is not None)
    headers = ["Date", "Type", "Mileage", "Cost", "Notes"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    if total_cost > 0:
        print()
        print(f"Total cost: {total_cost:,.2f}")


def open_dashboard(client: ApiClient, car_id: Optional[int] = None) -> Dashboard:
    """Load cars and, when given, select one car."""
    dashboard = Dashboard(client)
    dashboard.mount(car_id)
    if dashboard.error_message or car_id is None:
        return dashboard
    if dashboard.selected_car_id != car_id:
        dashboard.error_message = f"Car {car_id} not found"
    return dashboard


# =============================================================================
# Commands
# =============================================================================


def cmd_cars(args, client: ApiClient) -> int:
    """List cars with their service status."""
    dashboard = open_dashboard(client)
    if dashboard.error_message:
        return print_error(dashboard)

    dashboard.set_query(args.search or "")
    cars = dashboard.filtered_cars
    overdue = sum(1 for c in cars if car_status(c) == Status.OVERDUE)

    print(f"Cars: {len(dashboard.cars)}")
    if args.search:
        print(f"Showing: {len(cars)} (filtered by '{args.search}')")
    if overdue:
        print(f"Overdue: {overdue}")
    print()

    if not cars:
        print("No cars found.")
        return 0

    headers = ["ID", "Reg", "Model", "Owner", "Mileage", "Next (km)", "Next (date)", "Status"]
    print(tabulate(make_cars_table(cars), headers=headers, tablefmt="simple"))
    return 0


def cmd_show(args, client: ApiClient) -> int:
    """Show one car's details, next service and history."""
    dashboard = open_dashboard(client, args.car_id)
    if dashboard.error_message:
        return print_error(dashboard)

    car = dashboard.selected_car
    print(f"Car:          {car.name}")
    print(f"Owner:        {car.owner or '-'}")
    print(f"Release year: {car.release_year or '-'}")
    print(f"Mileage:      {format_km(car.mileage)}")
    print(f"Next service: {format_km(dashboard.next_service_km)}", end="")
    if car.next_service_due_date:
        print(f" or {car.next_service_due_date}", end="")
    print()
    if dashboard.selected_car_overdue:
        print("Status:       OVERDUE")
    print()
    print_history(dashboard)
    return 0


def cmd_history(args, client: ApiClient) -> int:
    """View a car's service history."""
    dashboard = open_dashboard(client, args.car_id)
    if dashboard.error_message:
        return print_error(dashboard)

    print(f"Car: {dashboard.selected_car.name}")
    print(f"Total services: {len(dashboard.history)}")
    print()
    print_history(dashboard)
    return 0


def cmd_add_car(args, client: ApiClient) -> int:
    """Register a new car."""
    dashboard = Dashboard(client)
    dashboard.open_car_dialog(
        reg_number=args.reg,
        model=args.model,
        mileage=args.mileage or "",
        release_year=args.release_year or "",
        owner=args.owner or "",
    )

    payload = dashboard.build_car_payload()
    if payload is None:
        return print_error(dashboard)

    print("Adding car:")
    print(f"  Reg:     {payload.reg_number}")
    print(f"  Model:   {payload.model}")
    if payload.mileage is not None:
        print(f"  Mileage: {format_km(payload.mileage)}")
    if payload.release_year is not None:
        print(f"  Year:    {payload.release_year}")
    if payload.owner:
        print(f"  Owner:   {payload.owner}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    created = dashboard.submit_car()
    if dashboard.error_message:
        return print_error(dashboard)
    if created is not None:
        print(f"Car saved with id {created.id}.")
    else:
        print("Car saved.")
    return 0


def cmd_log(args, client: ApiClient) -> int:
    """Add a service record to a car."""
    dashboard = open_dashboard(client, args.car_id)
    if dashboard.error_message:
        return print_error(dashboard)

    defaults = {
        "type": args.type,
        "mileage": args.mileage,
        "cost": args.cost,
        "notes": args.notes or "",
    }
    if args.date:
        defaults["date"] = args.date
    dashboard.open_service_dialog(**defaults)

    payload = dashboard.build_service_payload()
    if payload is None:
        return print_error(dashboard)

    print(f"Adding service record to {dashboard.selected_car.name}:")
    print(f"  Type:    {payload.service_type}")
    print(f"  Date:    {payload.date}")
    print(f"  Mileage: {format_km(payload.mileage)}")
    print(f"  Cost:    {format_cost(payload.cost)}")
    if payload.notes:
        print(f"  Notes:   {payload.notes}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    if not dashboard.submit_service_record():
        return print_error(dashboard)
    print("Entry saved.")
    return 0


def cmd_update_miles(args, client: ApiClient) -> int:
    """Update a car's current mileage."""
    dashboard = open_dashboard(client, args.car_id)
    if dashboard.error_message:
        return print_error(dashboard)

    car = dashboard.selected_car
    payload = CarUpdate(mileage=parse_number(args.mileage))
    errors = validate_payload("carUpdate", car_to_dict(payload))
    if errors:
        print(f"Error: {errors[0]}")
        return 1

    print(f"Car: {car.name}")
    print(f"Current mileage: {format_km(car.mileage)}")
    print(f"New mileage:     {format_km(payload.mileage)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        client.update_car(car.id, payload)
    except (ApiError, requests.RequestException) as err:
        print(f"Error: {error_text(err, 'Failed to update car')}")
        return 1
    print("Mileage updated.")
    return 0


def cmd_delete(args, client: ApiClient) -> int:
    """Delete a car after confirmation."""
    dashboard = open_dashboard(client, args.car_id)
    if dashboard.error_message:
        return print_error(dashboard)

    def confirm(prompt: str) -> bool:
        if args.yes:
            return True
        return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")

    if not dashboard.delete_selected_car(confirm):
        if dashboard.error_message:
            return print_error(dashboard)
        print("Cancelled.")
        return 0
    print("Car deleted.")
    return 0


# =============================================================================
# Main
# =============================================================================


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Fleet maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cars
  %(prog)s cars --search volvo
  %(prog)s show 3
  %(prog)s add-car --reg ABC123 --model "Volvo V70" --mileage 120000
  %(prog)s log 3 --type "Oil change" --mileage 125000 --cost 89.90
  %(prog)s update-miles 3 126500
  %(prog)s delete 3
""",
    )
    parser.add_argument(
        "--api-base",
        type=str,
        default=settings.api_base,
        help=f"Backend API base URL (default: {settings.api_base})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=LOG_LEVELS,
        type=str.upper,
        help=f"Log level (default: {settings.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    cars_parser = subparsers.add_parser("cars", help="List cars with their service status")
    cars_parser.add_argument(
        "--search",
        type=str,
        help="Filter by reg number or model (case-insensitive)",
    )

    show_parser = subparsers.add_parser("show", help="Show one car with its history")
    show_parser.add_argument("car_id", type=int, help="Car id")

    history_parser = subparsers.add_parser("history", help="View a car's service history")
    history_parser.add_argument("car_id", type=int, help="Car id")

    add_car_parser = subparsers.add_parser("add-car", help="Register a new car")
    add_car_parser.add_argument("--reg", required=True, help="Registration number")
    add_car_parser.add_argument("--model", required=True, help="Model name")
    add_car_parser.add_argument("--mileage", type=str, help="Current mileage (km)")
    add_car_parser.add_argument("--release-year", type=str, help="Release year")
    add_car_parser.add_argument("--owner", type=str, help="Owner name")
    add_car_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    log_parser = subparsers.add_parser("log", help="Add a service record")
    log_parser.add_argument("car_id", type=int, help="Car id")
    log_parser.add_argument("--type", required=True, help="Service type (e.g. 'Oil change')")
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument("--mileage", required=True, help="Mileage at time of service")
    log_parser.add_argument("--cost", required=True, help="Cost of service")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Update a car's current mileage"
    )
    update_miles_parser.add_argument("car_id", type=int, help="Car id")
    update_miles_parser.add_argument("mileage", type=str, help="Current mileage")
    update_miles_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a car")
    delete_parser.add_argument("car_id", type=int, help="Car id")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    client = ApiClient(normalize_api_base(args.api_base), timeout=settings.timeout)

    # Dispatch to command handler
    if args.command == "cars":
        return cmd_cars(args, client)
    elif args.command == "show":
        return cmd_show(args, client)
    elif args.command == "history":
        return cmd_history(args, client)
    elif args.command == "add-car":
        return cmd_add_car(args, client)
    elif args.command == "log":
        return cmd_log(args, client)
    elif args.command == "update-miles":
        return cmd_update_miles(args, client)
    elif args.command == "delete":
        return cmd_delete(args, client)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
