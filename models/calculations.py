"""Helper functions deriving dashboard view state from cars and service records."""

from datetime import date
from typing import List, Optional

from dateutil.parser import isoparse

from .car import Car
from .service_record import ServiceRecord
from .status import Status

DEFAULT_SERVICE_INTERVAL_KM = 10000


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO date or timestamp string; None when absent or invalid."""
    if not value:
        return None
    try:
        return isoparse(value).date()
    except (ValueError, OverflowError):
        return None


def filter_cars(cars: List[Car], query: Optional[str]) -> List[Car]:
    """
    Filter cars by a case-insensitive substring of reg number or model.

    A blank query returns the given list unchanged.
    """
    normalized = (query or "").strip().lower()
    if not normalized:
        return cars
    return [
        car
        for car in cars
        if normalized in (car.reg_number or "").lower()
        or normalized in (car.model or "").lower()
    ]


def is_due_by_km(car: Car) -> bool:
    """True when current mileage has reached the next service mileage."""
    if car.mileage is None or car.next_service_due_km is None:
        return False
    return car.mileage >= car.next_service_due_km


def is_due_by_date(car: Car, today: Optional[date] = None) -> bool:
    """True when the next service date is strictly before today."""
    due_date = parse_date(car.next_service_due_date)
    if due_date is None:
        return False
    return due_date < (today or date.today())


def is_overdue(car: Car, today: Optional[date] = None) -> bool:
    """Whichever comes first: mileage threshold or due date."""
    return is_due_by_km(car) or is_due_by_date(car, today)


def car_status(car: Car, today: Optional[date] = None) -> Status:
    """Determine badge status for a car."""
    if is_overdue(car, today):
        return Status.OVERDUE
    if car.next_service_due_km is None and parse_date(car.next_service_due_date) is None:
        return Status.UNKNOWN
    return Status.OK


def sort_history(records: List[ServiceRecord]) -> List[ServiceRecord]:
    """Most recent first; records without a date sort last."""
    return sorted(records, key=lambda r: r.date or "", reverse=True)


def suggested_next_service_km(car: Optional[Car]) -> Optional[float]:
    """
    Suggest the next service mileage.

    - Backend threshold when known
    - Otherwise current mileage + DEFAULT_SERVICE_INTERVAL_KM
    """
    if car is None:
        return None
    if car.next_service_due_km is not None:
        return car.next_service_due_km
    if car.mileage is not None:
        return car.mileage + DEFAULT_SERVICE_INTERVAL_KM
    return None
