"""
Fleet maintenance models.

This package provides data models for the service dashboard:
- Status: Urgency levels (OVERDUE, OK, UNKNOWN)
- Car: Fleet vehicle plus create/update payloads
- ServiceRecord: Service history entries plus the create payload
- Calculations: Derived view state (search, overdue, history order)
- Loader: Backend JSON parsing and serialization
- Validation: Client-side payload checks
"""

from .status import Status
from .car import Car, CarCreate, CarUpdate
from .service_record import ServiceRecord, ServiceRecordCreate
from .calculations import (
    DEFAULT_SERVICE_INTERVAL_KM,
    car_status,
    filter_cars,
    is_overdue,
    parse_date,
    sort_history,
    suggested_next_service_km,
)
from .loader import (
    car_to_dict,
    parse_car,
    parse_cars,
    parse_service_record,
    parse_service_records,
    service_record_to_dict,
)
from .validation import parse_number, validate_payload

__all__ = [
    "Status",
    "Car",
    "CarCreate",
    "CarUpdate",
    "ServiceRecord",
    "ServiceRecordCreate",
    "DEFAULT_SERVICE_INTERVAL_KM",
    "car_status",
    "filter_cars",
    "is_overdue",
    "parse_date",
    "sort_history",
    "suggested_next_service_km",
    "car_to_dict",
    "parse_car",
    "parse_cars",
    "parse_service_record",
    "parse_service_records",
    "service_record_to_dict",
    "parse_number",
    "validate_payload",
]
