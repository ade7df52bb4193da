"""JSON parsing and serialization utilities for backend payloads."""

from typing import Any, Dict, List, Optional, Union

from .car import Car, CarCreate, CarUpdate
from .service_record import ServiceRecord, ServiceRecordCreate


def parse_car(dct: Dict[str, Any]) -> Car:
    """Parse a backend car object; missing and null fields both become None."""
    return Car(
        dct["id"],
        dct.get("regNumber") or "",
        dct.get("model") or "",
        dct.get("owner"),
        dct.get("releaseYear"),
        dct.get("mileage"),
        dct.get("createdAt"),
        dct.get("nextServiceDueKm"),
        dct.get("nextServiceDueDate"),
    )


def parse_service_record(dct: Dict[str, Any]) -> ServiceRecord:
    """Parse a backend service record object."""
    return ServiceRecord(
        dct["id"],
        dct.get("carId"),
        dct.get("date"),
        dct.get("type"),
        dct.get("mileage"),
        dct.get("notes"),
        dct.get("cost"),
    )


def parse_cars(data: Optional[List[Dict[str, Any]]]) -> List[Car]:
    """Parse a list of cars; an empty body yields an empty list."""
    return [parse_car(d) for d in data or []]


def parse_service_records(
    data: Optional[List[Dict[str, Any]]],
) -> List[ServiceRecord]:
    """Parse a list of service records; an empty body yields an empty list."""
    return [parse_service_record(d) for d in data or []]


def car_to_dict(payload: Union[CarCreate, CarUpdate]) -> Dict[str, Any]:
    """Serialize a car payload to the backend format (camelCase keys)."""
    d: Dict[str, Any] = {}
    if payload.reg_number is not None:
        d["regNumber"] = payload.reg_number
    if payload.model is not None:
        d["model"] = payload.model
    if payload.mileage is not None:
        d["mileage"] = payload.mileage
    if payload.release_year is not None:
        d["releaseYear"] = payload.release_year
    if payload.owner is not None:
        d["owner"] = payload.owner
    return d


def service_record_to_dict(payload: ServiceRecordCreate) -> Dict[str, Any]:
    """Serialize a service record payload, omitting None values."""
    d: Dict[str, Any] = {
        "date": payload.date,
        "type": payload.service_type,
        "mileage": payload.mileage,
        "cost": payload.cost,
    }
    if payload.notes is not None:
        d["notes"] = payload.notes
    return d
