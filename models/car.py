"""Car classes for fleet vehicles and the payloads that create or update them."""

from dataclasses import dataclass
from typing import Optional


class Car:
    """A fleet vehicle as returned by the backend."""

    def __init__(
        self,
        id: int,
        reg_number: str,
        model: str,
        owner: Optional[str] = None,
        release_year: Optional[int] = None,
        mileage: Optional[float] = None,
        created_at: Optional[str] = None,
        next_service_due_km: Optional[float] = None,
        next_service_due_date: Optional[str] = None,
    ):
        self.id = id
        self.reg_number = reg_number
        self.model = model
        self.owner = owner
        self.release_year = release_year
        self.mileage = mileage
        self.created_at = created_at
        self.next_service_due_km = next_service_due_km
        self.next_service_due_date = next_service_due_date

    @property
    def name(self) -> str:
        """Human-readable label: registration and model."""
        return f"{self.reg_number} {self.model}"


@dataclass
class CarCreate:
    """Payload for registering a new car."""

    reg_number: str
    model: str
    mileage: Optional[float] = None
    release_year: Optional[int] = None
    owner: Optional[str] = None


@dataclass
class CarUpdate:
    """Partial update; only fields that are not None are sent."""

    reg_number: Optional[str] = None
    model: Optional[str] = None
    mileage: Optional[float] = None
    release_year: Optional[int] = None
    owner: Optional[str] = None
