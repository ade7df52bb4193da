"""ServiceRecord classes for maintenance performed on a car."""

from dataclasses import dataclass
from typing import Optional, Union


class ServiceRecord:
    """A record of maintenance performed."""

    def __init__(
            self,
            id: Union[int, str],
            car_id: Optional[int] = None,
            date: Optional[str] = None,
            service_type: Optional[str] = None,
            mileage: Optional[float] = None,
            notes: Optional[str] = None,
            cost: Optional[float] = None,
    ):
        self.id = id
        self.car_id = car_id
        self.date = date
        self.service_type = service_type
        self.mileage = mileage
        self.notes = notes
        self.cost = cost


@dataclass
class ServiceRecordCreate:
    """Payload for logging a service against a car."""

    date: str
    service_type: str
    mileage: float
    cost: float
    notes: Optional[str] = None
