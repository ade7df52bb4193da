"""Dashboard controller: selection, forms, loading and error state."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, List, Optional

import requests

from api_client import ApiClient, ApiError
from models import (
    Car,
    CarCreate,
    ServiceRecord,
    ServiceRecordCreate,
    car_to_dict,
    filter_cars,
    is_overdue,
    parse_number,
    service_record_to_dict,
    sort_history,
    suggested_next_service_km,
    validate_payload,
)

logger = logging.getLogger(__name__)


def today_iso() -> str:
    return date.today().isoformat()


@dataclass
class ServiceForm:
    """Raw service record form fields, as typed by the user."""

    date: str = field(default_factory=today_iso)
    type: str = ""
    mileage: str = ""
    notes: str = ""
    cost: str = ""


@dataclass
class CarForm:
    """Raw car form fields, as typed by the user."""

    reg_number: str = ""
    model: str = ""
    mileage: str = ""
    release_year: str = ""
    owner: str = ""


def error_text(err: Exception, fallback: str) -> str:
    """Message to show for a failed call: backend details when available."""
    if isinstance(err, ApiError):
        return err.details or str(err)
    return fallback


class Dashboard:
    """
    State for one dashboard session.

    Every backend call goes through the ApiClient. Failures are stored in
    error_message and leave the rest of the state as it was, except history
    which is emptied when it cannot be loaded.
    """

    def __init__(self, client: ApiClient):
        self.client = client

        self.cars: List[Car] = []
        self.cars_loading = True
        self.history: List[ServiceRecord] = []
        self.history_loading = False
        self.selected_car_id: Optional[int] = None
        self.query = ""
        self.error_message: Optional[str] = None

        self.service_dialog_open = False
        self.service_submitting = False
        self.service_form = ServiceForm()

        self.car_dialog_open = False
        self.car_submitting = False
        self.car_form = CarForm()

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def selected_car(self) -> Optional[Car]:
        for car in self.cars:
            if car.id == self.selected_car_id:
                return car
        return None

    @property
    def filtered_cars(self) -> List[Car]:
        return filter_cars(self.cars, self.query)

    @property
    def history_for_selected(self) -> List[ServiceRecord]:
        return sort_history(self.history)

    @property
    def next_service_km(self) -> Optional[float]:
        return suggested_next_service_km(self.selected_car)

    @property
    def selected_car_overdue(self) -> bool:
        car = self.selected_car
        return car is not None and is_overdue(car)

    # =========================================================================
    # Loading
    # =========================================================================
    #
    # Public transitions clear error_message once, then run the _fetch_*
    # helpers, which only ever set it. A failure anywhere in a transition
    # stays visible after the later reloads.

    def mount(self, car_id: Optional[int] = None) -> None:
        """Initial load, starting on car_id when it exists."""
        self.error_message = None
        self.selected_car_id = car_id
        self._fetch_cars()
        if car_id is not None and self.selected_car_id == car_id and self.selected_car:
            self._fetch_history(car_id)

    def load_cars(self) -> None:
        """Fetch the car list, keeping the selection when it still exists."""
        self.error_message = None
        self._fetch_cars()

    def load_history(self, car_id: int) -> None:
        self.error_message = None
        self._fetch_history(car_id)

    def select_car(self, car_id: Optional[int]) -> None:
        """Change selection; a new selection loads its history once."""
        if car_id == self.selected_car_id:
            return
        self.error_message = None
        self._select(car_id)

    def _fetch_cars(self) -> None:
        self.cars_loading = True
        try:
            cars = self.client.list_cars()
        except (ApiError, requests.RequestException) as err:
            logger.warning("Failed to load cars: %s", err)
            self.error_message = error_text(err, "Failed to load cars")
            return
        finally:
            self.cars_loading = False

        self.cars = cars
        if any(car.id == self.selected_car_id for car in cars):
            return
        self._select(cars[0].id if cars else None)

    def _fetch_history(self, car_id: int) -> None:
        self.history_loading = True
        try:
            self.history = self.client.list_service_history(car_id)
        except (ApiError, requests.RequestException) as err:
            logger.warning("Failed to load history for car %s: %s", car_id, err)
            self.error_message = error_text(err, "Failed to load history")
            self.history = []
        finally:
            self.history_loading = False

    def _select(self, car_id: Optional[int]) -> None:
        if car_id == self.selected_car_id:
            return
        self.selected_car_id = car_id
        if car_id is None:
            self.history = []
        else:
            self._fetch_history(car_id)

    def set_query(self, query: str) -> None:
        self.query = query

    # =========================================================================
    # Dialogs
    # =========================================================================

    def open_service_dialog(self, **defaults) -> None:
        car = self.selected_car
        form = ServiceForm()
        if car is not None and car.mileage is not None:
            form.mileage = str(car.mileage)
        self.service_form = replace(form, **defaults)
        self.service_dialog_open = True

    def close_service_dialog(self) -> None:
        self.service_dialog_open = False

    def open_car_dialog(self, **defaults) -> None:
        self.car_form = replace(CarForm(), **defaults)
        self.car_dialog_open = True

    def close_car_dialog(self) -> None:
        self.car_dialog_open = False

    # =========================================================================
    # Submissions
    # =========================================================================

    def build_service_payload(self) -> Optional[ServiceRecordCreate]:
        """Parse and validate the service form; None when invalid."""
        form = self.service_form
        payload = ServiceRecordCreate(
            date=form.date.strip(),
            service_type=form.type.strip(),
            mileage=parse_number(form.mileage),
            cost=parse_number(form.cost),
            notes=form.notes.strip(),
        )
        errors = validate_payload("serviceRecordCreate", service_record_to_dict(payload))
        if errors:
            self.error_message = errors[0]
            return None
        return payload

    def build_car_payload(self) -> Optional[CarCreate]:
        """Parse and validate the car form; None when invalid."""
        form = self.car_form
        payload = CarCreate(
            reg_number=form.reg_number.strip(),
            model=form.model.strip(),
            mileage=parse_number(form.mileage),
            release_year=parse_number(form.release_year),
            owner=form.owner.strip() or None,
        )
        errors = validate_payload("carCreate", car_to_dict(payload))
        if errors:
            self.error_message = errors[0]
            return None
        return payload

    def submit_service_record(self) -> bool:
        """Log a service for the selected car. Returns True on success."""
        car = self.selected_car
        if car is None:
            self.error_message = "Select a car before adding service records."
            return False

        payload = self.build_service_payload()
        if payload is None:
            return False

        self.service_submitting = True
        self.error_message = None
        try:
            self.client.create_service_record(car.id, payload)
        except (ApiError, requests.RequestException) as err:
            logger.warning("Failed to create record for car %s: %s", car.id, err)
            self.error_message = error_text(err, "Failed to create record")
            return False
        finally:
            self.service_submitting = False

        self.service_dialog_open = False
        self._fetch_history(car.id)
        self._fetch_cars()
        return True

    def submit_car(self) -> Optional[Car]:
        """Create a car from the form and select it. Returns the new car."""
        payload = self.build_car_payload()
        if payload is None:
            return None

        self.car_submitting = True
        self.error_message = None
        try:
            created = self.client.create_car(payload)
        except (ApiError, requests.RequestException) as err:
            logger.warning("Failed to create car %s: %s", payload.reg_number, err)
            self.error_message = error_text(err, "Failed to create car")
            return None
        finally:
            self.car_submitting = False

        self.car_dialog_open = False
        self._fetch_cars()
        if created is not None and created.id:
            self._select(created.id)
        return created

    def delete_prompt(self, car: Car) -> str:
        return f"Delete {car.reg_number}? This cannot be undone."

    def delete_selected_car(self, confirm: Callable[[str], bool]) -> bool:
        """Delete the selected car once confirm(prompt) agrees."""
        car = self.selected_car
        if car is None:
            return False
        if not confirm(self.delete_prompt(car)):
            return False

        self.error_message = None
        try:
            self.client.delete_car(car.id)
        except (ApiError, requests.RequestException) as err:
            logger.warning("Failed to delete car %s: %s", car.id, err)
            self.error_message = error_text(err, "Failed to delete car")
            return False

        remaining = [c for c in self.cars if c.id != car.id]
        self.cars = remaining
        self.history = []
        self._select(remaining[0].id if remaining else None)
        self._fetch_cars()
        return True
