"""HTTP client for the fleet maintenance backend."""

import json
import logging
from typing import Any, Callable, List, Optional, TypeVar

import requests

from models import (
    Car,
    CarCreate,
    CarUpdate,
    ServiceRecord,
    ServiceRecordCreate,
    car_to_dict,
    parse_car,
    parse_cars,
    parse_service_record,
    parse_service_records,
    service_record_to_dict,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS = {"Content-Type": "application/json"}


class ApiError(Exception):
    """A failed backend call: non-2xx status or an unparseable body."""

    def __init__(self, message: str, status: int, details: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.details = details


class ApiClient:
    """Typed wrapper over the backend's JSON routes."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method: str, path: str, payload: Any = None) -> Any:
        """
        Issue a JSON request and decode the response.

        - Non-2xx: ApiError carrying status and raw body
        - Empty body: None
        - Body that is not JSON: ApiError("Invalid JSON response")
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        response = self.session.request(
            method,
            url,
            headers=JSON_HEADERS,
            data=json.dumps(payload) if payload is not None else None,
            timeout=self.timeout,
        )

        text = response.text
        if not 200 <= response.status_code < 300:
            raise ApiError(
                f"Request failed ({response.status_code})", response.status_code, text
            )

        if not text:
            return None

        try:
            return json.loads(text)
        except ValueError:
            raise ApiError("Invalid JSON response", response.status_code, text)

    def _with_fallback(
        self, primary: Callable[[], T], secondary: Callable[[], T], label: str
    ) -> T:
        """
        Try the primary route; only a 404 falls through to the secondary.

        Legacy route names are still accepted by some backend versions.
        TODO: drop the secondary routes once every deployed backend serves
        /car and /service-history.
        """
        try:
            return primary()
        except ApiError as err:
            if err.status != 404:
                raise
        logger.info("Primary route for %s returned 404, trying legacy route", label)
        return secondary()

    # =========================================================================
    # Cars
    # =========================================================================

    def list_cars(self) -> List[Car]:
        return parse_cars(self.request("GET", "/cars"))

    def get_car(self, car_id: int) -> Optional[Car]:
        data = self.request("GET", f"/cars/{car_id}")
        return parse_car(data) if data else None

    def create_car(self, payload: CarCreate) -> Optional[Car]:
        body = car_to_dict(payload)
        data = self._with_fallback(
            lambda: self.request("POST", "/car", body),
            lambda: self.request("POST", "/cars", body),
            "create car",
        )
        return parse_car(data) if data else None

    def update_car(self, car_id: int, payload: CarUpdate) -> Optional[Car]:
        data = self.request("PUT", f"/cars/{car_id}", car_to_dict(payload))
        return parse_car(data) if data else None

    def delete_car(self, car_id: int) -> None:
        self.request("DELETE", f"/cars/{car_id}")

    # =========================================================================
    # Service records
    # =========================================================================

    def list_service_history(self, car_id: int) -> List[ServiceRecord]:
        data = self._with_fallback(
            lambda: self.request("GET", f"/cars/{car_id}/service-history"),
            lambda: self.request("GET", f"/cars/{car_id}/service-records"),
            "service history",
        )
        return parse_service_records(data)

    def create_service_record(
        self, car_id: int, payload: ServiceRecordCreate
    ) -> Optional[ServiceRecord]:
        data = self.request(
            "POST", f"/cars/{car_id}/service-records", service_record_to_dict(payload)
        )
        return parse_service_record(data) if data else None
