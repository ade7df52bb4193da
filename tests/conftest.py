#!/usr/bin/env python3
"""Shared fixtures: an in-memory backend speaking the requests.Session API."""

import json
import re
from urllib.parse import urlparse

import pytest

from api_client import ApiClient

BASE_URL = "http://backend.test/api"


class FakeResponse:
    """Just enough of requests.Response for ApiClient."""

    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


def json_response(data, status_code=200):
    return FakeResponse(status_code, json.dumps(data))


class FakeBackend:
    """
    In-memory backend for the car and service record routes.

    With legacy_routes=True it behaves like an older backend: POST /car and
    GET /cars/{id}/service-history answer 404.
    """

    def __init__(self, cars=None, history=None, legacy_routes=False):
        self.cars = {c["id"]: dict(c) for c in cars or []}
        self.history = {k: list(v) for k, v in (history or {}).items()}
        self.legacy_routes = legacy_routes
        self.calls = []
        self.overrides = {}

    def paths(self, method=None):
        return [p for m, p in self.calls if method is None or m == method]

    def fail(self, method, path, status_code, text=""):
        """Make the next calls to a route answer with a fixed response."""
        self.overrides[(method, path)] = FakeResponse(status_code, text)

    def request(self, method, url, headers=None, data=None, timeout=None, **kwargs):
        path = urlparse(url).path
        if path.startswith("/api"):
            path = path[len("/api"):]
        self.calls.append((method, path))

        if (method, path) in self.overrides:
            return self.overrides[(method, path)]

        body = json.loads(data) if data else None

        if path == "/cars" and method == "GET":
            return json_response(list(self.cars.values()))
        if path == "/car" and method == "POST":
            if self.legacy_routes:
                return FakeResponse(404, '{"error":"Not Found"}')
            return self._create_car(body)
        if path == "/cars" and method == "POST":
            return self._create_car(body)

        match = re.fullmatch(r"/cars/(\d+)", path)
        if match:
            car_id = int(match.group(1))
            if car_id not in self.cars:
                return FakeResponse(404, "Car not found")
            if method == "GET":
                return json_response(self.cars[car_id])
            if method == "PUT":
                self.cars[car_id].update(body)
                return json_response(self.cars[car_id])
            if method == "DELETE":
                del self.cars[car_id]
                return FakeResponse(204, "")

        match = re.fullmatch(r"/cars/(\d+)/(service-history|service-records)", path)
        if match:
            car_id = int(match.group(1))
            if method == "GET":
                if match.group(2) == "service-history" and self.legacy_routes:
                    return FakeResponse(404, "")
                return json_response(self.history.get(car_id, []))
            if method == "POST" and match.group(2) == "service-records":
                records = self.history.setdefault(car_id, [])
                record = dict(body, id=len(records) + 1, carId=car_id)
                records.append(record)
                return json_response(record, 201)

        return FakeResponse(404, "No route")

    def _create_car(self, body):
        car_id = max(self.cars, default=0) + 1
        car = dict(body, id=car_id, createdAt="2026-10-19T09:00:00Z")
        self.cars[car_id] = car
        return json_response(car, 201)


@pytest.fixture
def cars_data():
    return [
        {
            "id": 1,
            "regNumber": "ABC123",
            "model": "Volvo V70",
            "owner": "Depot North",
            "mileage": 12000,
            "nextServiceDueKm": 10000,
        },
        {
            "id": 2,
            "regNumber": "XYZ789",
            "model": "Toyota Corolla",
            "mileage": 8000,
            "nextServiceDueKm": 10000,
        },
    ]


@pytest.fixture
def history_data():
    return {
        1: [
            {"id": 1, "date": "2025-03-01", "type": "Oil change", "mileage": 9000, "cost": 80},
            {"id": 2, "date": "2026-01-15", "type": "Brakes", "mileage": 11500, "cost": 240},
        ],
        2: [
            {"id": 3, "date": "2026-02-01", "type": "Tires", "mileage": 7000, "cost": 400},
        ],
    }


@pytest.fixture
def backend(cars_data, history_data):
    return FakeBackend(cars=cars_data, history=history_data)


@pytest.fixture
def legacy_backend(cars_data, history_data):
    return FakeBackend(cars=cars_data, history=history_data, legacy_routes=True)


@pytest.fixture
def client(backend):
    return ApiClient(BASE_URL, session=backend)
