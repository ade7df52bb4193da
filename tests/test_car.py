#!/usr/bin/env python3
"""Tests for Car classes."""

from models import Car, CarCreate, CarUpdate


class TestCar:
    """Tests for Car class."""

    def test_name_property(self):
        """Name property combines reg number and model."""
        car = Car(1, "ABC123", "Volvo V70")
        assert car.name == "ABC123 Volvo V70"

    def test_attributes(self):
        """All attributes are stored correctly."""
        car = Car(
            7,
            "XYZ789",
            "Toyota Corolla",
            owner="Depot North",
            release_year=2018,
            mileage=45000,
            created_at="2026-01-02T10:00:00Z",
            next_service_due_km=50000,
            next_service_due_date="2026-12-01",
        )
        assert car.id == 7
        assert car.reg_number == "XYZ789"
        assert car.model == "Toyota Corolla"
        assert car.owner == "Depot North"
        assert car.release_year == 2018
        assert car.mileage == 45000
        assert car.created_at == "2026-01-02T10:00:00Z"
        assert car.next_service_due_km == 50000
        assert car.next_service_due_date == "2026-12-01"

    def test_optional_attributes_default_to_none(self):
        car = Car(1, "ABC123", "Volvo V70")
        assert car.owner is None
        assert car.release_year is None
        assert car.mileage is None
        assert car.next_service_due_km is None
        assert car.next_service_due_date is None


class TestCarPayloads:
    """Tests for CarCreate and CarUpdate."""

    def test_create_optional_fields_default_to_none(self):
        payload = CarCreate("ABC123", "Volvo V70")
        assert payload.mileage is None
        assert payload.release_year is None
        assert payload.owner is None

    def test_update_all_fields_optional(self):
        payload = CarUpdate(mileage=60000)
        assert payload.mileage == 60000
        assert payload.reg_number is None
        assert payload.model is None
