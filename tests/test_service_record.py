#!/usr/bin/env python3
"""Tests for ServiceRecord classes."""

from models import ServiceRecord, ServiceRecordCreate


class TestServiceRecord:
    """Tests for ServiceRecord class."""

    def test_required_attributes(self):
        """Only the id is required."""
        record = ServiceRecord(1)
        assert record.id == 1
        assert record.date is None
        assert record.service_type is None
        assert record.mileage is None
        assert record.notes is None
        assert record.cost is None

    def test_string_id_allowed(self):
        record = ServiceRecord("a1b2", date="2026-01-15")
        assert record.id == "a1b2"

    def test_optional_attributes(self):
        record = ServiceRecord(
            id=3,
            car_id=1,
            date="2026-01-15",
            service_type="Oil change",
            mileage=50000,
            notes="Synthetic",
            cost=75.50,
        )
        assert record.car_id == 1
        assert record.service_type == "Oil change"
        assert record.mileage == 50000
        assert record.notes == "Synthetic"
        assert record.cost == 75.50


class TestServiceRecordCreate:
    """Tests for ServiceRecordCreate payload."""

    def test_notes_default_to_none(self):
        payload = ServiceRecordCreate("2026-01-15", "Oil change", 50000, 80)
        assert payload.notes is None
        assert payload.service_type == "Oil change"
