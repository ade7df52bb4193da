#!/usr/bin/env python3
"""Tests for client-side payload validation."""

import pytest

from models import parse_number, validate_payload
from models.validation import load_schema


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_has_payload_schemas(self):
        schema = load_schema()
        assert set(schema) >= {"carCreate", "carUpdate", "serviceRecordCreate"}

    def test_read_once(self):
        assert load_schema() is load_schema()


class TestParseNumber:
    """Tests for parse_number."""

    def test_blank_is_none(self):
        assert parse_number("") is None
        assert parse_number("   ") is None
        assert parse_number(None) is None

    def test_integral_values_become_int(self):
        assert parse_number("12000") == 12000
        assert isinstance(parse_number("12000"), int)
        assert isinstance(parse_number("12000.0"), int)

    def test_fractional_values_stay_float(self):
        assert parse_number(" 89.90 ") == 89.9

    def test_negative_values_parse(self):
        assert parse_number("-5") == -5

    @pytest.mark.parametrize("text", ["abc", "12km", "nan", "inf"])
    def test_unparseable_returned_unchanged(self, text):
        assert parse_number(text) == text


class TestValidateServiceRecord:
    """Tests for serviceRecordCreate validation."""

    def valid(self, **overrides):
        payload = {"date": "2026-01-15", "type": "Oil change", "mileage": 50000, "cost": 80}
        payload.update(overrides)
        return payload

    def test_valid_payload_has_no_errors(self):
        assert validate_payload("serviceRecordCreate", self.valid()) == []

    def test_zero_values_allowed(self):
        assert validate_payload("serviceRecordCreate", self.valid(mileage=0, cost=0)) == []

    def test_negative_mileage(self):
        errors = validate_payload("serviceRecordCreate", self.valid(mileage=-5))
        assert errors == ["Mileage must be a valid number."]

    def test_non_numeric_mileage(self):
        errors = validate_payload("serviceRecordCreate", self.valid(mileage="abc"))
        assert errors == ["Mileage must be a valid number."]

    def test_missing_mileage(self):
        errors = validate_payload("serviceRecordCreate", self.valid(mileage=None))
        assert errors == ["Mileage must be a valid number."]

    def test_negative_cost(self):
        errors = validate_payload("serviceRecordCreate", self.valid(cost=-1))
        assert errors == ["Cost must be a valid number."]

    def test_mileage_reported_before_cost(self):
        errors = validate_payload("serviceRecordCreate", self.valid(mileage=-1, cost=-1))
        assert errors[0] == "Mileage must be a valid number."

    def test_blank_type(self):
        errors = validate_payload("serviceRecordCreate", self.valid(type=""))
        assert errors == ["Date and type are required."]

    def test_missing_date_key(self):
        payload = self.valid()
        del payload["date"]
        assert validate_payload("serviceRecordCreate", payload) == ["Date and type are required."]

    def test_several_required_keys_missing(self):
        errors = validate_payload("serviceRecordCreate", {"date": "2026-01-15", "cost": 80})
        assert errors == [
            "Mileage must be a valid number.",
            "Date and type are required.",
        ]


class TestValidateCar:
    """Tests for carCreate and carUpdate validation."""

    def test_minimal_car_is_valid(self):
        assert validate_payload("carCreate", {"regNumber": "ABC123", "model": "Volvo"}) == []

    def test_blank_reg_number(self):
        errors = validate_payload("carCreate", {"regNumber": "", "model": "Volvo"})
        assert errors == ["Reg number and model are required."]

    def test_release_year_before_1900(self):
        errors = validate_payload(
            "carCreate", {"regNumber": "A", "model": "M", "releaseYear": 1899}
        )
        assert errors == ["Release year must be a valid number."]

    def test_numeric_errors_reported_before_required(self):
        errors = validate_payload("carCreate", {"regNumber": "", "model": "", "mileage": -1})
        assert errors == [
            "Mileage must be a valid number.",
            "Reg number and model are required.",
        ]

    def test_empty_payload_reports_required_once(self):
        assert validate_payload("carCreate", {}) == ["Reg number and model are required."]

    def test_reg_number_too_long(self):
        errors = validate_payload("carCreate", {"regNumber": "X" * 33, "model": "M"})
        assert errors == ["Reg number must be at most 32 characters."]

    def test_update_allows_partial_payload(self):
        assert validate_payload("carUpdate", {"mileage": 60000}) == []
        assert validate_payload("carUpdate", {"mileage": -1}) == [
            "Mileage must be a valid number."
        ]
