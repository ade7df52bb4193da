"""Client-side validation of create/update payloads against schema.yaml."""
import math
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from jsonschema import Draft7Validator

FIELD_MESSAGES = {
    "mileage": "Mileage must be a valid number.",
    "cost": "Cost must be a valid number.",
    "releaseYear": "Release year must be a valid number.",
    "regNumber": "Reg number and model are required.",
    "model": "Reg number and model are required.",
    "date": "Date and type are required.",
    "type": "Date and type are required.",
}

LENGTH_MESSAGES = {
    "regNumber": "Reg number must be at most 32 characters.",
    "model": "Model must be at most 100 characters.",
    "owner": "Owner must be at most 200 characters.",
}

# Errors are reported in this field order.
FIELD_ORDER = ["mileage", "cost", "releaseYear", "regNumber", "model", "owner", "date", "type"]


@lru_cache(maxsize=None)
def load_schema() -> dict:
    """Load the payload schemas from schema.yaml (read once per process)."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def parse_number(text: str) -> Union[int, float, str, None]:
    """
    Parse a form field into a number.

    Blank input gives None. Unparseable input is returned unchanged so
    schema validation reports it against the right field.
    """
    text = (text or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return text
    if not math.isfinite(value):
        return text
    if value.is_integer():
        return int(value)
    return value


def _fields_of(error) -> List[str]:
    if error.path:
        return [str(error.path[0])]
    if error.validator == "required":
        return [name for name in error.validator_value if name not in error.instance]
    return [""]


def validate_payload(kind: str, payload: Dict[str, Any]) -> List[str]:
    """Validate a payload against the named schema. Returns list of errors."""
    schema = load_schema()[kind]
    found = []
    for error in Draft7Validator(schema).iter_errors(payload):
        for field in _fields_of(error):
            rank = FIELD_ORDER.index(field) if field in FIELD_ORDER else len(FIELD_ORDER)
            if error.validator == "maxLength" and field in LENGTH_MESSAGES:
                message = LENGTH_MESSAGES[field]
            else:
                message = FIELD_MESSAGES.get(field, error.message)
            found.append((rank, message))
    errors: List[str] = []
    for _, message in sorted(found):
        if message not in errors:
            errors.append(message)
    return errors
