"""Status enum for car service urgency."""

from enum import Enum


class Status(Enum):
    """Service status categories. Lower value = more urgent."""

    OVERDUE = 1
    OK = 2
    UNKNOWN = 3  # No mileage or date threshold known
