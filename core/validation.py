# core/validation.py

import re

from core.config import settings
from core.errors import InputValidationError


UPI_PATTERN = re.compile(r"^[a-zA-Z0-9.\-_]{2,256}@[a-zA-Z]{2,64}$")


def require(*values, message: str = "Please fill in all fields"):
    """Raise unless every value is present and non-blank."""
    for value in values:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InputValidationError(message)


def room_pool() -> list[str]:
    """The fixed room numbers, "1".."ROOM_COUNT"."""
    return [str(n) for n in range(1, settings.ROOM_COUNT + 1)]


def validate_upi_id(upi_id: str) -> str:
    upi_id = (upi_id or "").strip()
    if not upi_id:
        raise InputValidationError("Please enter UPI ID")
    if not UPI_PATTERN.match(upi_id):
        raise InputValidationError("Please enter a valid UPI ID (e.g., yourname@paytm)")
    return upi_id
