"""Lightweight validation helpers used before any store write."""

from typing import Any

from utils.error_handling import ValidationError


def ensure_present(value: Any, field: str) -> None:
    """Raise ValidationError if value is missing or blank."""
    if value is None or value == [] or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
