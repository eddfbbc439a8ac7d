"""
Station identifier validation.

Callsigns and Maidenhead locators are normalized here before they are stored
or compared.
"""

import re
from typing import Optional

from ..errors import ValidationError

CALLSIGN_PATTERN = re.compile(r"^[A-Z0-9]+(/[A-Z0-9]+)*$")
LOCATOR_PATTERN = re.compile(r"^[A-R]{2}[0-9]{2}([A-X]{2}([0-9]{2})?)?$")

MIN_CALLSIGN_LENGTH = 3
MAX_CALLSIGN_LENGTH = 20


def normalize_callsign(value: str) -> str:
    """
    Validate a callsign and return it uppercased.

    Portable suffixes and prefixes (``BH1ABC/P``, ``VK/BH1ABC``) are allowed.

    Args:
        value: Raw callsign input

    Returns:
        Uppercased callsign

    Raises:
        ValidationError: If the callsign is malformed
    """
    callsign = value.strip().upper()
    if not (MIN_CALLSIGN_LENGTH <= len(callsign) <= MAX_CALLSIGN_LENGTH):
        raise ValidationError(
            f"Callsign must be {MIN_CALLSIGN_LENGTH}-{MAX_CALLSIGN_LENGTH} characters",
            details={"field": "callsign"},
        )
    if not CALLSIGN_PATTERN.match(callsign):
        raise ValidationError(
            "Callsign may only contain letters, digits and '/'",
            details={"field": "callsign"},
        )
    if not any(c.isdigit() for c in callsign) or not any(
        c.isalpha() for c in callsign
    ):
        raise ValidationError(
            "Callsign must contain both letters and digits",
            details={"field": "callsign"},
        )
    return callsign


def normalize_locator(value: str) -> str:
    """
    Validate a Maidenhead locator of 4, 6 or 8 characters.

    The result has field letters uppercase and subsquare letters lowercase,
    e.g. ``om89ej`` becomes ``OM89ej``.

    Raises:
        ValidationError: If the locator is malformed
    """
    locator = value.strip().upper()
    if not LOCATOR_PATTERN.match(locator):
        raise ValidationError(
            "Locator must be a Maidenhead grid square such as OM89 or OM89ej",
            details={"field": "locator"},
        )
    return locator[:4] + locator[4:6].lower() + locator[6:]


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip a string, mapping blank values to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
