"""
Authentication module for QSL Card Manager.

This module provides the operator account model and identifier validation.
The FastAPI Users wiring lives in ``fastapi_users`` and ``manager``.
"""

from .models import User
from .validation import normalize_callsign, normalize_locator

__all__ = [
    "User",
    "normalize_callsign",
    "normalize_locator",
]
