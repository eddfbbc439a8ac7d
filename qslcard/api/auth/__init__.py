"""
Authentication module for QSL Card Manager API.

This module provides the cookie-based authentication and profile
endpoints.
"""

from .endpoints import router as auth_router

__all__ = ["auth_router"]
