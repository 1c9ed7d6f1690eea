"""API Routes"""

from . import admin, auth

__all__ = [
    "admin",
    "auth",
]
