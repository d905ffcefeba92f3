"""API v1 routers"""
from . import buildings, reports, sessions

__all__ = [
    "buildings",
    "reports",
    "sessions",
]
