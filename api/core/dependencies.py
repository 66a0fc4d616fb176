"""
FastAPI dependencies shared by every entity router.
"""

from __future__ import annotations

from fastapi import Request

from . import errors
from .db import Database


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise errors.DataAccessError("DB pool is not initialized. The application lifespan did not run.")
    return database
