"""
SQLAlchemy async database module.

Re-exports engine, session, and model utilities for the FastAPI service.
"""

from services.planner.db.engine import create_engine
from services.planner.db.session import get_db
from services.planner.db.models import (
    Base,
    Trip,
    Participant,
    Activity,
)

__all__ = [
    "create_engine",
    "get_db",
    "Base",
    "Trip",
    "Participant",
    "Activity",
]
