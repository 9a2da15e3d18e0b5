"""
Database configuration and models.
"""

from fintrack.db.database import engine, SessionLocal, get_db
from fintrack.db.models import Base

__all__ = ["engine", "SessionLocal", "get_db", "Base"]
