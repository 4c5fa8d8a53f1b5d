"""
Database Session Management

The engine and session factory are owned by atams and configured once by
init_database() in main.py.
"""
from atams.db import get_db

__all__ = ["get_db"]
