"""
Database operations package.

Provides user CRUD operations and SQL fragment helpers.
"""

from .sql_helpers import PartialUpdate, sql_for_partial_update
from .user_queries import UserQueries

__all__ = ["UserQueries", "PartialUpdate", "sql_for_partial_update"]
