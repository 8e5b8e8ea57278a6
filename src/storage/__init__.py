"""
Storage layer.

Provides the asyncpg-backed query-execution facility used by repositories.

Usage:
    from src.storage import PostgresAdapter

    async with PostgresAdapter(dsn="postgresql://...") as adapter:
        rows = await adapter.fetch("SELECT 1 AS one")
"""

from .postgres_adapter import PostgresAdapter

__all__ = ["PostgresAdapter"]
