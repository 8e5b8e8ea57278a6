"""
Shared infrastructure for the user data-access layer.

- src.exceptions: typed exception hierarchy
- src.storage: asyncpg query adapter
- src.utils: logging and error sanitization
"""
