"""
Authentication package.

Provides password hashing and verification using Argon2.
"""

from .manager import AuthManager

__all__ = ["AuthManager"]
