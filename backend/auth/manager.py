"""
Authentication Manager - Single Source of Truth for Password Hashing

Handles:
- Argon2 password hashing (OWASP recommended)
- Password verification that never raises on mismatch
- Rehash detection when hashing parameters change
- Thread offloading so hashing does not block the event loop

Usage:
    auth_manager = AuthManager(work_factor=settings.password_work_factor)

    # Hash password on registration
    password_hash = await auth_manager.hash_password_async("user_password")

    # Verify password on login
    is_valid = await auth_manager.verify_password_async("user_password", password_hash)
"""

import asyncio

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class AuthManager:
    """
    Password manager using Argon2id.

    Security features:
    - Argon2id algorithm (PHC winner, GPU-resistant)
    - Random 16-byte salt per hash
    - Configurable work factor (Argon2 time cost)
    """

    def __init__(
        self,
        work_factor: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4
    ):
        """
        Initialize password manager.

        Args:
            work_factor: Number of Argon2 iterations (time cost, recommended: 2-4)
            memory_cost: Memory usage in KiB (default: 64 MB)
            parallelism: Number of parallel lanes (recommended: 1-4)
        """
        if work_factor < 1:
            raise ValueError("Work factor must be at least 1")

        self.work_factor = work_factor
        self.password_hasher = PasswordHasher(
            time_cost=work_factor,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
            type=Type.ID
        )

    @classmethod
    def from_settings(cls, settings) -> "AuthManager":
        """Build a manager from backend.config.Settings."""
        return cls(
            work_factor=settings.password_work_factor,
            memory_cost=settings.password_memory_cost,
            parallelism=settings.password_parallelism,
        )

    # =========================================================================
    # Password Hashing (Argon2)
    # =========================================================================

    def hash_password(self, password: str) -> str:
        """
        Hash password using Argon2id.

        Args:
            password: Plain text password

        Returns:
            Argon2 hash string (includes algorithm, params, salt, and hash)
            Format: $argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>

        Raises:
            ValueError: If password is empty
        """
        if not password:
            raise ValueError("Password cannot be empty")

        return self.password_hasher.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        """
        Verify password against Argon2 hash.

        Args:
            password: Plain text password to verify
            password_hash: Argon2 hash from database

        Returns:
            True if password matches, False otherwise (including corrupted hashes)
        """
        if not password or not password_hash:
            return False

        try:
            return self.password_hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """
        Check if password hash was made with different parameters than ours.

        Args:
            password_hash: Argon2 hash to check

        Returns:
            True if rehashing recommended, False otherwise
        """
        try:
            return self.password_hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, ValueError):
            return True

    # =========================================================================
    # Async wrappers (CPU-bound work runs in a worker thread)
    # =========================================================================

    async def hash_password_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash_password, password)

    async def verify_password_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify_password, password, password_hash)
