"""
Pydantic models for user records.

Attributes are snake_case; dumping with by_alias=True produces the camelCase
shape callers expect (firstName, lastName, isAdmin).

None of the returned record models has a password field, and they reject
unknown keys, so a row that still carries the hash cannot become a record.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class User(UserBase):
    """User as returned by authenticate, register, find_all and update."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")


class UserDetail(User):
    """User as returned by get: includes the internal numeric ID."""

    id: int


class UserRegistration(UserBase):
    """Input for register. All fields are required."""

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")


class UserUpdate(UserBase):
    """
    Input for update. Only fields the caller explicitly set are applied.

    Username is deliberately absent: it is immutable after creation.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    password: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    is_admin: Optional[bool] = Field(None, alias="isAdmin")

    def changes(self) -> Dict[str, Any]:
        """Supplied, non-null fields keyed by their camelCase name."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
