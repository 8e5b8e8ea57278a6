"""Tests for the exception hierarchy."""

import pytest

from src.exceptions import (
    BadRequestError,
    ConfigurationError,
    DatabaseConnectionError,
    ExpressError,
    LightweightError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
)


@pytest.mark.parametrize("cls,status", [
    (NotFoundError, 404),
    (BadRequestError, 400),
    (UnauthorizedError, 401),
])
def test_express_errors_carry_status(cls, status):
    error = cls("message")

    assert isinstance(error, ExpressError)
    assert isinstance(error, LightweightError)
    assert error.status_code == status


def test_str_includes_cause():
    cause = OSError("connection refused")
    error = DatabaseConnectionError("Database unavailable", cause=cause)

    assert isinstance(error, StorageError)
    assert str(error) == "Database unavailable (caused by: OSError: connection refused)"


def test_str_without_cause_is_message():
    assert str(NotFoundError("No user: abe")) == "No user: abe"


def test_details_default_to_empty_dict():
    assert ConfigurationError("bad").details == {}
