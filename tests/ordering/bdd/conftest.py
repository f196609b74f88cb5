"""Shared BDD fixtures for the Ordering domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@then("the change is rejected with a validation error")
def change_rejected(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
