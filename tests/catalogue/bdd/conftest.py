"""Shared BDD fixtures for the Catalogue domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@then("the choice is rejected with a validation error")
def choice_rejected(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
