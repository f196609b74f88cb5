import pytest
from shared.errors import format_messages


@pytest.mark.parametrize(
    "messages, expected",
    [
        ({"status": ["Cannot transition from Pending to Delivered"]}, "Cannot transition from Pending to Delivered"),
        ({"name": ["is required"]}, "name is required"),
        ({"name": "is required", "price": ["must be positive"]}, "name is required; price must be positive"),
        ("Category not found", "Category not found"),
        ({}, "Validation failed"),
        (None, "Validation failed"),
    ],
)
def test_format_messages(messages, expected):
    assert format_messages(messages, "Validation failed") == expected


def test_unknown_route_uses_message_shape():
    from app import app
    from fastapi.testclient import TestClient

    response = TestClient(app).get("/no-such-route")
    assert response.status_code == 404
    assert set(response.json()) == {"message"}


def test_health():
    from app import app
    from fastapi.testclient import TestClient

    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
