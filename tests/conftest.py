import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize every bounded context once. Each test then pushes the context
    it exercises (see the per-context conftest files), and the FastAPI app
    pushes its own per request.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("AGROSTORE_JWT_SECRET", "test-jwt-secret")
    os.environ.setdefault("AGROSTORE_SESSION_SECRET", "test-session-secret")
    os.environ.setdefault("AGROSTORE_PAYMENT_GATEWAY", "fake")

    # Importing the app initializes identity, catalogue and ordering
    import app  # noqa: F401


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


def _all_domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    return [identity, catalogue, ordering]


@pytest.fixture(autouse=True)
def run_around_tests(tmp_path):
    """Point uploads at a temp dir, then clean up infrastructure after every test."""
    from payments.gateway import reset_gateway
    from shared.uploads import ImageStore, reset_image_store, set_image_store

    set_image_store(ImageStore(tmp_path / "uploads", "/uploads"))

    yield

    for domain in _all_domains():
        with domain.domain_context():
            # Clear all databases
            for _, provider in domain.providers.items():
                provider._data_reset()

            for _, broker in domain.brokers.items():
                broker._data_reset()

            # Drain event stores
            domain.event_store.store._data_reset()

    reset_gateway()
    reset_image_store()


# ---------------------------------------------------------------------------
# Shared builders (usable from any context)
# ---------------------------------------------------------------------------
@pytest.fixture()
def create_account():
    """Register an account directly through the identity domain. Returns its id."""
    from identity.auth.passwords import hash_password
    from identity.domain import identity
    from identity.user.registration import RegisterUser

    def _create(email, password="harvest-2024", name="Test User", role="User"):
        with identity.domain_context():
            return identity.process(
                RegisterUser(name=name, email=email, password_hash=hash_password(password), role=role),
                asynchronous=False,
            )

    return _create


@pytest.fixture()
def make_category():
    from catalogue.category.management import CreateCategory
    from catalogue.domain import catalogue

    def _make(name="Spices", image="/uploads/1-spices.jpg", featured=False, status="active"):
        with catalogue.domain_context():
            return catalogue.process(
                CreateCategory(name=name, image=image, featured=featured, status=status),
                asynchronous=False,
            )

    return _make


@pytest.fixture()
def make_product(make_category):
    import json

    from catalogue.domain import catalogue
    from catalogue.product.creation import CreateProduct
    from catalogue.product.variants import AddVariant

    def _make(
        name="Black Pepper",
        category_id=None,
        selling_price=500.0,
        discounted_price=None,
        min_order_qty="1 Ton",
        images=("/uploads/1-pepper.jpg",),
        variants=(),
        status="active",
    ):
        category_id = category_id or make_category()
        with catalogue.domain_context():
            product_id = catalogue.process(
                CreateProduct(
                    name=name,
                    description=f"{name} from Kerala",
                    category_id=category_id,
                    hs_code="090411",
                    min_order_qty=min_order_qty,
                    selling_price=selling_price,
                    discounted_price=discounted_price,
                    images=json.dumps(list(images)),
                    status=status,
                ),
                asynchronous=False,
            )
            variant_ids = [
                catalogue.process(AddVariant(product_id=product_id, name=v_name, price=v_price), asynchronous=False)
                for v_name, v_price in variants
            ]
        return product_id, variant_ids

    return _make


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from app import app
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture()
def login():
    """Log ``client`` in; the session cookie stays on the client."""

    def _login(client, email, password="harvest-2024"):
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["user"]

    return _login


@pytest.fixture()
def admin_client(create_account, login):
    from app import app
    from fastapi.testclient import TestClient

    create_account("admin@agrostore.test", name="Store Admin", role="Admin")
    admin = TestClient(app)
    login(admin, "admin@agrostore.test")
    return admin


@pytest.fixture()
def customer(create_account, login):
    """A logged-in customer: ``(client, account_id)``."""
    from app import app
    from fastapi.testclient import TestClient

    account_id = create_account("buyer@agrostore.test", name="Asha Rao")
    buyer = TestClient(app)
    login(buyer, "buyer@agrostore.test")
    return buyer, account_id
