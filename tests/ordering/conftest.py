import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the ordering domain context for every test in this package."""
    from ordering.domain import ordering

    with ordering.domain_context():
        yield
