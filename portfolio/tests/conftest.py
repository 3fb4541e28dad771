import pytest
from fastapi.testclient import TestClient
from portfolio.main import app
from portfolio.api.endpoints.contact import get_contact_handler
from portfolio.tests.fixtures.contact import *


@pytest.fixture(scope="function")
def handler_override(contact_handler):
    """Fixture installing the test handler in place of the settings-built one."""
    app.dependency_overrides[get_contact_handler] = lambda: contact_handler
    yield contact_handler
    # Clean up overrides after the test finished
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def contact_client(handler_override):
    """Fixture providing a TestClient with the contact handler overridden."""
    with TestClient(app) as c:
        yield c
