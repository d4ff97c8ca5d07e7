import pytest
from fastapi.testclient import TestClient

from chalet_enquiry.core.config import Settings
from chalet_enquiry.main import create_app


class FakeProvider:
    """Records every message and answers with queued results."""

    name = "fake"

    def __init__(self, results=None, configured=True):
        self.results = list(results or [])
        self.configured = configured
        self.sent = []

    def is_configured(self):
        return self.configured

    def send(self, message):
        self.sent.append(message)
        if self.results:
            result = self.results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return True


@pytest.fixture
def settings():
    return Settings(_env_file=None, LOG_JSON=False)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def client(settings, provider):
    return TestClient(create_app(settings=settings, provider=provider))


@pytest.fixture
def payload():
    return {
        "first_name": "Anna",
        "last_name": "Muller",
        "email": "anna@example.com",
        "phone": "+41 79 123 45 67",
        "arrival_date": "2026-12-20",
        "departure_date": "2026-12-27",
        "guests": "6",
        "message": "We would love the chalet for Christmas week.",
    }
