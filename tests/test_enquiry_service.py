import pytest

from chalet_enquiry.core.config import Settings
from chalet_enquiry.core.cors import allowed_origin
from chalet_enquiry.core.errors import ConfigurationError, DeliveryError
from chalet_enquiry.schemas.enquiry import EnquiryRequest
from chalet_enquiry.services.enquiry import EnquiryService, send_best_effort

from conftest import FakeProvider


@pytest.fixture
def enquiry(payload):
    return EnquiryRequest.from_payload(payload)


def test_confirmation_is_dispatched_not_sent(settings, enquiry):
    provider = FakeProvider()
    jobs = []

    EnquiryService(settings, provider).submit(enquiry, lambda *job: jobs.append(job))

    assert len(provider.sent) == 1
    assert len(jobs) == 1

    func, job_provider, confirmation = jobs[0]
    assert func is send_best_effort
    assert job_provider is provider
    assert confirmation.to == ["anna@example.com"]


def test_delivery_error_skips_dispatch(settings, enquiry):
    jobs = []

    with pytest.raises(DeliveryError):
        EnquiryService(settings, FakeProvider(results=[False])).submit(
            enquiry, lambda *job: jobs.append(job)
        )

    assert jobs == []


def test_configuration_error_sends_nothing(settings, enquiry):
    provider = FakeProvider(configured=False)

    with pytest.raises(ConfigurationError):
        EnquiryService(settings, provider).submit(enquiry, lambda *job: None)

    assert provider.sent == []


@pytest.mark.parametrize("outcome", [True, False, OSError("socket closed")])
def test_send_best_effort_never_raises(settings, enquiry, outcome):
    provider = FakeProvider(results=[outcome])
    message = EnquiryService(settings, provider).confirmation(enquiry)

    assert send_best_effort(provider, message) is None
    assert provider.sent == [message]


def test_enquiry_values_are_trimmed(payload):
    payload["first_name"] = "  Anna "
    payload["phone"] = "   "

    enquiry = EnquiryRequest.from_payload(payload)

    assert enquiry.first_name == "Anna"
    assert enquiry.phone is None
    assert enquiry.full_name == "Anna Muller"


def test_unknown_keys_are_ignored(payload):
    payload["honeypot"] = "x"

    assert EnquiryRequest.from_payload(payload).guests == "6"


@pytest.mark.parametrize("origin, expected", [
    ("https://www.chalet-josephine.com", "https://www.chalet-josephine.com"),
    ("https://fr.chalet-josephine.com", "https://fr.chalet-josephine.com"),
    ("http://localhost:4321", "https://www.chalet-josephine.com"),
    ("", "https://www.chalet-josephine.com"),
    (None, "https://www.chalet-josephine.com"),
])
def test_allowed_origin(origin, expected):
    assert allowed_origin(origin, Settings(_env_file=None)) == expected


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.TO_EMAIL == "info@chalet-josephine.com"
    assert settings.EMAIL_PROVIDER == "resend"
