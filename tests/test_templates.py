from chalet_enquiry.schemas.enquiry import EnquiryRequest
from chalet_enquiry.services.templates import (
    notification_subject,
    render_confirmation_html,
    render_notification_html,
)


def _enquiry(**overrides):
    data = {
        "first_name": "Anna",
        "last_name": "Muller",
        "email": "anna@example.com",
        "arrival_date": "20 Dec",
        "departure_date": "27 Dec",
        "guests": "6",
    }
    data.update(overrides)
    return EnquiryRequest.from_payload(data)


def test_notification_lists_every_field():
    html = render_notification_html(_enquiry(phone="0123", message="Hello"))

    assert "New Booking Enquiry" in html
    assert "Anna Muller" in html
    assert '<a href="mailto:anna@example.com">anna@example.com</a>' in html
    assert "0123" in html
    assert "20 Dec" in html
    assert "27 Dec" in html
    assert "Hello" in html


def test_notification_placeholders_for_optional_fields():
    html = render_notification_html(_enquiry(phone="  ", message=""))

    assert "Not provided" in html
    assert "No message provided" in html


def test_message_newlines_become_breaks():
    html = render_notification_html(_enquiry(message="Line one\nLine two"))

    assert "Line one<br>Line two" in html


def test_submitted_values_are_escaped():
    enquiry = _enquiry(
        first_name="<script>alert(1)</script>",
        message='<a href="https://phish.example">click</a>',
        guests="2 & a dog",
    )

    notification = render_notification_html(enquiry)
    confirmation = render_confirmation_html(enquiry, contact_email="info@chalet-josephine.com")

    assert "<script>" not in notification
    assert "<script>" not in confirmation
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in confirmation
    assert "&lt;a href=&quot;https://phish.example&quot;&gt;" in notification
    assert "2 &amp; a dog" in notification


def test_confirmation_mentions_stay_and_contact():
    html = render_confirmation_html(_enquiry(), contact_email="info@chalet-josephine.com")

    assert "Thank You, Anna!" in html
    assert "<strong>Arrival:</strong> 20 Dec" in html
    assert "<strong>Departure:</strong> 27 Dec" in html
    assert "<strong>Guests:</strong> 6" in html
    assert 'href="mailto:info@chalet-josephine.com"' in html


def test_notification_subject():
    assert notification_subject(_enquiry()) == (
        "Booking Enquiry: Anna Muller — 20 Dec to 27 Dec"
    )
