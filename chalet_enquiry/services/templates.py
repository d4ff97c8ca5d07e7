from html import escape

from chalet_enquiry.schemas.enquiry import EnquiryRequest

"""
EMAIL BODIES

Inline HTML for the two messages sent per enquiry. Every value taken from
the submitted form goes through _e() before it reaches the markup.
"""

_CELL = "padding: 8px; border-bottom: 1px solid #eee;"


def _e(value: str) -> str:
    return escape(value, quote=True)


def _row(label: str, value_html: str, *, last: bool = False) -> str:
    style = "padding: 8px;" if last else _CELL
    valign = ' valign="top"' if last else ""
    return (
        f'<tr><td style="{style}"{valign}><strong>{label}:</strong></td>'
        f'<td style="{style}">{value_html}</td></tr>'
    )


#Subject line of the operator notification
def notification_subject(enquiry: EnquiryRequest) -> str:
    return (
        f"Booking Enquiry: {enquiry.full_name} — "
        f"{enquiry.arrival_date} to {enquiry.departure_date}"
    )


#Tabular "new enquiry" view sent to the chalet inbox
def render_notification_html(enquiry: EnquiryRequest) -> str:
    email = _e(enquiry.email)
    message = (
        _e(enquiry.message).replace("\n", "<br>")
        if enquiry.message
        else "No message provided"
    )

    rows = "\n        ".join([
        _row("Name", _e(enquiry.full_name)),
        _row("Email", f'<a href="mailto:{email}">{email}</a>'),
        _row("Phone", _e(enquiry.phone) if enquiry.phone else "Not provided"),
        _row("Arrival", _e(enquiry.arrival_date)),
        _row("Departure", _e(enquiry.departure_date)),
        _row("Guests", _e(enquiry.guests)),
        _row("Message", message, last=True),
    ])

    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #8B7355;">New Booking Enquiry</h2>
      <table style="width: 100%; border-collapse: collapse;">
        {rows}
      </table>
    </div>
    """


#Prose "thank you" view sent back to the guest
def render_confirmation_html(enquiry: EnquiryRequest, *, contact_email: str) -> str:
    contact = _e(contact_email)
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #8B7355;">Thank You, {_e(enquiry.first_name)}!</h2>
      <p>We have received your enquiry for Chalet Josephine and will be in touch within 24 hours.</p>
      <h3>Your Enquiry Details:</h3>
      <ul>
        <li><strong>Arrival:</strong> {_e(enquiry.arrival_date)}</li>
        <li><strong>Departure:</strong> {_e(enquiry.departure_date)}</li>
        <li><strong>Guests:</strong> {_e(enquiry.guests)}</li>
      </ul>
      <p>If you have any urgent questions, please contact us at <a href="mailto:{contact}">{contact}</a>.</p>
      <p>Warm regards,<br>The Chalet Josephine Team<br>Managed by Chamonix Prestige</p>
    </div>
    """
