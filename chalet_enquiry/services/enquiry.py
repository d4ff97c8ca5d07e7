from typing import Any, Callable

import structlog

from chalet_enquiry.core.config import CONFIRMATION_SUBJECT, Settings
from chalet_enquiry.core.errors import ConfigurationError, DeliveryError
from chalet_enquiry.schemas.enquiry import EnquiryRequest
from chalet_enquiry.services.email import EmailMessage, EmailProvider
from chalet_enquiry.services.templates import (
    notification_subject,
    render_confirmation_html,
    render_notification_html,
)

logger = structlog.get_logger()

#Schedules a callable to run after the response; BackgroundTasks.add_task fits
Dispatch = Callable[..., Any]


#Run a send whose outcome never reaches the caller
def send_best_effort(provider: EmailProvider, message: EmailMessage) -> None:
    try:
        delivered = provider.send(message)
    except Exception:
        logger.exception("confirmation_send_failed", provider=provider.name)
        return

    if not delivered:
        logger.warning("confirmation_send_failed", provider=provider.name)


class EnquiryService:
    """Turns a validated enquiry into the two outbound emails."""

    def __init__(self, settings: Settings, provider: EmailProvider):
        self.settings = settings
        self.provider = provider

    def notification(self, enquiry: EnquiryRequest) -> EmailMessage:
        return EmailMessage(
            sender_email=self.settings.FROM_EMAIL,
            sender_name=self.settings.FROM_NAME,
            to=[self.settings.TO_EMAIL],
            reply_to=enquiry.email,
            subject=notification_subject(enquiry),
            html=render_notification_html(enquiry),
            tags={"category": "enquiry_notification"},
        )

    def confirmation(self, enquiry: EnquiryRequest) -> EmailMessage:
        return EmailMessage(
            sender_email=self.settings.FROM_EMAIL,
            sender_name=self.settings.FROM_NAME,
            to=[enquiry.email],
            subject=CONFIRMATION_SUBJECT,
            html=render_confirmation_html(
                enquiry, contact_email=self.settings.TO_EMAIL
            ),
            tags={"category": "enquiry_confirmation"},
        )

    def submit(self, enquiry: EnquiryRequest, dispatch: Dispatch) -> None:
        """
        Deliver the operator notification, then hand the guest confirmation
        to `dispatch` as a best-effort job.

        Raises ConfigurationError when the provider lacks its credential and
        DeliveryError when the notification is refused. In either case the
        confirmation is never attempted.
        """
        if not self.provider.is_configured():
            logger.error("email_provider_not_configured", provider=self.provider.name)
            raise ConfigurationError()

        notification = self.notification(enquiry)
        confirmation = self.confirmation(enquiry)

        # 1) Email the chalet (CRITICAL)
        if not self.provider.send(notification):
            raise DeliveryError()

        logger.info(
            "enquiry_delivered",
            provider=self.provider.name,
            arrival_date=enquiry.arrival_date,
            departure_date=enquiry.departure_date,
        )

        # 2) Email the guest (NON-CRITICAL)
        dispatch(send_best_effort, self.provider, confirmation)
