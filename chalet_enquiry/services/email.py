from dataclasses import dataclass, field
from typing import Optional, Protocol

import requests
import sib_api_v3_sdk
import structlog
import urllib3
from sib_api_v3_sdk.rest import ApiException

from chalet_enquiry.core.config import Settings

logger = structlog.get_logger()


# -------------------------------------------------------------------
# Outbound message
# -------------------------------------------------------------------
@dataclass(frozen=True)
class EmailMessage:
    sender_email: str
    sender_name: str
    to: list[str]
    subject: str
    html: str
    reply_to: Optional[str] = None
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def sender(self) -> str:
        return f"{self.sender_name} <{self.sender_email}>"


class EmailProvider(Protocol):
    """
    Capability every mail backend offers to the enquiry service.

    send() returns True when the provider accepted the message and False
    when it refused it or could not be reached. It never raises for
    delivery problems; the reason is logged here, next to the provider.
    """

    name: str

    def is_configured(self) -> bool: ...

    def send(self, message: EmailMessage) -> bool: ...


# -------------------------------------------------------------------
# JSON-over-HTTP providers
# -------------------------------------------------------------------
def _post_json(
    provider: str,
    url: str,
    payload: dict,
    *,
    headers: dict[str, str],
    timeout: float,
) -> bool:
    try:
        res = requests.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logger.error("email_send_failed", provider=provider, error=str(e))
        return False

    if not res.ok:
        logger.error(
            "email_send_failed",
            provider=provider,
            status=res.status_code,
            error=res.text,
        )
        return False

    return True


class ResendProvider:
    """Resend transactional API, authenticated with a bearer key."""

    name = "resend"

    def __init__(self, *, api_key: str | None, url: str, timeout: float):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def payload(self, message: EmailMessage) -> dict:
        body = {
            "from": message.sender,
            "to": list(message.to),
            "subject": message.subject,
            "html": message.html,
        }
        if message.reply_to:
            body["reply_to"] = message.reply_to
        if message.tags:
            body["tags"] = [
                {"name": k, "value": v} for k, v in message.tags.items()
            ]
        return body

    def send(self, message: EmailMessage) -> bool:
        return _post_json(
            self.name,
            self.url,
            self.payload(message),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )


class MailChannelsProvider:
    """MailChannels relay; the sending domain is authorised via DNS, not a key."""

    name = "mailchannels"

    def __init__(self, *, url: str, timeout: float):
        self.url = url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return True

    def payload(self, message: EmailMessage) -> dict:
        body = {
            "personalizations": [
                {"to": [{"email": addr} for addr in message.to]}
            ],
            "from": {
                "email": message.sender_email,
                "name": message.sender_name,
            },
            "subject": message.subject,
            "content": [{"type": "text/html", "value": message.html}],
        }
        if message.reply_to:
            body["reply_to"] = {"email": message.reply_to}
        return body

    def send(self, message: EmailMessage) -> bool:
        return _post_json(
            self.name,
            self.url,
            self.payload(message),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )


# -------------------------------------------------------------------
# Brevo (SDK)
# -------------------------------------------------------------------
class BrevoProvider:
    """Brevo transactional emails through the official SDK."""

    name = "brevo"

    def __init__(self, *, api_key: str | None, timeout: float = 10):
        self.api_key = api_key
        self.timeout = timeout
        self._api = None

    def is_configured(self) -> bool:
        return bool(self.api_key)

    #Client is built on first send so a missing key stays a request-time error
    @property
    def api(self) -> sib_api_v3_sdk.TransactionalEmailsApi:
        if self._api is None:
            config = sib_api_v3_sdk.Configuration()
            config.api_key["api-key"] = self.api_key
            client = sib_api_v3_sdk.ApiClient(config)
            self._api = sib_api_v3_sdk.TransactionalEmailsApi(client)
        return self._api

    def build(self, message: EmailMessage) -> sib_api_v3_sdk.SendSmtpEmail:
        return sib_api_v3_sdk.SendSmtpEmail(
            sender={"email": message.sender_email, "name": message.sender_name},
            to=[{"email": addr} for addr in message.to],
            reply_to={"email": message.reply_to} if message.reply_to else None,
            subject=message.subject,
            html_content=message.html,
            tags=list(message.tags.values()) or None,
        )

    def send(self, message: EmailMessage) -> bool:
        try:
            self.api.send_transac_email(
                self.build(message), _request_timeout=self.timeout
            )
        except ApiException as e:
            logger.error(
                "email_send_failed",
                provider=self.name,
                status=e.status,
                error=e.body,
            )
            return False
        except urllib3.exceptions.HTTPError as e:
            logger.error("email_send_failed", provider=self.name, error=str(e))
            return False
        return True


# -------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------
def build_provider(settings: Settings) -> EmailProvider:
    if settings.EMAIL_PROVIDER == "brevo":
        return BrevoProvider(
            api_key=settings.BREVO_API_KEY,
            timeout=settings.EMAIL_TIMEOUT_SECONDS,
        )

    if settings.EMAIL_PROVIDER == "mailchannels":
        return MailChannelsProvider(
            url=settings.MAILCHANNELS_API_URL,
            timeout=settings.EMAIL_TIMEOUT_SECONDS,
        )

    return ResendProvider(
        api_key=settings.RESEND_API_KEY,
        url=settings.RESEND_API_URL,
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
    )
