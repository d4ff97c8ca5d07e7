from fastapi import Depends, Request

from chalet_enquiry.core.config import Settings
from chalet_enquiry.services.email import EmailProvider
from chalet_enquiry.services.enquiry import EnquiryService


#Settings and provider are fixed when the app is created
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_email_provider(request: Request) -> EmailProvider:
    return request.app.state.email_provider


def get_enquiry_service(
    settings: Settings = Depends(get_app_settings),
    provider: EmailProvider = Depends(get_email_provider),
) -> EnquiryService:
    return EnquiryService(settings, provider)
