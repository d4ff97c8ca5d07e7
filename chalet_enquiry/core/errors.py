"""
Error taxonomy for the enquiry worker.

Every failure that ends a request is an EnquiryError. The exception handler
registered in main.py turns it into a JSON body of the form
{"error": <message>} with the status code carried by the exception.
"""


class EnquiryError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MethodNotAllowed(EnquiryError):
    status_code = 405
    message = "Method not allowed"


class InvalidBody(EnquiryError):
    status_code = 400
    message = "Invalid request body"


class ValidationError(EnquiryError):
    status_code = 400
    message = "Invalid enquiry"

    @classmethod
    def missing_field(cls, field: str) -> "ValidationError":
        return cls(f"Missing required field: {field}")

    @classmethod
    def invalid_email(cls) -> "ValidationError":
        return cls("Invalid email address")


class ConfigurationError(EnquiryError):
    status_code = 500
    message = "Email service not configured"


class DeliveryError(EnquiryError):
    status_code = 500
    message = "Failed to send enquiry. Please try again or contact us directly."
