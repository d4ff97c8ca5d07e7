from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from chalet_enquiry.core.config import EMAIL_REGEX, REQUIRED_FIELDS
from chalet_enquiry.core.errors import InvalidBody, ValidationError

"""
ENQUIRY SCHEMA
"""


#Booking enquiry posted by the website form
class EnquiryRequest(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: Optional[str] = None
    arrival_date: str = Field(min_length=1)
    departure_date: str = Field(min_length=1)
    guests: str = Field(min_length=1)
    message: Optional[str] = None

    #Pattern runs on the submitted value, before whitespace is stripped
    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str) and v.strip() and not EMAIL_REGEX.fullmatch(v):
            raise ValueError("invalid email address")
        return v

    @field_validator("phone", "message")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_payload(cls, data: Any) -> "EnquiryRequest":
        """
        Build an enquiry from a decoded JSON body.

        Raises InvalidBody for a JSON null. Any other non-object body has
        no fields, so it fails like an empty form. ValidationError names
        the first missing required field (in form order) or the malformed
        email address.
        """
        if data is None:
            raise InvalidBody()
        if not isinstance(data, dict):
            data = {}

        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise _first_error(e) from None


#Map pydantic errors onto the single message reported to the browser
def _first_error(exc: PydanticValidationError) -> ValidationError:
    failed = {}
    for err in exc.errors():
        if err["loc"]:
            failed.setdefault(err["loc"][0], err)

    # A malformed (but present) email is only reported once every
    # required field is filled in
    for field in REQUIRED_FIELDS:
        err = failed.get(field)
        if err is None:
            continue
        if field == "email" and err["type"] == "value_error":
            continue
        return ValidationError.missing_field(field)

    if "email" in failed:
        return ValidationError.invalid_email()

    field = next(iter(failed), "body")
    return ValidationError(f"Invalid field: {field}")
