"""Contact form models for the portfolio contact API.

This module contains the Pydantic models for contact form functionality.
"""

from typing import Dict, List, Optional
from typing_extensions import Annotated
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


class ContactSubmission(BaseModel):
    """Contact form submission as posted by the site.

    Attributes:
        name: Name of the person getting in touch
        email: Address the site owner should reply to
        message: The message body
        company: Honeypot field, left blank by humans
    """
    name: Annotated[str, Field(..., min_length=1, max_length=200, description="Name of the sender")]
    email: Annotated[str, Field(..., max_length=320, description="Reply-to email address")]
    message: Annotated[str, Field(..., min_length=1, max_length=5000, description="Message body")]
    company: Annotated[Optional[str], Field(None, description="Honeypot field, must stay empty")]

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        # Validate only; the address is kept exactly as typed.
        try:
            validate_email(
                value,
                check_deliverability=False,
                allow_smtputf8=False,
                test_environment=True,
            )
        except EmailNotValidError as e:
            raise PydanticCustomError("email_format", "Invalid email address: {reason}", {"reason": str(e)})
        return value

    @property
    def is_spam(self) -> bool:
        return bool(self.company and self.company.strip())


class ContactSuccessResponse(BaseModel):
    """Body of a successful (or silently filtered) submission."""
    ok: bool = Field(True, description="Always true on success")
    id: Optional[str] = Field(None, description="Provider message id, when an email was sent")


class ErrorResponse(BaseModel):
    """Generic error body."""
    error: str = Field(..., description="Human-readable error message")


class InvalidEmailResponse(ErrorResponse):
    """Body returned when the email field fails its format check."""
    code: str = Field("invalid_email", description="Machine-readable error code")
    field: str = Field("email", description="Offending field")
    details: str = Field(..., description="Validator message")


class FlattenedErrors(BaseModel):
    formErrors: List[str] = Field(default_factory=list)
    fieldErrors: Dict[str, List[str]] = Field(default_factory=dict)


class InvalidPayloadResponse(ErrorResponse):
    """Body returned for any other schema violation."""
    details: FlattenedErrors


class EmailSendData(BaseModel):
    id: Optional[str] = None


class EmailSendResult(BaseModel):
    """Outcome of one call to the email provider.

    Exactly one of ``data`` and ``error`` is set.
    """
    data: Optional[EmailSendData] = None
    error: Optional[str] = None
