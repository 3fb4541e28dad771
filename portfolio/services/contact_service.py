"""Contact submission handler.

One ``ContactHandler.handle`` call per HTTP request: method and config
gates, payload parsing, validation, the honeypot check and dispatch to
the email provider. Every outcome is a JSON response; nothing is retried.
"""

import json
import logging
from typing import Any, Optional, Union

from fastapi import status
from fastapi.responses import JSONResponse
from markupsafe import Markup

from portfolio.core.config import ContactConfig
from portfolio.models.contact import (
    ContactSubmission,
    ContactSuccessResponse,
    ErrorResponse,
    InvalidEmailResponse,
    InvalidPayloadResponse,
)
from portfolio.services.contact_validation import FieldError, SchemaError, validate_submission
from portfolio.services.mail_service import MailService
from portfolio.utils.helper_functions import escape_html

logger = logging.getLogger(__name__)

ALLOWED_METHOD = "POST"
EMAIL_TEMPLATE = "contact_message.html"
SUBJECT_TEMPLATE = "contact: {name}"


def parse_body(body: Union[bytes, str, dict, None]) -> Any:
    """Normalise a request body to a parsed JSON value.

    Undecodable or malformed bodies become an empty dict so that the
    failure surfaces as a validation error instead.
    """
    if body is None:
        return {}
    if isinstance(body, (dict, list)):
        return body
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return json.loads(body or "{}")
    except (UnicodeDecodeError, ValueError):
        return {}


def _json_response(status_code: int, model, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=model.model_dump(exclude_none=True),
        headers=headers,
    )


class ContactHandler:
    """Stateless relay from the contact form to the site owner's inbox."""

    def __init__(self, config: ContactConfig, mail_service: Optional[MailService] = None):
        self.config = config
        self.mail_service = mail_service or MailService(api_key=config.api_key)

    async def handle(self, method: str, body: Union[bytes, str, dict, None]) -> JSONResponse:
        """Process one contact request.

        Args:
            method: HTTP method of the request
            body: Raw body bytes/str, or an already parsed object

        Returns:
            JSONResponse with the status code and body of the wire protocol
        """
        if method.upper() != ALLOWED_METHOD:
            return _json_response(
                status.HTTP_405_METHOD_NOT_ALLOWED,
                ErrorResponse(error="Method not allowed"),
                headers={"Allow": ALLOWED_METHOD},
            )

        missing = self.config.missing_message()
        if missing:
            logger.error(missing)
            return _json_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error=missing))

        try:
            result = validate_submission(parse_body(body))

            if isinstance(result, FieldError):
                return _json_response(
                    422,
                    InvalidEmailResponse(error="Invalid email format", field=result.field, details=result.message),
                )
            if isinstance(result, SchemaError):
                return _json_response(
                    status.HTTP_400_BAD_REQUEST,
                    InvalidPayloadResponse(error="Invalid payload", details=result.violations),
                )

            submission = result.data
            if submission.is_spam:
                logger.debug("Honeypot field filled, skipping dispatch")
                return _json_response(status.HTTP_200_OK, ContactSuccessResponse())

            return await self._dispatch(submission)
        except Exception:
            logger.exception("Unexpected error processing contact submission")
            return _json_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(error="Unexpected server error"),
            )

    async def _dispatch(self, submission: ContactSubmission) -> JSONResponse:
        # Markup keeps Jinja2 from escaping the already escaped values again
        html = await self.mail_service.render_template(
            EMAIL_TEMPLATE,
            {
                "site_name": self.config.site_name,
                "name": Markup(escape_html(submission.name)),
                "email": Markup(escape_html(submission.email)),
                "message": Markup(escape_html(submission.message)),
            },
        )

        try:
            result = await self.mail_service.send_email(
                sender=self.config.from_address,
                recipients=[self.config.to_address],
                reply_to=submission.email,
                subject=SUBJECT_TEMPLATE.format(name=submission.name),
                html=html,
            )
        except Exception as e:
            logger.error(f"Email provider call failed: {str(e)}")
            return _json_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error="Failed to send email"))

        if result.error:
            logger.error(f"Resend error: {result.error}")
            return _json_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error="Failed to send email"))

        message_id = result.data.id if result.data else None
        logger.info(f"Contact message relayed: {message_id}")
        return _json_response(status.HTTP_200_OK, ContactSuccessResponse(id=message_id))
