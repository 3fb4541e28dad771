"""Contact form endpoint for the portfolio site.

This module exposes the single public route that relays contact form
submissions to the site owner's inbox.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio.core.config import ContactConfig, settings
from portfolio.models.contact import (
    ContactSuccessResponse,
    ErrorResponse,
    InvalidEmailResponse,
    InvalidPayloadResponse,
)
from portfolio.services.contact_service import ContactHandler

logger = logging.getLogger(__name__)

router = APIRouter()

# Every method is routed here so the handler itself answers 405.
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def get_contact_handler() -> ContactHandler:
    """Build the handler from the settings read at startup."""
    return ContactHandler(config=ContactConfig.from_settings(settings))


@router.api_route(
    "/contact",
    methods=ROUTED_METHODS,
    response_model=ContactSuccessResponse,
    summary="Submit contact form",
    description="Relay a contact form message to the site owner by email. No authentication required.",
    responses={
        400: {"model": InvalidPayloadResponse},
        405: {"model": ErrorResponse},
        422: {"model": InvalidEmailResponse},
        500: {"model": ErrorResponse},
    },
)
async def submit_contact_form(
    request: Request,
    handler: ContactHandler = Depends(get_contact_handler),
) -> JSONResponse:
    """
    Submit a contact form message.

    The raw body is handed to the handler unparsed so malformed JSON ends up
    as a validation error rather than a framework error.

    Args:
        request: FastAPI request object
        handler: Contact handler dependency

    Returns:
        JSON response following the contact wire protocol
    """
    body = await request.body()
    return await handler.handle(request.method, body)
