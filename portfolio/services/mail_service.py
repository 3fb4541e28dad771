"""
MailService Module

This module sends transactional email through the Resend REST API and
renders the HTML bodies with Jinja2.
"""

import os
import logging
from typing import Any, Dict, List, Optional

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from portfolio.core.config import settings
from portfolio.models.contact import EmailSendData, EmailSendResult

logger = logging.getLogger(__name__)

template_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
jinja_env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(['html', 'xml']),
    enable_async=True
)


class MailService:
    """Resend client with template rendering capabilities."""

    def __init__(self, api_key: Optional[str], api_url: Optional[str] = None, timeout: float = 10.0):
        self.api_key = api_key
        self.api_url = api_url or settings.RESEND_API_URL
        self.timeout = timeout

    async def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Asynchronously render a Jinja template with the given context.

        Args:
            template_name: The name of the template file to render
            context: Dictionary of variables to pass to the template

        Returns:
            The rendered template as a string
        """
        template = jinja_env.get_template(template_name)
        return await template.render_async(**context)

    async def send_email(
        self,
        sender: str,
        recipients: List[str],
        subject: str,
        html: str,
        reply_to: Optional[str] = None,
    ) -> EmailSendResult:
        """
        Send one HTML email through Resend.

        Provider and transport failures are reported in the result, not raised.

        Args:
            sender: From address, must be verified with Resend
            recipients: List of recipient addresses
            subject: Email subject line
            html: Rendered HTML body
            reply_to: Optional Reply-To address

        Returns:
            EmailSendResult with the provider message id or an error message
        """
        payload = {
            "from": sender,
            "to": recipients,
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as e:
            logger.error(f"Transport error sending email via Resend: {str(e)}")
            return EmailSendResult(error=str(e) or e.__class__.__name__)

        if response.is_success:
            message_id = self._json(response).get("id")
            logger.info(f"Email accepted by Resend: {message_id}")
            return EmailSendResult(data=EmailSendData(id=message_id))

        body = self._json(response)
        error = body.get("message") or body.get("name") or response.text or f"HTTP {response.status_code}"
        logger.error(f"Resend rejected email: {response.status_code} - {error}")
        return EmailSendResult(error=error)

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
