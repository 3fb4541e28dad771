"""Client side of the contact flow.

``ContactForm`` holds what the visitor typed, does the quick presence
check, posts to ``/api/contact`` and keeps a single status line for the
page to show. It never retries on its own.
"""

import logging
from enum import Enum
from typing import Literal, Optional

import httpx
from pydantic import BaseModel

from portfolio.utils.helper_functions import single_line

logger = logging.getLogger(__name__)

MSG_MISSING_FIELDS = "Please fill in all fields"
MSG_SENT = "Thanks! Your message has been sent"
MSG_REQUEST_FAILED = "Request failed"
MSG_GENERIC_FAILURE = "Something went wrong. Please try again later."

FORM_FIELDS = ("name", "email", "message", "honeypot")


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class FormStatus(BaseModel):
    type: Literal["ok", "error"]
    msg: str


class ContactForm:
    """State machine behind the contact form.

    Attributes:
        name: Sender name as typed
        email: Sender email as typed
        message: Message body as typed
        honeypot: Hidden field, posted as ``company``
        loading: True while a request is in flight
        status: Last outcome, None when idle
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        endpoint: str = "/api/contact",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url
        self.endpoint = endpoint
        self.transport = transport
        self.timeout = timeout
        self.name = ""
        self.email = ""
        self.message = ""
        self.honeypot = ""
        self.loading = False
        self.status: Optional[FormStatus] = None

    @property
    def state(self) -> FormState:
        if self.loading:
            return FormState.SUBMITTING
        if self.status is None:
            return FormState.IDLE
        return FormState.SUCCESS if self.status.type == "ok" else FormState.ERROR

    @property
    def can_submit(self) -> bool:
        """Whether the submit control is enabled."""
        return not self.loading

    def update(self, field: str, value: str) -> None:
        """Edit one field; a shown outcome is cleared so the form is idle again."""
        if field not in FORM_FIELDS:
            raise ValueError(f"Unknown contact form field: {field}")
        setattr(self, field, value)
        if not self.loading:
            self.status = None

    def payload(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "company": self.honeypot,
        }

    def reset(self) -> None:
        for field in FORM_FIELDS:
            setattr(self, field, "")

    async def submit(self) -> Optional[FormStatus]:
        """Validate presence, post the form and record the outcome.

        Returns:
            The resulting status; unchanged status if a submit is in flight
        """
        if not self.can_submit:
            return self.status

        self.status = None
        if not self.name.strip() or not self.email.strip() or not self.message.strip():
            self._set_status("error", MSG_MISSING_FIELDS)
            return self.status

        self.loading = True
        try:
            client_kwargs = {"base_url": self.base_url, "transport": self.transport}
            # None keeps httpx's own default rather than disabling timeouts
            if self.timeout is not None:
                client_kwargs["timeout"] = self.timeout
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.post(self.endpoint, json=self.payload())

            if response.is_success:
                self._set_status("ok", MSG_SENT)
                self.reset()
            else:
                self._set_status("error", self._error_message(response))
        except httpx.HTTPError as e:
            logger.warning(f"Contact form request failed: {str(e)}")
            self._set_status("error", MSG_GENERIC_FAILURE)
        finally:
            self.loading = False

        return self.status

    def _set_status(self, kind: str, msg: str) -> None:
        self.status = FormStatus(type=kind, msg=single_line(msg) or MSG_GENERIC_FAILURE)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return MSG_REQUEST_FAILED
        if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
            return body["error"]
        return MSG_REQUEST_FAILED
