import pytest
from fastapi.testclient import TestClient
from portfolio.core.config import ContactConfig, settings
from portfolio.main import app
from portfolio.api.endpoints.contact import get_contact_handler
from portfolio.models.contact import EmailSendResult
from portfolio.services.contact_service import ContactHandler
from portfolio.tests.constants.contact import ContactTestConstants

CONTACT_URL = f"{settings.API_PREFIX}/contact"


class TestContactEndpoint:
    def test_submit_contact_success(self, contact_client, mock_send_email):
        """A valid submission is relayed once and the provider id returned."""

        response = contact_client.post(
            CONTACT_URL, json=ContactTestConstants.MOCK_VALID_PAYLOAD.value
        )

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "id": ContactTestConstants.MOCK_MESSAGE_ID.value,
        }
        mock_send_email.assert_called_once()
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["sender"] == ContactTestConstants.MOCK_FROM_EMAIL.value
        assert kwargs["recipients"] == [ContactTestConstants.MOCK_TO_EMAIL.value]
        assert kwargs["reply_to"] == ContactTestConstants.MOCK_SENDER_EMAIL.value
        assert kwargs["subject"] == "contact: Ana"

    def test_submit_contact_honeypot(self, contact_client, mock_send_email):
        """A filled honeypot looks like success but sends nothing."""

        response = contact_client.post(
            CONTACT_URL, json=ContactTestConstants.MOCK_SPAM_PAYLOAD.value
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        mock_send_email.assert_not_called()

    def test_submit_contact_whitespace_honeypot_is_sent(self, contact_client, mock_send_email):
        """A whitespace-only honeypot is treated as blank."""

        payload = {**ContactTestConstants.MOCK_VALID_PAYLOAD.value, "company": "   "}

        response = contact_client.post(CONTACT_URL, json=payload)

        assert response.status_code == 200
        mock_send_email.assert_called_once()

    def test_submit_contact_invalid_email(self, contact_client, mock_send_email):
        """A malformed email gets its own 422 error shape."""

        response = contact_client.post(
            CONTACT_URL, json=ContactTestConstants.MOCK_INVALID_EMAIL_PAYLOAD.value
        )

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "invalid_email"
        assert body["field"] == "email"
        assert body["error"] == "Invalid email format"
        assert body["details"]
        mock_send_email.assert_not_called()

    @pytest.mark.parametrize(
        "payload,field",
        [
            ({"email": "ana@example.com", "message": "Hi"}, "name"),
            ({"name": "Ana", "message": "Hi"}, "email"),
            ({"name": "Ana", "email": "ana@example.com"}, "message"),
            ({"name": "", "email": "ana@example.com", "message": "Hi"}, "name"),
            ({"name": "A" * 201, "email": "ana@example.com", "message": "Hi"}, "name"),
            ({"name": "Ana", "email": "ana@example.com", "message": "x" * 5001}, "message"),
            ({"name": 42, "email": "ana@example.com", "message": "Hi"}, "name"),
            ({"name": "Ana", "email": "ana@example.com", "message": "Hi", "company": 7}, "company"),
        ],
    )
    def test_submit_contact_invalid_payload(self, contact_client, mock_send_email, payload, field):
        """Any other schema violation is a 400 with per-field details."""

        response = contact_client.post(CONTACT_URL, json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid payload"
        assert field in body["details"]["fieldErrors"]
        mock_send_email.assert_not_called()

    def test_submit_contact_malformed_json(self, contact_client, mock_send_email):
        """Unparseable JSON is treated as an empty payload."""

        response = contact_client.post(
            CONTACT_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert set(response.json()["details"]["fieldErrors"]) == {"name", "email", "message"}
        mock_send_email.assert_not_called()

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    def test_contact_method_not_allowed(self, contact_client, mock_send_email, method):
        """Only POST is accepted."""

        response = contact_client.request(method, CONTACT_URL)

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert response.json() == {"error": "Method not allowed"}
        mock_send_email.assert_not_called()

    def test_submit_contact_provider_error(self, contact_client, mock_send_email):
        """A provider-reported error is hidden behind a generic message."""

        mock_send_email.return_value = EmailSendResult(error="domain is not verified")

        response = contact_client.post(
            CONTACT_URL, json=ContactTestConstants.MOCK_VALID_PAYLOAD.value
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send email"}

    def test_submit_contact_provider_raises(self, contact_client, mock_send_email):
        """An exception from the provider call maps to the same failure."""

        mock_send_email.side_effect = RuntimeError("connection reset")

        response = contact_client.post(
            CONTACT_URL, json=ContactTestConstants.MOCK_VALID_PAYLOAD.value
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send email"}

    def test_submit_contact_not_configured(self, mail_service, mock_send_email):
        """Missing configuration is a server fault reported before any send."""

        handler = ContactHandler(
            config=ContactConfig(api_key=ContactTestConstants.MOCK_API_KEY.value),
            mail_service=mail_service,
        )
        app.dependency_overrides[get_contact_handler] = lambda: handler
        try:
            with TestClient(app) as client:
                response = client.post(
                    CONTACT_URL, json=ContactTestConstants.MOCK_VALID_PAYLOAD.value
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error"].startswith("Server not configured:")
        mock_send_email.assert_not_called()

    def test_submit_contact_duplicate_sends_twice(self, contact_client, mock_send_email):
        """Identical submissions are not deduplicated."""

        for _ in range(2):
            response = contact_client.post(
                CONTACT_URL, json=ContactTestConstants.MOCK_VALID_PAYLOAD.value
            )
            assert response.status_code == 200

        assert mock_send_email.call_count == 2


class TestStatusEndpoint:
    def test_root(self):
        with TestClient(app) as client:
            response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"status": "online", "service": settings.PROJECT_NAME}
