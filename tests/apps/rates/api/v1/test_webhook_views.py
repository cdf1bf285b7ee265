import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from rest_framework.test import APIClient
from rest_framework import status

from apps.rates.domain.models import IncomingMessage

WEBHOOK_URL = "/api/v1/bot/webhook/"


@pytest.fixture
def api_client():
    """DRF API client."""
    return APIClient()


def make_update(**message_fields):
    message = {"message_id": 7, "date": 1621166400, "chat": {"id": 42, "type": "private"}}
    message.update(message_fields)
    return {"update_id": 1001, "message": message}


@pytest.fixture(autouse=True)
def no_secret(settings):
    settings.TELEGRAM_WEBHOOK_SECRET = ""
    settings.RATES_BOT_PROCESS_INLINE = False


class TestTelegramWebhookView:
    """Tests for the Telegram webhook endpoint."""

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_text_message_is_dispatched(self, mock_dispatch, api_client):
        response = api_client.post(WEBHOOK_URL, make_update(text="USD 16.05.2021"), format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"ok": True, "dispatched": True}
        mock_dispatch.assert_called_once_with(
            IncomingMessage(
                chat_id=42,
                message_id=7,
                text="USD 16.05.2021",
                timestamp=datetime(2021, 5, 16, 12, 0, tzinfo=timezone.utc),
            ),
            inline=False,
        )

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_sticker_is_dispatched_without_text(self, mock_dispatch, api_client):
        """
        Test that a non-text message still gets answered (with the "text only" rejection).
        """
        response = api_client.post(WEBHOOK_URL, make_update(sticker={"file_id": "abc"}), format="json")

        assert response.status_code == status.HTTP_200_OK
        message = mock_dispatch.call_args[0][0]
        assert message.text is None

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_edited_message_is_dispatched(self, mock_dispatch, api_client):
        update = make_update(text="EUR 2021-05-16")
        update["edited_message"] = update.pop("message")

        response = api_client.post(WEBHOOK_URL, update, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert mock_dispatch.call_args[0][0].text == "EUR 2021-05-16"

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_other_update_types_are_ignored(self, mock_dispatch, api_client):
        update = {"update_id": 1002, "callback_query": {"id": "1", "data": "x"}}

        response = api_client.post(WEBHOOK_URL, update, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"ok": True, "dispatched": False}
        mock_dispatch.assert_not_called()

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_malformed_update(self, mock_dispatch, api_client):
        response = api_client.post(WEBHOOK_URL, {"message": {"text": "USD"}}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_dispatch.assert_not_called()

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_wrong_secret_token(self, mock_dispatch, api_client, settings):
        settings.TELEGRAM_WEBHOOK_SECRET = "s3cret"

        response = api_client.post(
            WEBHOOK_URL,
            make_update(text="USD 16.05.2021"),
            format="json",
            HTTP_X_TELEGRAM_BOT_API_SECRET_TOKEN="wrong",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_dispatch.assert_not_called()

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_matching_secret_token(self, mock_dispatch, api_client, settings):
        settings.TELEGRAM_WEBHOOK_SECRET = "s3cret"

        response = api_client.post(
            WEBHOOK_URL,
            make_update(text="USD 16.05.2021"),
            format="json",
            HTTP_X_TELEGRAM_BOT_API_SECRET_TOKEN="s3cret",
        )

        assert response.status_code == status.HTTP_200_OK
        mock_dispatch.assert_called_once()

    @patch('apps.rates.api.v1.views.dispatch_message')
    def test_inline_processing_setting(self, mock_dispatch, api_client, settings):
        settings.RATES_BOT_PROCESS_INLINE = True

        api_client.post(WEBHOOK_URL, make_update(text="USD 16.05.2021"), format="json")

        assert mock_dispatch.call_args[1] == {"inline": True}

    def test_get_not_allowed(self, api_client):
        response = api_client.get(WEBHOOK_URL)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


def test_openapi_schema_lists_webhook(api_client):
    response = api_client.get("/api/schema/", HTTP_ACCEPT="application/vnd.oai.openapi+json")

    assert response.status_code == status.HTTP_200_OK
    assert WEBHOOK_URL in response.data["paths"]
