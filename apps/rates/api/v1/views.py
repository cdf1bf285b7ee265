"""
Webhook endpoint Telegram pushes updates to.
"""

import hmac
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from drf_spectacular.types import OpenApiTypes

from apps.rates.api.v1.serializers import UpdateSerializer
from apps.rates.application.tasks import dispatch_message

logger = logging.getLogger(__name__)

SECRET_TOKEN_HEADER = "X-Telegram-Bot-Api-Secret-Token"


@extend_schema(tags=['Bot'])
class TelegramWebhookView(APIView):

    @extend_schema(
        request=UpdateSerializer,
        parameters=[
            OpenApiParameter(
                SECRET_TOKEN_HEADER,
                OpenApiTypes.STR,
                location=OpenApiParameter.HEADER,
                description="Must match TELEGRAM_WEBHOOK_SECRET when it is configured",
            ),
        ],
        responses={
            200: OpenApiResponse(description="Update accepted"),
            400: OpenApiResponse(description="Malformed update"),
            403: OpenApiResponse(description="Wrong secret token"),
        },
        description="Receive a Telegram update and answer the message it carries",
    )
    def post(self, request):
        """
        Accept one Telegram update.

        Text and non-text messages are dispatched for processing; other update
        types are acknowledged and dropped so Telegram does not redeliver them.
        """
        secret = settings.TELEGRAM_WEBHOOK_SECRET
        if secret and not hmac.compare_digest(request.headers.get(SECRET_TOKEN_HEADER, ""), secret):
            logger.warning("Webhook call with a wrong secret token")
            return Response({"error": "Invalid secret token"}, status=status.HTTP_403_FORBIDDEN)

        serializer = UpdateSerializer(data=request.data)
        if not serializer.is_valid():
            logger.info("Malformed update: %s", serializer.errors)
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        update_id = serializer.validated_data["update_id"]
        message = serializer.to_incoming_message()
        if message is None:
            logger.info("Update %s has an unprocessed type, ignored", update_id)
            return Response({"ok": True, "dispatched": False})

        logger.info("Update %s received", update_id)
        dispatch_message(message, inline=settings.RATES_BOT_PROCESS_INLINE)

        return Response({"ok": True, "dispatched": True})
