"""
Serializers for incoming Telegram updates.
Only the fields the bot reads are declared; everything else is ignored.
"""

from datetime import datetime, timezone
from typing import Optional

from rest_framework import serializers

from apps.rates.domain.models import IncomingMessage


class ChatSerializer(serializers.Serializer):
    id = serializers.IntegerField()


class MessageSerializer(serializers.Serializer):
    message_id = serializers.IntegerField()
    date = serializers.IntegerField(help_text="Unix time the message was sent")
    chat = ChatSerializer()
    text = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class UpdateSerializer(serializers.Serializer):
    update_id = serializers.IntegerField()
    message = MessageSerializer(required=False)
    edited_message = MessageSerializer(required=False)

    def to_incoming_message(self) -> Optional[IncomingMessage]:
        """
        The message carried by the update, or None for update types the bot ignores
        (inline queries, callback queries, channel posts, polls...).
        """
        data = self.validated_data
        message_data = data.get("message") or data.get("edited_message")
        if message_data is None:
            return None

        return IncomingMessage(
            chat_id=message_data["chat"]["id"],
            message_id=message_data["message_id"],
            text=message_data.get("text"),
            timestamp=datetime.fromtimestamp(message_data["date"], tz=timezone.utc),
        )
