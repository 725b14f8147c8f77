from __future__ import annotations

from rest_framework import serializers

from ..models.message import ContactMessage, Message
from ..models.user import User


class MessageSerializer(serializers.ModelSerializer):
    """One line of a support chat"""

    sender_name = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = [
            "id",
            "sender",
            "sender_name",
            "receiver",
            "content",
            "is_admin_message",
            "reply_to",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields

    def get_sender_name(self, obj: Message) -> str:
        return obj.sender.get_full_name() or obj.sender.username


class MessageCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=2000)
    reply_to = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class MessageMarkReadSerializer(serializers.Serializer):
    """Empty or missing message_ids marks everything"""

    message_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        allow_empty=True,
    )


class ConversationSerializer(serializers.ModelSerializer):
    """Admin inbox row, built on MessageService.get_conversations()"""

    user_id = serializers.IntegerField(source="id", read_only=True)
    unread_count = serializers.IntegerField(read_only=True)
    last_message_at = serializers.DateTimeField(read_only=True)

    class Meta:
        model = User
        fields = ["user_id", "username", "first_name", "last_name", "unread_count", "last_message_at"]
        read_only_fields = fields


class ContactMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = ["id", "user", "name", "email", "subject", "message", "is_read", "created_at"]
        read_only_fields = ["id", "user", "is_read", "created_at"]
        extra_kwargs = {"subject": {"required": False, "allow_blank": True}}
