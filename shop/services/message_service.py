"""Messaging service layer

Support chat between customers and the shop admins, and the public contact
form.

Usage:
    message = MessageService.send_to_support(user, "Do you have size 44?")
    MessageService.reply_to_customer(admin, user.id, "Yes, in black.")
    result = MessageService.mark_as_read(user)

    ContactService.submit(name="Ama", email="ama@example.com", message="Hello")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db import transaction
from django.db.models import Count, Exists, OuterRef, Q, Subquery

from ..models.message import ContactMessage, Message
from ..models.user import User
from .base import ServiceError, log_service_call

if TYPE_CHECKING:
    from django.db.models import QuerySet

logger = logging.getLogger(__name__)


class MessageServiceError(ServiceError):
    """Messaging service error"""

    def __init__(self, message: str, code: str = "MESSAGE_ERROR", details: dict | None = None):
        super().__init__(message, code, details)


@dataclass
class MarkReadResult:
    """Read-marking outcome"""

    count: int
    message: str


class MessageService:
    """
    Support chat

    Responsibilities:
    - customer to admin and admin to customer messages
    - a customer's own thread and the admin inbox
    - read state and unread counters
    """

    @staticmethod
    def _thread(user_id: int) -> QuerySet[Message]:
        return Message.objects.filter(Q(sender_id=user_id) | Q(receiver_id=user_id))

    @staticmethod
    def _clean_content(content: str) -> str:
        content = (content or "").strip()
        if not content:
            raise MessageServiceError("Message cannot be empty.", code="EMPTY_MESSAGE")
        return content

    @staticmethod
    def _get_reply_target(thread_user_id: int, reply_to_id: int | None) -> Message | None:
        if reply_to_id is None:
            return None
        try:
            return MessageService._thread(thread_user_id).get(pk=reply_to_id)
        except Message.DoesNotExist:
            raise MessageServiceError(
                "The message you are replying to was not found.",
                code="MESSAGE_NOT_FOUND",
                details={"reply_to": reply_to_id},
            )

    # ===== Customer side =====

    @staticmethod
    @log_service_call
    def get_user_messages(user: User) -> QuerySet[Message]:
        """Every message the user sent or received, oldest first"""
        return MessageService._thread(user.id).select_related("sender", "receiver").order_by("created_at", "id")

    @staticmethod
    @log_service_call
    @transaction.atomic
    def send_to_support(user: User, content: str, reply_to_id: int | None = None) -> Message:
        """
        Send a customer message to the shop

        The message goes to the first active admin account.

        Raises:
            MessageServiceError: empty content, no admin account, unknown reply target
        """
        content = MessageService._clean_content(content)

        admin = User.objects.filter(is_staff=True, is_active=True).order_by("id").first()
        if admin is None:
            raise MessageServiceError("No admin available to receive messages.", code="NO_ADMIN_AVAILABLE")

        message = Message.objects.create(
            sender=user,
            receiver=admin,
            content=content,
            reply_to=MessageService._get_reply_target(user.id, reply_to_id),
        )

        logger.info("[Message] sent to support | user_id=%d, admin_id=%d, message_id=%d", user.id, admin.id, message.id)
        return message

    @staticmethod
    @log_service_call
    @transaction.atomic
    def mark_as_read(user: User, message_ids: list[int] | None = None) -> MarkReadResult:
        """
        Mark messages received by the user as read

        Args:
            user: receiver
            message_ids: only these messages (None marks everything)
        """
        queryset = Message.objects.filter(receiver=user, is_read=False)
        if message_ids:
            queryset = queryset.filter(id__in=message_ids)

        count = queryset.update(is_read=True)

        if count == 0:
            message = "No unread messages."
        else:
            message = f"{count} message(s) marked as read."

        logger.info("[Message] marked read | user_id=%d, count=%d, ids=%s", user.id, count, message_ids or "all")
        return MarkReadResult(count=count, message=message)

    @staticmethod
    def unread_count(user: User) -> int:
        return Message.objects.filter(receiver=user, is_read=False).count()

    # ===== Admin side =====

    @staticmethod
    @log_service_call
    def get_conversations() -> QuerySet[User]:
        """
        Admin inbox: one row per customer with a thread

        Annotates unread_count (customer messages not yet read) and
        last_message_at, newest thread first.
        """
        thread = Message.objects.filter(Q(sender=OuterRef("pk")) | Q(receiver=OuterRef("pk")))
        return (
            User.objects.filter(is_staff=False)
            .filter(Exists(thread))
            .annotate(
                unread_count=Count(
                    "sent_messages",
                    filter=Q(sent_messages__is_read=False, sent_messages__is_admin_message=False),
                ),
                last_message_at=Subquery(thread.order_by("-created_at").values("created_at")[:1]),
            )
            .order_by("-last_message_at")
        )

    @staticmethod
    @log_service_call
    def get_conversation(user_id: int) -> QuerySet[Message]:
        """
        One customer's thread, oldest first

        Raises:
            MessageServiceError: unknown user
        """
        MessageService._get_customer(user_id)
        return MessageService._thread(user_id).select_related("sender", "receiver").order_by("created_at", "id")

    @staticmethod
    @log_service_call
    @transaction.atomic
    def reply_to_customer(admin: User, user_id: int, content: str, reply_to_id: int | None = None) -> Message:
        """
        Send an admin message to a customer

        Raises:
            MessageServiceError: empty content, unknown user, unknown reply target
        """
        content = MessageService._clean_content(content)
        customer = MessageService._get_customer(user_id)

        message = Message.objects.create(
            sender=admin,
            receiver=customer,
            content=content,
            is_admin_message=True,
            reply_to=MessageService._get_reply_target(customer.id, reply_to_id),
        )

        logger.info("[Message] admin reply | admin_id=%d, user_id=%d, message_id=%d", admin.id, customer.id, message.id)
        return message

    @staticmethod
    @log_service_call
    @transaction.atomic
    def mark_conversation_read(user_id: int) -> MarkReadResult:
        """Mark everything a customer sent to the shop as read"""
        MessageService._get_customer(user_id)

        count = Message.objects.filter(sender_id=user_id, is_admin_message=False, is_read=False).update(is_read=True)

        logger.info("[Message] conversation read | user_id=%d, count=%d", user_id, count)
        return MarkReadResult(count=count, message=f"{count} message(s) marked as read.")

    @staticmethod
    def _get_customer(user_id: int) -> User:
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            raise MessageServiceError(
                "User not found.",
                code="USER_NOT_FOUND",
                details={"user_id": user_id},
            )


class ContactService:
    """Contact form submissions and their read state"""

    @staticmethod
    @log_service_call
    @transaction.atomic
    def submit(name: str, email: str, message: str, subject: str = "", user: User | None = None) -> ContactMessage:
        """Store a contact form submission (guests allowed)"""
        contact = ContactMessage.objects.create(
            user=user if user is not None and user.is_authenticated else None,
            name=name,
            email=email,
            subject=subject or "",
            message=message,
        )

        logger.info("[Contact] received | contact_id=%d, user_id=%s", contact.id, contact.user_id)
        return contact

    @staticmethod
    @log_service_call
    def mark_read(contact: ContactMessage) -> bool:
        """
        Mark a submission as read

        Returns:
            bool: False when it was already read
        """
        if contact.is_read:
            return False

        contact.is_read = True
        contact.save(update_fields=["is_read"])
        logger.info("[Contact] marked read | contact_id=%d", contact.id)
        return True
