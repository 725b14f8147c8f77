from django.conf import settings
from django.db import models


class Message(models.Model):
    """
    Support chat message between a customer and the shop admins

    Customers write to an admin; admins answer a customer. is_admin_message
    marks the side of the conversation a line came from.
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        verbose_name="sender",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
        verbose_name="receiver",
    )

    content = models.TextField(verbose_name="content")
    is_admin_message = models.BooleanField(default=False, verbose_name="sent by an admin")
    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
        verbose_name="reply to",
    )

    is_read = models.BooleanField(default=False, verbose_name="read")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="sent at")

    class Meta:
        db_table = "shop_messages"
        verbose_name = "message"
        verbose_name_plural = "messages"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["receiver", "is_read"]),
        ]

    def __str__(self):
        return f"{self.sender} -> {self.receiver}: {self.content[:30]}"


class ContactMessage(models.Model):
    """Contact form submission; guests may write too"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contact_messages",
        verbose_name="user",
    )

    name = models.CharField(max_length=100, verbose_name="name")
    email = models.EmailField(verbose_name="email")
    subject = models.CharField(max_length=200, blank=True, verbose_name="subject")
    message = models.TextField(verbose_name="message")

    is_read = models.BooleanField(default=False, verbose_name="read")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="received at")

    class Meta:
        db_table = "shop_contact_messages"
        verbose_name = "contact message"
        verbose_name_plural = "contact messages"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} <{self.email}>: {self.subject or '(no subject)'}"
