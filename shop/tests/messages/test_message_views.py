"""
Messaging API tests

/api/messages/ (customer chat), /api/admin/conversations/ (admin inbox)
and /api/contact/ (contact form).
"""

from django.urls import reverse

import pytest
from rest_framework import status

from shop.models.message import ContactMessage, Message
from shop.tests.factories import ContactMessageFactory, MessageFactory


def conversation_url(name, user_id):
    return reverse(f"admin-conversation-{name}", kwargs={"pk": user_id})


@pytest.mark.django_db
class TestCustomerChatAPI:
    def test_send_and_list(self, authenticated_client, user, admin_user):
        sent = authenticated_client.post(reverse("message-list"), {"content": "Size 44 in stock?"}, format="json")

        assert sent.status_code == status.HTTP_201_CREATED
        assert sent.data["receiver"] == admin_user.id
        assert sent.data["sender_name"] == "Ama Mensah"

        MessageFactory.from_admin(sender=admin_user, receiver=user)
        thread = authenticated_client.get(reverse("message-list"))

        assert thread.status_code == status.HTTP_200_OK
        assert thread.data["count"] == 2
        assert thread.data["unread_count"] == 1
        assert thread.data["results"][0]["content"] == "Size 44 in stock?"

    def test_blank_content(self, authenticated_client, admin_user):
        response = authenticated_client.post(reverse("message-list"), {"content": "   "}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "content" in response.data

    def test_no_admin_available(self, authenticated_client):
        response = authenticated_client.post(reverse("message-list"), {"content": "Hello?"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == "NO_ADMIN_AVAILABLE"

    def test_mark_read_and_unread_count(self, authenticated_client, user, admin_user):
        first = MessageFactory.from_admin(sender=admin_user, receiver=user)
        MessageFactory.from_admin(sender=admin_user, receiver=user)

        assert authenticated_client.get(reverse("message-unread-count")).data["count"] == 2

        response = authenticated_client.post(reverse("message-mark-read"), {"message_ids": [first.id]}, format="json")

        assert response.data["count"] == 1
        assert authenticated_client.get(reverse("message-unread-count")).data["count"] == 1

    def test_mark_read_without_ids_marks_everything(self, authenticated_client, user, admin_user):
        MessageFactory.from_admin(sender=admin_user, receiver=user)
        MessageFactory.from_admin(sender=admin_user, receiver=user)

        response = authenticated_client.post(reverse("message-mark-read"), {}, format="json")

        assert response.data["count"] == 2

    def test_anonymous_is_rejected(self, api_client):
        response = api_client.get(reverse("message-list"))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


@pytest.mark.django_db
class TestAdminInboxAPI:
    def test_inbox(self, admin_client, user, admin_user):
        MessageFactory(sender=user, receiver=admin_user)

        response = admin_client.get(reverse("admin-conversation-list"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
        row = response.data["results"][0]
        assert row["user_id"] == user.id
        assert row["unread_count"] == 1
        assert row["last_message_at"] is not None

    def test_thread(self, admin_client, user, admin_user):
        MessageFactory(sender=user, receiver=admin_user)
        MessageFactory.from_admin(sender=admin_user, receiver=user)

        response = admin_client.get(conversation_url("detail", user.id))

        assert response.status_code == status.HTTP_200_OK
        assert [row["is_admin_message"] for row in response.data] == [False, True]

    def test_unknown_customer(self, admin_client):
        response = admin_client.get(conversation_url("detail", 999999))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["code"] == "USER_NOT_FOUND"

    def test_reply(self, admin_client, user, admin_user):
        response = admin_client.post(conversation_url("reply", user.id), {"content": "Yes, in black."}, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["is_admin_message"] is True
        assert Message.objects.get(pk=response.data["id"]).receiver == user

    def test_mark_read(self, admin_client, user, admin_user):
        MessageFactory(sender=user, receiver=admin_user)

        response = admin_client.post(conversation_url("mark-read", user.id))

        assert response.data["count"] == 1
        assert not Message.objects.filter(is_read=False).exists()

    def test_customer_is_forbidden(self, authenticated_client, other_user):
        response = authenticated_client.post(conversation_url("reply", other_user.id), {"content": "Hi"}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Message.objects.exists()


@pytest.mark.django_db
class TestContactAPI:
    def test_guest_can_write(self, api_client):
        response = api_client.post(
            reverse("contact-list"),
            {"name": "Yaw Darko", "email": "yaw@example.com", "message": "Do you deliver to Tema?"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["user"] is None
        assert ContactMessage.objects.get().subject == ""

    def test_signed_in_user_is_linked(self, authenticated_client, user):
        response = authenticated_client.post(
            reverse("contact-list"),
            {"name": "Kofi", "email": user.email, "subject": "Returns", "message": "How do returns work?"},
            format="json",
        )

        assert response.data["user"] == user.id

    def test_missing_fields(self, api_client):
        response = api_client.post(reverse("contact-list"), {"name": "Yaw"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {"email", "message"} <= set(response.data)

    def test_admin_lists_and_marks_read(self, admin_client):
        contact = ContactMessageFactory()

        listed = admin_client.get(reverse("contact-list"))
        marked = admin_client.post(reverse("contact-mark-read", kwargs={"pk": contact.pk}))

        assert listed.data["count"] == 1
        assert marked.data["is_read"] is True

    def test_customer_cannot_list(self, authenticated_client):
        ContactMessageFactory()

        response = authenticated_client.get(reverse("contact-list"))

        assert response.status_code == status.HTTP_403_FORBIDDEN
