"""
Messaging API

Support chat for customers, the admin inbox, and the public contact form.
Business logic lives in MessageService and ContactService.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, permissions, serializers as drf_serializers, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from shop.models.message import ContactMessage, Message
from shop.permissions import IsAdmin
from shop.serializers import (
    ContactMessageSerializer,
    ConversationSerializer,
    MessageCreateSerializer,
    MessageMarkReadSerializer,
    MessageSerializer,
)
from shop.services.message_service import ContactService, MessageService, MessageServiceError
from shop.throttles import ContactRateThrottle
from shop.views.mixins import ServiceErrorResponseMixin


# ===== Response serializers for the API docs =====


class MessageThreadResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()
    unread_count = drf_serializers.IntegerField()
    results = MessageSerializer(many=True)


class MarkReadResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    count = drf_serializers.IntegerField()


class UnreadCountResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()


class MessageErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    code = drf_serializers.CharField(required=False)


class MessageViewSet(ServiceErrorResponseMixin, GenericViewSet):
    """
    Customer support chat

    Endpoints:
    - GET  /api/messages/              - own thread, oldest first
    - POST /api/messages/              - write to the shop
    - POST /api/messages/mark_read/    - mark received messages as read
    - GET  /api/messages/unread_count/ - badge counter
    """

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = MessageCreateSerializer
    queryset = Message.objects.none()

    @extend_schema(
        responses={200: MessageThreadResponseSerializer},
        summary="Own support chat.",
        tags=["Messages"],
    )
    def list(self, request: Request) -> Response:
        messages = MessageService.get_user_messages(request.user)
        serializer = MessageSerializer(messages, many=True)
        return Response(
            {
                "count": len(serializer.data),
                "unread_count": MessageService.unread_count(request.user),
                "results": serializer.data,
            }
        )

    @extend_schema(
        request=MessageCreateSerializer,
        responses={201: MessageSerializer, 400: MessageErrorResponseSerializer},
        summary="Send a message to the shop.",
        description="Delivered to the first active admin account.",
        tags=["Messages"],
    )
    def create(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            message = MessageService.send_to_support(
                request.user,
                serializer.validated_data["content"],
                reply_to_id=serializer.validated_data.get("reply_to"),
            )
        except MessageServiceError as e:
            return self.service_error_response(e)

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=MessageMarkReadSerializer,
        responses={200: MarkReadResponseSerializer},
        summary="Mark received messages as read.",
        description="An empty or missing message_ids marks every received message.",
        tags=["Messages"],
    )
    @action(detail=False, methods=["post"])
    def mark_read(self, request: Request) -> Response:
        serializer = MessageMarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.mark_as_read(request.user, serializer.validated_data.get("message_ids") or None)
        return Response({"message": result.message, "count": result.count})

    @extend_schema(
        responses={200: UnreadCountResponseSerializer},
        summary="Unread message count.",
        tags=["Messages"],
    )
    @action(detail=False, methods=["get"])
    def unread_count(self, request: Request) -> Response:
        return Response({"count": MessageService.unread_count(request.user)})


@extend_schema_view(
    list=extend_schema(summary="Support inbox (admin).", tags=["Admin"]),
)
class AdminConversationViewSet(ServiceErrorResponseMixin, mixins.ListModelMixin, GenericViewSet):
    """
    Admin side of the support chat

    - GET  /api/admin/conversations/                 - customers with a thread
    - GET  /api/admin/conversations/{id}/            - one customer's thread
    - POST /api/admin/conversations/{id}/reply/      - answer the customer
    - POST /api/admin/conversations/{id}/mark_read/  - mark the customer's messages read
    """

    permission_classes = [IsAdmin]
    serializer_class = ConversationSerializer
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return MessageService.get_conversations()

    @extend_schema(
        responses={200: MessageSerializer(many=True), 404: MessageErrorResponseSerializer},
        summary="One customer's thread (admin).",
        tags=["Admin"],
    )
    def retrieve(self, request: Request, pk: int | None = None) -> Response:
        try:
            messages = MessageService.get_conversation(int(pk))
        except MessageServiceError as e:
            return self.service_error_response(e, status_code=status.HTTP_404_NOT_FOUND)

        return Response(MessageSerializer(messages, many=True).data)

    @extend_schema(
        request=MessageCreateSerializer,
        responses={201: MessageSerializer, 400: MessageErrorResponseSerializer, 404: MessageErrorResponseSerializer},
        summary="Reply to a customer (admin).",
        tags=["Admin"],
    )
    @action(detail=True, methods=["post"])
    def reply(self, request: Request, pk: int | None = None) -> Response:
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            message = MessageService.reply_to_customer(
                request.user,
                int(pk),
                serializer.validated_data["content"],
                reply_to_id=serializer.validated_data.get("reply_to"),
            )
        except MessageServiceError as e:
            status_code = status.HTTP_404_NOT_FOUND if e.code == "USER_NOT_FOUND" else status.HTTP_400_BAD_REQUEST
            return self.service_error_response(e, status_code=status_code)

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=None,
        responses={200: MarkReadResponseSerializer, 404: MessageErrorResponseSerializer},
        summary="Mark a customer's messages as read (admin).",
        tags=["Admin"],
    )
    @action(detail=True, methods=["post"])
    def mark_read(self, request: Request, pk: int | None = None) -> Response:
        try:
            result = MessageService.mark_conversation_read(int(pk))
        except MessageServiceError as e:
            return self.service_error_response(e, status_code=status.HTTP_404_NOT_FOUND)

        return Response({"message": result.message, "count": result.count})


@extend_schema_view(
    create=extend_schema(summary="Send the contact form.", tags=["Contact"]),
    list=extend_schema(summary="Contact form submissions (admin).", tags=["Admin"]),
)
class ContactMessageViewSet(mixins.CreateModelMixin, mixins.ListModelMixin, GenericViewSet):
    """
    Contact form

    - POST /api/contact/                 - anyone, guests included
    - GET  /api/contact/                 - admin, newest first
    - POST /api/contact/{id}/mark_read/  - admin
    """

    serializer_class = ContactMessageSerializer
    queryset = ContactMessage.objects.select_related("user")

    def get_permissions(self):
        if self.action == "create":
            return [permissions.AllowAny()]
        return [IsAdmin()]

    def get_throttles(self):
        if self.action == "create":
            return [ContactRateThrottle()]
        return super().get_throttles()

    def perform_create(self, serializer):
        serializer.instance = ContactService.submit(user=self.request.user, **serializer.validated_data)

    @extend_schema(request=None, responses={200: ContactMessageSerializer}, summary="Mark as read (admin).", tags=["Admin"])
    @action(detail=True, methods=["post"])
    def mark_read(self, request: Request, pk: int | None = None) -> Response:
        contact = self.get_object()
        ContactService.mark_read(contact)
        return Response(ContactMessageSerializer(contact).data)
