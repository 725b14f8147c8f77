# Admin and ownership permission classes.

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rest_framework import permissions

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


def is_admin_user(user: Any) -> bool:
    return bool(user and user.is_authenticated and (user.is_staff or user.is_superuser))


class IsAdmin(permissions.BasePermission):
    """
    Admin only (is_staff or superuser)

    Used by the back-office endpoints: stats, user roles, review moderation,
    payment confirmation and order status updates.
    """

    message = "Admin access required."

    def has_permission(self, request: Request, view: APIView) -> bool:
        return is_admin_user(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Anyone may read, only admins may write

    - Product list/detail are public
    - Product create/update/delete are admin only

    Usage:
        permission_classes = [IsAdminOrReadOnly]
    """

    message = "Only admins can create, edit or delete products."

    def has_permission(self, request: Request, view: APIView) -> bool:
        """
        Request level check

        Args:
            request: HTTP request
            view: view

        Returns:
            bool: allowed
        """
        if request.method in permissions.SAFE_METHODS:
            return True

        return is_admin_user(request.user)


class IsOrderOwnerOrAdmin(permissions.BasePermission):
    """
    Order owner or admin

    - Customers only reach their own orders
    - Admins reach every order
    - Paired with get_queryset filtering in OrderViewSet

    Usage:
        permission_classes = [IsAuthenticated, IsOrderOwnerOrAdmin]
    """

    message = "You can only view your own orders."

    def has_object_permission(self, request: Request, view: APIView, obj: Any) -> bool:
        if is_admin_user(request.user):
            return True

        return obj.user == request.user
