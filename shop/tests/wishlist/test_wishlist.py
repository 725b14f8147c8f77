"""
Wishlist tests

WishlistService plus the /api/wishlist/ endpoints.
"""

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone

import pytest
from rest_framework import status

from shop.models.product import Product
from shop.services.wishlist_service import WishlistService, WishlistServiceError
from shop.tests.factories import ProductFactory


@pytest.mark.django_db
class TestWishlistService:
    def test_toggle_adds_then_removes(self, user, other_user, product):
        other_user.add_to_wishlist(product)

        added = WishlistService.toggle(user, product.id)
        assert added.is_wished is True
        assert added.wishlist_count == 2

        removed = WishlistService.toggle(user, product.id)
        assert removed.is_wished is False
        assert removed.wishlist_count == 1
        assert not user.is_in_wishlist(product)

    def test_add_is_idempotent(self, user, product):
        assert WishlistService.add(user, product.id)[0] is True
        is_new, _, count = WishlistService.add(user, product.id)

        assert is_new is False
        assert count == 1

    def test_remove_missing_product(self, user, product):
        with pytest.raises(WishlistServiceError) as exc_info:
            WishlistService.remove(user, product.id)

        assert exc_info.value.code == "NOT_IN_WISHLIST"

    def test_unknown_product(self, user):
        with pytest.raises(WishlistServiceError) as exc_info:
            WishlistService.toggle(user, 999999)

        assert exc_info.value.code == "PRODUCT_NOT_FOUND"

    def test_list_newest_first(self, user):
        older = ProductFactory()
        newer = ProductFactory()
        Product.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=1))
        user.add_to_wishlist(older)
        user.add_to_wishlist(newer)

        assert list(WishlistService.get_list(user)) == [newer, older]


@pytest.mark.django_db
class TestWishlistAPI:
    def test_list(self, authenticated_client, user, product):
        user.add_to_wishlist(product)

        response = authenticated_client.get(reverse("wishlist-list"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
        item = response.data["results"][0]
        assert item["name"] == "Palace Loafer"
        assert item["primary_image"] == "https://cdn.example.com/shoe.jpg"
        assert item["is_available"] is True

    def test_toggle(self, authenticated_client, product):
        response = authenticated_client.post(reverse("wishlist-toggle"), {"product_id": product.id}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_wished"] is True
        assert response.data["wishlist_count"] == 1

    def test_add_status_codes(self, authenticated_client, product):
        first = authenticated_client.post(reverse("wishlist-add"), {"product_id": product.id}, format="json")
        second = authenticated_client.post(reverse("wishlist-add"), {"product_id": product.id}, format="json")

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_200_OK

    def test_remove_with_query_string(self, authenticated_client, user, product):
        user.add_to_wishlist(product)

        response = authenticated_client.delete(f"{reverse('wishlist-remove')}?product_id={product.id}")

        assert response.status_code == status.HTTP_200_OK
        assert not user.is_in_wishlist(product)

    def test_remove_not_saved(self, authenticated_client, product):
        response = authenticated_client.delete(reverse("wishlist-remove"), {"product_id": product.id}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == "NOT_IN_WISHLIST"

    def test_check(self, authenticated_client, user, product):
        user.add_to_wishlist(product)

        response = authenticated_client.get(reverse("wishlist-check"), {"product_id": product.id})

        assert response.data == {"product_id": product.id, "is_wished": True, "wishlist_count": 1}

    def test_unknown_product_is_rejected(self, authenticated_client):
        response = authenticated_client.post(reverse("wishlist-toggle"), {"product_id": 999999}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "product_id" in response.data

    def test_anonymous_is_rejected(self, api_client):
        response = api_client.get(reverse("wishlist-list"))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
