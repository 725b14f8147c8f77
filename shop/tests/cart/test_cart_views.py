"""
Cart API tests

/api/cart/ endpoints: retrieve, summary, add, update, remove, clear.
"""

from django.urls import reverse

import pytest
from rest_framework import status

from shop.tests.factories import CartItemFactory, ProductFactory


@pytest.fixture
def cart_urls():
    return {
        "detail": reverse("cart-detail"),
        "summary": reverse("cart-summary"),
        "add_item": reverse("cart-add-item"),
        "clear": reverse("cart-clear"),
    }


def item_url(item_id):
    return reverse("cart-item-detail", kwargs={"pk": item_id})


@pytest.mark.django_db
class TestCartAccess:
    def test_anonymous_is_rejected(self, api_client, cart_urls):
        response = api_client.get(cart_urls["detail"])

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_cart_created_on_first_visit(self, authenticated_client, user, cart_urls):
        response = authenticated_client.get(cart_urls["detail"])

        assert response.status_code == status.HTTP_200_OK
        assert response.data["items"] == []
        assert user.cart is not None


@pytest.mark.django_db
class TestCartItems:
    def test_add_item(self, authenticated_client, product, cart_urls):
        response = authenticated_client.post(
            cart_urls["add_item"],
            {"product_id": product.id, "quantity": 2, "size": "42", "color": "Black"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["item"]["product_name"] == "Palace Loafer"
        assert response.data["item"]["quantity"] == 2
        assert response.data["item"]["size"] == "42"

    def test_add_more_than_stock(self, authenticated_client, cart_urls):
        product = ProductFactory(stock=1)

        response = authenticated_client.post(
            cart_urls["add_item"], {"product_id": product.id, "quantity": 2}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == "INSUFFICIENT_STOCK"

    def test_add_zero_quantity_is_invalid(self, authenticated_client, product, cart_urls):
        response = authenticated_client.post(
            cart_urls["add_item"], {"product_id": product.id, "quantity": 0}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "quantity" in response.data

    def test_update_quantity(self, authenticated_client, cart, product):
        item = CartItemFactory(cart=cart, product=product, quantity=1)

        response = authenticated_client.patch(item_url(item.id), {"quantity": 3}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["item"]["quantity"] == 3

    def test_update_to_zero_removes(self, authenticated_client, cart, product):
        item = CartItemFactory(cart=cart, product=product)

        response = authenticated_client.patch(item_url(item.id), {"quantity": 0}, format="json")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert cart.items.count() == 0

    def test_update_unknown_line(self, authenticated_client, cart):
        response = authenticated_client.patch(item_url(999999), {"quantity": 2}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["code"] == "ITEM_NOT_FOUND"

    def test_delete_line(self, authenticated_client, cart, product):
        item = CartItemFactory(cart=cart, product=product)

        response = authenticated_client.delete(item_url(item.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert cart.items.count() == 0

    def test_cannot_touch_another_customers_line(self, authenticated_client, other_user):
        foreign_item = CartItemFactory(cart__user=other_user)

        response = authenticated_client.delete(item_url(foreign_item.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_clear(self, authenticated_client, cart, cart_urls):
        CartItemFactory(cart=cart)
        CartItemFactory(cart=cart)

        response = authenticated_client.post(cart_urls["clear"])

        assert response.status_code == status.HTTP_200_OK
        assert cart.items.count() == 0


@pytest.mark.django_db
class TestCartSummary:
    def test_summary_values(self, authenticated_client, cart, cart_urls):
        CartItemFactory(cart=cart, product=ProductFactory(price="45.00"), quantity=2)

        response = authenticated_client.get(cart_urls["summary"])

        assert response.status_code == status.HTTP_200_OK
        assert response.data["subtotal"] == "90.00"
        assert response.data["shipping_cost"] == "9.99"
        assert response.data["total"] == "99.99"
        assert response.data["item_count"] == 2

    def test_detail_embeds_summary(self, authenticated_client, cart, cart_urls):
        CartItemFactory(cart=cart, product=ProductFactory(price="150.00"))

        response = authenticated_client.get(cart_urls["detail"])

        assert len(response.data["items"]) == 1
        assert response.data["summary"]["shipping_cost"] == "0.00"
