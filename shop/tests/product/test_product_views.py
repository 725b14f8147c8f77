"""
Product API tests

Catalogue listing, filters, search, detail, admin CRUD, reviews, view
counter, recommendations and the low-stock alert.
"""

from decimal import Decimal

from django.urls import reverse

import pytest
from rest_framework import status

from shop.models.product import Product
from shop.tests.factories import ProductFactory, ProductReviewFactory


def list_url():
    return reverse("product-list")


def detail_url(product, action=None):
    name = f"product-{action}" if action else "product-detail"
    return reverse(name, kwargs={"pk": product.pk})


@pytest.mark.django_db
class TestProductList:
    def test_lists_active_products_only(self, api_client, product):
        ProductFactory.inactive()

        response = api_client.get(list_url())

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
        assert response.data["results"][0]["name"] == "Palace Loafer"

    def test_card_fields(self, api_client):
        product = ProductFactory(price=Decimal("80.00"), discount=25)
        ProductReviewFactory(product=product, rating=4)
        ProductReviewFactory(product=product, rating=5)

        card = api_client.get(list_url()).data["results"][0]

        assert card["price"] == "80.00"
        assert card["effective_price"] == "60.00"
        assert card["rating"] == 4.5
        assert card["review_count"] == 2
        assert card["is_in_stock"] is True

    def test_unreviewed_rating_is_zero(self, api_client, product):
        card = api_client.get(list_url()).data["results"][0]

        assert card["rating"] == 0.0
        assert card["review_count"] == 0

    def test_admin_sees_inactive(self, admin_client, product):
        ProductFactory.inactive()

        assert admin_client.get(list_url()).data["count"] == 2

    def test_filter_by_category(self, api_client, product):
        ProductFactory(category="boots", name="Desert Boot")

        response = api_client.get(list_url(), {"category": "boots"})

        assert [p["name"] for p in response.data["results"]] == ["Desert Boot"]

    def test_filter_by_price_range(self, api_client):
        ProductFactory(name="Flip Flop", price=Decimal("20.00"))
        ProductFactory(name="Oxford", price=Decimal("120.00"))
        ProductFactory(name="Brogue", price=Decimal("300.00"))

        response = api_client.get(list_url(), {"min_price": 50, "max_price": 200})

        assert [p["name"] for p in response.data["results"]] == ["Oxford"]

    def test_filter_in_stock(self, api_client, product):
        ProductFactory.out_of_stock(name="Sold Out Sandal")

        in_stock = api_client.get(list_url(), {"in_stock": "true"}).data["results"]
        sold_out = api_client.get(list_url(), {"in_stock": "false"}).data["results"]

        assert [p["name"] for p in in_stock] == ["Palace Loafer"]
        assert [p["name"] for p in sold_out] == ["Sold Out Sandal"]

    def test_filter_featured(self, api_client, product):
        ProductFactory(name="Star Slide", featured=True)

        response = api_client.get(list_url(), {"featured": "true"})

        assert [p["name"] for p in response.data["results"]] == ["Star Slide"]

    def test_search(self, api_client, product):
        ProductFactory(name="Kente Slipper", description="Woven strap.")

        by_name = api_client.get(list_url(), {"search": "kente"}).data["results"]
        by_description = api_client.get(list_url(), {"search": "woven"}).data["results"]

        assert [p["name"] for p in by_name] == ["Kente Slipper"]
        assert [p["name"] for p in by_description] == ["Kente Slipper"]

    def test_ordering_by_price(self, api_client):
        ProductFactory(name="Mid", price=Decimal("60.00"))
        ProductFactory(name="Cheap", price=Decimal("10.00"))
        ProductFactory(name="Dear", price=Decimal("250.00"))

        response = api_client.get(list_url(), {"ordering": "price"})

        assert [p["name"] for p in response.data["results"]] == ["Cheap", "Mid", "Dear"]

    def test_page_size(self, api_client):
        ProductFactory.create_batch(15)

        response = api_client.get(list_url())

        assert response.data["count"] == 15
        assert len(response.data["results"]) == 12


@pytest.mark.django_db
class TestProductDetail:
    def test_detail_fields(self, api_client, product, user):
        user.add_to_wishlist(product)

        response = api_client.get(detail_url(product))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["sizes"] == [40, 41, 42]
        assert response.data["colors"] == ["Black", "Brown"]
        assert response.data["wishlist_count"] == 1

    def test_inactive_product_is_hidden(self, api_client):
        hidden = ProductFactory.inactive()

        response = api_client.get(detail_url(hidden))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_record_view(self, api_client, product):
        api_client.post(detail_url(product, "views"))
        response = api_client.post(detail_url(product, "views"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["view_count"] == 2

    def test_recommendations(self, api_client, product):
        ProductFactory(name="Penny Loafer", category=product.category)
        ProductFactory(name="Hiking Boot", category="boots")

        response = api_client.get(detail_url(product, "recommendations"))

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.data] == ["Penny Loafer"]


@pytest.mark.django_db
class TestProductAdmin:
    payload = {
        "name": "Suede Chukka",
        "category": "boots",
        "price": "140.00",
        "discount": 10,
        "images": ["https://cdn.example.com/chukka.jpg"],
        "sizes": ["41", 42],
        "colors": ["Tan"],
        "stock": 8,
    }

    def test_admin_creates_product(self, admin_client):
        response = admin_client.post(list_url(), self.payload, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        product = Product.objects.get(name="Suede Chukka")
        assert product.sizes == [41, 42]
        assert product.effective_price == Decimal("126.00")

    def test_customer_cannot_create(self, authenticated_client):
        response = authenticated_client.post(list_url(), self.payload, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Product.objects.exists()

    def test_invalid_sizes(self, admin_client):
        response = admin_client.post(list_url(), {**self.payload, "sizes": ["large"]}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "sizes" in response.data

    def test_admin_updates_stock(self, admin_client, product):
        response = admin_client.patch(detail_url(product), {"stock": 3}, format="json")

        assert response.status_code == status.HTTP_200_OK
        product.refresh_from_db()
        assert product.stock == 3

    def test_admin_deletes(self, admin_client, product):
        response = admin_client.delete(detail_url(product))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Product.objects.filter(pk=product.pk).exists()

    def test_low_stock_alert(self, admin_client, product):
        ProductFactory(name="Last Pair", stock=1)

        response = admin_client.get(reverse("product-low-stock"))

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.data] == ["Last Pair"]

    def test_low_stock_is_admin_only(self, authenticated_client):
        response = authenticated_client.get(reverse("product-low-stock"))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestProductReviews:
    def test_list_reviews(self, api_client, product):
        ProductReviewFactory(product=product, rating=5)
        ProductReviewFactory(product=product, rating=3)

        response = api_client.get(detail_url(product, "reviews"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 2

    def test_post_review(self, authenticated_client, product):
        response = authenticated_client.post(
            detail_url(product, "reviews"), {"rating": 5, "comment": "Great fit."}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["username"] == "Ama Mensah"
        assert response.data["product_name"] == "Palace Loafer"

    def test_second_review_rejected(self, authenticated_client, product, user):
        ProductReviewFactory(product=product, user=user)

        response = authenticated_client.post(detail_url(product, "reviews"), {"rating": 2}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == "ALREADY_REVIEWED"

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_range(self, authenticated_client, product, rating):
        response = authenticated_client.post(detail_url(product, "reviews"), {"rating": rating}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "rating" in response.data

    def test_anonymous_cannot_review(self, api_client, product):
        response = api_client.post(detail_url(product, "reviews"), {"rating": 5}, format="json")

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
