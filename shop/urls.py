from django.urls import include, path

from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from shop.views.admin_views import AdminReviewViewSet, AdminUserViewSet, DashboardStatsView
from shop.views.auth_views import LoginView, RegisterView
from shop.views.cart_views import CartViewSet
from shop.views.message_views import AdminConversationViewSet, ContactMessageViewSet, MessageViewSet
from shop.views.order_views import OrderViewSet
from shop.views.product_views import ProductViewSet
from shop.views.shipping_views import ShippingQuoteView
from shop.views.user_views import ProfileView
from shop.views.wishlist_views import WishlistViewSet

router = DefaultRouter()

router.register(r"products", ProductViewSet, basename="product")
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"admin/users", AdminUserViewSet, basename="admin-user")
router.register(r"admin/reviews", AdminReviewViewSet, basename="admin-review")
router.register(r"admin/conversations", AdminConversationViewSet, basename="admin-conversation")
router.register(r"messages", MessageViewSet, basename="message")
router.register(r"contact", ContactMessageViewSet, basename="contact")

urlpatterns = [
    path("", include(router.urls)),
    # Auth
    path("auth/register/", RegisterView.as_view(), name="auth-register"),
    path("auth/login/", LoginView.as_view(), name="auth-login"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # Users
    path("users/profile/", ProfileView.as_view(), name="user-profile"),
    # Cart (single resource per user, so routes are wired by hand)
    path("cart/", CartViewSet.as_view({"get": "retrieve"}), name="cart-detail"),
    path("cart/summary/", CartViewSet.as_view({"get": "summary"}), name="cart-summary"),
    path("cart/add_item/", CartViewSet.as_view({"post": "add_item"}), name="cart-add-item"),
    path(
        "cart/items/<int:pk>/",
        CartViewSet.as_view({"patch": "update_item", "delete": "delete_item"}),
        name="cart-item-detail",
    ),
    path("cart/clear/", CartViewSet.as_view({"post": "clear"}), name="cart-clear"),
    # Shipping
    path("shipping/quote/", ShippingQuoteView.as_view(), name="shipping-quote"),
    # Wishlist
    path("wishlist/", WishlistViewSet.as_view({"get": "list"}), name="wishlist-list"),
    path("wishlist/toggle/", WishlistViewSet.as_view({"post": "toggle"}), name="wishlist-toggle"),
    path("wishlist/add/", WishlistViewSet.as_view({"post": "add"}), name="wishlist-add"),
    path("wishlist/remove/", WishlistViewSet.as_view({"delete": "remove"}), name="wishlist-remove"),
    path("wishlist/check/", WishlistViewSet.as_view({"get": "check"}), name="wishlist-check"),
    # Back office
    path("admin/stats/", DashboardStatsView.as_view(), name="admin-stats"),
]
