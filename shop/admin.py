from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Cart, CartItem, ContactMessage, Message, Order, OrderItem, Product, ProductReview, User
from .services.order_service import OrderService, OrderServiceError


# User Admin
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Accounts
    - is_staff doubles as the admin role
    """

    list_display = ["username", "email", "phone_number", "is_staff", "date_joined", "is_active"]
    list_filter = ["is_active", "is_staff", "date_joined"]
    search_fields = ["username", "email", "phone_number"]
    date_hierarchy = "date_joined"
    ordering = ["-date_joined"]

    fieldsets = BaseUserAdmin.fieldsets + (("Contact", {"fields": ("phone_number",)}),)


class ProductReviewInline(admin.TabularInline):
    """Reviews shown on the product page"""

    model = ProductReview
    extra = 0
    readonly_fields = ["username", "rating", "comment", "created_at"]
    can_delete = False


# Product Admin
@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """
    Catalogue
    - price, discount and stock at a glance
    """

    list_display = [
        "name",
        "category",
        "formatted_price",
        "discount",
        "stock",
        "featured",
        "new_arrival",
        "is_active",
        "created_at",
    ]

    list_filter = ["category", "featured", "new_arrival", "is_active", "created_at"]
    list_editable = ["stock", "is_active"]
    search_fields = ["name", "description"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]
    readonly_fields = ["view_count", "created_at", "updated_at"]

    fieldsets = (
        ("Basics", {"fields": ("name", "category", "description")}),
        ("Price and stock", {"fields": ("price", "discount", "stock")}),
        ("Variants and images", {"fields": ("sizes", "colors", "images")}),
        ("Merchandising", {"fields": ("featured", "new_arrival", "is_active", "view_count")}),
        (
            "Timestamps",
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    inlines = [ProductReviewInline]

    @admin.display(description="price", ordering="price")
    def formatted_price(self, obj):
        return f"GH₵{obj.price:,.2f}"


# ProductReview Admin
@admin.register(ProductReview)
class ProductReviewAdmin(admin.ModelAdmin):
    """Review moderation"""

    list_display = ["product", "username", "rating", "comment_preview", "created_at"]
    list_filter = ["rating", "created_at"]
    search_fields = ["product__name", "username", "comment"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    @admin.display(description="comment")
    def comment_preview(self, obj):
        if len(obj.comment) > 50:
            return obj.comment[:50] + "..."
        return obj.comment


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ["product", "product_name", "quantity", "price", "size", "color"]
    can_delete = False


# Order Admin
@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders
    - status changes go through OrderService so the payment/OTP rules hold
    """

    list_display = [
        "order_number",
        "customer_name",
        "status",
        "delivery_type",
        "region",
        "shipping_fee",
        "total",
        "created_at",
    ]

    list_filter = ["status", "delivery_type", "region", "created_at"]
    search_fields = ["order_number", "customer_name", "customer_phone", "user__username"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    readonly_fields = [
        "order_number",
        "region",
        "shipping_fee",
        "total",
        "otp_code",
        "processed_by_admin",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        ("Order", {"fields": ("user", "status", "order_number", "total", "payment_intent")}),
        (
            "Delivery",
            {
                "fields": (
                    "delivery_type",
                    "customer_name",
                    "customer_phone",
                    "shipping_address",
                    ("longitude", "latitude"),
                    "gps_coordinates",
                    ("region", "shipping_fee"),
                )
            },
        ),
        ("Verification", {"fields": ("otp_code", "processed_by_admin")}),
        (
            "Timestamps",
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    inlines = [OrderItemInline]

    actions = ["confirm_payment", "mark_as_shipped", "mark_as_delivered"]

    def _apply(self, request, queryset, operation, label):
        done = 0
        for order in queryset:
            try:
                operation(order)
                done += 1
            except OrderServiceError as e:
                self.message_user(request, f"{order.order_number}: {e.message}", level="warning")
        self.message_user(request, f"{done} order(s) {label}.")

    @admin.action(description="Confirm payment for selected orders")
    def confirm_payment(self, request, queryset):
        self._apply(request, queryset, lambda order: OrderService.confirm_payment(order, request.user), "confirmed")

    @admin.action(description="Mark selected orders as shipped")
    def mark_as_shipped(self, request, queryset):
        self._apply(
            request, queryset, lambda order: OrderService.update_status(order, Order.STATUS_SHIPPED), "marked as shipped"
        )

    @admin.action(description="Mark selected orders as delivered")
    def mark_as_delivered(self, request, queryset):
        self._apply(
            request,
            queryset,
            lambda order: OrderService.update_status(order, Order.STATUS_DELIVERED),
            "marked as delivered",
        )


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ["product", "quantity", "size", "color", "line_subtotal", "added_at"]
    readonly_fields = ["line_subtotal", "added_at"]

    @admin.display(description="subtotal")
    def line_subtotal(self, obj):
        if obj.pk is None:
            return "-"
        return f"GH₵{obj.subtotal:,.2f}"


# Cart Admin
@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "item_count", "updated_at"]
    search_fields = ["user__username"]
    ordering = ["-updated_at"]
    inlines = [CartItemInline]

    @admin.display(description="items")
    def item_count(self, obj):
        return obj.items.count()


# Messaging Admin
@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["sender", "receiver", "content_preview", "is_admin_message", "is_read", "created_at"]
    list_filter = ["is_admin_message", "is_read", "created_at"]
    search_fields = ["sender__username", "receiver__username", "content"]
    raw_id_fields = ["sender", "receiver", "reply_to"]
    ordering = ["-created_at"]

    @admin.display(description="content")
    def content_preview(self, obj):
        if len(obj.content) > 50:
            return obj.content[:50] + "..."
        return obj.content


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "subject", "is_read", "created_at"]
    list_filter = ["is_read", "created_at"]
    search_fields = ["name", "email", "subject", "message"]
    readonly_fields = ["user", "name", "email", "subject", "message", "created_at"]
    date_hierarchy = "created_at"
