"""
Query filters for list endpoints (django-filter)
"""

from django_filters import rest_framework as django_filters

from shop.models.order import Order
from shop.models.product import Product


class ProductFilter(django_filters.FilterSet):
    """
    Catalogue filters

    - category: shoes / slippers / boots / sandals
    - featured, new_arrival: merchandising flags
    - min_price, max_price: price range (list price)
    - in_stock: true -> stock > 0, false -> stock == 0
    """

    category = django_filters.ChoiceFilter(choices=Product.CATEGORY_CHOICES)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")

    class Meta:
        model = Product
        fields = ["category", "featured", "new_arrival", "min_price", "max_price", "in_stock"]

    def filter_in_stock(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(stock__gt=0) if value else queryset.filter(stock=0)


class OrderFilter(django_filters.FilterSet):
    """Back office order filters"""

    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    delivery_type = django_filters.ChoiceFilter(choices=Order.DELIVERY_CHOICES)

    class Meta:
        model = Order
        fields = ["status", "delivery_type"]
