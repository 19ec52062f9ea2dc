# products/filters.py

import django_filters
from django.db.models import Q

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Storefront product filters:
    ?category=<uuid>&scent=<uuid>&min_price=&max_price=&search=&ordering=
    """

    category = django_filters.UUIDFilter(field_name="category_id")
    scent = django_filters.UUIDFilter(field_name="scent_id")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")

    ordering = django_filters.OrderingFilter(
        fields=(
            ("price", "price"),
            ("name", "name"),
            ("created_at", "created_at"),
        )
    )

    class Meta:
        model = Product
        fields = ["category", "scent", "min_price", "max_price", "search"]

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(Q(name__icontains=term) | Q(name_en__icontains=term))
