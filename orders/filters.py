# orders/filters.py

import django_filters

from orders.models import Order, Return


class OrderFilter(django_filters.FilterSet):
    """
    Customer order history filters:
    ?status=&start_date=YYYY-MM-DD&end_date=YYYY-MM-DD (inclusive)
    """

    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = Order
        fields = ["status", "start_date", "end_date"]


class ReturnFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Return.STATUS_CHOICES)
    order_item_id = django_filters.UUIDFilter(field_name="order_item_id")

    class Meta:
        model = Return
        fields = ["status", "order_item_id"]
