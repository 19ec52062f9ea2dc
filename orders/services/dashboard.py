# orders/services/dashboard.py

"""
ADMIN DASHBOARD AGGREGATES

- counts: users, orders, live products
- revenue: sum of totals over non-cancelled orders, and the average per order
- orders per status
- top 5 products by ordered quantity
- 5 most recent orders
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum

from orders.models import Order, OrderItem
from products.models import Product

TOP_PRODUCTS_LIMIT = 5
RECENT_ORDERS_LIMIT = 5


def dashboard_stats() -> dict:
    User = get_user_model()

    total_orders = Order.objects.count()
    revenue_qs = Order.objects.exclude(status=Order.STATUS_CANCELLED)
    paid_orders = revenue_qs.count()
    total_revenue = revenue_qs.aggregate(total=Sum("total"))["total"] or Decimal("0.00")
    average = (total_revenue / paid_orders).quantize(Decimal("0.01")) if paid_orders else Decimal("0.00")

    by_status = {status: 0 for status, _ in Order.STATUS_CHOICES}
    for row in Order.objects.values("status").annotate(count=Count("id")):
        by_status[row["status"]] = row["count"]

    top_products = [
        {"product_id": str(row["product_id"]), "name": row["product__name"], "quantity": row["quantity"]}
        for row in (
            OrderItem.objects.exclude(order__status=Order.STATUS_CANCELLED)
            .values("product_id", "product__name")
            .annotate(quantity=Sum("quantity"))
            .order_by("-quantity", "product__name")[:TOP_PRODUCTS_LIMIT]
        )
    ]

    recent_orders = [
        {
            "id": str(order.id),
            "total": order.total,
            "status": order.status,
            "created_at": order.created_at,
            "user_name": getattr(order.user, "name", "") or "",
        }
        for order in Order.objects.select_related("user").order_by("-created_at")[:RECENT_ORDERS_LIMIT]
    ]

    return {
        "total_users": User.objects.count(),
        "total_orders": total_orders,
        "total_products": Product.objects.alive().count(),
        "total_revenue": total_revenue,
        "average_order_value": average,
        "orders_by_status": by_status,
        "top_products": top_products,
        "recent_orders": recent_orders,
    }
