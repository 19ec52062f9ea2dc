# orders/serializers/order.py

"""
ORDER SERIALIZERS

Read:
- OrderSerializer: customer view (items with product, scent, qr code, returns; address)
- AdminOrderSerializer: adds the customer and Stripe references

Write:
- OrderStatusSerializer: admin status update
- ManualOrderSerializer: admin back-office order
"""

from decimal import Decimal

from rest_framework import serializers

from orders.models import Order, OrderItem, Return, ShippingAddress
from products.models import Product
from products.serializers import ScentSerializer
from products.serializers.localized import LocalizedFieldsMixin


class OrderProductSerializer(LocalizedFieldsMixin, serializers.ModelSerializer):
    localized_fields = ("name",)

    images = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ["id", "name", "price", "images", "ar_animation", "message_type"]
        read_only_fields = fields

    def get_images(self, obj) -> list[str]:
        return [img.url for img in obj.images.all()]


class ItemReturnSerializer(serializers.ModelSerializer):
    class Meta:
        model = Return
        fields = ["id", "status", "refund_status", "created_at"]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    product = OrderProductSerializer(read_only=True)
    scent = ScentSerializer(read_only=True)
    qr_code = serializers.SerializerMethodField()
    returns = ItemReturnSerializer(many=True, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "scent",
            "quantity",
            "price",
            "audio_url",
            "text_message",
            "animation_id",
            "qr_code",
            "returns",
        ]
        read_only_fields = fields

    def get_qr_code(self, obj):
        qr = getattr(obj, "qr_code", None)
        return qr.code if qr is not None else None


class ShippingAddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingAddress
        fields = ["street", "city", "state", "zip_code", "country"]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    shipping_address = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "total",
            "items",
            "shipping_address",
            "refunded_at",
            "refund_amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_shipping_address(self, obj):
        address = getattr(obj, "shipping_address", None)
        if address is None:
            return None
        return ShippingAddressSerializer(address).data


class OrderCustomerSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class AdminOrderSerializer(OrderSerializer):
    user = OrderCustomerSerializer(read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + [
            "user",
            "stripe_session_id",
            "stripe_payment_intent_id",
            "stripe_refund_id",
        ]
        read_only_fields = fields


# ---------------- ADMIN INPUT ----------------
class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class ManualOrderItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    scent_id = serializers.UUIDField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    audio_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
    text_message = serializers.CharField(required=False, allow_blank=True)

    def validate_price(self, value):
        if value is not None and value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value


class ShippingAddressInputSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=120)
    state = serializers.CharField(required=False, allow_blank=True, max_length=120, default="")
    zip_code = serializers.CharField(max_length=20)
    country = serializers.CharField(required=False, max_length=2, default="FR")


class ManualOrderSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    items = ManualOrderItemSerializer(many=True, allow_empty=False)
    shipping_address = ShippingAddressInputSerializer()
