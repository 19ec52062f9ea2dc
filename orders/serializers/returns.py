# orders/serializers/returns.py

from decimal import Decimal

from rest_framework import serializers

from orders.models import Return


class ReturnItemSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    order_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    scent_name = serializers.CharField(source="scent.name", read_only=True, default="")
    quantity = serializers.IntegerField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)


class ReturnSerializer(serializers.ModelSerializer):
    order_item = ReturnItemSerializer(read_only=True)

    class Meta:
        model = Return
        fields = [
            "id",
            "order_item",
            "reason",
            "description",
            "status",
            "refund_status",
            "refund_amount",
            "admin_note",
            "return_instructions",
            "return_address",
            "return_deadline",
            "tracking_number",
            "carrier",
            "tracking_url",
            "shipped_at",
            "delivered_at",
            "processed_at",
            "refunded_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdminReturnSerializer(ReturnSerializer):
    user_name = serializers.CharField(source="user.name", read_only=True, default="")
    user_email = serializers.EmailField(source="user.email", read_only=True, default="")

    class Meta(ReturnSerializer.Meta):
        fields = ReturnSerializer.Meta.fields + ["user_name", "user_email", "stripe_refund_id"]
        read_only_fields = fields


# ---------------- INPUT ----------------
class ReturnCreateSerializer(serializers.Serializer):
    order_item_id = serializers.UUIDField()
    reason = serializers.CharField(min_length=5, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class ReturnUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Return.STATUS_CHOICES)
    admin_note = serializers.CharField(required=False, allow_blank=True)
    refund_amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    return_instructions = serializers.CharField(required=False, allow_blank=True)
    return_address = serializers.CharField(required=False, allow_blank=True)
    return_deadline = serializers.DateTimeField(required=False, allow_null=True)

    def validate_refund_amount(self, value):
        if value is not None and value <= Decimal("0"):
            raise serializers.ValidationError("Refund amount must be greater than zero")
        return value


class ReturnTrackingSerializer(serializers.Serializer):
    tracking_number = serializers.CharField(required=False, allow_blank=True, max_length=120)
    carrier = serializers.CharField(required=False, allow_blank=True, max_length=120)
    tracking_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
    status = serializers.ChoiceField(choices=Return.STATUS_CHOICES, required=False)


class ReturnRefundSerializer(serializers.Serializer):
    refund_amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)

    def validate_refund_amount(self, value):
        if value is not None and value <= Decimal("0"):
            raise serializers.ValidationError("Refund amount must be greater than zero")
        return value
