# orders/serializers/qr.py

from rest_framework import serializers


class QRCodeCreateSerializer(serializers.Serializer):
    order_item_id = serializers.UUIDField()


class QRCodeResponseSerializer(serializers.Serializer):
    code = serializers.CharField()
    url = serializers.URLField()
    qr_code = serializers.CharField(help_text="PNG data URL")
