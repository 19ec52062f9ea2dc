"""
PATH: public/serializers.py

PUBLIC SERIALIZERS (storefront)

Transport-layer contracts for the cart, checkout, newsletter and contact
endpoints. Business rules live in public/services and orders/services.

Cart item keys are camelCase: the storefront reads the cookie directly.
"""

from __future__ import annotations

from rest_framework import serializers

from public.models import Newsletter


# ---------------- CART / CHECKOUT ----------------
class SelectedScentSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(max_length=255)


class CartItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(max_length=255)
    price = serializers.FloatField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    selectedScent = SelectedScentSerializer()
    audioUrl = serializers.URLField(required=False, allow_blank=True, max_length=500)
    textMessage = serializers.CharField(required=False, allow_blank=True, max_length=500)
    animationId = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("Price must be greater than zero")
        return value


class CartReplaceSerializer(serializers.Serializer):
    cart = CartItemSerializer(many=True, allow_empty=True)


class CartQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class CheckoutItemSerializer(CartItemSerializer):
    quantity = serializers.IntegerField(min_value=1)


class CheckoutSessionSerializer(serializers.Serializer):
    items = CheckoutItemSerializer(many=True, allow_empty=False)


class CheckoutConfirmSerializer(serializers.Serializer):
    session_id = serializers.CharField(max_length=255)


# ---------------- NEWSLETTER ----------------
class NewsletterSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(max_length=254)

    class Meta:
        model = Newsletter
        fields = ["id", "email", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_email(self, value):
        email = value.strip().lower()
        if Newsletter.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("This email is already subscribed")
        return email


# ---------------- CONTACT ----------------
class ContactSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=100)
    last_name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, max_length=30)
    subject = serializers.CharField(min_length=5, max_length=200)
    message = serializers.CharField(min_length=10, max_length=5000)
