# backend/testing.py

"""
Shared test fixtures (plain helpers, no fixtures framework).

Used from every app's tests/ package:
- make_user / make_admin
- make_catalog -> (category, scent, product)
- make_order   -> Order with one item (+ QR code + shipping address)
- auth_client  -> APIClient authenticated as `user`
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from permissions.roles import ROLE_ADMIN, ROLE_USER

User = get_user_model()

DEFAULT_PASSWORD = "Str0ngPass!"


def make_user(email: str | None = None, *, role: str = ROLE_USER, **extra):
    email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
    return User.objects.create_user(
        email=email,
        password=DEFAULT_PASSWORD,
        role=role,
        **extra,
    )


def make_admin(email: str | None = None, **extra):
    email = email or f"admin-{uuid.uuid4().hex[:8]}@example.com"
    return make_user(email, role=ROLE_ADMIN, **extra)


def auth_client(user=None) -> APIClient:
    client = APIClient()
    if user is not None:
        client.force_authenticate(user=user)
    return client


def make_catalog(*, price: str = "49.99", name: str = "Bougie Signature"):
    from products.models import Category, Product, ProductImage, Scent

    category = Category.objects.create(
        name="Bougies",
        name_en="Candles",
        description="Bougies artisanales",
        color="#D97706",
    )
    scent = Scent.objects.create(
        name=f"Vanille {uuid.uuid4().hex[:6]}",
        description="Doux et réconfortant",
        color="#FFE5B4",
        notes=["vanille", "tonka"],
    )
    product = Product.objects.create(
        category=category,
        scent=scent,
        name=name,
        name_en="Signature Candle",
        description="Notre bougie signature, élégante et raffinée",
        sub_title="L'essentiel",
        slogan="Votre message",
        price=Decimal(price),
    )
    ProductImage.objects.create(product=product, url="https://cdn.example.com/a.jpg", position=0)
    return category, scent, product


def make_order(user, product, *, status: str | None = None, quantity: int = 1, **order_fields):
    from orders.models import Order, OrderItem, QRCode, ShippingAddress
    from orders.services.qr import generate_secure_qr_code

    status = status or Order.STATUS_PROCESSING
    total = Decimal(product.price) * quantity

    order = Order.objects.create(user=user, status=status, total=total, **order_fields)
    item = OrderItem.objects.create(
        order=order,
        product=product,
        scent=product.scent,
        quantity=quantity,
        price=product.price,
        text_message="Joyeux anniversaire",
    )
    QRCode.objects.create(order_item=item, code=generate_secure_qr_code())
    ShippingAddress.objects.create(
        order=order,
        street="1 rue de la Paix",
        city="Paris",
        state="IDF",
        zip_code="75002",
        country="FR",
    )
    return order
