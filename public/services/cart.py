"""
PATH: public/services/cart.py

COOKIE CART

The cart is a JSON list kept in the `cart` cookie (7 days, path /, SameSite Lax,
readable by the storefront). The value is percent-encoded JSON, so the browser
reads it with JSON.parse(decodeURIComponent(value)). Items are plain dicts:

    {id, name, price, quantity, selectedScent: {id, name}, audioUrl?, textMessage?}

Two items with the same cart_key are the same line and merge on add.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import quote, unquote

from django.conf import settings

logger = logging.getLogger(__name__)

CART_COOKIE = getattr(settings, "CART_COOKIE_NAME", "cart")
CART_MAX_AGE = getattr(settings, "CART_COOKIE_MAX_AGE", 60 * 60 * 24 * 7)


def cart_key(item: dict) -> str:
    scent = item.get("selectedScent") or {}
    return "-".join(
        [
            str(item.get("id", "")),
            str(scent.get("id", "")),
            item.get("audioUrl") or "no-audio",
            item.get("textMessage") or "no-text",
        ]
    )


# ---------------- COOKIE I/O ----------------
def read_cart(request) -> list[dict]:
    raw = request.COOKIES.get(CART_COOKIE)
    if not raw:
        return []

    try:
        cart = json.loads(unquote(raw))
    except ValueError:
        logger.warning("Malformed cart cookie ignored")
        return []

    if not isinstance(cart, list):
        return []
    return [item for item in cart if isinstance(item, dict)]


def encode_cart(cart: list[dict]) -> str:
    return quote(json.dumps(cart, separators=(",", ":"), ensure_ascii=False), safe="")


def write_cart(response, cart: list[dict]):
    response.set_cookie(
        CART_COOKIE,
        encode_cart(cart),
        max_age=CART_MAX_AGE,
        path="/",
        samesite="Lax",
        httponly=False,
        secure=getattr(settings, "CART_COOKIE_SECURE", False),
    )
    return response


def clear_cart(response):
    response.delete_cookie(CART_COOKIE, path="/", samesite="Lax")
    return response


# ---------------- OPERATIONS ----------------
def add_item(cart: list[dict], item: dict) -> list[dict]:
    key = cart_key(item)
    quantity = int(item.get("quantity") or 1)

    updated = []
    merged = False
    for line in cart:
        if not merged and cart_key(line) == key:
            line = {**line, "quantity": int(line.get("quantity") or 0) + quantity}
            merged = True
        updated.append(line)

    if not merged:
        updated.append({**item, "quantity": quantity})
    return updated


def update_quantity(cart: list[dict], key: str, quantity: int) -> list[dict]:
    if quantity < 1:
        return cart
    return [
        {**line, "quantity": quantity} if cart_key(line) == key else line
        for line in cart
    ]


def remove_item(cart: list[dict], key: str) -> list[dict]:
    return [line for line in cart if cart_key(line) != key]
