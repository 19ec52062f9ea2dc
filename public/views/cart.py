"""
PATH: public/views/cart.py

COOKIE CART ENDPOINTS (AllowAny)

- GET    /api/cart/                 {cart: [...]}
- POST   /api/cart/                 {cart} replaces the cart
- DELETE /api/cart/                 clears it
- POST   /api/cart/items/           add (merges on cart key)
- PATCH  /api/cart/items/{key}/     {quantity}; values < 1 are ignored
- DELETE /api/cart/items/{key}/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from public.serializers import CartItemSerializer, CartQuantitySerializer, CartReplaceSerializer
from public.services import cart as cart_service


class CartThrottle(AnonRateThrottle):
    scope = "public_catalog"


class CartBaseView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [CartThrottle]

    @staticmethod
    def respond(cart: list[dict], *, http_status: int = status.HTTP_200_OK) -> Response:
        response = Response({"cart": cart}, status=http_status)
        return cart_service.write_cart(response, cart)


class CartView(CartBaseView):
    @extend_schema(responses={200: OpenApiResponse(description="{cart: [...]}")}, tags=["Cart"])
    def get(self, request):
        return Response({"cart": cart_service.read_cart(request)})

    @extend_schema(request=CartReplaceSerializer, responses={200: OpenApiResponse(description="{success: true}")}, tags=["Cart"])
    def post(self, request):
        serializer = CartReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = Response({"success": True})
        return cart_service.write_cart(response, serializer.data["cart"])

    @extend_schema(responses={204: None}, tags=["Cart"])
    def delete(self, request):
        response = Response(status=status.HTTP_204_NO_CONTENT)
        return cart_service.clear_cart(response)


class CartItemsView(CartBaseView):
    @extend_schema(request=CartItemSerializer, responses={201: OpenApiResponse(description="{cart: [...]}")}, tags=["Cart"])
    def post(self, request):
        serializer = CartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_service.add_item(cart_service.read_cart(request), dict(serializer.data))
        return self.respond(cart, http_status=status.HTTP_201_CREATED)


class CartItemDetailView(CartBaseView):
    @extend_schema(request=CartQuantitySerializer, responses={200: OpenApiResponse(description="{cart: [...]}")}, tags=["Cart"])
    def patch(self, request, key: str):
        serializer = CartQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_service.update_quantity(
            cart_service.read_cart(request),
            key,
            serializer.validated_data["quantity"],
        )
        return self.respond(cart)

    @extend_schema(responses={200: OpenApiResponse(description="{cart: [...]}")}, tags=["Cart"])
    def delete(self, request, key: str):
        cart = cart_service.remove_item(cart_service.read_cart(request), key)
        return self.respond(cart)
