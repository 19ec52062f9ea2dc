# public/urls.py

"""
STOREFRONT URLS (mounted at /api/)

- cart/ , cart/items/ , cart/items/{key}/
- newsletter/
- contact/
"""

from django.urls import path

from public.views import CartItemDetailView, CartItemsView, CartView, ContactView, NewsletterView

app_name = "public"

urlpatterns = [
    path("cart/", CartView.as_view(), name="cart"),
    path("cart/items/", CartItemsView.as_view(), name="cart-items"),
    # keys embed the audio URL and the message, hence <path:>
    path("cart/items/<path:key>/", CartItemDetailView.as_view(), name="cart-item"),
    path("newsletter/", NewsletterView.as_view(), name="newsletter"),
    path("contact/", ContactView.as_view(), name="contact"),
]
