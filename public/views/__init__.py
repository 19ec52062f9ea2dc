# public/views/__init__.py

from .cart import CartItemDetailView, CartItemsView, CartView
from .engagement import ContactView, NewsletterView
from .seo import manifest, robots_txt

__all__ = [
    "CartItemDetailView",
    "CartItemsView",
    "CartView",
    "ContactView",
    "NewsletterView",
    "manifest",
    "robots_txt",
]
