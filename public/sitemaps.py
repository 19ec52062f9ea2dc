"""
PATH: public/sitemaps.py

STOREFRONT SITEMAP (django.contrib.sitemaps)

URLs point at the storefront (settings.APP_URL), not at this API host.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from django.conf import settings
from django.contrib.sitemaps import Sitemap

from products.models import Product

STATIC_PAGES = (
    # path, changefreq, priority
    ("/", "weekly", 1.0),
    ("/products", "daily", 0.9),
    ("/about", "monthly", 0.8),
    ("/contact", "monthly", 0.7),
    ("/auth/signin", "monthly", 0.6),
    ("/auth/signup", "monthly", 0.6),
    ("/cgu", "yearly", 0.3),
    ("/privacy", "yearly", 0.3),
)


def storefront_base() -> tuple[str, str]:
    """
    (scheme, netloc) of APP_URL; https when no scheme is configured.
    """
    raw = (settings.APP_URL or "").strip()
    if "://" not in raw:
        raw = f"https://{raw}"
    parts = urlsplit(raw)
    return parts.scheme, parts.netloc


class StorefrontSitemap(Sitemap):
    def get_protocol(self, protocol=None):
        return storefront_base()[0]

    def get_domain(self, site=None):
        return storefront_base()[1]


class StaticPagesSitemap(StorefrontSitemap):
    def items(self):
        return list(STATIC_PAGES)

    def location(self, item):
        return item[0]

    def changefreq(self, item):
        return item[1]

    def priority(self, item):
        return item[2]


class ProductSitemap(StorefrontSitemap):
    changefreq = "weekly"
    priority = 0.8

    def items(self):
        return Product.objects.alive().order_by("-updated_at")

    def location(self, obj):
        return f"/products/{obj.id}"

    def lastmod(self, obj):
        return obj.updated_at


SITEMAPS = {
    "static": StaticPagesSitemap,
    "products": ProductSitemap,
}
