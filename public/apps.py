# public/apps.py

"""
PUBLIC APP CONFIG

Storefront surfaces that are not catalog or orders:
- cookie cart
- newsletter + contact form
- sitemap / manifest / robots
- shared vendor clients (Stripe, Resend, Vercel Blob) under public/services
"""

from django.apps import AppConfig


class PublicConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "public"
    verbose_name = "Storefront"
