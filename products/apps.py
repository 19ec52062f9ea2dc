# products/apps.py

"""
PRODUCTS APP CONFIG

Catalog module:
- Categories, scents, products and their images
- Customer reviews
- Admin uploads (images / 3D models)
"""

from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "products"
    verbose_name = "Catalog"
