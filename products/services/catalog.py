"""
PATH: products/services/catalog.py

CATALOG MUTATIONS (admin)

- Products: create / partial update (images replaced wholesale) / soft delete
- Categories: soft delete cascades to the category's live products
- Scents: hard delete, refused while any product (live or soft-deleted) uses it
"""

from __future__ import annotations

import logging

from django.db import transaction

from products.models import Category, Product, ProductImage, Scent

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class CatalogError(Exception):
    pass


class AlreadyDeletedError(CatalogError):
    pass


class ScentInUseError(CatalogError):
    pass


# ============================================================
# PRODUCTS
# ============================================================

def _replace_images(product: Product, urls: list[str]) -> None:
    product.images.all().delete()
    ProductImage.objects.bulk_create(
        [ProductImage(product=product, url=url, position=i) for i, url in enumerate(urls)]
    )


@transaction.atomic
def create_product(*, images: list[str] | None = None, **fields) -> Product:
    product = Product.objects.create(**fields)
    if images:
        _replace_images(product, images)

    logger.info("Product created", extra={"product_id": str(product.id)})
    return product


@transaction.atomic
def update_product(product: Product, *, images: list[str] | None = None, **fields) -> Product:
    for name, value in fields.items():
        setattr(product, name, value)
    product.save()

    if images is not None:
        _replace_images(product, images)

    logger.info("Product updated", extra={"product_id": str(product.id)})
    return product


def delete_product(product: Product) -> None:
    if product.is_deleted:
        raise AlreadyDeletedError("Product is already deleted")
    product.soft_delete()
    logger.info("Product soft-deleted", extra={"product_id": str(product.id)})


# ============================================================
# CATEGORIES
# ============================================================

@transaction.atomic
def delete_category(category: Category) -> int:
    """
    Soft-delete the category and its live products.
    Returns how many products were hidden.
    """
    if category.is_deleted:
        raise AlreadyDeletedError("Category is already deleted")

    deleted_products = Product.objects.filter(category=category).soft_delete()
    category.soft_delete()

    logger.info(
        "Category soft-deleted",
        extra={"category_id": str(category.id), "deleted_products_count": deleted_products},
    )
    return deleted_products


# ============================================================
# SCENTS
# ============================================================

def delete_scent(scent: Scent) -> None:
    in_use = Product.objects.filter(scent=scent).count()
    if in_use:
        raise ScentInUseError(
            f"This scent is used by {in_use} product(s) and cannot be deleted"
        )

    scent_id = str(scent.id)
    scent.delete()
    logger.info("Scent deleted", extra={"scent_id": scent_id})
