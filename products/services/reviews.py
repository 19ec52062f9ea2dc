"""
PATH: products/services/reviews.py

REVIEWS

Rules:
- one review per (user, product)
- only buyers: the user needs a DELIVERED order containing the product
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count

from products.models import Product, Review

logger = logging.getLogger(__name__)


class ReviewError(Exception):
    pass


class DuplicateReviewError(ReviewError):
    pass


class ReviewNotAllowedError(ReviewError):
    pass


def has_purchased(user, product: Product) -> bool:
    from orders.models import Order

    return Order.objects.filter(
        user=user,
        status=Order.STATUS_DELIVERED,
        items__product=product,
    ).exists()


def create_review(*, user, product: Product, rating: int, comment: str) -> Review:
    if Review.objects.filter(user=user, product=product).exists():
        raise DuplicateReviewError("You have already reviewed this product")

    if not has_purchased(user, product):
        raise ReviewNotAllowedError("You can only review products from a delivered order")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                user=user,
                product=product,
                rating=rating,
                comment=comment.strip(),
            )
    except IntegrityError as exc:
        raise DuplicateReviewError("You have already reviewed this product") from exc

    logger.info(
        "Review created",
        extra={"review_id": str(review.id), "product_id": str(product.id)},
    )
    return review


def rating_summary(product: Product) -> dict:
    agg = product.reviews.aggregate(avg=Avg("rating"), count=Count("id"))
    avg = agg.get("avg")
    return {
        "average_rating": round(float(avg), 1) if avg is not None else 0,
        "review_count": agg.get("count") or 0,
    }
