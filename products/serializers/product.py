# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: storefront shape (localized copy, images, category, scent, rating)
- ProductDetailSerializer: adds the review list
- AdminProductSerializer: raw FR + EN columns for the back-office
- ProductWriteSerializer: admin create / partial update input

Rating:
- average_rating is rounded to 1 decimal, 0 when there are no reviews
- list querysets annotate avg_rating / reviews_total to avoid N+1
"""

from decimal import Decimal

from django.db.models import Avg, Count
from rest_framework import serializers

from products.models import Category, Product, Scent

from .category import CategorySerializer
from .localized import LocalizedFieldsMixin, optional_min_length
from .review import ReviewSerializer
from .scent import ScentSerializer


def with_rating(queryset):
    return queryset.annotate(
        avg_rating=Avg("reviews__rating"),
        reviews_total=Count("reviews", distinct=True),
    )


class RatingFieldsMixin(serializers.Serializer):
    average_rating = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()

    def get_average_rating(self, obj) -> float:
        if hasattr(obj, "avg_rating"):
            avg = obj.avg_rating
        else:
            avg = obj.reviews.aggregate(avg=Avg("rating"))["avg"]
        return round(float(avg), 1) if avg is not None else 0

    def get_review_count(self, obj) -> int:
        if hasattr(obj, "reviews_total"):
            return obj.reviews_total or 0
        return obj.reviews.count()


class ProductSerializer(LocalizedFieldsMixin, RatingFieldsMixin, serializers.ModelSerializer):
    localized_fields = ("name", "description", "sub_title", "slogan")

    images = serializers.SerializerMethodField()
    category = serializers.SerializerMethodField()
    scent = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "sub_title",
            "slogan",
            "price",
            "ar_animation",
            "message_type",
            "images",
            "category",
            "scent",
            "average_rating",
            "review_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_images(self, obj) -> list[str]:
        return [img.url for img in obj.images.all()]

    def get_category(self, obj) -> dict:
        return CategorySerializer(obj.category, context=self.context).data

    def get_scent(self, obj) -> dict:
        return ScentSerializer(obj.scent, context=self.context).data


class ProductDetailSerializer(ProductSerializer):
    reviews = ReviewSerializer(many=True, read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ["reviews"]
        read_only_fields = fields


class AdminProductSerializer(RatingFieldsMixin, serializers.ModelSerializer):
    images = serializers.SerializerMethodField()
    category_id = serializers.UUIDField(read_only=True)
    category_name = serializers.CharField(source="category.name", read_only=True)
    scent_id = serializers.UUIDField(read_only=True)
    scent_name = serializers.CharField(source="scent.name", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "name_en",
            "description",
            "description_en",
            "sub_title",
            "sub_title_en",
            "slogan",
            "slogan_en",
            "price",
            "ar_animation",
            "message_type",
            "category_id",
            "category_name",
            "scent_id",
            "scent_name",
            "images",
            "average_rating",
            "review_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_images(self, obj) -> list[str]:
        return [img.url for img in obj.images.all()]


# ---------------- ADMIN INPUT ----------------
class ProductWriteSerializer(serializers.Serializer):
    """
    Input only. The view hands validated_data to products.services.catalog.
    `partial=True` is used for updates.
    """

    name = serializers.CharField(min_length=2, max_length=255)
    name_en = serializers.CharField(required=False, allow_blank=True, max_length=255)
    description = serializers.CharField(min_length=10)
    description_en = serializers.CharField(required=False, allow_blank=True)
    sub_title = serializers.CharField(min_length=2, max_length=255)
    sub_title_en = serializers.CharField(required=False, allow_blank=True, max_length=255)
    slogan = serializers.CharField(min_length=2, max_length=255)
    slogan_en = serializers.CharField(required=False, allow_blank=True, max_length=255)

    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    category_id = serializers.UUIDField()
    scent_id = serializers.UUIDField()

    ar_animation = serializers.CharField(required=False, max_length=64)
    message_type = serializers.ChoiceField(choices=Product.MESSAGE_TYPE_CHOICES, required=False)

    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)

    def validate_name_en(self, value):
        return optional_min_length(value, 2, "English name")

    def validate_description_en(self, value):
        return optional_min_length(value, 10, "English description")

    def validate_sub_title_en(self, value):
        return optional_min_length(value, 2, "English subtitle")

    def validate_slogan_en(self, value):
        return optional_min_length(value, 2, "English slogan")

    def validate_price(self, value):
        if value is None or value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value

    def validate_category_id(self, value):
        if not Category.objects.alive().filter(pk=value).exists():
            raise serializers.ValidationError("Category not found")
        return value

    def validate_scent_id(self, value):
        if not Scent.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Scent not found")
        return value
