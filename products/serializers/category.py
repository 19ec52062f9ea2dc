# products/serializers/category.py

from rest_framework import serializers

from products.models import Category
from products.models.category import hex_color_validator

from .localized import LocalizedFieldsMixin, optional_min_length


class CategorySerializer(LocalizedFieldsMixin, serializers.ModelSerializer):
    """
    Storefront category (localized, read only).
    """

    localized_fields = ("name", "description")

    class Meta:
        model = Category
        fields = ["id", "name", "description", "icon", "color", "image_url"]
        read_only_fields = fields


class AdminCategorySerializer(serializers.ModelSerializer):
    """
    Back-office category: raw FR + EN columns, writable.
    """

    name = serializers.CharField(min_length=2, max_length=255, trim_whitespace=True)
    color = serializers.CharField(max_length=7, validators=[hex_color_validator])
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "name_en",
            "description",
            "description_en",
            "icon",
            "color",
            "image_url",
            "product_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "product_count", "created_at", "updated_at"]

    def validate_name_en(self, value):
        return optional_min_length(value, 2, "English name")

    def get_product_count(self, obj) -> int:
        annotated = getattr(obj, "live_product_count", None)
        if annotated is not None:
            return annotated
        return obj.products.alive().count()
