# products/serializers/scent.py

from rest_framework import serializers

from products.models import Scent
from products.models.category import hex_color_validator

from .localized import LocalizedFieldsMixin


class ScentSerializer(LocalizedFieldsMixin, serializers.ModelSerializer):
    localized_fields = ("name", "description")

    class Meta:
        model = Scent
        fields = ["id", "name", "description", "icon", "color", "notes", "model3d_url"]
        read_only_fields = fields


class AdminScentSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2, max_length=255)
    description = serializers.CharField(min_length=10)
    color = serializers.CharField(max_length=7, validators=[hex_color_validator])
    notes = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        default=list,
    )

    class Meta:
        model = Scent
        fields = [
            "id",
            "name",
            "description",
            "icon",
            "color",
            "notes",
            "model3d_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_notes(self, value):
        return [n.strip() for n in value if n and n.strip()]

    def validate_name(self, value):
        name = value.strip()
        qs = Scent.objects.filter(name__iexact=name)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A scent with this name already exists")
        return name
