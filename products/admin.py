# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Django admin registration for the catalog (superuser console).

- Product images are edited inline (ordered by position).
- Soft-deleted rows stay visible here with a "deleted" filter.
- Day-to-day catalog work goes through /api/admin/.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, Product, ProductImage, Review, Scent


class DeletedFilter(admin.SimpleListFilter):
    title = "deleted"
    parameter_name = "deleted"

    def lookups(self, request, model_admin):
        return (("no", "Live"), ("yes", "Deleted"))

    def queryset(self, request, queryset):
        if self.value() == "no":
            return queryset.filter(deleted_at__isnull=True)
        if self.value() == "yes":
            return queryset.filter(deleted_at__isnull=False)
        return queryset


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    fields = ("url", "position")
    ordering = ("position",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "scent", "price", "message_type", "deleted_at", "created_at")
    list_filter = (DeletedFilter, "category", "scent", "message_type")
    search_fields = ("name", "name_en")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ProductImageInline]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "color", "deleted_at", "created_at")
    list_filter = (DeletedFilter,)
    search_fields = ("name", "name_en")


@admin.register(Scent)
class ScentAdmin(admin.ModelAdmin):
    list_display = ("name", "color", "created_at")
    search_fields = ("name",)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("product__name", "user__email", "comment")
    raw_id_fields = ("product", "user")
