# products/tests/test_admin_catalog.py

import uuid

from django.test import TestCase
from django.urls import reverse
from rest_framework import status

from backend.testing import auth_client, make_admin, make_catalog, make_user
from products.models import Category, Product, Scent


class AdminCatalogAccessTests(TestCase):
    def test_customer_gets_403(self):
        res = auth_client(make_user()).get(reverse("catalog-admin:products-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_gets_401(self):
        res = auth_client().get(reverse("catalog-admin:products-list"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


class AdminProductTests(TestCase):
    def setUp(self):
        self.category, self.scent, self.product = make_catalog()
        self.client = auth_client(make_admin())

    def _payload(self, **overrides):
        payload = {
            "name": "Bougie Luxe",
            "description": "Une bougie luxueuse aux finitions dorées",
            "sub_title": "Finitions dorées",
            "slogan": "Le luxe",
            "price": "69.99",
            "category_id": str(self.category.id),
            "scent_id": str(self.scent.id),
            "images": ["https://cdn.example.com/luxe-1.jpg", "https://cdn.example.com/luxe-2.jpg"],
        }
        payload.update(overrides)
        return payload

    def test_create_product_with_images(self):
        res = self.client.post(reverse("catalog-admin:products-list"), self._payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(res.data["images"]), 2)
        self.assertEqual(res.data["message_type"], "audio")
        self.assertEqual(res.data["ar_animation"], "default")

    def test_create_reports_field_errors(self):
        res = self.client.post(
            reverse("catalog-admin:products-list"),
            self._payload(name="B", price="0", name_en="X", scent_id=str(uuid.uuid4())),
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("name", "price", "name_en", "scent_id"):
            self.assertIn(field, res.data["field_errors"])

    def test_blank_english_fields_are_accepted(self):
        res = self.client.post(
            reverse("catalog-admin:products-list"),
            self._payload(name_en="", slogan_en=""),
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_partial_update_replaces_images(self):
        url = reverse("catalog-admin:products-detail", args=[self.product.id])
        res = self.client.patch(url, {"price": "55.00", "images": ["https://cdn.example.com/new.jpg"]}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["price"], "55.00")
        self.assertEqual(res.data["images"], ["https://cdn.example.com/new.jpg"])
        self.assertEqual(res.data["name"], "Bougie Signature")

    def test_delete_is_soft(self):
        url = reverse("catalog-admin:products-detail", args=[self.product.id])
        res = self.client.delete(url)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertIsNotNone(self.product.deleted_at)

        listing = self.client.get(reverse("catalog-admin:products-list"))
        self.assertEqual(listing.data["results"], [])


class AdminCategoryTests(TestCase):
    def setUp(self):
        self.category, self.scent, self.product = make_catalog()
        self.client = auth_client(make_admin())

    def test_invalid_color_is_rejected(self):
        res = self.client.post(
            reverse("catalog-admin:categories-list"),
            {"name": "Noël", "color": "red"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("color", res.data["field_errors"])

    def test_delete_cascades_to_products(self):
        url = reverse("catalog-admin:categories-detail", args=[self.category.id])

        res = self.client.delete(url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["deleted_products_count"], 1)
        self.assertTrue(Product.objects.get(pk=self.product.pk).is_deleted)

        again = self.client.delete(url)
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_hides_deleted_categories(self):
        Category.objects.filter(pk=self.category.pk).soft_delete()
        res = self.client.get(reverse("catalog-admin:categories-list"))
        self.assertEqual(res.data, [])


class AdminScentTests(TestCase):
    def setUp(self):
        self.category, self.scent, self.product = make_catalog()
        self.client = auth_client(make_admin())

    def test_scent_in_use_cannot_be_deleted(self):
        res = self.client.delete(reverse("catalog-admin:scents-detail", args=[self.scent.id]))

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Scent.objects.filter(pk=self.scent.pk).exists())

    def test_unused_scent_is_hard_deleted(self):
        lonely = Scent.objects.create(name="Jasmin", description="Floral et élégant", color="#F5F5DC")

        res = self.client.delete(reverse("catalog-admin:scents-detail", args=[lonely.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Scent.objects.filter(pk=lonely.pk).exists())

    def test_create_scent_validation(self):
        res = self.client.post(
            reverse("catalog-admin:scents-list"),
            {"name": "Rose", "description": "court", "color": "#FF00AA", "notes": ["rose"]},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("description", res.data["field_errors"])
