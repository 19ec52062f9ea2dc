# public/tests/test_seo.py

from django.test import TestCase, override_settings

from backend.testing import make_catalog


@override_settings(APP_URL="https://unikcandle.com")
class SeoTests(TestCase):
    def test_sitemap_points_at_storefront(self):
        _, _, product = make_catalog()
        _, _, deleted = make_catalog(name="Ancienne bougie")
        deleted.soft_delete()

        res = self.client.get("/sitemap.xml")

        self.assertEqual(res.status_code, 200)
        body = res.content.decode()
        self.assertIn("<loc>https://unikcandle.com/</loc>", body)
        self.assertIn("<loc>https://unikcandle.com/products</loc>", body)
        self.assertIn(f"<loc>https://unikcandle.com/products/{product.id}</loc>", body)
        self.assertNotIn(str(deleted.id), body)

    def test_manifest(self):
        res = self.client.get("/manifest.webmanifest")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res["Content-Type"], "application/manifest+json")
        data = res.json()
        self.assertEqual(data["short_name"], "UNIKCANDLE")
        self.assertEqual(data["lang"], "fr")

    def test_robots(self):
        res = self.client.get("/robots.txt")

        body = res.content.decode()
        self.assertIn("Disallow: /api/", body)
        self.assertIn("Disallow: /admin/", body)
        self.assertIn("Sitemap: http://testserver/sitemap.xml", body)
