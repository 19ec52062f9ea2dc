# products/tests/test_i18n.py

from django.test import RequestFactory, SimpleTestCase

from products.models import Category, Product, Scent
from products.services.i18n import localized_value, resolve_locale


class ResolveLocaleTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_query_parameter_wins(self):
        request = self.factory.get("/api/products/?locale=en", HTTP_ACCEPT_LANGUAGE="fr-FR")
        self.assertEqual(resolve_locale(request), "en")

    def test_accept_language_primary_tag(self):
        request = self.factory.get("/api/products/", HTTP_ACCEPT_LANGUAGE="en-US,en;q=0.9,fr;q=0.8")
        self.assertEqual(resolve_locale(request), "en")

    def test_unsupported_locale_falls_back_to_french(self):
        request = self.factory.get("/api/products/?locale=de", HTTP_ACCEPT_LANGUAGE="es-ES")
        self.assertEqual(resolve_locale(request), "fr")

    def test_no_hint_defaults_to_french(self):
        self.assertEqual(resolve_locale(self.factory.get("/")), "fr")
        self.assertEqual(resolve_locale(None), "fr")


class LocalizedValueTests(SimpleTestCase):
    def test_english_value_used_when_present(self):
        product = Product(name="Bougie", name_en="Candle")
        self.assertEqual(localized_value(product, "name", "en"), "Candle")

    def test_blank_english_falls_back_to_french(self):
        product = Product(name="Bougie", name_en="   ")
        self.assertEqual(localized_value(product, "name", "en"), "Bougie")

    def test_french_locale_ignores_english_column(self):
        product = Product(name="Bougie", name_en="Candle")
        self.assertEqual(localized_value(product, "name", "fr"), "Bougie")

    def test_empty_base_value_gives_empty_string(self):
        category = Category(name="Bougies", description="")
        self.assertEqual(localized_value(category, "description", "en"), "")

    def test_scent_has_no_english_columns(self):
        scent = Scent(name="Vanille", description="Doux")
        self.assertEqual(localized_value(scent, "name", "en"), "Vanille")
