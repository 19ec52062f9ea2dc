"""
PATH: products/management/commands/seed_catalog.py

Idempotent demo catalog: 4 scents, 1 category, 3 candles.
Re-running updates prices/descriptions in place and never duplicates rows.
"""

from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Category, Product, ProductImage, Scent

SCENTS = [
    {
        "name": "Vanille",
        "description": "Doux et réconfortant",
        "icon": "🌿",
        "color": "#FFE5B4",
        "notes": ["vanille bourbon", "fève tonka", "caramel"],
    },
    {
        "name": "Lavande",
        "description": "Apaisant et relaxant",
        "icon": "💜",
        "color": "#E6E6FA",
        "notes": ["lavande de Provence", "bergamote", "musc blanc"],
    },
    {
        "name": "Cannelle",
        "description": "Chaud et épicé",
        "icon": "🔥",
        "color": "#D2691E",
        "notes": ["cannelle", "clou de girofle", "orange"],
    },
    {
        "name": "Jasmin",
        "description": "Floral et élégant",
        "icon": "🌸",
        "color": "#F5F5DC",
        "notes": ["jasmin sambac", "fleur d'oranger", "bois de santal"],
    },
]

CANDLES = [
    {
        "name": "Bougie Signature",
        "description": "Notre bougie signature, élégante et raffinée",
        "sub_title": "L'essentiel UnikCandle",
        "slogan": "Votre message, sa lumière",
        "price": Decimal("49.99"),
        "image": "signature",
    },
    {
        "name": "Bougie Luxe",
        "description": "Une bougie luxueuse aux finitions dorées",
        "sub_title": "Finitions dorées",
        "slogan": "Le luxe d'un souvenir",
        "price": Decimal("69.99"),
        "image": "luxe",
    },
    {
        "name": "Bougie Collection",
        "description": "Edition limitée de notre collection premium",
        "sub_title": "Edition limitée",
        "slogan": "Une pièce unique",
        "price": Decimal("59.99"),
        "image": "collection",
    },
]


class Command(BaseCommand):
    help = "Seed scents, a default category and the candle catalog (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        scents = []
        for data in SCENTS:
            scent, _ = Scent.objects.update_or_create(name=data["name"], defaults=data)
            scents.append(scent)

        category, _ = Category.objects.get_or_create(
            name="Bougies personnalisées",
            deleted_at=None,
            defaults={
                "name_en": "Personalized candles",
                "description": "Bougies artisanales avec message audio ou texte",
                "color": "#D97706",
                "icon": "🕯️",
            },
        )

        base_url = settings.APP_URL.rstrip("/")

        for i, data in enumerate(CANDLES):
            data = dict(data)
            image = data.pop("image")
            product, created = Product.objects.update_or_create(
                name=data["name"],
                deleted_at=None,
                defaults={**data, "category": category, "scent": scents[i % len(scents)]},
            )
            if created:
                ProductImage.objects.create(
                    product=product,
                    url=f"{base_url}/images/candles/{image}/main.jpg",
                    position=0,
                )

        self.stdout.write(
            self.style.SUCCESS(
                f"Catalog seeded: {len(scents)} scents, 1 category, {len(CANDLES)} candles."
            )
        )
