from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Product

DEMO_PRODUCTS = [
    {
        "name": "Élixir Éternité",
        "description": "Synergie parfaite de 12 plantes rares pour une passion durable",
        "price": Decimal("79.99"),
        "original_price": Decimal("99.99"),
        "category": Product.Category.PREMIUM,
        "rating": Decimal("4.9"),
        "ingredients": [
            "Safran Iranien",
            "Maca Noire",
            "Tribulus Terrestris",
            "Ashwagandha",
            "Ginseng Rouge",
        ],
        "images": [
            "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?auto=format&fit=crop&w=800&q=80",
        ],
    },
    {
        "name": "Nectar Divin",
        "description": "Élixir d'ambroisie aux notes de vanille de Madagascar",
        "price": Decimal("64.99"),
        "original_price": None,
        "category": Product.Category.SIGNATURE,
        "rating": Decimal("4.8"),
        "ingredients": [
            "Vanille Bourbon",
            "Fleur d'Oranger",
            "Cardamome Verte",
            "Miel de Manuka",
        ],
        "images": [
            "https://images.unsplash.com/photo-1513475382585-d06e58bcb0e0?auto=format&fit=crop&w=800&q=80",
        ],
    },
    {
        "name": "Chocolat Extase",
        "description": "Chocolat noir 90% infusé aux super-aliments aphrodisiaques",
        "price": Decimal("49.99"),
        "original_price": Decimal("59.99"),
        "category": Product.Category.GOURMET,
        "rating": Decimal("4.7"),
        "ingredients": [
            "Cacao Pur",
            "Guarana",
            "Maca",
            "Spiruline",
            "Fruits Rouges Lyophilisés",
        ],
        "images": [
            "https://images.unsplash.com/photo-1570913199992-91d07c140e7a?auto=format&fit=crop&w=800&q=80",
        ],
    },
    {
        "name": "Huile Sacrée",
        "description": "Huile de massage aux phéromones et cristaux énergétiques",
        "price": Decimal("89.99"),
        "original_price": None,
        "category": Product.Category.LUXE,
        "rating": Decimal("5.0"),
        "ingredients": [
            "Huile d'Argan",
            "Rose de Damas",
            "Ylang-Ylang",
            "Cristal Chargé",
        ],
        "images": [
            "https://images.unsplash.com/photo-1608248543803-ba4f8c70ae0b?auto=format&fit=crop&w=800&q=80",
        ],
    },
]


class Command(BaseCommand):
    help = "Seed the four demo storefront products (idempotent, keyed by name)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding demo products..."))

        created_count = 0
        for data in DEMO_PRODUCTS:
            defaults = {k: v for k, v in data.items() if k != "name"}
            _, created = Product.objects.update_or_create(
                name=data["name"],
                defaults=defaults,
            )
            created_count += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"✅ Demo products ready ({created_count} created, "
                f"{len(DEMO_PRODUCTS) - created_count} updated)."
            )
        )
