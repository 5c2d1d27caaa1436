from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.products.models import Product

CATALOG = [
    ("Keyboard", 75.0),
    ("Mouse", 150.0),
    ("Monitor", 150.0),
    ("Speaker", 200.0),
    ("Headset", 89.9),
    ("Webcam", 59.9),
    ("USB-C Hub", 39.5),
    ("Laptop Stand", 49.99),
    ("Desk Lamp", 25.0),
    ("Microphone", 120.0),
    ("Mouse Pad", 9.99),
    ("External SSD", 129.0),
    ("Docking Station", 219.0),
    ("Graphics Tablet", 249.9),
    ("Ergonomic Chair", 399.0),
]


class Command(BaseCommand):
    help = "Seed database with development products."

    def handle(self, *args, **options):
        self.stdout.write("Creating products...")
        created = 0
        for name, price in CATALOG:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={"price": price},
            )
            created += int(was_created)
        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={created} "
                f"(available={Product.objects.available().count()})"
            )
        )
