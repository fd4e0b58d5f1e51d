import os
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import CartLine
from apps.orders.models import MedicineOrder, Prescription
from apps.store.container import build_product_service
from apps.store.models import Product, ProductCategory
from apps.users.models import User

# (name, category, unit_price, description, requires_prescription, available_for_sale)
PRODUCTS = [
    ("Paracetamol 500mg (16 tablets)", ProductCategory.PAIN_RELIEF, "2.49",
     "Relief from mild to moderate pain and fever.", False, True),
    ("Ibuprofen 200mg (24 tablets)", ProductCategory.PAIN_RELIEF, "3.99",
     "Anti-inflammatory pain relief.", False, True),
    ("Cold & Flu Day Capsules", ProductCategory.COLD_AND_FLU, "5.49",
     "Eases congestion, headache and sore throat.", False, True),
    ("Honey & Lemon Lozenges", ProductCategory.COLD_AND_FLU, "2.99",
     "Soothes sore throats.", False, True),
    ("Oral Rehydration Salts", ProductCategory.DIGESTIVE_HEALTH, "4.25",
     "Replaces fluids and electrolytes lost through diarrhoea.", False, True),
    ("Antacid Chewable Tablets", ProductCategory.DIGESTIVE_HEALTH, "3.75",
     "Fast relief from heartburn and indigestion.", False, True),
    ("Adhesive Bandages (40 pack)", ProductCategory.FIRST_AID, "4.99",
     "Assorted sizes for minor cuts and grazes.", False, True),
    ("Antiseptic Cream 30g", ProductCategory.FIRST_AID, "3.49",
     "Helps prevent infection in minor wounds.", False, True),
    ("Vitamin D3 1000IU (90 tablets)", ProductCategory.VITAMINS, "7.99",
     "Supports bones, teeth and immune function.", False, True),
    ("Vitamin C 1000mg Effervescent", ProductCategory.VITAMINS, "4.49",
     "Orange flavoured effervescent tablets.", False, True),
    ("Blood Glucose Test Strips (50)", ProductCategory.DIABETES, "18.99",
     "Compatible with standard glucose meters.", False, True),
    ("Metformin 500mg (56 tablets)", ProductCategory.DIABETES, "6.50",
     "Prescription only.", True, False),
    ("Digital Blood Pressure Monitor", ProductCategory.HEART_HEALTH, "29.99",
     "Upper arm monitor with memory for two users.", False, True),
    ("Low-dose Aspirin 75mg (28 tablets)", ProductCategory.HEART_HEALTH, "1.99",
     "Use only on medical advice.", True, True),
    ("Emollient Cream 500g", ProductCategory.SKIN_CARE, "8.49",
     "For dry, itchy skin conditions.", False, True),
    ("SPF 50 Sun Cream 200ml", ProductCategory.SKIN_CARE, "9.99",
     "High protection, water resistant.", False, True),
]

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@healthbridge.local"


class Command(BaseCommand):
    help = "Seed the medical store catalog and a demo customer."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing store, cart and order data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            CartLine.objects.all().delete()
            MedicineOrder.objects.all().delete()
            Prescription.objects.all().delete()
            Product.objects.all().delete()

        self.stdout.write("Seeding products...")
        created_count = 0
        for name, category, price, description, prescription, for_sale in PRODUCTS:
            _, created = Product.objects.update_or_create(
                name=name,
                defaults=dict(
                    category=category,
                    unit_price=Decimal(price),
                    description=description,
                    requires_prescription=prescription,
                    available_for_sale=for_sale,
                ),
            )
            created_count += int(created)

        self.stdout.write("Seeding demo customer...")
        user, _ = User.objects.get_or_create(
            username=DEMO_USERNAME,
            defaults={"email": DEMO_EMAIL, "full_name": "Demo Customer"},
        )
        user.set_password(os.getenv("DEMO_USER_PASSWORD", "demo12345"))
        user.save()

        # Cached listings would otherwise outlive the rewritten catalog.
        transaction.on_commit(build_product_service().invalidate_listings)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed complete: {len(PRODUCTS)} products ({created_count} new), demo user '{DEMO_USERNAME}'."
            )
        )
