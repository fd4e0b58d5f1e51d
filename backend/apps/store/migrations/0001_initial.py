import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("pain_relief", "Pain relief"),
                            ("cold_and_flu", "Cold and flu"),
                            ("digestive_health", "Digestive health"),
                            ("first_aid", "First aid"),
                            ("vitamins", "Vitamins"),
                            ("diabetes", "Diabetes"),
                            ("heart_health", "Heart health"),
                            ("skin_care", "Skin care"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("image_ref", models.TextField(blank=True, null=True)),
                ("available_for_sale", models.BooleanField(default=True)),
                ("requires_prescription", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "products",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["name"], name="product_name_idx"),
                    models.Index(
                        fields=["category", "available_for_sale"],
                        name="product_cat_sale_idx",
                    ),
                ],
            },
        ),
    ]
