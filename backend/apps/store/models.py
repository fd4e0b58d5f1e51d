import uuid

from django.core.validators import MinValueValidator
from django.db import models


class ProductCategory(models.TextChoices):
    PAIN_RELIEF = "pain_relief", "Pain relief"
    COLD_AND_FLU = "cold_and_flu", "Cold and flu"
    DIGESTIVE_HEALTH = "digestive_health", "Digestive health"
    FIRST_AID = "first_aid", "First aid"
    VITAMINS = "vitamins", "Vitamins"
    DIABETES = "diabetes", "Diabetes"
    HEART_HEALTH = "heart_health", "Heart health"
    SKIN_CARE = "skin_care", "Skin care"


class Product(models.Model):
    """A medical-supply item. Owned by the store; the cart only reads it."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=32, choices=ProductCategory.choices)
    unit_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    image_ref = models.TextField(blank=True, null=True)
    available_for_sale = models.BooleanField(default=True)
    requires_prescription = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(
                fields=["category", "available_for_sale"], name="product_cat_sale_idx"
            ),
        ]
