import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.store.models import Product


class CartLine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_lines"
    )
    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="cart_lines"
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.quantity} x {self.product_id} for {self.owner_id}"

    class Meta:
        db_table = "cart_lines"
        ordering = ["created_at", "id"]
        unique_together = ("owner", "product")
