from typing import Optional

from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def list_for_sale(self, category: Optional[str] = None):
        qs = self.model.objects.filter(available_for_sale=True)
        if category:
            qs = qs.filter(category=category)
        return qs.order_by("name", "id")
