from django.db import IntegrityError, transaction
from django.db.models import F

from apps.common.repository import GenericRepository
from .models import CartLine


class CartLineRepository(GenericRepository[CartLine]):
    def __init__(self):
        super().__init__(CartLine)

    def list_for_owner(self, owner_id: str):
        return (
            self.model.objects.filter(owner_id=owner_id)
            .select_related("product")
            .order_by("created_at", "id")
        )

    def increment(self, owner_id: str, product_id: str, by: int = 1) -> int:
        """Insert the line with quantity ``by`` or add ``by`` to the existing one.

        The increment is a single UPDATE so concurrent adds never lose a count,
        and a concurrent insert that wins the unique constraint falls back to it.
        Returns the number of lines written; 0 means the insert was refused
        and there was no line to update (e.g. the product row is gone).
        """
        filters = {"owner_id": owner_id, "product_id": product_id}
        updated = self.model.objects.filter(**filters).update(quantity=F("quantity") + by)
        if updated:
            return updated
        try:
            with transaction.atomic():
                self.model.objects.create(quantity=by, **filters)
        except IntegrityError:
            return self.model.objects.filter(**filters).update(quantity=F("quantity") + by)
        return 1

    def set_quantity(self, owner_id: str, product_id: str, quantity: int) -> int:
        return self.model.objects.filter(
            owner_id=owner_id, product_id=product_id
        ).update(quantity=quantity)

    def delete_line(self, owner_id: str, product_id: str) -> int:
        return self.delete_where(owner_id=owner_id, product_id=product_id)

    def clear(self, owner_id: str) -> int:
        return self.delete_where(owner_id=owner_id)
