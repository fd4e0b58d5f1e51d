from apps.common.repository import GenericRepository
from .models import MedicineOrder, Prescription


class OrderRepository(GenericRepository[MedicineOrder]):
    def __init__(self):
        super().__init__(MedicineOrder)

    def list_for_owner(self, owner_id: str):
        return self.model.objects.filter(user_id=owner_id).order_by("-created_at", "id")


class PrescriptionRepository(GenericRepository[Prescription]):
    def __init__(self):
        super().__init__(Prescription)

    def list_for_owner(self, owner_id: str):
        return self.model.objects.filter(user_id=owner_id).order_by("-created_at", "id")
