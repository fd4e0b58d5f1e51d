from typing import Any, Dict, Iterable, List

from apps.carts.dtos import CartLineDTO
from apps.carts.mappers import compute_total
from .dtos import OrderDTO, PrescriptionDTO
from .models import MedicineOrder, Prescription


def cart_snapshot(lines: Iterable[CartLineDTO]) -> Dict[str, Any]:
    """JSON-safe copy of the cart lines an order was placed from."""
    lines = list(lines)
    return {
        "items": [
            {
                "productId": line.product.id,
                "name": line.product.name,
                "quantity": line.quantity,
                "unitPrice": str(line.product.unit_price),
                "lineTotal": str(line.line_total),
                "requiresPrescription": line.product.requires_prescription,
            }
            for line in lines
        ],
        "total": str(compute_total(lines)),
    }


class PrescriptionMapper:
    @staticmethod
    def to_dto(prescription: Prescription) -> PrescriptionDTO:
        return PrescriptionDTO(
            id=str(prescription.id),
            prescription_ref=prescription.prescription_ref,
            notes=prescription.notes or "",
            status=prescription.status,
            created_at=prescription.created_at,
        )

    @staticmethod
    def many_to_dto(prescriptions: Iterable[Prescription]) -> List[PrescriptionDTO]:
        return [PrescriptionMapper.to_dto(p) for p in prescriptions]


class OrderMapper:
    @staticmethod
    def to_dto(order: MedicineOrder) -> OrderDTO:
        return OrderDTO(
            id=str(order.id),
            status=order.status,
            delivery_address=order.delivery_address,
            medicine_details=dict(order.medicine_details or {}),
            prescription_id=str(order.prescription_id) if order.prescription_id else None,
            created_at=order.created_at,
        )

    @staticmethod
    def many_to_dto(orders: Iterable[MedicineOrder]) -> List[OrderDTO]:
        return [OrderMapper.to_dto(o) for o in orders]
