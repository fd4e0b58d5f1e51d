from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.db import DatabaseError, transaction

from apps.api.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PersistenceError,
    UnauthenticatedError,
)
from apps.common import get_logger
from .commands import OrderCreateCommand, PrescriptionCreateCommand
from .dtos import OrderDTO, PrescriptionDTO
from .mappers import OrderMapper, PrescriptionMapper, cart_snapshot
from .models import PrescriptionStatus
from .protocols import (
    CartLineMapperProtocol,
    CartLineSourceProtocol,
    OrderRepositoryProtocol,
    PrescriptionRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")


class OrderService:
    """
    Places medicine orders for the caller and records their prescriptions.

    A cart order snapshots the cart lines into the order row and empties the
    cart in the same transaction. Lines whose product requires a prescription
    are only accepted with a prescription of the caller's that was not
    rejected.
    """

    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        prescriptions: PrescriptionRepositoryProtocol,
        cart_lines: CartLineSourceProtocol,
        line_mapper: CartLineMapperProtocol,
    ):
        self.orders = orders
        self.prescriptions = prescriptions
        self.cart_lines = cart_lines
        self.line_mapper = line_mapper
        self.logger = logger.bind(service="OrderService")

    def _require_owner(self, owner_id: Optional[str], operation: str) -> str:
        if not owner_id:
            self.logger.warning("Order operation without owner", operation=operation)
            raise UnauthenticatedError()
        return str(owner_id)

    def _persistence_failure(self, exc: DatabaseError, operation: str, **context):
        self.logger.error(
            "Order store call failed", operation=operation, error=str(exc), **context
        )
        return PersistenceError(str(exc) or None)

    def _usable_prescription(self, owner: str, prescription_id: Optional[str]):
        if prescription_id is None:
            return None
        prescription = self.prescriptions.get(id=prescription_id, user_id=owner)
        if prescription is None:
            self.logger.info(
                "Order rejected: unknown prescription",
                owner_id=owner,
                prescription_id=prescription_id,
            )
            raise NotFoundError(
                "Prescription not found", details={"prescriptionId": prescription_id}
            )
        if prescription.status == PrescriptionStatus.REJECTED:
            raise InvalidRequestError(
                "Prescription was rejected", details={"prescriptionId": prescription_id}
            )
        return prescription

    def _details_from_cart(self, owner: str) -> Dict[str, Any]:
        lines = self.line_mapper.many_to_dto(self.cart_lines.list_for_owner(owner))
        if not lines:
            raise InvalidRequestError("Cart is empty")
        withdrawn = [line.product.id for line in lines if not line.product.available_for_sale]
        if withdrawn:
            raise InvalidRequestError(
                "Some products are no longer available for sale",
                details={"productIds": withdrawn},
            )
        return cart_snapshot(lines)

    def place_order(self, owner_id: Optional[str], cmd: OrderCreateCommand) -> OrderDTO:
        owner = self._require_owner(owner_id, "place_order")
        try:
            with transaction.atomic():
                prescription = self._usable_prescription(owner, cmd.prescription_id)
                if cmd.is_manual:
                    details = {"medicines": cmd.medicines, "quantity": cmd.quantity}
                else:
                    details = self._details_from_cart(owner)
                    restricted = [
                        item["productId"]
                        for item in details["items"]
                        if item["requiresPrescription"]
                    ]
                    if restricted and prescription is None:
                        self.logger.info(
                            "Order rejected: prescription required",
                            owner_id=owner,
                            product_ids=restricted,
                        )
                        raise InvalidRequestError(
                            "A prescription is required for some products",
                            details={"productIds": restricted},
                        )
                order = self.orders.create(
                    user_id=owner,
                    medicine_details=details,
                    delivery_address=cmd.delivery_address,
                    prescription_id=prescription.id if prescription else None,
                )
                if not cmd.is_manual:
                    self.cart_lines.clear(owner)
        except DatabaseError as exc:
            raise self._persistence_failure(exc, "place_order", owner_id=owner) from exc
        self.logger.info(
            "Placed order",
            owner_id=owner,
            order_id=order.id,
            manual=cmd.is_manual,
            with_prescription=prescription is not None,
        )
        return OrderMapper.to_dto(order)

    def list_orders(self, owner_id: Optional[str]) -> List[OrderDTO]:
        owner = self._require_owner(owner_id, "list_orders")
        try:
            return OrderMapper.many_to_dto(self.orders.list_for_owner(owner))
        except DatabaseError as exc:
            raise self._persistence_failure(exc, "list_orders", owner_id=owner) from exc

    def record_prescription(
        self, owner_id: Optional[str], cmd: PrescriptionCreateCommand
    ) -> PrescriptionDTO:
        owner = self._require_owner(owner_id, "record_prescription")
        try:
            prescription = self.prescriptions.create(
                user_id=owner, prescription_ref=cmd.prescription_ref, notes=cmd.notes
            )
        except DatabaseError as exc:
            raise self._persistence_failure(
                exc, "record_prescription", owner_id=owner
            ) from exc
        self.logger.info(
            "Recorded prescription", owner_id=owner, prescription_id=prescription.id
        )
        return PrescriptionMapper.to_dto(prescription)

    def list_prescriptions(self, owner_id: Optional[str]) -> List[PrescriptionDTO]:
        owner = self._require_owner(owner_id, "list_prescriptions")
        try:
            return PrescriptionMapper.many_to_dto(self.prescriptions.list_for_owner(owner))
        except DatabaseError as exc:
            raise self._persistence_failure(
                exc, "list_prescriptions", owner_id=owner
            ) from exc
