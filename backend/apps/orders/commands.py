import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from apps.api.exceptions import InvalidRequestError
from apps.carts.commands import parse_quantity

MAX_ADDRESS_LENGTH = 500
MAX_MEDICINES_LENGTH = 2000
MAX_REF_LENGTH = 512
MAX_NOTES_LENGTH = 2000


def _first_present(payload: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _required_text(raw: Any, name: str, max_length: int) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidRequestError(f"{name} is required", details={name: raw})
    value = raw.strip()
    if len(value) > max_length:
        raise InvalidRequestError(
            f"{name} must be at most {max_length} characters",
            details={name: len(value), "max": max_length},
        )
    return value


def parse_prescription_id(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, uuid.UUID):
        return str(raw)
    if isinstance(raw, str):
        try:
            return str(uuid.UUID(raw.strip()))
        except ValueError:
            pass
    raise InvalidRequestError(
        "prescriptionId must be a valid UUID", details={"prescriptionId": raw}
    )


@dataclass
class OrderCreateCommand:
    """
    Without ``medicines`` the order is placed from the caller's cart.
    With ``medicines`` it is a free-text order of ``quantity`` packs.
    """

    delivery_address: str
    prescription_id: Optional[str] = None
    medicines: Optional[str] = None
    quantity: Optional[int] = None

    @property
    def is_manual(self) -> bool:
        return self.medicines is not None

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "OrderCreateCommand":
        if not isinstance(payload, dict):
            raise InvalidRequestError("Payload must be an object")
        address = _required_text(
            _first_present(payload, "deliveryAddress", "delivery_address", "address"),
            "deliveryAddress",
            MAX_ADDRESS_LENGTH,
        )
        prescription_id = parse_prescription_id(
            _first_present(payload, "prescriptionId", "prescription_id")
        )
        medicines = payload.get("medicines")
        quantity = None
        if medicines is not None:
            medicines = _required_text(medicines, "medicines", MAX_MEDICINES_LENGTH)
            quantity = parse_quantity(payload.get("quantity", 1))
            if quantity < 1:
                raise InvalidRequestError(
                    "quantity must be at least 1", details={"quantity": quantity}
                )
        return OrderCreateCommand(
            delivery_address=address,
            prescription_id=prescription_id,
            medicines=medicines,
            quantity=quantity,
        )


@dataclass
class PrescriptionCreateCommand:
    prescription_ref: str
    notes: str = ""

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "PrescriptionCreateCommand":
        if not isinstance(payload, dict):
            raise InvalidRequestError("Payload must be an object")
        ref = _required_text(
            _first_present(payload, "prescriptionRef", "prescription_ref", "prescriptionUrl"),
            "prescriptionRef",
            MAX_REF_LENGTH,
        )
        notes = payload.get("notes")
        if notes is None:
            notes = ""
        elif not isinstance(notes, str):
            raise InvalidRequestError("notes must be a string", details={"notes": notes})
        notes = notes.strip()
        if len(notes) > MAX_NOTES_LENGTH:
            raise InvalidRequestError(
                f"notes must be at most {MAX_NOTES_LENGTH} characters",
                details={"notes": len(notes), "max": MAX_NOTES_LENGTH},
            )
        return PrescriptionCreateCommand(prescription_ref=ref, notes=notes)
