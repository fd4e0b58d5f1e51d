import uuid

import pytest

from apps.api.exceptions import InvalidRequestError
from apps.orders.commands import OrderCreateCommand, PrescriptionCreateCommand

PRESCRIPTION_ID = "0c9a7e34-5b1d-4f6e-8a2b-3c4d5e6f7a8b"


def test_cart_order_needs_only_an_address():
    cmd = OrderCreateCommand.from_raw({"deliveryAddress": "  12 High Street  "})
    assert cmd.delivery_address == "12 High Street"
    assert cmd.prescription_id is None
    assert not cmd.is_manual


def test_order_accepts_aliases_and_normalizes_prescription_id():
    cmd = OrderCreateCommand.from_raw(
        {"delivery_address": "Flat 2", "prescription_id": PRESCRIPTION_ID.upper()}
    )
    assert cmd.prescription_id == PRESCRIPTION_ID
    cmd = OrderCreateCommand.from_raw(
        {"address": "Flat 2", "prescriptionId": uuid.UUID(PRESCRIPTION_ID)}
    )
    assert cmd.prescription_id == PRESCRIPTION_ID


@pytest.mark.parametrize("address", [None, "", "   ", 42])
def test_order_requires_delivery_address(address):
    with pytest.raises(InvalidRequestError) as exc:
        OrderCreateCommand.from_raw({"deliveryAddress": address})
    assert exc.value.message == "deliveryAddress is required"


def test_order_rejects_overlong_address_and_bad_prescription_id():
    with pytest.raises(InvalidRequestError):
        OrderCreateCommand.from_raw({"deliveryAddress": "x" * 501})
    with pytest.raises(InvalidRequestError):
        OrderCreateCommand.from_raw({"deliveryAddress": "Flat 2", "prescriptionId": "nope"})
    with pytest.raises(InvalidRequestError):
        OrderCreateCommand.from_raw("deliveryAddress")


def test_manual_order_parses_medicines_and_quantity():
    cmd = OrderCreateCommand.from_raw(
        {"deliveryAddress": "Flat 2", "medicines": "Amoxicillin 500mg", "quantity": "2"}
    )
    assert cmd.is_manual
    assert cmd.medicines == "Amoxicillin 500mg"
    assert cmd.quantity == 2
    default = OrderCreateCommand.from_raw({"deliveryAddress": "Flat 2", "medicines": "Zinc"})
    assert default.quantity == 1


@pytest.mark.parametrize("quantity", [0, -3, "many", 10**20])
def test_manual_order_rejects_bad_quantity(quantity):
    with pytest.raises(InvalidRequestError):
        OrderCreateCommand.from_raw(
            {"deliveryAddress": "Flat 2", "medicines": "Zinc", "quantity": quantity}
        )


def test_manual_order_rejects_blank_medicines():
    with pytest.raises(InvalidRequestError):
        OrderCreateCommand.from_raw({"deliveryAddress": "Flat 2", "medicines": "  "})


def test_prescription_command():
    cmd = PrescriptionCreateCommand.from_raw(
        {"prescriptionRef": "user-1/scan.pdf", "notes": " repeat monthly "}
    )
    assert cmd.prescription_ref == "user-1/scan.pdf"
    assert cmd.notes == "repeat monthly"
    assert PrescriptionCreateCommand.from_raw({"prescriptionUrl": "a.png"}).notes == ""
    with pytest.raises(InvalidRequestError):
        PrescriptionCreateCommand.from_raw({"notes": "no document"})
    with pytest.raises(InvalidRequestError):
        PrescriptionCreateCommand.from_raw({"prescriptionRef": "a.png", "notes": 7})
