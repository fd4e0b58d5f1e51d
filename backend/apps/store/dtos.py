from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    category: str
    unit_price: Decimal
    image_ref: Optional[str]
    available_for_sale: bool
    requires_prescription: bool
