from decimal import Decimal
from typing import Iterable, List

from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=str(product.id),
            name=product.name,
            description=product.description or "",
            category=product.category,
            unit_price=Decimal(product.unit_price),
            image_ref=product.image_ref or None,
            available_for_sale=bool(product.available_for_sale),
            requires_prescription=bool(product.requires_prescription),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
