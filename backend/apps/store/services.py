from __future__ import annotations

from typing import List, Optional

from django.db import DatabaseError

from apps.api.exceptions import InvalidRequestError, PersistenceError
from apps.common import get_logger
from .dtos import ProductDTO
from .mappers import ProductMapper
from .models import ProductCategory
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="store", layer="service")


class ProductService:
    """Read-only catalog access with a read-through cache for listings."""

    cache_prefix = "store:products"

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")

    def _cache_key(self, category: Optional[str]) -> str:
        return f"{self.cache_prefix}:{category or 'all'}"

    def list_products(self, category: Optional[str] = None) -> List[ProductDTO]:
        if category is not None and category not in ProductCategory.values:
            self.logger.info("Rejected unknown category filter", category=category)
            raise InvalidRequestError(
                "Unknown category",
                details={"category": category, "allowed": list(ProductCategory.values)},
            )
        if not self.disable_cache:
            key = self._cache_key(category)
            cached = self.cache.get(key)
            if cached is not None:
                self.logger.debug("Product list cache hit", cache_key=key)
                return cached
            self.logger.debug("Product list cache miss", cache_key=key)
        try:
            data = ProductMapper.many_to_dto(self.products.list_for_sale(category))
        except DatabaseError as exc:
            self.logger.error("Product listing failed", category=category, error=str(exc))
            raise PersistenceError(str(exc)) from exc
        if not self.disable_cache:
            self.cache.set(self._cache_key(category), data)
        self.logger.debug("Listed products", category=category, count=len(data))
        return data

    def listing_cache_keys(self) -> List[str]:
        return [self._cache_key(None)] + [
            self._cache_key(category) for category in ProductCategory.values
        ]

    def invalidate_listings(self) -> None:
        """Drop every cached listing, e.g. after the catalog was rewritten."""
        keys = self.listing_cache_keys()
        self.cache.delete_many(keys)
        self.logger.info("Invalidated product list cache", keys=len(keys))

    def get_product(self, product_id: str) -> Optional[ProductDTO]:
        try:
            product = self.products.get(id=product_id)
        except DatabaseError as exc:
            self.logger.error("Product lookup failed", product_id=product_id, error=str(exc))
            raise PersistenceError(str(exc)) from exc
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            return None
        return ProductMapper.to_dto(product)
