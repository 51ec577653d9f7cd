from __future__ import annotations

from typing import Any, List, Optional, Protocol

from .dtos import ProductDTO, VariantDTO


class ProductRepositoryProtocol(Protocol):
    def load(self) -> List[ProductDTO]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...


class ProductLookupProtocol(Protocol):
    """The slice of the catalog the cart and checkout depend on."""

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        ...

    def get_variant(
        self, product: ProductDTO, variant_id: Optional[str]
    ) -> Optional[VariantDTO]:
        ...
