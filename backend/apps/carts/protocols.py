from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from apps.catalog.dtos import ProductDTO, VariantDTO
from apps.shipping.dtos import SelectedLocation, ShippingQuoteDTO


class ProductLookupProtocol(Protocol):
    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        ...

    def get_variant(
        self, product: ProductDTO, variant_id: Optional[str]
    ) -> Optional[VariantDTO]:
        ...


class ShippingQuoteProtocol(Protocol):
    def quote(
        self,
        subtotal: int,
        location: Optional[SelectedLocation],
        today: Optional[date] = None,
    ) -> ShippingQuoteDTO:
        ...
