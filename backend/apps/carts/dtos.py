from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from apps.shipping.dtos import ShippingQuoteDTO


@dataclass
class CartItemDTO:
    key: str
    product_id: int
    name: str
    unit_price: int
    original_price: int
    quantity: int
    images: Tuple[str, ...] = ()
    variant_id: Optional[str] = None
    variant_name: Optional[str] = None

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass
class CartSummaryDTO:
    items: List[CartItemDTO] = field(default_factory=list)
    item_count: int = 0
    subtotal: int = 0
    quote: Optional[ShippingQuoteDTO] = None

    @property
    def total(self) -> int:
        return self.quote.total if self.quote else self.subtotal

    @property
    def is_empty(self) -> bool:
        return not self.items
