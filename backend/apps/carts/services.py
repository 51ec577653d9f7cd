from __future__ import annotations

from typing import List, Optional

from apps.common import get_logger
from apps.common.repository import StoredListRepository
from apps.common.storage import KeyValueStorageProtocol
from apps.shipping.dtos import SelectedLocation

from .dtos import CartItemDTO, CartSummaryDTO
from .mappers import CartItemMapper, cart_key
from .protocols import ProductLookupProtocol, ShippingQuoteProtocol

logger = get_logger(__name__).bind(component="carts", layer="service")

DEFAULT_STORAGE_KEY = "cart"

INCREASE = "increase"
DECREASE = "decrease"


class CartService:
    """Visitor cart kept as one JSON list in key-value storage.

    Lines are loaded once at construction and written back after every
    mutation. Mutations return a fresh summary for the caller to render.
    """

    def __init__(
        self,
        storage: KeyValueStorageProtocol,
        catalog: ProductLookupProtocol,
        shipping: ShippingQuoteProtocol,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.catalog = catalog
        self.shipping = shipping
        self.repository = StoredListRepository(
            storage,
            storage_key,
            to_dict=CartItemMapper.to_dict,
            from_dict=CartItemMapper.from_dict,
        )
        self.logger = logger.bind(service="CartService")
        self._items: List[CartItemDTO] = [
            item for item in self.repository.load() if item.quantity > 0
        ]

    def _save(self) -> None:
        self.repository.save(self._items)

    def _find(self, key: str) -> Optional[CartItemDTO]:
        return next((item for item in self._items if item.key == key), None)

    def items(self) -> List[CartItemDTO]:
        return list(self._items)

    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def subtotal(self) -> int:
        return sum(item.line_total for item in self._items)

    def total_with_shipping(self, location: Optional[SelectedLocation] = None) -> int:
        return self.shipping.quote(self.subtotal(), location).total

    def summary(self, location: Optional[SelectedLocation] = None) -> CartSummaryDTO:
        subtotal = self.subtotal()
        return CartSummaryDTO(
            items=self.items(),
            item_count=self.item_count(),
            subtotal=subtotal,
            quote=self.shipping.quote(subtotal, location),
        )

    def add_item(
        self,
        product_id: int,
        variant_id: Optional[str] = None,
        quantity: int = 1,
        location: Optional[SelectedLocation] = None,
    ) -> Optional[CartSummaryDTO]:
        """Add a product (optionally a variant). Returns None for unknown products.

        An unknown variant id falls back to the plain product line. Quantities
        below one are rejected so no line is ever stored at zero or less.
        """
        if quantity < 1:
            raise ValueError(f"Quantity must be at least 1, got {quantity}")
        product = self.catalog.get_product(product_id)
        if product is None:
            self.logger.info("Ignoring unknown product", product_id=product_id)
            return None
        variant = self.catalog.get_variant(product, variant_id)
        key = cart_key(product.id, variant.id if variant else None)
        existing = self._find(key)
        if existing:
            existing.quantity += quantity
        else:
            images = variant.images if variant and variant.images else product.images
            self._items.append(
                CartItemDTO(
                    key=key,
                    product_id=product.id,
                    variant_id=variant.id if variant else None,
                    variant_name=variant.name if variant else None,
                    name=product.name,
                    unit_price=(
                        variant.price if variant and variant.price else product.price
                    ),
                    original_price=product.original_price or product.price,
                    images=tuple(images),
                    quantity=quantity,
                )
            )
        self._save()
        self.logger.info(
            "Added to cart", key=key, product=product.name, quantity=quantity
        )
        return self.summary(location)

    def set_quantity(
        self, key: str, action: str, location: Optional[SelectedLocation] = None
    ) -> Optional[CartSummaryDTO]:
        """Step a line up or down by one. Returns None when the key is not in the cart."""
        item = self._find(key)
        if item is None:
            self.logger.debug("Quantity change for missing line", key=key)
            return None
        if action == INCREASE:
            item.quantity += 1
        elif action == DECREASE:
            item.quantity -= 1
            if item.quantity <= 0:
                self._items.remove(item)
        else:
            raise ValueError(f"Unknown quantity action: {action}")
        self._save()
        self.logger.info("Cart quantity changed", key=key, action=action)
        return self.summary(location)

    def remove_item(
        self, key: str, location: Optional[SelectedLocation] = None
    ) -> Optional[CartSummaryDTO]:
        item = self._find(key)
        if item is None:
            return None
        self._items.remove(item)
        self._save()
        self.logger.info("Removed from cart", key=key)
        return self.summary(location)

    def clear(self, location: Optional[SelectedLocation] = None) -> CartSummaryDTO:
        self._items = []
        self.repository.clear()
        self.logger.info("Cart cleared")
        return self.summary(location)
