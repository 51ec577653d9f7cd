"""Translation between cart lines and their stored JSON shape."""
from typing import Any, Dict, Optional

from apps.catalog.mappers import to_int

from .dtos import CartItemDTO


def cart_key(product_id: int, variant_id: Optional[str] = None) -> str:
    return f"{product_id}::{variant_id}" if variant_id else str(product_id)


class CartItemMapper:
    @staticmethod
    def to_dict(item: CartItemDTO) -> Dict[str, Any]:
        return {
            "key": item.key,
            "id": item.product_id,
            "variantId": item.variant_id,
            "variantName": item.variant_name,
            "name": item.name,
            "price": item.unit_price,
            "originalPrice": item.original_price,
            "images": list(item.images),
            "quantity": item.quantity,
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> CartItemDTO:
        product_id = to_int(raw.get("id"))
        variant_id = raw.get("variantId")
        variant_id = str(variant_id) if variant_id not in (None, "") else None
        images = raw.get("images") or []
        return CartItemDTO(
            key=str(raw.get("key") or cart_key(product_id, variant_id)),
            product_id=product_id,
            variant_id=variant_id,
            variant_name=raw.get("variantName"),
            name=str(raw.get("name") or ""),
            unit_price=to_int(raw.get("price")),
            original_price=to_int(raw.get("originalPrice")),
            images=tuple(str(i) for i in images if i),
            quantity=max(to_int(raw.get("quantity")), 0),
        )
