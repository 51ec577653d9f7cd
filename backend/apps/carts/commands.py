from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class CartItemCommand:
    product_id: int
    variant_id: Optional[str]
    quantity: int

    @staticmethod
    def from_raw(raw: Mapping[str, Any]):
        if not isinstance(raw, Mapping):
            return None
        pid = raw.get("productId") or raw.get("product_id")
        try:
            pid = int(pid) if pid is not None else None
        except (ValueError, TypeError):
            pid = None
        try:
            qty = int(raw.get("quantity", 1))
        except (ValueError, TypeError):
            qty = 0
        if not pid or qty <= 0:
            return None
        variant_id = raw.get("variantId") or raw.get("variant_id")
        variant_id = str(variant_id).strip() if variant_id is not None else ""
        return CartItemCommand(
            product_id=pid, variant_id=variant_id or None, quantity=qty
        )
