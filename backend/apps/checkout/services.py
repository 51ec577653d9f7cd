from __future__ import annotations

from typing import Optional

from apps.api.exceptions import ApplicationError
from apps.carts.services import CartService
from apps.common import get_logger
from apps.shipping.dtos import SelectedLocation

from .dtos import CheckoutResultDTO, InquiryDTO
from .formatter import build_inquiry_message, build_order_message, whatsapp_link

logger = get_logger(__name__).bind(component="checkout", layer="service")


class EmptyCartError(ApplicationError):
    def __init__(self):
        super().__init__(
            "EMPTY_CART",
            "Tu carrito está vacío. Agrega algunos productos antes de proceder al pago.",
        )


class CheckoutService:
    def __init__(self, catalog, shipping, whatsapp_number: str):
        self.catalog = catalog
        self.shipping = shipping
        self.whatsapp_number = whatsapp_number
        self.logger = logger.bind(service="CheckoutService")

    def checkout(
        self, cart: CartService, location: Optional[SelectedLocation] = None
    ) -> CheckoutResultDTO:
        """Build the order message and link, then empty the cart.

        Raises EmptyCartError when there is nothing to order.
        """
        summary = cart.summary(location)
        if summary.is_empty:
            self.logger.info("Checkout attempted with empty cart")
            raise EmptyCartError()
        message = build_order_message(summary.items, summary.quote)
        result = CheckoutResultDTO(
            whatsapp_url=whatsapp_link(message, self.whatsapp_number),
            message=message,
            item_count=summary.item_count,
            subtotal=summary.subtotal,
            total=summary.total,
        )
        cart.clear()
        self.logger.info(
            "Order handed off to WhatsApp",
            items=summary.item_count,
            total=summary.total,
            department=location.department if location else None,
        )
        return result

    def product_inquiry(
        self, product_id: int, location: Optional[SelectedLocation] = None
    ) -> Optional[InquiryDTO]:
        product = self.catalog.get_product(product_id)
        if product is None:
            return None
        quote = self.shipping.quote(product.price, location)
        message = build_inquiry_message(product, quote)
        return InquiryDTO(
            product_id=product.id,
            whatsapp_url=whatsapp_link(message, self.whatsapp_number),
            message=message,
        )
