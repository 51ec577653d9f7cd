from __future__ import annotations

from django.conf import settings

from apps.catalog.container import build_catalog_service
from apps.catalog.services import CatalogService
from apps.shipping.container import build_shipping_service
from apps.shipping.services import ShippingService

from .services import CheckoutService


def build_checkout_service(
    *,
    catalog: CatalogService | None = None,
    shipping: ShippingService | None = None,
) -> CheckoutService:
    return CheckoutService(
        catalog=catalog or build_catalog_service(),
        shipping=shipping or build_shipping_service(),
        whatsapp_number=settings.WHATSAPP_NUMBER,
    )
