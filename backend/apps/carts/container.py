from __future__ import annotations

from django.conf import settings

from apps.catalog.container import build_catalog_service
from apps.catalog.services import CatalogService
from apps.common.storage import KeyValueStorageProtocol
from apps.shipping.container import build_shipping_service
from apps.shipping.services import ShippingService

from .services import CartService


def build_cart_service(
    storage: KeyValueStorageProtocol,
    *,
    catalog: CatalogService | None = None,
    shipping: ShippingService | None = None,
) -> CartService:
    return CartService(
        storage=storage,
        catalog=catalog or build_catalog_service(),
        shipping=shipping or build_shipping_service(),
        storage_key=settings.CART_STORAGE_KEY,
    )
