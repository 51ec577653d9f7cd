from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from apps.common.storage import KeyValueStorageProtocol

from .repositories import JsonProductRepository
from .services import CatalogService, ProductCommentService


def build_catalog_service(*, disable_cache: bool = False) -> CatalogService:
    return CatalogService(
        products=JsonProductRepository(
            settings.CATALOG_PATH, image_dir=settings.CATALOG_IMAGE_DIR
        ),
        cache_backend=cache,
        disable_cache=disable_cache,
    )


def build_comment_service(
    storage: KeyValueStorageProtocol, catalog: CatalogService | None = None
) -> ProductCommentService:
    return ProductCommentService(
        catalog=catalog or build_catalog_service(), storage=storage
    )
