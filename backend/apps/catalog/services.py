from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from django.utils import timezone
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from apps.common import get_logger
from apps.common.repository import StoredListRepository
from apps.common.storage import KeyValueStorageProtocol

from .commands import CommentCreateCommand, ProductQueryCommand
from .dtos import CategoryDTO, CommentDTO, ProductDTO, VariantDTO
from .labels import category_label
from .protocols import (
    CacheBackendProtocol,
    ProductLookupProtocol,
    ProductRepositoryProtocol,
)
from .repositories import CatalogUnavailableError

logger = get_logger(__name__).bind(component="catalog", layer="service")

__all__ = [
    "CatalogService",
    "CatalogUnavailableError",
    "ProductCommentService",
]

FEATURED_LIMIT = 8
RELATED_LIMIT = 4


def _matches_query(product: ProductDTO, query: str) -> bool:
    haystacks = (
        product.name,
        product.description,
        product.category,
        " ".join(product.features),
        " ".join(product.tags),
        product.sku,
    )
    return any(query in (h or "").lower() for h in haystacks)


class CatalogService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="CatalogService")
        self._cache_prefix = "catalog:products"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def _cache_key(self) -> str:
        return f"{self._cache_prefix}:v{self._get_cache_version()}"

    def reload(self) -> int:
        """Invalidate the cached catalog so the next read goes back to the file."""
        v = self._get_cache_version() + 1
        # Version key should not expire
        self.cache.set(self._cache_version_key, v, timeout=None)
        self.logger.info("Catalog cache invalidated", new_version=v)
        return v

    def all_products(self) -> List[ProductDTO]:
        if self.disable_cache:
            return self.products.load()
        key = self._cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Catalog cache hit", cache_key=key)
            return cached
        self.logger.debug("Catalog cache miss", cache_key=key)
        data = self.products.load()
        self.cache.set(key, data)
        return data

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        product = next((p for p in self.all_products() if p.id == product_id), None)
        if product is None:
            self.logger.info("Product not found", product_id=product_id)
        return product

    def get_variant(
        self, product: ProductDTO, variant_id: Optional[str]
    ) -> Optional[VariantDTO]:
        if variant_id is None or variant_id == "":
            return None
        wanted = str(variant_id)
        return next((v for v in product.variants if v.id == wanted), None)

    def list_categories(self) -> List[CategoryDTO]:
        products = self.all_products()
        counts: Dict[str, int] = {}
        for product in products:
            counts[product.category] = counts.get(product.category, 0) + 1
        categories = [CategoryDTO(key="all", label=category_label("all"), count=len(products))]
        categories.extend(
            CategoryDTO(key=name, label=category_label(name), count=count)
            for name, count in counts.items()
        )
        return categories

    def filter_products(
        self, category: Optional[str] = None, query: Optional[str] = None
    ) -> List[ProductDTO]:
        """Category filter first, then free-text search; blank values do not filter."""
        products = self.all_products()
        if category and category != "all":
            products = [p for p in products if p.category == category]
        q = (query or "").strip().lower()
        if q:
            products = [p for p in products if _matches_query(p, q)]
        self.logger.debug(
            "Filtered products", category=category, query=q or None, count=len(products)
        )
        return products

    def list_products_paginated(
        self,
        request,
        *,
        command: Optional[ProductQueryCommand] = None,
        paginator_class: Optional[Type[PageNumberPagination]] = None,
        serializer_class=None,
        view=None,
    ) -> Response:
        command = command or ProductQueryCommand.from_raw(request.query_params)
        products = self.filter_products(command.category, command.query)
        paginator = (paginator_class or PageNumberPagination)()
        page = paginator.paginate_queryset(products, request, view=view)
        if serializer_class is None:
            from .serializers import ProductReadSerializer  # Avoid circular import

            serializer_class = ProductReadSerializer
        serializer = serializer_class(page if page is not None else products, many=True)
        if page is None:
            return Response(serializer.data)
        return paginator.get_paginated_response(serializer.data)

    def featured_products(self, limit: int = FEATURED_LIMIT) -> List[ProductDTO]:
        """Products flagged as featured; without any, the best rated ones."""
        products = self.all_products()
        flagged = [p for p in products if p.featured]
        if flagged:
            return flagged[:limit]
        ranked = sorted(products, key=lambda p: (p.rating, p.reviews), reverse=True)
        return ranked[:limit]

    def related_products(
        self, product: ProductDTO, limit: int = RELATED_LIMIT
    ) -> List[ProductDTO]:
        return [
            p
            for p in self.all_products()
            if p.id != product.id and p.category == product.category
        ][:limit]


class ProductCommentService:
    """Visitor comments per product, stored alongside the cart in visitor storage."""

    key_template = "comentarios_prod_{product_id}"

    def __init__(self, catalog: ProductLookupProtocol, storage: KeyValueStorageProtocol):
        self.catalog = catalog
        self.storage = storage
        self.logger = logger.bind(service="ProductCommentService")

    def _repository(self, product_id: int) -> StoredListRepository[CommentDTO]:
        return StoredListRepository(
            self.storage,
            self.key_template.format(product_id=product_id),
            to_dict=lambda c: {"name": c.name, "text": c.text, "date": c.date},
            from_dict=lambda d: CommentDTO(
                name=str(d.get("name") or "Anónimo"),
                text=str(d.get("text") or ""),
                date=int(d.get("date") or 0),
            ),
        )

    def list_comments(self, product_id: int) -> Optional[List[CommentDTO]]:
        if self.catalog.get_product(product_id) is None:
            return None
        return self._repository(product_id).load()

    def add_comment(
        self, product_id: int, data: Dict[str, Any]
    ) -> Optional[List[CommentDTO]]:
        """Prepend a comment; returns the updated list, or None for unknown products.

        Raises ValueError when the comment text is blank.
        """
        if self.catalog.get_product(product_id) is None:
            return None
        command = CommentCreateCommand.from_raw(data)
        if command is None:
            raise ValueError("Comment text is required")
        repository = self._repository(product_id)
        comments = repository.load()
        comments.insert(
            0,
            CommentDTO(
                name=command.name,
                text=command.text,
                date=int(timezone.now().timestamp() * 1000),
            ),
        )
        repository.save(comments)
        self.logger.info("Comment added", product_id=product_id, total=len(comments))
        return comments
