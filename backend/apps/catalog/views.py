from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import paginated_response, ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from apps.common.storage import storage_for_request
from .commands import ProductQueryCommand
from .container import build_catalog_service, build_comment_service
from .pagination import ProductListPagination
from .serializers import (
    CategorySerializer,
    CommentSerializer,
    CommentWriteSerializer,
    ProductDetailSerializer,
    ProductReadSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    service = build_catalog_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Supports ?category, ?q and pagination via ?page and ?limit.",
        parameters=[
            OpenApiParameter(
                name="category",
                description="Filter by category name ('all' disables the filter)",
                required=False,
                type=str,
            ),
            OpenApiParameter(
                name="q",
                description="Case-insensitive search over name, description, category, features, tags and sku",
                required=False,
                type=str,
            ),
        ],
        responses={
            200: paginated_response(ProductReadSerializer),
            503: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        command = ProductQueryCommand.from_raw(request.query_params)
        self.log.debug(
            "Handling product list request",
            category=command.category,
            query=command.query,
        )
        return self.service.list_products_paginated(
            request,
            command=command,
            paginator_class=ProductListPagination,
            serializer_class=ProductReadSerializer,
            view=self,
        )


@extend_schema(tags=["Catalog"])
class FeaturedProductListView(APIView):
    service = build_catalog_service()

    @extend_schema(
        operation_id="products_featured",
        summary="Featured products",
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        return Response(
            ProductReadSerializer(self.service.featured_products(), many=True).data
        )


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    service = build_catalog_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        description="Includes related products and image fallback candidates.",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        product = self.service.get_product(product_id)
        if not product:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        payload = {
            "product": product,
            "related": self.service.related_products(product),
        }
        return Response(ProductDetailSerializer(payload).data)


@extend_schema(tags=["Catalog"])
class ProductCommentListView(APIView):
    service = build_catalog_service()
    log = logger.bind(view="ProductCommentListView")

    def _comments(self, request):
        return build_comment_service(storage_for_request(request), catalog=self.service)

    @extend_schema(
        summary="List product comments",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: CommentSerializer(many=True),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        comments = self._comments(request).list_comments(product_id)
        if comments is None:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(CommentSerializer(comments, many=True).data)

    @extend_schema(
        summary="Add product comment",
        request=CommentWriteSerializer,
        responses={
            201: CommentSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, product_id: int):
        serializer = CommentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            comments = self._comments(request).add_comment(
                product_id, serializer.validated_data
            )
        except ValueError as exc:
            return error_response("VALIDATION_ERROR", str(exc), {"field": "text"})
        if comments is None:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        self.log.info("Comment stored via API", product_id=product_id)
        return Response(
            CommentSerializer(comments, many=True).data, status=status.HTTP_201_CREATED
        )


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    service = build_catalog_service()

    @extend_schema(
        operation_id="categories_list",
        summary="List categories",
        description="The first entry is always the 'all' pseudo-category.",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        return Response(
            CategorySerializer(self.service.list_categories(), many=True).data
        )
