from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.catalog.container import build_catalog_service
from apps.common import get_logger
from apps.common.storage import storage_for_request
from apps.shipping.commands import LocationCommand
from apps.shipping.container import build_shipping_service
from .commands import CartItemCommand
from .container import build_cart_service
from .serializers import (
    CartItemPatchSerializer,
    CartItemWriteSerializer,
    CartSummarySerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

LOCATION_PARAMETERS = [
    OpenApiParameter(
        name="department",
        description="Department key used for the shipping-inclusive total",
        required=False,
        type=str,
    ),
    OpenApiParameter(name="city", required=False, type=str),
]


class CartViewMixin:
    catalog = build_catalog_service()
    shipping = build_shipping_service()

    def get_cart(self, request):
        return build_cart_service(
            storage_for_request(request), catalog=self.catalog, shipping=self.shipping
        )

    def get_location(self, request):
        return LocationCommand.from_raw(request.query_params).to_location()


@extend_schema(tags=["Cart"])
class CartView(CartViewMixin, APIView):
    log = logger.bind(view="CartView")

    @extend_schema(
        operation_id="cart_retrieve",
        summary="Get cart",
        parameters=LOCATION_PARAMETERS,
        responses={200: CartSummarySerializer},
    )
    def get(self, request):
        summary = self.get_cart(request).summary(self.get_location(request))
        return Response(CartSummarySerializer(summary).data)

    @extend_schema(
        operation_id="cart_clear",
        summary="Empty cart",
        parameters=LOCATION_PARAMETERS,
        responses={200: CartSummarySerializer},
    )
    def delete(self, request):
        summary = self.get_cart(request).clear(self.get_location(request))
        self.log.info("Cart cleared via API")
        return Response(CartSummarySerializer(summary).data)


@extend_schema(tags=["Cart"])
class CartItemListView(CartViewMixin, APIView):
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        operation_id="cart_items_create",
        summary="Add to cart",
        description="Adds one line per product/variant pair; repeated adds accumulate quantity.",
        parameters=LOCATION_PARAMETERS,
        request=CartItemWriteSerializer,
        responses={
            201: CartSummarySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CartItemCommand.from_raw(serializer.validated_data)
        summary = self.get_cart(request).add_item(
            command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
            location=self.get_location(request),
        )
        if summary is None:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(command.product_id)}
            )
        self.log.info(
            "Cart item added via API",
            product_id=command.product_id,
            variant_id=command.variant_id,
        )
        return Response(
            CartSummarySerializer(summary).data, status=status.HTTP_201_CREATED
        )


@extend_schema(tags=["Cart"])
class CartItemDetailView(CartViewMixin, APIView):
    log = logger.bind(view="CartItemDetailView")

    @extend_schema(
        operation_id="cart_items_partial_update",
        summary="Change quantity",
        description="'decrease' on a line with quantity 1 removes it.",
        parameters=[OpenApiParameter("key", str, OpenApiParameter.PATH)]
        + LOCATION_PARAMETERS,
        request=CartItemPatchSerializer,
        responses={
            200: CartSummarySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, key: str):
        serializer = CartItemPatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        summary = self.get_cart(request).set_quantity(
            key, serializer.validated_data["action"], self.get_location(request)
        )
        if summary is None:
            return error_response("NOT_FOUND", "Cart item not found", {"key": key})
        return Response(CartSummarySerializer(summary).data)

    @extend_schema(
        operation_id="cart_items_destroy",
        summary="Remove line",
        parameters=[OpenApiParameter("key", str, OpenApiParameter.PATH)]
        + LOCATION_PARAMETERS,
        responses={
            200: CartSummarySerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, key: str):
        summary = self.get_cart(request).remove_item(key, self.get_location(request))
        if summary is None:
            return error_response("NOT_FOUND", "Cart item not found", {"key": key})
        self.log.info("Cart item removed via API", key=key)
        return Response(CartSummarySerializer(summary).data)
