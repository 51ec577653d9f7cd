from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.carts.container import build_cart_service
from apps.common import get_logger
from apps.common.storage import storage_for_request
from apps.shipping.commands import LocationCommand
from .container import build_checkout_service
from .serializers import (
    CheckoutRequestSerializer,
    CheckoutResultSerializer,
    InquirySerializer,
)

logger = get_logger(__name__).bind(component="checkout", layer="view")


@extend_schema(tags=["Checkout"])
class CheckoutView(APIView):
    service = build_checkout_service()
    log = logger.bind(view="CheckoutView")

    @extend_schema(
        operation_id="checkout_create",
        summary="Checkout via WhatsApp",
        description=(
            "Builds the order message and wa.me link from the session cart, "
            "then empties the cart."
        ),
        request=CheckoutRequestSerializer,
        responses={
            200: CheckoutResultSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        location = LocationCommand.from_raw(serializer.validated_data).to_location()
        cart = build_cart_service(
            storage_for_request(request),
            catalog=self.service.catalog,
            shipping=self.service.shipping,
        )
        # EmptyCartError propagates to the global exception handler
        result = self.service.checkout(cart, location)
        self.log.info("Checkout completed via API", items=result.item_count)
        return Response(CheckoutResultSerializer(result).data)


@extend_schema(tags=["Checkout"])
class ProductInquiryView(APIView):
    service = build_checkout_service()

    @extend_schema(
        operation_id="products_inquiry",
        summary="Single-product WhatsApp inquiry",
        parameters=[
            OpenApiParameter("product_id", int, OpenApiParameter.PATH),
            OpenApiParameter(name="department", required=False, type=str),
            OpenApiParameter(name="city", required=False, type=str),
        ],
        responses={
            200: InquirySerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        location = LocationCommand.from_raw(request.query_params).to_location()
        inquiry = self.service.product_inquiry(product_id, location)
        if inquiry is None:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(InquirySerializer(inquiry).data)
