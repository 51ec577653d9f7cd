import ipaddress

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .commands import DetectCommand
from .container import build_location_detector, build_shipping_service
from .location import LocationStore
from .serializers import (
    DepartmentDetailSerializer,
    DepartmentSerializer,
    DetectedLocationSerializer,
)

logger = get_logger(__name__).bind(component="shipping", layer="view")


def client_ip(request):
    """Public client address, or None when the request comes from a private network."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    candidate = forwarded.split(",")[0].strip() or request.META.get("REMOTE_ADDR")
    try:
        address = ipaddress.ip_address(candidate)
    except ValueError:
        return None
    return str(address) if address.is_global else None


@extend_schema(tags=["Shipping"])
class DepartmentListView(APIView):
    service = build_shipping_service()

    @extend_schema(
        operation_id="shipping_departments_list",
        summary="List departments",
        responses={200: DepartmentSerializer(many=True)},
    )
    def get(self, request):
        return Response(
            DepartmentSerializer(self.service.list_departments(), many=True).data
        )


@extend_schema(tags=["Shipping"])
class DepartmentDetailView(APIView):
    service = build_shipping_service()
    log = logger.bind(view="DepartmentDetailView")

    @extend_schema(
        operation_id="shipping_departments_retrieve",
        summary="Get department",
        description="Cities, delivery window, shipping cost and the estimated delivery date.",
        parameters=[OpenApiParameter("key", str, OpenApiParameter.PATH)],
        responses={
            200: DepartmentDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, key: str):
        department = self.service.get_department(key)
        if department is None:
            return error_response("NOT_FOUND", "Department not found", {"key": key})
        eta, eta_text = self.service.delivery_estimate(department)
        self.log.debug("Delivery estimated", department=key, eta=eta.isoformat())
        payload = {
            "department": department,
            "estimated_delivery": eta,
            "estimated_delivery_text": eta_text,
        }
        return Response(DepartmentDetailSerializer(payload).data)


@extend_schema(tags=["Shipping"])
class LocationDetectView(APIView):
    service = build_shipping_service()
    detector = build_location_detector()
    log = logger.bind(view="LocationDetectView")

    @extend_schema(
        operation_id="shipping_detect",
        summary="Detect visitor department",
        description=(
            "Best-effort lookup from optional ?lat/?lng coordinates and the client IP. "
            "Always answers 200; 'detected' is false when nothing matched."
        ),
        parameters=[
            OpenApiParameter(name="lat", type=float, required=False),
            OpenApiParameter(name="lng", type=float, required=False),
        ],
        responses={200: DetectedLocationSerializer},
    )
    def get(self, request):
        command = DetectCommand.from_raw(request.query_params)
        store = LocationStore(regions=self.service.regions)
        detected = async_to_sync(self.detector.detect)(
            store,
            latitude=command.latitude,
            longitude=command.longitude,
            ip=client_ip(request),
        )
        self.log.debug("Detection finished", detected=detected is not None)
        return Response(DetectedLocationSerializer(detected).data)
