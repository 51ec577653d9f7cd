from __future__ import annotations

from functools import lru_cache

from django.conf import settings

from .delivery import DeliveryEstimator
from .geolocation import LocationDetector
from .holidays import load_holiday_calendar
from .regions import default_region_table
from .services import ShippingService


@lru_cache(maxsize=4)
def _holiday_calendar(path: str):
    return load_holiday_calendar(path)


def build_delivery_estimator() -> DeliveryEstimator:
    return DeliveryEstimator(calendar=_holiday_calendar(str(settings.HOLIDAYS_PATH)))


def build_shipping_service() -> ShippingService:
    return ShippingService(
        regions=default_region_table,
        estimator=build_delivery_estimator(),
        free_shipping_threshold=settings.FREE_SHIPPING_THRESHOLD,
    )


def build_location_detector() -> LocationDetector:
    return LocationDetector(
        ip_lookup_base=settings.GEO_IP_LOOKUP_BASE,
        reverse_geocode_url=settings.GEO_REVERSE_URL,
        timeout=settings.GEO_TIMEOUT_SECONDS,
    )
