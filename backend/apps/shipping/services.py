from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from apps.common import get_logger

from .delivery import DeliveryEstimator, format_long_date
from .dtos import RegionDTO, SelectedLocation, ShippingQuoteDTO
from .regions import RegionTable

logger = get_logger(__name__).bind(component="shipping", layer="service")


class ShippingService:
    def __init__(
        self,
        regions: RegionTable,
        estimator: DeliveryEstimator,
        free_shipping_threshold: int,
    ):
        self.regions = regions
        self.estimator = estimator
        self.free_shipping_threshold = free_shipping_threshold
        self.logger = logger.bind(service="ShippingService")

    def list_departments(self) -> List[RegionDTO]:
        return self.regions.all()

    def get_department(self, key: Optional[str]) -> Optional[RegionDTO]:
        department = self.regions.get(key)
        if key and department is None:
            self.logger.info("Unknown department", department=key)
        return department

    def find_department_by_region(self, region: Optional[str]) -> Optional[RegionDTO]:
        return self.regions.find_by_region(region)

    def delivery_estimate(
        self, department: RegionDTO, today: Optional[date] = None
    ) -> Tuple[date, str]:
        eta = self.estimator.estimate_window(department.delivery_days, today=today)
        return eta, format_long_date(eta)

    def shipping_cost(self, subtotal: int, department: RegionDTO) -> int:
        if subtotal >= self.free_shipping_threshold:
            return 0
        return department.shipping_cost

    def quote(
        self,
        subtotal: int,
        location: Optional[SelectedLocation],
        today: Optional[date] = None,
    ) -> ShippingQuoteDTO:
        """Shipping-inclusive total. Without a known department the total is the subtotal."""
        department = self.regions.get(location.department) if location else None
        if department is None:
            return ShippingQuoteDTO(
                subtotal=subtotal,
                total=subtotal,
                free_shipping_threshold=self.free_shipping_threshold,
            )
        cost = self.shipping_cost(subtotal, department)
        eta, eta_text = self.delivery_estimate(department, today=today)
        self.logger.debug(
            "Shipping quoted",
            department=department.key,
            subtotal=subtotal,
            cost=cost,
        )
        return ShippingQuoteDTO(
            subtotal=subtotal,
            total=subtotal + cost,
            free_shipping_threshold=self.free_shipping_threshold,
            department=department,
            city=location.city,
            shipping_cost=cost,
            free_shipping=cost == 0,
            estimated_delivery=eta,
            estimated_delivery_text=eta_text,
        )
