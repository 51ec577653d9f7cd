from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class DeliveryWindow:
    min: int
    max: int


@dataclass(frozen=True)
class RegionDTO:
    key: str
    name: str
    capital: str
    cities: Tuple[str, ...]
    delivery_days: DeliveryWindow
    shipping_cost: int


@dataclass(frozen=True)
class SelectedLocation:
    department: Optional[str] = None
    city: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.department and self.city)


@dataclass
class ShippingQuoteDTO:
    subtotal: int
    total: int
    free_shipping_threshold: int
    department: Optional[RegionDTO] = None
    city: Optional[str] = None
    shipping_cost: Optional[int] = None
    free_shipping: bool = False
    estimated_delivery: Optional[date] = None
    estimated_delivery_text: Optional[str] = None


@dataclass
class DetectedLocationDTO:
    source: str
    city: Optional[str]
    region: Optional[str]
    department: Optional[RegionDTO] = None
