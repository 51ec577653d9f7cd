from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .dtos import SelectedLocation


def _clean(value: Any) -> Optional[str]:
    text = str(value or "").strip()
    return text or None


@dataclass
class LocationCommand:
    department: Optional[str]
    city: Optional[str]

    @staticmethod
    def from_raw(params: Mapping[str, Any]):
        if not isinstance(params, Mapping):
            return LocationCommand(department=None, city=None)
        return LocationCommand(
            department=_clean(params.get("department")),
            city=_clean(params.get("city")),
        )

    def to_location(self) -> SelectedLocation:
        return SelectedLocation(department=self.department, city=self.city)


@dataclass
class DetectCommand:
    latitude: Optional[float]
    longitude: Optional[float]

    @staticmethod
    def from_raw(params: Mapping[str, Any]):
        """Coordinates are used only when both parse as floats."""
        try:
            latitude = float(params.get("lat"))
            longitude = float(params.get("lng"))
        except (TypeError, ValueError):
            return DetectCommand(latitude=None, longitude=None)
        return DetectCommand(latitude=latitude, longitude=longitude)
