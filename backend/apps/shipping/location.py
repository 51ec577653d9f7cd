from __future__ import annotations

from typing import Optional

from apps.common import get_logger

from .dtos import RegionDTO, SelectedLocation
from .regions import RegionTable, default_region_table

logger = get_logger(__name__).bind(component="shipping", layer="location")


class LocationStore:
    """Current location choice plus a generation counter.

    Every explicit selection starts a new generation; detection results carry
    the generation they were started under and are dropped once superseded.
    """

    def __init__(
        self,
        regions: Optional[RegionTable] = None,
        initial: Optional[SelectedLocation] = None,
    ):
        self.regions = regions or default_region_table
        self._location = initial or SelectedLocation()
        self._generation = 0
        self._detected = False

    @property
    def location(self) -> SelectedLocation:
        return self._location

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def detected(self) -> bool:
        return self._detected

    def select(self, department: Optional[str], city: Optional[str] = None) -> SelectedLocation:
        """Explicit choice. Unknown departments clear the selection."""
        self._generation += 1
        region = self.regions.get(department)
        if region is None:
            self._location = SelectedLocation()
        else:
            self._location = SelectedLocation(
                department=region.key, city=city if city in region.cities else None
            )
        self._detected = False
        return self._location

    def begin_detection(self) -> int:
        return self._generation

    def apply_detected(
        self, generation: int, city: Optional[str], region: Optional[str]
    ) -> Optional[RegionDTO]:
        if generation != self._generation:
            logger.debug(
                "Ignoring stale detection result",
                generation=generation,
                current=self._generation,
            )
            return None
        department = self.regions.find_by_region(region)
        if department is None:
            logger.debug("Detected region does not match a department", region=region)
            return None
        self._location = SelectedLocation(department=department.key, city=city or None)
        self._detected = True
        # Later detections in the same generation must not overwrite this one.
        self._generation += 1
        logger.info("Location detected", department=department.key, city=city)
        return department
