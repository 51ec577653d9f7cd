"""Colombian departments served by the store, with shipping cost and delivery window.

Table order matters: region matching returns the first department that matches.
"""
from typing import Dict, List, Optional, Tuple

from .dtos import DeliveryWindow, RegionDTO

DEPARTMENTS: Tuple[RegionDTO, ...] = (
    RegionDTO(
        key="antioquia",
        name="Antioquia",
        capital="Medellín",
        cities=("Medellín", "Bello", "Itagüí", "Envigado", "Apartadó", "Turbo"),
        delivery_days=DeliveryWindow(min=7, max=10),
        shipping_cost=15000,
    ),
    RegionDTO(
        key="bogota",
        name="Bogotá D.C.",
        capital="Bogotá",
        cities=("Bogotá",),
        delivery_days=DeliveryWindow(min=6, max=9),
        shipping_cost=12000,
    ),
    RegionDTO(
        key="valle",
        name="Valle del Cauca",
        capital="Cali",
        cities=("Cali", "Palmira", "Buenaventura", "Tuluá", "Cartago"),
        delivery_days=DeliveryWindow(min=8, max=11),
        shipping_cost=16000,
    ),
    RegionDTO(
        key="atlantico",
        name="Atlántico",
        capital="Barranquilla",
        cities=("Barranquilla", "Soledad", "Malambo", "Galapa"),
        delivery_days=DeliveryWindow(min=9, max=12),
        shipping_cost=18000,
    ),
    RegionDTO(
        key="santander",
        name="Santander",
        capital="Bucaramanga",
        cities=("Bucaramanga", "Floridablanca", "Girón", "Piedecuesta"),
        delivery_days=DeliveryWindow(min=8, max=11),
        shipping_cost=17000,
    ),
)


class RegionTable:
    def __init__(self, departments: Tuple[RegionDTO, ...] = DEPARTMENTS):
        self._departments: Dict[str, RegionDTO] = {d.key: d for d in departments}

    def all(self) -> List[RegionDTO]:
        return list(self._departments.values())

    def get(self, key: Optional[str]) -> Optional[RegionDTO]:
        if not key:
            return None
        return self._departments.get(key)

    def cities_for(self, key: Optional[str]) -> Tuple[str, ...]:
        department = self.get(key)
        return department.cities if department else ()

    def find_by_region(self, region: Optional[str]) -> Optional[RegionDTO]:
        """Match free text (e.g. a geocoder's subdivision) against department names.

        Case-insensitive containment in either direction, first match wins.
        """
        needle = (region or "").strip().lower()
        if not needle:
            return None
        for department in self._departments.values():
            name = department.name.lower()
            if needle in name or name in needle:
                return department
        return None


default_region_table = RegionTable()
