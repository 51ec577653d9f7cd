"""Best-effort detection of the visitor's department.

Two independent lookups race each other: reverse geocoding of browser
coordinates (when the client sends them) and IP geolocation. Failures are
logged and swallowed; the first result that maps to a department wins and
the lookup still in flight is cancelled.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx

from apps.common import get_logger

from .dtos import DetectedLocationDTO
from .location import LocationStore

logger = get_logger(__name__).bind(component="shipping", layer="geolocation")

COLOMBIA = "CO"


class LocationDetector:
    def __init__(
        self,
        *,
        ip_lookup_base: str = "https://ipapi.co",
        reverse_geocode_url: str = "https://api.bigdatacloud.net/data/reverse-geocode-client",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.ip_lookup_base = ip_lookup_base.rstrip("/")
        self.reverse_geocode_url = reverse_geocode_url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"Accept": "application/json"},
        )

    async def _get_json(
        self, client: httpx.AsyncClient, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Location lookup failed", url=url, error=str(exc))
            return None
        return data if isinstance(data, dict) else None

    async def lookup_ip(
        self, client: httpx.AsyncClient, ip: Optional[str]
    ) -> Optional[Tuple[str, Optional[str], Optional[str]]]:
        path = f"/{ip}/json/" if ip else "/json/"
        data = await self._get_json(client, f"{self.ip_lookup_base}{path}")
        if not data or data.get("country_code") != COLOMBIA:
            return None
        return "ip", data.get("city"), data.get("region")

    async def reverse_geocode(
        self, client: httpx.AsyncClient, latitude: float, longitude: float
    ) -> Optional[Tuple[str, Optional[str], Optional[str]]]:
        data = await self._get_json(
            client,
            self.reverse_geocode_url,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "localityLanguage": "es",
            },
        )
        if not data or data.get("countryCode") != COLOMBIA:
            return None
        return "coordinates", data.get("locality"), data.get("principalSubdivision")

    async def detect(
        self,
        store: LocationStore,
        *,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        ip: Optional[str] = None,
    ) -> Optional[DetectedLocationDTO]:
        generation = store.begin_detection()
        detected: Optional[DetectedLocationDTO] = None
        async with self._client() as client:
            lookups: List[Any] = [self.lookup_ip(client, ip)]
            if latitude is not None and longitude is not None:
                lookups.insert(0, self.reverse_geocode(client, latitude, longitude))
            tasks = [asyncio.ensure_future(lookup) for lookup in lookups]
            try:
                for finished in asyncio.as_completed(tasks):
                    result = await finished
                    if result is None:
                        continue
                    source, city, region = result
                    department = store.apply_detected(generation, city, region)
                    if department is not None:
                        detected = DetectedLocationDTO(
                            source=source, city=city, region=region, department=department
                        )
                        break
            finally:
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
        if detected is None:
            logger.info("Location could not be detected", ip=ip)
        return detected
