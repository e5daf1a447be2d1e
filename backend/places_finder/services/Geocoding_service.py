import asyncio
import httpx
import logging
import math
from typing import List, Optional

from places_finder.core.cache import ReverseGeocodeCache
from places_finder.core.config import settings
from places_finder.core.exceptions import GeocodeError
from places_finder.core.geometry import KM_PER_DEGREE_LAT, distance_km
from places_finder.core.logger import logs
from places_finder.models.base_model import AreaInfo, Coordinate
from places_finder.models.geocode_model import GeocodeResult
from places_finder.models.places_model import PlaceSuggestion

MIN_SUGGESTION_QUERY = 2


class GeocodingService:
    """Forward/reverse geocoding and place suggestions through Nominatim."""

    def __init__(
        self,
        cache: Optional[ReverseGeocodeCache] = None,
        base_url: Optional[str] = None,
        country_code: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cache = cache if cache is not None else ReverseGeocodeCache(settings.REVERSE_CACHE_CAPACITY)
        self.base_url = (base_url or settings.NOMINATIM_URL).rstrip("/")
        self.country_code = settings.COUNTRY_CODE if country_code is None else country_code
        self.headers = {"User-Agent": settings.USER_AGENT}
        self.timeout = settings.GEOCODE_TIMEOUT
        self.transport = transport

    async def _search(self, client: httpx.AsyncClient, params: dict, scoped: bool) -> list:
        query = dict(params)
        if scoped and self.country_code:
            query["countrycodes"] = self.country_code
        response = await client.get(
            f"{self.base_url}/search", params=query, headers=self.headers, timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()
        return data if isinstance(data, list) else []

    async def _search_with_fallback(self, params: dict) -> list:
        """Country-scoped search, retried once without the country filter when empty."""
        async with httpx.AsyncClient(transport=self.transport) as client:
            results = await self._search(client, params, scoped=True)
            if not results and self.country_code:
                logs.log(logging.INFO, "🔁 Retrying search without country filter")
                results = await self._search(client, params, scoped=False)
        return results

    async def forward_geocode(self, text: str) -> GeocodeResult:
        query = (text or "").strip()
        if not query:
            raise GeocodeError(query)

        params = {"q": query, "format": "json", "limit": 1, "addressdetails": 1}
        try:
            results = await self._search_with_fallback(params)
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Nominatim geocoding failed for '{query}': {str(e)}")
            raise GeocodeError(query) from e

        if not results:
            raise GeocodeError(query)

        first = results[0]
        return GeocodeResult(
            coordinate=Coordinate(lat=float(first["lat"]), lng=float(first["lon"])),
            display_name=first.get("display_name") or query
        )

    async def reverse_geocode(self, coordinate: Coordinate) -> AreaInfo:
        params = {
            "lat": coordinate.lat,
            "lon": coordinate.lng,
            "format": "json",
            "addressdetails": 1,
        }
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/reverse", params=params, headers=self.headers, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        address = data.get("address") if isinstance(data, dict) else None
        if not address:
            raise GeocodeError(coordinate.rounded_key())

        return AreaInfo(
            address=data.get("display_name"),
            city=address.get("city") or address.get("town") or address.get("village") or address.get("hamlet"),
            state=address.get("state"),
            country=address.get("country")
        )

    async def reverse_geocode_cached(self, coordinate: Coordinate, timeout_ms: Optional[int] = None) -> Optional[AreaInfo]:
        """
        Cached reverse lookup with a hard deadline.

        Returns None on timeout or on any provider failure; callers skip
        enrichment in that case.
        """
        cached = self.cache.get(coordinate)
        if cached is not None:
            return cached

        timeout_ms = settings.REVERSE_LOOKUP_TIMEOUT_MS if timeout_ms is None else timeout_ms
        try:
            info = await asyncio.wait_for(self.reverse_geocode(coordinate), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError:
            logs.log(logging.DEBUG, f"Reverse geocode timed out after {timeout_ms}ms for {self.cache.key_for(coordinate)}")
            return None
        except (GeocodeError, httpx.HTTPError, ValueError) as e:
            logs.log(logging.DEBUG, f"Reverse geocode skipped for {self.cache.key_for(coordinate)}: {str(e)}")
            return None

        self.cache.put(coordinate, info)
        return info

    async def suggest_places(
        self,
        query: str,
        limit: int = 15,
        bias_center: Optional[Coordinate] = None,
        bias_radius_km: float = 25.0,
    ) -> List[PlaceSuggestion]:
        query = (query or "").strip()
        if len(query) < MIN_SUGGESTION_QUERY:
            return []

        params = {
            "q": query,
            "format": "json",
            "limit": limit,
            "addressdetails": 1,
            "extratags": 1,
            "dedupe": 1,
        }
        if bias_center is not None:
            lat_delta = bias_radius_km / KM_PER_DEGREE_LAT
            lng_delta = bias_radius_km / (KM_PER_DEGREE_LAT * max(math.cos(math.radians(bias_center.lat)), 1e-6))
            # Nominatim viewbox order is left,top,right,bottom
            params["viewbox"] = ",".join(str(v) for v in (
                bias_center.lng - lng_delta,
                bias_center.lat + lat_delta,
                bias_center.lng + lng_delta,
                bias_center.lat - lat_delta,
            ))
            params["bounded"] = 1

        logs.log(logging.INFO, f"🔍 Fetching suggestions for: '{query}'")
        try:
            results = await self._search_with_fallback(params)
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.WARNING, f"❌ Place suggestions failed: {str(e)}")
            return []

        suggestions = []
        for item in results:
            try:
                suggestions.append(self._to_suggestion(item))
            except (KeyError, TypeError, ValueError):
                continue

        if bias_center is not None:
            suggestions.sort(key=lambda s: distance_km(bias_center, s.coordinate))
        return suggestions

    def _to_suggestion(self, item: dict) -> PlaceSuggestion:
        address = item.get("address") or {}
        display_name = item.get("display_name") or ""
        short_name = (
            item.get("name")
            or display_name.split(",")[0].strip()
            or address.get("city")
            or address.get("town")
            or address.get("village")
            or address.get("state")
            or "Unknown Place"
        )

        context = []
        if address.get("city") and address["city"] != short_name:
            context.append(address["city"])
        if address.get("state") and address["state"] != short_name:
            context.append(address["state"])
        if address.get("country") and address.get("country_code", "").lower() != self.country_code:
            context.append(address["country"])

        return PlaceSuggestion(
            id=str(item.get("place_id", "")),
            name=display_name or short_name,
            short_name=short_name,
            context=", ".join(context),
            coordinate=Coordinate(lat=float(item["lat"]), lng=float(item["lon"])),
            place_type=item.get("type"),
            place_class=item.get("class"),
            importance=float(item.get("importance") or 0.0)
        )
