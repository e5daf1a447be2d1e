import httpx
import logging
from typing import Dict, List, Optional

from places_finder.core.categories import LIVE_QUERY_FILTERS, PLACE_CATEGORIES, category_for_tags, empty_categories
from places_finder.core.config import settings
from places_finder.core.exceptions import CascadeExhausted
from places_finder.core.fallback import first_success
from places_finder.core.geometry import distance_km
from places_finder.core.logger import logs
from places_finder.core.seeded_random import SplitMix64
from places_finder.models.base_model import Coordinate
from places_finder.models.places_model import Place, SourceKind
from places_finder.services.Geocoding_service import GeocodingService

MAX_QUERY_RADIUS_M = 1500
MAX_RAW_RESULTS = 25
SERVER_TIMEOUT_S = 8
MAX_PER_CATEGORY = 8
MAX_ENRICH_LOOKUPS = 15
NO_ADDRESS = "Address not available"


def validate_radius(radius_km: float) -> None:
    if not 1 <= radius_km <= 50:
        raise ValueError(f"radius_km must be between 1 and 50, got {radius_km}")


def build_overpass_query(center: Coordinate, radius_km: float) -> str:
    radius_m = int(min(radius_km * 1000, MAX_QUERY_RADIUS_M))
    around = f"(around:{radius_m},{center.lat},{center.lng})"
    clauses = "\n".join(
        f'  node["{key}"~"^({values})"]{around};' for key, values in LIVE_QUERY_FILTERS
    )
    return f"[out:json][timeout:{SERVER_TIMEOUT_S}];\n(\n{clauses}\n);\nout center {MAX_RAW_RESULTS};"


def format_osm_address(tags: Optional[dict]) -> str:
    if not tags:
        return NO_ADDRESS
    parts = [
        tags[key]
        for key in ("addr:housenumber", "addr:street", "addr:suburb", "addr:city", "addr:state")
        if tags.get(key)
    ]
    if parts:
        return ", ".join(parts)
    if tags.get("name"):
        return f"Near {tags['name']}"
    return NO_ADDRESS


def needs_address(place: Place) -> bool:
    return not place.address or place.address == NO_ADDRESS or place.address.startswith("Near")


class OverpassPlacesSource:
    """Live places from the Overpass API, tried across mirrors in order."""

    def __init__(
        self,
        geocoder: GeocodingService,
        mirrors: Optional[List[str]] = None,
        mirror_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.geocoder = geocoder
        self.mirrors = list(mirrors or settings.OVERPASS_MIRRORS)
        self.mirror_timeout = mirror_timeout or settings.OVERPASS_MIRROR_TIMEOUT
        self.headers = {"User-Agent": settings.USER_AGENT}
        self.transport = transport

    async def fetch_live(self, center: Coordinate, radius_km: float) -> Dict[str, List[Place]]:
        """
        Query mirrors until one returns elements. Every category is present
        in the result; all-empty means no live data, which is not an error.
        """
        validate_radius(radius_km)
        logs.log(logging.INFO, f"🗺️ Searching Overpass around {center.lat},{center.lng} with radius {radius_km}km")
        query = build_overpass_query(center, radius_km)

        attempts = [(url, self._mirror_attempt(url, query)) for url in self.mirrors]
        try:
            elements = await first_success(attempts, label="Overpass", accept=bool)
        except CascadeExhausted:
            logs.log(logging.WARNING, "⚠️ All Overpass mirrors failed, returning empty results")
            return empty_categories()

        logs.log(logging.INFO, f"✅ Found {len(elements)} elements from Overpass")
        return self.categorize(elements, center, radius_km)

    def _mirror_attempt(self, url: str, query: str):
        async def attempt() -> list:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    url,
                    data={"data": query},
                    headers=self.headers,
                    timeout=self.mirror_timeout
                )
                response.raise_for_status()
                data = response.json()
            return data.get("elements") or []
        return attempt

    def categorize(self, elements: list, center: Coordinate, radius_km: float) -> Dict[str, List[Place]]:
        results = empty_categories()

        for element in elements:
            try:
                place = self._to_place(element, center, radius_km)
            except (TypeError, ValueError, AttributeError) as e:
                logs.log(logging.WARNING, f"Skipping malformed Overpass element: {str(e)}")
                continue
            if place is not None:
                results[place.category_key].append(place)

        for key in results:
            results[key] = sorted(results[key], key=lambda p: p.distance_km)[:MAX_PER_CATEGORY]
            if results[key]:
                logs.log(logging.DEBUG, f"📍 {key}: {len(results[key])} live places")
        return results

    def _to_place(self, element: dict, center: Coordinate, radius_km: float) -> Optional[Place]:
        tags = element.get("tags") or {}
        center_info = element.get("center") or {}
        lat = element.get("lat", center_info.get("lat"))
        lng = element.get("lon", center_info.get("lon"))
        if lat is None or lng is None:
            return None

        category_key = category_for_tags(tags)
        if category_key is None:
            return None

        coordinate = Coordinate(lat=float(lat), lng=float(lng))
        distance = distance_km(center, coordinate)
        if distance > radius_km:
            return None

        category = PLACE_CATEGORIES[category_key]
        osm_id = element.get("id")
        address = format_osm_address(tags)
        return Place(
            id=f"osm_{category_key}_{osm_id}",
            name=tags.get("name") or tags.get("brand") or tags.get("operator") or category.display_name,
            category_key=category_key,
            display_category_name=category.display_name,
            icon=category.icon,
            coordinate=coordinate,
            distance_km=round(distance, 2),
            address=address,
            city=tags.get("addr:city"),
            state=tags.get("addr:state"),
            phone=tags.get("phone") or tags.get("contact:phone"),
            website=tags.get("website") or tags.get("contact:website"),
            opening_hours=tags.get("opening_hours"),
            rating=round(SplitMix64.for_key("osm", osm_id).uniform(3.5, 5.0), 1),
            source_kind=SourceKind.LIVE,
            verified_address=address != NO_ADDRESS and not address.startswith("Near"),
            osm_id=osm_id
        )

    async def enrich_addresses(self, places: Dict[str, List[Place]]) -> Dict[str, List[Place]]:
        """Fill missing or guessed addresses, at most MAX_ENRICH_LOOKUPS lookups in total."""
        lookups = 0
        enriched = {}
        for key, category_places in places.items():
            updated = []
            for place in category_places:
                if needs_address(place) and lookups < MAX_ENRICH_LOOKUPS:
                    lookups += 1
                    info = await self.geocoder.reverse_geocode_cached(place.coordinate)
                    if info is not None and info.address:
                        place = place.model_copy(update={
                            "address": info.address,
                            "city": info.city,
                            "state": info.state,
                            "country": info.country,
                            "verified_address": True,
                        })
                updated.append(place)
            enriched[key] = updated
        logs.log(logging.INFO, f"🏠 Address enrichment used {lookups} lookups")
        return enriched
