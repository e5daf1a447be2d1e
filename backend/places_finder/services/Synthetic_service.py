"""
Synthetic places used when live data is thin or slow.

Two strategies:
- `generate_verified`: the primary fallback. Names and addresses follow the
  city the center reverse-geocodes to, and the nearest places in each
  category get a real address from a bounded number of lookups.
- `generate_deterministic`: every value comes from a SplitMix64 stream
  keyed by (lat, lng, category, index), so identical inputs always give
  identical output.

The radius is a target envelope, not a hard bound: projection error and
angular jitter can put a point slightly past it.
"""
import asyncio
import httpx
import logging
import math
import random
import re
from typing import Dict, List, Optional

from places_finder.core import business_names as names
from places_finder.core.categories import PLACE_CATEGORIES
from places_finder.core.config import settings
from places_finder.core.exceptions import GeocodeError
from places_finder.core.geometry import distance_km, offset_coordinate
from places_finder.core.logger import logs
from places_finder.core.seeded_random import SplitMix64
from places_finder.models.base_model import AreaInfo, Coordinate
from places_finder.models.places_model import CategoryDefinition, Place, SourceKind
from places_finder.services.Geocoding_service import GeocodingService

VERIFIED_PER_CATEGORY = 8
MIN_SYNTHETIC_RADIUS_KM = 0.5
MAX_REFINE_LOOKUPS = 12
REFINE_PER_CATEGORY = 2
DETERMINISTIC_MAX_DISTANCE_KM = 15

UNKNOWN_AREA = AreaInfo(city="Unknown City", state="Unknown State", country="India")


def _website_for(name: str) -> str:
    return f"https://www.{re.sub(r'[^a-z0-9]', '', name.lower())}.com"


class SyntheticPlacesGenerator:
    def __init__(self, geocoder: GeocodingService, rng: Optional[random.Random] = None):
        self.geocoder = geocoder
        self.rng = rng or random.Random()

    # --- Verified-style generator ---

    async def generate_verified(self, center: Coordinate, radius_km: float) -> Dict[str, List[Place]]:
        logs.log(logging.INFO, "🎯 Generating verified-style places")
        area = await self._area_info(center)

        places = {
            key: self._verified_for_category(category, center, radius_km, area)
            for key, category in PLACE_CATEGORIES.items()
        }
        return await self._refine_addresses(places)

    async def _area_info(self, center: Coordinate) -> AreaInfo:
        try:
            return await asyncio.wait_for(
                self.geocoder.reverse_geocode(center), timeout=settings.AREA_LOOKUP_TIMEOUT
            )
        except (asyncio.TimeoutError, GeocodeError, httpx.HTTPError, ValueError) as e:
            logs.log(logging.WARNING, f"Could not get area info: {e!r}")
            return UNKNOWN_AREA

    def _verified_for_category(
        self,
        category: CategoryDefinition,
        center: Coordinate,
        radius_km: float,
        area: AreaInfo,
    ) -> List[Place]:
        templates = names.business_templates(category.key, area.city)
        hours = names.CATEGORY_HOURS.get(category.key, names.DEFAULT_HOURS)
        max_radius = max(MIN_SYNTHETIC_RADIUS_KM, radius_km * 0.8)
        city = area.city or "City"

        places = []
        for i in range(VERIFIED_PER_CATEGORY):
            angle = (i / VERIFIED_PER_CATEGORY) * 2 * math.pi + (self.rng.random() - 0.5) * 0.5
            distance = self.rng.uniform(MIN_SYNTHETIC_RADIUS_KM, max_radius)
            coordinate = offset_coordinate(center, distance, angle)
            name = templates[i % len(templates)]
            house_no = self.rng.randint(1, 999)
            address = f"{house_no}, {names.STREETS[i % len(names.STREETS)]}, {names.AREAS[i % len(names.AREAS)]}, {city}"

            places.append(Place(
                id=f"verified_{category.key}_{center.lat:.4f}_{center.lng:.4f}_{i}",
                name=name,
                category_key=category.key,
                display_category_name=category.display_name,
                icon=category.icon,
                coordinate=coordinate,
                distance_km=round(distance_km(center, coordinate), 2),
                address=address,
                city=area.city,
                state=area.state,
                country=area.country,
                phone=f"{self.rng.choice(names.PHONE_PREFIXES)}{self.rng.randint(10000000, 99999999)}",
                website=_website_for(name) if self.rng.random() > 0.7 else None,
                opening_hours=self.rng.choice(hours),
                rating=round(self.rng.uniform(3.5, 5.0), 1),
                source_kind=SourceKind.SYNTHETIC,
                verified_address=False
            ))

        return sorted(places, key=lambda p: p.distance_km)

    async def _refine_addresses(self, places: Dict[str, List[Place]]) -> Dict[str, List[Place]]:
        """Give the nearest places per category a real address, within the lookup caps."""
        lookups = 0
        for key, category_places in places.items():
            for i in range(min(REFINE_PER_CATEGORY, len(category_places))):
                if lookups >= MAX_REFINE_LOOKUPS:
                    return places
                place = category_places[i]
                info = await self.geocoder.reverse_geocode_cached(place.coordinate)
                lookups += 1
                if info is not None and info.address:
                    category_places[i] = place.model_copy(update={
                        "address": info.address,
                        "city": info.city or place.city,
                        "state": info.state or place.state,
                        "country": info.country or place.country,
                        "verified_address": True,
                    })
        return places

    # --- Deterministic generator ---

    def generate_deterministic(self, center: Coordinate, radius_km: float) -> Dict[str, List[Place]]:
        results = {
            key: self.deterministic_for_category(center, key, radius_km)
            for key in PLACE_CATEGORIES
        }
        total = sum(len(p) for p in results.values())
        logs.log(logging.INFO, f"📊 Generated {total} deterministic places for {center.lat:.4f}, {center.lng:.4f} within {radius_km}km")
        return results

    def deterministic_for_category(self, center: Coordinate, category_key: str, radius_km: float) -> List[Place]:
        category = PLACE_CATEGORIES[category_key]
        name_pool = names.regional_names(center.lat, center.lng, category_key, category.display_name)
        city, areas = self._deterministic_city(center)
        max_distance = min(radius_km * 0.8, DETERMINISTIC_MAX_DISTANCE_KM)

        count = SplitMix64.for_key(center.lat, center.lng, category_key, "count").randint(6, 10)
        places = []
        for i in range(count):
            rng = SplitMix64.for_key(center.lat, center.lng, category_key, i)
            base_name = rng.choice(name_pool)
            angle = rng.random() * 2 * math.pi
            distance = rng.random() * max_distance + 0.1
            coordinate = offset_coordinate(center, distance, angle)
            name = f"{base_name} {i + 1}" if i > 0 else base_name

            house_no = rng.randint(1, 999)
            address = f"{house_no}, {rng.choice(areas)}, {rng.choice(names.LANDMARKS)}, {city}"
            phone = f"{rng.choice(names.PHONE_PREFIXES)}{rng.randint(10000000, 99999999)}" if rng.random() > 0.3 else None
            website = _website_for(base_name) if rng.random() > 0.7 else None

            places.append(Place(
                id=f"mock_{category_key}_{round(center.lat * 1000)}_{round(center.lng * 1000)}_{i}",
                name=name,
                category_key=category_key,
                display_category_name=category.display_name,
                icon=category.icon,
                coordinate=coordinate,
                distance_km=round(distance_km(center, coordinate), 2),
                address=address,
                city=city,
                phone=phone,
                website=website,
                opening_hours=rng.choice(names.GENERIC_HOURS),
                rating=round(rng.uniform(3.0, 5.0), 1),
                source_kind=SourceKind.SYNTHETIC,
                verified_address=False,
                is_popular=rng.random() > 0.7
            ))

        return sorted(places, key=lambda p: p.distance_km)

    @staticmethod
    def _deterministic_city(center: Coordinate):
        region = names.metro_region(center.lat, center.lng)
        if region is not None:
            return region[0], region[6]
        city = SplitMix64.for_key(center.lat, center.lng, "city").choice(names.FALLBACK_CITIES)
        return city, names.GENERIC_AREAS
