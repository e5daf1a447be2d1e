import asyncio
import logging
from typing import Dict, List, Optional

from places_finder.core.config import settings
from places_finder.core.logger import logs
from places_finder.models.base_model import Coordinate
from places_finder.models.places_model import Place, PlacesSearchResult, ResultSource
from places_finder.services.Geocoding_service import GeocodingService
from places_finder.services.Merge_service import finalize, has_synthetic, merge_places
from places_finder.services.Overpass_service import OverpassPlacesSource, validate_radius
from places_finder.services.Synthetic_service import SyntheticPlacesGenerator


class PlacesService:
    def __init__(
        self,
        geocoder: GeocodingService,
        live_source: Optional[OverpassPlacesSource] = None,
        generator: Optional[SyntheticPlacesGenerator] = None,
        live_budget: Optional[float] = None,
    ):
        self.geocoder = geocoder
        self.live_source = live_source or OverpassPlacesSource(geocoder)
        self.generator = generator or SyntheticPlacesGenerator(geocoder)
        self.live_budget = live_budget or settings.PLACES_LIVE_BUDGET

    async def search_places(self, center: Coordinate, radius_km: float = 10) -> PlacesSearchResult:
        """
        Every category comes back populated, nearest first, at most ten each.

        Synthetic generation starts right away so it is ready whichever way
        the live fetch goes. The live fetch only gets `live_budget` seconds.
        """
        validate_radius(radius_km)
        logs.log(logging.INFO, f"🔍 Searching places near {center.lat}, {center.lng} within {radius_km}km")

        synthetic_task = asyncio.create_task(self._synthetic(center, radius_km))

        try:
            live = await asyncio.wait_for(
                self.live_source.fetch_live(center, radius_km), timeout=self.live_budget
            )
        except asyncio.TimeoutError:
            logs.log(logging.WARNING, f"⏱️ Live places took longer than {self.live_budget}s, using synthetic places")
            live = {}
        except Exception as e:
            logs.log(logging.ERROR, f"Live places failed, using synthetic places: {str(e)}")
            live = {}

        synthetic = await synthetic_task
        live_count = sum(len(places) for places in live.values())
        if live_count == 0:
            logs.log(logging.INFO, "📦 No live places, returning synthetic results")
            return PlacesSearchResult(
                center=center,
                radius_km=radius_km,
                categories={key: finalize(places) for key, places in synthetic.items()},
                source=ResultSource.SYNTHETIC
            )

        live = await self.live_source.enrich_addresses(live)
        merged = merge_places(live, synthetic)
        source = ResultSource.MIXED if has_synthetic(merged) else ResultSource.LIVE
        logs.log(logging.INFO, f"✅ Found {live_count} live places, result source: {source.value}")

        return PlacesSearchResult(center=center, radius_km=radius_km, categories=merged, source=source)

    async def _synthetic(self, center: Coordinate, radius_km: float) -> Dict[str, List[Place]]:
        try:
            return await self.generator.generate_verified(center, radius_km)
        except Exception as e:
            logs.log(logging.ERROR, f"Verified-style generation failed, using deterministic places: {str(e)}")
            return self.generator.generate_deterministic(center, radius_km)
