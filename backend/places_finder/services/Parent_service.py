import logging
from typing import List, Optional

from places_finder.core.logger import logs
from places_finder.models.base_model import AreaInfo, Coordinate
from places_finder.models.geocode_model import GeocodeResult
from places_finder.models.location_model import AcquisitionMethod, LocationFix, SensorReading
from places_finder.models.places_model import PlaceSuggestion, PlacesSearchResult
from places_finder.models.route_model import RouteResult, TravelMode
from places_finder.repos.local_repo import RecentSearchRepository
from places_finder.services.Geocoding_service import GeocodingService
from places_finder.services.Location_service import LocationService, ReportedPositionSensor
from places_finder.services.Places_service import PlacesService
from places_finder.services.Route_service import RouteService


class PlacesFinder:
    """
    Entry point for consumers: ties location, geocoding, places and
    routing together. Child services are built from settings
    unless injected.
    """

    def __init__(
        self,
        location_service: Optional[LocationService] = None,
        geocoder: Optional[GeocodingService] = None,
        places_service: Optional[PlacesService] = None,
        route_service: Optional[RouteService] = None,
        recent_repo: Optional[RecentSearchRepository] = None,
    ):
        self.geocoder = geocoder or GeocodingService()
        self.location_service = location_service or LocationService()
        self.places_service = places_service or PlacesService(self.geocoder)
        self.route_service = route_service or RouteService()
        self.recent_repo = recent_repo or RecentSearchRepository()

    async def acquire_location(self, reading: Optional[SensorReading] = None) -> LocationFix:
        """
        Run the sensor tiers, or IP estimation when there is no sensor.
        A `reading` relayed by a client stands in for the device sensor.
        """
        if reading is None:
            return await self.location_service.acquire_location()

        relayed = LocationService(
            sensor=ReportedPositionSensor(reading),
            ip_providers=self.location_service.ip_providers,
            secure_context=self.location_service.secure_context
        )
        return await relayed.acquire_location()

    async def acquire_ip_location(self) -> LocationFix:
        return await self.location_service.acquire_ip_location()

    async def forward_geocode(self, text: str) -> GeocodeResult:
        result = await self.geocoder.forward_geocode(text)
        await self.recent_repo.add(text.strip())
        logs.log(logging.INFO, f"📍 Geocoded '{text}' to {result.coordinate.lat}, {result.coordinate.lng}")
        return result

    async def locate_address(self, text: str) -> LocationFix:
        """Manual address entry as a location fix."""
        result = await self.forward_geocode(text)
        return LocationFix(
            coordinate=result.coordinate,
            method=AcquisitionMethod.GEOCODED,
            city_label=result.display_name
        )

    async def reverse_geocode(self, coordinate: Coordinate) -> AreaInfo:
        return await self.geocoder.reverse_geocode(coordinate)

    async def search_places(self, center: Coordinate, radius_km: float = 10) -> PlacesSearchResult:
        return await self.places_service.search_places(center, radius_km)

    async def compute_route(
        self,
        start: Coordinate,
        end: Coordinate,
        mode: TravelMode = TravelMode.DRIVING,
        destination_name: str = "your destination",
    ) -> RouteResult:
        return await self.route_service.compute_route(start, end, mode, destination_name)

    async def suggest_places(
        self,
        query: str,
        limit: int = 15,
        bias_center: Optional[Coordinate] = None,
    ) -> List[PlaceSuggestion]:
        return await self.geocoder.suggest_places(query, limit=limit, bias_center=bias_center)

    async def recent_searches(self) -> List[str]:
        return await self.recent_repo.list()
