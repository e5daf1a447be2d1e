"""
Routing Provider Implementations
Each provider turns its own response shape into a RouteResult with
normalized turn-by-turn steps.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from places_finder.core.config import settings
from places_finder.core.logger import logs
from places_finder.core.maneuvers import (
    distance_label,
    duration_label,
    normalize_instruction,
    ors_maneuver,
    osrm_maneuver,
)
from places_finder.models.base_model import Coordinate
from places_finder.models.route_model import RouteProviderName, RouteResult, RouteStep, TravelMode


def road_name(name) -> Optional[str]:
    """Providers use "" or "-" for unnamed ways."""
    if not name or name == "-":
        return None
    return str(name)


class BaseRouteProvider(ABC):
    """Base class for all routing providers"""

    profiles: dict = {}

    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {"User-Agent": settings.USER_AGENT}

    @abstractmethod
    async def route(self, start: Coordinate, end: Coordinate, mode: TravelMode) -> RouteResult:
        """Return a route or raise; an empty route counts as a failure"""
        pass

    @abstractmethod
    def get_provider_name(self) -> RouteProviderName:
        pass

    async def _get(self, url: str, params: Optional[dict] = None) -> dict:
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.get(url, params=params, headers=self.headers, timeout=self.timeout)
                response.raise_for_status()
                return response.json()
            except Exception as e:
                logs.log(logging.WARNING, f"{self.get_provider_name().value} routing error: {str(e)}")
                raise


class OpenRouteServiceProvider(BaseRouteProvider):
    profiles = {
        TravelMode.DRIVING: "driving-car",
        TravelMode.WALKING: "foot-walking",
        TravelMode.CYCLING: "cycling-regular",
    }

    def __init__(self, api_key: str, base_url: Optional[str] = None, timeout: float = 10.0, transport=None):
        super().__init__(base_url or settings.ORS_URL, timeout, transport)
        self.api_key = api_key

    async def route(self, start: Coordinate, end: Coordinate, mode: TravelMode) -> RouteResult:
        data = await self._get(
            f"{self.base_url}/{self.profiles[mode]}",
            params={
                "api_key": self.api_key,
                "start": f"{start.lng},{start.lat}",
                "end": f"{end.lng},{end.lat}",
            },
        )
        features = data.get("features") or []
        if not features:
            raise ValueError("OpenRouteService returned no route")

        segment = features[0]["properties"]["segments"][0]
        steps = []
        for step in segment.get("steps", []):
            maneuver = ors_maneuver(step.get("type"))
            road = road_name(step.get("name"))
            # without a road name the provider text is the only place it survives
            instruction = (
                normalize_instruction(step.get("instruction"), maneuver, road)
                if road else normalize_instruction(step.get("instruction"))
            )
            steps.append(RouteStep(
                instruction=instruction,
                distance_label=distance_label(step.get("distance", 0) / 1000),
                duration_label=duration_label(step.get("duration", 0) / 60),
                maneuver=maneuver
            ))

        return RouteResult(
            total_distance_km=round(segment["distance"] / 1000, 1),
            total_duration_minutes=round(segment["duration"] / 60),
            steps=steps,
            provider_used=self.get_provider_name()
        )

    def get_provider_name(self) -> RouteProviderName:
        return RouteProviderName.OPENROUTESERVICE


class OSRMProvider(BaseRouteProvider):
    profiles = {
        TravelMode.DRIVING: "car",
        TravelMode.WALKING: "foot",
        TravelMode.CYCLING: "bike",
    }

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0, transport=None):
        super().__init__(base_url or settings.OSRM_URL, timeout, transport)

    async def route(self, start: Coordinate, end: Coordinate, mode: TravelMode) -> RouteResult:
        data = await self._get(
            f"{self.base_url}/{self.profiles[mode]}/{start.lng},{start.lat};{end.lng},{end.lat}",
            params={"steps": "true", "overview": "false"},
        )
        routes = data.get("routes") or []
        if data.get("code", "Ok") != "Ok" or not routes:
            raise ValueError(f"OSRM returned no route ({data.get('code')})")

        route = routes[0]
        steps = []
        for leg in route.get("legs", []):
            for step in leg.get("steps", []):
                steps.append(self._to_step(step))

        return RouteResult(
            total_distance_km=round(route["distance"] / 1000, 1),
            total_duration_minutes=round(route["duration"] / 60),
            steps=steps,
            provider_used=self.get_provider_name()
        )

    @staticmethod
    def _to_step(step: dict) -> RouteStep:
        maneuver_info = step.get("maneuver") or {}
        step_type = maneuver_info.get("type")
        modifier = maneuver_info.get("modifier")
        code = osrm_maneuver(step_type, modifier)

        road = road_name(step.get("name"))
        text = " ".join(p for p in (step_type, modifier) if p)
        if road:
            text = f"{text} onto {road}"

        return RouteStep(
            instruction=normalize_instruction(text, code, road),
            distance_label=distance_label(step.get("distance", 0) / 1000),
            duration_label=duration_label(step.get("duration", 0) / 60),
            maneuver=code or "continue"
        )

    def get_provider_name(self) -> RouteProviderName:
        return RouteProviderName.OSRM


def build_route_providers(
    ors_api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[BaseRouteProvider]:
    """OpenRouteService first when a key is configured, then OSRM"""
    timeout = timeout or settings.ROUTE_TIMEOUT
    providers: List[BaseRouteProvider] = []
    if ors_api_key:
        providers.append(OpenRouteServiceProvider(ors_api_key, timeout=timeout, transport=transport))
    else:
        logs.log(logging.INFO, "No OpenRouteService API key configured, skipping it")
    providers.append(OSRMProvider(timeout=timeout, transport=transport))
    return providers
