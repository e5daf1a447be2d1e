import logging
from typing import List, Optional

from places_finder.core.config import settings
from places_finder.core.exceptions import CascadeExhausted
from places_finder.core.fallback import first_success
from places_finder.core.geometry import bearing_degrees, cardinal_direction, distance_km
from places_finder.core.logger import logs
from places_finder.core.maneuvers import distance_label, duration_label
from places_finder.core.route_providers import BaseRouteProvider, build_route_providers
from places_finder.core.seeded_random import SplitMix64
from places_finder.models.base_model import Coordinate
from places_finder.models.route_model import RouteProviderName, RouteResult, RouteStep, TravelMode

# km/h
CRUISE_SPEED = {TravelMode.DRIVING: 50, TravelMode.WALKING: 5, TravelMode.CYCLING: 15}
APPROACH_SPEED = {TravelMode.DRIVING: 30, TravelMode.WALKING: 4, TravelMode.CYCLING: 10}

MODE_VERBS = {TravelMode.DRIVING: "driving", TravelMode.WALKING: "walking", TravelMode.CYCLING: "cycling"}

ROAD_LABELS = {
    TravelMode.DRIVING: ["Main Street", "Highway", "Boulevard", "Avenue"],
    TravelMode.CYCLING: ["bike path", "cycle lane", "shared road"],
    TravelMode.WALKING: ["sidewalk", "pedestrian path", "walkway"],
}

MID_ROUTE_TURNS = ["Turn right", "Continue straight", "Turn left", "Turn slight right", "Turn slight left"]

MAX_MID_SEGMENTS = 3
MID_SEGMENT_MIN_DISTANCE_KM = 2


def _turn_code(phrase: str) -> str:
    if "right" in phrase:
        return "turn-right"
    if "left" in phrase:
        return "turn-left"
    return "continue"


def _minutes(km: float, speed_kmh: float) -> float:
    return km / speed_kmh * 60


class RouteService:
    def __init__(self, providers: Optional[List[BaseRouteProvider]] = None):
        if providers is None:
            providers = build_route_providers(settings.ORS_API_KEY)
        self.providers = providers

    async def compute_route(
        self,
        start: Coordinate,
        end: Coordinate,
        mode: TravelMode = TravelMode.DRIVING,
        destination_name: str = "your destination",
    ) -> RouteResult:
        """
        Live providers in order, then a synthesized route. Always returns a
        route; `provider_used` says which source produced it.
        """
        mode = TravelMode(mode)
        logs.log(logging.INFO, f"🧭 Routing {mode.value} from {start.lat},{start.lng} to {end.lat},{end.lng}")

        attempts = [
            (provider.get_provider_name().value, self._provider_attempt(provider, start, end, mode))
            for provider in self.providers
        ]
        try:
            return await first_success(attempts, label="routing", accept=lambda route: bool(route.steps))
        except CascadeExhausted:
            logs.log(logging.WARNING, "⚠️ All routing providers failed, synthesizing directions")
            return self.synthesize_route(start, end, mode, destination_name)

    @staticmethod
    def _provider_attempt(provider: BaseRouteProvider, start: Coordinate, end: Coordinate, mode: TravelMode):
        async def attempt() -> RouteResult:
            return await provider.route(start, end, mode)
        return attempt

    @staticmethod
    def synthesize_route(
        start: Coordinate,
        end: Coordinate,
        mode: TravelMode,
        destination_name: str = "your destination",
    ) -> RouteResult:
        """Plausible directions from straight-line geometry, reproducible per endpoints and mode."""
        mode = TravelMode(mode)
        total = distance_km(start, end)
        bearing = bearing_degrees(start, end)
        speed = CRUISE_SPEED[mode]
        rng = SplitMix64.for_key(start.lat, start.lng, end.lat, end.lng, mode.value)

        steps = [RouteStep(
            instruction=f"Start {MODE_VERBS[mode]} from your location",
            distance_label="0 km",
            duration_label="0 min",
            maneuver="depart"
        )]

        if bearing > 180:
            initial_turn = "Turn left"
        elif 0 < bearing < 180:
            initial_turn = "Turn right"
        else:
            initial_turn = "Continue straight"
        initial_distance = min(0.5, total * 0.1)
        steps.append(RouteStep(
            instruction=f"{initial_turn} and head {cardinal_direction(bearing)} towards {destination_name}",
            distance_label=distance_label(initial_distance),
            duration_label=duration_label(_minutes(initial_distance, speed)),
            maneuver=_turn_code(initial_turn)
        ))

        if total > MID_SEGMENT_MIN_DISTANCE_KM:
            segments = min(MAX_MID_SEGMENTS, int(total // 2))
            segment_distance = total * 0.6 / segments
            for _ in range(segments):
                turn = rng.choice(MID_ROUTE_TURNS)
                road = rng.choice(ROAD_LABELS[mode])
                steps.append(RouteStep(
                    instruction=f"{turn} onto {road} and continue for {segment_distance:.1f} km",
                    distance_label=distance_label(segment_distance),
                    duration_label=duration_label(_minutes(segment_distance, speed)),
                    maneuver=_turn_code(turn)
                ))

        final_distance = max(0.1, total * 0.1)
        final_turn = "Turn right" if rng.random() > 0.5 else "Turn left"
        steps.append(RouteStep(
            instruction=f"{final_turn} towards {destination_name}",
            distance_label=distance_label(final_distance),
            duration_label=duration_label(_minutes(final_distance, APPROACH_SPEED[mode])),
            maneuver=_turn_code(final_turn)
        ))

        steps.append(RouteStep(
            instruction=f"Arrive at {destination_name}",
            distance_label="0 km",
            duration_label="0 min",
            maneuver="arrive"
        ))

        return RouteResult(
            total_distance_km=round(total, 1),
            total_duration_minutes=round(_minutes(total, speed)),
            steps=steps,
            provider_used=RouteProviderName.FALLBACK
        )
