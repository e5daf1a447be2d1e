import httpx
import pytest

from conftest import HostRouter
from places_finder.core.geometry import distance_km
from places_finder.core.maneuvers import duration_label, normalize_instruction, ors_maneuver, osrm_maneuver
from places_finder.core.route_providers import OpenRouteServiceProvider, OSRMProvider, build_route_providers
from places_finder.models.base_model import Coordinate
from places_finder.models.route_model import RouteProviderName, TravelMode
from places_finder.services.Route_service import RouteService

INDIA_GATE = Coordinate(lat=28.6129, lng=77.2295)
# ~5 km south of Connaught Place
LODHI_COLONY = Coordinate(lat=28.5689, lng=77.2190)

ORS_RESPONSE = {
    "features": [{
        "properties": {
            "segments": [{
                "distance": 2400.0,
                "duration": 420.0,
                "steps": [
                    {"instruction": "Head south on Janpath", "name": "Janpath", "distance": 800.0, "duration": 120.0, "type": 11},
                    {"instruction": "Turn left onto Rajpath", "name": "Rajpath", "distance": 1600.0, "duration": 300.0, "type": 0},
                    {"instruction": "Arrive at India Gate", "name": "-", "distance": 0.0, "duration": 0.0, "type": 10},
                ],
            }],
        },
    }],
}

OSRM_RESPONSE = {
    "code": "Ok",
    "routes": [{
        "distance": 2400.0,
        "duration": 480.0,
        "legs": [{
            "steps": [
                {"distance": 900.0, "duration": 180.0, "name": "Janpath", "maneuver": {"type": "depart"}},
                {"distance": 1500.0, "duration": 300.0, "name": "Rajpath", "maneuver": {"type": "turn", "modifier": "slight right"}},
                {"distance": 0.0, "duration": 0.0, "name": "", "maneuver": {"type": "arrive"}},
            ],
        }],
    }],
}


def _providers(router, ors_key=None):
    return build_route_providers(ors_key, timeout=5, transport=router.transport())


@pytest.mark.parametrize("code, phrase", [
    ("turn-left", "Turn left"),
    ("turn-sharp-right", "Turn sharp right"),
    ("fork-left", "Keep left at the fork"),
    ("roundabout-exit", "Exit the roundabout"),
    ("uturn", "Make a U-turn"),
    ("depart", "Start your journey"),
    ("arrive", "You have arrived at your destination"),
])
def test_known_maneuver_wins(code, phrase):
    assert normalize_instruction("whatever the provider said", code) == phrase


@pytest.mark.parametrize("code, road, expected", [
    ("turn-left", "MG Road", "Turn left onto MG Road"),
    ("depart", "Janpath", "Start your journey on Janpath"),
    ("arrive", "Janpath", "You have arrived at your destination"),
    ("turn-right", None, "Turn right"),
])
def test_known_maneuver_keeps_road_name(code, road, expected):
    assert normalize_instruction("whatever the provider said", code, road) == expected


@pytest.mark.parametrize("minutes, label", [
    (0.4, "0 min"),
    (59.4, "59 min"),
    (60, "1h 0m"),
    (185, "3h 5m"),
])
def test_duration_label(minutes, label):
    assert duration_label(minutes) == label


@pytest.mark.parametrize("text, expected", [
    ("", "Continue straight"),
    (None, "Continue straight"),
    ("TURN LEFT onto MG Road", "Turn left onto mg road"),
    ("continue on ring road", "Continue on ring road"),
    ("bear right at the fork", "Bear Turn right at the fork"),
    ("head north", "Head north"),
])
def test_lexical_cleanup(text, expected):
    assert normalize_instruction(text) == expected


@pytest.mark.parametrize("step_type, modifier, code", [
    ("turn", "left", "turn-left"),
    ("turn", "sharp right", "turn-sharp-right"),
    ("turn", "slight left", "turn-slight-left"),
    ("fork", "slight right", "fork-right"),
    ("off ramp", "left", "ramp-left"),
    ("roundabout", "right", "roundabout-enter"),
    ("exit roundabout", "right", "roundabout-exit"),
    ("continue", "uturn", "uturn"),
    ("new name", "straight", "continue"),
    ("depart", None, "depart"),
    ("arrive", "left", "arrive"),
    ("notification", None, None),
])
def test_osrm_maneuver(step_type, modifier, code):
    assert osrm_maneuver(step_type, modifier) == code


def test_ors_maneuver():
    assert ors_maneuver(1) == "turn-right"
    assert ors_maneuver(12) == "fork-left"
    assert ors_maneuver(42) == "continue"
    assert ors_maneuver(None) == "continue"


def test_ors_skipped_without_key():
    providers = build_route_providers(None)
    assert [type(p) for p in providers] == [OSRMProvider]

    providers = build_route_providers("secret")
    assert [type(p) for p in providers] == [OpenRouteServiceProvider, OSRMProvider]


@pytest.mark.asyncio
async def test_openrouteservice_route(new_delhi):
    router = HostRouter({"api.openrouteservice.org": lambda request: httpx.Response(200, json=ORS_RESPONSE)})

    route = await RouteService(_providers(router, "secret")).compute_route(new_delhi, INDIA_GATE, TravelMode.WALKING)

    assert route.provider_used == RouteProviderName.OPENROUTESERVICE
    assert not route.degraded
    assert route.total_distance_km == 2.4
    assert route.total_duration_minutes == 7
    assert [s.maneuver for s in route.steps] == ["depart", "turn-left", "arrive"]
    assert [s.instruction for s in route.steps] == [
        "Start your journey on Janpath",
        "Turn left onto Rajpath",
        "You have arrived at your destination",
    ]
    assert route.steps[1].distance_label == "1.6 km"
    assert route.steps[1].duration_label == "5 min"

    request = router.calls[0]
    assert request.url.path.endswith("/foot-walking")
    assert request.url.params["start"] == "77.209,28.6139"
    assert request.url.params["api_key"] == "secret"


@pytest.mark.asyncio
async def test_openrouteservice_step_without_road_name_keeps_text(new_delhi):
    response = {"features": [{"properties": {"segments": [{
        "distance": 1200.0,
        "duration": 240.0,
        "steps": [{"instruction": "Turn right onto Ring Road", "distance": 1200.0, "duration": 240.0, "type": 1}],
    }]}}]}
    router = HostRouter({"api.openrouteservice.org": lambda request: httpx.Response(200, json=response)})

    route = await RouteService(_providers(router, "secret")).compute_route(new_delhi, INDIA_GATE, TravelMode.DRIVING)

    assert route.steps[0].maneuver == "turn-right"
    assert route.steps[0].instruction == "Turn right onto ring road"


@pytest.mark.asyncio
async def test_falls_through_to_osrm(new_delhi):
    router = HostRouter({"router.project-osrm.org": lambda request: httpx.Response(200, json=OSRM_RESPONSE)})

    route = await RouteService(_providers(router, "secret")).compute_route(new_delhi, INDIA_GATE, TravelMode.CYCLING)

    assert router.hosts == ["api.openrouteservice.org", "router.project-osrm.org"]
    assert route.provider_used == RouteProviderName.OSRM
    assert router.calls[1].url.path.startswith("/route/v1/bike/77.209,28.6139;")
    assert [s.maneuver for s in route.steps] == ["depart", "turn-slight-right", "arrive"]
    assert [s.instruction for s in route.steps] == [
        "Start your journey on Janpath",
        "Turn slight right onto Rajpath",
        "You have arrived at your destination",
    ]
    assert route.total_duration_minutes == 8


@pytest.mark.asyncio
async def test_synthesized_when_providers_fail(new_delhi):
    router = HostRouter()

    route = await RouteService(_providers(router)).compute_route(
        new_delhi, LODHI_COLONY, TravelMode.WALKING, destination_name="Lodhi Garden"
    )

    assert route.provider_used == RouteProviderName.FALLBACK
    assert route.degraded
    assert route.steps[0].maneuver == "depart"
    assert route.steps[0].instruction == "Start walking from your location"
    assert route.steps[-1].maneuver == "arrive"
    assert route.steps[-1].instruction == "Arrive at Lodhi Garden"
    assert "south" in route.steps[1].instruction
    # depart, initial turn, two mid-route turns, final approach, arrive
    assert len(route.steps) == 6
    assert route.total_duration_minutes == round(distance_km(new_delhi, LODHI_COLONY) / 5 * 60)


def test_synthesized_route_is_reproducible(new_delhi):
    first = RouteService.synthesize_route(new_delhi, LODHI_COLONY, TravelMode.DRIVING)
    second = RouteService.synthesize_route(new_delhi, LODHI_COLONY, TravelMode.DRIVING)

    assert first == second
    roads = ("Main Street", "Highway", "Boulevard", "Avenue")
    assert all(any(road in s.instruction for road in roads) for s in first.steps[2:-2])


def test_short_synthesized_route_has_no_mid_turns(new_delhi):
    nearby = Coordinate(lat=28.6200, lng=77.2150)

    route = RouteService.synthesize_route(new_delhi, nearby, TravelMode.CYCLING)

    assert [s.maneuver for s in route.steps][0] == "depart"
    assert len(route.steps) == 4
    assert route.steps[2].distance_label == "0.1 km"


def test_due_north_goes_straight():
    start = Coordinate(lat=28.0, lng=77.0)

    route = RouteService.synthesize_route(start, Coordinate(lat=28.01, lng=77.0), TravelMode.DRIVING)

    assert route.steps[1].instruction.startswith("Continue straight and head north")
    assert route.steps[1].maneuver == "continue"
