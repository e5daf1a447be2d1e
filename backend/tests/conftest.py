from typing import Callable, Dict, List, Optional

import httpx
import pytest

from places_finder.core.categories import PLACE_CATEGORIES
from places_finder.models.base_model import AreaInfo, Coordinate
from places_finder.models.places_model import Place, SourceKind

NEW_DELHI = Coordinate(lat=28.6139, lng=77.2090)

Handler = Callable[[httpx.Request], httpx.Response]


class HostRouter:
    """MockTransport handler dispatching on request host, recording every call."""

    def __init__(self, routes: Optional[Dict[str, Handler]] = None):
        self.routes = dict(routes or {})
        self.calls: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.routes.get(request.url.host)
        if handler is None:
            return httpx.Response(503, json={"error": "unreachable"})
        return handler(request)

    @property
    def hosts(self) -> List[str]:
        return [request.url.host for request in self.calls]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class StubGeocoder:
    """Stands in for GeocodingService in generator and enrichment tests."""

    def __init__(self, area: Optional[AreaInfo] = None, lookup: Optional[AreaInfo] = None, area_error: Exception = None):
        self.area = area or AreaInfo(address="Connaught Place, New Delhi", city="New Delhi", state="Delhi", country="India")
        self.lookup = lookup
        self.area_error = area_error
        self.reverse_calls = 0
        self.cached_calls = 0

    async def reverse_geocode(self, coordinate: Coordinate) -> AreaInfo:
        self.reverse_calls += 1
        if self.area_error is not None:
            raise self.area_error
        return self.area

    async def reverse_geocode_cached(self, coordinate: Coordinate, timeout_ms=None) -> Optional[AreaInfo]:
        self.cached_calls += 1
        return self.lookup


def make_place(
    place_id: str,
    lat: float,
    lng: float,
    distance: float,
    kind: SourceKind = SourceKind.LIVE,
    category_key: str = "restaurant",
    address: str = "12, MG Road, New Delhi",
) -> Place:
    category = PLACE_CATEGORIES[category_key]
    return Place(
        id=place_id,
        name=f"Place {place_id}",
        category_key=category_key,
        display_category_name=category.display_name,
        icon=category.icon,
        coordinate=Coordinate(lat=lat, lng=lng),
        distance_km=distance,
        address=address,
        rating=4.0,
        source_kind=kind
    )


@pytest.fixture
def new_delhi() -> Coordinate:
    return NEW_DELHI


@pytest.fixture
def host_router() -> HostRouter:
    return HostRouter()


@pytest.fixture
def stub_geocoder() -> StubGeocoder:
    return StubGeocoder(lookup=AreaInfo(address="Janpath, New Delhi, Delhi, India", city="New Delhi", state="Delhi", country="India"))
