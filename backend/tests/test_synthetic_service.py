import random

import pytest

from conftest import StubGeocoder
from places_finder.core.categories import PLACE_CATEGORIES
from places_finder.core.exceptions import GeocodeError
from places_finder.models.base_model import Coordinate
from places_finder.models.places_model import SourceKind
from places_finder.services.Synthetic_service import SyntheticPlacesGenerator

LUCKNOW = Coordinate(lat=26.8467, lng=80.9462)


def _dump(results):
    return {key: [p.model_dump() for p in places] for key, places in results.items()}


def test_deterministic_is_reproducible(new_delhi, stub_geocoder):
    first = SyntheticPlacesGenerator(stub_geocoder).generate_deterministic(new_delhi, 10)
    second = SyntheticPlacesGenerator(stub_geocoder).generate_deterministic(new_delhi, 10)

    assert _dump(first) == _dump(second)


def test_deterministic_depends_on_center(new_delhi, stub_geocoder):
    generator = SyntheticPlacesGenerator(stub_geocoder)

    here = generator.deterministic_for_category(new_delhi, "restaurant", 10)
    there = generator.deterministic_for_category(LUCKNOW, "restaurant", 10)

    assert [p.coordinate for p in here] != [p.coordinate for p in there]


def test_deterministic_shape(new_delhi, stub_geocoder):
    results = SyntheticPlacesGenerator(stub_geocoder).generate_deterministic(new_delhi, 10)

    assert list(results) == list(PLACE_CATEGORIES)
    for key, places in results.items():
        assert 6 <= len(places) <= 10
        assert [p.distance_km for p in places] == sorted(p.distance_km for p in places)
        for place in places:
            assert place.category_key == key
            assert place.id.startswith(f"mock_{key}_28614_77209_")
            assert place.source_kind == SourceKind.SYNTHETIC
            assert 3.0 <= place.rating <= 5.0
            assert place.city == "New Delhi"
            # 0.8 * 10 km plus the 0.1 km offset, with room for projection error
            assert place.distance_km <= 8.2


def test_deterministic_ordinal_names(new_delhi, stub_geocoder):
    places = SyntheticPlacesGenerator(stub_geocoder).deterministic_for_category(new_delhi, "bank", 10)
    by_index = {int(p.id.rsplit("_", 1)[1]): p for p in places}

    assert not by_index[0].name.endswith(" 1")
    assert by_index[1].name.endswith(" 2")


def test_deterministic_caps_distance_for_large_radius(new_delhi, stub_geocoder):
    places = SyntheticPlacesGenerator(stub_geocoder).deterministic_for_category(new_delhi, "cafe", 50)
    assert all(p.distance_km <= 15.3 for p in places)


def test_deterministic_fallback_city(stub_geocoder):
    first = SyntheticPlacesGenerator(stub_geocoder).deterministic_for_category(LUCKNOW, "hospital", 10)
    second = SyntheticPlacesGenerator(stub_geocoder).deterministic_for_category(LUCKNOW, "hospital", 10)

    assert first[0].city == second[0].city
    assert first[0].city not in ("New Delhi", "Mumbai", "Bengaluru", "Chennai")


@pytest.mark.asyncio
async def test_verified_shape_and_refinement(new_delhi, stub_geocoder):
    generator = SyntheticPlacesGenerator(stub_geocoder, rng=random.Random(7))

    results = await generator.generate_verified(new_delhi, 10)

    assert list(results) == list(PLACE_CATEGORIES)
    assert stub_geocoder.cached_calls == 12
    verified = 0
    for key, places in results.items():
        assert len(places) == 8
        assert [p.distance_km for p in places] == sorted(p.distance_km for p in places)
        refined = [p for p in places if p.verified_address]
        assert len(refined) <= 2
        assert all(p in places[:2] for p in refined)
        verified += len(refined)
        for place in places:
            assert place.id.startswith(f"verified_{key}_28.6139_77.2090_")
            assert 3.5 <= place.rating <= 5.0
            assert place.phone.startswith("+91-9")
    assert verified == 12


@pytest.mark.asyncio
async def test_verified_radius_envelope(new_delhi, stub_geocoder):
    results = await SyntheticPlacesGenerator(stub_geocoder, rng=random.Random(3)).generate_verified(new_delhi, 1)

    for places in results.values():
        assert all(0.45 <= p.distance_km <= 0.85 for p in places)


@pytest.mark.asyncio
async def test_verified_uses_unknown_city_when_area_lookup_fails(new_delhi):
    geocoder = StubGeocoder(area_error=GeocodeError("28.6139,77.2090"), lookup=None)

    results = await SyntheticPlacesGenerator(geocoder, rng=random.Random(1)).generate_verified(new_delhi, 5)

    place = results["restaurant"][0]
    assert place.address.endswith(", Unknown City")
    assert place.state == "Unknown State"
    assert place.verified_address is False


@pytest.mark.asyncio
async def test_verified_names_follow_city(new_delhi):
    geocoder = StubGeocoder(lookup=None)

    results = await SyntheticPlacesGenerator(geocoder, rng=random.Random(5)).generate_verified(new_delhi, 5)

    names = {p.name for p in results["restaurant"]}
    assert "New Dhaba" in names
