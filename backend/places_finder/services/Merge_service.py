import logging
from typing import Dict, Iterable, List

from places_finder.core.logger import logs
from places_finder.models.places_model import Place, SourceKind

MIN_PER_CATEGORY = 6
MAX_PER_CATEGORY = 10
DUPLICATE_DEGREES = 0.002


def is_near_duplicate(place: Place, accepted: Iterable[Place]) -> bool:
    """Within DUPLICATE_DEGREES of an accepted place in both latitude and longitude."""
    return any(
        abs(place.coordinate.lat - other.coordinate.lat) < DUPLICATE_DEGREES
        and abs(place.coordinate.lng - other.coordinate.lng) < DUPLICATE_DEGREES
        for other in accepted
    )


def finalize(places: List[Place]) -> List[Place]:
    return sorted(places, key=lambda p: p.distance_km)[:MAX_PER_CATEGORY]


def merge_category(live: List[Place], synthetic: List[Place]) -> List[Place]:
    """
    Top up live places with synthetic ones until MIN_PER_CATEGORY is reached.

    Live entries are kept as they are. A synthetic entry is skipped when it
    sits on top of anything already accepted, so the output never holds two
    places within DUPLICATE_DEGREES of each other beyond what live data had.
    """
    merged = list(live)
    for candidate in synthetic:
        if len(merged) >= MIN_PER_CATEGORY:
            break
        if not is_near_duplicate(candidate, merged):
            merged.append(candidate)
    return finalize(merged)


def merge_places(live: Dict[str, List[Place]], synthetic: Dict[str, List[Place]]) -> Dict[str, List[Place]]:
    merged = {}
    for key in dict.fromkeys([*live, *synthetic]):
        merged[key] = merge_category(live.get(key, []), synthetic.get(key, []))
        if live.get(key) and len(merged[key]) > len(live[key]):
            logs.log(logging.DEBUG, f"🔀 {key}: {len(live[key])} live + {len(merged[key]) - len(live[key])} synthetic")
    return merged


def has_synthetic(results: Dict[str, List[Place]]) -> bool:
    return any(place.source_kind == SourceKind.SYNTHETIC for places in results.values() for place in places)
