from functools import lru_cache

from places_finder.services.Parent_service import PlacesFinder


# --- Dependency Injection ---
@lru_cache
def get_places_finder() -> PlacesFinder:
    """One finder per process so the reverse geocode cache is shared across requests."""
    return PlacesFinder()
