from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"

    # Identifying client agent sent to every OpenStreetMap service
    USER_AGENT: str = "PlacesFinder/1.0 (Educational Project)"

    # Nominatim (forward/reverse geocoding, suggestions)
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org"
    COUNTRY_CODE: str = "in"
    GEOCODE_TIMEOUT: float = 10.0
    REVERSE_LOOKUP_TIMEOUT_MS: int = 2000
    AREA_LOOKUP_TIMEOUT: float = 3.0
    REVERSE_CACHE_CAPACITY: Optional[int] = 512

    # Overpass mirrors, tried in order
    OVERPASS_MIRRORS: List[str] = [
        "https://overpass-api.de/api/interpreter",
        "https://overpass.kumi.systems/api/interpreter",
        "https://overpass.openstreetmap.ru/api/interpreter",
    ]
    OVERPASS_MIRROR_TIMEOUT: float = 4.0
    PLACES_LIVE_BUDGET: float = 5.0

    # IP geolocation providers, tried in order
    IP_PROVIDERS: List[str] = ["ipapi.co", "ipinfo.io", "ip-api.com"]
    IP_LOOKUP_TIMEOUT: float = 5.0

    # Location sensor; a non-secure context behaves like an unsupported sensor
    SECURE_CONTEXT: bool = True

    # Routing providers
    ORS_API_KEY: Optional[str] = None
    ORS_URL: str = "https://api.openrouteservice.org/v2/directions"
    OSRM_URL: str = "https://router.project-osrm.org/route/v1"
    ROUTE_TIMEOUT: float = 10.0

    # Local recency list
    RECENT_SEARCHES_PATH: str = "data/recent_searches.json"
    RECENT_SEARCHES_LIMIT: int = 5

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
