"""
IP Geolocation Provider Implementations
Each provider has its own response shape; all normalize to a LocationFix.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from places_finder.core.logger import logs
from places_finder.models.base_model import Coordinate
from places_finder.models.location_model import AcquisitionMethod, LocationFix

IP_ACCURACY_METERS = 5000.0


class BaseIPLocationProvider(ABC):
    """Base class for all IP geolocation providers"""

    url: str = ""

    def __init__(self, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    @abstractmethod
    def parse(self, data: dict) -> tuple:
        """Return (lat, lng, city_label) from the provider payload"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass

    async def locate(self) -> LocationFix:
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                lat, lng, city_label = self.parse(response.json())
            except Exception as e:
                logs.log(logging.WARNING, f"{self.get_provider_name()} IP lookup failed: {str(e)}")
                raise

        if lat is None or lng is None:
            raise ValueError(f"{self.get_provider_name()} returned no coordinates")

        return LocationFix(
            coordinate=Coordinate(lat=float(lat), lng=float(lng)),
            accuracy_meters=IP_ACCURACY_METERS,
            method=AcquisitionMethod.IP_ESTIMATE,
            city_label=city_label
        )


def _label(*parts) -> Optional[str]:
    present = [str(p) for p in parts if p]
    return ", ".join(present) or None


class IpapiCoProvider(BaseIPLocationProvider):
    url = "https://ipapi.co/json/"

    def parse(self, data: dict) -> tuple:
        return (
            data.get("latitude"),
            data.get("longitude"),
            _label(data.get("city"), data.get("region"), data.get("country_name")),
        )

    def get_provider_name(self) -> str:
        return "ipapi.co"


class IpinfoProvider(BaseIPLocationProvider):
    url = "https://ipinfo.io/json"

    def parse(self, data: dict) -> tuple:
        lat = lng = None
        if data.get("loc"):
            lat_str, lng_str = data["loc"].split(",", 1)
            lat, lng = float(lat_str), float(lng_str)
        return lat, lng, _label(data.get("city"), data.get("region"), data.get("country"))

    def get_provider_name(self) -> str:
        return "ipinfo.io"


class IpApiComProvider(BaseIPLocationProvider):
    # Plain HTTP only on the free tier
    url = "http://ip-api.com/json/"

    def parse(self, data: dict) -> tuple:
        if data.get("status") == "fail":
            raise ValueError(data.get("message", "ip-api.com lookup failed"))
        return (
            data.get("lat"),
            data.get("lon"),
            _label(data.get("city"), data.get("regionName"), data.get("country")),
        )

    def get_provider_name(self) -> str:
        return "ip-api.com"


IP_PROVIDER_CLASSES = {
    "ipapi.co": IpapiCoProvider,
    "ipinfo.io": IpinfoProvider,
    "ip-api.com": IpApiComProvider,
}


def build_ip_providers(
    names: List[str],
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[BaseIPLocationProvider]:
    """Initialize the configured IP providers, in order, skipping unknown names"""
    providers = []
    for name in names:
        provider_class = IP_PROVIDER_CLASSES.get(name.lower())
        if provider_class is None:
            logs.log(logging.WARNING, f"Unknown IP provider '{name}', skipping")
            continue
        providers.append(provider_class(timeout=timeout, transport=transport))
    return providers
