from pydantic import BaseModel, ConfigDict, Field
from typing import List
from enum import Enum

class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"

class RouteProviderName(str, Enum):
    OPENROUTESERVICE = "openrouteservice"
    OSRM = "osrm"
    FALLBACK = "fallback"

class RouteStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    instruction: str
    distance_label: str
    duration_label: str
    maneuver: str

class RouteResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_distance_km: float = Field(..., ge=0)
    total_duration_minutes: int = Field(..., ge=0)
    steps: List[RouteStep]
    provider_used: RouteProviderName

    @property
    def degraded(self) -> bool:
        """True when every live provider failed and the route was synthesized."""
        return self.provider_used == RouteProviderName.FALLBACK

# --- API Request Models ---
class DirectionsRequest(BaseModel):
    start_lat: float
    start_lng: float
    end_lat: float
    end_lng: float
    mode: TravelMode = TravelMode.DRIVING
    destination_name: str = "your destination"
