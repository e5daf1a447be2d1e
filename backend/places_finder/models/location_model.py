from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum

from places_finder.models.base_model import Coordinate

# --- Enums ---
class AcquisitionMethod(str, Enum):
    HIGH_ACCURACY_SENSOR = "high_accuracy_sensor"
    MODERATE_ACCURACY = "moderate_accuracy"
    POOR_ACCURACY = "poor_accuracy"
    DELAYED_SENSOR = "delayed_sensor"
    CELL_ASSISTED = "cell_assisted"
    FINAL_ATTEMPT = "final_attempt"
    IP_ESTIMATE = "ip_estimate"
    MANUAL_ENTRY = "manual_entry"
    GEOCODED = "geocoded"

class SensorFailure(str, Enum):
    """Reason codes a position sensor can report."""
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"

# --- Domain Models ---
class SensorReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    accuracy_meters: float = Field(..., ge=0)

class LocationFix(BaseModel):
    """One location acquisition outcome. Later attempts supersede it."""
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    accuracy_meters: Optional[float] = Field(default=None, ge=0)
    method: AcquisitionMethod
    city_label: Optional[str] = None

class LocationSupport(BaseModel):
    supported: bool
    issues: list[str] = []

# --- API Request Models ---
class LocationRequest(BaseModel):
    """A position reading relayed by the client, if it has one."""
    lat: Optional[float] = None
    lng: Optional[float] = None
    accuracy_meters: Optional[float] = None
    prefer_ip: bool = False
