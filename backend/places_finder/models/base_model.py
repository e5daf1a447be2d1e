from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# --- Domain Models ---
class Coordinate(BaseModel):
    """A WGS84 position in degrees."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    def rounded_key(self, decimals: int = 5) -> str:
        return f"{self.lat:.{decimals}f},{self.lng:.{decimals}f}"


class AreaInfo(BaseModel):
    """Human-readable address for a coordinate (reverse geocode result)."""
    model_config = ConfigDict(frozen=True)

    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


# --- API Models ---
class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict = {}
