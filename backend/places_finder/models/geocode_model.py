from pydantic import BaseModel, ConfigDict

from places_finder.models.base_model import Coordinate

class GeocodeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    display_name: str

class GeocodeRequest(BaseModel):
    query: str

class ReverseGeocodeRequest(BaseModel):
    lat: float
    lng: float
