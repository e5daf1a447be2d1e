from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from enum import Enum

from places_finder.models.base_model import Coordinate

class SourceKind(str, Enum):
    LIVE = "live"
    SYNTHETIC = "synthetic"

class ResultSource(str, Enum):
    LIVE = "live"
    MIXED = "mixed"
    SYNTHETIC = "synthetic"

class CategoryDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    icon: str
    match_tags: tuple[str, ...]

class Place(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category_key: str
    display_category_name: str
    icon: str
    coordinate: Coordinate
    distance_km: float = Field(..., ge=0)
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    opening_hours: Optional[str] = None
    rating: float = Field(..., ge=3.0, le=5.0)
    source_kind: SourceKind
    verified_address: bool = False
    osm_id: Optional[int] = None
    is_popular: bool = False

class PlacesSearchResult(BaseModel):
    center: Coordinate
    radius_km: float
    categories: Dict[str, List[Place]]
    source: ResultSource

    @property
    def is_empty(self) -> bool:
        return not any(self.categories.values())

    @property
    def total(self) -> int:
        return sum(len(places) for places in self.categories.values())

class PlaceSuggestion(BaseModel):
    id: str
    name: str
    short_name: str
    context: str = ""
    coordinate: Coordinate
    place_type: Optional[str] = None
    place_class: Optional[str] = None
    importance: float = 0.0

# --- API Request Models ---
class PlacesRequest(BaseModel):
    lat: float
    lng: float
    radius_km: float = Field(default=10, ge=1, le=50)

class SuggestionsRequest(BaseModel):
    query: str
    limit: int = Field(default=15, ge=1, le=50)
    bias_lat: Optional[float] = None
    bias_lng: Optional[float] = None
