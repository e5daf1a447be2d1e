from fastapi import APIRouter, Depends

from places_finder.models.base_model import Coordinate
from places_finder.models.places_model import PlacesRequest, PlacesSearchResult
from places_finder.routes.dependencies import get_places_finder
from places_finder.services.Parent_service import PlacesFinder

router = APIRouter()

@router.post("/places", response_model=PlacesSearchResult)
async def get_places_endpoint(
    request: PlacesRequest,
    finder: PlacesFinder = Depends(get_places_finder)
):
    center = Coordinate(lat=request.lat, lng=request.lng)
    return await finder.search_places(center, request.radius_km)
