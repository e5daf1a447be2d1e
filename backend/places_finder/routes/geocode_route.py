from fastapi import APIRouter, Depends
from typing import List

from places_finder.models.base_model import AreaInfo, Coordinate
from places_finder.models.geocode_model import GeocodeRequest, GeocodeResult, ReverseGeocodeRequest
from places_finder.models.places_model import PlaceSuggestion, SuggestionsRequest
from places_finder.routes.dependencies import get_places_finder
from places_finder.services.Parent_service import PlacesFinder

router = APIRouter()

@router.post("/geocode", response_model=GeocodeResult)
async def geocode_endpoint(
    request: GeocodeRequest,
    finder: PlacesFinder = Depends(get_places_finder)
):
    return await finder.forward_geocode(request.query)

@router.post("/reverse-geocode", response_model=AreaInfo)
async def reverse_geocode_endpoint(
    request: ReverseGeocodeRequest,
    finder: PlacesFinder = Depends(get_places_finder)
):
    return await finder.reverse_geocode(Coordinate(lat=request.lat, lng=request.lng))

@router.post("/suggestions", response_model=List[PlaceSuggestion])
async def suggestions_endpoint(
    request: SuggestionsRequest,
    finder: PlacesFinder = Depends(get_places_finder)
):
    bias_center = None
    if request.bias_lat is not None and request.bias_lng is not None:
        bias_center = Coordinate(lat=request.bias_lat, lng=request.bias_lng)
    return await finder.suggest_places(request.query, limit=request.limit, bias_center=bias_center)

@router.get("/recent-searches", response_model=List[str])
async def recent_searches_endpoint(finder: PlacesFinder = Depends(get_places_finder)):
    return await finder.recent_searches()
