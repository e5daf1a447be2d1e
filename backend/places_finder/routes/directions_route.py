from fastapi import APIRouter, Depends

from places_finder.models.base_model import Coordinate
from places_finder.models.route_model import DirectionsRequest, RouteResult
from places_finder.routes.dependencies import get_places_finder
from places_finder.services.Parent_service import PlacesFinder

router = APIRouter()

@router.post("/directions", response_model=RouteResult)
async def directions_endpoint(
    request: DirectionsRequest,
    finder: PlacesFinder = Depends(get_places_finder)
):
    return await finder.compute_route(
        Coordinate(lat=request.start_lat, lng=request.start_lng),
        Coordinate(lat=request.end_lat, lng=request.end_lng),
        request.mode,
        request.destination_name
    )
