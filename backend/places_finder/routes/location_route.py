from fastapi import APIRouter, Depends

from places_finder.models.location_model import LocationFix, LocationRequest, SensorReading
from places_finder.routes.dependencies import get_places_finder
from places_finder.services.Parent_service import PlacesFinder

router = APIRouter()

@router.post("/location", response_model=LocationFix)
async def location_endpoint(
    request: LocationRequest,
    finder: PlacesFinder = Depends(get_places_finder)
):
    if request.prefer_ip:
        return await finder.acquire_ip_location()

    if request.lat is None and request.lng is None:
        return await finder.acquire_location()

    if request.lat is None or request.lng is None or request.accuracy_meters is None:
        raise ValueError("lat, lng and accuracy_meters must be sent together")

    reading = SensorReading(lat=request.lat, lng=request.lng, accuracy_meters=request.accuracy_meters)
    return await finder.acquire_location(reading)
