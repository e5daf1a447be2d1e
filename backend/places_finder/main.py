import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from places_finder.core.exceptions import ErrorCode, PlacesFinderError
from places_finder.core.logger import logs
from places_finder.routes.directions_route import router as directions_router
from places_finder.routes.geocode_route import router as geocode_router
from places_finder.routes.location_route import router as location_router
from places_finder.routes.places_route import router as places_router

app = FastAPI(title="Places Finder")
app.include_router(location_router)
app.include_router(geocode_router)
app.include_router(places_router)
app.include_router(directions_router)

# --- Error Handling ---
@app.exception_handler(PlacesFinderError)
async def places_finder_error_handler(request: Request, exc: PlacesFinderError):
    logs.log(logging.WARNING, f"{request.url.path} failed: {exc.message}", extra={"details": exc.details})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=422,
        content={"error": ErrorCode.VALIDATION_ERROR.value, "message": str(exc), "details": {}}
    )

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to Places Finder API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "location": "/location",
            "geocode": "/geocode",
            "places": "/places",
            "directions": "/directions",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Places Finder"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("places_finder.main:app", host="0.0.0.0", port=8000, reload=True)
