"""Great-circle helpers. Pure functions, no I/O."""
import math

from places_finder.models.base_model import Coordinate

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 111.32

CARDINAL_DIRECTIONS = (
    "north", "northeast", "east", "southeast",
    "south", "southwest", "west", "northwest",
)


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlam = math.radians(b.lng - a.lng)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing_degrees(a: Coordinate, b: Coordinate) -> float:
    """Initial bearing from a to b in [0, 360)."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dlam = math.radians(b.lng - a.lng)
    y = math.sin(dlam) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlam)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def cardinal_direction(bearing: float) -> str:
    return CARDINAL_DIRECTIONS[round(bearing / 45) % 8]


def offset_coordinate(center: Coordinate, distance: float, angle: float) -> Coordinate:
    """
    Project `distance` km from `center` along `angle` radians (0 = north).

    Flat-earth approximation, good enough for the few kilometres the
    generators work with. The result is clamped into valid ranges.
    """
    lat_offset = (distance / KM_PER_DEGREE_LAT) * math.cos(angle)
    cos_lat = max(math.cos(math.radians(center.lat)), 1e-6)
    lng_offset = (distance / (KM_PER_DEGREE_LAT * cos_lat)) * math.sin(angle)
    lat = min(90.0, max(-90.0, center.lat + lat_offset))
    lng = ((center.lng + lng_offset + 180.0) % 360.0) - 180.0
    return Coordinate(lat=lat, lng=lng)
