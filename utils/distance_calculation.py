import math
from config import EARTH_RADIUS_METERS


def haversine_distance(p1, p2):
    """
    Calculate haversine distance between two points in meters.
    Points should be (lat, lon) coordinates in decimal degrees.
    """
    lat1, lon1 = p1
    lat2, lon2 = p2

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    # Rounding can push a just outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def parse_coordinate(value):
    """Parse a latitude/longitude value, returning None when it is missing or not a finite number"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def coordinates_of(report):
    """Return (lat, lon) for a report mapping, or None if either coordinate is unusable"""
    lat = parse_coordinate(report.get('latitude'))
    lon = parse_coordinate(report.get('longitude'))
    if lat is None or lon is None:
        return None
    return lat, lon
