"""
Radius search over stored bootcamp locations.

A linear distance is turned into an angular radius by dividing by the
Earth's mean radius, and a point matches when its great-circle distance to
the center is within that angle (a spherical cap, not a flat circle).
"""
import math
import logging

from src.services.errors import ValidationFailed

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3963.0


def angular_radius(distance_miles):
    return distance_miles / EARTH_RADIUS_MILES


def central_angle(lng1, lat1, lng2, lat2):
    """Great-circle angle in radians between two (lng, lat) points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(a)))


class CenterSphere:
    """All points within ``radius`` radians of (longitude, latitude) on the sphere."""

    def __init__(self, longitude, latitude, radius):
        self.longitude = longitude
        self.latitude = latitude
        self.radius = radius

    def contains(self, longitude, latitude):
        return central_angle(self.longitude, self.latitude, longitude, latitude) <= self.radius

    def bounding_box(self):
        """
        Return (min_lng, min_lat, max_lng, max_lat) enclosing the cap.

        min_lng and max_lng are None when the cap reaches a pole or crosses
        the antimeridian, in which case only latitude narrows the search.
        """
        delta_lat = math.degrees(self.radius)
        min_lat = self.latitude - delta_lat
        max_lat = self.latitude + delta_lat

        if self.radius >= math.pi or max_lat >= 90 or min_lat <= -90:
            return None, max(min_lat, -90.0), None, min(max_lat, 90.0)

        delta_lng = math.degrees(math.asin(math.sin(self.radius) / math.cos(math.radians(self.latitude))))
        min_lng = self.longitude - delta_lng
        max_lng = self.longitude + delta_lng
        if min_lng < -180 or max_lng > 180:
            return None, min_lat, None, max_lat
        return min_lng, min_lat, max_lng, max_lat


def parse_distance(distance_miles):
    try:
        distance = float(distance_miles)
    except (TypeError, ValueError):
        raise ValidationFailed(f"Invalid distance: {distance_miles}", fields=["distance"])
    if math.isnan(distance) or math.isinf(distance) or distance < 0:
        raise ValidationFailed(f"Invalid distance: {distance_miles}", fields=["distance"])
    return distance


def find_within(repo, center, distance_miles):
    """Bootcamps whose location lies within ``distance_miles`` of ``center``."""
    distance = parse_distance(distance_miles)
    predicate = CenterSphere(center.longitude, center.latitude, angular_radius(distance))
    results = repo.find_within(predicate)
    logger.info(
        f"Radius search: {len(results)} bootcamps within {distance} mi of "
        f"({center.latitude}, {center.longitude})"
    )
    return results
