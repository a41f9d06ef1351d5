from src.geocoding.nominatim import Coordinate
from src.services.errors import GeocodingError

MIAMI = Coordinate(
    longitude=-80.19,
    latitude=25.76,
    formatted_address="Miami, FL 33101, US",
    city="Miami",
    state="FL",
    zipcode="33101",
    country="US",
)


class FakeGeocoder:
    """Stands in for Nominatim: known tokens resolve, anything else fails."""

    def __init__(self, locations=None):
        self.locations = {"33101": MIAMI, "1 Main St, Miami FL": MIAMI}
        self.locations.update(locations or {})
        self.calls = []

    def __call__(self, token):
        self.calls.append(token)
        if token not in self.locations:
            raise GeocodingError(f"No location found for '{token}'")
        return self.locations[token]


def as_user(actor):
    return {"X-User-Id": actor.id}


def bootcamp_payload(**overrides):
    payload = {
        "name": "Devworks Bootcamp",
        "description": "Full stack web development in twelve weeks",
        "website": "https://devworks.com",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.com",
        "address": "1 Main St, Miami FL",
        "careers": ["Web Development", "UI/UX"],
        "housing": True,
    }
    payload.update(overrides)
    return payload


def review_payload(**overrides):
    payload = {"title": "Learned a ton", "text": "Great instructors", "rating": 8}
    payload.update(overrides)
    return payload
