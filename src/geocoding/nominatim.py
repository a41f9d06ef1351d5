import requests
import re
import time
import logging
from dataclasses import dataclass
from typing import Optional
from threading import Lock

from src import config
from src.services.errors import GeocodingError

# Constants
USER_AGENT = config.GEOCODER_USER_AGENT
REQUEST_TIMEOUT = config.GEOCODER_TIMEOUT
POSTAL_CODE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]{1,9}$")

# Get logger
logger = logging.getLogger(__name__)

# Cache to minimize API calls for the same address token
# Format: {token: Coordinate}
geocoding_cache = {}

# Add lock for thread-safe cache access
cache_lock = Lock()

# Monotonic time of the last request sent to Nominatim
last_request_at = 0.0
rate_limit_lock = Lock()


@dataclass(frozen=True)
class Coordinate:
    longitude: float
    latitude: float
    formatted_address: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None


def _wait_for_rate_limit():
    global last_request_at
    with rate_limit_lock:
        wait_time = config.GEOCODER_RATE_LIMIT_DELAY - (time.monotonic() - last_request_at)
        if wait_time > 0:
            time.sleep(wait_time)
        last_request_at = time.monotonic()


def _is_postal_code(token):
    return bool(POSTAL_CODE_RE.match(token)) and any(ch.isdigit() for ch in token)


def _to_coordinate(result):
    address = result.get("address") or {}
    street = " ".join(p for p in (address.get("house_number"), address.get("road")) if p) or None
    country_code = address.get("country_code")
    return Coordinate(
        longitude=float(result["lon"]),
        latitude=float(result["lat"]),
        formatted_address=result.get("display_name"),
        street=street,
        city=address.get("city") or address.get("town") or address.get("village"),
        state=address.get("state"),
        zipcode=address.get("postcode"),
        country=country_code.upper() if country_code else None,
    )


def geocode(address_token):
    """
    Resolve a postal code or free-form address to its first matching coordinate.

    A single request is made; there is no retry. Raises GeocodingError when the
    provider is unreachable, answers with an error, or returns no match.
    """
    token = (address_token or "").strip()
    if not token:
        raise GeocodingError("Cannot geocode an empty address")

    with cache_lock:
        if token in geocoding_cache:
            return geocoding_cache[token]

    params = {
        "format": "json",
        "addressdetails": 1,
        "limit": 1,
    }
    if _is_postal_code(token):
        params["postalcode"] = token
        params["countrycodes"] = config.GEOCODER_COUNTRY
    else:
        params["q"] = token

    headers = {
        "User-Agent": USER_AGENT
    }

    _wait_for_rate_limit()
    try:
        response = requests.get(
            config.NOMINATIM_SEARCH_URL,
            params=params,
            headers=headers,
            timeout=REQUEST_TIMEOUT
        )
    except requests.RequestException as e:
        logger.warning(f"Network error while geocoding '{token}': {e}")
        raise GeocodingError(f"Geocoding service unavailable: {e}") from e

    if response.status_code != 200:
        logger.warning(f"Geocoding HTTP error ({response.status_code}) for '{token}'")
        raise GeocodingError(f"Geocoding service returned HTTP {response.status_code}")

    try:
        results = response.json()
    except ValueError as e:
        raise GeocodingError("Geocoding service returned an invalid response") from e

    if not results:
        logger.warning(f"No location found for '{token}'")
        raise GeocodingError(f"No location found for '{token}'")

    try:
        coordinate = _to_coordinate(results[0])
    except (KeyError, TypeError, ValueError) as e:
        raise GeocodingError("Geocoding service returned an invalid response") from e

    with cache_lock:
        geocoding_cache[token] = coordinate
    logger.info(f"Successfully geocoded '{token}' to ({coordinate.latitude}, {coordinate.longitude})")
    return coordinate
