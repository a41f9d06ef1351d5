"""
Configuration
-------------
All settings come from environment variables.
"""
import os


def _env_bool(name, default=False):
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


# Database
DATABASE_URL = os.getenv("DB_URL", "sqlite:///./devcamper.db")

# File uploads
MAX_FILE_UPLOAD = int(os.getenv("MAX_FILE_UPLOAD", "1000000"))
FILE_UPLOAD_PATH = os.getenv("FILE_UPLOAD_PATH", "./public/uploads")

# Delete a bootcamp's reviews together with the bootcamp
CASCADE_DELETE_REVIEWS = _env_bool("CASCADE_DELETE_REVIEWS", False)

# Geocoding
NOMINATIM_SEARCH_URL = os.getenv("NOMINATIM_SEARCH_URL", "https://nominatim.openstreetmap.org/search")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "DevCamperApi/1.0")
GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "10"))
GEOCODER_COUNTRY = os.getenv("GEOCODER_COUNTRY", "us")
# Minimum seconds between Nominatim requests (usage policy: 1 per second)
GEOCODER_RATE_LIMIT_DELAY = float(os.getenv("GEOCODER_RATE_LIMIT_DELAY", "1.1"))

# Server
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "5000"))
