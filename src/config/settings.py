"""
Application-wide settings and environment variable management.
Loads configuration from .env and validates the values the relay depends on.
"""

import os
from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Ordered fallback list, first key is tried first
ORS_API_KEYS = tuple(
    key.strip() for key in os.getenv("ORS_API_KEYS", "").split(",") if key.strip()
)
ORS_BASE_URL = os.getenv("ORS_BASE_URL", "https://api.openrouteservice.org").rstrip("/")
ORS_DIRECTIONS_PROFILE = os.getenv("ORS_DIRECTIONS_PROFILE", "driving-car")
ORS_GEOCODE_COUNTRY = os.getenv("ORS_GEOCODE_COUNTRY", "ESP")
ORS_GEOCODE_SIZE = int(os.getenv("ORS_GEOCODE_SIZE", "5") or "5")
ORS_GEOCODE_LANG = os.getenv("ORS_GEOCODE_LANG", "es")

UPSTREAM_TIMEOUT_SECONDS = int(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "30") or "30")
EXPOSE_DEBUG_MESSAGE = os.getenv("EXPOSE_DEBUG_MESSAGE", "true").lower() == "true"


required_vars = {
    "ORS_BASE_URL": ORS_BASE_URL,
    "ORS_DIRECTIONS_PROFILE": ORS_DIRECTIONS_PROFILE,
    "ORS_GEOCODE_COUNTRY": ORS_GEOCODE_COUNTRY,
    "ORS_GEOCODE_LANG": ORS_GEOCODE_LANG,
}

for var_name, var_value in required_vars.items():
    if not var_value:
        raise ValueError(f"Missing required environment variable: {var_name}")

if not ORS_BASE_URL.startswith(("http://", "https://")):
    raise ValueError("ORS_BASE_URL must be a valid HTTP/HTTPS URL")

if UPSTREAM_TIMEOUT_SECONDS <= 0:
    raise ValueError("UPSTREAM_TIMEOUT_SECONDS must be a positive integer")

if ORS_GEOCODE_SIZE <= 0:
    raise ValueError("ORS_GEOCODE_SIZE must be a positive integer")
