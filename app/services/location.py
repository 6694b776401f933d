"""Geolocation gate and reverse geocoding (Nominatim)."""
import asyncio
import logging

import requests

from app.config import settings
from app.errors import (
    LocationPermissionDenied,
    LocationPermissionDeniedForever,
    LocationServicesDisabled,
    LocationUnavailable,
)
from app.models.checkin import LocationPermission, LocationReport

logger = logging.getLogger(__name__)

ADDRESS_UNAVAILABLE = "Unable to fetch address details"

# Nominatim keys tried in order for each address part
_SUB_LOCALITY_KEYS = ("suburb", "neighbourhood", "quarter", "village", "hamlet")
_LOCALITY_KEYS = ("city", "town", "municipality", "county")


def check_location_access(report: LocationReport) -> tuple[float, float]:
    """Raise the blocking error for the device's location state, else return (lat, lon)."""
    if not report.service_enabled:
        raise LocationServicesDisabled()
    if report.permission == LocationPermission.DENIED:
        raise LocationPermissionDenied()
    if report.permission == LocationPermission.DENIED_FOREVER:
        raise LocationPermissionDeniedForever()
    if report.latitude is None or report.longitude is None:
        raise LocationUnavailable()
    if not (-90 <= report.latitude <= 90 and -180 <= report.longitude <= 180):
        raise LocationUnavailable("Location coordinates are out of range")
    return report.latitude, report.longitude


def _first(address: dict, keys: tuple[str, ...]) -> str:
    for key in keys:
        if address.get(key):
            return address[key]
    return ""


def format_address(address: dict) -> str:
    """street, sub-locality, locality, postal code, country."""
    parts = [
        address.get("road") or address.get("pedestrian") or "",
        _first(address, _SUB_LOCALITY_KEYS),
        _first(address, _LOCALITY_KEYS),
        address.get("postcode", ""),
        address.get("country", ""),
    ]
    return ", ".join(parts)


def _reverse_sync(latitude: float, longitude: float) -> str:
    params = {
        "lat": latitude,
        "lon": longitude,
        "format": "jsonv2",
        "addressdetails": 1,
        "accept-language": settings.geocoding_language,
    }
    headers = {"User-Agent": settings.geocoding_user_agent}
    r = requests.get(settings.geocoding_url, params=params, headers=headers, timeout=settings.geocoding_timeout_seconds)
    r.raise_for_status()
    data = r.json()
    address = data.get("address") if isinstance(data, dict) else None
    if not address:
        raise ValueError(data.get("error", "empty geocoding result") if isinstance(data, dict) else "empty geocoding result")
    return format_address(address)


async def reverse_geocode(latitude: float, longitude: float) -> str:
    """Human-readable address, or ADDRESS_UNAVAILABLE when the lookup fails."""
    try:
        return await asyncio.to_thread(_reverse_sync, latitude, longitude)
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Reverse geocoding failed for ({latitude}, {longitude}): {e}")
        return ADDRESS_UNAVAILABLE
