import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from . import __version__
from .calc import Coordinates

log = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class GeocodingError(ValueError):
    pass


def fetch_json(url, timeout=6):
    req = urllib.request.Request(url, headers={"User-Agent": f"salah/{__version__}"})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.load(resp)


def geocode(city, country):
    params = {
        "city": city,
        "country": country,
        "format": "jsonv2",
        "limit": 1
    }
    url = f"{NOMINATIM_URL}?{urllib.parse.urlencode(params)}"
    log.info("Geocoding city=%r country=%r", city, country)
    try:
        data = fetch_json(url)
    except (urllib.error.URLError, OSError, ValueError) as exc:
        log.warning("Geocoder request failed: %s", exc)
        raise GeocodingError(
            f"Could not get coordinates with city = `{city}` and country = `{country}` (network unavailable?)"
        ) from exc
    if not data:
        raise GeocodingError(
            f"Could not find lat, lng from city = `{city}` and country = `{country}`. Please check spelling!"
        )
    item = data[0]
    try:
        return Coordinates(lat=float(item["lat"]), lng=float(item["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodingError(f"Geocoder returned an unusable result for `{city}, {country}`: {item!r}") from exc
