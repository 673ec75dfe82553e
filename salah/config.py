import json
import logging
import os

log = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "salah")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "timezone": "America/Toronto",
    "authority": "ISNA",
    "madhab": "Standard",
    "format": "%H:%M:%S",
    "locations": {}
}


def load_config(path=CONFIG_PATH):
    if not os.path.exists(path):
        log.info("Writing default config to %s", path)
        save_config(DEFAULT_CONFIG, path)
        return dict(DEFAULT_CONFIG, locations={})
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    config = dict(DEFAULT_CONFIG, locations={})
    config.update(data)
    return config


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def get_location(config, name):
    """A named ``{lat, lng, tz}`` entry from the config, or ValueError."""
    loc = config.get("locations", {}).get(name)
    if not loc or "lat" not in loc or "lng" not in loc:
        raise ValueError(f"Unknown location: {name}")
    return loc
