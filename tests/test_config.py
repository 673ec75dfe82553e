import json

import pytest

from salah.config import DEFAULT_CONFIG, get_location, load_config, save_config


def test_load_writes_defaults(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = load_config(str(path))
    assert config == DEFAULT_CONFIG
    assert json.loads(path.read_text()) == DEFAULT_CONFIG


def test_load_merges_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"authority": "MWL"}))
    config = load_config(str(path))
    assert config["authority"] == "MWL"
    assert config["timezone"] == DEFAULT_CONFIG["timezone"]
    assert config["locations"] == {}


def test_save_round_trip(tmp_path):
    path = str(tmp_path / "config.json")
    config = load_config(path)
    config["locations"]["home"] = {"lat": 36.46, "lng": 7.43, "tz": "Africa/Algiers"}
    save_config(config, path)
    assert get_location(load_config(path), "home")["tz"] == "Africa/Algiers"
    # the defaults themselves are never mutated
    assert DEFAULT_CONFIG["locations"] == {}


def test_get_location_requires_coordinates():
    config = {"locations": {"half": {"lat": 1.0}}}
    with pytest.raises(ValueError):
        get_location(config, "half")
    with pytest.raises(ValueError):
        get_location(config, "nowhere")
