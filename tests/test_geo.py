import urllib.error
import urllib.parse

import pytest

from salah import geo
from salah.calc import Coordinates


def test_geocode_builds_query(monkeypatch):
    seen = []

    def fake_fetch(url, timeout=6):
        seen.append(url)
        return [{"lat": "43.6534817", "lon": "-79.3839347", "display_name": "Toronto"}]

    monkeypatch.setattr(geo, "fetch_json", fake_fetch)
    coords = geo.geocode("Toronto", "Canada")
    assert coords == Coordinates(lat=43.6534817, lng=-79.3839347)
    query = urllib.parse.parse_qs(urllib.parse.urlsplit(seen[0]).query)
    assert query["city"] == ["Toronto"]
    assert query["country"] == ["Canada"]
    assert query["format"] == ["jsonv2"]


def test_geocode_not_found(monkeypatch):
    monkeypatch.setattr(geo, "fetch_json", lambda url, timeout=6: [])
    with pytest.raises(geo.GeocodingError, match="check spelling"):
        geo.geocode("Atlantis", "Greece")


def test_geocode_network_error(monkeypatch):
    def offline(url, timeout=6):
        raise urllib.error.URLError("no route to host")

    monkeypatch.setattr(geo, "fetch_json", offline)
    with pytest.raises(geo.GeocodingError, match="network") as info:
        geo.geocode("Toronto", "Canada")
    assert isinstance(info.value.__cause__, urllib.error.URLError)


def test_geocode_bad_payload(monkeypatch):
    monkeypatch.setattr(geo, "fetch_json", lambda url, timeout=6: [{"lat": "north"}])
    with pytest.raises(geo.GeocodingError):
        geo.geocode("Toronto", "Canada")


def test_fetch_json_sends_user_agent(monkeypatch):
    captured = {}

    class FakeResponse:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def read(self, *args):
            return b'[{"lat": "1", "lon": "2"}]'

    def fake_urlopen(req, timeout):
        captured["agent"] = req.get_header("User-agent")
        captured["timeout"] = timeout
        return FakeResponse()

    monkeypatch.setattr(geo.urllib.request, "urlopen", fake_urlopen)
    assert geo.fetch_json("https://example.invalid/search") == [{"lat": "1", "lon": "2"}]
    assert captured["agent"].startswith("salah/")
    assert captured["timeout"] == 6
