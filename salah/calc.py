import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from .methods import Authority, IshaMinutes, Madhab, Timing
from .timeconv import localize, next_day

log = logging.getLogger(__name__)

# Sun's upper limb on the horizon: refraction plus the solar semi-diameter.
RISE_SET_ANGLE = 0.833


class InvalidCoordinate(ValueError):
    pass


class UnreachableAngle(ValueError):
    """The sun never reaches the requested angle at this latitude and date."""


def _dtr(d):
    return (d * math.pi) / 180.0


def _rtd(r):
    return (r * 180.0) / math.pi


def _fix_angle(a):
    return a - 360.0 * math.floor(a / 360.0)


def _fix_hour(h):
    return h - 24.0 * math.floor(h / 24.0)


def julian_date(y, m, d):
    """Julian date at 0h UT of a proleptic Gregorian calendar day."""
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + d + b - 1524.5


@dataclass(frozen=True)
class SolarParameters:
    equation_of_time: float  # minutes, positive when the apparent sun runs ahead of mean time
    declination: float  # degrees


def _sun_position(jd):
    # USNO low-precision solar coordinates, good to about a minute of time
    d = jd - 2451545.0
    g = _fix_angle(357.529 + 0.98560028 * d)
    q = _fix_angle(280.459 + 0.98564736 * d)
    L = _fix_angle(q + 1.915 * math.sin(_dtr(g)) + 0.020 * math.sin(_dtr(2 * g)))
    e = 23.439 - 0.00000036 * d
    ra = _rtd(math.atan2(math.cos(_dtr(e)) * math.sin(_dtr(L)), math.cos(_dtr(L)))) / 15.0
    ra = _fix_hour(ra)
    eqt = _fix_hour(q / 15.0 - ra + 12.0) - 12.0
    decl = _rtd(math.asin(math.sin(_dtr(e)) * math.sin(_dtr(L))))
    return decl, eqt


def solar_parameters(day, lng):
    """Equation of time and declination at local mean midnight starting ``day``."""
    jd = julian_date(day.year, day.month, day.day) - lng / 360.0
    decl, eqt = _sun_position(jd)
    params = SolarParameters(equation_of_time=eqt * 60.0, declination=decl)
    log.debug("Solar parameters for %s at lng %.4f: %s", day, lng, params)
    return params


def hour_angle(angle, lat, decl):
    """Hours between solar noon and the sun sitting ``angle`` degrees below the horizon.

    Negative angles are elevations above the horizon. Raises UnreachableAngle
    when the sun never gets there on that day (polar day or night).
    """
    numerator = math.sin(_dtr(-angle)) - math.sin(_dtr(lat)) * math.sin(_dtr(decl))
    denominator = math.cos(_dtr(lat)) * math.cos(_dtr(decl))
    x = numerator / denominator
    if x < -1.0 or x > 1.0:
        raise UnreachableAngle(
            f"Sun never reaches {angle:.3f} degrees below the horizon at latitude {lat:.4f} "
            f"(declination {decl:.4f})"
        )
    return _rtd(math.acos(x)) / 15.0


def asr_angle(factor, lat, decl):
    """Depression angle (negative, so an elevation) at which shadows reach the Asr length."""
    zenith_distance = abs(lat - decl)
    if zenith_distance >= 90.0:
        raise UnreachableAngle(f"Sun stays below the horizon at latitude {lat:.4f} (declination {decl:.4f})")
    return -_rtd(math.atan(1.0 / (factor + math.tan(_dtr(zenith_distance)))))


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def __post_init__(self):
        for name, value, limit in (("latitude", self.lat, 90.0), ("longitude", self.lng, 180.0)):
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidCoordinate(f"{name} must be a number, got {value!r}")
            if math.isnan(value) or not -limit <= value <= limit:
                raise InvalidCoordinate(f"{name} {value} is outside [-{limit:g}, {limit:g}]")


@dataclass(frozen=True)
class PrayerInstant:
    timing: Timing
    time: Optional[datetime]  # None when the sun angle is never reached

    @property
    def reachable(self):
        return self.time is not None


@dataclass(frozen=True)
class PrayerSchedule:
    day: date
    coords: Coordinates
    authority: Authority
    madhab: Madhab
    utc_offset_minutes: int
    instants: tuple

    def __getitem__(self, key):
        timing = Timing[key] if isinstance(key, str) else key
        for instant in self.instants:
            if instant.timing is timing:
                return instant
        raise KeyError(key)

    def __iter__(self):
        return iter(self.instants)

    def __len__(self):
        return len(self.instants)

    def as_dict(self):
        return {instant.timing.name: instant.time for instant in self.instants}


class PrayTimes:
    def __init__(self, authority=Authority.ISNA, madhab=Madhab.Standard):
        if isinstance(authority, str):
            authority = Authority.parse(authority)
        if isinstance(madhab, str):
            madhab = Madhab.parse(madhab)
        if not isinstance(authority, Authority):
            raise TypeError(f"authority must be an Authority, got {authority!r}")
        if not isinstance(madhab, Madhab):
            raise TypeError(f"madhab must be a Madhab, got {madhab!r}")
        self.authority = authority
        self.madhab = madhab

    def get_times(self, day, coords, utc_offset_minutes):
        if not isinstance(coords, Coordinates):
            raise TypeError(f"coords must be Coordinates, got {coords!r}")
        utc_offset_minutes = int(utc_offset_minutes)
        # fail on unrepresentable dates before doing any work
        tomorrow = next_day(day)

        sun, dhuhr = self._mid_day(day, coords, utc_offset_minutes)
        lat, decl = coords.lat, sun.declination

        times = {
            Timing.fajr: self._sun_angle_time(self.authority.fajr_angle, dhuhr, lat, decl, "ccw"),
            Timing.sunrise: self._sun_angle_time(RISE_SET_ANGLE, dhuhr, lat, decl, "ccw"),
            Timing.dhuhr: dhuhr,
            Timing.asr: self._asr_time(dhuhr, lat, decl),
            Timing.maghrib: self._sun_angle_time(RISE_SET_ANGLE, dhuhr, lat, decl, "cw"),
        }

        isha = self.authority.isha
        if isinstance(isha, IshaMinutes):
            times[Timing.isha] = None
        else:
            times[Timing.isha] = self._sun_angle_time(isha.degrees, dhuhr, lat, decl, "cw")

        times[Timing.midnight] = self._midnight(times[Timing.maghrib], tomorrow, coords, utc_offset_minutes)

        stamps = {}
        for timing, hour in times.items():
            stamps[timing] = None if hour is None else localize(hour, day, utc_offset_minutes)
        if isinstance(isha, IshaMinutes) and stamps[Timing.maghrib] is not None:
            stamps[Timing.isha] = stamps[Timing.maghrib] + timedelta(minutes=isha.minutes)

        return PrayerSchedule(
            day=day,
            coords=coords,
            authority=self.authority,
            madhab=self.madhab,
            utc_offset_minutes=utc_offset_minutes,
            instants=tuple(PrayerInstant(timing, stamps[timing]) for timing in Timing),
        )

    def _mid_day(self, day, coords, utc_offset_minutes):
        sun = solar_parameters(day, coords.lng)
        noon = 12.0 - sun.equation_of_time / 60.0 - coords.lng / 15.0
        # keep the local noon on ``day`` even when the zone is far from the longitude
        noon -= 24.0 * math.floor((noon + utc_offset_minutes / 60.0) / 24.0)
        return sun, noon

    def _sun_angle_time(self, angle, noon, lat, decl, direction):
        try:
            t = hour_angle(angle, lat, decl)
        except UnreachableAngle as exc:
            log.debug("%s", exc)
            return None
        return noon - t if direction == "ccw" else noon + t

    def _asr_time(self, noon, lat, decl):
        try:
            angle = asr_angle(self.madhab.shadow_factor, lat, decl)
        except UnreachableAngle as exc:
            log.debug("%s", exc)
            return None
        return self._sun_angle_time(angle, noon, lat, decl, "cw")

    def _midnight(self, maghrib, tomorrow, coords, utc_offset_minutes):
        if maghrib is None:
            return None
        sun, noon = self._mid_day(tomorrow, coords, utc_offset_minutes)
        fajr = self._sun_angle_time(self.authority.fajr_angle, noon, coords.lat, sun.declination, "ccw")
        if fajr is None:
            return None
        # tomorrow's hours are counted from tomorrow's 0h UTC
        return maghrib + (fajr + 24.0 - maghrib) / 2.0


def compute_schedule(coords, day, utc_offset_minutes, authority=Authority.ISNA, madhab=Madhab.Standard):
    return PrayTimes(authority, madhab).get_times(day, coords, utc_offset_minutes)
