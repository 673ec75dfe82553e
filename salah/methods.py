from dataclasses import dataclass
from enum import Enum


class UnknownAuthority(ValueError):
    pass


class UnknownMadhab(ValueError):
    pass


class UnknownTiming(ValueError):
    pass


@dataclass(frozen=True)
class IshaAngle:
    degrees: float


@dataclass(frozen=True)
class IshaMinutes:
    """Isha at a fixed delay after Maghrib, independent of the sun's depression."""
    minutes: int


class Authority(Enum):
    MWL = "MWL"
    ISNA = "ISNA"
    Egypt = "Egypt"
    Makkah = "Makkah"
    Karachi = "Karachi"
    Tehran = "Tehran"
    Jafari = "Jafari"

    @classmethod
    def parse(cls, name):
        key = name.strip().lower()
        for auth in cls:
            if auth.value.lower() == key:
                return auth
        raise UnknownAuthority(f"Unknown authority: {name}")

    @property
    def fajr_angle(self):
        return METHODS[self]["fajr"]

    @property
    def isha(self):
        return METHODS[self]["isha"]

    @property
    def title(self):
        return METHODS[self]["name"]

    @property
    def desc(self):
        return METHODS[self]["desc"]


METHODS = {
    Authority.MWL: {
        "name": "Muslim World League",
        "desc": "Fajr at 18 degrees, Isha at 17 degrees.",
        "fajr": 18.0,
        "isha": IshaAngle(17.0),
    },
    Authority.ISNA: {
        "name": "Islamic Society of North America",
        "desc": "Fajr at 15 degrees, Isha at 15 degrees.",
        "fajr": 15.0,
        "isha": IshaAngle(15.0),
    },
    Authority.Egypt: {
        "name": "Egyptian General Authority of Survey",
        "desc": "Fajr at 19.5 degrees, Isha at 17.5 degrees.",
        "fajr": 19.5,
        "isha": IshaAngle(17.5),
    },
    Authority.Makkah: {
        "name": "Umm al-Qura University, Makkah",
        "desc": "Fajr at 18.5 degrees, Isha 90 min after Maghrib.",
        "fajr": 18.5,
        "isha": IshaMinutes(90),
    },
    Authority.Karachi: {
        "name": "University of Islamic Sciences, Karachi",
        "desc": "Fajr at 18 degrees, Isha at 18 degrees.",
        "fajr": 18.0,
        "isha": IshaAngle(18.0),
    },
    Authority.Tehran: {
        "name": "Institute of Geophysics, University of Tehran",
        "desc": "Fajr at 17.7 degrees, Isha at 14 degrees.",
        "fajr": 17.7,
        "isha": IshaAngle(14.0),
    },
    Authority.Jafari: {
        "name": "Shia Ithna Ashari, Leva Research Institute, Qum",
        "desc": "Fajr at 16 degrees, Isha at 14 degrees.",
        "fajr": 16.0,
        "isha": IshaAngle(14.0),
    },
}


class Madhab(Enum):
    Standard = 1
    Hanafi = 2

    @classmethod
    def parse(cls, name):
        key = name.strip().lower()
        if key in {"standard", "shafi", "maliki", "hanbali"}:
            return cls.Standard
        if key == "hanafi":
            return cls.Hanafi
        raise UnknownMadhab(f"Unknown madhab: {name}")

    @property
    def shadow_factor(self):
        return self.value


class Timing(Enum):
    fajr = "The dawn prayer time. Dependent on angle determined by authority (see salah authority)."
    sunrise = "Sunrise time. Fajr time ends at sunrise."
    dhuhr = "The mid-day prayer time."
    asr = "The afternoon prayer time. Dependent on madhab (Hanafi vs others)."
    maghrib = "The sunset prayer time."
    isha = "The night prayer time. Dependent on angle determined by authority (see salah authority)."
    midnight = "The Islamic midnight time. Isha time ends at midnight."

    @property
    def label(self):
        return self.name.capitalize()

    @property
    def desc(self):
        return self.value


FARDH = "fardh"
FARDH_DESC = "Only the 5 obligatory (fardh) prayer times. Ignores any others."
PRAYER_ORDER = [Timing.fajr, Timing.dhuhr, Timing.asr, Timing.maghrib, Timing.isha]


def parse_timings(names):
    """Resolve timing names (or ``fardh``) into schedule order, without duplicates."""
    selected = set()
    for name in names:
        key = name.strip().lower()
        if key == FARDH:
            selected.update(PRAYER_ORDER)
            continue
        try:
            selected.add(Timing[key])
        except KeyError:
            raise UnknownTiming(f"timing = `{name}` is not valid!") from None
    return [t for t in Timing if t in selected]
