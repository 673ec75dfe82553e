from .methods import FARDH, FARDH_DESC, Authority, Timing

UNREACHABLE = "--:--"


def format_instant(instant, fmt="%H:%M:%S"):
    if not instant.reachable:
        return UNREACHABLE
    return instant.time.strftime(fmt)


def render_schedule(schedule, timings=None, fmt="%H:%M:%S"):
    wanted = set(timings) if timings else set(Timing)
    lines = []
    for instant in schedule:
        if instant.timing in wanted:
            lines.append(f"{instant.timing.label:<10}{format_instant(instant, fmt)}")
    return "\n".join(lines)


def render_timings():
    lines = [
        "Usage: salah <location | coord> [OPTIONS] [TIMINGS]...",
        "",
        "The below can be passed to [TIMINGS]...",
        "",
        "Timings:"
    ]
    for timing in Timing:
        lines.append(f"  {timing.name:<10}{timing.desc}")
    lines.append(f"  {FARDH:<10}{FARDH_DESC}")
    return "\n".join(lines)


def render_authorities():
    lines = [
        "Usage: --auth <AUTH>",
        "",
        "Explanation:",
        "Calculation authorities are used for the calculation of Fajr and Isha.",
        "The time for Fajr is described as dawn; when there is fine white line at the horizon.",
        "Isha time is described as when the night sky has lost all the light from the sunset.",
        "As this is quite ambiguous, the scholars have differed upon the angle that the sun",
        "makes when these two times occur. Each authority has slightly different angles for",
        "Fajr and Isha. Makkah uses a time difference from Maghrib (sunset).",
        "",
        "The below can be used with the --auth <AUTH> option when calculating timings.",
        "",
        "Authorities:"
    ]
    for auth in Authority:
        lines.append(f"  {auth.value:<10}{auth.desc} - {auth.title}")
    return "\n".join(lines)
