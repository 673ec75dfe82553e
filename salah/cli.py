import argparse
import logging
import sys

from . import __version__
from .calc import Coordinates, PrayTimes
from .config import CONFIG_PATH, get_location, load_config
from .geo import geocode
from .methods import Authority, Madhab, Timing, parse_timings
from .render import render_authorities, render_schedule, render_timings
from .timeconv import get_timezone, parse_date, utc_offset_minutes

log = logging.getLogger(__name__)


def resolve_request(args, config):
    """Turn parsed arguments plus config defaults into calculator inputs."""
    tz_name = args.timezone
    if args.command == "location":
        coords = geocode(args.city, args.country)
    elif args.location:
        loc = get_location(config, args.location)
        coords = Coordinates(lat=float(loc["lat"]), lng=float(loc["lng"]))
        tz_name = tz_name or loc.get("tz")
    elif args.lat is not None and args.lng is not None:
        coords = Coordinates(lat=args.lat, lng=args.lng)
    else:
        raise ValueError("coord needs --lat and --lng, or --location NAME")

    tz_name = tz_name or config.get("timezone")
    get_timezone(tz_name)
    day = parse_date(args.date, tz_name)

    authority = Authority.parse(args.auth or config.get("authority", "ISNA"))
    if args.hanafi:
        madhab = Madhab.Hanafi
    else:
        madhab = Madhab.parse(config.get("madhab", "Standard"))

    timings = list(Timing) if args.all or not args.timings else parse_timings(args.timings)
    fmt = args.format or config.get("format", "%H:%M:%S")
    return coords, day, tz_name, authority, madhab, timings, fmt


def handle_cli(args):
    if args.command == "timings":
        print(render_timings())
        return 0

    if args.command == "authority":
        print(render_authorities())
        return 0

    config = load_config(args.config)
    coords, day, tz_name, authority, madhab, timings, fmt = resolve_request(args, config)
    offset = utc_offset_minutes(tz_name, day)
    log.debug(
        "Calculating %s at %s in %s (%+d min), %s / %s",
        day, coords, tz_name, offset, authority.value, madhab.name
    )
    schedule = PrayTimes(authority, madhab).get_times(day, coords, offset)
    print(render_schedule(schedule, timings, fmt))
    return 0


def _add_common(parser):
    parser.add_argument(
        "timings", nargs="*",
        help="Names of the timings to calculate (see `salah timings`); ignored by --all"
    )
    parser.add_argument("-d", "--date", default="today", help="Date to calculate for (YYYY-MM-DD or `today`)")
    parser.add_argument("-t", "--timezone", help="IANA time zone to output the timings in")
    parser.add_argument("-a", "--all", action="store_true", help="Calculate all the available timings")
    parser.add_argument("--hanafi", action="store_true", help="Use the Hanafi madhab for Asr")
    parser.add_argument("--auth", help="Calculation authority (see `salah authority`)")
    parser.add_argument("--format", help="strftime format for the timings, e.g. %%H:%%M:%%S")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to the JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="salah", description="Islamic prayer times from solar astronomy")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    location = sub.add_parser(
        "location",
        help="Use city/country to get prayer times (network connection required)"
    )
    location.add_argument("--city", required=True, help="City to calculate the times for")
    location.add_argument("--country", required=True, help="Country to calculate the times for")
    _add_common(location)

    coord = sub.add_parser("coord", help="Use latitude/longitude to get prayer times")
    coord.add_argument("--lat", type=float, help="Latitude to calculate the times for")
    coord.add_argument("--lng", type=float, help="Longitude to calculate the times for")
    coord.add_argument("--location", help="Named location saved in the config file")
    _add_common(coord)

    sub.add_parser("timings", help="List all the available timings")
    sub.add_parser("authority", help="List all the calculation authorities")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )

    try:
        return handle_cli(args)
    except Exception as exc:
        log.debug("Request failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
