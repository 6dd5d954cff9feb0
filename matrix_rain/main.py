import argparse
import sys
import time
from dataclasses import fields

from .app import RainApp
from .commands import get_plain_help
from .config import DEFAULT_CONFIG, get_float_setting, get_int_setting, get_setting
from .console import console
from .controls import ControlState
from .errors import InvalidConfiguration, RainError
from .palette import ColorScheme
from .utils import print_header, probe_terminal


def _scheme(value: str) -> ColorScheme:
    scheme = ColorScheme.from_name(value)
    if scheme is None:
        raise argparse.ArgumentTypeError(
            f"invalid color scheme {value!r} (choose from {', '.join(ColorScheme.names())})"
        )
    return scheme


def default_scheme() -> ColorScheme:
    """Color scheme from env/config, rejecting unknown names."""
    name = get_setting("RAIN_COLOR", DEFAULT_CONFIG["RAIN_COLOR"])
    scheme = ColorScheme.from_name(name)
    if scheme is None:
        raise InvalidConfiguration(
            f"Invalid RAIN_COLOR {name!r}, expected one of: {', '.join(ColorScheme.names())}"
        )
    return scheme


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrix",
        description="Matrix Rain terminal screensaver",
        epilog=get_plain_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s", "--speed", type=int, metavar="MS",
        default=get_int_setting("RAIN_SPEED", int(DEFAULT_CONFIG["RAIN_SPEED"])),
        help="frame delay in ms, lower is faster (default: %(default)s)",
    )
    parser.add_argument(
        "-d", "--density", type=int, metavar="0-100",
        default=get_int_setting("RAIN_DENSITY", int(DEFAULT_CONFIG["RAIN_DENSITY"])),
        help="spawn density percentage (default: %(default)s)",
    )
    parser.add_argument(
        "-n", "--spawns", type=int, metavar="N",
        default=get_int_setting("RAIN_SPAWNS", int(DEFAULT_CONFIG["RAIN_SPAWNS"])),
        help="max spawns per frame (default: %(default)s)",
    )
    parser.add_argument(
        "-l", "--length", type=int, metavar="N",
        default=get_int_setting("RAIN_LENGTH", int(DEFAULT_CONFIG["RAIN_LENGTH"])),
        help="max drop length (default: %(default)s)",
    )
    parser.add_argument(
        "-c", "--color", type=_scheme, metavar="SCHEME", default=None,
        help=f"color scheme: {', '.join(ColorScheme.names())} (default: green)",
    )
    parser.add_argument(
        "--no-splash", action="store_true",
        help="start the animation without the welcome pause",
    )
    return parser


def build_control(args: argparse.Namespace) -> ControlState:
    """Fold parsed flags into a control state, clamping out-of-range values."""
    requested = ControlState(
        speed_ms=args.speed,
        density_pct=args.density,
        max_spawns_per_frame=args.spawns,
        max_length=args.length,
        color_scheme=args.color or default_scheme(),
    )
    control = requested.clamped()
    for field in fields(ControlState):
        before = getattr(requested, field.name)
        after = getattr(control, field.name)
        if before != after:
            console.print(
                f"[yellow]Warning: {field.name} {before} is out of range, using {after}[/yellow]"
            )
    return control


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, start the animation and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        control = build_control(args)
        probe_terminal()
    except RainError as e:
        console.print(f"[red]Error: {e}[/red]")
        return e.exit_code

    if not args.no_splash:
        print_header(control)
        splash = get_float_setting(
            "RAIN_SPLASH_SECONDS", float(DEFAULT_CONFIG["RAIN_SPLASH_SECONDS"])
        )
        try:
            time.sleep(max(splash, 0.0))
        except KeyboardInterrupt:
            return 0

    app = RainApp(control)
    try:
        app.run()
    except KeyboardInterrupt:
        # Textual has already restored the terminal on its way out.
        return 0
    return app.return_code or 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
