# main.py
import argparse
import sys

from rich.console import Console

from eventual.adapters.logging_adapter import LoggingAdapter
from eventual.core.exceptions import BindDiscoveryError
from eventual.core.logging_config import configure_logging
from eventual.core.models.bind import ProtocolKind
from eventual.core.settings import app_settings, logger, set_logger
from eventual.toolkit import build_bound_port_discovery

# main lives at the outermost layer (not in core)
# Configures logging, wires adapters through the toolkit
# and reports the discovered port on stdout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventual-wait-for-bind",
        description="Wait until a process binds a socket and print its port.",
    )
    parser.add_argument("pid", type=int, help="process id to inspect")
    parser.add_argument(
        "--udp", action="store_true", help="look for a UDP socket instead of TCP"
    )
    parser.add_argument(
        "--timeout", type=float, default=30.0, help="seconds to keep polling (default: 30)"
    )
    parser.add_argument("--log-level", default=None, help="override EVENTUAL_LOG_LEVEL")
    parser.add_argument(
        "--show-settings", action="store_true", help="print effective settings first"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = args.log_level or app_settings.EVENTUAL_LOG_LEVEL
    # Central logging configuration before swapping in the adapter at the chosen level
    configure_logging(level, stdout_for_output=True)
    set_logger(LoggingAdapter("eventual", level))
    if args.show_settings:
        app_settings.print_settings(logger)

    protocol = ProtocolKind.UDP if args.udp else ProtocolKind.TCP
    discovery = build_bound_port_discovery()
    result = discovery.query(args.pid, protocol, args.timeout)

    if not result.ok:
        err: BindDiscoveryError = result.error
        console = Console(stderr=True)
        console.print(f"[bold red]error:[/bold red] {err.message}")
        if err.diagnostic:
            console.print(err.diagnostic, markup=False)
        return 1

    print(result.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
