"""Main CLI entry point for nmqtt."""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from ..transport import TransportConfig, UdpTransport
from .display import DisplayMode
from .session import HELP_TEXT, InteractiveSession

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the nmqtt CLI."""
    parser = argparse.ArgumentParser(
        prog="nmqtt",
        description="nmqtt: Interactive MQTT-over-UDP client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nmqtt 127.0.0.1:1883                   Send to a local peer
  nmqtt 127.0.0.1:1883 --mode mqtt       Treat every line as a protocol command
  nmqtt 10.0.0.5:9000 -b 0.0.0.0:9001    Bind a fixed local port
        """,
    )

    parser.add_argument("target", help="Peer address as host:port")
    parser.add_argument(
        "-b",
        "--bind",
        default="0.0.0.0:0",
        help="Local address as host:port (default: %(default)s)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[mode.value for mode in DisplayMode],
        default=DisplayMode.AUTO.value,
        help="Input and display mode (default: %(default)s)",
    )
    parser.add_argument(
        "--recv-buffer",
        type=int,
        default=4096,
        metavar="BYTES",
        help="Receive buffer size (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"nmqtt {__version__}",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the nmqtt CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = TransportConfig(
            target=args.target,
            bind=args.bind,
            recv_buffer_size=args.recv_buffer,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    transport = UdpTransport(config)
    try:
        transport.open()
    except OSError as e:
        print(f"Error: cannot open UDP socket: {e}", file=sys.stderr)
        return 1

    session = InteractiveSession(transport, DisplayMode(args.mode))
    print(f"UDP sender ready → {config.target} (mode: {args.mode})")
    print(HELP_TEXT)

    try:
        session.run(sys.stdin)
    except KeyboardInterrupt:
        logger.debug("Interrupted")
    finally:
        transport.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
