import argparse
import logging
import re
import sys
import threading
from typing import NamedTuple, Optional

from tcpping.errors import (
    CountParseError,
    PortParseError,
    TcpPingError,
    TimeoutParseError,
    UsageError,
)
from tcpping.loop import SessionStats, run
from tcpping.reporter import Reporter
from tcpping.resolver import resolve
from tcpping.title import title_setter_for_platform

logger = logging.getLogger(__name__)

# ===================== Defaults =====================
DEFAULT_TIMEOUT = 2  # seconds, connect deadline and pause between attempts
MAX_PORT = 65535
# socket timeouts must fit an int of milliseconds (about 24 days);
# Event.wait has its own ceiling
MAX_TIMEOUT = int(min(threading.TIMEOUT_MAX, (2 ** 31 - 1) // 1000))

INTERRUPTED = "\nInterrupted (Ctrl+C)."

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _unsigned(text):
    # None for anything that is not a plain decimal number
    if not _UNSIGNED.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # more digits than sys.get_int_max_str_digits() allows
        return None


class Options(NamedTuple):
    host: str
    port: int
    timeout: int = DEFAULT_TIMEOUT
    count: Optional[int] = None
    verbose: bool = False
    timestamps: bool = False


class _ArgumentParser(argparse.ArgumentParser):
    # argparse would print and exit(2); let main() decide instead
    def error(self, message):
        raise TcpPingError(f"{self.prog}: error: {message}")


def build_parser(prog=None):
    parser = _ArgumentParser(
        prog=prog,
        description="TCP ping: connect to a port over and over and show the latency.",
        epilog=f"Default timeout is {DEFAULT_TIMEOUT} seconds. Stop with Ctrl+C.",
        # only the exact -t/--timeout spellings count, "--time 9" is ignored
        allow_abbrev=False,
    )
    parser.add_argument("host", nargs="?", help="IP address / hostname")
    parser.add_argument("port", nargs="?", help="TCP port")
    # nargs="?" with const="" turns a dangling "-t" into a parse error of our own
    parser.add_argument("-t", "--timeout", nargs="?", const="",
                        help="timeout in seconds, also the pause between attempts "
                             f"(default: {DEFAULT_TIMEOUT})")
    parser.add_argument("-n", "--count", nargs="?", const="",
                        help="stop after this many attempts (default: run until interrupted)")
    parser.add_argument("-T", "--timestamp", action="store_true",
                        help="prefix every line with the local time")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug diagnostics on stderr")
    return parser


def parse_port(text):
    port = _unsigned(text)
    if port is None or port > MAX_PORT:
        raise PortParseError(f"Failed to parse port: {text!r} is not a number in 0-{MAX_PORT}")
    return port


def parse_timeout(text):
    if text is None:
        return DEFAULT_TIMEOUT
    timeout = _unsigned(text)
    if not timeout or timeout > MAX_TIMEOUT:
        raise TimeoutParseError("-t <timeout in seconds>")
    return timeout


def parse_count(text):
    if text is None:
        return None
    count = _unsigned(text)
    if not count:
        raise CountParseError("-n <number of attempts>")
    return count


def parse_args(argv, prog=None):
    """Turn the command line (without the program name) into Options.

    Unknown flags and extra positionals are ignored. Raises UsageError when
    host or port is missing, and the specific parse errors otherwise.
    """
    parser = build_parser(prog)
    args, unknown = parser.parse_known_intermixed_args(argv)
    if unknown:
        logger.debug("Ignoring arguments: %s", " ".join(unknown))

    if args.host is None or args.port is None:
        raise UsageError(parser.format_help())

    return Options(
        host=args.host,
        port=parse_port(args.port),
        timeout=parse_timeout(args.timeout),
        count=parse_count(args.count),
        verbose=args.verbose,
        timestamps=args.timestamp,
    )


def setup_logging(verbose=False):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def start(options, stop_event=None):
    try:
        target = resolve(options.host)
        logger.debug("Probing %s (%s) port %d every %ds",
                     options.host, target, options.port, options.timeout)
        title_setter_for_platform().set_title(f"Probing {target} on port {options.port}")
    except KeyboardInterrupt:
        print(INTERRUPTED)
        return 0

    reporter = Reporter(timestamps=options.timestamps)
    stats = SessionStats()
    try:
        run(target, options.port, options.timeout, reporter,
            stop_event=stop_event, count=options.count, stats=stats)
    except KeyboardInterrupt:
        print(INTERRUPTED)

    reporter.summary(target, options.port, stats)
    return 0


def main(argv=None, stop_event=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
        setup_logging(options.verbose)
        return start(options, stop_event)
    except UsageError as e:
        print(e)
        return e.exit_code
    except TcpPingError as e:
        print(e, file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
