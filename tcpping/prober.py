import ipaddress
import logging
import socket
import time
from typing import NamedTuple

from tcpping.errors import AddressParseError

logger = logging.getLogger(__name__)


class ProbeResult(NamedTuple):
    connected: bool
    # whole milliseconds, truncated; only meaningful when connected
    duration_ms: int


def is_port_open(ip: str, port: int, timeout: float) -> bool:
    """Try one TCP connect to ``ip:port`` within ``timeout`` seconds.

    Timeouts and refusals both come back as False. An ``ip`` that is not an
    IP literal raises AddressParseError; hostnames must be resolved first.
    """
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError as e:
        raise AddressParseError(f"Could not parse ip: {ip}") from e

    try:
        with socket.create_connection((str(addr), port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug("Connect to %s port %d failed: %s", addr, port, e)
        return False


def probe(ip: str, port: int, timeout: float) -> ProbeResult:
    t0 = time.perf_counter()
    ok = is_port_open(ip, port, timeout)
    elapsed_ms = int((time.perf_counter() - t0) * 1000)
    return ProbeResult(ok, elapsed_ms)
