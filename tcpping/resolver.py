import logging
import socket

from tcpping.errors import ResolutionError

logger = logging.getLogger(__name__)


def resolve(host: str) -> str:
    """Return the first address ``host`` resolves to, as an IP string.

    IP literals come back unchanged. Raises ResolutionError when the lookup
    fails or yields nothing.
    """
    try:
        infos = socket.getaddrinfo(host, 0, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        logger.debug("getaddrinfo(%r) failed: %s", host, e)
        raise ResolutionError("Hostname resolve failed") from e

    if not infos:
        logger.debug("getaddrinfo(%r) returned no addresses", host)
        raise ResolutionError("Hostname resolve failed")

    family, _, _, _, sockaddr = infos[0]
    ip = sockaddr[0]
    logger.debug("Resolved %s to %s (%d candidates, family %s)",
                 host, ip, len(infos), family.name)
    return ip
