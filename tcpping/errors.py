class TcpPingError(Exception):
    """Fatal error; ``main`` prints the message and exits with ``exit_code``."""

    exit_code = 1


class UsageError(TcpPingError):
    # Not enough arguments: usage goes to stdout and the exit is clean.
    exit_code = 0


class PortParseError(TcpPingError):
    pass


class TimeoutParseError(TcpPingError):
    pass


class CountParseError(TcpPingError):
    pass


class ResolutionError(TcpPingError):
    pass


class AddressParseError(TcpPingError):
    pass
