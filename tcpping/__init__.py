"""TCP port-connectivity prober: connect, time it, print a colored line, repeat."""

__version__ = "1.0.0"
