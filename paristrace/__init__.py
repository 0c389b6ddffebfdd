"""Building blocks for Paris-style traceroute: headers, checksums, raw-socket sending, an event queue and option checks."""

__version__ = "0.1.0"