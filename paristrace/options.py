"""Command-line option checks and probe settings for the traceroute tool."""

from __future__ import annotations

import socket

ALGORITHM_NAMES = ("paris-traceroute", "mda")
PROTOCOL_NAMES = ("udp", "icmp", "tcp")

DEFAULT_ALGORITHM = ALGORITHM_NAMES[0]
DEFAULT_PROTOCOL = PROTOCOL_NAMES[0]

# Defaults, based on the modern traceroute for Linux.
UDP_DEFAULT_SRC_PORT = 33457
UDP_DEFAULT_DST_PORT = 33456
UDP_DST_PORT_USING_U = 53

TCP_DEFAULT_SRC_PORT = 16449
TCP_DEFAULT_DST_PORT = 16963
TCP_DST_PORT_USING_T = 80

PORT_MIN = 0
PORT_MAX = 0xFFFF

# Above this value, the time between probes is given in milliseconds.
DELAY_SECONDS_LIMIT = 10


class OptionError(ValueError):
    """Raised when command-line options conflict or hold invalid values."""


def check_ip_version(is_ipv4: bool, is_ipv6: bool) -> None:
    """Refuse to force both IPv4 and IPv6 at once."""
    if is_ipv4 and is_ipv6:
        raise OptionError("Cannot set both ip versions")


def check_protocol(is_icmp: bool, is_tcp: bool, is_udp: bool) -> None:
    """Refuse more than one of ICMP, TCP and UDP."""
    if sum(map(bool, (is_icmp, is_tcp, is_udp))) > 1:
        raise OptionError("Cannot use simultaneously icmp tcp and udp tracerouting")


def check_ports(is_icmp: bool, dst_port_enabled: bool, src_port_enabled: bool) -> None:
    """Refuse port options when tracerouting with ICMP."""
    if is_icmp and (dst_port_enabled or src_port_enabled):
        raise OptionError("Cannot use --src-port or --dst-port when using icmp tracerouting")


def check_algorithm(algorithm_name: str, mda_options_set: bool) -> None:
    """Refuse MDA options unless the MDA algorithm is chosen."""
    if mda_options_set and algorithm_name != "mda":
        raise OptionError(
            "You cannot pass options related to mda when using another algorithm"
        )


def check_options(
    is_icmp: bool,
    is_tcp: bool,
    is_udp: bool,
    is_ipv4: bool,
    is_ipv6: bool,
    dst_port_enabled: bool,
    src_port_enabled: bool,
    algorithm_name: str,
    mda_options_set: bool,
) -> None:
    """Run every option check in turn; the first conflict found is raised."""
    check_ip_version(is_ipv4, is_ipv6)
    check_protocol(is_icmp, is_tcp, is_udp)
    check_ports(is_icmp, dst_port_enabled, src_port_enabled)
    check_algorithm(algorithm_name, mda_options_set)


def ip_protocol_name(family: int) -> str:
    """Return "ipv4" or "ipv6" for an address family."""
    if family == socket.AF_INET:
        return "ipv4"
    if family == socket.AF_INET6:
        return "ipv6"
    raise ValueError(f"Internet family not supported ({family})")


def protocol_name(family: int, use_icmp: bool, use_tcp: bool, use_udp: bool) -> str | None:
    """Name the transport protocol of the probes; ICMP wins over TCP over UDP.

    Returns None when no protocol is selected.
    """
    if use_icmp:
        if family == socket.AF_INET:
            return "icmpv4"
        if family == socket.AF_INET6:
            return "icmpv6"
        raise ValueError(f"Internet family not supported ({family})")
    if use_tcp:
        return "tcp"
    if use_udp:
        return "udp"
    return None


def _check_port(port: int, what: str) -> int:
    if not PORT_MIN <= port <= PORT_MAX:
        raise OptionError(f"{what} port {port} is out of range [{PORT_MIN}, {PORT_MAX}]")
    return port


def select_ports(
    use_udp: bool,
    use_tcp: bool,
    is_udp: bool,
    is_tcp: bool,
    src_port: int | None,
    dst_port: int | None,
) -> tuple[int, int]:
    """Return the (source, destination) ports of the probes.

    ``src_port`` and ``dst_port`` are the user's values, or None when not
    given. Without an explicit destination port, -U selects port 53 and -T
    port 80. Neither UDP nor TCP gives (0, 0).
    """
    if use_udp:
        default_src = UDP_DEFAULT_SRC_PORT
        default_dst = UDP_DST_PORT_USING_U if is_udp else UDP_DEFAULT_DST_PORT
    elif use_tcp:
        default_src = TCP_DEFAULT_SRC_PORT
        default_dst = TCP_DST_PORT_USING_T if is_tcp else TCP_DEFAULT_DST_PORT
    else:
        return 0, 0
    sport = default_src if src_port is None else _check_port(src_port, "source")
    dport = default_dst if dst_port is None else _check_port(dst_port, "destination")
    return sport, dport


def probe_delay(send_time: float | None) -> float | None:
    """Convert the -z value into seconds between probes.

    Values up to 10 are seconds, larger ones milliseconds. None means the
    option was not given and gives None.
    """
    if send_time is None:
        return None
    if send_time <= DELAY_SECONDS_LIMIT:
        return float(send_time)
    return 0.001 * send_time