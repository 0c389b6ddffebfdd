"""Raw sockets used to send fully built IPv4 and IPv6 packets."""

from __future__ import annotations

import socket
from ipaddress import IPv4Address, IPv6Address, ip_address


def _raw_socket(family: int) -> socket.socket:
    try:
        return socket.socket(family, socket.SOCK_RAW, socket.IPPROTO_RAW)
    except OSError as exc:
        raise type(exc)(
            exc.errno, f"cannot create a raw socket (are you root?): {exc.strerror}"
        ) from exc


class SocketPool:
    """One IPv4 and one IPv6 raw socket through which packets are sent.

    Creating raw sockets usually requires administrator privileges.
    """

    def __init__(self) -> None:
        self._ipv4 = _raw_socket(socket.AF_INET)
        try:
            self._ipv6 = _raw_socket(socket.AF_INET6)
        except OSError:
            self._ipv4.close()
            raise
        self._closed = False

    def send_packet(self, packet: bytes, dst_ip: IPv4Address | IPv6Address | str) -> int:
        """Send the whole ``packet`` (IP header included) towards ``dst_ip``.

        Returns the number of bytes sent. Raises ValueError for an address
        that is neither IPv4 nor IPv6 and OSError when sending fails.
        """
        if self._closed:
            raise ValueError("operation on a closed socket pool")
        try:
            destination = ip_address(dst_ip)
        except ValueError as exc:
            raise ValueError(f"address family not supported: {dst_ip!r}") from exc
        sock = self._ipv4 if destination.version == 4 else self._ipv6
        # The port is ignored by raw sockets; the packet carries its own.
        return sock.sendto(bytes(packet), (str(destination), 0))

    def close(self) -> None:
        """Close both raw sockets."""
        if self._closed:
            return
        self._closed = True
        self._ipv4.close()
        self._ipv6.close()

    def __enter__(self) -> "SocketPool":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()