"""IPv4 header layout, defaults, checksum and source address selection."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass, field
from ipaddress import IPv4Address

from paristrace.protocols.pseudo_header import internet_checksum

IPPROTO_IPIP = 4

DEFAULT_VERSION = 4
DEFAULT_IHL = 5
DEFAULT_TOS = 0
DEFAULT_LENGTH = 0
DEFAULT_IDENTIFICATION = 1
DEFAULT_FRAGOFF = 0
DEFAULT_TTL = 255
DEFAULT_PROTOCOL = IPPROTO_IPIP
DEFAULT_CHECKSUM = 0

_HEADER = struct.Struct("!BBHHHBBH4s4s")
HEADER_SIZE = _HEADER.size
CHECKSUM_OFFSET = 10
SRC_IP_OFFSET = 12
DST_IP_OFFSET = 16

# Any port will do: connecting a UDP socket sends nothing.
_ROUTE_PROBE_PORT = 9


@dataclass
class Ipv4Header:
    """An IPv4 header without options."""

    version: int = DEFAULT_VERSION
    ihl: int = DEFAULT_IHL
    tos: int = DEFAULT_TOS
    length: int = DEFAULT_LENGTH
    identification: int = DEFAULT_IDENTIFICATION
    fragoff: int = DEFAULT_FRAGOFF
    ttl: int = DEFAULT_TTL
    protocol: int = DEFAULT_PROTOCOL
    checksum: int = DEFAULT_CHECKSUM
    src_ip: IPv4Address = field(default_factory=lambda: IPv4Address(0))
    dst_ip: IPv4Address = field(default_factory=lambda: IPv4Address(0))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Ipv4Header":
        """Parse the first 20 bytes of ``data``."""
        if len(data) < HEADER_SIZE:
            raise ValueError("not enough bytes for an IPv4 header")
        (vihl, tos, length, ident, frag, ttl, proto, csum, src, dst) = _HEADER.unpack_from(data)
        return cls(
            version=vihl >> 4,
            ihl=vihl & 0x0F,
            tos=tos,
            length=length,
            identification=ident,
            fragoff=frag,
            ttl=ttl,
            protocol=proto,
            checksum=csum,
            src_ip=IPv4Address(src),
            dst_ip=IPv4Address(dst),
        )

    def to_bytes(self) -> bytes:
        """Serialize the header in network byte order."""
        return _HEADER.pack(
            ((self.version & 0x0F) << 4) | (self.ihl & 0x0F),
            self.tos,
            self.length,
            self.identification,
            self.fragoff,
            self.ttl,
            self.protocol,
            self.checksum,
            IPv4Address(self.src_ip).packed,
            IPv4Address(self.dst_ip).packed,
        )


def default_header() -> bytes:
    """Return the default IPv4 header bytes."""
    return Ipv4Header().to_bytes()


def header_size(segment: bytes | None) -> int:
    """Return the header size given by the IHL field, 0 for no segment."""
    if not segment:
        return 0
    return 4 * (segment[0] & 0x0F)


def write_checksum(segment: bytearray) -> int:
    """Compute the header checksum, store it in ``segment`` and return it."""
    if len(segment) < HEADER_SIZE:
        raise ValueError("not enough bytes for an IPv4 header")
    segment[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] = b"\x00\x00"
    csum = internet_checksum(bytes(segment[:HEADER_SIZE]))
    struct.pack_into("!H", segment, CHECKSUM_OFFSET, csum)
    return csum


def is_ipv4(data: bytes) -> bool:
    """Tell whether ``data`` looks like an IPv4 packet."""
    return bool(data) and (data[0] >> 4) == DEFAULT_VERSION


def default_source_ip(dst_ip: IPv4Address | str | bytes) -> IPv4Address:
    """Return the local address the system would use to reach ``dst_ip``."""
    destination = IPv4Address(dst_ip)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect((str(destination), _ROUTE_PROBE_PORT))
        return IPv4Address(sock.getsockname()[0])


def finalize(segment: bytearray) -> None:
    """Fill the source address of ``segment`` from its destination address."""
    if len(segment) < HEADER_SIZE:
        raise ValueError("not enough bytes for an IPv4 header")
    dst = IPv4Address(bytes(segment[DST_IP_OFFSET:DST_IP_OFFSET + 4]))
    segment[SRC_IP_OFFSET:SRC_IP_OFFSET + 4] = default_source_ip(dst).packed