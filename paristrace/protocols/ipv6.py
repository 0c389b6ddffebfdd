"""IPv6 header layout, defaults, length field and source address selection."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass, field
from ipaddress import IPv6Address

IPPROTO_UDP = 17
IPPROTO_IPV6 = 41

DEFAULT_VERSION = 6
DEFAULT_TRAFFIC_CLASS = 0
DEFAULT_FLOW_LABEL = 0
DEFAULT_PAYLOAD_LENGTH = 0
DEFAULT_NEXT_HEADER = IPPROTO_UDP
DEFAULT_HOP_LIMIT = 64

FLOW_LABEL_MASK = 0xFFFFF

# flow (version, traffic class, flow label), payload length, next header,
# hop limit, source address, destination address
_HEADER = struct.Struct("!IHBB16s16s")
HEADER_SIZE = _HEADER.size
PAYLOAD_LENGTH_OFFSET = 4
SRC_IP_OFFSET = 8
DST_IP_OFFSET = 24

# Any port will do: connecting a UDP socket sends nothing.
_ROUTE_PROBE_PORT = 9


def make_flow(version: int, traffic_class: int, flow_label: int) -> int:
    """Pack version, traffic class and flow label into the first 32-bit word.

    Only the 20 low bits of ``flow_label`` are kept.
    """
    flow_label &= FLOW_LABEL_MASK
    return (
        ((version & 0x0F) << 28)
        | ((traffic_class & 0xFF) << 20)
        | flow_label
    )


@dataclass
class Ipv6Header:
    """A fixed IPv6 header (no extension headers)."""

    version: int = DEFAULT_VERSION
    traffic_class: int = DEFAULT_TRAFFIC_CLASS
    flow_label: int = DEFAULT_FLOW_LABEL
    payload_length: int = DEFAULT_PAYLOAD_LENGTH
    next_header: int = DEFAULT_NEXT_HEADER
    hop_limit: int = DEFAULT_HOP_LIMIT
    src_ip: IPv6Address = field(default_factory=lambda: IPv6Address(0))
    dst_ip: IPv6Address = field(default_factory=lambda: IPv6Address(0))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Ipv6Header":
        """Parse the first 40 bytes of ``data``."""
        if len(data) < HEADER_SIZE:
            raise ValueError("not enough bytes for an IPv6 header")
        flow, plen, nxt, hlim, src, dst = _HEADER.unpack_from(data)
        return cls(
            version=flow >> 28,
            traffic_class=(flow >> 20) & 0xFF,
            flow_label=flow & FLOW_LABEL_MASK,
            payload_length=plen,
            next_header=nxt,
            hop_limit=hlim,
            src_ip=IPv6Address(src),
            dst_ip=IPv6Address(dst),
        )

    def to_bytes(self) -> bytes:
        """Serialize the header in network byte order."""
        return _HEADER.pack(
            make_flow(self.version, self.traffic_class, self.flow_label),
            self.payload_length,
            self.next_header,
            self.hop_limit,
            IPv6Address(self.src_ip).packed,
            IPv6Address(self.dst_ip).packed,
        )


def default_header() -> bytes:
    """Return the default IPv6 header bytes."""
    return Ipv6Header().to_bytes()


def header_size(segment: bytes | None) -> int:
    """Return the IPv6 header size, 0 for no segment."""
    return HEADER_SIZE if segment else 0


def is_ipv6(data: bytes) -> bool:
    """Tell whether ``data`` looks like an IPv6 packet."""
    return bool(data) and (data[0] >> 4) == DEFAULT_VERSION


def _check_segment(segment: bytes) -> None:
    if len(segment) < HEADER_SIZE:
        raise ValueError("not enough bytes for an IPv6 header")


def get_length(segment: bytes) -> int:
    """Return the whole packet length: payload length plus the header size."""
    _check_segment(segment)
    (plen,) = struct.unpack_from("!H", segment, PAYLOAD_LENGTH_OFFSET)
    return plen + HEADER_SIZE


def set_length(segment: bytearray, length: int) -> None:
    """Set the payload length so that the whole packet is ``length`` bytes."""
    _check_segment(segment)
    if length < HEADER_SIZE:
        raise ValueError(f"length {length} is smaller than an IPv6 header")
    payload_length = length - HEADER_SIZE
    if payload_length > 0xFFFF:
        raise ValueError(f"length {length} does not fit the payload length field")
    struct.pack_into("!H", segment, PAYLOAD_LENGTH_OFFSET, payload_length)


def default_source_ip(dst_ip: IPv6Address | str | bytes) -> IPv6Address:
    """Return the local address the system would use to reach ``dst_ip``."""
    destination = IPv6Address(dst_ip)
    with socket.socket(socket.AF_INET6, socket.SOCK_DGRAM) as sock:
        sock.connect((str(destination), _ROUTE_PROBE_PORT))
        local = sock.getsockname()[0]
    return IPv6Address(local.split("%", 1)[0])


def finalize(segment: bytearray) -> None:
    """Fill the source address of ``segment`` from its destination address."""
    _check_segment(segment)
    dst = IPv6Address(bytes(segment[DST_IP_OFFSET:DST_IP_OFFSET + 16]))
    segment[SRC_IP_OFFSET:SRC_IP_OFFSET + 16] = default_source_ip(dst).packed