"""UDP header defaults, checksum and pseudo header selection."""

from __future__ import annotations

import struct

from paristrace.protocols.pseudo_header import internet_checksum, pseudo_header_for

IPPROTO_UDP = 17

DEFAULT_SRC_PORT = 2828
DEFAULT_DST_PORT = 2828
DEFAULT_LENGTH = 0
DEFAULT_CHECKSUM = 0

# src_port, dst_port, length, checksum
_HEADER = struct.Struct("!HHHH")
HEADER_SIZE = _HEADER.size
LENGTH_OFFSET = 4
CHECKSUM_OFFSET = 6


def default_header() -> bytes:
    """Return the default UDP header bytes."""
    return _HEADER.pack(DEFAULT_SRC_PORT, DEFAULT_DST_PORT, DEFAULT_LENGTH, DEFAULT_CHECKSUM)


def header_size(segment: bytes | None) -> int:
    """Return the UDP header size, 0 for no segment."""
    return HEADER_SIZE if segment else 0


def write_checksum(segment: bytearray, pseudo_header: bytes | None) -> int:
    """Compute the UDP checksum over the pseudo header and the datagram.

    The datagram size is read from the UDP length field. The checksum is
    stored in ``segment`` and returned. A pseudo header is required.
    """
    if pseudo_header is None:
        raise ValueError("UDP checksum requires an IP pseudo header")
    if len(segment) < HEADER_SIZE:
        raise ValueError("not enough bytes for a UDP header")
    (length,) = struct.unpack_from("!H", segment, LENGTH_OFFSET)
    if length > len(segment):
        raise ValueError(
            f"UDP length field ({length}) exceeds the segment size ({len(segment)})"
        )
    datagram = bytearray(segment[:length])
    if length >= CHECKSUM_OFFSET + 2:
        datagram[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] = b"\x00\x00"
    csum = internet_checksum(bytes(pseudo_header) + bytes(datagram))
    struct.pack_into("!H", segment, CHECKSUM_OFFSET, csum)
    return csum


def create_pseudo_header(ip_segment: bytes) -> bytes:
    """Build the IPv4 or IPv6 pseudo header for the IP packet carrying UDP."""
    return pseudo_header_for(ip_segment)