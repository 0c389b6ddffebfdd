"""ICMPv6 header defaults, checksum and nested protocol detection."""

from __future__ import annotations

import struct

from paristrace.protocols.pseudo_header import internet_checksum

IPPROTO_ICMPV6 = 58

ICMP6_DST_UNREACH = 1
ICMP6_TIME_EXCEEDED = 3
ICMP6_ECHO_REQUEST = 128
ICMP6_ECHO_REPLY = 129

DEFAULT_TYPE = ICMP6_ECHO_REQUEST
DEFAULT_CODE = 0
DEFAULT_CHECKSUM = 0
DEFAULT_BODY = 0

# type, code, checksum, body (32 bits)
_HEADER = struct.Struct("!BBHI")
HEADER_SIZE = _HEADER.size
CHECKSUM_OFFSET = 2


def default_header() -> bytes:
    """Return the default ICMPv6 echo request header."""
    return _HEADER.pack(DEFAULT_TYPE, DEFAULT_CODE, DEFAULT_CHECKSUM, DEFAULT_BODY)


def header_size(segment: bytes | None) -> int:
    """Return the ICMPv6 header size, 0 for no segment."""
    return HEADER_SIZE if segment else 0


def write_checksum(segment: bytearray, pseudo_header: bytes | None) -> int:
    """Compute the ICMPv6 checksum over the pseudo header and the header.

    The checksum is stored in ``segment`` and returned. A pseudo header is
    required.
    """
    if pseudo_header is None:
        raise ValueError("ICMPv6 checksum requires the IPv6 pseudo header")
    if len(segment) < HEADER_SIZE:
        raise ValueError("not enough bytes for an ICMPv6 header")
    header = bytearray(segment[:HEADER_SIZE])
    header[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] = b"\x00\x00"
    csum = internet_checksum(bytes(pseudo_header) + bytes(header))
    struct.pack_into("!H", segment, CHECKSUM_OFFSET, csum)
    return csum


def next_protocol(segment: bytes) -> str | None:
    """Name the protocol quoted after this ICMPv6 header, if any."""
    if not segment:
        return None
    if segment[0] in (ICMP6_DST_UNREACH, ICMP6_TIME_EXCEEDED):
        return "ipv6"
    return None