"""ICMPv4 header defaults, checksum and nested protocol detection."""

from __future__ import annotations

import struct

from paristrace.protocols.pseudo_header import internet_checksum

IPPROTO_ICMP = 1

ICMP_ECHOREPLY = 0
ICMP_DEST_UNREACH = 3
ICMP_ECHO = 8
ICMP_TIME_EXCEEDED = 11

DEFAULT_TYPE = ICMP_ECHO
DEFAULT_CODE = 0
DEFAULT_CHECKSUM = 0
DEFAULT_BODY = 0

# type, code, checksum, body (rest of the 8-byte header)
_HEADER = struct.Struct("!BBHI")
HEADER_SIZE = _HEADER.size
CHECKSUM_OFFSET = 2


def default_header() -> bytes:
    """Return the default ICMPv4 echo request header."""
    return _HEADER.pack(DEFAULT_TYPE, DEFAULT_CODE, DEFAULT_CHECKSUM, DEFAULT_BODY)


def header_size(segment: bytes | None) -> int:
    """Return the ICMPv4 header size, 0 for no segment."""
    return HEADER_SIZE if segment else 0


def write_checksum(segment: bytearray, pseudo_header: bytes | None = None) -> int:
    """Compute the ICMPv4 header checksum, store it and return it.

    ICMPv4 uses no pseudo header; passing one is an error.
    """
    if pseudo_header is not None:
        raise ValueError("ICMPv4 checksum takes no pseudo header")
    if len(segment) < HEADER_SIZE:
        raise ValueError("not enough bytes for an ICMPv4 header")
    segment[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] = b"\x00\x00"
    csum = internet_checksum(bytes(segment[:HEADER_SIZE]))
    struct.pack_into("!H", segment, CHECKSUM_OFFSET, csum)
    return csum


def next_protocol(segment: bytes) -> str | None:
    """Name the protocol quoted after this ICMPv4 header, if any."""
    if not segment:
        return None
    if segment[0] in (ICMP_DEST_UNREACH, ICMP_TIME_EXCEEDED):
        return "ipv4"
    return None