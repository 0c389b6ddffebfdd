"""Internet checksum and the IPv4/IPv6 pseudo headers used by transport checksums."""

from __future__ import annotations

import struct

IPV4_HEADER_MIN_SIZE = 20
IPV6_HEADER_SIZE = 40

# src_ip, dst_ip, zero, protocol, size of the IP payload
_IPV4_PSEUDO = struct.Struct("!4s4sBBH")
# src_ip, dst_ip, size (32 bits), zeros (16 bits), zero (8 bits), protocol
_IPV6_PSEUDO = struct.Struct("!16s16sIHBB")


def internet_checksum(data: bytes) -> int:
    """Return the 16-bit one's complement checksum of ``data`` (RFC 1071).

    An odd trailing byte is padded with a zero byte.
    """
    buf = bytes(data)
    if len(buf) % 2:
        buf += b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", buf))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def ipv4_pseudo_header(ipv4_segment: bytes) -> bytes:
    """Build the 12-byte IPv4 pseudo header for the packet starting at ``ipv4_segment``."""
    if len(ipv4_segment) < IPV4_HEADER_MIN_SIZE:
        raise ValueError("IPv4 segment is shorter than an IPv4 header")
    ihl = ipv4_segment[0] & 0x0F
    (total_length,) = struct.unpack_from("!H", ipv4_segment, 2)
    protocol = ipv4_segment[9]
    src = bytes(ipv4_segment[12:16])
    dst = bytes(ipv4_segment[16:20])
    size = (total_length - 4 * ihl) & 0xFFFF
    return _IPV4_PSEUDO.pack(src, dst, 0, protocol, size)


def ipv6_pseudo_header(ipv6_segment: bytes) -> bytes:
    """Build the 40-byte IPv6 pseudo header for the packet starting at ``ipv6_segment``."""
    if len(ipv6_segment) < IPV6_HEADER_SIZE:
        raise ValueError("IPv6 segment is shorter than an IPv6 header")
    payload_length, next_header = struct.unpack_from("!HB", ipv6_segment, 4)
    src = bytes(ipv6_segment[8:24])
    dst = bytes(ipv6_segment[24:40])
    return _IPV6_PSEUDO.pack(src, dst, payload_length, 0, 0, next_header)


def pseudo_header_for(ip_segment: bytes) -> bytes:
    """Build the pseudo header matching the IP version of ``ip_segment``."""
    if not ip_segment:
        raise ValueError("empty IP segment")
    version = ip_segment[0] >> 4
    if version == 4:
        return ipv4_pseudo_header(ip_segment)
    if version == 6:
        return ipv6_pseudo_header(ip_segment)
    raise ValueError(f"unsupported IP version {version}")