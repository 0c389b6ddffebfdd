import struct
from ipaddress import IPv4Address, IPv6Address

import pytest

from paristrace.protocols.ipv4 import Ipv4Header
from paristrace.protocols.pseudo_header import (
    internet_checksum,
    ipv4_pseudo_header,
    ipv6_pseudo_header,
    pseudo_header_for,
)


def _ipv6_segment(payload_length, next_header, src, dst):
    return (
        struct.pack("!IHBB", 0x60000000, payload_length, next_header, 64)
        + IPv6Address(src).packed
        + IPv6Address(dst).packed
    )


def test_checksum_worked_example():
    header = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")
    assert internet_checksum(header) == 0xB861


def test_checksum_verifies_to_zero():
    data = b"some arbitrary payload!!"
    csum = internet_checksum(data)
    assert internet_checksum(data + struct.pack("!H", csum)) == 0


def test_checksum_odd_length_is_zero_padded():
    assert internet_checksum(b"\x12\x34\x56") == internet_checksum(b"\x12\x34\x56\x00")


def test_ipv4_pseudo_header_fields():
    payload = b"x" * 8
    header = Ipv4Header(
        length=20 + len(payload),
        protocol=17,
        src_ip=IPv4Address("10.0.0.1"),
        dst_ip=IPv4Address("10.0.0.2"),
    )
    psh = ipv4_pseudo_header(header.to_bytes() + payload)
    src, dst, zero, protocol, size = struct.unpack("!4s4sBBH", psh)
    assert src == IPv4Address("10.0.0.1").packed
    assert dst == IPv4Address("10.0.0.2").packed
    assert zero == 0
    assert protocol == 17
    assert size == len(payload)


def test_ipv4_pseudo_header_size():
    assert len(ipv4_pseudo_header(Ipv4Header().to_bytes())) == 12


def test_ipv6_pseudo_header_fields():
    segment = _ipv6_segment(16, 58, "2001:db8::1", "2001:db8::2")
    psh = ipv6_pseudo_header(segment)
    assert len(psh) == 40
    src, dst, size, zeros, zero, protocol = struct.unpack("!16s16sIHBB", psh)
    assert src == IPv6Address("2001:db8::1").packed
    assert dst == IPv6Address("2001:db8::2").packed
    assert size == 16
    assert (zeros, zero) == (0, 0)
    assert protocol == 58


def test_dispatch_by_version():
    v4 = Ipv4Header(length=28, protocol=17).to_bytes()
    v6 = _ipv6_segment(8, 17, "::1", "::1")
    assert pseudo_header_for(v4) == ipv4_pseudo_header(v4)
    assert pseudo_header_for(v6) == ipv6_pseudo_header(v6)


def test_dispatch_unknown_version():
    with pytest.raises(ValueError):
        pseudo_header_for(bytes([0x50]) + bytes(39))


@pytest.mark.parametrize("func", [ipv4_pseudo_header, ipv6_pseudo_header])
def test_short_segment_rejected(func):
    with pytest.raises(ValueError):
        func(b"\x45\x00")