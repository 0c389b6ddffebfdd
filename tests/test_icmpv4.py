import pytest

from paristrace.protocols import icmpv4
from paristrace.protocols.pseudo_header import internet_checksum


def test_default_header_bytes():
    assert icmpv4.default_header() == bytes([8, 0, 0, 0, 0, 0, 0, 0])


def test_header_size():
    assert icmpv4.header_size(icmpv4.default_header()) == len(icmpv4.default_header())
    assert icmpv4.header_size(b"") == 0
    assert icmpv4.header_size(None) == 0


def test_write_checksum_validates():
    segment = bytearray(icmpv4.default_header())
    segment[4:8] = b"\x12\x34\x00\x01"
    segment[2:4] = b"\xff\xff"
    csum = icmpv4.write_checksum(segment)
    assert segment[2:4] == csum.to_bytes(2, "big")
    assert internet_checksum(bytes(segment)) == 0


def test_write_checksum_only_covers_header():
    with_payload = bytearray(icmpv4.default_header() + b"payload")
    bare = bytearray(icmpv4.default_header())
    assert icmpv4.write_checksum(with_payload) == icmpv4.write_checksum(bare)


def test_write_checksum_rejects_pseudo_header():
    with pytest.raises(ValueError):
        icmpv4.write_checksum(bytearray(icmpv4.default_header()), b"\x00" * 12)


def test_write_checksum_short_segment():
    with pytest.raises(ValueError):
        icmpv4.write_checksum(bytearray(3))


@pytest.mark.parametrize(
    "icmp_type, expected",
    [
        (icmpv4.ICMP_DEST_UNREACH, "ipv4"),
        (icmpv4.ICMP_TIME_EXCEEDED, "ipv4"),
        (icmpv4.ICMP_ECHOREPLY, None),
        (icmpv4.ICMP_ECHO, None),
    ],
)
def test_next_protocol(icmp_type, expected):
    segment = bytes([icmp_type]) + bytes(7)
    assert icmpv4.next_protocol(segment) == expected


def test_next_protocol_empty():
    assert icmpv4.next_protocol(b"") is None