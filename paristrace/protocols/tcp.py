"""TCP header defaults, flag mask, checksum and pseudo header selection."""

from __future__ import annotations

import struct

from paristrace.protocols.pseudo_header import internet_checksum, pseudo_header_for

IPPROTO_TCP = 6

DEFAULT_SRC_PORT = 2222
DEFAULT_DST_PORT = 3333
DEFAULT_WINDOW_SIZE = 5840
DEFAULT_DATA_OFFSET = 5
DEFAULT_CWR = 0
DEFAULT_ECE = 0
DEFAULT_URG = 0
DEFAULT_ACK = 0
DEFAULT_PSH = 0
DEFAULT_RST = 0
DEFAULT_SYN = 0
DEFAULT_FIN = 0

DATA_OFFSET_OFFSET = 12
MASK_OFFSET = 13
CHECKSUM_OFFSET = 16
MIN_HEADER_SIZE = DEFAULT_DATA_OFFSET << 2

# Bit position of each flag inside the flag byte, counted from the most
# significant bit.
_FLAG_BITS = {"cwr": 0, "ece": 1, "urg": 2, "ack": 3, "psh": 4, "rst": 5, "syn": 6, "fin": 7}

# Size of the payload the probes carry after the TCP header.
PAYLOAD_SIZE = 2

# src_port, dst_port, seq_num, ack_num, data offset byte, flags, window,
# checksum, urgent pointer
_HEADER = struct.Struct("!HHIIBBHHH")


def make_mask(cwr: int, ece: int, urg: int, ack: int, psh: int, rst: int, syn: int, fin: int) -> int:
    """Pack the eight TCP flags into the flag byte."""
    flags = {"cwr": cwr, "ece": ece, "urg": urg, "ack": ack, "psh": psh, "rst": rst, "syn": syn, "fin": fin}
    mask = 0
    for name, value in flags.items():
        mask |= (value & 1) << (7 - _FLAG_BITS[name])
    return mask


def default_header() -> bytes:
    """Return the default TCP header bytes."""
    return _HEADER.pack(
        DEFAULT_SRC_PORT,
        DEFAULT_DST_PORT,
        0,
        0,
        DEFAULT_DATA_OFFSET << 4,
        make_mask(
            DEFAULT_CWR, DEFAULT_ECE, DEFAULT_URG, DEFAULT_ACK,
            DEFAULT_PSH, DEFAULT_RST, DEFAULT_SYN, DEFAULT_FIN,
        ),
        DEFAULT_WINDOW_SIZE,
        0,
        0,
    )


def header_size(segment: bytes | None) -> int:
    """Return the header size given by the data offset field, 0 for no segment."""
    if not segment:
        return 0
    if len(segment) <= DATA_OFFSET_OFFSET:
        raise ValueError("not enough bytes to read the TCP data offset")
    return (segment[DATA_OFFSET_OFFSET] & 0xF0) >> 2


def write_checksum(segment: bytearray, pseudo_header: bytes | None) -> int:
    """Compute the TCP checksum over the pseudo header, header and probe payload.

    The covered data is the header plus a two-byte payload; missing payload
    bytes count as zeros. The checksum is stored in ``segment`` and returned.
    """
    if pseudo_header is None:
        raise ValueError("TCP checksum requires an IP pseudo header")
    size = header_size(segment)
    if size < MIN_HEADER_SIZE:
        raise ValueError(f"invalid TCP header size {size}")
    if len(segment) < size:
        raise ValueError("segment is shorter than its TCP header")
    covered = bytearray(segment[:size + PAYLOAD_SIZE].ljust(size + PAYLOAD_SIZE, b"\x00"))
    covered[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] = b"\x00\x00"
    csum = internet_checksum(bytes(pseudo_header) + bytes(covered))
    struct.pack_into("!H", segment, CHECKSUM_OFFSET, csum)
    return csum


def create_pseudo_header(ip_segment: bytes) -> bytes:
    """Build the IPv4 or IPv6 pseudo header for the IP packet carrying TCP."""
    return pseudo_header_for(ip_segment)