# paristrace

Building blocks for Paris-style traceroute measurements, written in pure
Python with no third-party dependencies.

## What is inside

- `paristrace.protocols.pseudo_header`: the Internet checksum
  (`internet_checksum`) and the IPv4/IPv6 pseudo headers used by the UDP,
  TCP and ICMPv6 checksums (`ipv4_pseudo_header`, `ipv6_pseudo_header`,
  and `pseudo_header_for`, which picks one from the IP version nibble).
- `paristrace.protocols.ipv4`: the `Ipv4Header` dataclass
  (`from_bytes`, `to_bytes`), `default_header`, `header_size` (from the IHL
  field), `write_checksum`, `is_ipv4`, and source address discovery through
  the routing table (`default_source_ip`, `finalize`).
- `paristrace.protocols.ipv6`: the `Ipv6Header` dataclass, `make_flow`,
  `default_header`, `header_size`, `is_ipv6`, the whole-packet length
  helpers `get_length` / `set_length`, and `default_source_ip` / `finalize`.
- `paristrace.protocols.icmpv4` and `icmpv6`: default echo request headers,
  `write_checksum` (ICMPv6 needs the IPv6 pseudo header, ICMPv4 refuses
  one) and `next_protocol`, which names the IP version quoted in
  destination-unreachable and time-exceeded replies.
- `paristrace.protocols.udp` and `tcp`: default headers, `header_size`,
  `write_checksum` over a pseudo header and `create_pseudo_header`.
  `tcp.make_mask` packs the eight TCP flags into the flags byte; the TCP
  checksum covers the header plus a two-byte probe payload.
- `paristrace.eventqueue.EventQueue`: a FIFO whose `fileno()` is readable
  while elements are pending, so it can be watched with `select` or
  `selectors`. `pop()` on an empty queue raises `IndexError`.
- `paristrace.socketpool.SocketPool`: one IPv4 and one IPv6 raw socket;
  `send_packet(packet, dst_ip)` sends a fully built packet, IP header
  included. It is a context manager.
- `paristrace.options`: checks for conflicting traceroute settings
  (`check_options` and the individual `check_*` functions raise
  `OptionError`), protocol naming (`ip_protocol_name`, `protocol_name`),
  default port selection (`select_ports`) and the `-z` delay conversion
  (`probe_delay`: values above 10 are milliseconds).

Raw sockets need root privileges (or `CAP_NET_RAW`) on Linux.

## Example

```python
from paristrace.protocols import ipv4, udp
from paristrace.protocols.pseudo_header import pseudo_header_for

header = ipv4.Ipv4Header(protocol=udp.IPPROTO_UDP, length=20 + 8,
                         dst_ip="192.0.2.1")
ip_segment = bytearray(header.to_bytes())
ipv4.write_checksum(ip_segment)

datagram = bytearray(udp.default_header())
datagram[4:6] = (8).to_bytes(2, "big")
udp.write_checksum(datagram, pseudo_header_for(ip_segment))
```

```python
from paristrace.options import select_ports, probe_delay

print(select_ports(True, False, True, False, None, None))  # (33457, 53)
print(probe_delay(250))                                     # 0.25
```

## What it does not do

The package builds and sends probe packets, but it does not receive
replies: there is no sniffer for ICMP answers, no matching of replies to
probes, no event loop and no traceroute or MDA algorithm. It has no
whois or AS-number lookup and no command-line program; `paristrace.options`
only validates settings that a caller has already parsed.

## Tests

```
pip install -e .[test]
pytest
```