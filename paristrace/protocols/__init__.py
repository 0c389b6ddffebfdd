"""Headers, defaults, checksums and pseudo headers for IPv4, IPv6, ICMPv4, ICMPv6, UDP and TCP."""