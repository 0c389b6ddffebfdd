import socket

import pytest

from paristrace.options import (
    OptionError,
    check_algorithm,
    check_ip_version,
    check_options,
    check_ports,
    check_protocol,
    ip_protocol_name,
    probe_delay,
    protocol_name,
    select_ports,
)


def test_both_ip_versions_rejected():
    with pytest.raises(OptionError, match="both ip versions"):
        check_ip_version(True, True)


@pytest.mark.parametrize(
    "flags",
    [(True, True, False), (True, False, True), (False, True, True), (True, True, True)],
)
def test_several_protocols_rejected(flags):
    with pytest.raises(OptionError, match="simultaneously"):
        check_protocol(*flags)


@pytest.mark.parametrize("dst, src", [(True, False), (False, True), (True, True)])
def test_ports_with_icmp_rejected(dst, src):
    with pytest.raises(OptionError, match="--src-port or --dst-port"):
        check_ports(True, dst, src)


def test_mda_options_need_mda_algorithm():
    with pytest.raises(OptionError, match="mda"):
        check_algorithm("paris-traceroute", True)


def test_check_options_reports_first_failure():
    with pytest.raises(OptionError, match="both ip versions"):
        check_options(True, True, False, True, True, True, False, "paris-traceroute", True)


def test_check_options_reports_port_conflict():
    with pytest.raises(OptionError, match="--src-port"):
        check_options(True, False, False, True, False, True, False, "mda", False)


def test_ip_protocol_names():
    assert ip_protocol_name(socket.AF_INET) == "ipv4"
    assert ip_protocol_name(socket.AF_INET6) == "ipv6"


def test_ip_protocol_name_unknown_family():
    with pytest.raises(ValueError):
        ip_protocol_name(socket.AF_UNIX)


def test_protocol_name_icmp_per_family():
    assert protocol_name(socket.AF_INET, True, False, False) == "icmpv4"
    assert protocol_name(socket.AF_INET6, True, False, False) == "icmpv6"


def test_protocol_name_priority():
    assert protocol_name(socket.AF_INET, True, True, True) == "icmpv4"
    assert protocol_name(socket.AF_INET, False, True, True) == "tcp"
    assert protocol_name(socket.AF_INET6, False, False, True) == "udp"


def test_protocol_name_none_selected():
    assert protocol_name(socket.AF_INET, False, False, False) is None


def test_protocol_name_icmp_unknown_family():
    with pytest.raises(ValueError):
        protocol_name(socket.AF_UNIX, True, False, False)


def test_udp_default_ports():
    assert select_ports(True, False, False, False, None, None) == (33457, 33456)


def test_udp_flag_uses_dns_port():
    assert select_ports(True, False, True, False, None, None) == (33457, 53)


def test_tcp_default_ports():
    assert select_ports(False, True, False, False, None, None) == (16449, 16963)


def test_tcp_flag_uses_http_port():
    assert select_ports(False, True, False, True, None, None) == (16449, 80)


def test_explicit_ports_override_defaults():
    assert select_ports(True, False, True, False, 1234, 4321) == (1234, 4321)
    assert select_ports(False, True, False, True, 1234, 4321) == (1234, 4321)


def test_no_transport_gives_zero_ports():
    assert select_ports(False, False, False, False, 1234, 4321) == (0, 0)


@pytest.mark.parametrize("sport, dport", [(-1, 80), (80, 70000)])
def test_out_of_range_port_rejected(sport, dport):
    with pytest.raises(OptionError, match="out of range"):
        select_ports(True, False, False, False, sport, dport)


def test_probe_delay_seconds():
    assert probe_delay(1) == 1.0
    assert probe_delay(10) == 10.0


def test_probe_delay_milliseconds():
    assert probe_delay(20) == pytest.approx(0.02)
    assert probe_delay(11) < 11


def test_probe_delay_unset():
    assert probe_delay(None) is None