"""Unit tests for ``network.host_parser``."""

import ipaddress
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import HostType, InvertedRangeLimits, MalformedToken
from network.host_parser import (
    cidr_block_ips,
    determine_host_type,
    expand_range,
    is_cidr_block,
    is_hostname,
    is_ipv4_address,
    is_ipv6_address,
    is_long_range_network,
    is_short_range_network,
    long_range_network_ips,
    range_limits,
    short_range_network_ips,
)


def _ip(text: str) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(text)


class TestAddressPredicates(unittest.TestCase):
    """Tests for the IPv4 / IPv6 literal checks."""

    def test_valid_ipv4(self) -> None:
        self.assertTrue(is_ipv4_address("192.168.11.1"))
        self.assertTrue(is_ipv4_address("0.0.0.0"))
        self.assertTrue(is_ipv4_address("255.255.255.255"))

    def test_invalid_ipv4(self) -> None:
        self.assertFalse(is_ipv4_address("192.168.1.300"))
        self.assertFalse(is_ipv4_address("192.168.1.1e"))
        self.assertFalse(is_ipv4_address("192.168.1"))
        self.assertFalse(is_ipv4_address(" 192.168.1.1"))
        self.assertFalse(is_ipv4_address(""))
        self.assertFalse(is_ipv4_address(None))

    def test_valid_ipv6(self) -> None:
        self.assertTrue(is_ipv6_address("0:0:0:0:0:0:0:1"))
        self.assertTrue(is_ipv6_address("::1"))
        self.assertTrue(is_ipv6_address("::FFFF:192.168.13.55"))
        self.assertTrue(is_ipv6_address("2001:db8::8a2e:370:7334"))

    def test_invalid_ipv6(self) -> None:
        self.assertFalse(is_ipv6_address("::1g"))
        self.assertFalse(is_ipv6_address("fe80::1%eth0"))
        self.assertFalse(is_ipv6_address("192.168.1.1"))
        self.assertFalse(is_ipv6_address("2001:db8::/64"))
        self.assertFalse(is_ipv6_address(""))


class TestSyntaxChecks(unittest.TestCase):
    """Tests for the CIDR / range / hostname syntax checks."""

    def test_cidr_block(self) -> None:
        self.assertTrue(is_cidr_block("192.168.12.3/24"))
        self.assertTrue(is_cidr_block("10.0.0.0/1"))
        self.assertTrue(is_cidr_block("10.0.0.0/30"))

    def test_cidr_block_prefix_out_of_range(self) -> None:
        self.assertFalse(is_cidr_block("192.168.1.3/31"))
        self.assertFalse(is_cidr_block("192.168.1.3/32"))
        self.assertFalse(is_cidr_block("192.168.1.3/0"))

    def test_cidr_block_malformed(self) -> None:
        self.assertFalse(is_cidr_block("192.168.1.3/"))
        self.assertFalse(is_cidr_block("192.168.1.3/24x"))
        self.assertFalse(is_cidr_block("192.168.1.3/024"))
        self.assertFalse(is_cidr_block("192.168.1/24"))
        self.assertFalse(is_cidr_block("192.168.1.3"))

    def test_short_range(self) -> None:
        self.assertTrue(is_short_range_network("192.168.11.1-50"))
        self.assertTrue(is_short_range_network("192.168.11.1-0"))
        self.assertTrue(is_short_range_network("192.168.11.1-255"))

    def test_short_range_invalid(self) -> None:
        self.assertFalse(is_short_range_network("192.168.1.1-50e"))
        self.assertFalse(is_short_range_network("192.168.1.1-300"))
        self.assertFalse(is_short_range_network("192.168.1.1-"))
        self.assertFalse(is_short_range_network("192.168.1.1-192.168.1.5"))

    def test_long_range(self) -> None:
        self.assertTrue(is_long_range_network("192.168.12.1-192.168.13.50"))
        self.assertFalse(is_long_range_network("192.168.12.1-50"))
        self.assertFalse(is_long_range_network("192.168.12.1-192.168.13"))

    def test_hostname(self) -> None:
        self.assertTrue(is_hostname("example.com"))
        self.assertTrue(is_hostname("my_host-01.lan"))
        self.assertTrue(is_hostname("a" * 255))

    def test_hostname_invalid(self) -> None:
        self.assertFalse(is_hostname("a" * 256))
        self.assertFalse(is_hostname("not a host"))
        self.assertFalse(is_hostname("host!"))
        self.assertFalse(is_hostname("hôte.example"))
        self.assertFalse(is_hostname(""))


class TestDetermineHostType(unittest.TestCase):
    """Tests for token classification and its priority order."""

    def test_each_kind(self) -> None:
        self.assertEqual(determine_host_type("10.0.0.1"), HostType.IPV4)
        self.assertEqual(determine_host_type("::1"), HostType.IPV6)
        self.assertEqual(determine_host_type("10.0.0.0/24"), HostType.CIDR_BLOCK)
        self.assertEqual(determine_host_type("10.0.0.5-10"), HostType.RANGE_SHORT)
        self.assertEqual(determine_host_type("10.0.0.5-10.0.0.10"), HostType.RANGE_LONG)
        self.assertEqual(determine_host_type("example.com"), HostType.NAME)

    def test_invalid(self) -> None:
        self.assertIsNone(determine_host_type(""))
        self.assertIsNone(determine_host_type("not a host!!"))
        self.assertIsNone(determine_host_type("10.0.0.0/31"))
        self.assertIsNone(determine_host_type("2001:db8::/64"))
        self.assertIsNone(determine_host_type("fe80::1%eth0"))

    def test_address_before_name(self) -> None:
        # Dotted digits are valid hostname characters too.
        self.assertEqual(determine_host_type("192.168.1.1"), HostType.IPV4)

    def test_unparsable_numbers_fall_back_to_name(self) -> None:
        self.assertEqual(determine_host_type("192.168.1.300"), HostType.NAME)
        self.assertEqual(determine_host_type("192.168.1.1-300"), HostType.NAME)


class TestRangeLimits(unittest.TestCase):
    """Tests for first/last address computation."""

    def test_cidr_24(self) -> None:
        self.assertEqual(cidr_block_ips("192.168.1.0/24"), (_ip("192.168.1.1"), _ip("192.168.1.254")))

    def test_cidr_host_bits_are_masked(self) -> None:
        self.assertEqual(cidr_block_ips("192.168.1.77/30"), (_ip("192.168.1.77"), _ip("192.168.1.78")))

    def test_cidr_1(self) -> None:
        self.assertEqual(cidr_block_ips("200.1.2.3/1"), (_ip("128.0.0.1"), _ip("255.255.255.254")))

    def test_cidr_malformed(self) -> None:
        with self.assertRaises(MalformedToken):
            cidr_block_ips("192.168.1.0/31")
        with self.assertRaises(MalformedToken):
            cidr_block_ips("invalid/24")
        with self.assertRaises(MalformedToken):
            cidr_block_ips("192.168.1.0")

    def test_short_range(self) -> None:
        self.assertEqual(short_range_network_ips("192.168.1.1-40"), (_ip("192.168.1.1"), _ip("192.168.1.40")))

    def test_short_range_not_ordered(self) -> None:
        self.assertEqual(short_range_network_ips("10.0.0.10-5"), (_ip("10.0.0.10"), _ip("10.0.0.5")))

    def test_long_range(self) -> None:
        self.assertEqual(
            long_range_network_ips("192.168.1.1-192.168.2.40"),
            (_ip("192.168.1.1"), _ip("192.168.2.40")),
        )

    def test_long_range_malformed(self) -> None:
        with self.assertRaises(MalformedToken):
            long_range_network_ips("192.168.1.1-example.com")

    def test_range_limits_inverted(self) -> None:
        with self.assertRaises(InvertedRangeLimits):
            range_limits("10.0.0.10-10.0.0.5", HostType.RANGE_LONG)
        with self.assertRaises(InvertedRangeLimits):
            range_limits("10.0.0.10-5", HostType.RANGE_SHORT)

    def test_range_limits_wrong_type(self) -> None:
        with self.assertRaises(MalformedToken):
            range_limits("10.0.0.1", HostType.IPV4)


class TestExpandRange(unittest.TestCase):
    """Tests for range expansion."""

    def test_cidr_30(self) -> None:
        result = expand_range("10.0.0.0/30", HostType.CIDR_BLOCK)
        self.assertEqual(result, [_ip("10.0.0.1"), _ip("10.0.0.2")])

    def test_cidr_24(self) -> None:
        result = expand_range("10.0.0.0/24", HostType.CIDR_BLOCK)
        self.assertEqual(len(result), 254)  # excludes network + broadcast
        self.assertEqual(result[0], _ip("10.0.0.1"))
        self.assertEqual(result[-1], _ip("10.0.0.254"))

    def test_short_range(self) -> None:
        result = expand_range("10.0.0.5-10", HostType.RANGE_SHORT)
        self.assertEqual(len(result), 6)
        self.assertEqual(result[0], _ip("10.0.0.5"))
        self.assertEqual(result[-1], _ip("10.0.0.10"))

    def test_short_range_single(self) -> None:
        self.assertEqual(expand_range("10.0.0.10-10", HostType.RANGE_SHORT), [_ip("10.0.0.10")])

    def test_long_range_crosses_octet(self) -> None:
        result = expand_range("10.0.0.250-10.0.1.2", HostType.RANGE_LONG)
        self.assertEqual(len(result), 9)
        self.assertEqual(result[5], _ip("10.0.0.255"))
        self.assertEqual(result[6], _ip("10.0.1.0"))
        self.assertEqual(result, sorted(result))

    def test_inverted(self) -> None:
        with self.assertRaises(InvertedRangeLimits):
            expand_range("10.0.0.10-10.0.0.5", HostType.RANGE_LONG)


if __name__ == "__main__":
    unittest.main()
