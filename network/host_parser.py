"""
HostSpec — Host token parser.

Recognise the textual forms a single host-specification token may take
(IPv4, IPv6, CIDR block, short range, long range, hostname) and compute
the first/last addresses of the range forms.
"""

import ipaddress
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import (
    CIDR_MAX_BLOCK,
    CIDR_MAX_DIGITS,
    CIDR_MIN_BLOCK,
    HOSTNAME_MAX_LENGTH,
    SHORT_RANGE_MAX,
    SHORT_RANGE_MAX_DIGITS,
    HostType,
    InvertedRangeLimits,
    MalformedToken,
)

logger = logging.getLogger("hostspec.network.host_parser")

_DECIMAL_RE = re.compile(r"[0-9]+")
_HOSTNAME_RE = re.compile(r"[A-Za-z0-9._-]{1,%d}" % HOSTNAME_MAX_LENGTH)

IPv4Limits = Tuple[ipaddress.IPv4Address, ipaddress.IPv4Address]


# ──────────────────────────────────────────────
# Address predicates
# ──────────────────────────────────────────────

def is_ipv4_address(token: str) -> bool:
    """Return *True* if *token* is exactly an IPv4 address literal.

    ``"192.168.11.1"`` is valid, ``"192.168.1.300"`` and
    ``"192.168.1.1e"`` are not.
    """
    if not isinstance(token, str):
        return False
    try:
        ipaddress.IPv4Address(token)
        return True
    except ValueError:
        return False


def is_ipv6_address(token: str) -> bool:
    """Return *True* if *token* is exactly an IPv6 address literal.

    ``"0:0:0:0:0:0:0:1"``, ``"::1"`` and ``"::FFFF:192.168.13.55"`` are
    valid, ``"::1g"`` and scoped addresses such as ``"fe80::1%eth0"`` are
    not.
    """
    if not isinstance(token, str) or "%" in token:
        return False
    try:
        ipaddress.IPv6Address(token)
        return True
    except ValueError:
        return False


def _parse_decimal(text: str, max_digits: int) -> Optional[int]:
    """Return the value of an all-digit string of at most *max_digits*."""
    if len(text) > max_digits or not _DECIMAL_RE.fullmatch(text):
        return None
    return int(text)


def _split(token: str, separator: str) -> Optional[Tuple[str, str]]:
    if separator not in token:
        return None
    head, tail = token.split(separator, 1)
    return head, tail


# ──────────────────────────────────────────────
# Range / block syntax checks
# ──────────────────────────────────────────────

def is_cidr_block(token: str) -> bool:
    """Return *True* for an IPv4 CIDR block such as ``"192.168.12.3/24"``.

    The prefix length must be within 1-30; ``"192.168.1.3/31"`` is not a
    block since it has no usable host once the network and broadcast
    addresses are removed.
    """
    parts = _split(token, "/")
    if parts is None:
        return False
    addr_str, block_str = parts
    if not is_ipv4_address(addr_str):
        return False
    block = _parse_decimal(block_str, CIDR_MAX_DIGITS)
    return block is not None and CIDR_MIN_BLOCK <= block <= CIDR_MAX_BLOCK


def is_short_range_network(token: str) -> bool:
    """Return *True* for a short range such as ``"192.168.11.1-50"``.

    ``"192.168.1.1-50e"`` and ``"192.168.1.1-300"`` are not short ranges.
    """
    parts = _split(token, "-")
    if parts is None:
        return False
    addr_str, end_str = parts
    if not is_ipv4_address(addr_str):
        return False
    end = _parse_decimal(end_str, SHORT_RANGE_MAX_DIGITS)
    return end is not None and 0 <= end <= SHORT_RANGE_MAX


def is_long_range_network(token: str) -> bool:
    """Return *True* for a long range such as ``"192.168.12.1-192.168.13.50"``."""
    parts = _split(token, "-")
    if parts is None:
        return False
    first_str, last_str = parts
    return is_ipv4_address(first_str) and is_ipv4_address(last_str)


def is_hostname(token: str) -> bool:
    """Return *True* if *token* only holds alphanumerics, ``.``, ``-`` and ``_``.

    At most 255 characters.
    """
    return isinstance(token, str) and _HOSTNAME_RE.fullmatch(token) is not None


def determine_host_type(token: str) -> Optional[HostType]:
    """Classify a stripped token.

    The checks run in a fixed order and the first match wins: IPv4, IPv6,
    CIDR block, short range, long range, hostname.

    Parameters
    ----------
    token : str
        A single element of the host specification, with no leading or
        trailing whitespace.

    Returns
    -------
    HostType | None
        ``None`` if the token is empty or matches none of the forms.
    """
    if not token:
        return None
    if is_ipv4_address(token):
        return HostType.IPV4
    if is_ipv6_address(token):
        return HostType.IPV6
    if is_cidr_block(token):
        return HostType.CIDR_BLOCK
    if is_short_range_network(token):
        return HostType.RANGE_SHORT
    if is_long_range_network(token):
        return HostType.RANGE_LONG
    if is_hostname(token):
        return HostType.NAME
    return None


# ──────────────────────────────────────────────
# Range / block limits
# ──────────────────────────────────────────────

def _parse_ipv4(addr_str: str, token: str) -> ipaddress.IPv4Address:
    try:
        return ipaddress.IPv4Address(addr_str)
    except ValueError as exc:
        raise MalformedToken(f"{token}: Invalid IPv4 address '{addr_str}'") from exc


def cidr_block_ips(token: str) -> IPv4Limits:
    """Return the first and last usable addresses of a CIDR block.

    ``"192.168.1.0/24"`` gives ``192.168.1.1`` and ``192.168.1.254``: the
    network and broadcast addresses are skipped.

    Raises
    ------
    MalformedToken
        If the address or the prefix length cannot be parsed.
    """
    parts = _split(token, "/")
    if parts is None:
        raise MalformedToken(f"{token}: Missing CIDR prefix length")
    addr_str, block_str = parts

    block = _parse_decimal(block_str, CIDR_MAX_DIGITS)
    if block is None or not CIDR_MIN_BLOCK <= block <= CIDR_MAX_BLOCK:
        raise MalformedToken(f"{token}: Invalid CIDR prefix length '{block_str}'")
    addr = _parse_ipv4(addr_str, token)

    network = ipaddress.IPv4Network((addr, block), strict=False)
    first = network.network_address + 1
    # First address plus the number of usable hosts, minus one.
    last = first + network.num_addresses - 3
    return first, last


def short_range_network_ips(token: str) -> IPv4Limits:
    """Return the limits of a short range.

    ``"192.168.1.1-40"`` gives ``192.168.1.1`` and ``192.168.1.40``.  The
    suffix is not compared with the last octet of the first address.
    """
    parts = _split(token, "-")
    if parts is None:
        raise MalformedToken(f"{token}: Missing range separator")
    first_str, end_str = parts

    end = _parse_decimal(end_str, SHORT_RANGE_MAX_DIGITS)
    if end is None or end > SHORT_RANGE_MAX:
        raise MalformedToken(f"{token}: Invalid range end '{end_str}'")
    first = _parse_ipv4(first_str, token)

    last = ipaddress.IPv4Address((int(first) & 0xFFFFFF00) + end)
    return first, last


def long_range_network_ips(token: str) -> IPv4Limits:
    """Return the limits of a long range.

    ``"192.168.1.1-192.168.2.40"`` gives ``192.168.1.1`` and
    ``192.168.2.40``.
    """
    parts = _split(token, "-")
    if parts is None:
        raise MalformedToken(f"{token}: Missing range separator")
    first_str, last_str = parts
    return _parse_ipv4(first_str, token), _parse_ipv4(last_str, token)


RANGE_FUNCTIONS: Dict[HostType, Callable[[str], IPv4Limits]] = {
    HostType.CIDR_BLOCK:  cidr_block_ips,
    HostType.RANGE_SHORT: short_range_network_ips,
    HostType.RANGE_LONG:  long_range_network_ips,
}


def range_limits(token: str, host_type: HostType) -> IPv4Limits:
    """Return the ordered limits of a range token of kind *host_type*.

    Raises
    ------
    MalformedToken
        If *host_type* is not a range kind or the token is unparsable.
    InvertedRangeLimits
        If the first address comes after the last one.
    """
    limits_func = RANGE_FUNCTIONS.get(host_type)
    if limits_func is None:
        raise MalformedToken(f"{token}: {host_type.value} is not a range type")

    first, last = limits_func(token)
    if int(first) > int(last):
        raise InvertedRangeLimits(f"{token}: Inversed limits.")
    return first, last


def expand_range(token: str, host_type: HostType) -> List[ipaddress.IPv4Address]:
    """Expand a CIDR block, short or long range into individual addresses.

    Parameters
    ----------
    token : str
        Range token, e.g. ``10.0.0.0/30``, ``10.0.0.5-10`` or
        ``10.0.0.5-10.0.1.3``.
    host_type : HostType
        Kind returned by :func:`determine_host_type` for *token*.

    Returns
    -------
    list[ipaddress.IPv4Address]
        Every address from first to last inclusive, ascending.

    Raises
    ------
    MalformedToken
        If the token is unparsable or its limits are inverted.

    Examples
    --------
    >>> [str(ip) for ip in expand_range("10.0.0.0/30", HostType.CIDR_BLOCK)]
    ['10.0.0.1', '10.0.0.2']
    """
    first, last = range_limits(token, host_type)
    ips = [ipaddress.IPv4Address(value) for value in range(int(first), int(last) + 1)]
    logger.debug("Expanded %s into %d address(es)", token, len(ips))
    return ips
