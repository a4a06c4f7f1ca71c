"""
HostSpec — Host resolution and address views.

Printable views of host entries and conversion of any entry to an IPv6
address, resolving hostnames through the system resolver when needed.
"""

import ipaddress
import logging
import socket
from typing import Union

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import ENTRY_TYPES, Host, HostType, ResolutionFailed, WrongVariant

logger = logging.getLogger("hostspec.network.resolver")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def type_of(host: Host) -> HostType:
    """Return the type of a host entry."""
    return host.type


def type_str(host: Host) -> str:
    """Return the type of *host* in printable form, e.g. ``"Hostname"``."""
    if host.type == HostType.NAME:
        return "Hostname"
    if host.type == HostType.IPV4:
        return "IPv4"
    if host.type == HostType.IPV6:
        return "IPv6"
    raise WrongVariant(f"Erroneous host type: {host.type.value}")


def display_string(host: Host) -> str:
    """Return the value of *host* in printable form.

    Hostnames are returned as given, addresses in their standard
    presentation format.
    """
    if host.type in ENTRY_TYPES:
        return str(host.value)
    raise WrongVariant(f"Erroneous host type: {host.type.value}")


def resolve(host: Host, family: int = socket.AF_INET) -> IPAddress:
    """Resolve a hostname entry to its first address of *family*.

    This is a blocking call into the system resolver and has no timeout of
    its own.

    Parameters
    ----------
    host : Host
        Entry of type ``HostType.NAME``.
    family : int
        ``socket.AF_INET`` or ``socket.AF_INET6``.

    Returns
    -------
    ipaddress.IPv4Address | ipaddress.IPv6Address

    Raises
    ------
    WrongVariant
        If *host* is not a hostname entry.
    ValueError
        If *family* is neither ``AF_INET`` nor ``AF_INET6``.
    ResolutionFailed
        If resolution fails or yields no address of *family*.
    """
    if host.type != HostType.NAME:
        raise WrongVariant(f"Only hostnames can be resolved, got {host.type.value} {host.value}")
    if family not in _FAMILIES:
        raise ValueError(f"Unsupported address family: {family}")

    try:
        infos = socket.getaddrinfo(host.value, None, family, socket.SOCK_STREAM)
    except (OSError, UnicodeError) as exc:
        raise ResolutionFailed(f"Cannot resolve hostname '{host.value}': {exc}") from exc

    for info_family, _socktype, _proto, _canonname, sockaddr in infos:
        if info_family != family:
            continue
        # Drop any zone index from link-local IPv6 results.
        addr = ipaddress.ip_address(sockaddr[0].split("%", 1)[0])
        logger.debug("Resolved %s → %s", host.value, addr)
        return addr

    raise ResolutionFailed(
        f"No {'IPv4' if family == socket.AF_INET else 'IPv6'} address for hostname '{host.value}'"
    )


def ipv4_mapped_ipv6(addr: ipaddress.IPv4Address) -> ipaddress.IPv6Address:
    """Return the IPv4-mapped IPv6 form of *addr*.

    ``192.168.10.20`` maps to ``::ffff:192.168.10.20``.
    """
    return ipaddress.IPv6Address(b"\x00" * 10 + b"\xff\xff" + addr.packed)


def to_ipv6(host: Host) -> ipaddress.IPv6Address:
    """Return the value of *host* as an IPv6 address.

    IPv6 entries are returned as is and IPv4 entries are mapped.  Hostnames
    are resolved to an IPv4 address, which is then mapped.

    Raises
    ------
    ResolutionFailed
        If a hostname cannot be resolved.
    """
    if host.type == HostType.IPV6:
        return host.value
    if host.type == HostType.IPV4:
        return ipv4_mapped_ipv6(host.value)
    if host.type == HostType.NAME:
        return ipv4_mapped_ipv6(resolve(host, socket.AF_INET))
    raise WrongVariant(f"Erroneous host type: {host.type.value}")
