"""
HostSpec — Configuration, constants, and data models.

Grammar limits, ANSI colour codes, the host-type enum, the ``Host`` entry
dataclass, and the exception taxonomy live here so every other module can
import from a single source of truth.
"""

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from colorama import Fore, Style

# ──────────────────────────────────────────────
# Version
# ──────────────────────────────────────────────
VERSION = "1.0.0"
APP_NAME = "HostSpec"

# ──────────────────────────────────────────────
# Host specification grammar
# ──────────────────────────────────────────────
HOST_SEPARATOR = ","
HOSTNAME_MAX_LENGTH = 255
CIDR_MIN_BLOCK = 1
CIDR_MAX_BLOCK = 30     # /31 and /32 leave no usable host
CIDR_MAX_DIGITS = 2
SHORT_RANGE_MAX = 255
SHORT_RANGE_MAX_DIGITS = 3
COMMENT_PREFIX = "#"

# ──────────────────────────────────────────────
# ANSI colour codes
# ──────────────────────────────────────────────

class Colors:
    """ANSI escape sequences for terminal colouring."""
    RESET   = Style.RESET_ALL
    BOLD    = Style.BRIGHT
    DIM     = Style.DIM

    RED     = Fore.LIGHTRED_EX
    GREEN   = Fore.LIGHTGREEN_EX
    YELLOW  = Fore.LIGHTYELLOW_EX
    BLUE    = Fore.LIGHTBLUE_EX
    MAGENTA = Fore.LIGHTMAGENTA_EX
    CYAN    = Fore.LIGHTCYAN_EX
    WHITE   = Fore.LIGHTWHITE_EX

    @classmethod
    def disable(cls) -> None:
        """Strip every colour attribute so output is plain text."""
        for attr in list(vars(cls)):
            if not attr.startswith("_") and attr != "disable" and isinstance(getattr(cls, attr), str):
                setattr(cls, attr, "")


# ──────────────────────────────────────────────
# Errors
# ──────────────────────────────────────────────

class HostsError(ValueError):
    """Base class for every host-specification error."""


class InvalidInput(HostsError):
    """The host specification itself is missing or not a string."""


class MalformedToken(HostsError):
    """A single token of the specification could not be parsed."""


class InvertedRangeLimits(MalformedToken):
    """A range or block whose first address comes after its last."""


class ResolutionFailed(HostsError):
    """The system resolver returned no usable address for a name."""


class WrongVariant(HostsError):
    """An operation was applied to the wrong kind of host entry."""


# ──────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────

class HostType(Enum):
    """Kinds of host token; the first three are also entry kinds."""
    NAME        = "Hostname"
    IPV4        = "IPv4"
    IPV6        = "IPv6"
    CIDR_BLOCK  = "IPv4 CIDR block"
    RANGE_SHORT = "IPv4 short range"
    RANGE_LONG  = "IPv4 long range"


ENTRY_TYPES = (HostType.NAME, HostType.IPV4, HostType.IPV6)
RANGE_TYPES = (HostType.CIDR_BLOCK, HostType.RANGE_SHORT, HostType.RANGE_LONG)

HostValue = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]

_PAYLOAD_TYPES = {
    HostType.NAME: str,
    HostType.IPV4: ipaddress.IPv4Address,
    HostType.IPV6: ipaddress.IPv6Address,
}


# ──────────────────────────────────────────────
# Data-classes
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Host:
    """A single concrete target: a hostname, an IPv4 or an IPv6 address.

    Two hosts are equal when both their type and their value are equal, so
    a name never equals an address even if it resolves to it.
    """
    type: HostType
    value: HostValue

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES.get(self.type)
        if expected is None:
            raise WrongVariant(f"{self.type!r} is not a single host type")
        if not isinstance(self.value, expected):
            raise WrongVariant(
                f"{self.type.value} host cannot hold {type(self.value).__name__} value {self.value!r}"
            )

    @classmethod
    def name(cls, name: str) -> "Host":
        return cls(HostType.NAME, name)

    @classmethod
    def ipv4(cls, addr: Union[str, ipaddress.IPv4Address]) -> "Host":
        return cls(HostType.IPV4, ipaddress.IPv4Address(addr))

    @classmethod
    def ipv6(cls, addr: Union[str, ipaddress.IPv6Address]) -> "Host":
        return cls(HostType.IPV6, ipaddress.IPv6Address(addr))

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class HostRow:
    """One line of a host listing report."""
    type: str
    value: str
    address: Optional[str] = None
    error: Optional[str] = None
