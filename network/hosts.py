"""
HostSpec — Hosts collection.

Turn a comma/newline-separated host specification into an ordered,
deduplicated collection of single hosts that can be iterated, shuffled
and counted.
"""

import ipaddress
import logging
import random
from typing import Iterator, List, Optional, Set, Tuple

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import (
    COMMENT_PREFIX,
    HOST_SEPARATOR,
    RANGE_TYPES,
    Host,
    HostType,
    InvalidInput,
    InvertedRangeLimits,
    MalformedToken,
)
from network.host_parser import determine_host_type, expand_range

logger = logging.getLogger("hostspec.network.hosts")


def _single_host(token: str, host_type: HostType) -> Host:
    """Build the entry for a token classified as a single host."""
    if host_type == HostType.NAME:
        return Host(HostType.NAME, token)
    if host_type == HostType.IPV4:
        return Host(HostType.IPV4, ipaddress.IPv4Address(token))
    return Host(HostType.IPV6, ipaddress.IPv6Address(token))


class Hosts:
    """Ordered collection of single hosts built from a host specification.

    Each element of the specification may be a hostname, an IPv4 or IPv6
    address, an IPv4 CIDR block (``192.168.1.0/24``), a short range
    (``192.168.1.5-40``) or a long range (``192.168.1.5-192.168.2.40``).
    Blocks and ranges are expanded into single IPv4 hosts.  Unparsable
    elements and duplicates are dropped and counted in :attr:`removed`.

    The collection keeps an iteration cursor that only :meth:`next`
    advances.  Construction, :meth:`remove_duplicates`, :meth:`shuffle` and
    :meth:`reset` move it back to the first host.  Not thread-safe.

    Parameters
    ----------
    hosts_str : str
        Host specification, elements separated by commas or newlines.
    rng : random.Random | None
        Randomness source used by :meth:`shuffle`.

    Raises
    ------
    InvalidInput
        If *hosts_str* is ``None`` or not a string.
    """

    def __init__(self, hosts_str: str, rng: Optional[random.Random] = None) -> None:
        if hosts_str is None:
            raise InvalidInput("No host specification given")
        if not isinstance(hosts_str, str):
            raise InvalidInput(
                f"Host specification must be a string, not {type(hosts_str).__name__}"
            )

        self.orig_str = hosts_str.replace("\n", HOST_SEPARATOR)
        self.rng = rng if rng is not None else random.Random()
        self.removed = 0
        self._hosts: List[Host] = []
        self._current = 0

        for element in self.orig_str.split(HOST_SEPARATOR):
            token = element.strip()
            if not token:
                continue
            self._add_token(token)

        self.remove_duplicates()
        logger.debug(
            "Parsed %d host(s) from '%s' (%d removed)",
            len(self._hosts), self.orig_str, self.removed,
        )

    # ──────────────────────────────────────────
    # Construction
    # ──────────────────────────────────────────
    def _add_token(self, token: str) -> None:
        host_type = determine_host_type(token)

        if host_type is None:
            self.removed += 1
            logger.warning("%s: Invalid host string.", token)
            return

        if host_type in RANGE_TYPES:
            try:
                ips = expand_range(token, host_type)
            except InvertedRangeLimits:
                self.removed += 1
                logger.warning("%s: Inversed limits.", token)
                return
            except MalformedToken as exc:
                self.removed += 1
                logger.warning("%s", exc)
                return
            self._hosts.extend(Host(HostType.IPV4, ip) for ip in ips)
            return

        self._hosts.append(_single_host(token, host_type))

    @classmethod
    def from_file(cls, filepath: str, rng: Optional[random.Random] = None) -> "Hosts":
        """Build a collection from a target-list file.

        See :func:`read_hosts_file` for the file format.

        Raises
        ------
        FileNotFoundError
            If *filepath* does not exist.
        """
        return cls(read_hosts_file(filepath), rng=rng)

    # ──────────────────────────────────────────
    # Deduplication / ordering
    # ──────────────────────────────────────────
    def remove_duplicates(self) -> int:
        """Drop every host equal to an earlier one and reset the cursor.

        The earliest copy is kept and the relative order of the survivors
        is preserved.  Hosts hash on their type and value, so the pass is
        linear rather than pairwise.

        Returns
        -------
        int
            Number of hosts removed by this call.
        """
        seen: Set[Host] = set()
        unique: List[Host] = []
        for host in self._hosts:
            if host in seen:
                logger.debug("%s: Duplicate host removed.", host)
                continue
            seen.add(host)
            unique.append(host)

        dropped = len(self._hosts) - len(unique)
        self._hosts = unique
        self.removed += dropped
        self._current = 0
        return dropped

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Randomize the order of the hosts and reset the cursor.

        Not to be used while iterating.

        Parameters
        ----------
        rng : random.Random | None
            Overrides the randomness source given at construction.
        """
        if rng is None:
            rng = self.rng
        rng.shuffle(self._hosts)
        self._current = 0

    # ──────────────────────────────────────────
    # Iteration
    # ──────────────────────────────────────────
    def next(self) -> Optional[Host]:
        """Return the host under the cursor and advance it.

        Returns
        -------
        Host | None
            ``None`` once every host has been returned.
        """
        if self._current >= len(self._hosts):
            return None
        host = self._hosts[self._current]
        self._current += 1
        return host

    def reset(self) -> None:
        """Move the cursor back to the first host."""
        self._current = 0

    def __iter__(self) -> Iterator[Host]:
        return self

    def __next__(self) -> Host:
        host = self.next()
        if host is None:
            raise StopIteration
        return host

    # ──────────────────────────────────────────
    # Accessors
    # ──────────────────────────────────────────
    def count(self) -> int:
        return len(self._hosts)

    def removed_count(self) -> int:
        return self.removed

    @property
    def hosts(self) -> Tuple[Host, ...]:
        return tuple(self._hosts)

    def __len__(self) -> int:
        return len(self._hosts)

    def __getitem__(self, index: int) -> Host:
        return self._hosts[index]

    def __contains__(self, host: object) -> bool:
        return host in self._hosts

    def __repr__(self) -> str:
        return f"Hosts({self.orig_str!r}, count={len(self._hosts)}, removed={self.removed})"


def read_hosts_file(filepath: str) -> str:
    """Read a target-list file into a host specification string.

    Each line holds one or more comma-separated elements.  Blank lines and
    lines starting with ``#`` are skipped.

    Parameters
    ----------
    filepath : str
        Path to the target-list file.

    Returns
    -------
    str
        The kept lines joined with newlines.

    Raises
    ------
    FileNotFoundError
        If *filepath* does not exist.
    """
    lines: List[str] = []
    try:
        with open(filepath, "r", encoding="utf-8") as fh:
            for raw_line in fh:
                line = raw_line.strip()
                if not line or line.startswith(COMMENT_PREFIX):
                    continue
                lines.append(line)
    except FileNotFoundError:
        raise FileNotFoundError(f"Target file not found: '{filepath}'")

    logger.debug("Read %d line(s) from %s", len(lines), filepath)
    return "\n".join(lines)


def parse_hosts(hosts_str: Optional[str], rng: Optional[random.Random] = None) -> Optional[Hosts]:
    """Parse a host specification into a :class:`Hosts` collection.

    Parameters
    ----------
    hosts_str : str | None
        Host specification string.
    rng : random.Random | None
        Randomness source for later shuffling.

    Returns
    -------
    Hosts | None
        ``None`` only when *hosts_str* is ``None``.

    Examples
    --------
    >>> [str(h) for h in parse_hosts("10.0.0.0/30, example.com")]
    ['10.0.0.1', '10.0.0.2', 'example.com']
    """
    if hosts_str is None:
        return None
    return Hosts(hosts_str, rng=rng)


def parse_hosts_file(filepath: str, rng: Optional[random.Random] = None) -> Hosts:
    """Read a target-list file into a :class:`Hosts` collection."""
    return Hosts.from_file(filepath, rng=rng)
