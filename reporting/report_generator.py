"""
HostSpec — Report generator.

Produces host listings in four formats:

1. **Console** — colour-coded ASCII table with a summary line.
2. **JSON** — machine-readable, pretty-printed.
3. **CSV** — spreadsheet-friendly.
4. **TXT** — human-readable plain-text listing.
"""

import csv
import io
import json
import logging
import socket
from datetime import datetime
from typing import List, Optional

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import APP_NAME, VERSION, Colors, HostRow, HostType, ResolutionFailed
from network.hosts import Hosts
from network.resolver import display_string, resolve, to_ipv6, type_str

logger = logging.getLogger("hostspec.reporting.report_generator")

CSV_FIELDS = ["type", "value", "address", "error"]


def _type_color(host_type: str) -> str:
    """Return ANSI colour for a printable host type."""
    mapping = {
        HostType.NAME.value: Colors.MAGENTA,
        HostType.IPV4.value: Colors.CYAN,
        HostType.IPV6.value: Colors.BLUE,
    }
    return mapping.get(host_type, Colors.WHITE)


def _address_of(host, family: Optional[int]) -> str:
    """Return the address column for *host*.

    Without *family* every host is shown as IPv6.  With a family, names are
    resolved in that family and addresses are shown as they are.
    """
    if family is None:
        return str(to_ipv6(host))
    if host.type == HostType.NAME:
        return str(resolve(host, family))
    return display_string(host)


def build_rows(hosts: Hosts, resolve_names: bool = False, family: Optional[int] = None) -> List[HostRow]:
    """Walk *hosts* from its first entry and build one report row per host.

    Parameters
    ----------
    hosts : Hosts
        Parsed collection.  Its cursor is reset first and left exhausted.
    resolve_names : bool
        Fill the ``address`` column, resolving hostnames as needed.
    family : int | None
        ``socket.AF_INET`` or ``socket.AF_INET6`` to resolve names in that
        family; ``None`` shows every host as an IPv6 address.

    Returns
    -------
    list[HostRow]
    """
    rows: List[HostRow] = []
    hosts.reset()
    for host in hosts:
        row = HostRow(type=type_str(host), value=display_string(host))
        if resolve_names:
            try:
                row.address = _address_of(host, family)
            except ResolutionFailed as exc:
                logger.warning("%s", exc)
                row.error = str(exc)
        rows.append(row)
    return rows


class ReportGenerator:
    """Multi-format host listing generator.

    Parameters
    ----------
    no_color : bool
        If *True*, strip ANSI sequences from console output.
    """

    def __init__(self, no_color: bool = False) -> None:
        self.no_color = no_color
        if no_color:
            Colors.disable()

    # ──────────────────────────────────────────
    # Console output
    # ──────────────────────────────────────────
    def print_console(self, rows: List[HostRow], hosts: Hosts) -> None:
        """Print a colour-coded host table to stdout."""
        show_address = any(r.address is not None or r.error is not None for r in rows)

        print()
        print(f"{Colors.BOLD}{'═' * 72}{Colors.RESET}")
        print(f"{Colors.BOLD}  Host list for {Colors.CYAN}{hosts.orig_str or '(empty)'}{Colors.RESET}")
        print(f"{Colors.BOLD}{'═' * 72}{Colors.RESET}")

        if not rows:
            print(f"  {Colors.YELLOW}No hosts in specification.{Colors.RESET}")
        else:
            hdr = f"  {'TYPE':<10} {'VALUE':<40}"
            if show_address:
                hdr += " ADDRESS"
            print(f"{Colors.BOLD}{hdr}{Colors.RESET}")
            print(f"  {'─' * 10} {'─' * 40}" + (f" {'─' * 20}" if show_address else ""))

            for r in rows:
                tc = _type_color(r.type)
                line = f"  {tc}{r.type:<10}{Colors.RESET} {r.value:<40}"
                if show_address:
                    if r.error is not None:
                        line += f" {Colors.RED}unresolved{Colors.RESET}"
                    else:
                        line += f" {r.address or ''}"
                print(line)

        print(f"{Colors.BOLD}{'═' * 72}{Colors.RESET}")
        print(
            f"  {Colors.GREEN}{hosts.count()} host(s){Colors.RESET}, "
            f"{Colors.YELLOW}{hosts.removed} removed{Colors.RESET} (invalid or duplicate)"
        )

    # ──────────────────────────────────────────
    # JSON
    # ──────────────────────────────────────────
    def render_json(self, rows: List[HostRow], hosts: Hosts) -> str:
        """Return the listing as a pretty-printed JSON document."""
        data = {
            "tool": APP_NAME,
            "version": VERSION,
            "generated": datetime.now().isoformat(timespec="seconds"),
            "specification": hosts.orig_str,
            "count": hosts.count(),
            "removed": hosts.removed,
            "hosts": [
                {k: v for k, v in vars(r).items() if v is not None}
                for r in rows
            ],
        }
        return json.dumps(data, indent=2)

    # ──────────────────────────────────────────
    # CSV
    # ──────────────────────────────────────────
    def render_csv(self, rows: List[HostRow]) -> str:
        """Return the listing as CSV text with a header row."""
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS, lineterminator="\n")
        writer.writeheader()
        for r in rows:
            writer.writerow({
                "type": r.type,
                "value": r.value,
                "address": r.address or "",
                "error": r.error or "",
            })
        return buf.getvalue()

    # ──────────────────────────────────────────
    # TXT
    # ──────────────────────────────────────────
    def render_txt(self, rows: List[HostRow], hosts: Hosts) -> str:
        """Return a plain-text listing, one host per line."""
        lines = [
            f"{APP_NAME} v{VERSION} host list",
            f"Specification : {hosts.orig_str}",
            f"Hosts         : {hosts.count()}",
            f"Removed       : {hosts.removed}",
            "",
        ]
        for r in rows:
            line = f"{r.type:<10} {r.value}"
            if r.error is not None:
                line += f"  (unresolved: {r.error})"
            elif r.address is not None:
                line += f"  {r.address}"
            lines.append(line)
        return "\n".join(lines) + "\n"


def family_from_version(version: Optional[int]) -> Optional[int]:
    """Map an IP version number (4 or 6) to a socket address family."""
    if version is None:
        return None
    return socket.AF_INET6 if version == 6 else socket.AF_INET
