#!/usr/bin/env python3
"""
HostSpec — Host specification parser.

Entry point.  Parses CLI arguments, builds the host collection, and prints
it in the requested format.

Usage examples
--------------
    python main.py --target 192.168.1.0/24
    python main.py --target "10.0.0.5-10, example.com, ::1" --resolve
    python main.py -iL targets.txt --shuffle --seed 42 --format json
"""

import argparse
import os
import random
import sys
from typing import List, Optional

# Ensure the project root is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import APP_NAME, VERSION, Colors
from utils.logger import setup_logger
from network.hosts import Hosts, read_hosts_file
from reporting.report_generator import ReportGenerator, build_rows, family_from_version

FORMATS = ("table", "json", "csv", "txt")


def build_parser() -> argparse.ArgumentParser:
    """Create and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="hostspec",
        description=f"{APP_NAME} v{VERSION} — Host specification parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python main.py --target 192.168.1.0/24\n"
            "  python main.py --target 10.0.0.5-10,example.com --resolve\n"
            "  python main.py -iL targets.txt --shuffle --seed 42 --format json\n"
        ),
    )

    # Target specification
    target_group = parser.add_argument_group("Target specification")
    target_group.add_argument(
        "--target", "-t", dest="target", type=str, default=None,
        help="Host(s): IP, IPv6, CIDR, short/long range, hostname, or comma-separated list",
    )
    target_group.add_argument(
        "--input-list", "-iL", dest="input_list", type=str, default=None,
        help="Read host specifications from a file (one or more per line)",
    )

    # Ordering
    order_group = parser.add_argument_group("Ordering")
    order_group.add_argument(
        "--shuffle", dest="shuffle", action="store_true", default=False,
        help="Randomize the order of the hosts",
    )
    order_group.add_argument(
        "--seed", dest="seed", type=int, default=None,
        help="Seed for --shuffle, for a reproducible order",
    )

    # Resolution
    resolve_group = parser.add_argument_group("Resolution")
    resolve_group.add_argument(
        "--resolve", dest="resolve", action="store_true", default=False,
        help="Show each host as an address, resolving hostnames",
    )
    resolve_group.add_argument(
        "--family", dest="family", type=int, choices=(4, 6), default=None,
        help="Resolve hostnames to IPv4 or IPv6 (default: IPv4-mapped IPv6)",
    )

    # Output
    out_group = parser.add_argument_group("Output")
    out_group.add_argument(
        "--format", "-f", dest="format", choices=FORMATS, default="table",
        help="Output format (default: table)",
    )
    out_group.add_argument(
        "--no-color", dest="no_color", action="store_true", default=False,
        help="Disable coloured output",
    )

    # Misc
    misc_group = parser.add_argument_group("Miscellaneous")
    misc_group.add_argument(
        "--verbose", "-v", dest="verbose", action="store_true", default=False,
        help="Verbose / debug output",
    )
    misc_group.add_argument(
        "--log-file", dest="log_file", type=str, default=None,
        help="Also write debug logs to this file",
    )
    misc_group.add_argument(
        "--version", "-V", action="version", version=f"{APP_NAME} {VERSION}",
    )

    return parser


def load_hosts(args: argparse.Namespace) -> Hosts:
    """Merge --target and --input-list into a single host collection."""
    rng = random.Random(args.seed)
    specs: List[str] = []
    if args.target:
        specs.append(args.target)
    if args.input_list:
        specs.append(read_hosts_file(args.input_list))
    if not specs:
        raise ValueError("No targets specified. Use --target or --input-list.")
    return Hosts("\n".join(specs), rng=rng)


def main(argv: Optional[List[str]] = None) -> int:
    """HostSpec entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # ── Colour control ───────────────────────
    if args.no_color:
        Colors.disable()

    # ── Logger ───────────────────────────────
    logger = setup_logger(verbose=args.verbose, log_file=args.log_file, use_colour=not args.no_color)

    # ── Hosts ────────────────────────────────
    try:
        hosts = load_hosts(args)
    except (ValueError, FileNotFoundError) as exc:
        print(f"{Colors.RED}[!] Target error: {exc}{Colors.RESET}", file=sys.stderr)
        return 1

    logger.info("Parsed %d host(s), %d removed", hosts.count(), hosts.removed)

    if args.shuffle:
        hosts.shuffle()
        logger.debug("Shuffled host order (seed=%s)", args.seed)

    # ── Report ───────────────────────────────
    rows = build_rows(hosts, resolve_names=args.resolve, family=family_from_version(args.family))
    reporter = ReportGenerator(no_color=args.no_color)

    if args.format == "json":
        sys.stdout.write(reporter.render_json(rows, hosts) + "\n")
    elif args.format == "csv":
        sys.stdout.write(reporter.render_csv(rows))
    elif args.format == "txt":
        sys.stdout.write(reporter.render_txt(rows, hosts))
    else:
        reporter.print_console(rows, hosts)

    return 0


if __name__ == "__main__":
    sys.exit(main())
