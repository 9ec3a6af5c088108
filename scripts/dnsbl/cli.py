"""
Command-line DNSBL check.

Checks one IP address against a list of DNS blacklists and prints the
result. Meant to be run by a monitoring system as a point-in-time check.

Environment Variables:
    DNSBL_THREADS           Parallel lookups (default: 10)
    DNSBL_TIMEOUT           Deadline for the whole check in seconds (default: 30)
    DNSBL_SHUTDOWN_GRACE    Wait for in-flight lookups after the deadline (default: 1)
    DNSBL_PROVIDERS         Comma-separated DNSBL zones (overrides the files)
    DNSBL_PROVIDERS_V4      Provider list file for IPv4 addresses
    DNSBL_PROVIDERS_V6      Provider list file for IPv6 addresses
    DNSBL_RESOLVER          Resolver backend: system or dnspython
    DNSBL_DNS_SERVER        Comma-separated DNS servers (implies dnspython)
    DNSBL_DNS_TIMEOUT       Per-query timeout for dnspython (default: 5)
    DNSBL_WEBHOOK_URL       Webhook to notify when the address is listed
    DNSBL_WEBHOOK_TIMEOUT   Webhook request timeout (default: 5)
    DNSBL_WEBHOOK_ON_CLEAN  Also notify when the address is clean (true/1/yes/on)

Exit codes:
    0  not listed
    1  listed on at least one blacklist
    2  invalid address or configuration

Usage:
    dnsbl-check 87.226.224.34 --format poller
    dnsbl-check --detect --providers /etc/dnsbl/providers.txt
"""

import argparse
import logging
import sys
from typing import Optional

from .config import CheckConfig
from .detect import detect_outbound_ip
from .errors import DnsblError
from .monitor import BlacklistMonitor
from .output import RENDERERS, render_text
from .providers import load_providers
from .resolver import RESOLVER_BACKENDS

EXIT_OK = 0
EXIT_LISTED = 1
EXIT_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnsbl-check",
        description="Check an IP address against DNS blacklists",
    )
    parser.add_argument("address", nargs="?", help="IPv4 or IPv6 address to check")
    parser.add_argument(
        "--detect",
        action="store_true",
        help="Check this host's outbound IP (detected via external APIs)",
    )
    parser.add_argument("--config", type=str, help="YAML config file")
    parser.add_argument(
        "--providers",
        type=str,
        help="Provider list file (text or YAML), one DNSBL zone per entry",
    )
    parser.add_argument(
        "--provider",
        action="append",
        default=[],
        metavar="ZONE",
        help="DNSBL zone to check (repeatable)",
    )
    parser.add_argument("--threads", type=int, help="Parallel lookups (default: 10)")
    parser.add_argument(
        "--timeout", type=float, help="Deadline for the whole check in seconds"
    )
    parser.add_argument("--resolver", choices=RESOLVER_BACKENDS, help="Resolver backend")
    parser.add_argument(
        "--dns-server",
        action="append",
        default=[],
        metavar="IP",
        help="DNS server to query (repeatable, implies dnspython)",
    )
    parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--webhook-url", type=str, help="Webhook to notify when listed")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    return parser


def build_config(args: argparse.Namespace) -> CheckConfig:
    """Environment, then config file, then command-line flags."""
    config = CheckConfig.from_env()
    if args.config:
        config = CheckConfig.load(args.config, base=config)

    if args.threads is not None:
        config.threads = args.threads
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.resolver:
        config.resolver = args.resolver
    if args.dns_server:
        config.dns_servers = list(args.dns_server)
    if args.webhook_url:
        config.webhook_url = args.webhook_url

    providers: list[str] = []
    if args.providers:
        providers.extend(load_providers(args.providers))
    providers.extend(args.provider)
    if providers:
        config.providers = providers

    return config


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = build_config(args)

        address = args.address
        if not address and args.detect:
            address = detect_outbound_ip()
        if not address:
            logger.error("No address to check. Pass an address or use --detect")
            return EXIT_ERROR

        report = BlacklistMonitor(config).check(address)
    except DnsblError as e:
        logger.error(str(e))
        return EXIT_ERROR

    renderer = RENDERERS[args.format]
    if renderer is render_text:
        sys.stdout.write(render_text(report, verbose=args.verbose))
    else:
        sys.stdout.write(renderer(report))

    return EXIT_LISTED if report.verdict.listed else EXIT_OK
