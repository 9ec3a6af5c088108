"""Detect the outbound IP address of this host."""

import ipaddress
import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

# Default external IP detection APIs
DEFAULT_IP_APIS = [
    "https://ifconfig.me/ip",
    "https://icanhazip.com",
    "https://api.ipify.org",
    "https://ipinfo.io/ip",
]


def _is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def detect_outbound_ip(
    apis: Optional[list[str]] = None,
    timeout: int = 15,
    session: Optional[requests.Session] = None,
) -> Optional[str]:
    """Ask external APIs for our outbound IP; first valid answer wins."""
    http = session or requests

    for api_url in apis or DEFAULT_IP_APIS:
        try:
            response = http.get(
                api_url,
                timeout=timeout,
                headers={"User-Agent": "dnsbl-check"},
            )
        except requests.RequestException as e:
            logger.debug(f"Failed to get IP from {api_url}: {e}")
            continue

        if response.status_code == 200:
            ip = response.text.strip()
            if _is_valid_ip(ip):
                logger.info(f"Auto-detected IP via {api_url}: {ip}")
                return ip
            logger.debug(f"Ignoring invalid answer from {api_url}: {ip!r}")

    logger.warning("Could not detect outbound IP from any API")
    return None
