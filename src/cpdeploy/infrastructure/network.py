"""Public address discovery and DNS lookups.

The server's own public IPs come from an HTTP echo endpoint (``requests``);
a domain's address comes from the system resolver (``dnspython``).  Both
return ``None`` instead of raising when the lookup fails.
"""

from __future__ import annotations

import ipaddress
import logging

import dns.exception
import dns.resolver
import requests

logger = logging.getLogger(__name__)

# Record types tried in order when resolving a domain.
_RECORD_TYPES = ("A", "AAAA")


def fetch_public_ip(url: str, *, timeout: float = 5.0) -> str | None:
    """Return the address an echo service at *url* reports for this host."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.debug("Public IP lookup via %s failed: %s", url, exc)
        return None

    candidate = response.text.strip()
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        logger.debug("Public IP lookup via %s returned %r", url, candidate[:64])
        return None


def resolve_address(domain: str, *, lifetime: float = 5.0) -> str | None:
    """Return the first A (or, failing that, AAAA) address of *domain*."""
    for rdtype in _RECORD_TYPES:
        try:
            answer = dns.resolver.resolve(domain, rdtype, lifetime=lifetime)
        except dns.exception.DNSException as exc:
            logger.debug("%s lookup for %s failed: %s", rdtype, domain, exc)
            continue
        for rdata in answer:
            return rdata.to_text()
    return None
