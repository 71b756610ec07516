"""DnsService — compare a domain's DNS record with this server's addresses."""

from __future__ import annotations

import logging
from typing import Any

from cpdeploy.domain.types import DnsStatus
from cpdeploy.services.base import BaseService
from cpdeploy.services.result import ServiceResult, failure
from cpdeploy.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


def suggested_records(domain: str, ipv4: str | None, ipv6: str | None) -> list[dict[str, str]]:
    """DNS records the operator should create so *domain* points here."""
    records = [{"type": "A", "name": domain, "value": ipv4 or ""}]
    if ipv6:
        records.append({"type": "AAAA", "name": domain, "value": ipv6})
    return records


def classify(domain_ip: str | None, ipv4: str | None, ipv6: str | None) -> DnsStatus:
    if not domain_ip:
        return DnsStatus.MISSING
    if domain_ip in {ip for ip in (ipv4, ipv6) if ip}:
        return DnsStatus.MATCH
    return DnsStatus.MISMATCH


class DnsService(BaseService):
    """Single-shot DNS check; re-checking is up to the caller."""

    @traced
    def check(self, domain: str) -> ServiceResult:
        """Resolve *domain* and compare it with the server's public IPs.

        Succeeds only on a match.  A missing or mismatched record fails
        with ``DNS_MISSING`` / ``DNS_MISMATCH``; the error detail carries
        the same payload a match returns as data.
        """
        op = "dns_check"
        with trace_span("public_ips"):
            ipv4, ipv6 = self._server.public_ips()
        with trace_span("resolve") as span:
            domain_ip = self._server.resolve(domain)
            if span is not None:
                span.annotate("address", domain_ip)

        status = classify(domain_ip, ipv4, ipv6)
        payload: dict[str, Any] = {
            "domain": domain,
            "status": str(status),
            "domain_ip": domain_ip,
            "server_ipv4": ipv4,
            "server_ipv6": ipv6,
            "records": suggested_records(domain, ipv4, ipv6),
        }
        logger.debug("DNS check for %s: %s", domain, status)

        if status is DnsStatus.MISSING:
            return failure(op, "DNS_MISSING", f"No DNS record found for {domain}", **payload)
        if status is DnsStatus.MISMATCH:
            return failure(
                op,
                "DNS_MISMATCH",
                f"DNS record for {domain} points to {domain_ip}, not this server",
                **payload,
            )
        return ServiceResult(ok=True, op=op, data=payload)
