"""Classification enums for deployments.

Vhost templates offered in the selection menu, certificate installation
outcomes, and DNS check statuses.
"""

from __future__ import annotations

from enum import StrEnum


class VhostTemplate(StrEnum):
    """Built-in CloudPanel vhost templates offered by number."""

    WORDPRESS = "WordPress"
    WOOCOMMERCE = "WooCommerce"
    GENERIC = "Generic"


class CertificateOutcome(StrEnum):
    """Result of a Let's Encrypt certificate request."""

    INSTALLED = "installed"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"
    SKIPPED = "skipped"


class DnsStatus(StrEnum):
    """How a domain's DNS record relates to this server."""

    MATCH = "match"
    MISMATCH = "mismatch"
    MISSING = "missing"


# Menu number -> template.  Number 4 lists every template on the server.
TEMPLATE_MENU: dict[str, VhostTemplate] = {
    "1": VhostTemplate.WORDPRESS,
    "2": VhostTemplate.WOOCOMMERCE,
    "3": VhostTemplate.GENERIC,
}

CUSTOM_TEMPLATE_CHOICE = "4"
