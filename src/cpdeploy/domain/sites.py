"""Domain name validation and site identifier derivation.

A site identifier is the short name CloudPanel uses for the site's system
account, its database, and its database user.  It is derived from the
domain name alone:

- ``example.com`` and ``www.example.com`` -> ``example``
- ``staging.example.com`` -> ``example-staging``
- ``staging.example.co.uk`` -> ``example-staging``

INVARIANT: derivation is a pure function of the normalized domain.

Normalization lowercases and trims surrounding whitespace.  A trailing dot
is kept, so fully-qualified ``example.com.`` fails validation.

Known limitation: compound suffixes are detected with a fixed marker set,
not the public suffix list.  ``example.gov.br`` is handled because ``gov``
is a marker; ``example.ac.jp`` is not.

The pattern also admits empty labels, so ``..com`` derives an empty
identifier and ``..example.com`` derives ``example-``.  Derivation keeps
that behaviour; :func:`check_site_identifier` rejects such names before
they reach the control plane.
"""

from __future__ import annotations

import re

DOMAIN_PATTERN = re.compile(r"^[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

# Second-to-last labels that mark a compound suffix (.co.uk, .com.au, ...).
COMPOUND_MARKERS: frozenset[str] = frozenset({"co", "com", "org", "net", "gov", "edu"})

WWW_LABEL = "www"

IDENTIFIER_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")


class InvalidDomainError(ValueError):
    """Raised when a domain name fails the syntactic check."""

    def __init__(self, domain: str) -> None:
        super().__init__(f"Invalid domain name: {domain}")
        self.domain = domain


class InvalidIdentifierError(ValueError):
    """Raised when a derived site identifier can't name an account or database."""

    def __init__(self, domain: str, identifier: str) -> None:
        super().__init__(f"Domain {domain} derives an unusable site user: {identifier!r}")
        self.domain = domain
        self.identifier = identifier


def normalize_domain(domain: str) -> str:
    """Trim whitespace and lowercase *domain*."""
    return domain.strip().lower()


def is_valid_domain(domain: str) -> bool:
    """Check whether *domain* passes the syntactic pattern after normalization."""
    return DOMAIN_PATTERN.match(normalize_domain(domain)) is not None


def validate_domain(domain: str) -> str:
    """Return the normalized domain, or raise :class:`InvalidDomainError`.

    This is a shape check only: it does not verify that the domain is
    registered or resolves.
    """
    normalized = normalize_domain(domain)
    if DOMAIN_PATTERN.match(normalized) is None:
        raise InvalidDomainError(domain)
    return normalized


def registrable_label(labels: list[str]) -> str:
    """Return the label that names the registrable domain.

    ``["mail", "example", "com"]`` -> ``"example"``;
    ``["shop", "example", "co", "uk"]`` -> ``"example"``.
    """
    if len(labels) >= 3 and labels[-2] in COMPOUND_MARKERS:
        return labels[-3]
    return labels[-2]


def derive_site_identifier(domain: str) -> str:
    """Derive the site identifier for *domain*.

    Assumes *domain* already passed :func:`validate_domain`.

    Examples:
        >>> derive_site_identifier("www.example.com")
        'example'
        >>> derive_site_identifier("staging.example.co.uk")
        'example-staging'
        >>> derive_site_identifier("example.co.za")
        'example'
    """
    labels = normalize_domain(domain).split(".")
    subdomain = labels[0]
    main_domain = registrable_label(labels)

    if subdomain in (WWW_LABEL, main_domain):
        return main_domain
    return f"{main_domain}-{subdomain}"


def check_site_identifier(domain: str) -> str:
    """Derive the identifier for *domain* and reject unusable results.

    An identifier must be non-empty and must not start or end with a hyphen.
    """
    identifier = derive_site_identifier(domain)
    if IDENTIFIER_PATTERN.match(identifier) is None:
        raise InvalidIdentifierError(domain, identifier)
    return identifier
