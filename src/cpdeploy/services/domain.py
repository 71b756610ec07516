"""DomainService — domain validation and site identifier derivation."""

from __future__ import annotations

from cpdeploy.domain.sites import (
    InvalidDomainError,
    InvalidIdentifierError,
    check_site_identifier,
    registrable_label,
    validate_domain,
)
from cpdeploy.services.result import ServiceResult, failure
from cpdeploy.services.telemetry import traced


class DomainService:
    """Pure domain operations; needs no Server."""

    @staticmethod
    @traced
    def validate(domain: str) -> ServiceResult:
        op = "validate_domain"
        try:
            normalized = validate_domain(domain)
        except InvalidDomainError as exc:
            return failure(op, "INVALID_DOMAIN", str(exc), domain=domain)
        return ServiceResult(ok=True, op=op, data={"domain": normalized, "valid": True})

    @staticmethod
    @traced
    def derive(domain: str) -> ServiceResult:
        """Derive the site user, database name, and database user for *domain*."""
        op = "derive_identifier"
        try:
            normalized = validate_domain(domain)
        except InvalidDomainError as exc:
            return failure(op, "INVALID_DOMAIN", str(exc), domain=domain)

        try:
            site_user = check_site_identifier(normalized)
        except InvalidIdentifierError as exc:
            return failure(
                op, "INVALID_IDENTIFIER", str(exc), domain=normalized, site_user=exc.identifier
            )

        labels = normalized.split(".")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": normalized,
                "subdomain": labels[0],
                "main_domain": registrable_label(labels),
                "site_user": site_user,
                "database_name": site_user,
                "database_user": site_user,
            },
        )
