"""Tests for operation-specific Rich renderers."""

from cpdeploy.output.renderers import render_quiet, render_result
from cpdeploy.services.domain import DomainService
from cpdeploy.services.result import ServiceResult, failure

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, warnings: list[str] | None = None, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data), warnings=warnings or [])


_RECORDS = [
    {"type": "A", "name": "shop.example.com", "value": "203.0.113.10"},
    {"type": "AAAA", "name": "shop.example.com", "value": "2001:db8::10"},
]


def _deploy_result() -> ServiceResult:
    return _ok(
        "deploy_site",
        domain="shop.example.com",
        url="https://shop.example.com",
        site_user="example-shop",
        database_name="example-shop",
        database_user="example-shop",
        php_version="8.3",
        vhost_template="WooCommerce",
        certificate="installed",
        document_root="/home/example-shop/htdocs/shop.example.com",
        credentials_path="/home/example-shop/site_credentials.txt",
        credentials={
            "site_password": "SitePass123",
            "database_host": "127.0.0.1",
            "database_port": 3306,
            "database_password": "DbPass456",
            "server_ipv4": "203.0.113.10",
            "server_ipv6": None,
            "installed_at": "2026-01-02 03:04:05",
        },
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(failure("validate_domain", "INVALID_DOMAIN", "Invalid domain"))
        assert "ERROR" in output
        assert "validate_domain" in output
        assert "Invalid domain" in output

    def test_detail_hidden_without_verbose(self) -> None:
        output = render_result(failure("check_template", "INVALID_TEMPLATE", "Bad", name="X"))
        assert "detail" not in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(
            failure("check_template", "INVALID_TEMPLATE", "Bad", name="Drupal"),
            verbose=True,
        )
        assert "detail" in output
        assert "name: Drupal" in output

    def test_clpctl_output_always_shown(self) -> None:
        output = render_result(
            failure("deploy_site", "DATABASE_CREATE_FAILED", "Failed", output="Database exists")
        )
        assert "Database exists" in output

    def test_dns_records_table(self) -> None:
        output = render_result(
            failure(
                "dns_check",
                "DNS_MISMATCH",
                "DNS record points elsewhere",
                domain_ip="104.21.3.4",
                records=_RECORDS,
            )
        )
        assert "104.21.3.4" in output
        assert "only the A record is required" in output
        assert "AAAA" in output
        assert "2001:db8::10" in output

    def test_bracketed_input_printed_verbatim(self) -> None:
        result = DomainService.validate("[/x]")
        output = render_result(result)
        assert "Invalid domain name: [/x]" in output

    def test_bracketed_style_tag_not_applied(self) -> None:
        output = render_result(DomainService.derive("[bold]foo"))
        assert "Invalid domain name: [bold]foo" in output

    def test_bracketed_detail_verbatim(self) -> None:
        output = render_result(
            failure("check_template", "INVALID_TEMPLATE", "Bad", name="[/Joomla]"),
            verbose=True,
        )
        assert "name: [/Joomla]" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Success rendering ────────────────────────────────────────────────


class TestIdentifierRenderer:
    def test_fields(self) -> None:
        output = render_result(
            _ok(
                "derive_identifier",
                domain="staging.example.co.uk",
                subdomain="staging",
                main_domain="example",
                site_user="example-staging",
                database_name="example-staging",
                database_user="example-staging",
            )
        )
        assert "site_user: example-staging" in output
        assert "subdomain" not in output

    def test_verbose_shows_parts(self) -> None:
        output = render_result(
            _ok(
                "derive_identifier",
                domain="staging.example.co.uk",
                subdomain="staging",
                main_domain="example",
                site_user="example-staging",
                database_name="example-staging",
                database_user="example-staging",
            ),
            verbose=True,
        )
        assert "main_domain: example" in output


class TestPhpVersionsRenderer:
    def test_table(self) -> None:
        output = render_result(
            _ok(
                "php_versions",
                latest="8.3",
                count=2,
                items=[{"index": 1, "version": "8.3"}, {"index": 2, "version": "8.2"}],
            )
        )
        assert "PHP 8.3 (latest)" in output
        assert "PHP 8.2" in output
        assert "2 versions" in output


class TestTemplatesRenderer:
    def test_listing_verbatim(self) -> None:
        output = render_result(
            _ok(
                "vhost_templates",
                builtin=["WordPress", "WooCommerce", "Generic"],
                listing="| Laravel 11  | Public |\n| [weird] | Custom |",
            )
        )
        assert "builtin: WordPress, WooCommerce, Generic" in output
        assert "| [weird] | Custom |" in output


class TestDnsRenderer:
    def test_match(self) -> None:
        output = render_result(
            _ok(
                "dns_check",
                domain="shop.example.com",
                status="match",
                domain_ip="203.0.113.10",
                server_ipv4="203.0.113.10",
                server_ipv6=None,
                records=_RECORDS,
            )
        )
        assert "status: match" in output
        assert "server_ipv6" not in output


class TestSiteExistsRenderer:
    def test_artifacts(self) -> None:
        output = render_result(
            _ok(
                "site_exists",
                domain="shop.example.com",
                site_user="example-shop",
                exists=True,
                listed=False,
                artifacts=["/etc/nginx/sites-enabled/shop.example.com.conf"],
            )
        )
        assert "exists: yes" in output
        assert "shop.example.com.conf" in output
        assert "listed" not in output


class TestDeployRenderer:
    def test_credentials_panel(self) -> None:
        output = render_result(_deploy_result())
        assert "Site Credentials" in output
        assert "Site User: example-shop" in output
        assert "Password: SitePass123" in output
        assert "Database User Password: DbPass456" in output
        assert "Document Root: /home/example-shop/htdocs/shop.example.com" in output
        assert "certificate: installed" in output
        assert output.endswith("Your site is ready at: https://shop.example.com")


class TestGenericRenderer:
    def test_key_values(self) -> None:
        output = render_result(_ok("delete_site", domain="shop.example.com", deleted=True))
        assert "OK" in output
        assert "deleted: True" in output

    def test_nested_values_as_json(self) -> None:
        output = render_result(_ok("custom_op", items=[1, 2]))
        assert "items: [1,2]" in output

    def test_verbose_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="preflight",
            data={"root": True},
            meta={"telemetry": {"name": "EnvironmentService.preflight", "duration_ms": 1.5}},
        )
        output = render_result(result, verbose=True)
        assert "meta:" in output
        assert "EnvironmentService.preflight" in output

    def test_verbose_meta_annotations(self) -> None:
        result = ServiceResult(
            ok=True,
            op="dns_check",
            data={"domain": "example.com", "status": "match"},
            meta={
                "telemetry": {
                    "name": "DnsService.check",
                    "duration_ms": 3.0,
                    "children": [
                        {
                            "name": "resolve",
                            "duration_ms": 1.0,
                            "annotations": {"address": "203.0.113.10"},
                        }
                    ],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "resolve  (address=203.0.113.10)" in output


# ── Quiet rendering ──────────────────────────────────────────────────


class TestRenderQuiet:
    def test_error(self) -> None:
        output = render_quiet(failure("dns_check", "DNS_MISSING", "No DNS record found"))
        assert output == "ERROR: dns_check — No DNS record found"

    def test_identifier(self) -> None:
        assert render_quiet(_ok("derive_identifier", site_user="example")) == "example"

    def test_deploy_prints_url_not_passwords(self) -> None:
        output = render_quiet(_deploy_result())
        assert output == "https://shop.example.com"

    def test_php_versions(self) -> None:
        result = _ok(
            "php_versions",
            items=[{"index": 1, "version": "8.3"}, {"index": 2, "version": "8.2"}],
        )
        assert render_quiet(result) == "8.3\n8.2"

    def test_fallback(self) -> None:
        assert render_quiet(_ok("delete_site", deleted=True)) == "OK: delete_site"
