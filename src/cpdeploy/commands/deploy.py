"""Command: deploy a new PHP site with database, certificate, and credentials.

All prompting happens here.  Each answer is checked through a service and
re-prompted or rejected at this boundary; the collected answers become one
:class:`~cpdeploy.domain.models.DeployRequest` handed to
:meth:`SiteService.deploy`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import structlog

from cpdeploy.commands._base import CpCommand

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext

log = structlog.get_logger(__name__)

_DEPLOY_EXAMPLES = """\
  cpdeploy deploy
  cpdeploy deploy --domain www.example.com --php-version 8.3 --template WordPress
  cpdeploy --no-interact deploy --domain shop.example.com --no-ssl
  cpdeploy --no-interact --json deploy --domain example.com --ignore-dns --delete-existing"""

_BANNER = """\
=========================================
   CloudPanel Site Deployment
========================================="""


def _say(message: str = "") -> None:
    click.echo(message, err=True)


def _menu_prompt(text: str) -> str:
    """Prompt for a numbered menu entry; an empty answer picks 1."""
    answer: str = click.prompt(text, default="1", show_default=False, err=True)
    return answer.strip() or "1"


# ── PHP version ───────────────────────────────────────────────────────


def _choose_php_version(app: AppContext, requested: str | None) -> str:
    from cpdeploy.domain.php import InvalidChoiceError, select_php_version
    from cpdeploy.services.environment import EnvironmentService

    listed = EnvironmentService(app.server).php_versions()
    if not listed.ok:
        app.emit(listed)
    versions = [item["version"] for item in listed.data["items"]]

    if requested is not None:
        if requested not in versions:
            app.fail(
                "deploy_site",
                "INVALID_CHOICE",
                f"PHP {requested} is not installed",
                available=versions,
            )
        return requested

    if not app.interactive:
        return versions[0]

    _say("Available PHP versions:")
    for index, version in enumerate(versions, 1):
        _say(f"{index}) PHP {version}")
    answer = click.prompt(
        f"Select PHP version (1-{len(versions)}, default: 1 for PHP {versions[0]})",
        default="",
        show_default=False,
        err=True,
    )
    try:
        return select_php_version(versions, answer)
    except InvalidChoiceError as exc:
        app.fail("deploy_site", "INVALID_CHOICE", str(exc))


# ── Vhost template ────────────────────────────────────────────────────


def _builtin_template(name: str) -> str | None:
    from cpdeploy.domain.types import VhostTemplate

    for template in VhostTemplate:
        if template.value.lower() == name.lower():
            return template.value
    return None


def _checked_template(app: AppContext, name: str) -> str:
    from cpdeploy.services.environment import EnvironmentService

    checked = EnvironmentService(app.server).check_template(name)
    if not checked.ok:
        app.emit(checked)
    return name


def _choose_template(app: AppContext, requested: str | None) -> str:
    from cpdeploy.domain.types import CUSTOM_TEMPLATE_CHOICE, TEMPLATE_MENU
    from cpdeploy.services.environment import EnvironmentService

    if requested is None and not app.interactive:
        requested = app.settings.defaults.vhost_template
    if requested is not None:
        return _builtin_template(requested) or _checked_template(app, requested)

    _say()
    _say("Select VHost template:")
    for number, template in TEMPLATE_MENU.items():
        _say(f"{number}) {template}")
    _say(f"{CUSTOM_TEMPLATE_CHOICE}) Show all available templates")
    choice = _menu_prompt("Choose template (1-4, default: 1)")

    if choice in TEMPLATE_MENU:
        return TEMPLATE_MENU[choice].value
    if choice == CUSTOM_TEMPLATE_CHOICE:
        listed = EnvironmentService(app.server).vhost_templates()
        if not listed.ok:
            app.emit(listed)
        _say()
        _say("Available templates:")
        _say("-------------------")
        _say(listed.data["listing"])
        _say()
        name = click.prompt("Enter template name exactly as shown above", err=True)
        return _checked_template(app, name.strip())

    app.fail("deploy_site", "INVALID_CHOICE", "Invalid template selection")


# ── Domain ────────────────────────────────────────────────────────────


def _handle_existing(app: AppContext, domain: str, *, delete_existing: bool) -> bool:
    """Resolve an already-deployed *domain*.

    Returns True to continue with *domain*, False to ask for another one.
    """
    from cpdeploy.services.site import SiteService

    svc = SiteService(app.server)

    if not delete_existing:
        if not app.interactive:
            app.fail("deploy_site", "SITE_EXISTS", f"Domain {domain} already exists", domain=domain)
        _say()
        _say(f"Domain {domain} already exists!")
        _say()
        _say("Options:")
        _say("1) Abort installation (default)")
        _say("2) Enter different domain name")
        _say("3) Delete existing site and continue")
        choice = _menu_prompt("Choose option (1-3, default: 1)")
        if choice == "1":
            app.fail("deploy_site", "ABORTED", "Installation aborted by user")
        if choice != "3":
            if choice != "2":
                _say("Invalid choice. Please try again.")
            return False

    deleted = svc.delete(domain)
    if not deleted.ok:
        app.emit(deleted)
    log.info("Existing site deleted", domain=domain)
    return True


def _choose_domain(app: AppContext, requested: str | None, *, delete_existing: bool) -> str:
    from cpdeploy.services.domain import DomainService
    from cpdeploy.services.site import SiteService

    while True:
        if requested is not None:
            answer, requested = requested, None
        elif app.interactive:
            answer = click.prompt("Enter domain (e.g., www.example.com)", err=True)
        else:
            app.fail("deploy_site", "MISSING_DOMAIN", "--domain is required with --no-interact")

        derived = DomainService.derive(answer)
        if not derived.ok:
            if not app.interactive:
                app.emit(derived)
            _say("Invalid domain format. Please try again.")
            continue
        domain = derived.data["domain"]

        existing = SiteService(app.server).exists(domain)
        if not existing.data.get("exists"):
            return domain
        if _handle_existing(app, domain, delete_existing=delete_existing):
            return domain


# ── SSL and DNS ───────────────────────────────────────────────────────


def _confirm_dns(app: AppContext, domain: str) -> None:
    """Check DNS until it matches or the operator accepts a mismatch."""
    from cpdeploy.services.dns import DnsService

    svc = DnsService(app.server)
    _say("Checking DNS records...")
    while True:
        result = svc.check(domain)
        if result.ok:
            return
        if not app.interactive or result.error is None:
            app.emit(result)
        app.show(result)

        if result.error.code == "DNS_MISSING":
            click.prompt(
                "Press Enter to retry DNS check or Ctrl+C to exit",
                default="",
                show_default=False,
                err=True,
            )
            continue

        _say("If you're using Cloudflare Proxy (orange cloud), this is expected.")
        if click.confirm(
            "Continue anyway? Only proceed if you're sure the DNS is correctly configured",
            default=False,
            err=True,
        ):
            log.warning("Proceeding with installation despite DNS mismatch", domain=domain)
            return
        app.fail("deploy_site", "ABORTED", "DNS check failed and user aborted installation")


def _choose_ssl(app: AppContext, requested: bool | None) -> bool:
    if requested is not None:
        return requested
    if not app.interactive:
        return app.settings.defaults.install_ssl
    _say()
    return click.confirm("Install SSL certificate?", default=True, err=True)


# ── Command ───────────────────────────────────────────────────────────


@click.command(cls=CpCommand, examples=_DEPLOY_EXAMPLES)
@click.option("--domain", "domain_name", default=None, help="Domain to deploy.")
@click.option("--php-version", default=None, help="Installed PHP version, e.g. 8.3.")
@click.option("--template", default=None, help="Vhost template name.")
@click.option(
    "--ssl/--no-ssl",
    "install_ssl",
    default=None,
    help="Install a Let's Encrypt certificate.",
)
@click.option("--ignore-dns", is_flag=True, help="Skip the DNS check before requesting SSL.")
@click.option("--delete-existing", is_flag=True, help="Delete an existing site with this domain.")
@click.option("--skip-preflight", is_flag=True, help="Skip the root and clpctl checks.")
@click.pass_obj
def deploy(
    app: AppContext,
    domain_name: str | None,
    php_version: str | None,
    template: str | None,
    install_ssl: bool | None,
    ignore_dns: bool,
    delete_existing: bool,
    skip_preflight: bool,
) -> None:
    """Deploy a new PHP site on this CloudPanel server."""
    from cpdeploy.domain.models import DeployRequest
    from cpdeploy.services.environment import EnvironmentService
    from cpdeploy.services.site import SiteService, certificate_hint

    if not skip_preflight:
        checked = EnvironmentService(app.server).preflight()
        if not checked.ok:
            app.emit(checked)

    if app.interactive:
        _say(_BANNER)
        _say()

    chosen_php = _choose_php_version(app, php_version)
    chosen_template = _choose_template(app, template)
    domain = _choose_domain(app, domain_name, delete_existing=delete_existing)

    ssl = _choose_ssl(app, install_ssl)
    if ssl and not ignore_dns:
        _confirm_dns(app, domain)
    elif not ssl:
        log.info("SSL certificate installation will be skipped", domain=domain)
        _say("You can install the SSL certificate later using:")
        _say(certificate_hint(domain))

    request = DeployRequest(
        domain=domain,
        php_version=chosen_php,
        vhost_template=chosen_template,
        install_ssl=ssl,
    )
    log.info("Starting site creation", domain=domain, site_user=request.site_user)
    app.emit(SiteService(app.server).deploy(request))
