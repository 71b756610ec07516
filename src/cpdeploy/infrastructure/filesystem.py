"""Filesystem probes and writes on the CloudPanel host.

Pure parsing helpers live in :mod:`cpdeploy.domain` (correct dependency
direction: infrastructure -> domain).  This module handles directory
listings, existence checks, and the credentials file write.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from cpdeploy.domain.php import sort_php_versions

logger = logging.getLogger(__name__)

CREDENTIALS_MODE = 0o600


def list_php_versions(php_root: Path) -> list[str]:
    """Installed PHP versions under *php_root*, newest first.

    Only directories named ``<major>.<minor>`` count.  A missing root
    yields an empty list.
    """
    if not php_root.is_dir():
        return []
    return sort_php_versions(p.name for p in php_root.iterdir() if p.is_dir())


def find_site_artifacts(
    domain: str,
    site_user: str,
    *,
    home_root: Path,
    nginx_sites_enabled: Path,
    letsencrypt_live: Path,
) -> list[Path]:
    """Return leftovers on disk that show *domain* is already deployed.

    Checks the nginx vhost, the Let's Encrypt live directory, and the
    site's document root.
    """
    candidates = [
        (nginx_sites_enabled / f"{domain}.conf", Path.is_file),
        (letsencrypt_live / domain, Path.is_dir),
        (home_root / site_user / "htdocs" / domain, Path.is_dir),
    ]
    return [path for path, probe in candidates if probe(path)]


def write_private_file(path: Path, content: str, *, owner: str | None = None) -> None:
    """Write *content* to *path* readable and writable by *owner* only.

    The mode is set before any content lands in the file.  When *owner*
    is given the file is chowned to ``owner:owner``.
    """
    path.touch(mode=CREDENTIALS_MODE, exist_ok=True)
    path.chmod(CREDENTIALS_MODE)
    path.write_text(content, encoding="utf-8")
    if owner is not None:
        shutil.chown(path, user=owner, group=owner)
    logger.debug("Wrote %s (owner=%s)", path, owner)
