"""Shared Jinja2 template loading with per-server override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, override_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with operator overrides before packaged defaults.

    Overrides are loaded from *override_root* (normally ``templates/`` next
    to ``cpdeploy.toml``).  Both a namespaced directory (for example
    ``templates/credentials/``) and the shared root are searched.
    """

    loaders: list[BaseLoader] = []
    if override_root is not None:
        loaders.append(FileSystemLoader([str(override_root / group), str(override_root)]))

    loaders.append(PackageLoader("cpdeploy", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
