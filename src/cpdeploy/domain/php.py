"""PHP runtime version parsing, ordering, and menu selection.

CloudPanel installs each PHP runtime under ``/etc/php/<major>.<minor>``.
Directory names that don't look like a version are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

PHP_VERSION_PATTERN = re.compile(r"^\d+\.\d+$")


class InvalidChoiceError(ValueError):
    """Raised when a menu answer doesn't select any offered entry."""


def is_php_version(name: str) -> bool:
    """Check whether *name* looks like ``<major>.<minor>``."""
    return PHP_VERSION_PATTERN.match(name) is not None


def version_key(version: str) -> tuple[int, ...]:
    """Numeric sort key, so ``8.10`` orders after ``8.9``."""
    return tuple(int(part) for part in version.split("."))


def sort_php_versions(names: Iterable[str]) -> list[str]:
    """Filter *names* to PHP versions and sort them newest first."""
    versions = {name for name in names if is_php_version(name)}
    return sorted(versions, key=version_key, reverse=True)


def select_php_version(versions: list[str], answer: str | None) -> str:
    """Resolve a 1-based menu *answer* against *versions* (newest first).

    An empty answer picks the newest version.
    """
    if not versions:
        raise InvalidChoiceError("No PHP versions available")
    answer = (answer or "").strip()
    if not answer:
        return versions[0]
    if answer.isdigit() and 1 <= int(answer) <= len(versions):
        return versions[int(answer) - 1]
    raise InvalidChoiceError(f"Invalid PHP version selection: {answer}")
