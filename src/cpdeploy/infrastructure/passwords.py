"""Random password generation for site and database users."""

from __future__ import annotations

import secrets
import string

PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = 24) -> str:
    """Return a random alphanumeric password of *length* characters."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
