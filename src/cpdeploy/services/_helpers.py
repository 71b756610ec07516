"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import datetime


def now_local() -> str:
    """Current local time as ``YYYY-MM-DD HH:MM:SS`` (for credentials files)."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def error_detail(exc: BaseException) -> dict[str, object]:
    """Collect the ``detail`` payload for a failed external command.

    Picks up ``returncode`` and ``output`` when *exc* carries them (see
    :class:`~cpdeploy.infrastructure.clpctl.ControlPlaneError`).
    """
    detail: dict[str, object] = {}
    returncode = getattr(exc, "returncode", None)
    if returncode is not None:
        detail["returncode"] = returncode
    output = getattr(exc, "output", "")
    if output:
        detail["output"] = output
    return detail
