"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich output, colors, panels)
or machines (--json).  The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from cpdeploy.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags, derived from the global CLI options."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
) -> str:
    """Format a ServiceResult for display.

    Human output is the default when *settings* is omitted.
    """
    if settings is None:
        settings = OutputSettings()

    if settings.json_output:
        return result.model_dump_json(indent=2)

    from cpdeploy.output.renderers import render_quiet, render_result

    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
