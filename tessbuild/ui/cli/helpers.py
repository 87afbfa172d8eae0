"""
Shared CLI helpers — target options, config loading, report printing.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from tessbuild.core.models.config import BuildConfig
from tessbuild.core.services.toolchain.domain.plan import StatusReport

_LEVEL_STYLES: dict[str, dict[str, Any]] = {
    "info": {"fg": "blue"},
    "success": {"fg": "green"},
    "warning": {"fg": "yellow"},
    "error": {"fg": "red"},
    "status": {"fg": "cyan"},
}


def target_options(fn: Callable) -> Callable:
    """Options that override the target state from tessbuild.yml."""
    fn = click.option(
        "--prefix", "-p", default=None, help="Installation prefix (default: /usr/local).",
    )(fn)
    fn = click.option(
        "--languages", "-l", default=None,
        help="Comma-separated language codes (default: eng,ara,ell).",
    )(fn)
    fn = click.option(
        "--tesseract-version", "-t", "version", default=None,
        help="Target Tesseract version (default: 5.5.1).",
    )(fn)
    return fn


def load_target(ctx: click.Context, **overrides: Any) -> tuple[BuildConfig, Path | None]:
    """Config file (or defaults) with CLI overrides applied; exits 1 on error."""
    from tessbuild.core.config.loader import (
        ConfigError,
        apply_overrides,
        load_config_or_default,
    )

    try:
        config, path = load_config_or_default(ctx.obj.get("config_path"))
        return apply_overrides(config, **overrides), path
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def echo_report(report: StatusReport) -> None:
    """Print a StatusReport with colour per line level."""
    for section in report.sections:
        click.secho(f"=== {section.title} ===", fg="magenta", bold=True)
        for line in section.lines:
            style = _LEVEL_STYLES.get(line.level.value, {})
            click.secho(f"[{line.level.value.upper()}]", nl=False, **style)
            click.echo(f" {line.text}")
        click.echo()
