"""
CLI commands for running a single host probe.

Thin wrappers over ``tessbuild.core.services.toolchain.detection``.
"""

from __future__ import annotations

import json

import click

from tessbuild.ui.cli.helpers import load_target


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
def probe() -> None:
    """Probe — platform, deps, leptonica, tesseract, langs."""


# ── Platform / dependencies ─────────────────────────────────────


@probe.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def platform(as_json: bool) -> None:
    """Show the detected package-manager family."""
    from tessbuild.core.models.toolchain import PlatformFamily
    from tessbuild.core.services.toolchain.detection.platform import resolve_platform

    family = resolve_platform()
    if as_json:
        _echo_json({"family": family.value})
        return
    color = "yellow" if family is PlatformFamily.UNKNOWN else "green"
    click.secho(f"📦 Platform family: {family.value}", fg=color)


@probe.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def deps(ctx: click.Context, as_json: bool) -> None:
    """Check the system build dependencies."""
    from tessbuild.core.models.toolchain import DependencyIndeterminate
    from tessbuild.core.services.toolchain.detection.platform import resolve_platform
    from tessbuild.core.services.toolchain.detection.system_deps import probe_dependencies

    config, _ = load_target(ctx)
    family = resolve_platform()
    result = probe_dependencies(
        family, config.requirements_for(family), timeout=config.probe_timeout,
    )

    if as_json:
        _echo_json({"family": family.value, **result.model_dump(mode="json")})
        return

    if isinstance(result, DependencyIndeterminate):
        click.secho(f"⚠️  Cannot determine dependency status: {result.reason}", fg="yellow")
        return

    click.secho(f"📦 {family.value}: {result.installed_count}/{result.total} installed", bold=True)
    for name in result.installed:
        click.secho(f"   ✅ {name}", fg="green")
    for name in result.missing:
        click.secho(f"   ❌ {name}", fg="red")


# ── Components ──────────────────────────────────────────────────


def _echo_component(label: str, status, as_json: bool) -> None:
    from tessbuild.core.models.toolchain import InstalledComponent

    if as_json:
        installed = isinstance(status, InstalledComponent)
        _echo_json({"installed": installed, **status.model_dump(mode="json")})
        return

    if isinstance(status, InstalledComponent):
        click.secho(f"✅ {label} {status.version}", fg="green")
        if status.location:
            click.echo(f"   Location: {status.location}")
        if status.source:
            click.echo(f"   Detected via: {status.source}")
    else:
        click.secho(f"❌ {label} is not installed", fg="red")


@probe.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--prefix", "-p", default=None, help="Installation prefix.")
@click.pass_context
def leptonica(ctx: click.Context, as_json: bool, prefix: str | None) -> None:
    """Detect Leptonica."""
    from tessbuild.core.services.toolchain.detection.leptonica import probe_library

    config, _ = load_target(ctx, prefix=prefix)
    _echo_component("Leptonica", probe_library(config.prefix, timeout=config.probe_timeout), as_json)


@probe.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tesseract(ctx: click.Context, as_json: bool) -> None:
    """Detect the Tesseract binary."""
    from tessbuild.core.services.toolchain.detection.tesseract import probe_engine

    config, _ = load_target(ctx)
    _echo_component("Tesseract", probe_engine(timeout=config.probe_timeout), as_json)


# ── Languages ───────────────────────────────────────────────────


@probe.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--languages", "-l", default=None, help="Comma-separated language codes.")
@click.option("--prefix", "-p", default=None, help="Installation prefix.")
@click.pass_context
def langs(ctx: click.Context, as_json: bool, languages: str | None, prefix: str | None) -> None:
    """Locate tessdata and diff the requested languages."""
    from tessbuild.core.models.toolchain import NoTessdataDir
    from tessbuild.core.services.toolchain.detection.tessdata import resolve_languages

    config, _ = load_target(ctx, languages=languages, prefix=prefix)
    result = resolve_languages(config.languages, config.prefix, timeout=config.probe_timeout)

    if as_json:
        data = result.model_dump(mode="json")
        if "available" in data:
            data["available"] = sorted(data["available"])
        _echo_json(data)
        return

    if isinstance(result, NoTessdataDir):
        click.secho("❌ Tessdata directory not found", fg="red")
        if ctx.obj.get("verbose"):
            for path in result.searched:
                click.echo(f"   searched: {path}")
        return

    click.secho(f"📂 {result.directory}", fg="cyan", bold=True)
    available = " ".join(sorted(result.available)) or "(none)"
    click.echo(f"   Available: {available}")
    if result.missing:
        click.secho(f"   Missing: {' '.join(result.missing)}", fg="red")
    else:
        click.secho("   All requested languages are available", fg="green")
