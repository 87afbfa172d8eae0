"""
tessbuild — CLI entrypoint.

Usage:
    python -m tessbuild.main --help
    python -m tessbuild.main status
    python -m tessbuild.main plan --skip-dependencies
    python -m tessbuild.main config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from tessbuild import __version__
from tessbuild.core.observability.logging_config import resolve_level, setup_from_env
from tessbuild.ui.cli.helpers import echo_report, load_target, target_options


@click.group()
@click.version_option(version=__version__, prog_name="tessbuild")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to tessbuild.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """tessbuild — Tesseract OCR toolchain status and build planning."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


# ── Commands ────────────────────────────────────────────────────────


@cli.command()
@target_options
@click.option("--parallel", is_flag=True, help="Run the probes concurrently.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(
    ctx: click.Context,
    version: str | None,
    languages: str | None,
    prefix: str | None,
    parallel: bool,
    as_json: bool,
) -> None:
    """Show installation status of dependencies, Leptonica, Tesseract and languages."""
    from tessbuild.core.use_cases.status import get_status

    config, path = load_target(ctx, version=version, languages=languages, prefix=prefix)
    result = get_status(config, parallel=parallel, config_path=path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    assert result.report is not None
    echo_report(result.report)


@cli.command()
@target_options
@click.option("--jobs", "-j", type=int, default=None, help="Parallel compile jobs (default: CPU count).")
@click.option("--skip-dependencies", is_flag=True, help="Skip system dependency installation.")
@click.option("--skip-leptonica", is_flag=True, help="Skip Leptonica build and installation.")
@click.option("--skip-tesseract", is_flag=True, help="Skip Tesseract build and installation.")
@click.option("--skip-languages", is_flag=True, help="Skip language data file downloads.")
@click.option(
    "--auto-skip", is_flag=True,
    help="Probe the host and skip every component that is already satisfied.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(
    ctx: click.Context,
    version: str | None,
    languages: str | None,
    prefix: str | None,
    jobs: int | None,
    skip_dependencies: bool,
    skip_leptonica: bool,
    skip_tesseract: bool,
    skip_languages: bool,
    auto_skip: bool,
    as_json: bool,
) -> None:
    """Preview the install steps that would run (nothing is executed).

    Examples:

        tessbuild plan --skip-tesseract -l eng,spa,por

        tessbuild plan --auto-skip
    """
    from tessbuild.core.models.toolchain import SkipDirective
    from tessbuild.core.use_cases.build_plan import build_plan

    config, _ = load_target(
        ctx, version=version, languages=languages, prefix=prefix, jobs=jobs,
    )

    flags = {
        SkipDirective.SKIP_DEPENDENCIES: skip_dependencies,
        SkipDirective.SKIP_LEPTONICA: skip_leptonica,
        SkipDirective.SKIP_TESSERACT: skip_tesseract,
        SkipDirective.SKIP_LANGUAGES: skip_languages,
    }
    skips = {d for d, on in flags.items() if on}

    if auto_skip:
        from tessbuild.core.use_cases.status import get_status

        status_result = get_status(config)
        assert status_result.plan is not None
        skips |= status_result.plan.skip_directives

    result = build_plan(config, skips)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if not result.valid:
        click.secho("❌ Plan errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")
        click.echo()
        sys.exit(1)

    click.secho("\n🔧 Build Configuration:", fg="cyan", bold=True)
    if SkipDirective.SKIP_TESSERACT not in result.skips:
        click.echo(f"   Tesseract version: {config.version}")
    if SkipDirective.SKIP_LANGUAGES not in result.skips:
        click.echo(f"   Languages: {config.languages}")
    click.echo(f"   Install prefix: {config.prefix}")
    click.echo(f"   Parallel jobs: {config.jobs}")
    click.echo()

    click.secho("   Execution Plan:", fg="white", bold=True)
    for step in result.steps:
        click.secho(f"     ✓ {step.label}", fg="green")
        if ctx.obj.get("verbose"):
            for command in step.commands:
                click.echo(f"       │ {command}")
    if not result.steps:
        click.echo("     (no steps)")

    if result.warnings:
        click.echo()
        for warn in result.warnings:
            click.secho(f"   ⚠️  {warn}", fg="yellow")

    click.echo()


@cli.group()
def config() -> None:
    """Build configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate tessbuild.yml configuration."""
    from tessbuild.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File: {result.config_path}")
        click.echo(f"   Tesseract: {result.config.version}")
        click.echo(f"   Languages: {result.config.languages}")
        click.echo(f"   Prefix: {result.config.prefix}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register sub-command groups from tessbuild/ui/cli/ ──────────────

from tessbuild.ui.cli.probe import probe  # noqa: E402

cli.add_command(probe)


if __name__ == "__main__":
    cli()
