"""
slimlibs — CLI entrypoint.

Usage:
    python -m slimlibs.main --help
    python -m slimlibs.main audit stacks.json
    python -m slimlibs.main data check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from slimlibs import __version__
from slimlibs.core.observability.logging_config import configure_cli_logging

_PATH = click.Path(exists=False, dir_okay=False, path_type=Path)


def _format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    return f"{size / 1024:.1f} KiB"


@click.group()
@click.version_option(version=__version__, prog_name="slimlibs")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """slimlibs — find smaller alternatives to large JavaScript libraries."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    configure_cli_logging(debug=debug, verbose=verbose, quiet=quiet)


@cli.command()
@click.argument("detections", type=_PATH)
@click.option("--stats", "stats_path", type=_PATH, default=None, help="Size statistics table.")
@click.option(
    "--suggestions",
    "suggestions_path",
    type=_PATH,
    default=None,
    help="Suggestion table.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def audit(
    ctx: click.Context,
    detections: Path,
    stats_path: Path | None,
    suggestions_path: Path | None,
    as_json: bool,
) -> None:
    """Audit detected libraries for smaller alternatives.

    DETECTIONS is a JSON or YAML file listing the page's detected stacks.

    Examples:

        slimlibs audit stacks.json

        slimlibs audit stacks.yml --stats sizes.json --json
    """
    from slimlibs.core.use_cases.audit import run_audit

    result = run_audit(
        detections_path=detections,
        stats_path=stats_path,
        suggestions_path=suggestions_path,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None
    quiet = ctx.obj.get("quiet", False)

    if not quiet:
        click.secho(f"\n📦 {report.title}", fg="cyan", bold=True)
        click.echo(
            f"   Detections: {result.detections_loaded} | "
            f"Known libraries: {report.libraries_checked}"
        )
        click.echo()

    if report.passed:
        click.secho("   ✓ No unnecessarily large libraries found", fg="green")
        click.echo()
        return

    for item in report.items:
        click.secho(f"   • {item.name.text}", fg="yellow", bold=True, nl=False)
        click.echo(f"  {_format_bytes(item.transfer_size)}")
        if ctx.obj.get("verbose") and item.name.url:
            click.echo(f"     {item.name.url}")
        for sub in item.sub_items:
            click.echo(
                f"     → {sub.suggestion.text}  {_format_bytes(sub.transfer_size)}"
                f"  (saves {_format_bytes(sub.wasted_bytes)})"
            )

    click.echo()
    click.secho(
        f"   Potential savings: {_format_bytes(report.potential_savings)} "
        f"across {report.replaceable_count} libraries",
        fg="white",
        bold=True,
    )
    click.echo()


@cli.group()
def data() -> None:
    """Reference data commands."""


@data.command("check")
@click.option("--stats", "stats_path", type=_PATH, default=None, help="Size statistics table.")
@click.option(
    "--suggestions",
    "suggestions_path",
    type=_PATH,
    default=None,
    help="Suggestion table.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def data_check(stats_path: Path | None, suggestions_path: Path | None, as_json: bool) -> None:
    """Validate the stats and suggestion tables."""
    from slimlibs.core.use_cases.data_check import check_data

    result = check_data(stats_path=stats_path, suggestions_path=suggestions_path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Reference data is valid", fg="green", bold=True)
        click.echo(f"   Libraries: {result.library_count}")
        click.echo(f"   Suggestions: {result.suggestion_count}")
    else:
        click.secho("❌ Reference data errors:", fg="red", bold=True)
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


@data.command("show")
@click.argument("name")
@click.option("--stats", "stats_path", type=_PATH, default=None, help="Size statistics table.")
@click.option(
    "--suggestions",
    "suggestions_path",
    type=_PATH,
    default=None,
    help="Suggestion table.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def data_show(
    name: str,
    stats_path: Path | None,
    suggestions_path: Path | None,
    as_json: bool,
) -> None:
    """Show stats and suggestions for one library."""
    from slimlibs.core.config.data_loader import ReferenceDataError
    from slimlibs.core.data import registry_for

    registry = registry_for(stats_path, suggestions_path)
    try:
        stats = registry.stats_table
        suggestions = registry.suggestion_table
    except ReferenceDataError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    entry = stats.get(name)
    if entry is None:
        click.secho(f"❌ Unknown library: {name}", fg="red")
        sys.exit(1)

    candidates = suggestions.get(name, [])

    if as_json:
        click.echo(json.dumps(
            {"name": name, "stats": entry.to_dict(), "suggestions": candidates},
            indent=2,
        ))
        return

    click.secho(f"\n📦 {name}", fg="cyan", bold=True)
    if entry.repository:
        click.echo(f"   {entry.repository}")
    click.echo()
    for version, version_stats in entry.versions.items():
        click.echo(f"   {version:<12} {_format_bytes(version_stats.gzip)}")

    if candidates:
        click.echo()
        click.secho("   Suggestions:", fg="white", bold=True)
        for candidate in candidates:
            known = stats.get(candidate)
            size = _format_bytes(known.latest.gzip) if known else "unknown size"
            click.echo(f"     • {candidate}  {size}")

    click.echo()


if __name__ == "__main__":
    cli()
