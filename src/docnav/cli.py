"""CLI interface for Docnav.

Command-line tool for checking, resolving and serving documentation navigation.
"""

import json
import logging
import sys
from pathlib import Path

import click

from docnav.core.errors import NavigationError
from docnav.core.snapshot import NavSnapshot
from docnav.core.validator import ValidationReport, Violation
from docnav.loader import load_snapshot

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docnav.toml)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def cli(verbose: bool) -> None:
    """Docnav - multi-locale documentation navigation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_config_option
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the validation report as JSON",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat warnings as failures",
)
def check(config_path: Path | None, as_json: bool, strict: bool) -> None:
    """Validate navigation, translations and redirects."""
    snapshot = _load(config_path)
    report = snapshot.report

    if as_json:
        click.echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_report(snapshot, report)

    if not report.is_valid or (strict and report.warnings):
        sys.exit(1)


@cli.command()
@click.argument("locale")
@_config_option
@click.option(
    "--force",
    is_flag=True,
    help="Resolve even if validation found errors",
)
def resolve(locale: str, config_path: Path | None, force: bool) -> None:
    """Print the navigation tree resolved for LOCALE as JSON."""
    snapshot = _load(config_path)
    try:
        resolved = snapshot.resolve(locale, allow_unvalidated=force)
    except NavigationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(json.dumps(resolved.to_dict(), ensure_ascii=False, indent=2))


@cli.command()
@click.argument("path")
@_config_option
def redirect(path: str, config_path: Path | None) -> None:
    """Print the redirect target for PATH."""
    snapshot = _load(config_path)
    target = snapshot.redirects.resolve(path, snapshot.locales.codes)
    if target is None:
        click.echo(click.style(f"No redirect for {path}", fg="yellow"), err=True)
        sys.exit(1)

    click.echo(target)


@cli.command()
@_config_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable config hot reload (overrides config, default: disabled)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
) -> None:
    """Start the navigation server."""
    from docnav.config import Config
    from docnav.loader import build_snapshot
    from docnav.server import run_server

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            live_reload_enabled=live_reload,
        )
        snapshot = build_snapshot(config)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if not snapshot.is_valid:
        _print_report(snapshot, snapshot.report)
        sys.exit(1)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Locales: {', '.join(snapshot.locales.codes)}")
    if config.live_reload.enabled and config.config_path is not None:
        click.echo(f"Live reload: watching {config.config_path}")
    else:
        click.echo("Live reload: disabled")

    run_server(config, snapshot)


def _load(config_path: Path | None) -> NavSnapshot:
    """Load the navigation snapshot or exit with an error.

    Raises:
        SystemExit: If the configuration cannot be loaded or assembled
    """
    try:
        return load_snapshot(config_path)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


def _print_report(snapshot: NavSnapshot, report: ValidationReport) -> None:
    """Print violations and translation coverage."""
    for violation in report.errors:
        click.echo(click.style(f"error: {_format_violation(violation)}", fg="red"))
    for violation in report.warnings:
        click.echo(click.style(f"warning: {_format_violation(violation)}", fg="yellow"))

    if report.coverage:
        click.echo("\nTranslation coverage:")
    for coverage in report.coverage:
        click.echo(
            f"  {coverage.locale}: {coverage.translated}/{coverage.total} "
            f"({coverage.ratio:.0%}), {coverage.total - coverage.translated} falling back",
        )

    nodes = len(snapshot.tree)
    if report.is_valid:
        click.echo(click.style(f"\nNavigation is valid ({nodes} nodes)", fg="green", bold=True))
    else:
        click.echo(
            click.style(
                f"\nNavigation is invalid: {len(report.errors)} error(s)",
                fg="red",
                bold=True,
            ),
        )


def _format_violation(violation: Violation) -> str:
    return f"[{violation.kind.value}] {violation.message}"
