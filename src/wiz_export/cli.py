"""Click CLI entry point for the exporter."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from wiz_export.config import Settings
from wiz_export.errors import AuthError
from wiz_export.exporter import NoteExporter
from wiz_export.logging_config import setup_logging


@click.command()
@click.option("--userId", "user_id", help="Wiz user id (usually an email address)")
@click.option("--password", envvar="WIZ_PASSWORD", help="Wiz password")
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Export output directory [default: .]",
)
@click.option("--folders", help="Folders to export, like /Journal/,/Work/")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML settings file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(
    ctx: click.Context,
    user_id: str | None,
    password: str | None,
    output: Path | None,
    folders: str | None,
    config_file: Path | None,
    verbose: bool,
) -> None:
    """Export WizNote folders to Markdown files.

    Example:

        wiz-export --userId me@example.com --password secret --folders '/Journal/,/Work/'
    """
    if not user_id or not password or not folders:
        click.echo("err args:")
        click.echo(ctx.get_help())
        ctx.exit(2)

    try:
        settings = Settings.load(config_file) if config_file else Settings.default()
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid settings file {config_file}: {e}") from e
    setup_logging(settings, verbose)

    exporter = NoteExporter(settings)
    try:
        result = exporter.run(user_id, password, folders, output)
    except AuthError as e:
        raise click.ClickException(f"Login failed: {e}") from e

    click.echo()
    click.echo(f"Folders: {len(result.folders)}")
    click.echo(f"  Documents exported: {result.documents_exported}, failed: {result.documents_failed}")
    click.echo(
        f"  Resources fetched: {result.resources_fetched}, "
        f"already existed: {result.resources_skipped}"
    )

    failures = result.failures
    if failures:
        click.echo()
        click.echo(f"Failures ({len(failures)}):")
        for failure in failures[:10]:
            click.echo(f"  - {failure.operation} {failure.item}: {failure.error}")
        if len(failures) > 10:
            click.echo(f"  ... and {len(failures) - 10} more")

    click.echo()
    click.echo("Done!")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
