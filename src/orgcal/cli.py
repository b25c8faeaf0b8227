"""orgcal CLI - Org-mode to calendar events."""

import logging
import sys
from pathlib import Path

import click

from .adapters.org_files import OrgFileSource
from .adapters.org_parser import OrgParser, OrgSourceError
from .config import load_config
from .convert import events_to_json, path_to_events


@click.group()
@click.version_option(package_name="orgcal")
def main():
    """orgcal - export Org-mode deadlines, schedules and clocks as calendar events."""
    pass


def _export(
    path: str | None,
    clock: bool,
    before: int | None,
    after: int | None,
    output: str | None,
    keep_going: bool,
    debug: bool,
) -> None:
    """Shared export logic."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    config = load_config()
    path = path or config.org_dir
    if not path:
        click.echo("Error: no PATH given and ORG_DIR is not configured", err=True)
        sys.exit(1)

    source = OrgFileSource(parser=OrgParser(todo_keywords=config.todo_keywords))
    try:
        events = path_to_events(
            path,
            before_days=config.ignore_before_days if before is None else before,
            after_days=config.ignore_after_days if after is None else after,
            clock=clock,
            source=source,
            keep_going=keep_going or config.keep_going,
        )
    except OrgSourceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    text = events_to_json(events)
    output = output or config.output
    if output:
        try:
            Path(output).expanduser().write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            click.echo(f"Error: cannot write {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Wrote {len(events)} events to {output}", err=True)
    else:
        click.echo(text)


def _export_options(func):
    """Options shared by the export commands."""
    func = click.argument("path", required=False)(func)
    func = click.option("--before", type=int, default=None, help="Ignore entries this many days before now (0 = no limit)")(func)
    func = click.option("--after", type=int, default=None, help="Ignore entries this many days after now (0 = no limit)")(func)
    func = click.option("-o", "--output", default=None, help="Write JSON to this file instead of stdout")(func)
    func = click.option("--keep-going", is_flag=True, help="Skip files that fail instead of aborting")(func)
    func = click.option("--debug", is_flag=True, help="Enable debug logging")(func)
    return func


@main.command()
@_export_options
@click.option("--clock", is_flag=True, help="Export CLOCK entries instead of deadlines/schedules")
def events(path, before, after, output, keep_going, debug, clock):
    """Export deadline and scheduled entries from PATH (file or directory)."""
    _export(path, clock, before, after, output, keep_going, debug)


@main.command()
@_export_options
def clock(path, before, after, output, keep_going, debug):
    """Export CLOCK entries from PATH (file or directory)."""
    _export(path, True, before, after, output, keep_going, debug)
