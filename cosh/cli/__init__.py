"""Command line entry point: pick a compose service and attach a shell."""

from __future__ import annotations

import os
import sys
from importlib.resources import files

import click
from rich.console import Console
from rich.markup import escape

from cosh import __version__
from cosh.config import load_config
from cosh.discovery import discover_compose_files
from cosh.exceptions import CommandTemplateError, ConfigError, DispatchError, SelectionAborted
from cosh.runtime.dispatch import dispatch
from cosh.utils.logger import configure_logging

from .select import run_selection

console = Console(soft_wrap=True)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ABORTED = 130  # 128 + SIGINT


def load_help() -> str:
    return files("cosh").joinpath("HELP.md").read_text(encoding="utf-8")


def run() -> int:
    """Run the interactive flow and return the process exit code."""
    configure_logging(os.environ.get("COSH_LOG_LEVEL", "WARNING"))

    try:
        config = load_config()
    except ConfigError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return EXIT_ERROR

    result = discover_compose_files(config)
    if not result.files:
        console.print(f"No docker compose YAML found in {escape(result.searched)}")
        return EXIT_ERROR

    try:
        compose_file, service = run_selection(result.files, console)
    except SelectionAborted:
        console.print("Script terminated by user")
        return EXIT_ABORTED

    try:
        return dispatch(config, compose_file, service, console)
    except (CommandTemplateError, DispatchError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return EXIT_ERROR


class RawArgsCommand(click.Command):
    """Command that keeps its argument list as given, before click parses it."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta["cosh.raw_args"] = list(args)
        return super().parse_args(ctx, args)


@click.command(
    cls=RawArgsCommand,
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Pick a Docker Compose service and open a shell inside it."""
    # click drops a "--" separator from args, so branch on the raw list.
    raw_args = ctx.meta.get("cosh.raw_args", list(args))
    if raw_args:
        if raw_args == ["--version"]:
            click.echo(__version__)
            sys.exit(EXIT_OK)
        click.echo(load_help())
        click.echo()
        click.echo(f"Version: {__version__}")
        sys.exit(EXIT_OK)

    sys.exit(run())
