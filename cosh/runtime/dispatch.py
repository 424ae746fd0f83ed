"""Command templater & dispatcher - runs the attach command for a service."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional, Union

from rich.console import Console
from rich.markup import escape

from cosh.config import CoshConfig
from cosh.exceptions import CommandTemplateError, DispatchError
from cosh.runtime.status import RunStatus, probe_status

log = logging.getLogger("cosh.dispatch")

COMPOSE_TOKEN = "%COMPOSE"
SERVICE_TOKEN = "%SERVICE"

Prober = Callable[[Union[str, Path], str, str], RunStatus]


def render_command(template: str, compose_file: Union[str, Path], service: str) -> list[str]:
    """Turn a command template into an argv list.

    The template is split on whitespace; tokens exactly equal to %COMPOSE
    or %SERVICE are replaced, everything else is left as is.

    Raises:
        CommandTemplateError: If the template has no tokens
    """
    substitutions = {COMPOSE_TOKEN: str(compose_file), SERVICE_TOKEN: service}
    argv = [substitutions.get(token, token) for token in template.split()]
    if not argv:
        raise CommandTemplateError(f"Command template is empty: {template!r}")
    return argv


def select_template(config: CoshConfig, status: RunStatus) -> str:
    if status is RunStatus.RUNNING:
        return config.exec_command
    return config.exec_command_not_running


def run_interactive(argv: list[str]) -> int:
    """Run argv attached to this process's stdin, stdout and stderr.

    Raises:
        DispatchError: If the program cannot be started
    """
    try:
        completed = subprocess.run(argv)
    except OSError as exc:
        raise DispatchError(f"Could not launch '{argv[0]}': {exc}") from exc
    return completed.returncode


def dispatch(
    config: CoshConfig,
    compose_file: Union[str, Path],
    service: str,
    console: Optional[Console] = None,
    prober: Optional[Prober] = None,
) -> int:
    """Probe the service and run the matching attach command.

    Args:
        config: Active configuration
        compose_file: Selected compose file
        service: Selected service
        console: Console for status output
        prober: Status probe (defaults to probe_status)

    Returns:
        0 when the command exits successfully

    Raises:
        CommandTemplateError: If the selected template is empty
        DispatchError: If the command fails to launch or exits non-zero
    """
    console = console or Console()
    prober = prober or probe_status
    status = prober(compose_file, service, config.runtime_binary)
    argv = render_command(select_template(config, status), compose_file, service)

    state = "is running" if status is RunStatus.RUNNING else "is [bold]NOT[/bold] running"
    console.print(f"Container {escape(str(compose_file))} {escape(service)} {state}")
    console.print(f"exec:  [cyan]{escape(shlex.join(argv))}[/cyan]")
    log.debug("Dispatching %s (status=%s)", argv, status.value)

    returncode = run_interactive(argv)
    if returncode != 0:
        raise DispatchError(f"'{argv[0]}' exited with status {returncode}", returncode=returncode)
    return 0
