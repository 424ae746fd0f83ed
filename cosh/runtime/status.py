"""Runtime status prober - asks the container runtime whether a service runs.

Any failure to get a clean answer counts as NOT_RUNNING, so the caller falls
back to the command meant for a stopped container. There is no timeout: a
hanging runtime blocks the caller.
"""

from __future__ import annotations

import json
import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import Union

log = logging.getLogger("cosh.status")


class RunStatus(str, Enum):
    RUNNING = "running"
    NOT_RUNNING = "not_running"


def build_status_command(compose_file: Union[str, Path], service: str, runtime: str = "docker") -> list[str]:
    return [runtime, "compose", "-f", str(compose_file), "ps", service, "--format", "json"]


def _parse_records(output: str) -> list[dict]:
    """Parse `compose ps --format json` output.

    Older compose releases print one JSON array or object; newer ones print
    one object per line.
    """
    text = output.strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = [json.loads(line) for line in text.splitlines() if line.strip()]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        return []
    return [record for record in data if isinstance(record, dict)]


def probe_status(compose_file: Union[str, Path], service: str, runtime: str = "docker") -> RunStatus:
    """Classify a compose service as running or not.

    Args:
        compose_file: Compose file the service is defined in
        service: Service name
        runtime: Runtime binary providing the ``compose`` subcommand

    Returns:
        RunStatus.RUNNING only if a container of the service reports
        State == "running"; RunStatus.NOT_RUNNING otherwise, including on
        every error.
    """
    cmd = build_status_command(compose_file, service, runtime)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except (OSError, ValueError) as exc:
        log.debug("Status query could not start: %s", exc)
        return RunStatus.NOT_RUNNING

    if result.returncode != 0:
        log.debug("Status query exited %d: %s", result.returncode, result.stderr.strip())
        return RunStatus.NOT_RUNNING

    try:
        records = _parse_records(result.stdout)
    except json.JSONDecodeError as exc:
        log.debug("Unparseable status output: %s", exc)
        return RunStatus.NOT_RUNNING

    if any(record.get("State") == "running" for record in records):
        return RunStatus.RUNNING
    return RunStatus.NOT_RUNNING
