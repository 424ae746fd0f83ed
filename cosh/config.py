from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from cosh.exceptions import ConfigError
from cosh.utils.yaml_utils import read_yaml

log = logging.getLogger("cosh.config")

GLOBAL_CONFIG_DIR = Path.home() / ".cosh"
GLOBAL_CONFIG_PATH = GLOBAL_CONFIG_DIR / "cosh.config.yaml"

DEFAULT_BASE_PATH = "/var/container:/srv/container"
DEFAULT_MAX_DEPTH = 2
DEFAULT_EXEC_COMMAND = "docker compose -f %COMPOSE exec --user root %SERVICE /bin/sh"
DEFAULT_EXEC_COMMAND_NOT_RUNNING = "docker compose -f %COMPOSE exec --user root %SERVICE /bin/sh"
DEFAULT_RUNTIME = "docker"

# field name -> environment variable
ENV_VARS: dict[str, str] = {
    "base_path": "CONTAINER_BASE_PATH",
    "max_depth": "CONTAINER_BASE_PATH_MAX_DEPTH",
    "exec_command": "CONTAINER_EXEC_COMMAND",
    "exec_command_not_running": "CONTAINER_EXEC_COMMAND_NOT_RUNNING",
    "runtime_binary": "CONTAINER_RUNTIME",
}


class CoshConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    base_path: str = DEFAULT_BASE_PATH
    max_depth: int = DEFAULT_MAX_DEPTH
    exec_command: str = DEFAULT_EXEC_COMMAND
    exec_command_not_running: str = DEFAULT_EXEC_COMMAND_NOT_RUNNING
    runtime_binary: str = DEFAULT_RUNTIME

    @field_validator("max_depth")
    @classmethod
    def _clamp_depth(cls, value: int) -> int:
        return max(value, 1)


def parse_max_depth(raw: str) -> int:
    """Parse a depth setting, falling back to the default on bad input."""
    try:
        depth = int(raw.strip())
    except ValueError:
        log.warning(
            "Invalid value for %s: %s. Using default: %d",
            ENV_VARS["max_depth"], raw, DEFAULT_MAX_DEPTH,
        )
        return DEFAULT_MAX_DEPTH
    return max(depth, 1)


def _read_config_file(path: Path) -> dict:
    try:
        data = read_yaml(path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict:
    overrides: dict = {}
    for field, var in ENV_VARS.items():
        value = environ.get(var, "")
        if value == "":
            continue
        if field == "max_depth":
            overrides[field] = parse_max_depth(value)
        else:
            overrides[field] = value
    return overrides


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> CoshConfig:
    """Build the configuration for one invocation.

    Precedence: environment, then the YAML config file, then built-in defaults.

    Args:
        environ: Environment mapping (defaults to os.environ)
        config_path: Config file to read (defaults to COSH_CONFIG or
            ~/.cosh/cosh.config.yaml)

    Raises:
        ConfigError: If the config file is unreadable or holds invalid values
    """
    if environ is None:
        environ = os.environ
    if config_path is None:
        config_path = Path(environ["COSH_CONFIG"]) if environ.get("COSH_CONFIG") else GLOBAL_CONFIG_PATH

    data = _read_config_file(config_path)
    # An empty string in the file means "use the default", same as in env.
    data = {k: v for k, v in data.items() if v != "" and v is not None}
    if isinstance(data.get("max_depth"), str):
        data["max_depth"] = parse_max_depth(data["max_depth"])
    data.update(_env_overrides(environ))

    try:
        return CoshConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc
