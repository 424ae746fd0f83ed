"""Service extractor - lists the services declared in a compose file."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import yaml

from cosh.exceptions import (
    ComposeFileParseError,
    ComposeFileUnreadableError,
    ServiceExtractionError,
    ServicesMissingError,
)
from cosh.utils.yaml_utils import load_mapping

ERROR_PREFIX = "Error: "


def list_services(compose_file: Union[str, Path]) -> list[str]:
    """Return the service names of a compose file, sorted.

    The file is read fresh on every call.

    Raises:
        ComposeFileUnreadableError: If the file cannot be read
        ComposeFileParseError: If the content is not a YAML mapping
        ServicesMissingError: If there is no ``services`` mapping
    """
    path = Path(compose_file)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ComposeFileUnreadableError(path, f"cannot read {path}: {exc}") from exc

    try:
        data = load_mapping(text)
    except (yaml.YAMLError, TypeError) as exc:
        raise ComposeFileParseError(path, f"cannot parse {path}: {exc}") from exc

    services = data.get("services")
    if not isinstance(services, dict):
        raise ServicesMissingError(path, f"no 'services' mapping in {path}")

    return sorted(str(name) for name in services)


def service_choices(compose_file: Union[str, Path]) -> list[str]:
    """Service names for the selection UI.

    An extraction error becomes a single ``Error: ...`` entry instead of
    an exception, so the user can see it and pick another file.
    """
    try:
        services = list_services(compose_file)
    except ServiceExtractionError as exc:
        return [f"{ERROR_PREFIX}{exc}"]
    if not services:
        return [f"{ERROR_PREFIX}no services defined in {compose_file}"]
    return services


def is_error_choice(choice: str) -> bool:
    return choice.startswith(ERROR_PREFIX)
