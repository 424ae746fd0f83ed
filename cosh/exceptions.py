"""Exception hierarchy for cosh.

Components raise these; the CLI maps them to messages and exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CoshError(Exception):
    """Base exception for all cosh errors."""


class ConfigError(CoshError):
    """Configuration file could not be read or holds invalid values."""


# ── Discovery ────────────────────────────────────────────────────────────────

class DiscoveryError(CoshError):
    """A base path could not be scanned."""

    def __init__(self, base_path: str, message: str) -> None:
        super().__init__(message)
        self.base_path = base_path


class DirectoryNotFoundError(DiscoveryError):
    def __init__(self, base_path: str) -> None:
        super().__init__(base_path, f"{base_path} is not a directory")


class ScanError(DiscoveryError):
    def __init__(self, base_path: str, cause: OSError) -> None:
        super().__init__(base_path, f"error while scanning directory {base_path}: {cause}")
        self.cause = cause


class NoComposeFilesError(DiscoveryError):
    def __init__(self, base_path: str) -> None:
        super().__init__(base_path, f"no docker compose files found in {base_path}")


# ── Service extraction ───────────────────────────────────────────────────────

class ServiceExtractionError(CoshError):
    """The services of a compose file could not be listed."""

    def __init__(self, compose_file: Path, message: str) -> None:
        super().__init__(message)
        self.compose_file = compose_file


class ComposeFileUnreadableError(ServiceExtractionError):
    pass


class ComposeFileParseError(ServiceExtractionError):
    pass


class ServicesMissingError(ServiceExtractionError):
    pass


# ── Dispatch ─────────────────────────────────────────────────────────────────

class CommandTemplateError(CoshError):
    """A command template produced no program to run."""


class DispatchError(CoshError):
    """The attach command failed to launch or exited non-zero.

    Attributes:
        returncode: Exit status of the child, or None if it never started
    """

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class SelectionAborted(CoshError):
    """The user cancelled the interactive selection."""
