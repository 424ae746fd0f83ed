"""Definition file scanner - finds compose files under the base paths.

Walks each base directory down to a bounded depth and collects files whose
basename matches one of the conventional compose file names.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from cosh.config import CoshConfig
from cosh.discovery.paths import resolve_search_paths
from cosh.exceptions import (
    DirectoryNotFoundError,
    DiscoveryError,
    NoComposeFilesError,
    ScanError,
)

log = logging.getLogger("cosh.scanner")

COMPOSE_FILE_NAMES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)


@dataclass
class DiscoveryResult:
    """Compose files found across all search paths."""

    search_paths: list[str]
    files: list[Path] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)  # path -> reason

    @property
    def searched(self) -> str:
        return " ".join(self.search_paths)


def _depth(base: str, path: str) -> int:
    rel = os.path.relpath(path, base)
    return 0 if rel == os.curdir else rel.count(os.sep)


def scan_directory(base_path: str, max_depth: int) -> list[Path]:
    """Find compose files under a base directory.

    An entry's depth is the number of separators in its path relative to
    the base, so files directly in the base are at depth 0. Entries at
    depth >= max_depth are neither matched nor descended into.

    Args:
        base_path: Directory to scan
        max_depth: Depth bound (values below 1 are treated as 1)

    Returns:
        Sorted list of matching files

    Raises:
        DirectoryNotFoundError: If base_path is missing or not a directory
        ScanError: If walking the tree fails
        NoComposeFilesError: If no compose file was found
    """
    max_depth = max(max_depth, 1)
    if not base_path or not os.path.isdir(base_path):
        raise DirectoryNotFoundError(base_path)

    def _raise(exc: OSError) -> None:
        raise exc

    found: list[Path] = []
    try:
        for dirpath, dirnames, filenames in os.walk(base_path, onerror=_raise):
            for name in filenames:
                if name not in COMPOSE_FILE_NAMES:
                    continue
                if _depth(base_path, os.path.join(dirpath, name)) >= max_depth:
                    continue
                found.append(Path(dirpath) / name)
            dirnames[:] = [
                d for d in dirnames
                if _depth(base_path, os.path.join(dirpath, d)) < max_depth
            ]
    except OSError as exc:
        raise ScanError(base_path, exc) from exc

    if not found:
        raise NoComposeFilesError(base_path)
    return sorted(found)


def discover_compose_files(config: CoshConfig) -> DiscoveryResult:
    """Scan every configured base path in order and collect compose files.

    A base path that cannot be scanned contributes nothing; the reason is
    recorded in ``skipped`` and the remaining paths are still scanned.
    """
    result = DiscoveryResult(search_paths=resolve_search_paths(config.base_path))
    for base in result.search_paths:
        try:
            files = scan_directory(base, config.max_depth)
        except DiscoveryError as exc:
            log.debug("Skipping %r: %s", base, exc)
            result.skipped[base] = str(exc)
            continue
        log.debug("Found %d compose file(s) in %s", len(files), base)
        result.files.extend(files)
    return result
