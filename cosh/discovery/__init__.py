from .paths import resolve_search_paths
from .scanner import (
    COMPOSE_FILE_NAMES,
    DiscoveryResult,
    discover_compose_files,
    scan_directory,
)

__all__ = [
    "COMPOSE_FILE_NAMES",
    "DiscoveryResult",
    "discover_compose_files",
    "resolve_search_paths",
    "scan_directory",
]
