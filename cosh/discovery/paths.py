from __future__ import annotations


def resolve_search_paths(base_path: str) -> list[str]:
    """Split a colon-separated path list into unique base directories.

    A single trailing "/" is stripped before comparison, and the first
    occurrence wins. Empty segments are kept (once) and simply yield no files
    when scanned.
    """
    paths: list[str] = []
    for segment in base_path.split(":"):
        trimmed = segment[:-1] if segment.endswith("/") else segment
        if trimmed not in paths:
            paths.append(trimmed)
    return paths
