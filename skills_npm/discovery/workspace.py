"""Project and workspace root detection.

The upward searches follow the rules Vite uses to find a workspace root:
a directory is a workspace root if it holds ``pnpm-workspace.yaml`` or
``lerna.json``, or if its ``package.json`` declares ``workspaces``.
"""

import json
import os
from pathlib import Path
from typing import Iterable

from skills_npm.constants import IGNORED_DIRS, PACKAGE_JSON, WORKSPACE_ROOT_FILES


def read_package_json(directory: Path) -> dict | None:
    """Load ``<directory>/package.json``.

    Returns:
        The parsed manifest, or None if it is missing, unreadable, or not a
        JSON object
    """
    try:
        with open(directory / PACKAGE_JSON, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _has_package_json(directory: Path) -> bool:
    return (directory / PACKAGE_JSON).exists()


def _has_root_file(directory: Path) -> bool:
    return any((directory / name).exists() for name in WORKSPACE_ROOT_FILES)


def _has_workspace_package_json(directory: Path) -> bool:
    """A declared ``workspaces`` field counts, even an empty list."""
    manifest = read_package_json(directory)
    if manifest is None:
        return False
    return manifest.get("workspaces") not in (None, False, 0, "")


def _walk_up(start: Path) -> Iterable[Path]:
    """Yield ``start`` and each of its ancestors up to the filesystem root."""
    current = start
    while True:
        yield current
        parent = current.parent
        if parent == current:
            return
        current = parent


def search_for_package_root(current: Path) -> Path:
    """Find the nearest directory, ``current`` included, holding a package.json.

    Falls back to ``current`` when no manifest exists anywhere above it.
    """
    current = Path(current).resolve()
    for directory in _walk_up(current):
        if _has_package_json(directory):
            return directory
    return current


def search_for_workspace_root(current: Path, root: Path | None = None) -> Path:
    """Find the nearest enclosing workspace root.

    Args:
        current: Directory to start searching from
        root: Fallback when no workspace root is found. Defaults to the
              package root of ``current``.

    Returns:
        The workspace root, or the fallback
    """
    current = Path(current).resolve()
    for directory in _walk_up(current):
        if _has_root_file(directory) or _has_workspace_package_json(directory):
            return directory
    return Path(root) if root is not None else search_for_package_root(current)


def search_for_packages_roots(
    workspace_root: Path,
    ignore_paths: Iterable[str] = (),
) -> list[Path]:
    """Find every package.json below ``workspace_root``.

    Dependency trees, build output and version control directories are not
    descended into. ``ignore_paths`` adds directory names, or paths relative
    to ``workspace_root``, to skip. Symlinked directories are not followed.

    Returns:
        Paths of the manifest files. Order is not guaranteed.
    """
    workspace_root = Path(workspace_root)
    ignored_names = set(IGNORED_DIRS)
    ignored_paths = set()
    for entry in ignore_paths:
        entry = entry.strip("/\\")
        if not entry:
            continue
        if "/" in entry or "\\" in entry:
            ignored_paths.add((workspace_root / entry).resolve())
        else:
            ignored_names.add(entry)

    manifests = []
    for dirpath, dirnames, filenames in os.walk(workspace_root):
        dirnames[:] = [
            name for name in dirnames
            if name not in ignored_names
            and (Path(dirpath) / name).resolve() not in ignored_paths
        ]
        if PACKAGE_JSON in filenames:
            manifests.append(Path(dirpath) / PACKAGE_JSON)

    return manifests
