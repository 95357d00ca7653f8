"""Discovery module for workspace resolution, scanning and caching."""

from skills_npm.discovery.cache import ScanCache, scan_with_cache
from skills_npm.discovery.lockfile import get_lockfile_fingerprint
from skills_npm.discovery.scanner import (
    DirEntry,
    PackageScanner,
    is_directory_or_symlink,
    merge_scan_results,
)
from skills_npm.discovery.validator import SkillValidator, ValidationResult
from skills_npm.discovery.workspace import (
    search_for_package_root,
    search_for_packages_roots,
    search_for_workspace_root,
)

__all__ = [
    "DirEntry",
    "PackageScanner",
    "ScanCache",
    "SkillValidator",
    "ValidationResult",
    "get_lockfile_fingerprint",
    "is_directory_or_symlink",
    "merge_scan_results",
    "scan_with_cache",
    "search_for_package_root",
    "search_for_packages_roots",
    "search_for_workspace_root",
]
