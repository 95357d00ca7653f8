"""Scanning node_modules for packages that ship skills.

A package ships skills when it contains a ``skills/`` directory whose
subdirectories each hold a SKILL.md. Only first-level packages of a
node_modules directory are considered, never nested dependencies.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from skills_npm.constants import (
    DEPENDENCY_FIELDS,
    NODE_MODULES,
    SKILLS_DIR,
    SOURCE_NODE_MODULES,
    SOURCE_PACKAGE_JSON,
    SOURCES,
)
from skills_npm.discovery.validator import SkillValidator
from skills_npm.discovery.workspace import read_package_json, search_for_packages_roots
from skills_npm.models import InvalidSkillRecord, ScanResult, Skill
from skills_npm.observability.audit import AuditSink, emit


@dataclass(frozen=True)
class DirEntry:
    """What a directory listing tells us about one entry.

    ``is_dir`` does not follow symlinks; a link to a directory has
    ``is_dir=False`` and ``is_symlink=True``.
    """
    name: str
    path: Path
    is_dir: bool
    is_symlink: bool


def is_directory_or_symlink(entry: DirEntry) -> bool:
    """Package managers such as pnpm install dependencies as symlinks."""
    return entry.is_dir or entry.is_symlink


def list_dir(path: Path) -> list[DirEntry]:
    """List ``path`` once, capturing each entry's type.

    Raises:
        OSError: If the directory does not exist or cannot be read
    """
    entries = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_symlink = entry.is_symlink()
            except OSError:
                continue
            entries.append(
                DirEntry(
                    name=entry.name,
                    path=Path(entry.path),
                    is_dir=is_dir,
                    is_symlink=is_symlink,
                )
            )
    return entries


def declared_dependencies(root: Path) -> set[str]:
    """Names listed in the dependency fields of ``<root>/package.json``."""
    manifest = read_package_json(root) or {}
    names = set()
    for field_name in DEPENDENCY_FIELDS:
        deps = manifest.get(field_name)
        if isinstance(deps, dict):
            names.update(deps.keys())
    return names


class PackageScanner:
    """Finds skills inside the dependencies installed under a project root.

    Example:
        >>> scanner = PackageScanner()
        >>> result = scanner.scan_current_node_modules(Path("."))
        >>> print(f"Scanned {result.packages_scanned} packages")
    """

    def __init__(
        self,
        validator: SkillValidator | None = None,
        audit_sink: AuditSink | None = None,
    ):
        """Initialize the scanner.

        Args:
            validator: SkillValidator used for each candidate skill directory
            audit_sink: Optional AuditSink notified of invalid skills and scans
        """
        self.validator = validator or SkillValidator()
        self._audit_sink = audit_sink

    def scan_node_modules(
        self,
        root: Path,
        recursive: bool = False,
        source: str = SOURCE_NODE_MODULES,
        ignore_paths: Iterable[str] = (),
    ) -> ScanResult:
        """Scan ``root``, or every package root beneath it when recursive.

        When several roots install a package with the same name, the first
        root to provide it wins and later copies are ignored.

        Args:
            root: Project root, or workspace root in recursive mode
            recursive: Scan every package.json directory below ``root``
            source: ``"node_modules"`` scans everything installed,
                    ``"package.json"`` only declared dependencies
            ignore_paths: Extra directories to skip in recursive mode

        Returns:
            ScanResult with ``from_cache`` False
        """
        root = Path(root)
        if not recursive:
            return self.scan_current_node_modules(root, source)

        results = []
        for manifest in search_for_packages_roots(root, ignore_paths):
            results.append(self.scan_current_node_modules(manifest.parent, source))
        return merge_scan_results(results)

    def scan_current_node_modules(
        self,
        root: Path,
        source: str = SOURCE_NODE_MODULES,
    ) -> ScanResult:
        """Scan the first-level packages of ``<root>/node_modules``.

        A missing or unreadable node_modules yields an empty result.

        Args:
            root: Directory whose node_modules is scanned
            source: ``"node_modules"`` or ``"package.json"``

        Returns:
            ScanResult for this single root
        """
        if source not in SOURCES:
            raise ValueError(f"Unknown source {source!r}, expected one of {SOURCES}")

        root = Path(root)
        node_modules = root / NODE_MODULES
        result = ScanResult(root_paths=[str(root)])

        allowed = declared_dependencies(root) if source == SOURCE_PACKAGE_JSON else None

        try:
            entries = list_dir(node_modules)
        except OSError:
            emit(self._audit_sink, "scan", str(root), node_modules, packages=0)
            return result

        for package_name in self._candidate_packages(node_modules, entries):
            if allowed is not None and package_name not in allowed:
                continue
            result.packages_scanned += 1
            skills, invalid = self.scan_package_for_skills(node_modules, package_name)
            result.skills.extend(skills)
            result.skills_invalid.extend(invalid)

        emit(
            self._audit_sink,
            "scan",
            str(root),
            node_modules,
            packages=result.packages_scanned,
            skills=len(result.skills),
            invalid=len(result.skills_invalid),
        )
        return result

    def _candidate_packages(
        self,
        node_modules: Path,
        entries: list[DirEntry],
    ) -> Iterable[str]:
        """Yield package names, expanding ``@scope`` directories one level."""
        for entry in entries:
            if not is_directory_or_symlink(entry) or entry.name.startswith('.'):
                continue

            if not entry.name.startswith('@'):
                yield entry.name
                continue

            try:
                scoped_entries = list_dir(node_modules / entry.name)
            except OSError:
                # Unreadable scope contributes nothing
                continue
            for scoped in scoped_entries:
                if not is_directory_or_symlink(scoped) or scoped.name.startswith('.'):
                    continue
                yield f"{entry.name}/{scoped.name}"

    def scan_package_for_skills(
        self,
        node_modules: Path,
        package_name: str,
    ) -> tuple[list[Skill], list[InvalidSkillRecord]]:
        """Validate every entry of ``<package>/skills/``.

        Args:
            node_modules: The node_modules directory holding the package
            package_name: Package name, possibly scoped (``@org/name``)

        Returns:
            Tuple of (valid skills, invalid skill records)
        """
        skills: list[Skill] = []
        invalid: list[InvalidSkillRecord] = []
        package_path = node_modules / package_name
        skills_dir = package_path / SKILLS_DIR

        try:
            if not skills_dir.is_dir():
                return skills, invalid
            entries = list_dir(skills_dir)
        except OSError:
            return skills, invalid

        version = None
        for entry in entries:
            if not is_directory_or_symlink(entry):
                continue
            if entry.is_symlink and not entry.path.is_dir():
                # Links to files or nowhere are not skill directories
                continue

            validation = self.validator.validate(entry.path)
            if not validation.valid:
                invalid.append(
                    InvalidSkillRecord(
                        package_name=package_name,
                        skill_name=entry.name,
                        reason=validation.reason,
                    )
                )
                emit(
                    self._audit_sink,
                    "error",
                    package_name,
                    entry.path,
                    skill=entry.name,
                    reason=validation.reason.value,
                )
                continue

            if version is None:
                version = _package_version(package_path)
            skills.append(
                Skill(
                    package_name=package_name,
                    skill_name=entry.name,
                    skill_path=os.path.abspath(entry.path),
                    name=validation.name,
                    description=validation.description,
                    package_version=version,
                )
            )

        return skills, invalid


def _package_version(package_path: Path) -> str | None:
    manifest = read_package_json(package_path) or {}
    version = manifest.get("version")
    return version if isinstance(version, str) else None


def merge_scan_results(results: Iterable[ScanResult]) -> ScanResult:
    """Merge per-root results, first occurrence of a package name wins.

    A package name that contributed skills in an earlier result is ignored
    in later ones; invalid records are deduplicated the same way.
    """
    merged = ScanResult()
    seen_skill_packages: set[str] = set()
    seen_invalid_packages: set[str] = set()

    for result in results:
        new_skill_packages = set()
        for skill in result.skills:
            if skill.package_name in seen_skill_packages:
                continue
            merged.skills.append(skill)
            new_skill_packages.add(skill.package_name)
        seen_skill_packages |= new_skill_packages

        new_invalid_packages = set()
        for record in result.skills_invalid:
            if record.package_name in seen_invalid_packages:
                continue
            merged.skills_invalid.append(record)
            new_invalid_packages.add(record.package_name)
        seen_invalid_packages |= new_invalid_packages

        merged.packages_scanned += result.packages_scanned
        merged.root_paths.extend(result.root_paths)

    return merged
