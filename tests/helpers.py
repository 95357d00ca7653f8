"""Filesystem builders shared by the test modules."""

import json
import os
from pathlib import Path

import pytest

requires_symlinks = pytest.mark.skipif(
    os.name == "nt", reason="symlink assertions assume POSIX symlinks"
)


def write_skill_md(skill_dir: Path, name: str | None = "Test Skill",
                   description: str | None = "A test skill") -> Path:
    """Write a SKILL.md, leaving out fields passed as None."""
    skill_dir.mkdir(parents=True, exist_ok=True)
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    lines.append("---")
    lines.append("")
    lines.append("# Instructions")
    skill_md = skill_dir / "SKILL.md"
    skill_md.write_text("\n".join(lines) + "\n")
    return skill_md


def write_package(
    root: Path,
    package_name: str,
    skills: dict[str, dict] | None = None,
    version: str | None = "1.0.0",
) -> Path:
    """Install a fake package under ``<root>/node_modules``.

    Args:
        root: Project root
        package_name: Possibly scoped package name
        skills: Mapping of skill directory name to write_skill_md kwargs
        version: Version written to the package's package.json

    Returns:
        The package directory
    """
    package_dir = root / "node_modules" / package_name
    package_dir.mkdir(parents=True, exist_ok=True)
    manifest = {"name": package_name}
    if version is not None:
        manifest["version"] = version
    (package_dir / "package.json").write_text(json.dumps(manifest))
    for skill_name, fields in (skills or {}).items():
        write_skill_md(package_dir / "skills" / skill_name, **fields)
    return package_dir


def write_manifest(directory: Path, **fields) -> Path:
    """Write a package.json with the given fields."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(fields))
    return path
