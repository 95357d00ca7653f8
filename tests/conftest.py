"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from helpers import write_manifest
from skills_npm.models import Skill


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def project(temp_dir: Path) -> Path:
    """A project root with a package.json and an empty node_modules."""
    root = temp_dir / "project"
    write_manifest(root, name="project", version="0.0.0")
    (root / "node_modules").mkdir()
    return root


@pytest.fixture
def make_skill() -> Callable[..., Skill]:
    """Factory for Skill records pointing at arbitrary paths."""
    def _make(package_name: str = "pkg-a", skill_name: str = "skill1",
              skill_path: str = "/nonexistent/skill1", **kwargs) -> Skill:
        return Skill(
            package_name=package_name,
            skill_name=skill_name,
            skill_path=skill_path,
            name=kwargs.pop("name", skill_name.title()),
            description=kwargs.pop("description", f"Description of {skill_name}"),
            **kwargs,
        )
    return _make
