"""Tests for package and workspace root detection."""

from pathlib import Path

from helpers import write_manifest
from skills_npm.discovery import (
    search_for_package_root,
    search_for_packages_roots,
    search_for_workspace_root,
)
from skills_npm.discovery.workspace import read_package_json


class TestSearchForPackageRoot:
    """Tests for search_for_package_root."""

    def test_current_directory(self, temp_dir: Path):
        write_manifest(temp_dir, name="root")
        assert search_for_package_root(temp_dir) == temp_dir

    def test_walks_up(self, temp_dir: Path):
        write_manifest(temp_dir, name="root")
        nested = temp_dir / "src" / "deep"
        nested.mkdir(parents=True)

        assert search_for_package_root(nested) == temp_dir

    def test_nearest_wins(self, temp_dir: Path):
        write_manifest(temp_dir, name="root")
        write_manifest(temp_dir / "packages" / "a", name="a")

        assert search_for_package_root(temp_dir / "packages" / "a") == temp_dir / "packages" / "a"

    def test_fallback_to_start(self, temp_dir: Path):
        """With no manifest anywhere above, the start directory is returned."""
        nested = temp_dir / "empty"
        nested.mkdir()
        # A stray manifest above temp_dir would change the answer; only
        # assert the fallback when there is none.
        found = search_for_package_root(nested)
        if not any((p / "package.json").exists() for p in [nested, *nested.parents]):
            assert found == nested


class TestSearchForWorkspaceRoot:
    """Tests for search_for_workspace_root."""

    def test_pnpm_workspace(self, temp_dir: Path):
        (temp_dir / "pnpm-workspace.yaml").write_text("packages: []\n")
        write_manifest(temp_dir / "packages" / "a", name="a")

        assert search_for_workspace_root(temp_dir / "packages" / "a") == temp_dir

    def test_lerna(self, temp_dir: Path):
        (temp_dir / "lerna.json").write_text("{}")
        nested = temp_dir / "packages" / "a"
        nested.mkdir(parents=True)

        assert search_for_workspace_root(nested) == temp_dir

    def test_workspaces_field(self, temp_dir: Path):
        write_manifest(temp_dir, name="root", workspaces=["packages/*"])
        write_manifest(temp_dir / "packages" / "a", name="a")

        assert search_for_workspace_root(temp_dir / "packages" / "a") == temp_dir

    def test_empty_workspaces_field_counts(self, temp_dir: Path):
        root = temp_dir / "outer"
        write_manifest(root, name="root", workspaces=[])
        nested = root / "inner"
        write_manifest(nested, name="inner")

        assert search_for_workspace_root(nested, root=nested) == root

    def test_false_workspaces_field_ignored(self, temp_dir: Path):
        root = temp_dir / "outer"
        write_manifest(root, name="root", workspaces=False)
        nested = root / "inner"
        write_manifest(nested, name="inner")

        assert search_for_workspace_root(nested, root=nested) == nested

    def test_invalid_manifest_ignored(self, temp_dir: Path):
        root = temp_dir / "broken"
        root.mkdir()
        (root / "package.json").write_text("{ not json")

        assert search_for_workspace_root(root, root=root) == root

    def test_explicit_fallback(self, temp_dir: Path):
        nested = temp_dir / "a"
        nested.mkdir()
        fallback = temp_dir / "fallback"

        found = search_for_workspace_root(nested, root=fallback)

        assert found in {fallback, *nested.parents}


class TestSearchForPackagesRoots:
    """Tests for search_for_packages_roots."""

    def test_finds_nested_manifests(self, temp_dir: Path):
        write_manifest(temp_dir, name="root")
        write_manifest(temp_dir / "packages" / "a", name="a")
        write_manifest(temp_dir / "apps" / "web" / "nested", name="nested")

        manifests = set(search_for_packages_roots(temp_dir))

        assert manifests == {
            temp_dir / "package.json",
            temp_dir / "packages" / "a" / "package.json",
            temp_dir / "apps" / "web" / "nested" / "package.json",
        }

    def test_skips_noise_directories(self, temp_dir: Path):
        write_manifest(temp_dir, name="root")
        for noise in ("node_modules/dep", "dist", "build", ".git"):
            write_manifest(temp_dir / noise, name="noise")

        manifests = search_for_packages_roots(temp_dir)

        assert manifests == [temp_dir / "package.json"]

    def test_extra_ignore_paths(self, temp_dir: Path):
        write_manifest(temp_dir / "packages" / "a", name="a")
        write_manifest(temp_dir / "packages" / "b", name="b")
        write_manifest(temp_dir / "fixtures" / "c", name="c")

        manifests = set(search_for_packages_roots(temp_dir, ["packages/b", "fixtures"]))

        assert manifests == {temp_dir / "packages" / "a" / "package.json"}


class TestReadPackageJson:
    """Tests for read_package_json."""

    def test_reads_object(self, temp_dir: Path):
        write_manifest(temp_dir, name="x", version="1.0.0")
        assert read_package_json(temp_dir) == {"name": "x", "version": "1.0.0"}

    def test_missing(self, temp_dir: Path):
        assert read_package_json(temp_dir) is None

    def test_not_an_object(self, temp_dir: Path):
        (temp_dir / "package.json").write_text("[1, 2]")
        assert read_package_json(temp_dir) is None
