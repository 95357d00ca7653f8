#!/usr/bin/env python3
"""Example: Library usage of skills-npm.

This example scans the current project's node_modules, prints what it found,
and shows what a sync would do without touching the filesystem.
"""

from pathlib import Path

from skills_npm import SkillsSync, SyncOptions, resolve_config
from skills_npm.observability import StdoutAuditSink


def main():
    """Demonstrate a dry-run sync."""
    print("=" * 60)
    print("skills-npm - Library Usage Example")
    print("=" * 60)
    print()

    # Options from skills-npm.config.yaml, if present, plus explicit overrides
    options: SyncOptions = resolve_config({
        "cwd": Path.cwd(),
        "agents": ["claude-code"],
        "dry_run": True,
    })

    # Create audit sink for logging
    audit_sink = StdoutAuditSink()

    sync = SkillsSync(options, audit_sink=audit_sink)
    print(f"Project root: {sync.root}")

    # Discover skills
    print("\nScanning node_modules...")
    scan = sync.scan()
    cached = " (from cache)" if scan.from_cache else ""
    print(f"Found {len(scan.skills)} skill(s) in {scan.packages_scanned} package(s){cached}")
    print()

    for skill in scan.skills:
        print(f"  - {skill.name} [{skill.package_name}]: {skill.description}")
        print(f"    -> {skill.target_name}")
    for record in scan.skills_invalid:
        print(f"  ! {record.package_name}/{record.skill_name}: {record.reason.value}")
    print()

    # Dry run of the full pipeline
    report = sync.run()
    for result in report.symlinks:
        print(f"Would link {result.target_path}")
    for result in report.cleanup:
        print(f"Would remove {result.target_path}")


if __name__ == "__main__":
    main()
