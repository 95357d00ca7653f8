"""Command-line interface for skills-npm.

Discovers agent skills shipped in npm packages under node_modules and links
them into the skills directories of coding agents.

Example:
    $ skills-npm
    $ skills-npm --dry-run
    $ skills-npm --agents cursor,claude-code
    $ skills-npm ./my-project --recursive
"""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from skills_npm import __version__
from skills_npm.agents import get_all_agent_types, split_agent_names, validate_agent_names
from skills_npm.config import resolve_config
from skills_npm.constants import GITIGNORE_PATTERN, SOURCES
from skills_npm.exceptions import SkillsNpmError
from skills_npm.observability.audit import JSONLAuditSink
from skills_npm.runtime.sync import SkillsSync, SyncReport


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="skills-npm",
        description=(
            "Discover agent skills from npm packages in node_modules and "
            "create symlinks for coding agents to consume."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Available agents: {', '.join(get_all_agent_types())}",
    )
    parser.add_argument(
        "cwd",
        nargs="?",
        type=Path,
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "-a", "--agents",
        help="Comma-separated list of agents to install to (default: detected agents)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Show what would be done without making changes",
    )
    parser.add_argument(
        "--no-gitignore",
        action="store_false",
        dest="gitignore",
        default=None,
        help="Skip updating .gitignore",
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        default=None,
        help="Scan node_modules of every package in the workspace",
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        help="Scan everything installed, or only dependencies declared in package.json",
    )
    parser.add_argument(
        "--no-cache",
        action="store_false",
        dest="cache",
        default=None,
        help="Ignore and discard the scan cache",
    )
    parser.add_argument(
        "--audit-log",
        type=Path,
        help="Append audit events to this JSONL file",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=__version__,
    )
    return parser


def _print_report(report: SyncReport, dry_run: bool) -> None:
    by_agent: dict[str, list] = {}
    for result in report.symlinks:
        by_agent.setdefault(result.agent, []).append(result)

    for agent, results in by_agent.items():
        print(f"{agent}:")
        for result in results:
            prefix = "→" if dry_run else ("✓" if result.success else "✗")
            print(f"  {prefix} {result.skill.target_name}")
            if not result.success and result.error:
                print(f"      {result.error}")

    for result in report.cleanup:
        verb = "Would remove" if dry_run else ("Removed" if result.success else "Failed to remove")
        print(f"{verb} stale {result.agent}/{result.target_name}")
        if not result.success and result.error:
            print(f"      {result.error}")

    if report.gitignore and report.gitignore.updated:
        if dry_run:
            print(f"[Dry run] Would update .gitignore with: {GITIGNORE_PATTERN}")
        elif report.gitignore.created:
            print(f"Created .gitignore with {GITIGNORE_PATTERN} pattern")
        else:
            print(f"Updated .gitignore with {GITIGNORE_PATTERN} pattern")


def cmd_sync(args: argparse.Namespace) -> int:
    """Execute a sync.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        agents = None
        if args.agents:
            requested = [a.strip() for a in args.agents.split(",") if a.strip()]
            agents = validate_agent_names(requested)
            unknown = split_agent_names(requested)[1]
            if unknown:
                print(f"Warning: unknown agent(s) skipped: {', '.join(unknown)}", file=sys.stderr)

        options = resolve_config({
            "cwd": args.cwd,
            "agents": agents,
            "dry_run": args.dry_run,
            "gitignore": args.gitignore,
            "recursive": args.recursive,
            "source": args.source,
            "cache": args.cache,
        })

        audit_sink = JSONLAuditSink(args.audit_log) if args.audit_log else None
        report = SkillsSync(options, audit_sink=audit_sink).run()

    except SkillsNpmError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    scan = report.scan
    skills = report.selection.skills
    source_note = " (cached)" if scan.from_cache else ""

    if not skills:
        print(f"Scanned {_plural(scan.packages_scanned, 'package')}{source_note}, no skills found")
        return 0

    print(
        f"Scanned {_plural(scan.packages_scanned, 'package')}{source_note}, "
        f"found {_plural(len(skills), 'skill')}"
    )
    if report.selection.excluded_count:
        print(f"Filtered out {_plural(report.selection.excluded_count, 'skill')}")
    for skill in skills:
        print(f"  - {skill.name} ({skill.package_name})")
    for record in scan.skills_invalid:
        print(f"  ! {record.package_name}/{record.skill_name}: {record.reason.value}")

    if not report.agents:
        print("No agents detected. Use --agents to specify target agents.", file=sys.stderr)
        return 1

    print(f"Target agents: {', '.join(report.agents)}")
    _print_report(report, options.dry_run)

    total = len(report.symlinks)
    if options.dry_run:
        print(f"[Dry run] Would create {total} symlinks")
        return 0

    print(f"Created {report.success_count}/{total} symlinks")
    return 1 if report.failures else 0


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    sys.exit(cmd_sync(args))


if __name__ == "__main__":
    main()
