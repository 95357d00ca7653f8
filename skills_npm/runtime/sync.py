"""End-to-end synchronization of npm skills into agent directories.

SkillsSync ties the pieces together:

1. Resolve the root to work in (package root, or workspace root when
   scanning recursively)
2. Scan node_modules, served from the lock-file-keyed cache when valid
3. Apply include/exclude filters
4. Create or repair one symlink per (skill, agent)
5. Remove stale ``npm-`` entries
6. Make sure .gitignore covers the generated links
"""

from dataclasses import dataclass, field
from pathlib import Path

from skills_npm.agents import AGENTS, AgentConfig
from skills_npm.config import SyncOptions
from skills_npm.discovery.cache import scan_with_cache
from skills_npm.discovery.scanner import PackageScanner
from skills_npm.discovery.workspace import search_for_package_root, search_for_workspace_root
from skills_npm.filtering import process_skills
from skills_npm.linking.gitignore import GitignoreUpdate, update_gitignore
from skills_npm.linking.symlink import SymlinkReconciler
from skills_npm.models import CleanupResult, FilterResult, ScanResult, Skill, SymlinkResult
from skills_npm.observability.audit import AuditSink, emit


@dataclass
class SyncReport:
    """Everything a sync run did, for display by the caller."""
    root: Path
    scan: ScanResult
    selection: FilterResult
    agents: list[str] = field(default_factory=list)
    symlinks: list[SymlinkResult] = field(default_factory=list)
    cleanup: list[CleanupResult] = field(default_factory=list)
    gitignore: GitignoreUpdate | None = None

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.symlinks if result.success)

    @property
    def failures(self) -> list[SymlinkResult | CleanupResult]:
        return [r for r in [*self.symlinks, *self.cleanup] if not r.success]


class SkillsSync:
    """Discovers skills in node_modules and links them for coding agents.

    Example:
        >>> options = SyncOptions(cwd=Path("."), agents=["claude-code"])
        >>> report = SkillsSync(options).run()
        >>> print(f"Linked {report.success_count}/{len(report.symlinks)}")
    """

    def __init__(
        self,
        options: SyncOptions,
        registry: dict[str, AgentConfig] | None = None,
        audit_sink: AuditSink | None = None,
    ):
        """Initialize a sync run.

        Args:
            options: Explicit run configuration; ``options.cwd`` defaults to
                     the process working directory
            registry: Agent lookup table, defaults to the built-in AGENTS
            audit_sink: Optional AuditSink shared by every component
        """
        self.options = options
        self._audit_sink = audit_sink

        start = Path(options.cwd) if options.cwd is not None else Path.cwd()
        if options.recursive:
            self.root = search_for_workspace_root(start)
        else:
            self.root = search_for_package_root(start)

        self._scanner = PackageScanner(audit_sink=audit_sink)
        self._reconciler = SymlinkReconciler(
            self.root,
            dry_run=options.dry_run,
            registry=registry if registry is not None else AGENTS,
            audit_sink=audit_sink,
        )

    def scan(self) -> ScanResult:
        """Discover skills, using the scan cache unless disabled."""
        return scan_with_cache(
            self.root,
            scanner=self._scanner,
            recursive=self.options.recursive,
            source=self.options.source,
            ignore_paths=self.options.ignore_paths,
            use_cache=self.options.cache,
            audit_sink=self._audit_sink,
        )

    def select(self, skills: list[Skill]) -> FilterResult:
        """Apply the configured include and exclude rules."""
        return process_skills(skills, self.options.include, self.options.exclude)

    def resolve_agents(self) -> list[str]:
        """Configured agents, or those detected in the root."""
        return self._reconciler.resolve_agents(self.options.agents)

    def link(self, skills: list[Skill], agents: list[str] | None = None) -> list[SymlinkResult]:
        return self._reconciler.symlink_skills(skills, agents or self.resolve_agents())

    def cleanup(self, skills: list[Skill], agents: list[str] | None = None) -> list[CleanupResult]:
        return self._reconciler.cleanup_stale_skills(skills, agents or self.resolve_agents())

    def run(self) -> SyncReport:
        """Scan, filter, link, clean up and update .gitignore.

        Per-item failures are collected in the report, never raised.
        """
        scan = self.scan()
        selection = self.select(scan.skills)
        agents = self.resolve_agents()

        report = SyncReport(root=self.root, scan=scan, selection=selection, agents=agents)

        if not agents:
            return report

        report.symlinks = self.link(selection.skills, agents)
        report.cleanup = self.cleanup(selection.skills, agents)

        if self.options.gitignore and selection.skills:
            try:
                report.gitignore = update_gitignore(self.root, dry_run=self.options.dry_run)
            except OSError as e:
                emit(self._audit_sink, "error", ".gitignore", self.root / ".gitignore",
                     error=str(e))
            else:
                if report.gitignore.updated and not self.options.dry_run:
                    emit(self._audit_sink, "gitignore", ".gitignore", self.root / ".gitignore",
                         created=report.gitignore.created)

        return report
