"""Reconciliation of agent skill directories against discovered skills.

Every selected skill gets a relative symlink named after its target name in
each agent's skills directory. Entries carrying the ``npm-`` prefix that no
longer match a selected skill are removed. Both operations are idempotent:
a second run over an up-to-date directory changes nothing on disk.

On Windows the links are directory junctions, which are recognized and
removed as links too.
"""

import errno
import os
import shutil
import stat
from pathlib import Path

from skills_npm.agents import AGENTS, AgentConfig, detect_installed_agents
from skills_npm.constants import TARGET_PREFIX
from skills_npm.models import CleanupResult, Skill, SymlinkResult
from skills_npm.observability.audit import AuditSink, emit


_EXTENDED_PATH_PREFIX = "\\\\?\\"


def _is_junction(path: str) -> bool:
    """True for a Windows directory junction, which ``islink`` does not report."""
    if os.name != "nt":
        return False
    try:
        stats = os.lstat(path)
    except OSError:
        return False
    attributes = getattr(stats, "st_file_attributes", 0)
    return bool(attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT)


def _is_link(path: str) -> bool:
    return os.path.islink(path) or _is_junction(path)


def _link_target(link_path: str) -> str:
    """Absolute, normalized path that the link at ``link_path`` points to."""
    existing = os.readlink(link_path)
    if existing.startswith(_EXTENDED_PATH_PREFIX):
        existing = existing[len(_EXTENDED_PATH_PREFIX):]
    return os.path.normcase(
        os.path.normpath(os.path.join(os.path.dirname(link_path), existing))
    )


def _remove_path(path: str) -> None:
    """Remove a symlink, junction, file or directory tree at ``path``.

    Links and junctions are removed themselves, never their targets.
    """
    if _is_link(path) or not os.path.isdir(path):
        os.unlink(path)
    else:
        shutil.rmtree(path)


def _force_remove(path: str) -> None:
    try:
        _remove_path(path)
    except OSError:
        # Link creation below will fail and be reported
        pass


def _link_directory(target: str, link_path: str) -> None:
    link_dir = os.path.dirname(link_path)
    if os.name == "nt":
        # Junctions need no privileges but must point at an absolute path
        import _winapi
        _winapi.CreateJunction(target, link_path)
    else:
        os.symlink(os.path.relpath(target, link_dir), link_path, target_is_directory=True)


def create_symlink(target: str | Path, link_path: str | Path) -> bool:
    """Make ``link_path`` a symlink to ``target``, repairing whatever is there.

    Args:
        target: Directory the link should point at
        link_path: Where the link lives

    Returns:
        True if the filesystem was changed, False if the link was already
        correct

    Raises:
        OSError: If the link cannot be created
    """
    resolved_target = os.path.abspath(target)
    resolved_link = os.path.abspath(link_path)

    if resolved_target == resolved_link:
        return False

    try:
        stats = os.lstat(resolved_link)
    except FileNotFoundError:
        stats = None
    except OSError as e:
        if e.errno == errno.ELOOP:
            _force_remove(resolved_link)
        stats = None

    if stats is not None:
        if _is_link(resolved_link):
            expected = os.path.normcase(os.path.normpath(resolved_target))
            if _link_target(resolved_link) == expected:
                return False
            os.unlink(resolved_link)
        else:
            _remove_path(resolved_link)

    os.makedirs(os.path.dirname(resolved_link), exist_ok=True)
    _link_directory(resolved_target, resolved_link)
    return True


class SymlinkReconciler:
    """Keeps agent skill directories in sync with a skill selection.

    Example:
        >>> reconciler = SymlinkReconciler(Path("."), dry_run=False)
        >>> results = reconciler.symlink_skills(skills, agents=["claude-code"])
        >>> removed = reconciler.cleanup_stale_skills(skills, agents=["claude-code"])
    """

    def __init__(
        self,
        cwd: Path,
        dry_run: bool = False,
        registry: dict[str, AgentConfig] | None = None,
        audit_sink: AuditSink | None = None,
    ):
        """Initialize the reconciler.

        Args:
            cwd: Project root that agent skills directories are relative to
            dry_run: Report what would happen without touching the filesystem
            registry: Agent lookup table, defaults to the built-in AGENTS
            audit_sink: Optional AuditSink for link and cleanup events
        """
        self.cwd = Path(cwd)
        self.dry_run = dry_run
        self.registry = registry if registry is not None else AGENTS
        self._audit_sink = audit_sink

    def resolve_agents(self, agents: list[str] | None) -> list[str]:
        """Use ``agents`` if given, otherwise the agents detected in cwd."""
        if agents:
            return list(agents)
        return detect_installed_agents(self.cwd)

    def agent_skills_dir(self, agent: AgentConfig) -> Path:
        return self.cwd / agent.skills_dir

    def symlink_skill(self, skill: Skill, agents: list[str] | None = None) -> list[SymlinkResult]:
        """Link one skill into every target agent directory.

        Unknown agent identifiers are skipped. A failure for one agent does
        not stop the others.
        """
        results = []

        for agent_type in self.resolve_agents(agents):
            agent = self.registry.get(agent_type)
            if agent is None:
                continue

            link_path = self.agent_skills_dir(agent) / skill.target_name

            if self.dry_run:
                results.append(
                    SymlinkResult(skill=skill, agent=agent_type,
                                  target_path=str(link_path), success=True)
                )
                continue

            try:
                changed = create_symlink(skill.skill_path, link_path)
            except Exception as e:
                results.append(
                    SymlinkResult(
                        skill=skill,
                        agent=agent_type,
                        target_path=str(link_path),
                        success=False,
                        error=f"Failed to create symlink: {e}",
                    )
                )
                emit(self._audit_sink, "error", skill.target_name, link_path,
                     agent=agent_type, error=str(e))
                continue

            results.append(
                SymlinkResult(skill=skill, agent=agent_type, target_path=str(link_path),
                              success=True, changed=changed)
            )
            if changed:
                emit(self._audit_sink, "link", skill.target_name, link_path,
                     agent=agent_type, target=skill.skill_path)

        return results

    def symlink_skills(self, skills: list[Skill], agents: list[str] | None = None) -> list[SymlinkResult]:
        """Link every skill into every target agent directory."""
        agents = self.resolve_agents(agents)
        results = []
        for skill in skills:
            results.extend(self.symlink_skill(skill, agents))
        return results

    def cleanup_stale_skills(
        self,
        skills: list[Skill],
        agents: list[str] | None = None,
    ) -> list[CleanupResult]:
        """Remove ``npm-`` entries that do not belong to any of ``skills``.

        Entries without the prefix are left alone. A missing agent skills
        directory is skipped.

        Args:
            skills: The current skill selection
            agents: Target agent identifiers, detected when empty

        Returns:
            One CleanupResult per stale entry
        """
        valid_target_names = {skill.target_name for skill in skills}
        results = []

        for agent_type in self.resolve_agents(agents):
            agent = self.registry.get(agent_type)
            if agent is None:
                continue

            agent_skills_dir = self.agent_skills_dir(agent)
            try:
                entries = os.listdir(agent_skills_dir)
            except OSError:
                continue

            stale = [
                entry for entry in entries
                if entry.startswith(TARGET_PREFIX) and entry not in valid_target_names
            ]

            for entry in stale:
                entry_path = agent_skills_dir / entry

                if self.dry_run:
                    results.append(
                        CleanupResult(agent=agent_type, target_name=entry,
                                      target_path=str(entry_path), success=True)
                    )
                    continue

                try:
                    _remove_path(str(entry_path))
                except OSError as e:
                    results.append(
                        CleanupResult(
                            agent=agent_type,
                            target_name=entry,
                            target_path=str(entry_path),
                            success=False,
                            error=str(e) or "Failed to remove stale skill",
                        )
                    )
                    emit(self._audit_sink, "error", entry, entry_path,
                         agent=agent_type, error=str(e))
                    continue

                results.append(
                    CleanupResult(agent=agent_type, target_name=entry,
                                  target_path=str(entry_path), success=True)
                )
                emit(self._audit_sink, "cleanup", entry, entry_path, agent=agent_type)

        return results
