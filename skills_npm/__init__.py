"""skills-npm - Link agent skills shipped in npm packages into coding agents.

Packages can publish agent skills in a ``skills/`` directory. This library
finds them in ``node_modules``, caches the result against the lock file, and
keeps one ``npm-*`` symlink per skill in each agent's skills directory.
"""

from skills_npm.exceptions import (
    ConfigError,
    SkillParseError,
    SkillsNpmError,
    UnknownAgentError,
)

from skills_npm.models import (
    AuditEvent,
    CacheRecord,
    CleanupResult,
    FilterResult,
    FilterRule,
    InvalidReason,
    InvalidSkillRecord,
    LockfileFingerprint,
    ScanMode,
    ScanResult,
    Skill,
    SymlinkResult,
)

from skills_npm.naming import create_target_name, sanitize_package_name
from skills_npm.agents import AGENTS, AgentConfig, detect_installed_agents, get_all_agent_types
from skills_npm.config import SyncOptions, load_config, resolve_config
from skills_npm.discovery import (
    PackageScanner,
    ScanCache,
    SkillValidator,
    get_lockfile_fingerprint,
    scan_with_cache,
    search_for_package_root,
    search_for_packages_roots,
    search_for_workspace_root,
)
from skills_npm.filtering import filter_skills, process_skills
from skills_npm.linking import SymlinkReconciler, has_gitignore_pattern, update_gitignore
from skills_npm.observability import AuditSink, JSONLAuditSink, MemoryAuditSink, StdoutAuditSink
from skills_npm.runtime import SkillsSync, SyncReport

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "SkillsNpmError",
    "SkillParseError",
    "ConfigError",
    "UnknownAgentError",
    # Models
    "AuditEvent",
    "CacheRecord",
    "CleanupResult",
    "FilterResult",
    "FilterRule",
    "InvalidReason",
    "InvalidSkillRecord",
    "LockfileFingerprint",
    "ScanMode",
    "ScanResult",
    "Skill",
    "SymlinkResult",
    # Naming
    "create_target_name",
    "sanitize_package_name",
    # Agents
    "AGENTS",
    "AgentConfig",
    "detect_installed_agents",
    "get_all_agent_types",
    # Configuration
    "SyncOptions",
    "load_config",
    "resolve_config",
    # Discovery
    "PackageScanner",
    "ScanCache",
    "SkillValidator",
    "get_lockfile_fingerprint",
    "scan_with_cache",
    "search_for_package_root",
    "search_for_packages_roots",
    "search_for_workspace_root",
    # Selection and linking
    "filter_skills",
    "process_skills",
    "SymlinkReconciler",
    "has_gitignore_pattern",
    "update_gitignore",
    # Observability
    "AuditSink",
    "JSONLAuditSink",
    "MemoryAuditSink",
    "StdoutAuditSink",
    # Runtime
    "SkillsSync",
    "SyncReport",
]
