"""Data models for skills-npm."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from skills_npm.constants import SOURCE_NODE_MODULES
from skills_npm.naming import create_target_name


class InvalidReason(Enum):
    """Why a candidate skill directory failed validation."""
    NOT_A_FILE = "not_a_file"
    MISSING_FIELDS = "missing_fields"
    FILE_ERROR = "file_error"


@dataclass(frozen=True)
class Skill:
    """A validated skill found inside a dependency package."""
    package_name: str
    skill_name: str
    skill_path: str  # absolute path to the skill directory
    name: str
    description: str
    package_version: str | None = None

    @property
    def target_name(self) -> str:
        """Symlink name for this skill, e.g. ``npm-scope-name-foo``."""
        return create_target_name(self.package_name, self.skill_name)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "packageName": self.package_name,
            "packageVersion": self.package_version,
            "skillName": self.skill_name,
            "skillPath": self.skill_path,
            "targetName": self.target_name,
            "name": self.name,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Skill":
        """Deserialize from dict.

        ``targetName`` is ignored; it is always recomputed.
        """
        return cls(
            package_name=data["packageName"],
            skill_name=data["skillName"],
            skill_path=data["skillPath"],
            name=data["name"],
            description=data["description"],
            package_version=data.get("packageVersion"),
        )


@dataclass(frozen=True)
class InvalidSkillRecord:
    """A skill directory that failed validation."""
    package_name: str
    skill_name: str
    reason: InvalidReason

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "packageName": self.package_name,
            "skillName": self.skill_name,
            "error": self.reason.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "InvalidSkillRecord":
        """Deserialize from dict."""
        return cls(
            package_name=data["packageName"],
            skill_name=data["skillName"],
            reason=InvalidReason(data["error"]),
        )


@dataclass(frozen=True)
class LockfileFingerprint:
    """Content hash of a lock file together with the lock file's name."""
    hash: str
    path: str

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {"hash": self.hash, "path": self.path}

    @classmethod
    def from_dict(cls, data: dict) -> "LockfileFingerprint":
        """Deserialize from dict."""
        return cls(hash=data["hash"], path=data["path"])


@dataclass(frozen=True)
class ScanMode:
    """The scan options a cached result was computed with."""
    recursive: bool = False
    source: str = SOURCE_NODE_MODULES
    ignore_paths: tuple[str, ...] = ()

    @classmethod
    def of(
        cls,
        recursive: bool = False,
        source: str = SOURCE_NODE_MODULES,
        ignore_paths: Iterable[str] = (),
    ) -> "ScanMode":
        """Build a comparable mode.

        ``ignore_paths`` only affects recursive scans; it is dropped
        otherwise, and stripped, deduplicated and sorted when kept.
        """
        if not recursive:
            return cls(recursive=False, source=source)
        paths = {path.strip("/\\") for path in ignore_paths}
        paths.discard("")
        return cls(recursive=True, source=source, ignore_paths=tuple(sorted(paths)))

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "recursive": self.recursive,
            "source": self.source,
            "ignorePaths": list(self.ignore_paths),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScanMode":
        """Deserialize from dict."""
        return cls(
            recursive=bool(data["recursive"]),
            source=data["source"],
            ignore_paths=tuple(data.get("ignorePaths", [])),
        )


@dataclass
class ScanResult:
    """Discovery output for one invocation."""
    skills: list[Skill] = field(default_factory=list)
    skills_invalid: list[InvalidSkillRecord] = field(default_factory=list)
    packages_scanned: int = 0
    root_paths: list[str] = field(default_factory=list)
    from_cache: bool = False


@dataclass
class CacheRecord:
    """On-disk form of the last full scan, keyed to a lock file and scan mode."""
    lockfile: LockfileFingerprint
    mode: ScanMode = field(default_factory=ScanMode)
    skills: list[Skill] = field(default_factory=list)
    skills_invalid: list[InvalidSkillRecord] = field(default_factory=list)
    root_paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "lockfile": self.lockfile.to_dict(),
            "mode": self.mode.to_dict(),
            "skills": [skill.to_dict() for skill in self.skills],
            "skillsInvalid": [record.to_dict() for record in self.skills_invalid],
            "rootPaths": list(self.root_paths),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheRecord":
        """Deserialize from dict."""
        return cls(
            lockfile=LockfileFingerprint.from_dict(data["lockfile"]),
            mode=ScanMode.from_dict(data["mode"]),
            skills=[Skill.from_dict(s) for s in data.get("skills", [])],
            skills_invalid=[
                InvalidSkillRecord.from_dict(r) for r in data.get("skillsInvalid", [])
            ],
            root_paths=list(data.get("rootPaths", [])),
        )

    def to_scan_result(self) -> ScanResult:
        """Build the ScanResult served from this record."""
        return ScanResult(
            skills=list(self.skills),
            skills_invalid=list(self.skills_invalid),
            packages_scanned=0,
            root_paths=list(self.root_paths),
            from_cache=True,
        )


@dataclass(frozen=True)
class FilterRule:
    """Selects every skill of a package, or only the named ones."""
    package: str
    skills: tuple[str, ...] | None = None

    def matches(self, skill: Skill) -> bool:
        """Return True if the rule selects the skill."""
        if skill.package_name != self.package:
            return False
        return self.skills is None or skill.skill_name in self.skills

    @classmethod
    def coerce(cls, item: "str | dict | FilterRule") -> "FilterRule":
        """Normalise a bare package name or ``{package, skills}`` mapping."""
        if isinstance(item, FilterRule):
            return item
        if isinstance(item, str):
            return cls(package=item)
        if isinstance(item, dict) and isinstance(item.get("package"), str):
            skills = item.get("skills")
            if skills is None:
                return cls(package=item["package"])
            if isinstance(skills, str) or not all(isinstance(s, str) for s in skills):
                raise ValueError(f"'skills' must be a list of names: {item!r}")
            return cls(package=item["package"], skills=tuple(skills))
        raise ValueError(f"Invalid filter rule: {item!r}")

    def to_dict(self) -> "str | dict":
        """Serialize back to the configuration form."""
        if self.skills is None:
            return self.package
        return {"package": self.package, "skills": list(self.skills)}


@dataclass
class FilterResult:
    """Skills remaining after filtering."""
    skills: list[Skill]
    excluded_count: int


@dataclass
class SymlinkResult:
    """Outcome of reconciling one skill into one agent directory."""
    skill: Skill
    agent: str
    target_path: str
    success: bool
    error: str | None = None
    changed: bool = False


@dataclass
class CleanupResult:
    """Outcome of removing one stale entry from an agent directory."""
    agent: str
    target_name: str
    target_path: str
    success: bool
    error: str | None = None


@dataclass
class AuditEvent:
    """Record of a sync operation."""
    ts: datetime
    kind: str  # "scan", "cache", "link", "cleanup", "gitignore", "error"
    subject: str
    path: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "ts": self.ts.isoformat(),
            "kind": self.kind,
            "subject": self.subject,
            "path": self.path,
            "detail": self.detail,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEvent":
        """Deserialize from dict."""
        return cls(
            ts=datetime.fromisoformat(data["ts"]),
            kind=data["kind"],
            subject=data["subject"],
            path=data.get("path"),
            detail=data.get("detail", {}),
        )
