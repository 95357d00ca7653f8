"""Validation of skill directories."""

from dataclasses import dataclass
from pathlib import Path

from skills_npm.constants import SKILL_MD
from skills_npm.exceptions import SkillParseError
from skills_npm.models import InvalidReason
from skills_npm.parsing.frontmatter import FrontmatterParser


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one skill directory."""
    valid: bool
    name: str | None = None
    description: str | None = None
    reason: InvalidReason | None = None


def _non_empty_string(value: object) -> bool:
    return isinstance(value, str) and value.strip() != ""


class SkillValidator:
    """Decides whether a directory is a well-formed skill.

    A skill directory must contain a regular SKILL.md file whose frontmatter
    defines non-empty string ``name`` and ``description`` fields. Validation
    never raises; every failure is reported as an InvalidReason.
    """

    def __init__(self, parser: FrontmatterParser | None = None):
        self.parser = parser or FrontmatterParser()

    def validate(self, skill_dir: Path) -> ValidationResult:
        """Validate ``skill_dir`` and extract its name and description.

        Args:
            skill_dir: Candidate skill directory

        Returns:
            ValidationResult with ``valid`` set, or the reason it is invalid
        """
        skill_md_path = Path(skill_dir) / SKILL_MD

        try:
            if not skill_md_path.is_file():
                if skill_md_path.exists():
                    return ValidationResult(valid=False, reason=InvalidReason.NOT_A_FILE)
                return ValidationResult(valid=False, reason=InvalidReason.FILE_ERROR)
            metadata = self.parser.parse(Path(skill_dir))
        except (SkillParseError, OSError):
            return ValidationResult(valid=False, reason=InvalidReason.FILE_ERROR)

        name = metadata.get('name')
        description = metadata.get('description')
        if not _non_empty_string(name) or not _non_empty_string(description):
            return ValidationResult(valid=False, reason=InvalidReason.MISSING_FIELDS)

        return ValidationResult(valid=True, name=name, description=description)
