"""Frontmatter parsing for SKILL.md files."""

from pathlib import Path

import yaml

from skills_npm.constants import SKILL_MD
from skills_npm.exceptions import SkillParseError


class FrontmatterParser:
    """Parses YAML frontmatter from SKILL.md files."""

    def parse(self, skill_path: Path) -> dict:
        """
        Parse the frontmatter block of ``<skill_path>/SKILL.md``.

        Reads line-by-line until the second '---' delimiter; the body is
        never read. A file that does not open with a delimiter has no
        frontmatter and yields an empty dict.

        Args:
            skill_path: Path to the skill directory containing SKILL.md

        Returns:
            The frontmatter as a dict

        Raises:
            SkillParseError: If SKILL.md cannot be read, the frontmatter is
                           unterminated, or it is not a YAML mapping
        """
        skill_md_path = skill_path / SKILL_MD

        try:
            with open(skill_md_path, 'r', encoding='utf-8') as f:
                first_line = f.readline()
                # A BOM would otherwise hide the opening delimiter
                if first_line.lstrip('\ufeff').strip() != '---':
                    return {}

                frontmatter_lines = []
                while True:
                    line = f.readline()
                    if not line:
                        raise SkillParseError(
                            f"{skill_md_path} ended before finding second '---' delimiter"
                        )
                    if line.strip() == '---':
                        break
                    frontmatter_lines.append(line)
        except SkillParseError:
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise SkillParseError(f"Error reading {skill_md_path}: {e}")

        try:
            metadata = yaml.safe_load(''.join(frontmatter_lines))
        except yaml.YAMLError as e:
            raise SkillParseError(f"Invalid YAML in frontmatter: {e}")

        if metadata is None:
            return {}

        if not isinstance(metadata, dict):
            raise SkillParseError(
                f"Frontmatter must be a YAML dictionary, got {type(metadata).__name__}"
            )

        return metadata
