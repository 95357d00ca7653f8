"""Tests for SkillValidator."""

from pathlib import Path

from helpers import write_skill_md
from skills_npm.discovery import SkillValidator
from skills_npm.models import InvalidReason


class TestSkillValidator:
    """Test suite for SkillValidator."""

    def test_valid_skill(self, temp_dir: Path):
        write_skill_md(temp_dir / "skill", name="My Skill", description="Does things")

        result = SkillValidator().validate(temp_dir / "skill")

        assert result.valid
        assert result.name == "My Skill"
        assert result.description == "Does things"
        assert result.reason is None

    def test_missing_description(self, temp_dir: Path):
        write_skill_md(temp_dir / "skill", description=None)

        result = SkillValidator().validate(temp_dir / "skill")

        assert not result.valid
        assert result.reason is InvalidReason.MISSING_FIELDS

    def test_missing_name(self, temp_dir: Path):
        write_skill_md(temp_dir / "skill", name=None)

        result = SkillValidator().validate(temp_dir / "skill")

        assert result.reason is InvalidReason.MISSING_FIELDS

    def test_empty_field(self, temp_dir: Path):
        skill_dir = temp_dir / "skill"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("---\nname: ''\ndescription: x\n---\n")

        result = SkillValidator().validate(skill_dir)

        assert result.reason is InvalidReason.MISSING_FIELDS

    def test_non_string_field(self, temp_dir: Path):
        skill_dir = temp_dir / "skill"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("---\nname: 42\ndescription: x\n---\n")

        result = SkillValidator().validate(skill_dir)

        assert result.reason is InvalidReason.MISSING_FIELDS

    def test_no_frontmatter(self, temp_dir: Path):
        skill_dir = temp_dir / "skill"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("# No metadata\n")

        result = SkillValidator().validate(skill_dir)

        assert result.reason is InvalidReason.MISSING_FIELDS

    def test_skill_md_is_directory(self, temp_dir: Path):
        (temp_dir / "skill" / "SKILL.md").mkdir(parents=True)

        result = SkillValidator().validate(temp_dir / "skill")

        assert result.reason is InvalidReason.NOT_A_FILE

    def test_missing_skill_md(self, temp_dir: Path):
        (temp_dir / "skill").mkdir()

        result = SkillValidator().validate(temp_dir / "skill")

        assert result.reason is InvalidReason.FILE_ERROR

    def test_unparsable_frontmatter(self, temp_dir: Path):
        skill_dir = temp_dir / "skill"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("---\nname: [oops\n---\n")

        result = SkillValidator().validate(skill_dir)

        assert result.reason is InvalidReason.FILE_ERROR

    def test_undecodable_file(self, temp_dir: Path):
        skill_dir = temp_dir / "skill"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_bytes(b"---\nname: \xff\xfe\n---\n")

        result = SkillValidator().validate(skill_dir)

        assert result.reason is InvalidReason.FILE_ERROR
