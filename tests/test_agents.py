"""Tests for the agent registry."""

from pathlib import Path

import pytest

from skills_npm.agents import (
    AGENTS,
    detect_installed_agents,
    get_agent,
    get_all_agent_types,
    split_agent_names,
    validate_agent_names,
)
from skills_npm.exceptions import ConfigError, UnknownAgentError


class TestRegistry:
    """Tests for agent lookup."""

    def test_known_agents(self):
        assert get_agent("claude-code").skills_dir == ".claude/skills"
        assert get_agent("opencode").skills_dir == ".opencode/skill"
        assert get_agent("unknown") is None

    def test_all_agent_types(self):
        types = get_all_agent_types()
        assert types == list(AGENTS)
        assert "cursor" in types

    def test_skills_dirs_are_relative(self):
        for agent in AGENTS.values():
            assert not Path(agent.skills_dir).is_absolute()


class TestDetectInstalledAgents:
    """Tests for detect_installed_agents."""

    def test_nothing_detected(self, temp_dir: Path):
        assert detect_installed_agents(temp_dir) == []

    def test_directory_marker(self, temp_dir: Path):
        (temp_dir / ".claude").mkdir()
        assert detect_installed_agents(temp_dir) == ["claude-code"]

    def test_file_marker(self, temp_dir: Path):
        (temp_dir / ".github").mkdir()
        (temp_dir / ".github" / "copilot-instructions.md").write_text("")
        (temp_dir / ".cursorrules").write_text("")

        assert detect_installed_agents(temp_dir) == ["cursor", "github-copilot"]


class TestValidateAgentNames:
    """Tests for validate_agent_names."""

    def test_valid(self):
        assert validate_agent_names(["cursor", "codex"]) == ["cursor", "codex"]

    def test_unknown_dropped_when_some_known(self):
        assert validate_agent_names(["cursor", "nope"]) == ["cursor"]

    def test_all_unknown(self):
        with pytest.raises(UnknownAgentError, match="nope"):
            validate_agent_names(["nope", "also-nope"])

    def test_split(self):
        assert split_agent_names(["nope", "cursor", "codex", "x"]) == (["cursor", "codex"], ["nope", "x"])

    def test_unknown_is_config_error(self):
        with pytest.raises(ConfigError):
            validate_agent_names(["nope"])
