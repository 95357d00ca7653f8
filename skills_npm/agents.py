"""Registry of coding agents that consume skills.

Each agent reads skills from a directory relative to the project root.
Detection looks for the agent's marker files or directories in the project.
"""

from dataclasses import dataclass
from pathlib import Path

from skills_npm.exceptions import UnknownAgentError


@dataclass(frozen=True)
class AgentConfig:
    """Where an agent expects skills, and how to tell it is in use."""
    name: str
    display_name: str
    skills_dir: str
    markers: tuple[str, ...] = ()

    def is_present(self, cwd: Path) -> bool:
        return any((Path(cwd) / marker).exists() for marker in self.markers)


AGENTS: dict[str, AgentConfig] = {
    agent.name: agent
    for agent in (
        AgentConfig("claude-code", "Claude Code", ".claude/skills", (".claude", "CLAUDE.md")),
        AgentConfig("cursor", "Cursor", ".cursor/skills", (".cursor", ".cursorrules")),
        AgentConfig("codex", "Codex", ".codex/skills", (".codex",)),
        AgentConfig("opencode", "OpenCode", ".opencode/skill", (".opencode", "opencode.json")),
        AgentConfig("github-copilot", "GitHub Copilot", ".github/skills",
                    (".github/copilot-instructions.md",)),
        AgentConfig("windsurf", "Windsurf", ".windsurf/skills", (".windsurf", ".windsurfrules")),
        AgentConfig("gemini-cli", "Gemini CLI", ".gemini/skills", (".gemini", "GEMINI.md")),
        AgentConfig("cline", "Cline", ".cline/skills", (".cline", ".clinerules")),
        AgentConfig("roo", "Roo Code", ".roo/skills", (".roo",)),
        AgentConfig("goose", "Goose", ".goose/skills", (".goose", ".goosehints")),
        AgentConfig("amp", "Amp", ".agents/skills", (".agents", "AGENTS.md")),
    )
}


def get_agent(name: str) -> AgentConfig | None:
    """Look up an agent by identifier. Unknown identifiers return None."""
    return AGENTS.get(name)


def get_all_agent_types() -> list[str]:
    return list(AGENTS)


def detect_installed_agents(cwd: Path) -> list[str]:
    """Identifiers of agents whose markers exist in ``cwd``."""
    return [name for name, agent in AGENTS.items() if agent.is_present(cwd)]


def split_agent_names(names: list[str]) -> tuple[list[str], list[str]]:
    """Partition requested agent identifiers into known and unknown ones.

    Order within each list follows ``names``.
    """
    known = [name for name in names if name in AGENTS]
    unknown = [name for name in names if name not in AGENTS]
    return known, unknown


def validate_agent_names(names: list[str]) -> list[str]:
    """Keep the known identifiers out of an explicit agent selection.

    Raises:
        UnknownAgentError: If none of the identifiers is known
    """
    known, unknown = split_agent_names(names)
    if unknown and not known:
        raise UnknownAgentError(
            f"Unknown agent(s): {', '.join(unknown)}. "
            f"Available: {', '.join(get_all_agent_types())}"
        )
    return known
