"""Exception classes for skills-npm."""


class SkillsNpmError(Exception):
    """Base exception for all skills-npm errors."""
    pass


class SkillParseError(SkillsNpmError):
    """Raised when SKILL.md parsing fails."""
    pass


class ConfigError(SkillsNpmError):
    """Raised when a configuration file or option value is invalid."""
    pass


class UnknownAgentError(ConfigError):
    """Raised when an explicitly requested agent is not in the registry."""
    pass
