"""Tests for the exception hierarchy."""

import pytest

from skills_npm.exceptions import ConfigError, SkillParseError, SkillsNpmError, UnknownAgentError


@pytest.mark.parametrize("exc", [SkillParseError, ConfigError, UnknownAgentError])
def test_all_derive_from_base(exc):
    assert issubclass(exc, SkillsNpmError)


def test_unknown_agent_is_config_error():
    with pytest.raises(ConfigError):
        raise UnknownAgentError("unknown agent")
