"""Runtime module for the end-to-end sync."""

from skills_npm.runtime.sync import SkillsSync, SyncReport

__all__ = ["SkillsSync", "SyncReport"]
