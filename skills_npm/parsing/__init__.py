"""Parsing module for SKILL.md frontmatter."""

from skills_npm.parsing.frontmatter import FrontmatterParser

__all__ = ["FrontmatterParser"]
