"""Linking module for symlink reconciliation and .gitignore upkeep."""

from skills_npm.linking.gitignore import (
    GitignoreUpdate,
    gitignore_exists,
    has_gitignore_pattern,
    update_gitignore,
)
from skills_npm.linking.symlink import SymlinkReconciler, create_symlink

__all__ = [
    "GitignoreUpdate",
    "SymlinkReconciler",
    "create_symlink",
    "gitignore_exists",
    "has_gitignore_pattern",
    "update_gitignore",
]
