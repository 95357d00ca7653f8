"""Keeping generated skill symlinks out of version control."""

from dataclasses import dataclass
from pathlib import Path

from skills_npm.constants import GITIGNORE_COMMENT, GITIGNORE_PATTERN

GITIGNORE = ".gitignore"


@dataclass
class GitignoreUpdate:
    """What update_gitignore did, or would do in dry-run mode."""
    updated: bool
    created: bool


def gitignore_exists(cwd: Path) -> bool:
    return (Path(cwd) / GITIGNORE).is_file()


def has_gitignore_pattern(cwd: Path) -> bool:
    """Check whether ``<cwd>/.gitignore`` already ignores generated links."""
    try:
        content = (Path(cwd) / GITIGNORE).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return False
    return GITIGNORE_PATTERN in content


def update_gitignore(cwd: Path, dry_run: bool = False) -> GitignoreUpdate:
    """Append the ``skills/npm-*`` pattern to .gitignore, creating it if needed.

    Args:
        cwd: Directory holding the .gitignore
        dry_run: Report what would change without writing

    Returns:
        GitignoreUpdate; ``updated`` is False when the pattern was present

    Raises:
        OSError: If the file cannot be read or written
    """
    gitignore_path = Path(cwd) / GITIGNORE

    if has_gitignore_pattern(cwd):
        return GitignoreUpdate(updated=False, created=False)

    exists = gitignore_exists(cwd)
    if dry_run:
        return GitignoreUpdate(updated=True, created=not exists)

    block = f"{GITIGNORE_COMMENT}\n{GITIGNORE_PATTERN}\n"
    if exists:
        content = gitignore_path.read_text(encoding='utf-8')
        separator = "\n" if content.endswith("\n") else "\n\n"
        gitignore_path.write_text(content + separator + block, encoding='utf-8')
        return GitignoreUpdate(updated=True, created=False)

    gitignore_path.write_text(block, encoding='utf-8')
    return GitignoreUpdate(updated=True, created=True)
