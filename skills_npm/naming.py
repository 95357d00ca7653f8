"""Symlink naming for skills discovered in npm packages."""

from skills_npm.constants import TARGET_PREFIX


def sanitize_package_name(package_name: str) -> str:
    """Flatten a package name into a single path segment.

    The leading ``@`` of a scoped name is stripped first, then every ``/``
    becomes ``-``, then the result is lowercased.

    Example:
        >>> sanitize_package_name("@Org/Name")
        'org-name'
    """
    if package_name.startswith("@"):
        package_name = package_name[1:]
    return package_name.replace("/", "-").lower()


def create_target_name(package_name: str, skill_name: str) -> str:
    """Build the symlink name for a skill.

    Example:
        >>> create_target_name("@scope/name", "foo")
        'npm-scope-name-foo'
    """
    return f"{TARGET_PREFIX}{sanitize_package_name(package_name)}-{skill_name}"
