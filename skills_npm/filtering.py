"""Include/exclude selection of discovered skills."""

from typing import Iterable

from skills_npm.models import FilterResult, FilterRule, Skill

RuleLike = str | dict | FilterRule


def normalize_rules(rules: Iterable[RuleLike] | None) -> list[FilterRule]:
    """Coerce configuration values into FilterRule objects.

    Raises:
        ValueError: If an item is neither a package name nor a
                    ``{package, skills}`` mapping
    """
    return [FilterRule.coerce(item) for item in rules or ()]


def matches_filter(skill: Skill, rules: Iterable[FilterRule]) -> bool:
    """Return True if any rule selects ``skill``."""
    return any(rule.matches(skill) for rule in rules)


def filter_skills(
    skills: list[Skill],
    rules: Iterable[RuleLike] | None,
    should_match: bool,
) -> list[Skill]:
    """Keep skills that match (``should_match``) or don't match the rules.

    An empty rule list keeps every skill.
    """
    normalized = normalize_rules(rules)
    if not normalized:
        return list(skills)
    return [
        skill for skill in skills
        if matches_filter(skill, normalized) == should_match
    ]


def process_skills(
    skills: list[Skill],
    include: Iterable[RuleLike] | None = None,
    exclude: Iterable[RuleLike] | None = None,
) -> FilterResult:
    """Apply ``include`` then ``exclude`` to ``skills``.

    Example:
        >>> result = process_skills(skills, include=["pkg-a"],
        ...                         exclude=[{"package": "pkg-a", "skills": ["old"]}])
        >>> result.excluded_count
        3
    """
    included = filter_skills(skills, include, True)
    remaining = filter_skills(included, exclude, False)
    return FilterResult(skills=remaining, excluded_count=len(skills) - len(remaining))
