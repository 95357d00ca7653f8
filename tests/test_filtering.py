"""Tests for include/exclude filtering."""

import pytest

from skills_npm.filtering import filter_skills, matches_filter, normalize_rules, process_skills
from skills_npm.models import FilterRule


@pytest.fixture
def skills(make_skill):
    return [
        make_skill("pkg-a", "skill1"),
        make_skill("pkg-a", "skill2"),
        make_skill("pkg-b", "skill3"),
        make_skill("pkg-c", "skill4"),
    ]


def _ids(skills):
    return [(s.package_name, s.skill_name) for s in skills]


class TestFilterRule:
    """Tests for FilterRule matching and coercion."""

    def test_package_rule_matches_every_skill(self, make_skill):
        rule = FilterRule("pkg-a")
        assert rule.matches(make_skill("pkg-a", "anything"))
        assert not rule.matches(make_skill("pkg-b", "anything"))

    def test_skill_list_rule(self, make_skill):
        rule = FilterRule("pkg-a", ("skill1",))
        assert rule.matches(make_skill("pkg-a", "skill1"))
        assert not rule.matches(make_skill("pkg-a", "skill2"))

    def test_empty_skill_list_matches_nothing(self, make_skill):
        assert not FilterRule("pkg-a", ()).matches(make_skill("pkg-a", "skill1"))

    def test_coerce_string(self):
        assert FilterRule.coerce("pkg-a") == FilterRule("pkg-a")

    def test_coerce_mapping(self):
        rule = FilterRule.coerce({"package": "pkg-a", "skills": ["skill1"]})
        assert rule == FilterRule("pkg-a", ("skill1",))

    def test_coerce_mapping_without_skills(self):
        assert FilterRule.coerce({"package": "pkg-a"}) == FilterRule("pkg-a")

    @pytest.mark.parametrize("item", [
        42,
        {"skills": ["x"]},
        {"package": "pkg-a", "skills": "skill1"},
        {"package": "pkg-a", "skills": [1]},
    ])
    def test_coerce_invalid(self, item):
        with pytest.raises(ValueError):
            FilterRule.coerce(item)

    def test_to_dict(self):
        assert FilterRule("pkg-a").to_dict() == "pkg-a"
        assert FilterRule("pkg-a", ("s",)).to_dict() == {"package": "pkg-a", "skills": ["s"]}


class TestFilterSkills:
    """Tests for filter_skills and matches_filter."""

    def test_empty_rules_keep_everything(self, skills):
        assert filter_skills(skills, [], True) == skills
        assert filter_skills(skills, None, False) == skills

    def test_should_match(self, skills):
        kept = filter_skills(skills, ["pkg-a"], True)
        assert _ids(kept) == [("pkg-a", "skill1"), ("pkg-a", "skill2")]

    def test_should_not_match(self, skills):
        kept = filter_skills(skills, ["pkg-a"], False)
        assert _ids(kept) == [("pkg-b", "skill3"), ("pkg-c", "skill4")]

    def test_matches_any_rule(self, skills):
        rules = normalize_rules(["pkg-c", {"package": "pkg-a", "skills": ["skill2"]}])
        assert [matches_filter(s, rules) for s in skills] == [False, True, False, True]


class TestProcessSkills:
    """Tests for include-then-exclude processing."""

    def test_no_rules(self, skills):
        result = process_skills(skills)
        assert result.skills == skills
        assert result.excluded_count == 0

    def test_include_packages(self, skills):
        result = process_skills(skills, include=["pkg-a", "pkg-b"])
        assert _ids(result.skills) == [
            ("pkg-a", "skill1"), ("pkg-a", "skill2"), ("pkg-b", "skill3"),
        ]
        assert result.excluded_count == 1

    def test_include_specific_skill(self, skills):
        result = process_skills(skills, include=[{"package": "pkg-a", "skills": ["skill1"]}])
        assert _ids(result.skills) == [("pkg-a", "skill1")]
        assert result.excluded_count == 3

    def test_exclude_package(self, skills):
        result = process_skills(skills, exclude=["pkg-b"])
        assert ("pkg-b", "skill3") not in _ids(result.skills)
        assert result.excluded_count == 1

    def test_exclude_specific_skill(self, skills):
        result = process_skills(skills, exclude=[{"package": "pkg-a", "skills": ["skill2"]}])
        assert _ids(result.skills) == [
            ("pkg-a", "skill1"), ("pkg-b", "skill3"), ("pkg-c", "skill4"),
        ]

    def test_include_then_exclude(self, skills):
        result = process_skills(
            skills,
            include=["pkg-a", "pkg-b"],
            exclude=[{"package": "pkg-a", "skills": ["skill1"]}],
        )
        assert _ids(result.skills) == [("pkg-a", "skill2"), ("pkg-b", "skill3")]
        assert result.excluded_count == 2

    def test_order_preserved(self, skills):
        result = process_skills(skills, include=["pkg-c", "pkg-a"])
        assert _ids(result.skills) == [
            ("pkg-a", "skill1"), ("pkg-a", "skill2"), ("pkg-c", "skill4"),
        ]

    def test_unknown_package_excludes_everything(self, skills):
        result = process_skills(skills, include=["missing"])
        assert result.skills == []
        assert result.excluded_count == 4
