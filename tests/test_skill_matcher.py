"""
Unit tests for the skill match primitive
"""

import pytest

from workforce_planner.analysis.skill_matcher import SkillMatcher
from workforce_planner.model.entities import SkillRequirement


class TestEvaluate:
    """Test suite for SkillMatcher.evaluate"""

    @pytest.mark.unit
    def test_partial_match_scenario(self, make_index):
        """A=4 required 4, B=1 required 3 gives 50% with one non-missing gap."""
        matcher = SkillMatcher(make_index())
        requirements = [SkillRequirement(1, 4), SkillRequirement(2, 3)]

        result = matcher.evaluate({1: 4, 2: 1}, requirements, 5000)

        assert result.match_percentage == 50.0
        assert result.matching_count == 1
        assert result.total_required == 2
        assert len(result.gaps) == 1
        gap = result.gaps[0]
        assert gap.skill_id == 2
        assert gap.gap_amount == 2
        assert gap.is_missing is False
        assert gap.current_level == 1
        assert result.estimated_cost == 2 * 5000

    @pytest.mark.unit
    def test_missing_skill_gap_is_full_required_level(self, make_index):
        matcher = SkillMatcher(make_index())

        result = matcher.evaluate({}, [SkillRequirement(3, 4)], 1000)

        gap = result.gaps[0]
        assert gap.is_missing is True
        assert gap.current_level is None
        assert gap.gap_amount == 4
        assert result.estimated_cost == 4000

    @pytest.mark.unit
    @pytest.mark.parametrize("held,expected", [(0, 0.0), (1, 25.0), (3, 75.0), (4, 100.0)])
    def test_match_percentage_is_matching_over_required(self, make_index, held, expected):
        matcher = SkillMatcher(make_index())
        requirements = [SkillRequirement(skill_id, 2) for skill_id in (1, 2, 3, 4)]
        profile = {skill_id: 3 for skill_id in (1, 2, 3, 4)[:held]}

        result = matcher.evaluate(profile, requirements)

        assert result.match_percentage == expected
        assert result.missing_count == 4 - held

    @pytest.mark.unit
    def test_empty_requirements_report_full_match(self, make_index):
        matcher = SkillMatcher(make_index())

        result = matcher.evaluate({1: 5}, [])

        assert result.match_percentage == 100.0
        assert result.gaps == []
        assert result.estimated_cost == 0

    @pytest.mark.unit
    def test_gaps_follow_requirement_order(self, make_index):
        matcher = SkillMatcher(make_index())
        requirements = [SkillRequirement(4, 2), SkillRequirement(1, 3), SkillRequirement(2, 1)]

        result = matcher.evaluate({2: 1}, requirements)

        assert [g.skill_id for g in result.gaps] == [4, 1]

    @pytest.mark.unit
    def test_unknown_skill_is_labelled(self, make_index):
        matcher = SkillMatcher(make_index())

        result = matcher.evaluate({}, [SkillRequirement(99, 2)])

        assert result.gaps[0].skill_name == "Unknown"

    @pytest.mark.unit
    def test_held_skills_list_every_held_requirement(self, make_index):
        matcher = SkillMatcher(make_index())
        requirements = [SkillRequirement(1, 3), SkillRequirement(2, 3), SkillRequirement(3, 1)]

        result = matcher.evaluate({1: 4, 2: 2}, requirements)

        assert [(h.skill_id, h.meets_requirement) for h in result.held_skills] == [(1, True), (2, False)]

    @pytest.mark.unit
    def test_average_gap_only_counts_gapped_skills(self, make_index):
        matcher = SkillMatcher(make_index())
        requirements = [SkillRequirement(1, 5), SkillRequirement(2, 3), SkillRequirement(3, 2)]

        result = matcher.evaluate({1: 5, 2: 2}, requirements)

        # gaps: SQL 1, Leadership 2 (missing)
        assert result.average_gap == 1.5


class TestCapability:
    """Test suite for the all-requirements-met check"""

    @pytest.mark.unit
    def test_empty_requirements_are_never_capable(self):
        assert SkillMatcher.is_capable({1: 5}, []) is False

    @pytest.mark.unit
    def test_level_equal_to_required_is_capable(self):
        assert SkillMatcher.is_capable({1: 3}, [SkillRequirement(1, 3)]) is True
        assert SkillMatcher.is_capable({1: 2}, [SkillRequirement(1, 3)]) is False

    @pytest.mark.unit
    def test_find_capable_employees_skips_inactive(self, make_index, employee_factory, levels):
        employees = [employee_factory(1), employee_factory(2, active=False), employee_factory(3)]
        index = make_index(
            employees=employees,
            employee_skills=levels({1: {1: 4}, 2: {1: 5}, 3: {1: 2}})
        )

        capable = SkillMatcher(index).find_capable_employees([SkillRequirement(1, 3)])

        assert [e.id for e in capable] == [1]
