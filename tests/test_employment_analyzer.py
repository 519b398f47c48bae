"""
Unit tests for internal candidate ranking and open positions
"""

import pytest

from workforce_planner.analysis.employment_analyzer import EmploymentAnalyzer, calculate_weighted_score
from workforce_planner.model.entities import Position, PositionRequiredSkill
from workforce_planner.utils.exceptions import ConfigurationError, EntityNotFoundError


@pytest.fixture
def requirements(position):
    return [
        PositionRequiredSkill(position.id, 1, 4),
        PositionRequiredSkill(position.id, 2, 3),
        PositionRequiredSkill(position.id, 3, 2),
        PositionRequiredSkill(position.id, 4, 2),
    ]


class TestWeightedScore:
    """Test suite for calculate_weighted_score"""

    @pytest.mark.unit
    def test_perfect_candidate_scores_100(self):
        assert calculate_weighted_score(100.0, 0.0, 0.0, 3, 5000) == 100.0

    @pytest.mark.unit
    def test_known_composition(self):
        # match 75, avg gap 2 -> proximity 60, cost 10000 of 100000 -> cost score 90
        score = calculate_weighted_score(75.0, 2.0, 10000.0, 4, 5000)
        assert score == round(75 * 0.6 + 60 * 0.25 + 90 * 0.15, 2)

    @pytest.mark.unit
    def test_zero_cost_per_level_scores_full_cost(self):
        assert calculate_weighted_score(50.0, 1.0, 0.0, 2, 0) == round(50 * 0.6 + 80 * 0.25 + 100 * 0.15, 2)

    @pytest.mark.unit
    def test_sub_scores_are_clamped_at_zero(self):
        # average gap above 5 and cost above the worst case cannot go negative
        assert calculate_weighted_score(0.0, 6.0, 1_000_000.0, 1, 1000) == 0.0

    @pytest.mark.unit
    def test_monotonic_in_match_percentage(self):
        scores = [calculate_weighted_score(m, 1.5, 7500.0, 4, 5000) for m in range(0, 101, 5)]
        assert scores == sorted(scores)


class TestAnalyzeCandidates:
    """Test suite for EmploymentAnalyzer.analyze_candidates"""

    @pytest.mark.unit
    def test_unknown_position_raises(self, make_index):
        analyzer = EmploymentAnalyzer(make_index())

        with pytest.raises(EntityNotFoundError) as exc_info:
            analyzer.analyze_candidates(404)

        assert exc_info.value.error_code == "NOT_FOUND"
        assert exc_info.value.entity_id == 404

    @pytest.mark.unit
    def test_position_without_requirements_returns_empty(self, make_index, employee_factory, position):
        index = make_index(positions=[position], employees=[employee_factory(1)])

        result = EmploymentAnalyzer(index).analyze_candidates(position.id)

        assert result.has_requirements is False
        assert result.ranked_candidates == []
        assert result.external_option is None

    @pytest.mark.unit
    def test_negative_cost_rejected(self, make_index, position):
        with pytest.raises(ConfigurationError):
            EmploymentAnalyzer(make_index(positions=[position])).analyze_candidates(position.id, -1)

    @pytest.mark.unit
    def test_candidates_below_threshold_are_discarded(
        self, make_index, employee_factory, levels, position, requirements
    ):
        employees = [employee_factory(i) for i in (1, 2, 3)]
        index = make_index(
            positions=[position],
            employees=employees,
            position_required_skills=requirements,
            employee_skills=levels({
                1: {1: 4, 2: 3, 3: 2, 4: 2},   # 100%
                2: {1: 4, 2: 3, 3: 2},         # 75%
                3: {1: 5, 2: 5},               # 50%
            })
        )

        result = EmploymentAnalyzer(index).analyze_candidates(position.id)

        assert [c.employee.id for c in result.ranked_candidates] == [1, 2]
        assert all(c.match_percentage >= 70 for c in result.ranked_candidates)

    @pytest.mark.unit
    def test_inactive_employees_are_ignored(self, make_index, employee_factory, levels, position, requirements):
        index = make_index(
            positions=[position],
            employees=[employee_factory(1, active=False)],
            position_required_skills=requirements,
            employee_skills=levels({1: {1: 5, 2: 5, 3: 5, 4: 5}})
        )

        assert EmploymentAnalyzer(index).analyze_candidates(position.id).ranked_candidates == []

    @pytest.mark.unit
    def test_candidate_detail(self, make_index, employee_factory, levels, position, requirements):
        index = make_index(
            positions=[position],
            employees=[employee_factory(1, position_id=99, salary=42000)],
            position_required_skills=requirements,
            employee_skills=levels({1: {1: 2, 2: 3, 3: 2, 4: 2}})
        )

        candidate = EmploymentAnalyzer(index).analyze_candidates(position.id, 1000).ranked_candidates[0]

        assert candidate.match_percentage == 75.0
        assert candidate.current_position_name == "Unknown"
        assert candidate.average_skill_gap == 2.0
        assert candidate.estimated_training_cost == 2000.0
        assert candidate.total_cost_if_promoted == 44000.0
        assert candidate.required_skills_count == 4
        assert len(candidate.matching_skills) == 4
        # match 75, proximity 60, cost (1 - 2000/20000) -> 90
        assert candidate.total_score == round(75 * 0.6 + 60 * 0.25 + 90 * 0.15, 2)

    @pytest.mark.unit
    def test_top_five_with_id_tie_break(self, make_index, employee_factory, levels, position, requirements):
        employees = [employee_factory(i) for i in (7, 3, 9, 1, 5, 2)]
        full = {1: 4, 2: 3, 3: 2, 4: 2}
        index = make_index(
            positions=[position],
            employees=employees,
            position_required_skills=requirements,
            employee_skills=levels({e.id: full for e in employees})
        )

        result = EmploymentAnalyzer(index).analyze_candidates(position.id)

        assert [c.employee.id for c in result.ranked_candidates] == [1, 2, 3, 5, 7]

    @pytest.mark.unit
    def test_external_option(self, make_index, employee_factory, levels, position, requirements):
        index = make_index(
            positions=[position],
            employees=[employee_factory(1)],
            position_required_skills=requirements,
        )

        external = EmploymentAnalyzer(index).analyze_candidates(position.id).external_option

        assert external.position_name == "Data Engineer"
        assert external.starting_salary == 70000
        assert external.total_cost == 75000

    @pytest.mark.unit
    def test_repeated_runs_are_identical(self, make_index, employee_factory, levels, position, requirements):
        employees = [employee_factory(i) for i in range(1, 8)]
        index = make_index(
            positions=[position],
            employees=employees,
            position_required_skills=requirements,
            employee_skills=levels({e.id: {1: 1 + e.id % 4, 2: 3, 3: 2, 4: e.id % 3 + 1} for e in employees})
        )
        analyzer = EmploymentAnalyzer(index)

        first = analyzer.analyze_candidates(position.id)
        second = analyzer.analyze_candidates(position.id)

        assert [(c.employee.id, c.total_score) for c in first.ranked_candidates] == \
            [(c.employee.id, c.total_score) for c in second.ranked_candidates]


class TestOpenPositions:
    """Test suite for EmploymentAnalyzer.get_open_positions"""

    @pytest.fixture
    def index(self, make_index, employee_factory):
        positions = [
            Position(1, "Analyst", department_id=1, capacity=2, level=1),
            Position(2, "Lead", department_id=1, capacity=4, level=3),
            Position(3, "Operator", department_id=2, capacity=4, level=2),
            Position(4, "Manager", department_id=2, capacity=1, level=4),
        ]
        employees = [
            employee_factory(1, position_id=1),
            employee_factory(2, position_id=2),
            employee_factory(3, position_id=3, active=False),
            employee_factory(4, position_id=4),
        ]
        return make_index(positions=positions, employees=employees)

    @pytest.mark.unit
    def test_ordered_by_open_slots(self, index):
        # Lead and Operator both have 3 open slots; terminated staff still occupy a slot
        assert [p.id for p in EmploymentAnalyzer(index).get_open_positions()] == [2, 3, 1]

    @pytest.mark.unit
    def test_filter_by_department(self, index):
        assert [p.id for p in EmploymentAnalyzer(index).get_open_positions(department_id=2)] == [3]

    @pytest.mark.unit
    def test_filter_by_level(self, index):
        assert [p.id for p in EmploymentAnalyzer(index).get_open_positions(min_level=2, max_level=4)] == [2, 3]
