"""
Integration tests running every analysis over the demo dataset
"""

import pytest

from workforce_planner.analysis.capability_enhancement_analyzer import CapabilityEnhancementAnalyzer
from workforce_planner.analysis.employment_analyzer import EmploymentAnalyzer
from workforce_planner.analysis.worker_reliance_analyzer import WorkerRelianceAnalyzer
from workforce_planner.model.results import CapabilityPriority, ReliancePriority


class TestDemoEmployment:
    """Employment analysis over the demo dataset"""

    @pytest.mark.integration
    def test_open_positions(self, demo_index):
        positions = EmploymentAnalyzer(demo_index).get_open_positions()

        assert [p.name for p in positions] == ["Junior Developer", "Senior Developer", "HR Manager"]

    @pytest.mark.integration
    def test_junior_developer_candidates(self, demo_index):
        result = EmploymentAnalyzer(demo_index).analyze_candidates(2)

        assert [c.employee.full_name for c in result.ranked_candidates] == ["John Doe", "Jane Smith"]
        assert all(c.total_score == 100.0 for c in result.ranked_candidates)
        assert result.external_option.total_cost == 53000

    @pytest.mark.integration
    def test_senior_developer_candidates(self, demo_index):
        result = EmploymentAnalyzer(demo_index).analyze_candidates(1)

        assert [c.employee.id for c in result.ranked_candidates] == [1]
        assert result.external_option.starting_salary == 100000


class TestDemoCapability:
    """Capability enhancement over the demo dataset"""

    @pytest.mark.integration
    def test_process_gaps(self, demo_index):
        result = CapabilityEnhancementAnalyzer(demo_index).analyze_capability_gaps()

        assert [(g.process.name, g.priority) for g in result.process_gaps] == [
            ("Code Review", CapabilityPriority.HIGH),
            ("Database Maintenance", CapabilityPriority.HIGH),
        ]
        assert [s.employee.first_name for s in result.process_gaps[0].quickest_fix_employees] == ["John"]

    @pytest.mark.integration
    def test_results_are_repeatable(self, demo_index):
        analyzer = CapabilityEnhancementAnalyzer(demo_index)

        first = analyzer.analyze_capability_gaps()
        second = analyzer.analyze_capability_gaps()

        assert first == second


class TestDemoReliance:
    """Worker reliance over the demo dataset"""

    @pytest.mark.integration
    def test_every_process_has_a_single_point_of_failure(self, demo_index):
        result = WorkerRelianceAnalyzer(demo_index).analyze_worker_reliance()

        assert [i.process.id for i in result.reliance_issues] == [1, 2, 3]
        assert all(i.priority == ReliancePriority.HIGH_RISK for i in result.reliance_issues)
        # Team Onboarding meets its target, so nobody is suggested
        assert result.reliance_issues[2].same_department_suggestions == []

    @pytest.mark.integration
    def test_code_review_suggestions(self, demo_index):
        issue = WorkerRelianceAnalyzer(demo_index).analyze_worker_reliance().reliance_issues[0]

        jane = issue.same_department_suggestions[0]
        assert jane.employee.full_name == "Jane Smith"
        assert [step.training_name for step in jane.training_path] == ["Advanced C# Workshop"]
        assert jane.training_path[0].meets_prerequisites is True

        alice = issue.cross_department_suggestions[0]
        assert alice.employee.full_name == "Alice Johnson"
        step = alice.training_path[0]
        assert step.meets_prerequisites is False
        assert step.missing_prerequisites == ["C# Programming (Level 2)", "Training: C# Fundamentals"]
