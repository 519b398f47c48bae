"""
Employee suggestion builder shared by the capability and reliance analyses.
"""

from typing import Sequence

from .skill_matcher import SkillMatcher
from .training_path_resolver import TrainingPathResolver
from ..model.entities import Employee, SkillRequirement
from ..model.results import EmployeeSuggestion
from ..model.snapshot import SnapshotIndex


class SuggestionEvaluator:
    """Evaluate how far an employee is from performing a process"""

    def __init__(self, index: SnapshotIndex, fallback_to_company_wide: bool = False):
        self.index = index
        self.matcher = SkillMatcher(index)
        self.resolver = TrainingPathResolver(index)
        self.fallback_to_company_wide = fallback_to_company_wide

    def evaluate(
        self,
        employee: Employee,
        requirements: Sequence[SkillRequirement],
        target_department_ids: Sequence[int],
        training_cost_per_level: float
    ) -> EmployeeSuggestion:
        match = self.matcher.evaluate_employee(employee, requirements, training_cost_per_level)
        path, hours = self.resolver.build_training_path(match.gaps, employee, self.fallback_to_company_wide)

        return EmployeeSuggestion(
            employee=employee,
            current_position_name=self.index.position_name(employee.position_id),
            department_name=self.index.department_name(employee.department_id),
            matching_skills_count=match.matching_count,
            missing_skills_count=match.missing_count,
            match_percentage=match.match_percentage,
            estimated_training_cost=match.estimated_cost,
            estimated_training_duration=hours,
            is_same_department=employee.department_id in target_department_ids,
            skill_gaps=match.gaps,
            training_path=path
        )
