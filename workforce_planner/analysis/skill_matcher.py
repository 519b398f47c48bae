"""
Skill Match Primitive
=====================

Compares one employee's skill profile against a requirement list and reports
per-skill gaps, the aggregate match percentage and the estimated cost of
closing the gaps. Every analyzer is built on top of this comparison.

An employee meets a requirement when they hold the skill at a level greater
than or equal to the required level. A skill the employee does not hold at all
is a gap of the full required level and is flagged as missing.

An empty requirement list is reported as a 100% match here, whereas
``is_capable`` treats it as "not capable". Both conventions are relied upon by
the analyzers.
"""

from typing import Iterable, List, Mapping, Optional, Sequence

from ..model.entities import Employee, SkillRequirement
from ..model.results import MatchResult, SkillGapDetail, SkillMatchDetail
from ..model.snapshot import SnapshotIndex


class SkillMatcher:
    """Evaluate skill profiles against requirement sets"""

    def __init__(self, index: SnapshotIndex):
        self.index = index

    def evaluate(
        self,
        employee_skills: Mapping[int, int],
        requirements: Sequence[SkillRequirement],
        training_cost_per_level: float = 0.0
    ) -> MatchResult:
        """
        Match a skill profile against a list of requirements.

        Args:
            employee_skills: Mapping of skill id to the employee's current level
            requirements: Required (skill id, level) pairs, evaluated in order
            training_cost_per_level: Cost charged per missing level

        Returns:
            MatchResult with gaps listed in requirement order
        """
        matching = 0
        gaps: List[SkillGapDetail] = []
        held: List[SkillMatchDetail] = []

        for requirement in requirements:
            current = employee_skills.get(requirement.skill_id)
            skill_name = self.index.skill_name(requirement.skill_id)

            if current is not None:
                held.append(SkillMatchDetail(
                    skill_id=requirement.skill_id,
                    skill_name=skill_name,
                    required_level=requirement.required_level,
                    current_level=current,
                    meets_requirement=current >= requirement.required_level
                ))

            if current is not None and current >= requirement.required_level:
                matching += 1
                continue

            gap_amount = requirement.required_level - (current or 0)
            gaps.append(SkillGapDetail(
                skill_id=requirement.skill_id,
                skill_name=skill_name,
                required_level=requirement.required_level,
                current_level=current,
                gap_amount=gap_amount,
                is_missing=current is None
            ))

        total = len(requirements)
        match_percentage = 100.0 if total == 0 else matching / total * 100

        return MatchResult(
            matching_count=matching,
            total_required=total,
            match_percentage=match_percentage,
            gaps=gaps,
            held_skills=held,
            estimated_cost=sum(g.gap_amount for g in gaps) * training_cost_per_level
        )

    def evaluate_employee(
        self,
        employee: Employee,
        requirements: Sequence[SkillRequirement],
        training_cost_per_level: float = 0.0
    ) -> MatchResult:
        return self.evaluate(self.index.skill_levels(employee.id), requirements, training_cost_per_level)

    @staticmethod
    def is_capable(employee_skills: Mapping[int, int], requirements: Sequence[SkillRequirement]) -> bool:
        """True when every requirement is met; never true for an empty requirement list."""
        if not requirements:
            return False
        return all(
            employee_skills.get(r.skill_id, 0) >= r.required_level
            for r in requirements
        )

    def find_capable_employees(
        self,
        requirements: Sequence[SkillRequirement],
        employees: Optional[Iterable[Employee]] = None
    ) -> List[Employee]:
        """Active employees (or the given subset of them) meeting every requirement."""
        if employees is None:
            employees = self.index.active_employees()

        return [
            employee for employee in employees
            if employee.is_active and self.is_capable(self.index.skill_levels(employee.id), requirements)
        ]
