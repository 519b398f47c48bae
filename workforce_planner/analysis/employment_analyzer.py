"""
Employment Analysis
===================

Ranks internal employees as substitutes for external hiring on an open
position and computes the external-hire baseline for comparison.

Candidates are scored on three sub-scores (each 0-100):
- Matching skills: the match percentage
- Level proximity: how close the employee is on the skills they fall short on
- Cost: training cost relative to the worst case (every skill missing at Expert)
"""

from typing import List, Optional

import numpy as np

from .skill_matcher import SkillMatcher
from ..model.entities import Employee, Position
from ..model.results import EmploymentAnalysisResult, ExternalHiringOption, InternalCandidate
from ..model.snapshot import SnapshotIndex
from ..utils.config import (
    COST_WEIGHT, DEFAULT_TRAINING_COST_PER_LEVEL, EMPLOYMENT_MIN_MATCH_PERCENTAGE,
    LEVEL_PROXIMITY_WEIGHT, MATCHING_SKILLS_WEIGHT, MAX_LEVEL_GAP, TOP_CANDIDATES_LIMIT,
    validate_training_cost,
)
from ..utils.exceptions import EntityNotFoundError
from ..utils.logger import get_logger, log_function_entry, log_function_exit


def calculate_weighted_score(
    match_percentage: float,
    average_gap: float,
    training_cost: float,
    required_skills_count: int,
    training_cost_per_level: float
) -> float:
    """
    Combine the three sub-scores into a total, rounded to 2 decimals.

    A zero average gap or a zero worst-case cost scores the full 100 on the
    corresponding sub-score.
    """
    proximity_score = 100.0 if average_gap == 0 else (1 - average_gap / MAX_LEVEL_GAP) * 100
    proximity_score = float(np.clip(proximity_score, 0, None))

    max_possible_cost = required_skills_count * MAX_LEVEL_GAP * training_cost_per_level
    cost_score = 100.0 if max_possible_cost == 0 else (1 - training_cost / max_possible_cost) * 100
    cost_score = float(np.clip(cost_score, 0, None))

    total = (
        match_percentage * MATCHING_SKILLS_WEIGHT
        + proximity_score * LEVEL_PROXIMITY_WEIGHT
        + cost_score * COST_WEIGHT
    )
    return round(total, 2)


class EmploymentAnalyzer:
    """Internal candidate ranking for open positions"""

    def __init__(self, index: SnapshotIndex):
        self.logger = get_logger(__name__)
        self.index = index
        self.matcher = SkillMatcher(index)

    def analyze_candidates(
        self,
        position_id: int,
        training_cost_per_level: float = DEFAULT_TRAINING_COST_PER_LEVEL
    ) -> EmploymentAnalysisResult:
        """
        Rank active employees for a position and compute the external baseline.

        Args:
            position_id: Position to fill
            training_cost_per_level: Cost charged per missing skill level

        Returns:
            EmploymentAnalysisResult; when the position has no required skills
            the candidate list is empty and no external option is attached

        Raises:
            EntityNotFoundError: If the position id is not in the snapshot
            ConfigurationError: If the training cost is invalid
        """
        log_function_entry(self.logger, "analyze_candidates",
                           position_id=position_id, training_cost_per_level=training_cost_per_level)
        cost_per_level = validate_training_cost(training_cost_per_level)

        position = self.index.positions_by_id.get(position_id)
        if position is None:
            raise EntityNotFoundError(
                f"Position {position_id} not found",
                entity_type="Position",
                entity_id=position_id
            )

        requirements = self.index.position_requirements(position_id)
        result = EmploymentAnalysisResult(
            position=position,
            training_cost_per_level=cost_per_level,
            required_skills_count=len(requirements)
        )

        if not requirements:
            self.logger.warning(f"Position '{position.name}' has no required skills defined")
            return result

        candidates = []
        for employee in self.index.active_employees():
            candidate = self._evaluate_candidate(employee, requirements, cost_per_level)
            if candidate.match_percentage >= EMPLOYMENT_MIN_MATCH_PERCENTAGE:
                candidates.append(candidate)

        candidates.sort(key=lambda c: (-c.total_score, c.employee.id))
        result.ranked_candidates = candidates[:TOP_CANDIDATES_LIMIT]
        result.external_option = self.calculate_external_option(position)

        self.logger.info(
            f"Position '{position.name}': {len(candidates)} candidates above "
            f"{EMPLOYMENT_MIN_MATCH_PERCENTAGE:.0f}% match, returning {len(result.ranked_candidates)}"
        )
        log_function_exit(self.logger, "analyze_candidates")
        return result

    def _evaluate_candidate(self, employee: Employee, requirements, cost_per_level: float) -> InternalCandidate:
        match = self.matcher.evaluate_employee(employee, requirements, cost_per_level)

        return InternalCandidate(
            employee=employee,
            current_position_name=self.index.position_name(employee.position_id),
            current_salary=employee.current_salary,
            match_percentage=match.match_percentage,
            total_score=calculate_weighted_score(
                match.match_percentage,
                match.average_gap,
                match.estimated_cost,
                match.total_required,
                cost_per_level
            ),
            matching_skills_count=match.matching_count,
            required_skills_count=match.total_required,
            average_skill_gap=match.average_gap,
            estimated_training_cost=match.estimated_cost,
            skill_gaps=match.gaps,
            matching_skills=match.held_skills
        )

    @staticmethod
    def calculate_external_option(position: Position) -> ExternalHiringOption:
        # Starting salary is the midpoint of the salary range
        starting_salary = (position.min_salary + position.max_salary) / 2
        return ExternalHiringOption(
            position_name=position.name,
            hiring_cost=position.hiring_cost,
            starting_salary=starting_salary,
            total_cost=position.hiring_cost + starting_salary
        )

    def get_open_positions(
        self,
        department_id: Optional[int] = None,
        min_level: Optional[int] = None,
        max_level: Optional[int] = None
    ) -> List[Position]:
        """Positions with open slots, most open slots first, optionally filtered."""
        positions = []
        for position in self.index.snapshot.positions:
            if department_id is not None and position.department_id != department_id:
                continue
            if min_level is not None and position.level < min_level:
                continue
            if max_level is not None and position.level > max_level:
                continue
            if self.index.open_slots(position) > 0:
                positions.append(position)

        positions.sort(key=lambda p: (-self.index.open_slots(p), p.id))
        return positions
