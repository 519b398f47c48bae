"""
Training Path Resolver
======================

Finds trainings that close a single skill gap, checks whether an employee can
enrol in a training today and turns the chosen trainings into numbered path
steps for display.

Prerequisite checks are shallow: only the training's direct prerequisite skills
and direct prerequisite trainings are inspected. Prerequisites of prerequisites
are never followed, so cyclic prerequisite data cannot cause a loop.
"""

from typing import List, Sequence, Tuple

from ..model.entities import Employee, Training
from ..model.results import SkillGapDetail, TrainingPathStep
from ..model.snapshot import SnapshotIndex
from ..utils.config import TRAININGS_PER_GAP_LIMIT


class TrainingPathResolver:
    """Resolve trainings and prerequisite status for skill gaps"""

    def __init__(self, index: SnapshotIndex):
        self.index = index

    def _teaches(self, training: Training, skill_id: int, target_level: int) -> bool:
        return any(
            ts.skill_id == skill_id and ts.target_level >= target_level
            for ts in self.index.training_skills(training.id)
        )

    def find_trainings_for_gap(
        self,
        skill_id: int,
        target_level: int,
        employee: Employee,
        fallback_to_company_wide: bool = False
    ) -> List[Training]:
        """
        Cheapest trainings teaching a skill up to at least the target level.

        Only non-cancelled trainings aimed at the employee's department are
        considered. With ``fallback_to_company_wide`` every department's
        trainings are searched when the employee's own department has none.

        Returns:
            Up to TRAININGS_PER_GAP_LIMIT trainings, cheapest first
        """
        candidates = [
            t for t in self.index.active_trainings()
            if self._teaches(t, skill_id, target_level)
        ]

        in_department = [t for t in candidates if t.target_department_id == employee.department_id]
        if in_department or not fallback_to_company_wide:
            chosen = in_department
        else:
            chosen = candidates

        chosen.sort(key=lambda t: (t.cost, t.id))
        return chosen[:TRAININGS_PER_GAP_LIMIT]

    def meets_prerequisites(self, employee: Employee, training: Training) -> bool:
        """True when every direct skill and training prerequisite is satisfied."""
        levels = self.index.skill_levels(employee.id)

        for prerequisite in self.index.prerequisite_skills(training.id):
            if levels.get(prerequisite.skill_id, 0) < prerequisite.minimum_level:
                return False

        for prerequisite in self.index.prerequisite_trainings(training.id):
            if not self.index.has_passed_training(employee.id, prerequisite.prerequisite_training_id):
                return False

        return True

    def missing_prerequisites(self, employee: Employee, training: Training) -> List[str]:
        """Human-readable list of unmet prerequisites, skills first."""
        levels = self.index.skill_levels(employee.id)
        missing = []

        for prerequisite in self.index.prerequisite_skills(training.id):
            if levels.get(prerequisite.skill_id, 0) < prerequisite.minimum_level:
                missing.append(
                    f"{self.index.skill_name(prerequisite.skill_id)} (Level {prerequisite.minimum_level})"
                )

        for prerequisite in self.index.prerequisite_trainings(training.id):
            if not self.index.has_passed_training(employee.id, prerequisite.prerequisite_training_id):
                missing.append(f"Training: {self.index.training_name(prerequisite.prerequisite_training_id)}")

        return missing

    def build_path_step(self, training: Training, employee: Employee, step_number: int) -> TrainingPathStep:
        meets = self.meets_prerequisites(employee, training)
        return TrainingPathStep(
            step_number=step_number,
            training=training,
            training_name=training.name,
            skills_it_teaches=[self.index.skill_name(ts.skill_id) for ts in self.index.training_skills(training.id)],
            meets_prerequisites=meets,
            missing_prerequisites=[] if meets else self.missing_prerequisites(employee, training)
        )

    def build_training_path(
        self,
        gaps: Sequence[SkillGapDetail],
        employee: Employee,
        fallback_to_company_wide: bool = False
    ) -> Tuple[List[TrainingPathStep], int]:
        """
        Collect path steps for every gap, each training listed once.

        Returns:
            Tuple of (steps numbered from 1, total duration hours of the distinct trainings)
        """
        steps: List[TrainingPathStep] = []
        seen = set()
        total_hours = 0

        for gap in gaps:
            for training in self.find_trainings_for_gap(
                gap.skill_id, gap.required_level, employee, fallback_to_company_wide
            ):
                if training.id in seen:
                    continue
                seen.add(training.id)
                steps.append(self.build_path_step(training, employee, len(steps) + 1))
                total_hours += training.duration_hours

        return steps, total_hours
