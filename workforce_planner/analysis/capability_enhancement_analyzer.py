"""
Capability Enhancement Analysis
===============================

Checks every operational process for staffing adequacy and proposes
remediation when too few active employees can perform it:
- Priority classification (Critical / High / Medium)
- Coverage statistics per required skill
- Trainings teaching the process's required skills
- "Quickest fix" and "cheapest fix" employees from the assigned departments

Training lookup for suggested employees stays inside the employee's own
department.
"""

from typing import List

from .employee_suggestions import SuggestionEvaluator
from .skill_matcher import SkillMatcher
from .training_path_resolver import TrainingPathResolver
from ..model.entities import Process, SkillRequirement
from ..model.results import (
    CapabilityEnhancementResult, CapabilityPriority, MissingSkillSummary,
    ProcessCapabilityGap, TrainingSuggestion,
)
from ..model.snapshot import SnapshotIndex
from ..utils.config import (
    CAPABILITY_MIN_MATCH_PERCENTAGE, DEFAULT_TRAINING_COST_PER_LEVEL, SUGGESTION_LIMIT,
    validate_training_cost,
)
from ..utils.exceptions import EntityNotFoundError
from ..utils.logger import get_logger, log_analysis_progress, log_function_entry, log_function_exit


def classify_capability_priority(capable_workers: int, worker_gap: int, assigned_positions: int) -> CapabilityPriority:
    if capable_workers == 0:
        return CapabilityPriority.CRITICAL
    if assigned_positions > 0 and worker_gap > 0:
        return CapabilityPriority.HIGH
    if worker_gap > 0:
        return CapabilityPriority.MEDIUM
    return CapabilityPriority.OK


def _priority_reason(priority: CapabilityPriority, worker_gap: int) -> str:
    if priority == CapabilityPriority.CRITICAL:
        return "CRITICAL: No capable workers - process cannot be performed"
    if priority == CapabilityPriority.HIGH:
        return "HIGH: Process assigned to positions but has worker gap"
    if priority == CapabilityPriority.MEDIUM:
        return f"MEDIUM: Below target by {worker_gap} workers"
    return "OK: Meets or exceeds target"


class CapabilityEnhancementAnalyzer:
    """Process staffing gaps and their remediation options"""

    def __init__(self, index: SnapshotIndex):
        self.logger = get_logger(__name__)
        self.index = index
        self.matcher = SkillMatcher(index)
        self.resolver = TrainingPathResolver(index)
        self.evaluator = SuggestionEvaluator(index, fallback_to_company_wide=False)

    def analyze_capability_gaps(
        self,
        training_cost_per_level: float = DEFAULT_TRAINING_COST_PER_LEVEL
    ) -> CapabilityEnhancementResult:
        """
        Analyze every process and return the ones needing attention.

        Processes classified OK are left out. The rest are ordered by priority,
        then by worker gap (largest first), then by process id.

        Raises:
            ConfigurationError: If the training cost is invalid
        """
        log_function_entry(self.logger, "analyze_capability_gaps", training_cost_per_level=training_cost_per_level)
        cost_per_level = validate_training_cost(training_cost_per_level)

        result = CapabilityEnhancementResult(training_cost_per_level=cost_per_level)

        for process in self.index.snapshot.processes:
            gap = self._analyze_process(process, cost_per_level)
            if gap is not None:
                result.process_gaps.append(gap)

        result.process_gaps.sort(key=lambda g: (g.priority, -g.worker_gap, g.process.id))

        counts = result.counts_by_priority
        log_analysis_progress(
            self.logger, "Capability",
            f"{len(result.process_gaps)} of {len(self.index.snapshot.processes)} processes need attention "
            f"(critical={counts[CapabilityPriority.CRITICAL]}, high={counts[CapabilityPriority.HIGH]}, "
            f"medium={counts[CapabilityPriority.MEDIUM]})"
        )
        log_function_exit(self.logger, "analyze_capability_gaps")
        return result

    def _analyze_process(self, process: Process, cost_per_level: float):
        requirements = self.index.process_requirements(process.id)
        if not requirements:
            self.logger.warning(f"Process '{process.name}' has no required skills; counted as 0 capable workers")

        capable = len(self.matcher.find_capable_employees(requirements))
        worker_gap = process.aimed_workers - capable
        assigned_positions = self.index.assigned_positions(process.id)

        priority = classify_capability_priority(capable, worker_gap, len(assigned_positions))
        if priority == CapabilityPriority.OK:
            return None

        gap = ProcessCapabilityGap(
            process=process,
            priority=priority,
            priority_reason=_priority_reason(priority, worker_gap),
            capable_workers=capable,
            aimed_workers=process.aimed_workers,
            worker_gap=worker_gap,
            assigned_position_names=[p.name for p in assigned_positions],
            missing_skills=self.summarize_missing_skills(requirements),
            suggested_trainings=self.suggest_trainings(requirements)
        )
        self._suggest_employees(process, requirements, gap, cost_per_level)
        return gap

    def summarize_missing_skills(self, requirements: List[SkillRequirement]) -> List[MissingSkillSummary]:
        """Coverage of each required skill among active employees."""
        active = self.index.active_employees()
        summaries = []
        for requirement in requirements:
            levels = [self.index.skill_levels(e.id).get(requirement.skill_id) for e in active]
            held = [level for level in levels if level is not None]
            summaries.append(MissingSkillSummary(
                skill_id=requirement.skill_id,
                skill_name=self.index.skill_name(requirement.skill_id),
                required_level=requirement.required_level,
                employees_with_skill=len(held),
                employees_at_required_level=sum(1 for level in held if level >= requirement.required_level)
            ))
        return summaries

    def suggest_trainings(self, requirements: List[SkillRequirement]) -> List[TrainingSuggestion]:
        """Non-cancelled trainings teaching any required skill, widest coverage first."""
        required_ids = {r.skill_id for r in requirements}
        suggestions = []

        for training in self.index.active_trainings():
            addressed = [
                ts.skill_id for ts in self.index.training_skills(training.id)
                if ts.skill_id in required_ids
            ]
            if not addressed:
                continue
            suggestions.append(TrainingSuggestion(
                training=training,
                target_department_name=self.index.department_name(training.target_department_id),
                skills_it_addresses=addressed,
                eligible_employees_count=self.count_eligible_employees(training)
            ))

        suggestions.sort(key=lambda s: (-len(s.skills_it_addresses), s.training.id))
        return suggestions

    def count_eligible_employees(self, training) -> int:
        """Active employees of the training's department meeting its prerequisites."""
        return sum(
            1 for employee in self.index.active_employees()
            if employee.department_id == training.target_department_id
            and self.resolver.meets_prerequisites(employee, training)
        )

    def _suggest_employees(self, process: Process, requirements, gap: ProcessCapabilityGap, cost_per_level: float):
        # Without requirements nobody can be measured against the process
        if not requirements:
            return

        department_ids = self.index.assigned_department_ids(process.id)
        suggestions = []
        for employee in self.index.active_employees():
            if employee.department_id not in department_ids:
                continue
            suggestion = self.evaluator.evaluate(employee, requirements, department_ids, cost_per_level)
            if suggestion.match_percentage >= CAPABILITY_MIN_MATCH_PERCENTAGE:
                suggestions.append(suggestion)

        gap.quickest_fix_employees = sorted(
            suggestions,
            key=lambda s: (-s.match_percentage, s.missing_skills_count, s.employee.id)
        )[:SUGGESTION_LIMIT]
        gap.cheapest_fix_employees = sorted(
            suggestions,
            key=lambda s: (s.estimated_training_cost, -s.match_percentage, s.employee.id)
        )[:SUGGESTION_LIMIT]

    def find_unmet_processes(self, position_id: int) -> List[Process]:
        """
        Processes assigned to a position that none of its active employees can perform.

        Raises:
            EntityNotFoundError: If the position id is not in the snapshot
        """
        if position_id not in self.index.positions_by_id:
            raise EntityNotFoundError(
                f"Position {position_id} not found",
                entity_type="Position",
                entity_id=position_id
            )

        staff = [e for e in self.index.position_employees(position_id) if e.is_active]
        unmet = []
        for process in self.index.processes_for_position(position_id):
            requirements = self.index.process_requirements(process.id)
            if not self.matcher.find_capable_employees(requirements, staff):
                unmet.append(process)

        self.logger.info(f"Position {position_id}: {len(unmet)} unmet processes")
        return unmet
