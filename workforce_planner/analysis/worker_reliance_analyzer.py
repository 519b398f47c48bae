"""
Worker Reliance Analysis
========================

Detects processes that depend on too few qualified workers:
- Critical: nobody can perform the process
- High risk: exactly one capable worker (single point of failure)
- Below target: two or more capable workers, still short of the aimed count

For processes short of their target, every active employee who is not yet
capable and is missing one or two required skills is suggested, split into
same-department and cross-department lists. Training lookup for these
employees falls back to company-wide trainings when their own department
offers none.
"""

from .employee_suggestions import SuggestionEvaluator
from .skill_matcher import SkillMatcher
from ..model.entities import Process
from ..model.results import ReliancePriority, WorkerRelianceIssue, WorkerRelianceResult
from ..model.snapshot import SnapshotIndex
from ..utils.config import (
    DEFAULT_TRAINING_COST_PER_LEVEL, RELIANCE_MAX_MISSING_SKILLS, SUGGESTION_LIMIT,
    validate_training_cost,
)
from ..utils.logger import get_logger, log_analysis_progress, log_function_entry, log_function_exit


def classify_reliance_priority(capable_workers: int, worker_gap: int) -> ReliancePriority:
    if capable_workers == 0:
        return ReliancePriority.CRITICAL
    if capable_workers == 1:
        return ReliancePriority.HIGH_RISK
    if worker_gap > 0:
        return ReliancePriority.BELOW_TARGET
    return ReliancePriority.OK


def gap_percentage(worker_gap: int, aimed_workers: int) -> float:
    if aimed_workers == 0:
        return 0.0
    return worker_gap / aimed_workers * 100


def _priority_reason(priority: ReliancePriority, worker_gap: int, percentage: float) -> str:
    if priority == ReliancePriority.CRITICAL:
        return "CRITICAL: No capable workers"
    if priority == ReliancePriority.HIGH_RISK:
        return "HIGH RISK: Only 1 capable worker (single point of failure)"
    if priority == ReliancePriority.BELOW_TARGET:
        return f"BELOW TARGET: Gap of {worker_gap} workers ({percentage:.1f}%)"
    return "OK: Meets or exceeds target"


def _suggestion_order(suggestion):
    return (
        -suggestion.match_percentage,
        suggestion.missing_skills_count,
        suggestion.estimated_training_cost,
        suggestion.employee.id,
    )


class WorkerRelianceAnalyzer:
    """Concentration risk of qualified workers per process"""

    def __init__(self, index: SnapshotIndex):
        self.logger = get_logger(__name__)
        self.index = index
        self.matcher = SkillMatcher(index)
        self.evaluator = SuggestionEvaluator(index, fallback_to_company_wide=True)

    def analyze_worker_reliance(
        self,
        training_cost_per_level: float = DEFAULT_TRAINING_COST_PER_LEVEL
    ) -> WorkerRelianceResult:
        """
        Analyze every process and return those with reliance issues.

        Issues are ordered by priority, then gap percentage (largest first),
        then process id.

        Raises:
            ConfigurationError: If the training cost is invalid
        """
        log_function_entry(self.logger, "analyze_worker_reliance", training_cost_per_level=training_cost_per_level)
        cost_per_level = validate_training_cost(training_cost_per_level)

        result = WorkerRelianceResult(training_cost_per_level=cost_per_level)
        for process in self.index.snapshot.processes:
            issue = self._analyze_process(process, cost_per_level)
            if issue.priority != ReliancePriority.OK:
                result.reliance_issues.append(issue)

        result.reliance_issues.sort(key=lambda i: (i.priority, -i.gap_percentage, i.process.id))

        counts = result.counts_by_priority
        log_analysis_progress(
            self.logger, "Reliance",
            f"{len(result.reliance_issues)} processes at risk "
            f"(critical={counts[ReliancePriority.CRITICAL]}, high_risk={counts[ReliancePriority.HIGH_RISK]}, "
            f"below_target={counts[ReliancePriority.BELOW_TARGET]})"
        )
        log_function_exit(self.logger, "analyze_worker_reliance")
        return result

    def _analyze_process(self, process: Process, cost_per_level: float) -> WorkerRelianceIssue:
        requirements = self.index.process_requirements(process.id)
        capable_employees = self.matcher.find_capable_employees(requirements)
        capable = len(capable_employees)
        worker_gap = process.aimed_workers - capable
        percentage = gap_percentage(worker_gap, process.aimed_workers)
        priority = classify_reliance_priority(capable, worker_gap)

        issue = WorkerRelianceIssue(
            process=process,
            priority=priority,
            priority_reason=_priority_reason(priority, worker_gap, percentage),
            capable_workers=capable,
            aimed_workers=process.aimed_workers,
            worker_gap=worker_gap,
            gap_percentage=percentage,
            current_capable_employees=capable_employees,
            assigned_position_names=[p.name for p in self.index.assigned_positions(process.id)]
        )

        if worker_gap > 0:
            self._suggest_employees(process, requirements, issue, cost_per_level)
        return issue

    def _suggest_employees(self, process: Process, requirements, issue: WorkerRelianceIssue, cost_per_level: float):
        department_ids = self.index.assigned_department_ids(process.id)
        capable_ids = {e.id for e in issue.current_capable_employees}

        same_department, cross_department = [], []
        for employee in self.index.active_employees():
            if employee.id in capable_ids:
                continue
            suggestion = self.evaluator.evaluate(employee, requirements, department_ids, cost_per_level)
            if not 0 < suggestion.missing_skills_count <= RELIANCE_MAX_MISSING_SKILLS:
                continue
            if suggestion.is_same_department:
                same_department.append(suggestion)
            else:
                cross_department.append(suggestion)

        issue.same_department_suggestions = sorted(same_department, key=_suggestion_order)[:SUGGESTION_LIMIT]
        issue.cross_department_suggestions = sorted(cross_department, key=_suggestion_order)[:SUGGESTION_LIMIT]
