"""
Result records returned by the analysis engines.

These are plain containers: the engines fill them, callers read or export them.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from .entities import Employee, Position, Process, Training


class CapabilityPriority(IntEnum):
    CRITICAL = 1
    HIGH = 2
    MEDIUM = 3
    OK = 4


class ReliancePriority(IntEnum):
    CRITICAL = 1
    HIGH_RISK = 2
    BELOW_TARGET = 3
    OK = 4


# ==================== SKILL MATCHING ====================

@dataclass
class SkillGapDetail:
    skill_id: int
    skill_name: str
    required_level: int
    current_level: Optional[int]  # None when the skill is absent
    gap_amount: int
    is_missing: bool


@dataclass
class SkillMatchDetail:
    skill_id: int
    skill_name: str
    required_level: int
    current_level: int
    meets_requirement: bool


@dataclass
class MatchResult:
    matching_count: int
    total_required: int
    match_percentage: float
    gaps: List[SkillGapDetail] = field(default_factory=list)
    held_skills: List[SkillMatchDetail] = field(default_factory=list)
    estimated_cost: float = 0.0

    @property
    def missing_count(self) -> int:
        return self.total_required - self.matching_count

    @property
    def average_gap(self) -> float:
        if not self.gaps:
            return 0.0
        return sum(g.gap_amount for g in self.gaps) / len(self.gaps)


# ==================== TRAINING PATHS ====================

@dataclass
class TrainingPathStep:
    step_number: int
    training: Training
    training_name: str
    skills_it_teaches: List[str] = field(default_factory=list)
    meets_prerequisites: bool = True
    missing_prerequisites: List[str] = field(default_factory=list)


# ==================== EMPLOYMENT ANALYSIS ====================

@dataclass
class InternalCandidate:
    employee: Employee
    current_position_name: str
    current_salary: float
    match_percentage: float
    total_score: float
    matching_skills_count: int
    required_skills_count: int
    average_skill_gap: float
    estimated_training_cost: float
    skill_gaps: List[SkillGapDetail] = field(default_factory=list)
    matching_skills: List[SkillMatchDetail] = field(default_factory=list)

    @property
    def total_cost_if_promoted(self) -> float:
        return self.estimated_training_cost + self.current_salary


@dataclass
class ExternalHiringOption:
    position_name: str
    hiring_cost: float
    starting_salary: float
    total_cost: float


@dataclass
class EmploymentAnalysisResult:
    position: Position
    training_cost_per_level: float
    ranked_candidates: List[InternalCandidate] = field(default_factory=list)
    external_option: Optional[ExternalHiringOption] = None
    required_skills_count: int = 0

    @property
    def has_requirements(self) -> bool:
        return self.required_skills_count > 0


# ==================== EMPLOYEE SUGGESTIONS ====================

@dataclass
class EmployeeSuggestion:
    employee: Employee
    current_position_name: str
    department_name: str
    matching_skills_count: int
    missing_skills_count: int
    match_percentage: float
    estimated_training_cost: float
    estimated_training_duration: int  # hours
    is_same_department: bool
    skill_gaps: List[SkillGapDetail] = field(default_factory=list)
    training_path: List[TrainingPathStep] = field(default_factory=list)


# ==================== CAPABILITY ENHANCEMENT ====================

@dataclass
class MissingSkillSummary:
    skill_id: int
    skill_name: str
    required_level: int
    employees_with_skill: int
    employees_at_required_level: int


@dataclass
class TrainingSuggestion:
    training: Training
    target_department_name: str
    skills_it_addresses: List[int] = field(default_factory=list)
    eligible_employees_count: int = 0


@dataclass
class ProcessCapabilityGap:
    process: Process
    priority: CapabilityPriority
    priority_reason: str
    capable_workers: int
    aimed_workers: int
    worker_gap: int
    assigned_position_names: List[str] = field(default_factory=list)
    missing_skills: List[MissingSkillSummary] = field(default_factory=list)
    suggested_trainings: List[TrainingSuggestion] = field(default_factory=list)
    quickest_fix_employees: List[EmployeeSuggestion] = field(default_factory=list)
    cheapest_fix_employees: List[EmployeeSuggestion] = field(default_factory=list)


@dataclass
class CapabilityEnhancementResult:
    training_cost_per_level: float
    process_gaps: List[ProcessCapabilityGap] = field(default_factory=list)

    @property
    def counts_by_priority(self) -> Dict[CapabilityPriority, int]:
        counts = {p: 0 for p in CapabilityPriority if p != CapabilityPriority.OK}
        for gap in self.process_gaps:
            counts[gap.priority] += 1
        return counts

    @property
    def critical_count(self) -> int:
        return self.counts_by_priority[CapabilityPriority.CRITICAL]

    @property
    def high_count(self) -> int:
        return self.counts_by_priority[CapabilityPriority.HIGH]

    @property
    def medium_count(self) -> int:
        return self.counts_by_priority[CapabilityPriority.MEDIUM]


# ==================== WORKER RELIANCE ====================

@dataclass
class WorkerRelianceIssue:
    process: Process
    priority: ReliancePriority
    priority_reason: str
    capable_workers: int
    aimed_workers: int
    worker_gap: int
    gap_percentage: float
    current_capable_employees: List[Employee] = field(default_factory=list)
    assigned_position_names: List[str] = field(default_factory=list)
    same_department_suggestions: List[EmployeeSuggestion] = field(default_factory=list)
    cross_department_suggestions: List[EmployeeSuggestion] = field(default_factory=list)


@dataclass
class WorkerRelianceResult:
    training_cost_per_level: float
    reliance_issues: List[WorkerRelianceIssue] = field(default_factory=list)

    @property
    def counts_by_priority(self) -> Dict[ReliancePriority, int]:
        counts = {p: 0 for p in ReliancePriority if p != ReliancePriority.OK}
        for issue in self.reliance_issues:
            counts[issue.priority] += 1
        return counts

    @property
    def critical_count(self) -> int:
        return self.counts_by_priority[ReliancePriority.CRITICAL]

    @property
    def high_risk_count(self) -> int:
        return self.counts_by_priority[ReliancePriority.HIGH_RISK]

    @property
    def below_target_count(self) -> int:
        return self.counts_by_priority[ReliancePriority.BELOW_TARGET]
