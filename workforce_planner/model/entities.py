"""
Entity and junction records consumed by the analysis engines.

Records are immutable and reference each other only by id. Relationships are
resolved through SnapshotIndex, never through back-references on the records.

Skill levels are ordinal integers 1..5; SKILL_LEVEL_NAMES gives their labels.
Level comparisons are always plain integer comparisons.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from ..utils.exceptions import DataValidationError


MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 5

SKILL_LEVEL_NAMES = {
    1: "Beginner",
    2: "Developing",
    3: "Competent",
    4: "Advanced",
    5: "Expert",
}


def skill_level_name(level: int) -> str:
    """Label for an ordinal skill level ("Level N" outside the table)."""
    return SKILL_LEVEL_NAMES.get(level, f"Level {level}")


def validate_skill_level(level, field_name: str = "level") -> int:
    """Ensure a level is an integer in [MIN_SKILL_LEVEL, MAX_SKILL_LEVEL]."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise DataValidationError(
            f"{field_name} must be an integer, got {level!r}",
            validation_type="skill_level",
            field=field_name
        )
    if not MIN_SKILL_LEVEL <= level <= MAX_SKILL_LEVEL:
        raise DataValidationError(
            f"{field_name} must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}, got {level}",
            validation_type="skill_level",
            field=field_name
        )
    return level


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    TERMINATED = "Terminated"


class SkillCategory(str, Enum):
    TECHNICAL = "Technical"
    SOFT = "Soft"
    UNCLASSIFIED = "Unclassified"


class SkillSource(str, Enum):
    TRAINING = "Training"
    PREVIOUS = "Previous"


class TrainingStatus(str, Enum):
    SUGGESTED = "Suggested"
    ASSIGNED = "Assigned"
    PLANNED = "Planned"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class EmployeeTrainingStatus(str, Enum):
    ASSIGNED = "Assigned"
    PLANNED = "Planned"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class TrainingResult(str, Enum):
    PASSED = "Passed"
    FAILED = "Failed"
    PENDING = "Pending"


class CostType(str, Enum):
    PER_ATTENDEE = "PerAttendee"
    TOTAL = "Total"


# ==================== ENTITIES ====================

@dataclass(frozen=True)
class Skill:
    id: int
    name: str
    category: SkillCategory = SkillCategory.UNCLASSIFIED
    description: str = ""
    min_level: int = MIN_SKILL_LEVEL
    max_level: int = MAX_SKILL_LEVEL

    def __post_init__(self):
        validate_skill_level(self.min_level, "min_level")
        validate_skill_level(self.max_level, "max_level")
        if self.min_level > self.max_level:
            raise DataValidationError(
                f"Skill {self.id} has min_level {self.min_level} above max_level {self.max_level}",
                validation_type="skill_level_range"
            )


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    budget: float = 0.0


@dataclass(frozen=True)
class Employee:
    id: int
    first_name: str
    last_name: str
    department_id: int
    position_id: int
    current_salary: float = 0.0
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    hire_date: Optional[date] = None
    termination_date: Optional[date] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class Position:
    id: int
    name: str
    department_id: int
    capacity: int = 0
    level: int = 1
    min_salary: float = 0.0
    max_salary: float = 0.0
    hiring_cost: float = 0.0
    reports_to_position_id: Optional[int] = None


@dataclass(frozen=True)
class Process:
    id: int
    name: str
    description: str = ""
    aimed_workers: int = 0


@dataclass(frozen=True)
class Training:
    id: int
    name: str
    target_department_id: int
    cost: float = 0.0
    cost_type: CostType = CostType.PER_ATTENDEE
    duration_hours: int = 0
    capacity: int = 0
    status: TrainingStatus = TrainingStatus.SUGGESTED
    description: str = ""

    @property
    def is_cancelled(self) -> bool:
        return self.status == TrainingStatus.CANCELLED


# ==================== JUNCTION RECORDS ====================

@dataclass(frozen=True)
class EmployeeSkill:
    employee_id: int
    skill_id: int
    level: int
    source: SkillSource = SkillSource.PREVIOUS
    acquisition_date: Optional[date] = None

    def __post_init__(self):
        validate_skill_level(self.level, "level")


@dataclass(frozen=True)
class EmployeeTraining:
    employee_id: int
    training_id: int
    status: EmployeeTrainingStatus = EmployeeTrainingStatus.ASSIGNED
    result: Optional[TrainingResult] = None

    @property
    def is_completed_and_passed(self) -> bool:
        return self.status == EmployeeTrainingStatus.COMPLETED and self.result == TrainingResult.PASSED


@dataclass(frozen=True)
class PositionRequiredSkill:
    position_id: int
    skill_id: int
    required_level: int
    is_mandatory: bool = True

    def __post_init__(self):
        validate_skill_level(self.required_level, "required_level")


@dataclass(frozen=True)
class PositionProcess:
    position_id: int
    process_id: int


@dataclass(frozen=True)
class ProcessRequiredSkill:
    process_id: int
    skill_id: int
    required_level: int

    def __post_init__(self):
        validate_skill_level(self.required_level, "required_level")


@dataclass(frozen=True)
class TrainingSkill:
    training_id: int
    skill_id: int
    target_level: int

    def __post_init__(self):
        validate_skill_level(self.target_level, "target_level")


@dataclass(frozen=True)
class TrainingPrerequisiteSkill:
    training_id: int
    skill_id: int
    minimum_level: int

    def __post_init__(self):
        validate_skill_level(self.minimum_level, "minimum_level")


@dataclass(frozen=True)
class TrainingPrerequisiteTraining:
    training_id: int
    prerequisite_training_id: int


@dataclass(frozen=True)
class SkillRequirement:
    """A (skill, required level) pair, the input shape of the skill matcher."""

    skill_id: int
    required_level: int
