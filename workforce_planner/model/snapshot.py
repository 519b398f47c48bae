"""
Workforce snapshot and its lookup indices.

WorkforceSnapshot holds the plain relational records handed over by the data
access layer. SnapshotIndex is built once per snapshot and answers every
relationship question the analyzers ask (employee -> skill levels,
process -> required skills, ...). Neither object is mutated after creation.
"""

from collections import defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .entities import (
    Department, Employee, EmployeeSkill, EmployeeTraining, Position,
    PositionProcess, PositionRequiredSkill, Process, ProcessRequiredSkill,
    Skill, SkillRequirement, Training, TrainingPrerequisiteSkill,
    TrainingPrerequisiteTraining, TrainingSkill,
)


UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class WorkforceSnapshot:
    """Immutable bundle of entity and junction tables."""

    employees: Tuple[Employee, ...] = ()
    departments: Tuple[Department, ...] = ()
    positions: Tuple[Position, ...] = ()
    processes: Tuple[Process, ...] = ()
    skills: Tuple[Skill, ...] = ()
    trainings: Tuple[Training, ...] = ()
    employee_skills: Tuple[EmployeeSkill, ...] = ()
    employee_trainings: Tuple[EmployeeTraining, ...] = ()
    position_required_skills: Tuple[PositionRequiredSkill, ...] = ()
    position_processes: Tuple[PositionProcess, ...] = ()
    process_required_skills: Tuple[ProcessRequiredSkill, ...] = ()
    training_skills: Tuple[TrainingSkill, ...] = ()
    training_prerequisite_skills: Tuple[TrainingPrerequisiteSkill, ...] = ()
    training_prerequisite_trainings: Tuple[TrainingPrerequisiteTraining, ...] = ()

    def __post_init__(self):
        # Accept any iterable per table but store tuples
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    def table_sizes(self) -> Dict[str, int]:
        return {name: len(getattr(self, name)) for name in self.__dataclass_fields__}


def _freeze(grouped: Dict) -> Mapping:
    return MappingProxyType({key: tuple(values) for key, values in grouped.items()})


class SnapshotIndex:
    """Lookup indices over a WorkforceSnapshot"""

    def __init__(self, snapshot: WorkforceSnapshot):
        self.snapshot = snapshot

        self.departments_by_id = MappingProxyType({d.id: d for d in snapshot.departments})
        self.positions_by_id = MappingProxyType({p.id: p for p in snapshot.positions})
        self.processes_by_id = MappingProxyType({p.id: p for p in snapshot.processes})
        self.skills_by_id = MappingProxyType({s.id: s for s in snapshot.skills})
        self.trainings_by_id = MappingProxyType({t.id: t for t in snapshot.trainings})

        # employee id -> {skill id: level}; a later duplicate row wins
        skill_levels = defaultdict(dict)
        for record in snapshot.employee_skills:
            skill_levels[record.employee_id][record.skill_id] = record.level
        self._skill_levels = MappingProxyType({k: MappingProxyType(v) for k, v in skill_levels.items()})

        employee_trainings = defaultdict(list)
        for record in snapshot.employee_trainings:
            employee_trainings[record.employee_id].append(record)
        self._employee_trainings = _freeze(employee_trainings)

        position_requirements = defaultdict(list)
        for record in snapshot.position_required_skills:
            position_requirements[record.position_id].append(record)
        self._position_requirements = _freeze(position_requirements)

        process_requirements = defaultdict(list)
        for record in snapshot.process_required_skills:
            process_requirements[record.process_id].append(record)
        self._process_requirements = _freeze(process_requirements)

        process_positions = defaultdict(list)
        position_processes = defaultdict(list)
        for record in snapshot.position_processes:
            process_positions[record.process_id].append(record.position_id)
            position_processes[record.position_id].append(record.process_id)
        self._process_positions = _freeze(process_positions)
        self._position_processes = _freeze(position_processes)

        position_employees = defaultdict(list)
        for employee in snapshot.employees:
            position_employees[employee.position_id].append(employee)
        self._position_employees = _freeze(position_employees)

        training_skills = defaultdict(list)
        for record in snapshot.training_skills:
            training_skills[record.training_id].append(record)
        self._training_skills = _freeze(training_skills)

        prerequisite_skills = defaultdict(list)
        for record in snapshot.training_prerequisite_skills:
            prerequisite_skills[record.training_id].append(record)
        self._prerequisite_skills = _freeze(prerequisite_skills)

        prerequisite_trainings = defaultdict(list)
        for record in snapshot.training_prerequisite_trainings:
            prerequisite_trainings[record.training_id].append(record)
        self._prerequisite_trainings = _freeze(prerequisite_trainings)

    # ---- employees ----

    def active_employees(self) -> List[Employee]:
        return [e for e in self.snapshot.employees if e.is_active]

    def skill_levels(self, employee_id: int) -> Mapping[int, int]:
        return self._skill_levels.get(employee_id, MappingProxyType({}))

    def employee_trainings(self, employee_id: int) -> Tuple[EmployeeTraining, ...]:
        return self._employee_trainings.get(employee_id, ())

    def has_passed_training(self, employee_id: int, training_id: int) -> bool:
        return any(
            record.training_id == training_id and record.is_completed_and_passed
            for record in self.employee_trainings(employee_id)
        )

    # ---- positions ----

    def position_requirements(self, position_id: int) -> List[SkillRequirement]:
        return [
            SkillRequirement(r.skill_id, r.required_level)
            for r in self._position_requirements.get(position_id, ())
        ]

    def position_employees(self, position_id: int) -> Tuple[Employee, ...]:
        return self._position_employees.get(position_id, ())

    def open_slots(self, position: Position) -> int:
        """Capacity minus every employee referencing the position."""
        return position.capacity - len(self.position_employees(position.id))

    def processes_for_position(self, position_id: int) -> List[Process]:
        return [
            self.processes_by_id[pid]
            for pid in self._position_processes.get(position_id, ())
            if pid in self.processes_by_id
        ]

    # ---- processes ----

    def process_requirements(self, process_id: int) -> List[SkillRequirement]:
        return [
            SkillRequirement(r.skill_id, r.required_level)
            for r in self._process_requirements.get(process_id, ())
        ]

    def assigned_positions(self, process_id: int) -> List[Position]:
        """Positions assigned to a process; dangling position ids are skipped."""
        return [
            self.positions_by_id[pid]
            for pid in self._process_positions.get(process_id, ())
            if pid in self.positions_by_id
        ]

    def assigned_department_ids(self, process_id: int) -> List[int]:
        """Distinct departments of the positions assigned to a process, in assignment order."""
        department_ids = []
        for position in self.assigned_positions(process_id):
            if position.department_id not in department_ids:
                department_ids.append(position.department_id)
        return department_ids

    # ---- trainings ----

    def training_skills(self, training_id: int) -> Tuple[TrainingSkill, ...]:
        return self._training_skills.get(training_id, ())

    def prerequisite_skills(self, training_id: int) -> Tuple[TrainingPrerequisiteSkill, ...]:
        return self._prerequisite_skills.get(training_id, ())

    def prerequisite_trainings(self, training_id: int) -> Tuple[TrainingPrerequisiteTraining, ...]:
        return self._prerequisite_trainings.get(training_id, ())

    def active_trainings(self) -> List[Training]:
        return [t for t in self.snapshot.trainings if not t.is_cancelled]

    # ---- labels ----

    def skill_name(self, skill_id: int) -> str:
        skill = self.skills_by_id.get(skill_id)
        return skill.name if skill else UNKNOWN_LABEL

    def training_name(self, training_id: int) -> str:
        training = self.trainings_by_id.get(training_id)
        return training.name if training else UNKNOWN_LABEL

    def department_name(self, department_id: Optional[int]) -> str:
        department = self.departments_by_id.get(department_id)
        return department.name if department else UNKNOWN_LABEL

    def position_name(self, position_id: Optional[int]) -> str:
        position = self.positions_by_id.get(position_id)
        return position.name if position else UNKNOWN_LABEL
