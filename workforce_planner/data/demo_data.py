"""
Small demonstration dataset used by the runner when no data directory is given.

Two departments, three positions and three employees, extended with a few
processes and trainings so that every analysis has something to report.
"""

from datetime import date

from ..model.entities import (
    Department, Employee, EmployeeSkill, EmployeeTraining, EmployeeTrainingStatus,
    Position, PositionProcess, PositionRequiredSkill, Process, ProcessRequiredSkill,
    Skill, SkillCategory, SkillSource, Training, TrainingPrerequisiteSkill,
    TrainingPrerequisiteTraining, TrainingResult, TrainingSkill, TrainingStatus,
)
from ..model.snapshot import WorkforceSnapshot


def build_demo_snapshot() -> WorkforceSnapshot:
    skills = [
        Skill(1, "C# Programming", SkillCategory.TECHNICAL, "Object-oriented programming in C#"),
        Skill(2, "SQL", SkillCategory.TECHNICAL, "Database management"),
        Skill(3, "Leadership", SkillCategory.SOFT, "Team leadership abilities"),
        Skill(4, "Communication", SkillCategory.SOFT, "Effective communication"),
    ]

    departments = [
        Department(1, "IT", budget=500000),
        Department(2, "HR", budget=200000),
    ]

    positions = [
        Position(1, "Senior Developer", department_id=1, capacity=5, level=3,
                 min_salary=80000, max_salary=120000, hiring_cost=5000),
        Position(2, "Junior Developer", department_id=1, capacity=10, level=1,
                 min_salary=40000, max_salary=60000, hiring_cost=3000),
        Position(3, "HR Manager", department_id=2, capacity=2, level=3,
                 min_salary=70000, max_salary=100000, hiring_cost=4000),
    ]

    employees = [
        Employee(1, "John", "Doe", department_id=1, position_id=1,
                 current_salary=90000, hire_date=date(2023, 1, 9)),
        Employee(2, "Jane", "Smith", department_id=1, position_id=2,
                 current_salary=50000, hire_date=date(2024, 3, 4)),
        Employee(3, "Alice", "Johnson", department_id=2, position_id=3,
                 current_salary=85000, hire_date=date(2022, 6, 13)),
    ]

    employee_skills = [
        EmployeeSkill(1, 1, 4, SkillSource.TRAINING),
        EmployeeSkill(1, 2, 5, SkillSource.PREVIOUS),
        EmployeeSkill(2, 1, 2, SkillSource.TRAINING),
        EmployeeSkill(3, 3, 4, SkillSource.PREVIOUS),
        EmployeeSkill(3, 4, 5, SkillSource.PREVIOUS),
    ]

    position_required_skills = [
        PositionRequiredSkill(1, 1, 4),
        PositionRequiredSkill(1, 2, 3),
        PositionRequiredSkill(2, 1, 2),
    ]

    processes = [
        Process(1, "Code Review", "Peer review of production changes", aimed_workers=2),
        Process(2, "Database Maintenance", "Index tuning and backups", aimed_workers=2),
        Process(3, "Team Onboarding", "Onboarding of new hires", aimed_workers=1),
    ]

    position_processes = [
        PositionProcess(1, 1),
        PositionProcess(2, 1),
        PositionProcess(1, 2),
        PositionProcess(3, 3),
    ]

    process_required_skills = [
        ProcessRequiredSkill(1, 1, 4),
        ProcessRequiredSkill(2, 1, 2),
        ProcessRequiredSkill(2, 2, 4),
        ProcessRequiredSkill(3, 3, 3),
        ProcessRequiredSkill(3, 4, 3),
    ]

    trainings = [
        Training(1, "C# Fundamentals", target_department_id=1, cost=1500,
                 duration_hours=16, capacity=12, status=TrainingStatus.PLANNED),
        Training(2, "Advanced C# Workshop", target_department_id=1, cost=3500,
                 duration_hours=24, capacity=8, status=TrainingStatus.PLANNED),
        Training(3, "SQL Performance Tuning", target_department_id=1, cost=2500,
                 duration_hours=12, capacity=10, status=TrainingStatus.SUGGESTED),
        Training(4, "Leading Teams", target_department_id=2, cost=2000,
                 duration_hours=8, capacity=15, status=TrainingStatus.ASSIGNED),
    ]

    training_skills = [
        TrainingSkill(1, 1, 2),
        TrainingSkill(2, 1, 4),
        TrainingSkill(3, 2, 4),
        TrainingSkill(4, 3, 3),
    ]

    training_prerequisite_skills = [
        TrainingPrerequisiteSkill(2, 1, 2),
        TrainingPrerequisiteSkill(3, 2, 2),
    ]

    training_prerequisite_trainings = [
        TrainingPrerequisiteTraining(2, 1),
    ]

    employee_trainings = [
        EmployeeTraining(2, 1, EmployeeTrainingStatus.COMPLETED, TrainingResult.PASSED),
    ]

    return WorkforceSnapshot(
        employees=employees,
        departments=departments,
        positions=positions,
        processes=processes,
        skills=skills,
        trainings=trainings,
        employee_skills=employee_skills,
        employee_trainings=employee_trainings,
        position_required_skills=position_required_skills,
        position_processes=position_processes,
        process_required_skills=process_required_skills,
        training_skills=training_skills,
        training_prerequisite_skills=training_prerequisite_skills,
        training_prerequisite_trainings=training_prerequisite_trainings,
    )
