"""
Shared pytest fixtures for the workforce planner tests
"""

import os

import pytest

# Keep test runs from creating logs/ in the working tree
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_TO_CONSOLE", "false")

from workforce_planner.data.demo_data import build_demo_snapshot
from workforce_planner.model.entities import (
    Department, Employee, EmployeeSkill, EmployeeStatus, Position, Skill,
)
from workforce_planner.model.snapshot import SnapshotIndex, WorkforceSnapshot


@pytest.fixture
def skills():
    return [
        Skill(1, "Python"),
        Skill(2, "SQL"),
        Skill(3, "Leadership"),
        Skill(4, "Networking"),
    ]


@pytest.fixture
def departments():
    return [Department(1, "Engineering"), Department(2, "Operations")]


@pytest.fixture
def make_index(skills, departments):
    """Build a SnapshotIndex from table overrides on top of the shared skills/departments."""
    def _make(**tables):
        tables.setdefault("skills", skills)
        tables.setdefault("departments", departments)
        return SnapshotIndex(WorkforceSnapshot(**tables))
    return _make


@pytest.fixture
def employee_factory():
    def _make(employee_id, department_id=1, position_id=1, salary=50000, active=True):
        return Employee(
            employee_id, f"First{employee_id}", f"Last{employee_id}",
            department_id=department_id, position_id=position_id, current_salary=salary,
            status=EmployeeStatus.ACTIVE if active else EmployeeStatus.TERMINATED
        )
    return _make


@pytest.fixture
def levels():
    """Expand {employee_id: {skill_id: level}} into EmployeeSkill records."""
    def _make(profile):
        return [
            EmployeeSkill(employee_id, skill_id, level)
            for employee_id, skill_levels in profile.items()
            for skill_id, level in skill_levels.items()
        ]
    return _make


@pytest.fixture
def position():
    return Position(
        10, "Data Engineer", department_id=1, capacity=3, level=2,
        min_salary=60000, max_salary=80000, hiring_cost=5000
    )


@pytest.fixture
def demo_index():
    return SnapshotIndex(build_demo_snapshot())
