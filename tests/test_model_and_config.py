"""
Unit tests for entity validation, snapshot indices, configuration, errors and logging
"""

import logging
from pathlib import Path

import pytest

from workforce_planner.model.entities import (
    EmployeeSkill, Position, PositionProcess, ProcessRequiredSkill, Skill, skill_level_name,
    validate_skill_level,
)
from workforce_planner.model.snapshot import SnapshotIndex, WorkforceSnapshot
from workforce_planner.utils.config import AnalysisSettings, DEFAULT_TRAINING_COST_PER_LEVEL, validate_training_cost
from workforce_planner.utils.exceptions import (
    ConfigurationError, DataValidationError, EntityNotFoundError, create_error_context,
)
from workforce_planner.utils.logger import setup_logger


class TestSkillLevels:
    """Test suite for the ordinal level helpers"""

    @pytest.mark.unit
    def test_names(self):
        assert skill_level_name(1) == "Beginner"
        assert skill_level_name(5) == "Expert"

    @pytest.mark.unit
    @pytest.mark.parametrize("level", [0, 6, 2.5, True, "3"])
    def test_invalid_levels(self, level):
        with pytest.raises(DataValidationError):
            validate_skill_level(level)

    @pytest.mark.unit
    def test_records_validate_levels(self):
        with pytest.raises(DataValidationError):
            ProcessRequiredSkill(1, 1, 0)
        with pytest.raises(DataValidationError):
            Skill(1, "SQL", min_level=4, max_level=2)


class TestSnapshotIndex:
    """Test suite for SnapshotIndex lookups"""

    @pytest.mark.unit
    def test_tables_are_stored_as_tuples(self):
        snapshot = WorkforceSnapshot(skills=[Skill(1, "SQL")])

        assert isinstance(snapshot.skills, tuple)

    @pytest.mark.unit
    def test_unknown_labels(self):
        index = SnapshotIndex(WorkforceSnapshot())

        assert index.skill_name(1) == "Unknown"
        assert index.training_name(1) == "Unknown"
        assert index.department_name(None) == "Unknown"
        assert index.position_name(3) == "Unknown"

    @pytest.mark.unit
    def test_skill_levels_default_empty(self):
        index = SnapshotIndex(WorkforceSnapshot(employee_skills=[EmployeeSkill(1, 2, 3)]))

        assert dict(index.skill_levels(1)) == {2: 3}
        assert dict(index.skill_levels(2)) == {}

    @pytest.mark.unit
    def test_assigned_departments_are_distinct(self, make_index, position):
        other = Position(11, "Analyst", department_id=1)
        index = make_index(
            positions=[position, other],
            position_processes=[PositionProcess(10, 1), PositionProcess(11, 1), PositionProcess(99, 1)],
        )

        assert index.assigned_department_ids(1) == [1]
        assert [p.id for p in index.assigned_positions(1)] == [10, 11]


class TestConfiguration:
    """Test suite for settings and cost validation"""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [-1, "abc", None, float("nan"), float("inf"), True, False])
    def test_invalid_training_cost(self, value):
        with pytest.raises(ConfigurationError):
            validate_training_cost(value)

    @pytest.mark.unit
    def test_valid_training_cost(self):
        assert validate_training_cost("2500") == 2500.0
        assert validate_training_cost(0) == 0.0

    @pytest.mark.unit
    def test_settings_defaults(self, monkeypatch):
        for name in ("TRAINING_COST_PER_LEVEL", "WORKFORCE_DATA_DIR", "WORKFORCE_OUTPUT_DIR"):
            monkeypatch.delenv(name, raising=False)

        settings = AnalysisSettings.from_env()

        assert settings.training_cost_per_level == DEFAULT_TRAINING_COST_PER_LEVEL
        assert settings.data_dir == Path("data")

    @pytest.mark.unit
    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("TRAINING_COST_PER_LEVEL", "1200")
        monkeypatch.setenv("WORKFORCE_OUTPUT_DIR", "/tmp/reports")

        settings = AnalysisSettings.from_env()

        assert settings.training_cost_per_level == 1200.0
        assert settings.output_dir == Path("/tmp/reports")

    @pytest.mark.unit
    def test_settings_reject_bad_cost(self, monkeypatch):
        monkeypatch.setenv("TRAINING_COST_PER_LEVEL", "-5")

        with pytest.raises(ConfigurationError):
            AnalysisSettings.from_env()


class TestExceptions:
    """Test suite for exception context"""

    @pytest.mark.unit
    def test_context_drops_none(self):
        assert create_error_context(a=1, b=None) == {'a': 1}

    @pytest.mark.unit
    def test_not_found_message(self):
        error = EntityNotFoundError("Position 3 not found", entity_type="Position", entity_id=3)

        assert "NOT_FOUND" in str(error)
        assert error.context == {'entity_type': "Position", 'entity_id': 3}


class TestLogger:
    """Test suite for logger handler selection"""

    @pytest.mark.unit
    def test_file_handlers_write_to_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_DIR", str(tmp_path))

        logger = setup_logger("tests.file_logger", log_to_file=True, log_to_console=False)
        logger.error("snapshot failed")
        for handler in logger.handlers:
            handler.flush()

        assert [type(h) for h in logger.handlers] == [logging.FileHandler, logging.FileHandler]
        assert "snapshot failed" in (tmp_path / "workforce_planner.log").read_text()
        assert "snapshot failed" in (tmp_path / "errors.log").read_text()

        for handler in logger.handlers:
            handler.close()

    @pytest.mark.unit
    def test_silent_logger_gets_null_handler(self):
        logger = setup_logger("tests.silent_logger", log_to_file=False, log_to_console=False)

        assert [type(h) for h in logger.handlers] == [logging.NullHandler]
