"""
Load a WorkforceSnapshot from a directory of per-table JSON files.

Each table is a JSON array of objects whose keys match the record's field
names (snake_case). Enum fields take their value strings ("Active",
"Cancelled", ...) and dates use ISO format. A table whose file is absent loads
as empty.
"""

import json
from datetime import date
from pathlib import Path
from typing import Dict, List, Union

from ..model import entities
from ..model.snapshot import WorkforceSnapshot
from ..utils.exceptions import DataValidationError, FileOperationError, handle_file_operation
from ..utils.logger import get_logger, log_data_summary


# snapshot attribute -> (file name, record class)
TABLE_FILES = {
    'employees': ('employees.json', entities.Employee),
    'departments': ('departments.json', entities.Department),
    'positions': ('positions.json', entities.Position),
    'skills': ('skills.json', entities.Skill),
    'trainings': ('trainings.json', entities.Training),
    'processes': ('processes.json', entities.Process),
    'employee_skills': ('employee_skills.json', entities.EmployeeSkill),
    'employee_trainings': ('employee_trainings.json', entities.EmployeeTraining),
    'position_required_skills': ('position_required_skills.json', entities.PositionRequiredSkill),
    'position_processes': ('position_processes.json', entities.PositionProcess),
    'process_required_skills': ('process_required_skills.json', entities.ProcessRequiredSkill),
    'training_skills': ('training_skills.json', entities.TrainingSkill),
    'training_prerequisite_skills': ('training_prerequisite_skills.json', entities.TrainingPrerequisiteSkill),
    'training_prerequisite_trainings': ('training_prerequisite_trainings.json', entities.TrainingPrerequisiteTraining),
}

# Fields needing conversion from their JSON representation
FIELD_CONVERTERS = {
    'status': {
        entities.Employee: entities.EmployeeStatus,
        entities.Training: entities.TrainingStatus,
        entities.EmployeeTraining: entities.EmployeeTrainingStatus,
    },
    'category': {entities.Skill: entities.SkillCategory},
    'source': {entities.EmployeeSkill: entities.SkillSource},
    'result': {entities.EmployeeTraining: entities.TrainingResult},
    'cost_type': {entities.Training: entities.CostType},
    'hire_date': {entities.Employee: date.fromisoformat},
    'termination_date': {entities.Employee: date.fromisoformat},
    'acquisition_date': {entities.EmployeeSkill: date.fromisoformat},
}

logger = get_logger(__name__)


def _build_record(record_class, row: Dict, file_name: str, row_number: int):
    if not isinstance(row, dict):
        raise DataValidationError(
            f"{file_name} row {row_number} is not an object",
            data_source=file_name,
            validation_type="row_shape"
        )

    values = {}
    for key, value in row.items():
        converter = FIELD_CONVERTERS.get(key, {}).get(record_class)
        if converter is not None and value is not None:
            try:
                value = converter(value)
            except (TypeError, ValueError) as e:
                raise DataValidationError(
                    f"{file_name} row {row_number}: invalid {key} {value!r}",
                    data_source=file_name,
                    validation_type="field_value",
                    field=key
                ) from e
        values[key] = value

    try:
        return record_class(**values)
    except TypeError as e:
        raise DataValidationError(
            f"{file_name} row {row_number}: {e}",
            data_source=file_name,
            validation_type="row_fields"
        ) from e


@handle_file_operation("read", "snapshot table")
def _read_table(path: Path) -> List:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_table(data_dir: Path, file_name: str, record_class) -> List:
    """Load one table; an absent file is an empty table."""
    path = data_dir / file_name
    if not path.exists():
        logger.debug(f"{file_name} not found, loading empty table")
        return []

    try:
        rows = _read_table(path)
    except json.JSONDecodeError as e:
        raise DataValidationError(
            f"Invalid JSON in {file_name}: {e}",
            data_source=str(path),
            validation_type="json_parse"
        ) from e
    except UnicodeDecodeError as e:
        raise DataValidationError(
            f"{file_name} is not valid UTF-8: {e}",
            data_source=str(path),
            validation_type="encoding"
        ) from e

    if not isinstance(rows, list):
        raise DataValidationError(
            f"{file_name} must contain a JSON array",
            data_source=str(path),
            validation_type="table_shape"
        )

    return [_build_record(record_class, row, file_name, i) for i, row in enumerate(rows, start=1)]


def load_snapshot(data_dir: Union[str, Path]) -> WorkforceSnapshot:
    """
    Load every table from ``data_dir`` into a WorkforceSnapshot.

    Raises:
        FileOperationError: If the directory does not exist or a file cannot be read
        DataValidationError: If a file is not UTF-8 JSON or holds malformed records
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileOperationError(
            f"Data directory not found: {data_dir}",
            file_path=str(data_dir),
            operation="read"
        )

    tables = {}
    for attribute, (file_name, record_class) in TABLE_FILES.items():
        tables[attribute] = load_table(data_dir, file_name, record_class)

    snapshot = WorkforceSnapshot(**tables)
    log_data_summary(
        logger, "workforce snapshot", len(snapshot.employees),
        f"{len(snapshot.positions)} positions, {len(snapshot.processes)} processes, "
        f"{len(snapshot.trainings)} trainings"
    )
    return snapshot
