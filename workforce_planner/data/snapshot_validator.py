"""
Referential integrity check for workforce snapshots.

Analyses tolerate dangling references (names fall back to "Unknown"), so this
check only reports problems; it never repairs or rejects a snapshot.
"""

from typing import Dict, List

from ..model.snapshot import WorkforceSnapshot
from ..utils.logger import get_logger, log_validation_result


class SnapshotValidator:
    """Report junction rows whose foreign keys reference missing entities"""

    def __init__(self, snapshot: WorkforceSnapshot):
        self.logger = get_logger(__name__)
        self.snapshot = snapshot

        self.ids = {
            'employee': {e.id for e in snapshot.employees},
            'department': {d.id for d in snapshot.departments},
            'position': {p.id for p in snapshot.positions},
            'process': {p.id for p in snapshot.processes},
            'skill': {s.id for s in snapshot.skills},
            'training': {t.id for t in snapshot.trainings},
        }

        # table -> [(attribute, referenced entity)]
        self.relations = {
            'employees': [('department_id', 'department'), ('position_id', 'position')],
            'positions': [('department_id', 'department')],
            'trainings': [('target_department_id', 'department')],
            'employee_skills': [('employee_id', 'employee'), ('skill_id', 'skill')],
            'employee_trainings': [('employee_id', 'employee'), ('training_id', 'training')],
            'position_required_skills': [('position_id', 'position'), ('skill_id', 'skill')],
            'position_processes': [('position_id', 'position'), ('process_id', 'process')],
            'process_required_skills': [('process_id', 'process'), ('skill_id', 'skill')],
            'training_skills': [('training_id', 'training'), ('skill_id', 'skill')],
            'training_prerequisite_skills': [('training_id', 'training'), ('skill_id', 'skill')],
            'training_prerequisite_trainings': [
                ('training_id', 'training'), ('prerequisite_training_id', 'training')
            ],
        }

    def find_dangling_references(self, table: str) -> List[Dict]:
        issues = []
        for row_number, record in enumerate(getattr(self.snapshot, table), start=1):
            for attribute, entity in self.relations[table]:
                value = getattr(record, attribute)
                if value is not None and value not in self.ids[entity]:
                    issues.append({
                        'row': row_number,
                        'field': attribute,
                        'missing_entity': entity,
                        'value': value,
                    })
        return issues

    def find_duplicate_ids(self) -> Dict[str, List[int]]:
        duplicates = {}
        for table in ('employees', 'departments', 'positions', 'processes', 'skills', 'trainings'):
            seen, repeated = set(), []
            for record in getattr(self.snapshot, table):
                if record.id in seen and record.id not in repeated:
                    repeated.append(record.id)
                seen.add(record.id)
            if repeated:
                duplicates[table] = repeated
        return duplicates

    def validate(self) -> Dict:
        """
        Check every relation of the snapshot.

        Returns:
            Dict with 'valid', 'dangling_references' (table -> issue list),
            'duplicate_ids' (table -> ids) and 'table_sizes'
        """
        dangling = {}
        for table in self.relations:
            issues = self.find_dangling_references(table)
            if issues:
                dangling[table] = issues
            log_validation_result(
                self.logger, f"references:{table}", not issues,
                f"{len(issues)} dangling references" if issues else ""
            )

        duplicates = self.find_duplicate_ids()
        log_validation_result(
            self.logger, "unique_ids", not duplicates,
            ", ".join(f"{t}: {ids}" for t, ids in duplicates.items())
        )

        return {
            'valid': not dangling and not duplicates,
            'dangling_references': dangling,
            'duplicate_ids': duplicates,
            'table_sizes': self.snapshot.table_sizes(),
        }
