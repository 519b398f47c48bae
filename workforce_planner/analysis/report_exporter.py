"""
Report Exporter
===============

Flattens analysis results into pandas DataFrames and writes them as CSV files
to the standard output location (outputs/current), one row per record with a
stable column order.
"""

from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd

from ..model.results import (
    CapabilityEnhancementResult, CapabilityPriority, EmployeeSuggestion,
    EmploymentAnalysisResult, ReliancePriority, WorkerRelianceResult,
)
from ..utils.exceptions import FileOperationError
from ..utils.logger import get_logger, log_function_entry


CANDIDATE_COLUMNS = [
    'Rank', 'Employee_Id', 'Employee_Name', 'Current_Position', 'Current_Salary',
    'Match_Percentage', 'Total_Score', 'Matching_Skills', 'Required_Skills',
    'Average_Skill_Gap', 'Estimated_Training_Cost', 'Total_Cost_If_Promoted', 'Skill_Gaps',
]

PROCESS_GAP_COLUMNS = [
    'Process_Id', 'Process_Name', 'Priority', 'Priority_Reason', 'Capable_Workers',
    'Aimed_Workers', 'Worker_Gap', 'Assigned_Positions', 'Suggested_Trainings',
    'Quickest_Fix_Count', 'Cheapest_Fix_Count',
]

RELIANCE_COLUMNS = [
    'Process_Id', 'Process_Name', 'Priority', 'Priority_Reason', 'Capable_Workers',
    'Aimed_Workers', 'Worker_Gap', 'Gap_Percentage', 'Capable_Employees',
    'Same_Department_Suggestions', 'Cross_Department_Suggestions',
]

SUGGESTION_COLUMNS = [
    'Process_Id', 'List', 'Employee_Id', 'Employee_Name', 'Department', 'Current_Position',
    'Same_Department', 'Match_Percentage', 'Matching_Skills', 'Missing_Skills',
    'Estimated_Training_Cost', 'Estimated_Training_Hours', 'Training_Path',
]


def _format_gaps(gaps) -> str:
    return "; ".join(
        f"{g.skill_name} ({g.current_level or 0}->{g.required_level})" for g in gaps
    )


def candidates_to_dataframe(result: EmploymentAnalysisResult) -> pd.DataFrame:
    rows = []
    for rank, c in enumerate(result.ranked_candidates, start=1):
        rows.append({
            'Rank': rank,
            'Employee_Id': c.employee.id,
            'Employee_Name': c.employee.full_name,
            'Current_Position': c.current_position_name,
            'Current_Salary': c.current_salary,
            'Match_Percentage': round(c.match_percentage, 2),
            'Total_Score': c.total_score,
            'Matching_Skills': c.matching_skills_count,
            'Required_Skills': c.required_skills_count,
            'Average_Skill_Gap': round(c.average_skill_gap, 2),
            'Estimated_Training_Cost': c.estimated_training_cost,
            'Total_Cost_If_Promoted': c.total_cost_if_promoted,
            'Skill_Gaps': _format_gaps(c.skill_gaps),
        })
    return pd.DataFrame(rows, columns=CANDIDATE_COLUMNS)


def process_gaps_to_dataframe(result: CapabilityEnhancementResult) -> pd.DataFrame:
    rows = []
    for gap in result.process_gaps:
        rows.append({
            'Process_Id': gap.process.id,
            'Process_Name': gap.process.name,
            'Priority': gap.priority.name,
            'Priority_Reason': gap.priority_reason,
            'Capable_Workers': gap.capable_workers,
            'Aimed_Workers': gap.aimed_workers,
            'Worker_Gap': gap.worker_gap,
            'Assigned_Positions': ", ".join(gap.assigned_position_names),
            'Suggested_Trainings': ", ".join(s.training.name for s in gap.suggested_trainings),
            'Quickest_Fix_Count': len(gap.quickest_fix_employees),
            'Cheapest_Fix_Count': len(gap.cheapest_fix_employees),
        })
    return pd.DataFrame(rows, columns=PROCESS_GAP_COLUMNS)


def reliance_issues_to_dataframe(result: WorkerRelianceResult) -> pd.DataFrame:
    rows = []
    for issue in result.reliance_issues:
        rows.append({
            'Process_Id': issue.process.id,
            'Process_Name': issue.process.name,
            'Priority': issue.priority.name,
            'Priority_Reason': issue.priority_reason,
            'Capable_Workers': issue.capable_workers,
            'Aimed_Workers': issue.aimed_workers,
            'Worker_Gap': issue.worker_gap,
            'Gap_Percentage': round(issue.gap_percentage, 1),
            'Capable_Employees': ", ".join(e.full_name for e in issue.current_capable_employees),
            'Same_Department_Suggestions': len(issue.same_department_suggestions),
            'Cross_Department_Suggestions': len(issue.cross_department_suggestions),
        })
    return pd.DataFrame(rows, columns=RELIANCE_COLUMNS)


def suggestions_to_dataframe(process_id: int, list_name: str, suggestions: List[EmployeeSuggestion]) -> pd.DataFrame:
    rows = []
    for s in suggestions:
        rows.append({
            'Process_Id': process_id,
            'List': list_name,
            'Employee_Id': s.employee.id,
            'Employee_Name': s.employee.full_name,
            'Department': s.department_name,
            'Current_Position': s.current_position_name,
            'Same_Department': s.is_same_department,
            'Match_Percentage': round(s.match_percentage, 2),
            'Matching_Skills': s.matching_skills_count,
            'Missing_Skills': s.missing_skills_count,
            'Estimated_Training_Cost': s.estimated_training_cost,
            'Estimated_Training_Hours': s.estimated_training_duration,
            'Training_Path': " -> ".join(step.training_name for step in s.training_path),
        })
    return pd.DataFrame(rows, columns=SUGGESTION_COLUMNS)


def _mean(values) -> float:
    return float(np.mean(values)) if len(values) else 0.0


def summarize_capability(result: CapabilityEnhancementResult) -> Dict:
    """Counts by priority plus average worker gap of the reported processes."""
    counts = result.counts_by_priority
    return {
        'total_processes': len(result.process_gaps),
        'critical': counts[CapabilityPriority.CRITICAL],
        'high': counts[CapabilityPriority.HIGH],
        'medium': counts[CapabilityPriority.MEDIUM],
        'average_worker_gap': _mean([g.worker_gap for g in result.process_gaps]),
        'total_worker_gap': int(np.sum([g.worker_gap for g in result.process_gaps])),
    }


def summarize_reliance(result: WorkerRelianceResult) -> Dict:
    """Counts by priority plus average gap percentage of the reported processes."""
    counts = result.counts_by_priority
    return {
        'total_processes': len(result.reliance_issues),
        'critical': counts[ReliancePriority.CRITICAL],
        'high_risk': counts[ReliancePriority.HIGH_RISK],
        'below_target': counts[ReliancePriority.BELOW_TARGET],
        'average_gap_percentage': _mean([i.gap_percentage for i in result.reliance_issues]),
        'single_point_of_failure_processes': [
            i.process.name for i in result.reliance_issues if i.priority == ReliancePriority.HIGH_RISK
        ],
    }


class ReportExporter:
    """Write analysis reports as CSV files to the standard output location"""

    def __init__(self, base_dir="outputs"):
        self.logger = get_logger(__name__)
        log_function_entry(self.logger, "__init__", base_dir=base_dir)

        self.base_dir = Path(base_dir)
        self.current_dir = self.base_dir / "current"

        try:
            self.current_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(
                f"Failed to create output directories: {e}",
                file_path=str(self.current_dir),
                operation="create_directory"
            ) from e

    def _write(self, df: pd.DataFrame, file_name: str) -> Path:
        path = self.current_dir / file_name
        try:
            df.to_csv(path, index=False)
        except OSError as e:
            raise FileOperationError(
                f"Failed to write report: {e}",
                file_path=str(path),
                operation="write"
            ) from e
        self.logger.info(f"Wrote {len(df)} rows to {path}")
        return path

    def export_employment_analysis(self, result: EmploymentAnalysisResult) -> Path:
        return self._write(candidates_to_dataframe(result), f"position_{result.position.id}_candidates.csv")

    def export_capability_enhancement(self, result: CapabilityEnhancementResult) -> List[Path]:
        suggestion_frames = []
        for gap in result.process_gaps:
            suggestion_frames.append(suggestions_to_dataframe(gap.process.id, 'quickest', gap.quickest_fix_employees))
            suggestion_frames.append(suggestions_to_dataframe(gap.process.id, 'cheapest', gap.cheapest_fix_employees))

        return [
            self._write(process_gaps_to_dataframe(result), "capability_gaps.csv"),
            self._write(self._concat(suggestion_frames), "capability_suggestions.csv"),
        ]

    def export_worker_reliance(self, result: WorkerRelianceResult) -> List[Path]:
        suggestion_frames = []
        for issue in result.reliance_issues:
            suggestion_frames.append(
                suggestions_to_dataframe(issue.process.id, 'same_department', issue.same_department_suggestions)
            )
            suggestion_frames.append(
                suggestions_to_dataframe(issue.process.id, 'cross_department', issue.cross_department_suggestions)
            )

        return [
            self._write(reliance_issues_to_dataframe(result), "worker_reliance.csv"),
            self._write(self._concat(suggestion_frames), "reliance_suggestions.csv"),
        ]

    @staticmethod
    def _concat(frames: List[pd.DataFrame]) -> pd.DataFrame:
        frames = [f for f in frames if not f.empty]
        if not frames:
            return pd.DataFrame(columns=SUGGESTION_COLUMNS)
        return pd.concat(frames, ignore_index=True)
