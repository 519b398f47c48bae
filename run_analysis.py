#!/usr/bin/env python3

"""
Run Workforce Capability Analysis
=================================

Interactive runner for the three workforce-planning analyses:
1. Employment analysis (internal candidates vs external hire for a position)
2. Capability enhancement (processes that cannot be staffed adequately)
3. Worker reliance (processes depending on 0 or 1 qualified workers)

The snapshot is loaded from WORKFORCE_DATA_DIR (default: data/) when that
directory exists, otherwise the built-in demo dataset is used. Reports are
written as CSV files to outputs/current.
"""

import sys
from datetime import datetime

from workforce_planner.analysis.capability_enhancement_analyzer import CapabilityEnhancementAnalyzer
from workforce_planner.analysis.employment_analyzer import EmploymentAnalyzer
from workforce_planner.analysis.report_exporter import ReportExporter, summarize_capability, summarize_reliance
from workforce_planner.analysis.worker_reliance_analyzer import WorkerRelianceAnalyzer
from workforce_planner.data.demo_data import build_demo_snapshot
from workforce_planner.data.snapshot_loader import load_snapshot
from workforce_planner.model.snapshot import SnapshotIndex
from workforce_planner.utils.config import AnalysisSettings
from workforce_planner.utils.exceptions import WorkforcePlannerError


def load_data(settings):
    """Load the snapshot from the data directory, falling back to the demo dataset"""
    if settings.data_dir.is_dir():
        print(f"📂 Loading snapshot from {settings.data_dir}")
        return load_snapshot(settings.data_dir)

    print(f"📂 {settings.data_dir} not found - using demo dataset")
    return build_demo_snapshot()


def run_employment_analysis(index, settings, exporter):
    print("\n👔 EMPLOYMENT ANALYSIS")
    analyzer = EmploymentAnalyzer(index)

    open_positions = analyzer.get_open_positions()
    if not open_positions:
        print("   ℹ️  No open positions")
        return

    print("\n📋 OPEN POSITIONS:")
    for position in open_positions:
        print(f"   {position.id:3d}. {position.name} ({index.open_slots(position)} open)")

    raw = input("\nSelect position id: ").strip()
    if not raw.isdigit():
        print("❌ Invalid position id.")
        return

    result = analyzer.analyze_candidates(int(raw), settings.training_cost_per_level)
    if not result.has_requirements:
        print(f"\n⚠️  '{result.position.name}' has no required skills defined - nothing to compare")
        return

    print(f"\n🏆 TOP INTERNAL CANDIDATES FOR {result.position.name.upper()}:")
    if not result.ranked_candidates:
        print("   No employee reaches the minimum match")
    for rank, candidate in enumerate(result.ranked_candidates, start=1):
        print(f"   {rank}. {candidate.employee.full_name:<25} score {candidate.total_score:6.2f}  "
              f"match {candidate.match_percentage:5.1f}%  training {candidate.estimated_training_cost:,.0f}")

    external = result.external_option
    print(f"\n🌍 EXTERNAL HIRE: {external.hiring_cost:,.0f} hiring + "
          f"{external.starting_salary:,.0f} salary = {external.total_cost:,.0f}")

    path = exporter.export_employment_analysis(result)
    print(f"\n📄 Report saved: {path}")


def run_capability_enhancement(index, settings, exporter):
    print("\n🛠️  CAPABILITY ENHANCEMENT ANALYSIS")
    result = CapabilityEnhancementAnalyzer(index).analyze_capability_gaps(settings.training_cost_per_level)
    summary = summarize_capability(result)

    print(f"\n📈 {summary['total_processes']} processes need attention")
    print(f"   ❌ Critical: {summary['critical']}")
    print(f"   ⚠️  High:     {summary['high']}")
    print(f"   🔸 Medium:   {summary['medium']}")

    for gap in result.process_gaps:
        print(f"\n   {gap.process.name}: {gap.priority_reason}")
        print(f"      Capable {gap.capable_workers}/{gap.aimed_workers}, "
              f"{len(gap.suggested_trainings)} trainings, {len(gap.quickest_fix_employees)} candidates")

    for path in exporter.export_capability_enhancement(result):
        print(f"\n📄 Report saved: {path}")


def run_worker_reliance(index, settings, exporter):
    print("\n🔗 WORKER RELIANCE ANALYSIS")
    result = WorkerRelianceAnalyzer(index).analyze_worker_reliance(settings.training_cost_per_level)
    summary = summarize_reliance(result)

    print(f"\n📈 {summary['total_processes']} processes at risk")
    print(f"   ❌ Critical:     {summary['critical']}")
    print(f"   ⚠️  High risk:    {summary['high_risk']}")
    print(f"   🔸 Below target: {summary['below_target']}")

    for issue in result.reliance_issues:
        print(f"\n   {issue.process.name}: {issue.priority_reason}")
        print(f"      {len(issue.same_department_suggestions)} same-department, "
              f"{len(issue.cross_department_suggestions)} cross-department suggestions")

    for path in exporter.export_worker_reliance(result):
        print(f"\n📄 Report saved: {path}")


def main():
    """Main analysis selection and execution"""
    print("🚀 WORKFORCE CAPABILITY ANALYSIS SUITE")
    print("=" * 60)
    print("1. EMPLOYMENT: Internal candidates vs external hiring for a position")
    print("2. CAPABILITY: Processes that cannot be staffed adequately")
    print("3. RELIANCE: Processes relying on too few qualified workers")
    print()

    choice = input("Select analysis (1-3): ").strip()
    if choice not in ['1', '2', '3']:
        print("❌ Invalid choice. Please select 1, 2 or 3.")
        sys.exit(1)

    print(f"\n🚀 STARTING ANALYSIS")
    print("=" * 60)
    print(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

    try:
        settings = AnalysisSettings.from_env()
        index = SnapshotIndex(load_data(settings))
        exporter = ReportExporter(settings.output_dir)

        if choice == '1':
            run_employment_analysis(index, settings, exporter)
        elif choice == '2':
            run_capability_enhancement(index, settings, exporter)
        elif choice == '3':
            run_worker_reliance(index, settings, exporter)

    except WorkforcePlannerError as e:
        print(f"\n❌ Analysis failed: {e}")
        sys.exit(1)

    print(f"\n✅ Analysis complete!")


if __name__ == "__main__":
    main()
