#!/usr/bin/env python3

"""
Validate Workforce Snapshot
===========================

Checks the snapshot in WORKFORCE_DATA_DIR (default: data/) for references to
missing entities and duplicate ids, and prints the integrity report.
"""

import sys

from workforce_planner.data.snapshot_loader import load_snapshot
from workforce_planner.data.snapshot_validator import SnapshotValidator
from workforce_planner.utils.config import AnalysisSettings
from workforce_planner.utils.exceptions import WorkforcePlannerError


def main():
    print("🧪 VALIDATE WORKFORCE SNAPSHOT")
    print("=" * 60)

    settings = AnalysisSettings.from_env()

    try:
        snapshot = load_snapshot(settings.data_dir)
    except WorkforcePlannerError as e:
        print(f"\n❌ Could not load snapshot: {e}")
        sys.exit(1)

    print(f"\n📋 SNAPSHOT TO VALIDATE:")
    print(f"   Location: {settings.data_dir}")
    for table, size in snapshot.table_sizes().items():
        print(f"   {table:<33} {size:5d} rows")

    print(f"\n🔍 RUNNING VALIDATION...")
    report = SnapshotValidator(snapshot).validate()

    print(f"\n📊 VALIDATION RESULTS SUMMARY:")
    print("=" * 50)

    for table, issues in report['dangling_references'].items():
        print(f"\n⚠️  {table}: {len(issues)} dangling references")
        for issue in issues[:10]:
            print(f"   row {issue['row']}: {issue['field']}={issue['value']} (no such {issue['missing_entity']})")

    for table, ids in report['duplicate_ids'].items():
        print(f"\n⚠️  {table}: duplicate ids {ids}")

    if report['valid']:
        print(f"\n✅ Snapshot is consistent!")
    else:
        print(f"\n❌ Snapshot has integrity problems - affected names show as 'Unknown' in reports")
        sys.exit(1)


if __name__ == "__main__":
    main()
