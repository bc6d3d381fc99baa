#!/usr/bin/env python3
"""
Import salary entries from a JSON export into the SQLite database.

Entries keep the review status they carry in the export (default APPROVED)
and are not re-analyzed; run `salaryqa batch` afterwards to recompute.

Usage:
    python scripts/import_entries.py --json data/entries.json --db data/salaries.db
"""

import argparse
import json
from pathlib import Path
import sys

from salaryqa.database import init_database, get_session
from salaryqa.normalize import normalize_entry
from salaryqa.schema import validate_entry
from salaryqa.storage.repositories.entries import EntryRepository, RecordStoreError


def import_entries(json_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Import entries from a JSON list.

    Args:
        json_path: Path to JSON file holding a list of entries
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database
    """
    print(f"Loading entries from {json_path}...")
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        print("JSON root must be a list of entries")
        return False
    print(f"Found {len(data)} entries")

    if dry_run:
        print("\n[DRY RUN] Would import the following entries:")
        for i, raw in enumerate(data[:5], 1):
            entry = normalize_entry(raw)
            print(f"  {i}. {entry.get('country')} - {entry.get('job_title')} - {entry.get('gross_salary')}")
        if len(data) > 5:
            print(f"  ... and {len(data) - 5} more")
        return True

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    session = get_session(db_path)
    store = EntryRepository(session)

    imported = 0
    skipped = 0
    errors = 0

    try:
        for i, raw in enumerate(data, 1):
            entry = normalize_entry(raw)
            entry.pop("id", None)
            problems = validate_entry(entry)
            if problems:
                print(f"Skipping entry #{i}: {'; '.join(problems)}")
                skipped += 1
                continue

            try:
                store.add(entry)
                imported += 1
            except RecordStoreError as e:
                print(f"Error importing entry #{i}: {e}")
                errors += 1
                continue

            if imported % 100 == 0:
                print(f"  Imported {imported} entries...")
    finally:
        session.close()

    print("\nImport complete!")
    print(f"   Imported: {imported}")
    print(f"   Skipped:  {skipped}")
    print(f"   Errors:   {errors}")
    return errors == 0


def main():
    parser = argparse.ArgumentParser(description="Import salary entries from JSON into the database")
    parser.add_argument("--json", type=Path, default=Path("data/entries.json"),
                        help="Path to JSON file with a list of entries")
    parser.add_argument("--db", type=Path, default=Path("data/salaries.db"),
                        help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be imported without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"JSON file not found: {args.json}")
        sys.exit(1)

    if not import_entries(args.json, args.db, dry_run=args.dry_run):
        sys.exit(1)


if __name__ == "__main__":
    main()
