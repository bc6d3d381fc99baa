import argparse
import json
from pathlib import Path

from . import __version__
from .env import load_env, get_settings
from .database import init_database, get_session, ReviewStatus, REVIEW_ACTIONS
from .logger import get_logger
from .maintenance import batch_analyze_entries, get_anomaly_stats, get_review_queue, review_entry
from .normalize import normalize_entry
from .pipelines.anomaly.detector import AnomalyDetector
from .pipelines.duplicates.resolver import DuplicateDetector
from .schema import validate_entry
from .storage.repositories.entries import EntryRepository


def submit_entry(data: dict, store) -> dict:
    """
    Validate, check and persist a new submission.

    The entry is stored with the review status, score and reason produced
    by anomaly detection. Duplicates are reported but still stored.
    """
    entry = normalize_entry(data)
    errors = validate_entry(entry)
    if errors:
        return {"entry_id": None, "status": "validation_error", "errors": errors}
    if entry.get("gross_salary") is None:
        return {"entry_id": None, "status": "validation_error", "errors": ["Missing required field: gross_salary"]}

    duplicate = DuplicateDetector(store).detect(entry)
    anomaly = AnomalyDetector(store).detect(entry)

    entry["review_status"] = anomaly.review_status
    entry["anomaly_score"] = anomaly.anomaly_score
    entry["anomaly_reason"] = anomaly.reason
    entry_id = store.add(entry)
    return {
        "entry_id": entry_id,
        "status": anomaly.review_status,
        "anomaly": anomaly.to_dict(),
        "duplicate": duplicate.to_dict(),
    }


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else get_settings().db_path


def _open_store(args: argparse.Namespace) -> EntryRepository:
    db_path = _db_path(args)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}. Run 'salaryqa init-db' first.")
    return EntryRepository(get_session(db_path))


def _load_json(path_str: str):
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    print(f"Database ready: {db_path}")


def cmd_validate(args: argparse.Namespace) -> None:
    entry = normalize_entry(_load_json(args.input))
    errors = validate_entry(entry)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_analyze(args: argparse.Namespace) -> None:
    entry = normalize_entry(_load_json(args.input))
    errors = validate_entry(entry)
    if errors:
        raise SystemExit("Invalid entry: " + "; ".join(errors))
    store = _open_store(args)

    report = {"duplicate": DuplicateDetector(store).detect(entry).to_dict()}
    if entry.get("gross_salary") is None:
        report["anomaly"] = None
        get_logger().warning("No gross salary, skipping anomaly detection")
    else:
        report["anomaly"] = AnomalyDetector(store).detect(entry).to_dict()
    _print_json(report)


def cmd_submit(args: argparse.Namespace) -> None:
    store = _open_store(args)
    outcome = submit_entry(_load_json(args.input), store)
    if outcome["status"] == "validation_error":
        print("Invalid:")
        for e in outcome["errors"]:
            print(f" - {e}")
        raise SystemExit(2)
    print(f"Entry: {outcome['entry_id']}")
    print(f"Status: {outcome['status']}")
    print(f"Reason: {outcome['anomaly']['reason']}")
    if outcome["duplicate"]["is_duplicate"]:
        print(f"Possible duplicate of entry {outcome['duplicate']['duplicate_entry_id']}")


def cmd_duplicates(args: argparse.Namespace) -> None:
    entry = normalize_entry(_load_json(args.input))
    store = _open_store(args)
    matches = DuplicateDetector(store).find_all(entry)
    _print_json([m.to_dict() for m in matches])


def cmd_batch(args: argparse.Namespace) -> None:
    store = _open_store(args)
    limit = args.limit if args.limit is not None else get_settings().batch_limit
    summary = batch_analyze_entries(store, limit=limit)
    print(
        f"Done. analyzed={summary['analyzed']} downgraded={summary['downgraded']} "
        f"skipped={summary['skipped']} failed={summary['failed']}"
    )
    get_logger().log_metrics_summary()


def cmd_stats(args: argparse.Namespace) -> None:
    _print_json(get_anomaly_stats(_open_store(args)))


def cmd_review_queue(args: argparse.Namespace) -> None:
    store = _open_store(args)
    try:
        entries = get_review_queue(store, args.status)
    except ValueError as e:
        raise SystemExit(str(e))
    if not entries:
        print("Review queue is empty.")
        return
    print(f"Found {len(entries)} entries awaiting review:\n")
    for entry in entries:
        print(f"ID: {entry['id']}")
        print(f"  Status: {entry['review_status']}")
        print(f"  Score: {entry['anomaly_score']}")
        print(f"  Country: {entry['country']}")
        print(f"  Job title: {entry['job_title']}")
        print(f"  Gross salary: {entry['gross_salary']}")
        print(f"  Reason: {entry['anomaly_reason']}")
        print()


def cmd_review(args: argparse.Namespace) -> None:
    store = _open_store(args)
    try:
        entry = review_entry(store, args.id, args.action, args.reviewer)
    except (ValueError, LookupError) as e:
        raise SystemExit(str(e))
    print(f"Entry {entry['id']}: {entry['review_status']}")


def main():
    # Load .env if present (SALARYQA_DB_PATH, SALARYQA_LOG_LEVEL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="salaryqa", description="Salary entry quality assurance")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Path to SQLite database (default: SALARYQA_DB_PATH or data/salaries.db)")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", help="Create the database and tables")
    ini.set_defaults(func=cmd_init_db)

    val = subparsers.add_parser("validate", help="Validate an entry JSON")
    val.add_argument("--input", required=True, help="Path to entry JSON input")
    val.set_defaults(func=cmd_validate)

    ana = subparsers.add_parser("analyze", help="Run anomaly and duplicate detection on an entry without storing it")
    ana.add_argument("--input", required=True, help="Path to entry JSON input")
    ana.set_defaults(func=cmd_analyze)

    sub = subparsers.add_parser("submit", help="Analyze an entry and store it with its review status")
    sub.add_argument("--input", required=True, help="Path to entry JSON input")
    sub.set_defaults(func=cmd_submit)

    dup = subparsers.add_parser("duplicates", help="List all stored entries similar enough to be duplicates")
    dup.add_argument("--input", required=True, help="Path to entry JSON input")
    dup.set_defaults(func=cmd_duplicates)

    bat = subparsers.add_parser("batch", help="Re-analyze approved entries and downgrade outliers")
    bat.add_argument("--limit", type=int, help="Maximum entries to process (default: SALARYQA_BATCH_LIMIT or 100)")
    bat.set_defaults(func=cmd_batch)

    sts = subparsers.add_parser("stats", help="Show entry counts per review status")
    sts.set_defaults(func=cmd_stats)

    rvq = subparsers.add_parser("review-queue", help="List entries awaiting review")
    rvq.add_argument("--status", choices=list(ReviewStatus.ALL), help="Only show this status (default: PENDING and NEEDS_REVIEW)")
    rvq.set_defaults(func=cmd_review_queue)

    rev = subparsers.add_parser("review", help="Approve or reject an entry")
    rev.add_argument("--id", type=int, required=True, help="Entry id")
    rev.add_argument("--action", required=True, choices=list(REVIEW_ACTIONS), help="Admin decision")
    rev.add_argument("--reviewer", type=int, help="Id of the reviewing admin")
    rev.set_defaults(func=cmd_review)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
