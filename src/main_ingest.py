"""CLI: Replace the runs table with the records of a JSON file.

The file must hold a JSON array of run objects (timestamp, vram_usage,
info, system_info, model_info, device_info, xformers, model_name, user,
notes). All existing runs and every table derived from them are cleared
first. Pass --process to rebuild the derived tables right after.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from config import configure_logging, load_env_file
from db.db_conn import DbConn
from services.save_runs import RunDataValidationError, SaveRunsService
from main_process import run_all

logger = logging.getLogger("main_ingest")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Ingest benchmark runs from a JSON file")
    p.add_argument("path", type=Path, help="JSON file with an array of run records")
    p.add_argument("--process", action="store_true", help="Rebuild all derived tables after ingesting")
    p.add_argument("--echo", action="store_true", help="Enable SQLAlchemy engine echo")
    return p.parse_args()


def main() -> int:
    load_env_file()
    configure_logging()
    args = parse_args()

    if not args.path.exists():
        print(f"File not found: {args.path}")
        return 2

    try:
        db = DbConn(echo=args.echo)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    try:
        report = SaveRunsService(db).save_runs(args.path.read_bytes())
    except RunDataValidationError as exc:
        print(f"Invalid run data: {exc}")
        return 2

    print(f"Runs: total={report.total_rows}, inserted={report.inserted_rows}, errors={report.error_rows}")
    if not report.success:
        for msg in report.error_messages:
            logger.error(msg)
        return 1

    if args.process:
        return 0 if run_all(db) else 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
